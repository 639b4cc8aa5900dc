import pytest
from pathlib import Path

from mtg_set_builder.models.blueprint import BlueprintWithSource
from mtg_set_builder.models.card import Card

SAMPLE_DATA = Path(__file__).parent / "sample_data"


@pytest.fixture
def sample_set_path():
    return SAMPLE_DATA / "sample_set.yaml"


@pytest.fixture
def miffy():
    """Legendary white rabbit that makes a token when it attacks."""
    return Card.model_validate({
        "id": "mfy-401",
        "name": "Miffy, The Kind",
        "rarity": "uncommon",
        "supertype": "legendary",
        "types": ["creature"],
        "subtypes": ["rabbit", "cleric"],
        "manaCost": {"generic": 1, "white": 2},
        "rules": [
            {"variant": "keyword", "content": "Lifelink"},
            {"variant": "ability", "content": "Whenever Miffy, The Kind attacks, create a 1/1 white Rabbit creature token."},
            {"variant": "flavor", "content": "She always shares her carrots."},
        ],
        "pt": {"power": 2, "toughness": 3},
        "tags": {"reprint": False, "setPosition": 4},
        "collectorNumber": 401,
    })


@pytest.fixture
def boris():
    return Card.model_validate({
        "id": "bor-201",
        "name": "Boris, Blue Bear",
        "types": ["creature"],
        "subtypes": ["bear"],
        "manaCost": {"generic": 2, "blue": 1},
        "rules": [{"variant": "ability", "content": "When Boris enters, draw a card."}],
        "pt": {"power": 3, "toughness": 3},
    })


@pytest.fixture
def metadata():
    return {"mainCharacter": "Miffy, The Kind", "creatureType": "rabbit", "unset": None}


@pytest.fixture
def layered_blueprints():
    """Set, archetype, cycle and slot blueprints that Miffy satisfies."""
    return [
        BlueprintWithSource.of("set", {
            "color": [{"key": "string-array/allow", "value": ["white", "blue"]}],
            "subtypes": [{"key": "string-array/length", "value": {"key": "number/at-most", "value": 3}}],
        }),
        BlueprintWithSource.of("archetype", {
            "name": [{"key": "string/contain-one-of", "value": ["$[mainCharacter]"]}],
            "subtypes": [{"key": "string-array/includes-all-of", "value": ["$[creatureType]"]}],
        }),
        BlueprintWithSource.of("cycle", {
            "manaValue": [{"key": "number/at-most", "value": 3}],
            "types": [{"key": "string-array/includes-all-of", "value": ["creature"]}],
        }),
        BlueprintWithSource.of("slot", {
            "rarity": [{"key": "string/equal", "value": "uncommon"}],
            "creatableTokens": [{"key": "string-array/length", "value": {"key": "number/at-least", "value": 1}}],
        }),
    ]
