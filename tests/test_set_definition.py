import json

import pytest
import yaml

from mtg_set_builder.app_config import AppConfig
from mtg_set_builder.models.blueprint import BlueprintSource
from mtg_set_builder.models.set_definition import SetDefinition, SlotDefinition


@pytest.fixture
def sample_set(sample_set_path):
    return SetDefinition.from_yaml(sample_set_path)


def test_load_set_from_yaml(sample_set):
    assert sample_set.name == "Miffy's Meadow"
    assert sample_set.metadataKeys == ["mainCharacter"]
    assert [c.key for c in sample_set.cycles] == ["white", "blue"]
    assert sample_set.cycles[1].blueprint is None
    miffy_row, boris_row = sample_set.archetypes
    assert miffy_row.metadata == {"mainCharacter": "Miffy, The Kind"}
    # blank metadata counts as unset
    assert boris_row.metadata == {"mainCharacter": None}
    assert miffy_row.cycles["blue"] == "skip"
    assert isinstance(miffy_row.cycles["white"], SlotDefinition)
    assert miffy_row.cycles["white"].cardRef.cardId == "mfy-401"


def test_blueprints_for_slot(sample_set):
    sources = [b.source for b in sample_set.blueprints_for_slot(0, "white")]
    assert sources == [BlueprintSource.SET, BlueprintSource.ARCHETYPE, BlueprintSource.CYCLE, BlueprintSource.SLOT]
    assert [b.source for b in sample_set.blueprints_for_slot(1, "white")] == [BlueprintSource.SET, BlueprintSource.CYCLE]
    assert sample_set.blueprints_for_slot(0, "blue") == []
    assert sample_set.blueprints_for_slot(5, "white") == []
    assert sample_set.blueprints_for_slot(0, "green") == []


def test_slot_status(sample_set, miffy, boris):
    cards = [miffy, boris]
    assert sample_set.slot_status(cards, 0, "white").status == "valid"
    assert sample_set.slot_status(cards, 0, "blue").status == "skip"
    assert sample_set.slot_status(cards, 1, "white").status == "missing"
    assert sample_set.slot_status(cards, 0, "green").status == "missing"

    invalid = sample_set.slot_status(cards, 1, "blue")
    assert invalid.status == "invalid"
    assert invalid.to_dict() == {
        "status": "invalid",
        "reasons": [
            {
                "source": "slot",
                "location": "types",
                "value": ["creature"],
                "criteria": {"key": "string-array/includes-all-of", "value": ["instant"]},
            }
        ],
    }


def test_slot_status_uses_archetype_metadata(sample_set, miffy):
    # Miffy in Boris's row: the archetype metadata no longer names her
    sample_set.archetypes[1].cycles["white"].cardRef.cardId = "mfy-401"
    sample_set.archetypes[1].blueprint = sample_set.archetypes[0].blueprint
    status = sample_set.slot_status([miffy], 1, "white")
    assert status.status == "invalid"
    assert status.reasons[0].criteria.value == ["$[mainCharacter]"]


def test_status_counts(sample_set, miffy, boris):
    assert sample_set.status_counts([miffy, boris]) == {"missing": 1, "skip": 1, "invalid": 1, "valid": 1}
    assert sample_set.status_counts([]) == {"missing": 3, "skip": 1, "invalid": 0, "valid": 0}


def test_yaml_and_json_round_trip(sample_set, miffy, boris, tmp_path):
    from_text = SetDefinition.from_yaml(sample_set.to_yaml())
    assert from_text.status_counts([miffy, boris]) == sample_set.status_counts([miffy, boris])

    path = tmp_path / "set.json"
    sample_set.to_json(path)
    from_file = SetDefinition.from_json(path)
    assert from_file.blueprints_for_slot(0, "white") == sample_set.blueprints_for_slot(0, "white")
    assert json.loads(path.read_text(encoding="utf-8"))["archetypes"][0]["cycles"]["blue"] == "skip"

    yaml_path = tmp_path / "set.yaml"
    assert sample_set.to_yaml(yaml_path) is None
    assert yaml.safe_load(yaml_path.read_text(encoding="utf-8"))["name"] == "Miffy's Meadow"


def test_empty_set():
    empty = SetDefinition.empty("Blank")
    assert empty.to_dict() == {"name": "Blank", "metadataKeys": [], "cycles": [], "archetypes": []}
    assert empty.status_counts([]) == {"missing": 0, "skip": 0, "invalid": 0, "valid": 0}


def test_missing_set_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SetDefinition.from_yaml(tmp_path / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        SetDefinition.from_json(str(tmp_path / "nope.json"))


def test_invalid_set_data():
    with pytest.raises(ValueError):
        SetDefinition.from_dict({"cycles": []})
    with pytest.raises(ValueError):
        SetDefinition.from_dict({"name": "Bad", "archetypes": [{"name": "A", "cycles": {"white": "maybe"}}]})
    with pytest.raises(ValueError):
        SetDefinition.from_dict({"name": "Bad", "blueprint": ["not", "a", "mapping"]})


def test_load_from_configured_sets_dir(tmp_path, sample_set_path):
    sets_dir = tmp_path / "sets"
    sets_dir.mkdir()
    (sets_dir / "meadow.yaml").write_text(sample_set_path.read_text(encoding="utf-8"), encoding="utf-8")
    SetDefinition.from_yaml(sample_set_path).to_json(sets_dir / "meadow-copy.json")
    settings = tmp_path / "settings.ini"
    settings.write_text("[Paths]\nsets_dir = sets\n", encoding="utf-8")
    config = AppConfig(settings)

    assert SetDefinition.load("meadow", config).name == "Miffy's Meadow"
    assert SetDefinition.load("meadow.yaml", config).name == "Miffy's Meadow"
    assert SetDefinition.load("meadow-copy", config).name == "Miffy's Meadow"
    with pytest.raises(FileNotFoundError):
        SetDefinition.load("castle", config)
