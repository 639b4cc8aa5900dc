from mtg_set_builder.models.card import Card
from mtg_set_builder.utils.token_extractor import COPY_TOKEN, extract_tokens_from_ability


def test_card_derived_values(miffy):
    assert miffy.mana_value() == 3
    assert miffy.render_mana_cost() == "{1}{w}{w}"
    assert miffy.color() == ["white"]
    assert miffy.color_identity() == ["white"]
    assert miffy.rules_text() == (
        "lifelink\nwhenever miffy, the kind attacks, create a 1/1 white rabbit creature token."
    )
    assert miffy.creatable_tokens() == ["1/1 white Rabbit creature token"]


def test_color_identity_includes_ability_symbols():
    card = Card(
        id="ld-1",
        name="Clover Field",
        types=["land"],
        rules=[{"variant": "ability", "content": "{T}: Add {G} or {W}."}],
    )
    assert card.color() == []
    assert card.color_identity() == ["white", "green"]


def test_token_colors():
    token = Card(id="t1", name="Rabbit", isToken=True, tokenColors=["green", "white"])
    assert token.color() == ["white", "green"]
    assert token.color_identity() == ["white", "green"]
    assert token.mana_value() == 0


def test_integer_ids_are_strings():
    assert Card(id=12, name="Numbered").id == "12"


class TestTokenExtraction:
    def test_simple_token(self):
        assert extract_tokens_from_ability("When this enters, create a Food token.") == ["Food token"]

    def test_plural_tokens(self):
        ability = "Create two 1/1 green Squirrel creature tokens."
        assert extract_tokens_from_ability(ability) == ["1/1 green Squirrel creature token"]

    def test_copy_token(self):
        ability = "Exile target creature you control, then create a token that's a copy of it."
        assert extract_tokens_from_ability(ability) == [COPY_TOKEN]

    def test_tapped_and_attacking(self):
        ability = "Whenever you attack, create a tapped and attacking 2/2 red Fox creature token."
        assert extract_tokens_from_ability(ability) == ["2/2 red Fox creature token"]

    def test_no_tokens(self):
        assert extract_tokens_from_ability("Draw a card.") == []

    def test_card_without_token_abilities(self, boris):
        assert boris.creatable_tokens() == []
