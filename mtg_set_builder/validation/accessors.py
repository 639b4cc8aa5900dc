"""Property accessors: blueprint property name -> card value.

The table is explicit: a blueprint property that is not listed here cannot be
read from a card and is reported by the validator instead of being looked up
by reflection.
"""

from typing import Any, Callable, Dict, NamedTuple, Optional

from mtg_set_builder.models.card import Card


class PropertyAccessor(NamedTuple):
    """How to read one blueprint property from a card.

    Attributes:
        name: Blueprint property name (also the failure ``location``).
        getter: Reads the subject value from a card.
        missing: Substitute for a None subject when the criterion is not an
            ``optional/*`` check (``supertype`` reads as ``""`` for string
            criteria but stays None for ``optional/absent``).
    """

    name: str
    getter: Callable[[Card], Any]
    missing: Optional[Any] = None

    def read(self, card: Card, namespace: str) -> Any:
        value = self.getter(card)
        if value is None and namespace != "optional" and self.missing is not None:
            return self.missing
        return value


def _pt_field(field: str) -> Callable[[Card], Optional[int]]:
    def read(card: Card) -> Optional[int]:
        return getattr(card.pt, field) if card.pt is not None else None

    return read


def _power_toughness_diff(card: Card) -> int:
    if card.pt is None:
        return 0
    return card.pt.power - card.pt.toughness


def _pt(card: Card) -> Optional[Dict[str, int]]:
    return card.pt.model_dump() if card.pt is not None else None


DEFAULT_ACCESSORS: Dict[str, PropertyAccessor] = {
    accessor.name: accessor
    for accessor in [
        PropertyAccessor("name", lambda c: c.name),
        PropertyAccessor("rarity", lambda c: c.rarity),
        PropertyAccessor("isToken", lambda c: c.isToken),
        PropertyAccessor("supertype", lambda c: c.supertype, missing=""),
        PropertyAccessor("tokenColors", lambda c: list(c.tokenColors)),
        PropertyAccessor("types", lambda c: list(c.types)),
        PropertyAccessor("subtypes", lambda c: list(c.subtypes)),
        PropertyAccessor("manaValue", Card.mana_value),
        PropertyAccessor("color", Card.color),
        PropertyAccessor("colorIdentity", Card.color_identity),
        PropertyAccessor("rules", Card.rules_text),
        PropertyAccessor("pt", _pt),
        PropertyAccessor("power", _pt_field("power")),
        PropertyAccessor("toughness", _pt_field("toughness")),
        PropertyAccessor("powerToughnessDiff", _power_toughness_diff),
        PropertyAccessor("loyalty", lambda c: c.loyalty),
        PropertyAccessor("tags", lambda c: dict(c.tags)),
        PropertyAccessor("creatableTokens", Card.creatable_tokens),
    ]
}

BLUEPRINT_PROPERTIES = list(DEFAULT_ACCESSORS)
