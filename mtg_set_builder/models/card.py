"""
Card record used by blueprint validation and group matching.

Only the fields the property accessors and requirement predicates read are
modelled here. Field names follow the serialized (camelCase) card format so
that stored card JSON validates directly.

Classes:
    Rule: One line of rules text with its variant.
    PowerToughness: Power and toughness pair.
    Card: The card record with derived values (mana value, colors, tokens).
"""
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mtg_set_builder.utils.token_extractor import extract_tokens_from_ability

CARD_COLORS = ["white", "blue", "black", "red", "green"]
WUBRG = ["w", "u", "b", "r", "g"]

RuleVariant = Literal["reminder", "card-type-reminder", "keyword", "ability", "inline-reminder", "flavor"]

_MANA_SYMBOL = re.compile(r"{(\w+)}")


class Rule(BaseModel):
    variant: RuleVariant
    content: str


class PowerToughness(BaseModel):
    power: int
    toughness: int


class Card(BaseModel):
    """
    A single card.

    Attributes:
        id: Unique card id, e.g. ``mfy-401``.
        name: Card name.
        rarity: common, uncommon, rare or mythic.
        isToken: Whether the card is a token.
        supertype: basic, legendary, or None.
        types: Card types (lower-case).
        subtypes: Subtypes (lower-case).
        tokenColors: Colors of a token without a mana cost.
        manaCost: Mana symbol counts, e.g. ``{"generic": 1, "white": 2}``.
        rules: Rules text lines.
        pt: Power/toughness, if any.
        loyalty: Starting loyalty, if any.
        tags: Free-form authoring tags.
        collectorNumber: Collector number within the set.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rarity: str = "common"
    isToken: bool = False
    supertype: Optional[str] = None
    types: List[str] = Field(default_factory=list)
    subtypes: List[str] = Field(default_factory=list)
    tokenColors: List[str] = Field(default_factory=list)
    manaCost: Dict[str, int] = Field(default_factory=dict)
    rules: List[Rule] = Field(default_factory=list)
    pt: Optional[PowerToughness] = None
    loyalty: Optional[int] = None
    tags: Dict[str, Any] = Field(default_factory=dict)
    collectorNumber: Optional[int] = None

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def mana_value(self) -> int:
        """Get the total mana value (sum of every mana cost entry)."""
        return sum(self.manaCost.values())

    def render_mana_cost(self) -> str:
        """Render the mana cost as symbols, e.g. ``{1}{w}{w}``."""
        result = ""
        generic = self.manaCost.get("generic", 0) + self.manaCost.get("colorless", 0)
        if generic > 0:
            result += "{" + str(generic) + "}"
        for color, symbol in zip(CARD_COLORS, WUBRG):
            amount = self.manaCost.get(color, 0)
            if amount > 0:
                result += ("{" + symbol + "}") * amount
        return result

    @staticmethod
    def _colors_of(context: str) -> List[str]:
        found = set()
        for match in _MANA_SYMBOL.finditer(context):
            inner = match.group(1).lower()
            for color, symbol in zip(CARD_COLORS, WUBRG):
                if symbol in inner:
                    found.add(color)
        return [c for c in CARD_COLORS if c in found]

    def color(self) -> List[str]:
        """Get the card's colors in WUBRG order (token colors for cost-less tokens)."""
        if self.isToken and not self.manaCost:
            return [c for c in CARD_COLORS if c in self.tokenColors]
        return self._colors_of(self.render_mana_cost())

    def _ability_lines(self, variants=("keyword", "ability")) -> List[str]:
        return [rule.content for rule in self.rules if rule.variant in variants]

    def color_identity(self) -> List[str]:
        """Get colors from the mana cost and any mana symbols in keyword/ability text."""
        if self.isToken and not self.manaCost:
            return self.color()
        context = self.render_mana_cost() + " " + " ".join(self._ability_lines())
        return self._colors_of(context)

    def rules_text(self) -> str:
        """Get keyword and ability text joined by newlines, lower-cased."""
        return "\n".join(self._ability_lines()).lower()

    def creatable_tokens(self) -> List[str]:
        """Get the distinct names of tokens this card's abilities create."""
        tokens: List[str] = []
        for line in self._ability_lines(("ability",)):
            if "create" not in line.lower():
                continue
            for token in extract_tokens_from_ability(line):
                if token not in tokens:
                    tokens.append(token)
        return tokens
