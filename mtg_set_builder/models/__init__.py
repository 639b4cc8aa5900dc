from .blueprint import Blueprint, BlueprintSource, BlueprintWithSource, Criterion, parse_blueprint
from .card import CARD_COLORS, Card, PowerToughness, Rule

# set_definition depends on the validation package, import it directly:
#   from mtg_set_builder.models.set_definition import SetDefinition
