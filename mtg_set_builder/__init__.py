"""
mtg_set_builder

Validate custom Magic: The Gathering set cards against layered blueprints and
match card pools against named groups of requirements.
"""

from mtg_set_builder.models.blueprint import BlueprintSource, BlueprintWithSource, Criterion, parse_blueprint
from mtg_set_builder.models.card import Card, PowerToughness, Rule
from mtg_set_builder.criteria import CriteriaKey, CriterionEvaluator, MetadataSubstitutor, default_criteria_for
from mtg_set_builder.validation import (
    BlueprintComposer,
    BlueprintValidator,
    CriteriaFailureReason,
    ValidationResult,
)
from mtg_set_builder.models.set_definition import SetDefinition, SlotStatus
from mtg_set_builder.groups import (
    AmbiguousMatch,
    FailedMatch,
    Group,
    GroupMatch,
    Requirement,
    SucceededMatch,
    blueprint_requirement,
    parse_matches,
    pattern_requirement,
    requirements_for,
)
from mtg_set_builder.app_config import AppConfig

__version__ = "0.1.0"

__all__ = [
    "BlueprintSource",
    "BlueprintWithSource",
    "Criterion",
    "parse_blueprint",
    "Card",
    "PowerToughness",
    "Rule",
    "CriteriaKey",
    "CriterionEvaluator",
    "MetadataSubstitutor",
    "default_criteria_for",
    "BlueprintComposer",
    "BlueprintValidator",
    "CriteriaFailureReason",
    "ValidationResult",
    "SetDefinition",
    "SlotStatus",
    "AmbiguousMatch",
    "FailedMatch",
    "Group",
    "GroupMatch",
    "Requirement",
    "SucceededMatch",
    "blueprint_requirement",
    "parse_matches",
    "pattern_requirement",
    "requirements_for",
    "AppConfig",
]
