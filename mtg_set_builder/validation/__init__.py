"""Blueprint composition and validation."""

from .accessors import BLUEPRINT_PROPERTIES, DEFAULT_ACCESSORS, PropertyAccessor
from .composer import BlueprintComposer, ComposedBlueprint, SourcedCriterion
from .blueprint_validator import BlueprintValidator, CriteriaFailureReason, ValidationResult

__all__ = [
    "BLUEPRINT_PROPERTIES",
    "DEFAULT_ACCESSORS",
    "PropertyAccessor",
    "BlueprintComposer",
    "ComposedBlueprint",
    "SourcedCriterion",
    "BlueprintValidator",
    "CriteriaFailureReason",
    "ValidationResult",
]
