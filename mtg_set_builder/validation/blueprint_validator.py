"""
Blueprint validation.

This module validates one card against a stack of source-tagged blueprints:

1. Sequence the blueprints' criteria in source order (BlueprintComposer).
2. Read each property from the card through the accessor table.
3. Substitute archetype metadata into string operands (MetadataSubstitutor).
4. Evaluate every criterion (CriterionEvaluator) and collect every failure.

Classes:
    CriteriaFailureReason: One failing criterion with its source and subject.
    ValidationResult: ``{success: true}`` or ``{success: false, reasons}``.
    BlueprintValidator: Stateless service running the steps above.

Validation never raises for bad blueprint content; unknown keys, malformed
operands and unknown properties all come back as failure reasons. Errors in the
accessor table itself are programming errors and propagate.
"""

import json
import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import BaseModel, Field

from mtg_set_builder.criteria.evaluator import CriterionEvaluator
from mtg_set_builder.criteria.substitution import Metadata, MetadataSubstitutor
from mtg_set_builder.models.blueprint import BlueprintSource, BlueprintWithSource, Criterion
from mtg_set_builder.models.card import Card
from mtg_set_builder.validation.accessors import DEFAULT_ACCESSORS, PropertyAccessor
from mtg_set_builder.validation.composer import BlueprintComposer

logger = logging.getLogger(__name__)


class CriteriaFailureReason(BaseModel):
    """
    A criterion that did not hold.

    Attributes:
        source: Layer the criterion came from.
        location: Blueprint property name.
        value: The subject value the criterion was evaluated against.
        criteria: The criterion after metadata substitution.
    """

    source: BlueprintSource
    location: str
    value: Any = None
    criteria: Criterion

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.value,
            "location": self.location,
            "value": self.value,
            "criteria": self.criteria.model_dump(mode="json"),
        }


class ValidationResult(BaseModel):
    """Outcome of validating one card."""

    success: bool
    reasons: List[CriteriaFailureReason] = Field(default_factory=list)

    @classmethod
    def from_reasons(cls, reasons: List[CriteriaFailureReason]) -> "ValidationResult":
        if not reasons:
            return cls(success=True)
        return cls(success=False, reasons=reasons)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to ``{success: true}`` or ``{success: false, reasons}``."""
        if self.success:
            return {"success": True}
        return {"success": False, "reasons": [r.to_dict() for r in self.reasons]}

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)


class BlueprintValidator:
    """Validate cards against layered blueprints.

    Construct once and reuse; the accessor table is read-only and no state is
    kept between calls.
    """

    def __init__(
        self,
        accessors: Optional[Mapping[str, PropertyAccessor]] = None,
        evaluator: Optional[CriterionEvaluator] = None,
        substitutor: Optional[MetadataSubstitutor] = None,
        composer: Optional[BlueprintComposer] = None,
    ):
        self.accessors = MappingProxyType(dict(accessors if accessors is not None else DEFAULT_ACCESSORS))
        self.evaluator = evaluator or CriterionEvaluator()
        self.substitutor = substitutor or MetadataSubstitutor()
        self.composer = composer or BlueprintComposer()

    def validate(
        self,
        *,
        metadata: Optional[Metadata],
        blueprints: Iterable[Union[BlueprintWithSource, Dict[str, Any]]],
        card: Union[Card, Dict[str, Any]],
    ) -> ValidationResult:
        """
        Validate a card against source-tagged blueprints.

        Args:
            metadata: Archetype metadata used for ``$[key]`` substitution.
            blueprints: Blueprints in source order (set, archetype, cycle, slot).
            card: Card model or serialized card dict.

        Returns:
            ValidationResult with one reason per failing criterion, ordered by
            source (set, archetype, cycle, slot), then by each blueprint's own
            property order.
        """
        if not isinstance(card, Card):
            card = Card.model_validate(card)
        tagged = [
            b if isinstance(b, BlueprintWithSource) else BlueprintWithSource.model_validate(b)
            for b in blueprints
        ]
        metadata = metadata or {}

        reasons: List[CriteriaFailureReason] = []
        unreadable = set()
        for prop, entry in self.composer.sequence(tagged):
            criterion = self.substitutor.substitute_criterion(entry.criterion, metadata)
            accessor = self.accessors.get(prop)
            if accessor is None:
                if prop not in unreadable:
                    unreadable.add(prop)
                    logger.warning(f"Blueprint property {prop!r} is not readable from cards; its criteria fail")
                reasons.append(
                    CriteriaFailureReason(source=entry.source, location=prop, value=None, criteria=criterion)
                )
                continue
            subject = accessor.read(card, criterion.namespace)
            if not self.evaluator.evaluate(criterion, subject):
                reasons.append(
                    CriteriaFailureReason(source=entry.source, location=prop, value=subject, criteria=criterion)
                )

        logger.debug(f"Validated card {card.id} against {len(tagged)} blueprint(s): {len(reasons)} failure(s)")
        return ValidationResult.from_reasons(reasons)

    def is_valid(self, card: Card, blueprints: Iterable[BlueprintWithSource], metadata: Optional[Metadata] = None) -> bool:
        """Shorthand for ``validate(...).success``."""
        return self.validate(metadata=metadata, blueprints=blueprints, card=card).success
