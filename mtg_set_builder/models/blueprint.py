"""
Blueprint and criteria models for set validation.

This module defines the Pydantic models that describe authored blueprint data:
a blueprint maps card property names to an ordered list of criteria, and each
blueprint is tagged with the layer (set, archetype, cycle, slot) it came from.

Classes:
    BlueprintSource: The override layer a blueprint was authored on.
    Criterion: One typed predicate (``namespace/operator`` key plus operand).
    BlueprintWithSource: A blueprint tagged with its source layer.

Blueprint data is user-authored and persisted as JSON/YAML, so parsing is
lenient: any ``key`` string and any operand shape is accepted here, and
malformed criteria are left for the evaluator to fail closed.
"""
import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class BlueprintSource(str, Enum):
    """Override layers, from most general to most specific."""

    SET = "set"
    ARCHETYPE = "archetype"
    CYCLE = "cycle"
    SLOT = "slot"


class Criterion(BaseModel):
    """
    A single predicate applied to one card property.

    Attributes:
        key: ``<namespace>/<operator>``, e.g. ``string-array/allow``.
        value: Literal operand, nested Criterion, ``[field, Criterion]`` pair
            for object criteria, or None for operand-less criteria.
    """

    key: str
    value: Any = None

    @field_validator("value", mode="before")
    @classmethod
    def parse_nested(cls, v: Any) -> Any:
        if isinstance(v, dict) and "key" in v:
            return Criterion.coerce(v)
        # object/*-field operands are [field, criterion] pairs
        if (
            isinstance(v, (list, tuple))
            and len(v) == 2
            and isinstance(v[0], str)
            and isinstance(v[1], dict)
            and "key" in v[1]
        ):
            return [v[0], Criterion.coerce(v[1])]
        return v

    @property
    def namespace(self) -> str:
        """Get the namespace part of the key (``string`` for ``string/equal``)."""
        return self.key.split("/", 1)[0]

    @property
    def operator(self) -> str:
        """Get the operator part of the key, or an empty string."""
        parts = self.key.split("/", 1)
        return parts[1] if len(parts) == 2 else ""

    @classmethod
    def coerce(cls, obj: Any) -> "Criterion":
        """
        Build a Criterion from arbitrary persisted data without raising.

        Entries that are not ``{key, value}`` mappings become criteria with an
        unrecognized key, so they fail evaluation instead of aborting a run.
        """
        if isinstance(obj, Criterion):
            return obj
        if isinstance(obj, dict):
            try:
                return cls.model_validate(obj)
            except ValidationError:
                return cls.model_construct(key=str(obj.get("key", "")), value=obj.get("value"))
        return cls.model_construct(key="", value=obj)

    def with_value(self, value: Any) -> "Criterion":
        """Return a copy of this criterion with a different operand."""
        return self.model_copy(update={"value": value})

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted ``{key, value}`` shape."""
        data = self.model_dump()
        if data["value"] is None:
            del data["value"]
        return data


# property name -> ordered criteria (implicit AND)
Blueprint = Dict[str, List[Criterion]]

# Property that holds a blueprint which could not be read as a mapping
MALFORMED_PROPERTY = "<malformed>"


class BlueprintWithSource(BaseModel):
    """
    A blueprint tagged with the layer it was authored on.

    Attributes:
        source: Layer the blueprint belongs to.
        blueprint: Property name to criteria mapping.
    """

    source: BlueprintSource
    blueprint: Blueprint = Field(default_factory=dict)

    @field_validator("blueprint", mode="before")
    @classmethod
    def lenient_blueprint(cls, v: Any) -> Blueprint:
        if v and not isinstance(v, dict):
            # the bad data becomes one failing criterion
            logger.warning(f"Blueprint is not a mapping of property to criteria: {v!r}")
            return {MALFORMED_PROPERTY: [Criterion.coerce(v)]}
        return parse_blueprint(v)

    @classmethod
    def of(cls, source: str, blueprint: Optional[Dict[str, Any]]) -> "BlueprintWithSource":
        """Build from a raw source name and a serialized blueprint dict."""
        return cls.model_validate({"source": source, "blueprint": blueprint or {}})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source.value,
            "blueprint": {
                prop: [c.to_dict() for c in criteria]
                for prop, criteria in self.blueprint.items()
            },
        }


def parse_blueprint(data: Optional[Dict[str, Any]]) -> Blueprint:
    """
    Parse a serialized blueprint into Criterion models.

    Args:
        data: Mapping of property name to a list of ``{key, value}`` dicts.

    Returns:
        Blueprint with Criterion instances.
    """
    if not data:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Blueprint must be a mapping of property to criteria, got {type(data).__name__}")
    blueprint: Blueprint = {}
    for prop, criteria in data.items():
        if not isinstance(criteria, (list, tuple)):
            criteria = [criteria]
        blueprint[str(prop)] = [Criterion.coerce(c) for c in criteria]
    return blueprint
