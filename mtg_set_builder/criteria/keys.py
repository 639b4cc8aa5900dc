"""Closed set of criteria keys and their default operands."""
from enum import Enum
from typing import List, Optional

from mtg_set_builder.models.blueprint import Criterion


class CriteriaKey(str, Enum):
    """Every ``namespace/operator`` pair the evaluator understands."""

    STRING_EQUAL = "string/equal"
    STRING_CONTAIN_ONE_OF = "string/contain-one-of"
    STRING_CONTAIN_ALL_OF = "string/contain-all-of"
    STRING_LENGTH = "string/length"
    BOOLEAN_TRUE = "boolean/true"
    BOOLEAN_FALSE = "boolean/false"
    OPTIONAL_PRESENT = "optional/present"
    OPTIONAL_ABSENT = "optional/absent"
    STRING_ARRAY_ALLOW = "string-array/allow"
    STRING_ARRAY_DENY = "string-array/deny"
    STRING_ARRAY_INCLUDES_ONE_OF = "string-array/includes-one-of"
    STRING_ARRAY_INCLUDES_ALL_OF = "string-array/includes-all-of"
    STRING_ARRAY_LENGTH = "string-array/length"
    NUMBER_ONE_OF = "number/one-of"
    NUMBER_AT_LEAST = "number/at-least"
    NUMBER_AT_MOST = "number/at-most"
    NUMBER_BETWEEN = "number/between"
    OBJECT_FIELD_PRESENT = "object/field-present"
    OBJECT_FIELD_ABSENT = "object/field-absent"
    OBJECT_NUMBER_FIELD = "object/number-field"
    OBJECT_STRING_FIELD = "object/string-field"
    OBJECT_BOOLEAN_FIELD = "object/boolean-field"

    @classmethod
    def parse(cls, key: str) -> Optional["CriteriaKey"]:
        """Return the matching key, or None for unrecognized keys."""
        try:
            return cls(key)
        except ValueError:
            return None

    @property
    def namespace(self) -> str:
        return self.value.split("/", 1)[0]


ALL_CRITERIA_KEYS: List[str] = [k.value for k in CriteriaKey]

# Namespaces whose literal operands receive $[key] metadata substitution
SUBSTITUTABLE_NAMESPACES = frozenset({"string", "string-array"})


def default_criteria_for(key: CriteriaKey, default_string_value: str = "abc") -> Criterion:
    """
    Build a well-formed example criterion for a key.

    Authoring tools use this to seed a new criterion before the user edits it.

    Args:
        key: Criteria key to build.
        default_string_value: Placeholder for string operands.

    Returns:
        A Criterion with a valid operand for ``key``.
    """
    key = CriteriaKey(key)
    s = default_string_value
    defaults = {
        CriteriaKey.STRING_EQUAL: s,
        CriteriaKey.STRING_CONTAIN_ONE_OF: [s],
        CriteriaKey.STRING_CONTAIN_ALL_OF: [s],
        CriteriaKey.STRING_LENGTH: {"key": CriteriaKey.NUMBER_AT_LEAST.value, "value": 1},
        CriteriaKey.BOOLEAN_TRUE: None,
        CriteriaKey.BOOLEAN_FALSE: None,
        CriteriaKey.OPTIONAL_PRESENT: None,
        CriteriaKey.OPTIONAL_ABSENT: None,
        CriteriaKey.STRING_ARRAY_ALLOW: [s],
        CriteriaKey.STRING_ARRAY_DENY: [s],
        CriteriaKey.STRING_ARRAY_INCLUDES_ONE_OF: [s],
        CriteriaKey.STRING_ARRAY_INCLUDES_ALL_OF: [s],
        CriteriaKey.STRING_ARRAY_LENGTH: {"key": CriteriaKey.NUMBER_AT_LEAST.value, "value": 1},
        CriteriaKey.NUMBER_ONE_OF: [0],
        CriteriaKey.NUMBER_AT_LEAST: 0,
        CriteriaKey.NUMBER_AT_MOST: 5,
        CriteriaKey.NUMBER_BETWEEN: [0, 5],
        CriteriaKey.OBJECT_FIELD_PRESENT: s,
        CriteriaKey.OBJECT_FIELD_ABSENT: s,
        CriteriaKey.OBJECT_NUMBER_FIELD: [s, {"key": CriteriaKey.NUMBER_ONE_OF.value, "value": [0]}],
        CriteriaKey.OBJECT_STRING_FIELD: [s, {"key": CriteriaKey.STRING_EQUAL.value, "value": s}],
        CriteriaKey.OBJECT_BOOLEAN_FIELD: [s, {"key": CriteriaKey.BOOLEAN_TRUE.value}],
    }
    return Criterion.model_validate({"key": key.value, "value": defaults[key]})
