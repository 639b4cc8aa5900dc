"""Criterion evaluation.

This module provides:
- CriterionEvaluator: evaluates one criterion against one subject value
- Type guards for the operand and subject shapes each namespace accepts

Key Concepts:
- Dispatch is on the full ``namespace/operator`` key through a handler table
  that covers every CriteriaKey; a missing handler raises RuntimeError when
  a CriterionEvaluator is constructed.
- Unknown keys, malformed operands and mismatched subject types evaluate to
  False. Nothing in here raises for bad blueprint data.
- String matching is case-sensitive. Callers that want case-insensitive
  matching lower-case both sides before evaluating.
- Length criteria recurse with the derived length as the new subject.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mtg_set_builder.criteria.keys import CriteriaKey
from mtg_set_builder.models.blueprint import Criterion

logger = logging.getLogger(__name__)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _string_list(value: Any) -> Optional[List[str]]:
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return list(value)
    return None


def _number_list(value: Any) -> Optional[List[float]]:
    if isinstance(value, (list, tuple)) and all(_is_number(v) for v in value):
        return list(value)
    return None


def _field_pair(value: Any):
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and isinstance(value[0], str)
        and isinstance(value[1], Criterion)
    ):
        return value[0], value[1]
    return None, None


class CriterionEvaluator:
    """Evaluate criteria against subject values.

    Instances hold no per-call state and can be shared freely.
    """

    def __init__(self):
        self._handlers: Dict[CriteriaKey, Callable[[Criterion, Any], bool]] = {
            CriteriaKey.STRING_EQUAL: self._string_equal,
            CriteriaKey.STRING_CONTAIN_ONE_OF: self._string_contain_one_of,
            CriteriaKey.STRING_CONTAIN_ALL_OF: self._string_contain_all_of,
            CriteriaKey.STRING_LENGTH: self._string_length,
            CriteriaKey.BOOLEAN_TRUE: self._boolean_true,
            CriteriaKey.BOOLEAN_FALSE: self._boolean_false,
            CriteriaKey.OPTIONAL_PRESENT: self._optional_present,
            CriteriaKey.OPTIONAL_ABSENT: self._optional_absent,
            CriteriaKey.STRING_ARRAY_ALLOW: self._string_array_allow,
            CriteriaKey.STRING_ARRAY_DENY: self._string_array_deny,
            CriteriaKey.STRING_ARRAY_INCLUDES_ONE_OF: self._string_array_includes_one_of,
            CriteriaKey.STRING_ARRAY_INCLUDES_ALL_OF: self._string_array_includes_all_of,
            CriteriaKey.STRING_ARRAY_LENGTH: self._string_array_length,
            CriteriaKey.NUMBER_ONE_OF: self._number_one_of,
            CriteriaKey.NUMBER_AT_LEAST: self._number_at_least,
            CriteriaKey.NUMBER_AT_MOST: self._number_at_most,
            CriteriaKey.NUMBER_BETWEEN: self._number_between,
            CriteriaKey.OBJECT_FIELD_PRESENT: self._object_field_present,
            CriteriaKey.OBJECT_FIELD_ABSENT: self._object_field_absent,
            CriteriaKey.OBJECT_NUMBER_FIELD: self._object_typed_field("number"),
            CriteriaKey.OBJECT_STRING_FIELD: self._object_typed_field("string"),
            CriteriaKey.OBJECT_BOOLEAN_FIELD: self._object_typed_field("boolean"),
        }
        missing = set(CriteriaKey) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No evaluator for criteria keys: {sorted(k.value for k in missing)}")

    def evaluate(self, criterion: Criterion, subject: Any) -> bool:
        """
        Evaluate a criterion against a subject value.

        Args:
            criterion: Criterion to check.
            subject: String, list of strings, number, bool, mapping or None,
                depending on the criterion's namespace.

        Returns:
            True if the subject satisfies the criterion. False otherwise,
            including for unknown keys and malformed operands.
        """
        key = CriteriaKey.parse(criterion.key)
        if key is None:
            logger.warning(f"Unknown criteria key {criterion.key!r}; treating as failed")
            return False
        return self._handlers[key](criterion, subject)

    def _evaluate_nested(self, nested: Any, namespace: str, subject: Any) -> bool:
        if not isinstance(nested, Criterion) or nested.namespace != namespace:
            logger.debug(f"Expected nested {namespace} criterion, got {nested!r}")
            return False
        return self.evaluate(nested, subject)

    # string

    def _string_equal(self, criterion: Criterion, subject: Any) -> bool:
        return isinstance(subject, str) and isinstance(criterion.value, str) and subject == criterion.value

    def _string_contain_one_of(self, criterion: Criterion, subject: Any) -> bool:
        needles = _string_list(criterion.value)
        if not isinstance(subject, str) or needles is None:
            return False
        return any(needle in subject for needle in needles)

    def _string_contain_all_of(self, criterion: Criterion, subject: Any) -> bool:
        needles = _string_list(criterion.value)
        if not isinstance(subject, str) or needles is None:
            return False
        return all(needle in subject for needle in needles)

    def _string_length(self, criterion: Criterion, subject: Any) -> bool:
        if not isinstance(subject, str):
            return False
        return self._evaluate_nested(criterion.value, "number", len(subject))

    # boolean / optional

    def _boolean_true(self, criterion: Criterion, subject: Any) -> bool:
        return subject is True

    def _boolean_false(self, criterion: Criterion, subject: Any) -> bool:
        return subject is False

    def _optional_present(self, criterion: Criterion, subject: Any) -> bool:
        return subject is not None

    def _optional_absent(self, criterion: Criterion, subject: Any) -> bool:
        return subject is None

    # string-array

    def _string_array_allow(self, criterion: Criterion, subject: Any) -> bool:
        allowed = _string_list(criterion.value)
        items = _string_list(subject)
        if allowed is None or items is None:
            return False
        return all(item in allowed for item in items)

    def _string_array_deny(self, criterion: Criterion, subject: Any) -> bool:
        denied = _string_list(criterion.value)
        items = _string_list(subject)
        if denied is None or items is None:
            return False
        return not any(item in denied for item in items)

    def _string_array_includes_one_of(self, criterion: Criterion, subject: Any) -> bool:
        wanted = _string_list(criterion.value)
        items = _string_list(subject)
        if wanted is None or items is None:
            return False
        return any(w in items for w in wanted)

    def _string_array_includes_all_of(self, criterion: Criterion, subject: Any) -> bool:
        wanted = _string_list(criterion.value)
        items = _string_list(subject)
        if wanted is None or items is None:
            return False
        return all(w in items for w in wanted)

    def _string_array_length(self, criterion: Criterion, subject: Any) -> bool:
        items = _string_list(subject)
        if items is None:
            return False
        return self._evaluate_nested(criterion.value, "number", len(items))

    # number

    def _number_one_of(self, criterion: Criterion, subject: Any) -> bool:
        options = _number_list(criterion.value)
        if not _is_number(subject) or options is None:
            return False
        return subject in options

    def _number_at_least(self, criterion: Criterion, subject: Any) -> bool:
        if not _is_number(subject) or not _is_number(criterion.value):
            return False
        return subject >= criterion.value

    def _number_at_most(self, criterion: Criterion, subject: Any) -> bool:
        if not _is_number(subject) or not _is_number(criterion.value):
            return False
        return subject <= criterion.value

    def _number_between(self, criterion: Criterion, subject: Any) -> bool:
        bounds = _number_list(criterion.value)
        if not _is_number(subject) or bounds is None or len(bounds) != 2:
            return False
        low, high = bounds
        return low <= subject <= high

    # object

    def _object_field_present(self, criterion: Criterion, subject: Any) -> bool:
        if not isinstance(subject, dict) or not isinstance(criterion.value, str):
            return False
        return criterion.value in subject

    def _object_field_absent(self, criterion: Criterion, subject: Any) -> bool:
        if not isinstance(subject, dict) or not isinstance(criterion.value, str):
            return False
        return criterion.value not in subject

    def _object_typed_field(self, namespace: str) -> Callable[[Criterion, Any], bool]:
        def check(criterion: Criterion, subject: Any) -> bool:
            field, nested = _field_pair(criterion.value)
            if not isinstance(subject, dict) or field is None:
                return False
            return self._evaluate_nested(nested, namespace, subject.get(field))

        return check
