"""Criteria evaluation and metadata substitution.

This package contains:
- keys: the closed set of criteria keys and default operands
- evaluator: CriterionEvaluator
- substitution: MetadataSubstitutor for ``$[key]`` tokens
"""

from .keys import ALL_CRITERIA_KEYS, CriteriaKey, default_criteria_for
from .evaluator import CriterionEvaluator
from .substitution import METADATA_TOKEN, Metadata, MetadataSubstitutor

__all__ = [
    "ALL_CRITERIA_KEYS",
    "CriteriaKey",
    "default_criteria_for",
    "CriterionEvaluator",
    "METADATA_TOKEN",
    "Metadata",
    "MetadataSubstitutor",
]
