"""Group matching.

This package contains:
- group: Requirement, Group and the GroupMatch result models
- requirements: builders for pattern- and blueprint-backed requirements
"""

from .group import (
    AmbiguousMatch,
    FailedMatch,
    Group,
    GroupMatch,
    Requirement,
    SucceededMatch,
    matches_to_dicts,
    matches_to_json,
    parse_matches,
)
from .requirements import blueprint_requirement, pattern_requirement, requirements_for

__all__ = [
    "AmbiguousMatch",
    "FailedMatch",
    "Group",
    "GroupMatch",
    "Requirement",
    "SucceededMatch",
    "matches_to_dicts",
    "matches_to_json",
    "parse_matches",
    "blueprint_requirement",
    "pattern_requirement",
    "requirements_for",
]
