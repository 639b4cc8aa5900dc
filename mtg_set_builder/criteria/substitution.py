"""Metadata substitution for criterion operands.

Archetype metadata (e.g. ``mainCharacter: "Miffy, The Kind"``) is referenced
from blueprint operands as ``$[mainCharacter]``. Substitution is literal and
single-pass: replaced text is never scanned again, and a token whose key is
missing (or set to None) is left as written so the criterion simply fails to
match.
"""

import logging
import re
from typing import Any, Mapping, Optional

from mtg_set_builder.criteria.keys import SUBSTITUTABLE_NAMESPACES
from mtg_set_builder.models.blueprint import Criterion

logger = logging.getLogger(__name__)

METADATA_TOKEN = re.compile(r"\$\[([a-zA-Z0-9_-]+)\]")

Metadata = Mapping[str, Optional[str]]


class MetadataSubstitutor:
    """Resolve ``$[key]`` tokens in string and string-array operands."""

    def substitute(self, operand: str, metadata: Metadata) -> str:
        """
        Replace every ``$[key]`` token in a string.

        Args:
            operand: Text that may contain tokens.
            metadata: Archetype metadata.

        Returns:
            The text with known tokens replaced.
        """

        def replace(match: "re.Match[str]") -> str:
            value = metadata.get(match.group(1))
            if value is None:
                logger.debug(f"No metadata for token {match.group(0)}; leaving it verbatim")
                return match.group(0)
            return value

        return METADATA_TOKEN.sub(replace, operand)

    def substitute_criterion(self, criterion: Criterion, metadata: Metadata) -> Criterion:
        """
        Apply substitution to a criterion's literal operand.

        Only ``string`` and ``string-array`` criteria with a string or
        list-of-strings operand are touched; everything else, including
        nested length criteria, is returned as is.
        """
        if criterion.namespace not in SUBSTITUTABLE_NAMESPACES:
            return criterion
        value: Any = criterion.value
        if isinstance(value, str):
            return criterion.with_value(self.substitute(value, metadata))
        if isinstance(value, list) and value and all(isinstance(v, str) for v in value):
            return criterion.with_value([self.substitute(v, metadata) for v in value])
        return criterion
