"""Requirement builders.

Functions:
    pattern_requirement: Match a literal substring (or regex) in one card field.
    blueprint_requirement: Match cards that pass a blueprint.
    requirements_for: Expand an expected card shape into numbered requirements.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from mtg_set_builder.app_config import AppConfig
from mtg_set_builder.criteria.evaluator import CriterionEvaluator
from mtg_set_builder.criteria.keys import CriteriaKey
from mtg_set_builder.criteria.substitution import Metadata
from mtg_set_builder.groups.group import Requirement
from mtg_set_builder.models.blueprint import BlueprintSource, BlueprintWithSource, Criterion
from mtg_set_builder.validation.accessors import DEFAULT_ACCESSORS
from mtg_set_builder.validation.blueprint_validator import BlueprintValidator

logger = logging.getLogger(__name__)

_EVALUATOR = CriterionEvaluator()
_VALIDATOR = BlueprintValidator(evaluator=_EVALUATOR)


def pattern_requirement(
    name: str,
    pattern: str,
    field: str = "name",
    case_sensitive: Optional[bool] = None,
    regex: bool = False,
    label: Optional[str] = None,
    app_config: Optional[AppConfig] = None,
) -> Requirement:
    """
    Build a requirement that looks for a pattern in a card field.

    Args:
        name: Requirement name.
        pattern: Substring to look for, or a regular expression if ``regex``.
        field: Blueprint property to read (``name``, ``rules``, ``subtypes`` ...).
            List fields match when any element matches.
        case_sensitive: Match case exactly. Both sides are lower-cased otherwise.
            Read from ``[Matching] case_sensitive`` when None (False without config).
        regex: Treat ``pattern`` as a regular expression.
        label: Diagnostic label; defaults to a description of the pattern.
        app_config: Settings to read matching defaults from.

    Returns:
        Requirement whose predicate checks the pattern.

    Raises:
        ValueError: If ``field`` is not a known card property.
        re.error: If ``regex`` is set and the pattern does not compile.
    """
    accessor = DEFAULT_ACCESSORS.get(field)
    if accessor is None:
        raise ValueError(f"Unknown card field for requirement {name}: {field}")

    if case_sensitive is None:
        case_sensitive = app_config.case_sensitive if app_config is not None else False

    compiled = re.compile(pattern, 0 if case_sensitive else re.IGNORECASE) if regex else None
    criterion = Criterion(
        key=CriteriaKey.STRING_CONTAIN_ONE_OF.value,
        value=[pattern if case_sensitive else pattern.lower()],
    )

    def predicate(card: Any) -> bool:
        value = accessor.getter(card)
        texts = value if isinstance(value, list) else [value]
        for text in texts:
            if not isinstance(text, str):
                continue
            if compiled is not None:
                if compiled.search(text):
                    return True
            elif _EVALUATOR.evaluate(criterion, text if case_sensitive else text.lower()):
                return True
        return False

    return Requirement(name=name, predicate=predicate, label=label or f"{field} matches {pattern!r}")


def blueprint_requirement(
    name: str,
    blueprint: Dict[str, Any],
    metadata: Optional[Metadata] = None,
    label: Optional[str] = None,
) -> Requirement:
    """
    Build a requirement satisfied by cards that pass a blueprint.

    Args:
        name: Requirement name.
        blueprint: Serialized blueprint (property -> criteria).
        metadata: Metadata for ``$[key]`` tokens in the blueprint.
        label: Diagnostic label.

    Returns:
        Requirement backed by blueprint validation.
    """
    tagged = [BlueprintWithSource.of(BlueprintSource.SLOT.value, blueprint)]

    def predicate(card: Any) -> bool:
        return _VALIDATOR.validate(metadata=metadata, blueprints=tagged, card=card).success

    return Requirement(name=name, predicate=predicate, label=label)


def _words(value: Optional[str]) -> str:
    return f"{value} " if value else ""


def requirements_for(
    count: int = 1,
    rarity: Optional[str] = None,
    colors: Optional[List[str]] = None,
    supertype: Optional[str] = None,
    types: Optional[List[str]] = None,
    subtypes: Optional[List[str]] = None,
    distributed_subtypes: Optional[List[str]] = None,
    abilities: Optional[List[str]] = None,
) -> List[Requirement]:
    """
    Expand an expected card shape into ``count`` numbered requirements.

    ``distributed_subtypes`` hands one extra subtype to each numbered
    requirement in turn, e.g. five common lands each needing a different basic
    land type. Abilities are matched against lower-cased rules text.

    Returns:
        Requirements named like ``"common land plains 1"``.
    """
    requirements: List[Requirement] = []
    for i in range(1, count + 1):
        expected_subtypes: Optional[List[str]] = None
        if subtypes is not None or distributed_subtypes is not None:
            expected_subtypes = list(subtypes or [])
            if distributed_subtypes and i - 1 < len(distributed_subtypes):
                expected_subtypes.append(distributed_subtypes[i - 1])

        blueprint: Dict[str, List[Dict[str, Any]]] = {}
        if rarity:
            blueprint["rarity"] = [{"key": CriteriaKey.STRING_EQUAL.value, "value": rarity}]
        if colors is not None:
            blueprint["color"] = [
                {"key": CriteriaKey.STRING_ARRAY_INCLUDES_ALL_OF.value, "value": list(colors)},
                {"key": CriteriaKey.STRING_ARRAY_LENGTH.value,
                 "value": {"key": CriteriaKey.NUMBER_ONE_OF.value, "value": [len(colors)]}},
            ]
        if supertype:
            blueprint["supertype"] = [{"key": CriteriaKey.STRING_EQUAL.value, "value": supertype}]
        if types:
            blueprint["types"] = [{"key": CriteriaKey.STRING_ARRAY_INCLUDES_ALL_OF.value, "value": list(types)}]
        if expected_subtypes:
            blueprint["subtypes"] = [
                {"key": CriteriaKey.STRING_ARRAY_INCLUDES_ALL_OF.value, "value": expected_subtypes}
            ]
        if abilities:
            blueprint["rules"] = [
                {"key": CriteriaKey.STRING_CONTAIN_ALL_OF.value, "value": [a.lower() for a in abilities]}
            ]

        name = (
            _words(rarity)
            + _words("+".join(colors) if colors else None)
            + _words(supertype)
            + _words("+".join(types) if types else None)
            + _words("+".join(expected_subtypes) if expected_subtypes else None)
            + _words("+".join(abilities) if abilities else None)
            + ("" if count == 1 else str(i))
        ).strip()
        requirements.append(blueprint_requirement(name, blueprint, label=name))
    logger.debug(f"Expanded {count} requirement(s): {[r.name for r in requirements]}")
    return requirements
