"""
Groups: named sets of requirements matched against a card pool.

Matching works on direct candidate relationships only:

- A requirement's candidates are the cards its predicate accepts.
- A card claimed by two or more requirements is reported once as
  ``ambiguous`` with every requirement that claims it, and those requirements
  produce no entry of their own.
- Any other requirement succeeds when it has exactly one candidate and fails
  when it has none. It also fails when it has several candidates that no other
  requirement claims (a tie); no winner is picked.

No search for an alternative perfect assignment is attempted. Results are
deterministic for a given card order.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Dict, Iterable, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter

logger = logging.getLogger(__name__)

CardId = Union[str, int]
Predicate = Callable[[Any], bool]


class SucceededMatch(BaseModel):
    status: Literal["succeeded"] = "succeeded"
    requirement: str
    id: CardId


class FailedMatch(BaseModel):
    status: Literal["failed"] = "failed"
    requirement: str


class AmbiguousMatch(BaseModel):
    status: Literal["ambiguous"] = "ambiguous"
    id: CardId
    requirements: List[str]


GroupMatch = Annotated[Union[SucceededMatch, FailedMatch, AmbiguousMatch], Field(discriminator="status")]

_MATCH_LIST = TypeAdapter(List[GroupMatch])


def matches_to_dicts(matches: Sequence[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize matches to their JSON shapes."""
    return [m.model_dump(mode="json") for m in matches]


def matches_to_json(matches: Sequence[BaseModel]) -> str:
    return json.dumps(matches_to_dicts(matches), indent=2)


def parse_matches(data: Union[str, List[Dict[str, Any]]]) -> List[BaseModel]:
    """Parse serialized matches, dispatching on ``status``."""
    if isinstance(data, str):
        return _MATCH_LIST.validate_json(data)
    return _MATCH_LIST.validate_python(data)


@dataclass(frozen=True)
class Requirement:
    """
    A named role a group needs filled.

    Attributes:
        name: Unique name within the group; used in match results.
        predicate: Accepts or rejects a card.
        label: Human-readable description for diagnostics.
    """

    name: str
    predicate: Predicate = field(compare=False)
    label: Optional[str] = None

    @property
    def display(self) -> str:
        return self.label or self.name

    def matches(self, card: Any) -> bool:
        return bool(self.predicate(card))


@dataclass(frozen=True)
class Group:
    """
    A named, ordered list of requirements. Owns no cards.

    Raises:
        ValueError: If two requirements share a name.
    """

    name: str
    requirements: Sequence[Requirement] = ()

    def __post_init__(self):
        object.__setattr__(self, "requirements", tuple(self.requirements))
        seen = set()
        for requirement in self.requirements:
            if requirement.name in seen:
                raise ValueError(f"group {self.name} has a duplicate requirement {requirement.name}")
            seen.add(requirement.name)

    def candidates(self, cards: Iterable[Any]) -> Dict[str, List[CardId]]:
        """
        Get the ids of the cards each requirement accepts.

        Args:
            cards: Card pool; each card needs an ``id``.

        Returns:
            Requirement name to candidate ids, in card order, without duplicates.
        """
        pool = list(cards)
        result: Dict[str, List[CardId]] = {}
        for requirement in self.requirements:
            ids = [card.id for card in pool if requirement.matches(card)]
            result[requirement.name] = list(dict.fromkeys(ids))
        return result

    def match_to(self, cards: Iterable[Any]) -> List[BaseModel]:
        """
        Match a card pool against this group's requirements.

        Args:
            cards: Card pool; each card needs an ``id``.

        Returns:
            Succeeded/failed entries for unambiguous requirements in requirement
            order, followed by ambiguous entries in card order.
        """
        pool = list(cards)
        candidates = self.candidates(pool)

        claims: Dict[CardId, List[str]] = {}
        for card in pool:
            if card.id in claims:
                continue
            claimed_by = [name for name, ids in candidates.items() if card.id in ids]
            if claimed_by:
                claims[card.id] = claimed_by

        contested = [card_id for card_id, names in claims.items() if len(names) >= 2]
        absorbed = {name for card_id in contested for name in claims[card_id]}

        matches: List[BaseModel] = []
        for requirement in self.requirements:
            if requirement.name in absorbed:
                continue
            ids = candidates[requirement.name]
            if len(ids) == 1:
                matches.append(SucceededMatch(requirement=requirement.name, id=ids[0]))
                continue
            if ids:
                logger.debug(
                    f"Group {self.name}: requirement {requirement.display!r} is tied between {ids}; reporting failed"
                )
            matches.append(FailedMatch(requirement=requirement.name))

        for card_id in contested:
            matches.append(AmbiguousMatch(id=card_id, requirements=claims[card_id]))

        logger.debug(
            f"Group {self.name}: {len(self.requirements)} requirement(s) over {len(pool)} card(s), "
            f"{len(contested)} ambiguous card(s)"
        )
        return matches
