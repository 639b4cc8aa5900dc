"""Compose layered blueprints into source-tagged criteria."""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from mtg_set_builder.models.blueprint import BlueprintSource, BlueprintWithSource, Criterion


@dataclass(frozen=True)
class SourcedCriterion:
    """A criterion together with the layer it was authored on."""

    source: BlueprintSource
    criterion: Criterion


ComposedBlueprint = Dict[str, List[SourcedCriterion]]


class BlueprintComposer:
    """Merge blueprints in caller order (by convention set, archetype, cycle, slot).

    Every layer that defines a property contributes all of its criteria; no
    layer overrides another.
    """

    def compose(self, blueprints: Iterable[BlueprintWithSource]) -> ComposedBlueprint:
        """
        Concatenate each property's criteria across blueprints.

        Args:
            blueprints: Source-tagged blueprints in precedence order.

        Returns:
            Property name to sourced criteria. Properties are ordered by first
            appearance; criteria keep blueprint order, then list order.
        """
        composed: ComposedBlueprint = {}
        for prop, entry in self.sequence(blueprints):
            composed.setdefault(prop, []).append(entry)
        return composed

    def sequence(self, blueprints: Iterable[BlueprintWithSource]) -> List[Tuple[str, SourcedCriterion]]:
        """
        List every criterion with its property in source order.

        Blueprint order comes first, then each blueprint's own property
        order, then list order.
        """
        return [
            (prop, SourcedCriterion(tagged.source, criterion))
            for tagged in blueprints
            for prop, criteria in tagged.blueprint.items()
            for criterion in criteria
        ]
