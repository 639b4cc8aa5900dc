# mtg_set_builder/models/set_definition.py

"""
Set definition models and YAML/JSON utilities.

A set is a matrix of archetypes (rows) and cycles (columns). Each cell is a
slot that references a card, is explicitly skipped, or is still missing.
Blueprints can be attached to the set, an archetype, a cycle and a slot; a
slot's card must satisfy all of them.

Classes:
    CardReference: Reference from a slot to a card id.
    SlotDefinition: A filled slot with an optional slot blueprint.
    CycleDefinition: A cycle column with an optional blueprint.
    ArchetypeDefinition: An archetype row with metadata and its slots.
    SlotStatus: Status of one slot (missing, skip, invalid, valid).
    SetDefinition: Main set model.
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from mtg_set_builder.app_config import AppConfig
from mtg_set_builder.models.blueprint import Blueprint, BlueprintSource, BlueprintWithSource, parse_blueprint
from mtg_set_builder.models.card import Card
from mtg_set_builder.validation.blueprint_validator import BlueprintValidator, CriteriaFailureReason

logger = logging.getLogger(__name__)

SKIP = "skip"
SET_FILE_EXTENSIONS = (".yaml", ".yml", ".json")
SlotStatusName = Literal["missing", "skip", "invalid", "valid"]


def _optional_blueprint(v: Any) -> Optional[Blueprint]:
    if v is None:
        return None
    return parse_blueprint(v)


class CardReference(BaseModel):
    cardId: str


class SlotDefinition(BaseModel):
    """
    A filled slot.

    Attributes:
        blueprint: Slot-level blueprint, if any.
        cardRef: The card placed in the slot.
    """

    blueprint: Optional[Blueprint] = None
    cardRef: CardReference

    @field_validator("blueprint", mode="before")
    @classmethod
    def coerce_blueprint(cls, v: Any) -> Optional[Blueprint]:
        return _optional_blueprint(v)


class CycleDefinition(BaseModel):
    key: str
    blueprint: Optional[Blueprint] = None

    @field_validator("blueprint", mode="before")
    @classmethod
    def coerce_blueprint(cls, v: Any) -> Optional[Blueprint]:
        return _optional_blueprint(v)


class ArchetypeDefinition(BaseModel):
    """
    An archetype row.

    Attributes:
        name: Archetype name.
        blueprint: Archetype-level blueprint, if any.
        metadata: Values for the set's metadata keys (None when unset).
        cycles: Cycle key to slot, or ``"skip"``. Missing keys are missing slots.
    """

    name: str
    blueprint: Optional[Blueprint] = None
    metadata: Dict[str, Optional[str]] = Field(default_factory=dict)
    cycles: Dict[str, Union[Literal["skip"], SlotDefinition]] = Field(default_factory=dict)

    @field_validator("blueprint", mode="before")
    @classmethod
    def coerce_blueprint(cls, v: Any) -> Optional[Blueprint]:
        return _optional_blueprint(v)

    @field_validator("metadata", mode="before")
    @classmethod
    def blank_metadata_is_unset(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {k: (None if isinstance(val, str) and val.strip() == "" else val) for k, val in v.items()}
        return v


class SlotStatus(BaseModel):
    """Status of one slot, with failure reasons when invalid."""

    status: SlotStatusName
    reasons: Optional[List[CriteriaFailureReason]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status}
        if self.reasons is not None:
            data["reasons"] = [r.to_dict() for r in self.reasons]
        return data


class SetDefinition(BaseModel):
    """Main set model."""

    name: str
    blueprint: Optional[Blueprint] = None
    metadataKeys: List[str] = Field(default_factory=list)
    cycles: List[CycleDefinition] = Field(default_factory=list)
    archetypes: List[ArchetypeDefinition] = Field(default_factory=list)

    @field_validator("blueprint", mode="before")
    @classmethod
    def coerce_blueprint(cls, v: Any) -> Optional[Blueprint]:
        return _optional_blueprint(v)

    @classmethod
    def empty(cls, name: str) -> "SetDefinition":
        return cls(name=name)

    @classmethod
    def from_yaml(cls, path_or_str: Union[str, Path]) -> "SetDefinition":
        """
        Create a SetDefinition from a YAML file or YAML text.

        Args:
            path_or_str: Path to a YAML file, or YAML text (anything with a newline).

        Returns:
            SetDefinition instance.

        Raises:
            FileNotFoundError: If a path is given that doesn't exist.
            yaml.YAMLError: If YAML parsing fails.
            ValueError: If the data is not a valid set.
        """
        if isinstance(path_or_str, str) and "\n" in path_or_str:
            data = yaml.safe_load(path_or_str)
        else:
            path = Path(path_or_str)
            if not path.exists():
                raise FileNotFoundError(f"YAML file not found: {path}")
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path_or_str: Union[str, Path]) -> "SetDefinition":
        """Create a SetDefinition from a JSON file or JSON text."""
        if isinstance(path_or_str, str) and path_or_str.lstrip().startswith("{"):
            data = json.loads(path_or_str)
        else:
            path = Path(path_or_str)
            if not path.exists():
                raise FileNotFoundError(f"JSON file not found: {path}")
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def load(cls, name: str, app_config: AppConfig) -> "SetDefinition":
        """
        Load a set file by name from the configured ``[Paths] sets_dir``.

        Args:
            name: File name, or a stem tried with .yaml, .yml and .json.
            app_config: Settings holding the sets directory.

        Raises:
            FileNotFoundError: If no matching file exists.
        """
        sets_dir = app_config.get_path("sets_dir")
        if Path(name).suffix:
            candidates = [sets_dir / name]
        else:
            candidates = [sets_dir / f"{name}{ext}" for ext in SET_FILE_EXTENSIONS]
        for path in candidates:
            if path.is_file():
                logger.debug(f"Loading set {name} from {path}")
                if path.suffix == ".json":
                    return cls.from_json(path)
                return cls.from_yaml(path)
        raise FileNotFoundError(f"Set {name!r} not found in {sets_dir}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SetDefinition":
        """Create a SetDefinition from a dictionary.

        Raises:
            ValueError: If data is invalid
        """
        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid set definition: {e}")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)

    def to_yaml(self, path: Optional[Union[str, Path]] = None) -> Optional[str]:
        """
        Convert the set to YAML.

        Args:
            path: Optional path to write the YAML to.

        Returns:
            YAML string if path is None, None otherwise.
        """
        yaml_str = yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        if path:
            with open(path, "w", encoding="utf-8") as f:
                f.write(yaml_str)
            return None
        return yaml_str

    def to_json(self, path: Optional[Union[str, Path]] = None) -> str:
        """Convert the set to a JSON string and optionally save it to a file."""
        json_str = json.dumps(self.to_dict(), indent=2)
        if path:
            with open(path, "w", encoding="utf-8") as f:
                f.write(json_str)
        return json_str

    def _slot(self, archetype_index: int, cycle_key: str) -> Optional[Union[str, SlotDefinition]]:
        if not 0 <= archetype_index < len(self.archetypes):
            return None
        return self.archetypes[archetype_index].cycles.get(cycle_key)

    def cycle(self, cycle_key: str) -> Optional[CycleDefinition]:
        return next((c for c in self.cycles if c.key == cycle_key), None)

    def blueprints_for_slot(self, archetype_index: int, cycle_key: str) -> List[BlueprintWithSource]:
        """
        Get the blueprints that apply to a slot, most general first.

        Layers without a blueprint are left out. Missing and skipped slots
        have no blueprints.
        """
        slot = self._slot(archetype_index, cycle_key)
        if slot is None or slot == SKIP:
            return []
        archetype = self.archetypes[archetype_index]
        cycle = self.cycle(cycle_key)
        layers = [
            (BlueprintSource.SET, self.blueprint),
            (BlueprintSource.ARCHETYPE, archetype.blueprint),
            (BlueprintSource.CYCLE, cycle.blueprint if cycle else None),
            (BlueprintSource.SLOT, slot.blueprint),
        ]
        return [
            BlueprintWithSource(source=source, blueprint=blueprint)
            for source, blueprint in layers
            if blueprint is not None
        ]

    def slot_status(self, cards: Iterable[Card], archetype_index: int, cycle_key: str, validator: Optional[BlueprintValidator] = None) -> SlotStatus:
        """
        Get the status of one slot.

        Args:
            cards: Card pool the slot's card reference is resolved against.
            archetype_index: Row index.
            cycle_key: Column key.
            validator: BlueprintValidator to use; a default one otherwise.

        Returns:
            ``missing`` if there is no slot or its card is not in ``cards``,
            ``skip`` for skipped slots, else ``valid`` or ``invalid`` with reasons.
        """
        slot = self._slot(archetype_index, cycle_key)
        if slot is None:
            return SlotStatus(status="missing")
        if slot == SKIP:
            return SlotStatus(status="skip")
        card = next((c for c in cards if c.id == slot.cardRef.cardId), None)
        if card is None:
            logger.debug(f"Slot {archetype_index}/{cycle_key} references unknown card {slot.cardRef.cardId}")
            return SlotStatus(status="missing")

        validator = validator or BlueprintValidator()
        result = validator.validate(
            metadata=self.archetypes[archetype_index].metadata,
            blueprints=self.blueprints_for_slot(archetype_index, cycle_key),
            card=card,
        )
        if result.success:
            return SlotStatus(status="valid")
        return SlotStatus(status="invalid", reasons=result.reasons)

    def status_counts(self, cards: Iterable[Card], validator: Optional[BlueprintValidator] = None) -> Dict[str, int]:
        """Count slot statuses over every cycle and archetype."""
        pool = list(cards)
        validator = validator or BlueprintValidator()
        counts = {"missing": 0, "skip": 0, "invalid": 0, "valid": 0}
        for cycle in self.cycles:
            for archetype_index in range(len(self.archetypes)):
                status = self.slot_status(pool, archetype_index, cycle.key, validator=validator)
                counts[status.status] += 1
        return counts
