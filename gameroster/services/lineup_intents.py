"""
Assignment intents for lineup editing.

A presentation layer turns user gestures (tap, drag, long-press, reorder)
into one of the intents below and dispatches it to a partition engine. The
intents know nothing about how they were produced.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List

from ..models import Zone
from ..utils.constants import MAX_INTENT_HISTORY
from .lineup_engine import PartitionEngine


class AssignmentIntent(ABC):
    """Abstract base class for lineup intents - Command pattern."""

    @abstractmethod
    def apply(self, engine: PartitionEngine) -> None:
        """
        Apply the intent to an engine.

        Raises:
            LineupError: If the engine rejects the change
        """
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get human-readable description of the intent."""
        pass


def _assignable_zone(zone: Zone) -> Zone:
    if zone is Zone.AVAILABLE:
        raise ValueError("Intent zone must be starter or substitute")
    return zone


@dataclass(frozen=True)
class AddIntent(AssignmentIntent):
    """Put an available player into a zone (tap "add" or drop onto a zone)."""
    player_id: str
    zone: Zone = Zone.STARTER

    def apply(self, engine: PartitionEngine) -> None:
        if _assignable_zone(self.zone) is Zone.STARTER:
            engine.add_to_starters(self.player_id)
        else:
            engine.add_to_substitutes(self.player_id)

    @property
    def description(self) -> str:
        return f"Add {self.player_id} to {self.zone.value}s"


@dataclass(frozen=True)
class RemoveIntent(AssignmentIntent):
    """Send a player in a zone back to the available list."""
    player_id: str
    zone: Zone

    def apply(self, engine: PartitionEngine) -> None:
        if _assignable_zone(self.zone) is Zone.STARTER:
            engine.remove_from_starters(self.player_id)
        else:
            engine.remove_from_substitutes(self.player_id)

    @property
    def description(self) -> str:
        return f"Remove {self.player_id} from {self.zone.value}s"


@dataclass(frozen=True)
class PromoteIntent(AssignmentIntent):
    player_id: str

    def apply(self, engine: PartitionEngine) -> None:
        engine.promote_to_starter(self.player_id)

    @property
    def description(self) -> str:
        return f"Promote {self.player_id} to starter"


@dataclass(frozen=True)
class DemoteIntent(AssignmentIntent):
    player_id: str

    def apply(self, engine: PartitionEngine) -> None:
        engine.demote_to_substitute(self.player_id)

    @property
    def description(self) -> str:
        return f"Send {self.player_id} to the bench"


@dataclass(frozen=True)
class ReorderIntent(AssignmentIntent):
    zone: Zone
    from_index: int
    to_index: int

    def apply(self, engine: PartitionEngine) -> None:
        engine.reorder(self.zone, self.from_index, self.to_index)

    @property
    def description(self) -> str:
        return f"Move {self.zone.value} #{self.from_index + 1} to #{self.to_index + 1}"


@dataclass(frozen=True)
class SetCapacityIntent(AssignmentIntent):
    starter_slots: int

    def apply(self, engine: PartitionEngine) -> None:
        engine.set_starter_capacity(self.starter_slots)

    @property
    def description(self) -> str:
        return f"Set starter slots to {self.starter_slots}"


@dataclass(frozen=True)
class ClearIntent(AssignmentIntent):

    def apply(self, engine: PartitionEngine) -> None:
        engine.clear()

    @property
    def description(self) -> str:
        return "Clear lineup"


def _require(data: Dict[str, Any], key: str) -> Any:
    if data.get(key) is None:
        raise ValueError(f"Intent field '{key}' is required")
    return data[key]


def _require_int(data: Dict[str, Any], key: str) -> int:
    value = _require(data, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Intent field '{key}' must be an integer")
    return value


def intent_from_dict(data: Dict[str, Any]) -> AssignmentIntent:
    """
    Build an intent from its JSON form.

    Examples::

        {"type": "add", "player_id": "p1", "zone": "starter"}
        {"type": "remove", "player_id": "p1", "zone": "substitute"}
        {"type": "promote", "player_id": "p1"}
        {"type": "demote", "player_id": "p1"}
        {"type": "reorder", "zone": "starter", "from_index": 0, "to_index": 2}
        {"type": "set_capacity", "starter_slots": 7}
        {"type": "clear"}

    Raises:
        ValueError: For an unknown type, a missing field or an invalid zone
    """
    if not isinstance(data, dict):
        raise ValueError("Intent must be a JSON object")

    intent_type = str(data.get("type", "")).strip().lower()

    if intent_type == "add":
        return AddIntent(
            player_id=str(_require(data, "player_id")),
            zone=_assignable_zone(Zone.parse(data.get("zone", Zone.STARTER.value))),
        )
    if intent_type == "remove":
        return RemoveIntent(
            player_id=str(_require(data, "player_id")),
            zone=_assignable_zone(Zone.parse(_require(data, "zone"))),
        )
    if intent_type == "promote":
        return PromoteIntent(player_id=str(_require(data, "player_id")))
    if intent_type == "demote":
        return DemoteIntent(player_id=str(_require(data, "player_id")))
    if intent_type == "reorder":
        return ReorderIntent(
            zone=_assignable_zone(Zone.parse(_require(data, "zone"))),
            from_index=_require_int(data, "from_index"),
            to_index=_require_int(data, "to_index"),
        )
    if intent_type == "set_capacity":
        # Range is checked by the engine so the caller gets InvalidCapacity
        return SetCapacityIntent(starter_slots=_require_int(data, "starter_slots"))
    if intent_type == "clear":
        return ClearIntent()

    raise ValueError(f"Unknown intent type: {data.get('type')!r}")


class LineupIntentDispatcher:
    """
    Applies intents to one engine and keeps a bounded history of the ones
    that succeeded.
    """

    def __init__(self, engine: PartitionEngine, max_history: int = MAX_INTENT_HISTORY):
        """
        Initialize dispatcher.

        Args:
            engine: Engine the intents are applied to
            max_history: Maximum number of intent descriptions to keep
        """
        self.engine = engine
        self.max_history = max_history
        self._history: List[str] = []

    def dispatch(self, intent: AssignmentIntent) -> None:
        """
        Apply an intent. Engine errors propagate unchanged and are not recorded.
        """
        intent.apply(self.engine)
        self._history.append(intent.description)
        if len(self._history) > self.max_history:
            self._history.pop(0)

    def get_history(self) -> List[str]:
        """Get history of intent descriptions, oldest first."""
        return list(self._history)

    def clear_history(self) -> None:
        self._history.clear()
