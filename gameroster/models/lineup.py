"""
Lineup models for the Game Roster application.

This module contains the value objects exchanged between the partition
engine, the serializer and the persistence gateway:

- Zone: the three mutually exclusive places a player can be in
- Lineup: immutable snapshot of starter capacity and zone order
- SlotAssignment: one (player_id, slot_number) pair of a stored lineup
- PersistedLineupRecord: the stored game roster row
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..utils.constants import DEFAULT_STARTER_SLOTS


class Zone(Enum):
    """Zones of a lineup. AVAILABLE is derived, never stored."""
    AVAILABLE = "available"
    STARTER = "starter"
    SUBSTITUTE = "substitute"

    @classmethod
    def parse(cls, value: Any) -> 'Zone':
        """
        Parse a zone from its value or name, case-insensitively.

        Accepts the plural forms used by the stored record ("starters",
        "substitutes") as well.

        Raises:
            ValueError: If the value does not name a zone
        """
        if isinstance(value, Zone):
            return value
        text = str(value or "").strip().lower()
        aliases = {"starters": "starter", "substitutes": "substitute", "subs": "substitute", "bench": "substitute"}
        text = aliases.get(text, text)
        for zone in cls:
            if zone.value == text:
                return zone
        raise ValueError(f"Unknown zone: {value!r}")


@dataclass(frozen=True)
class Lineup:
    """
    Immutable snapshot of one game lineup.

    Attributes:
        starter_slots: Maximum number of starters allowed when adding
        starters: Starter player ids in lineup order
        substitutes: Substitute player ids in bench order
    """
    starter_slots: int = DEFAULT_STARTER_SLOTS
    starters: Tuple[str, ...] = ()
    substitutes: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any sequence but always store tuples
        object.__setattr__(self, "starters", tuple(self.starters))
        object.__setattr__(self, "substitutes", tuple(self.substitutes))

    @classmethod
    def empty(cls, starter_slots: int = DEFAULT_STARTER_SLOTS) -> 'Lineup':
        return cls(starter_slots=starter_slots)

    def zone_of(self, player_id: str) -> Zone:
        if player_id in self.starters:
            return Zone.STARTER
        if player_id in self.substitutes:
            return Zone.SUBSTITUTE
        return Zone.AVAILABLE

    @property
    def assigned_ids(self) -> Tuple[str, ...]:
        """Starter ids followed by substitute ids."""
        return self.starters + self.substitutes

    @property
    def is_empty(self) -> bool:
        return not self.starters and not self.substitutes

    @property
    def over_capacity(self) -> bool:
        """True when capacity was lowered below the current starter count."""
        return len(self.starters) > self.starter_slots


@dataclass(frozen=True)
class SlotAssignment:
    """One stored (player_id, slot_number) pair; slot numbers are 1-based."""
    player_id: str
    slot_number: int

    def to_dict(self) -> Dict[str, Any]:
        return {"player_id": self.player_id, "slot_number": self.slot_number}


@dataclass
class PersistedLineupRecord:
    """
    Stored game roster row.

    Only ``starter_slots``, ``starters`` and ``substitutes`` belong to the
    lineup engine; the remaining fields are descriptive metadata carried
    through untouched.

    Attributes:
        lineup_id: Durable identifier, None until the record is created
        team_id: Owning team
        title: Display title (e.g. "vs. Eagles")
        game_date: Game date as stored (ISO date string)
        starter_slots: Starter capacity
        starters: Starter pairs; list position carries no order
        substitutes: Substitute pairs; list position carries no order
        created_at: Creation timestamp as stored
        created_by: Creating user id as stored
    """
    lineup_id: Optional[str] = None
    team_id: str = ""
    title: Optional[str] = None
    game_date: Optional[str] = None
    starter_slots: int = DEFAULT_STARTER_SLOTS
    starters: List[SlotAssignment] = field(default_factory=list)
    substitutes: List[SlotAssignment] = field(default_factory=list)
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert record to the stored wire shape.

        Returns:
            Dictionary suitable for JSON serialization
        """
        return {
            "id": self.lineup_id,
            "team_id": self.team_id,
            "title": self.title,
            "game_date": self.game_date,
            "starter_slots": self.starter_slots,
            "starters": [pair.to_dict() for pair in self.starters],
            "substitutes": [pair.to_dict() for pair in self.substitutes],
            "created_at": self.created_at,
            "created_by": self.created_by,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PersistedLineupRecord':
        """
        Create record from stored data.

        Malformed slot pairs are dropped individually; see
        ``gameroster.schemas.lineup``.

        Args:
            data: Loosely typed stored row

        Returns:
            PersistedLineupRecord instance
        """
        from ..schemas.lineup import parse_lineup_record
        return parse_lineup_record(data)
