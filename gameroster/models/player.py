"""
Player model for the Game Roster application.

This module contains the Player dataclass which represents one row of a
team's roster as stored remotely. Players are read-only while a lineup is
being edited, so the dataclass is frozen.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ..utils.constants import DEFAULT_PLAYER_STATUS
from ..utils.time_utils import parse_iso


@dataclass(frozen=True)
class Player:
    """
    Represents a rostered player.

    Attributes:
        id: Unique player identifier (remote primary key)
        team_id: Identifier of the team the player belongs to
        name: Player's full name
        jersey_number: Jersey label (free text, e.g. "07" or "10A")
        nickname: Optional nickname shown next to the name
        position: Optional position label (e.g. "PG", "ST")
        status: Attendance status ("present", "absent", "late", "excused")
        user_id: Linked app account, None when not linked
        created_at: When the row was created remotely
    """
    id: str
    team_id: str
    name: str
    jersey_number: Optional[str] = None
    nickname: Optional[str] = None
    position: Optional[str] = None
    status: str = DEFAULT_PLAYER_STATUS
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def display_name(self) -> str:
        """Name with the nickname in parentheses when one is set."""
        return f"{self.name} ({self.nickname})" if self.nickname else self.name

    @property
    def display_jersey(self) -> str:
        return self.jersey_number or "-"

    @property
    def display_position(self) -> str:
        return self.position or "-"

    @property
    def has_linked_account(self) -> bool:
        """True when this player row is linked to an app account."""
        return bool(self.user_id)

    @property
    def status_label(self) -> str:
        if not self.status:
            return "Unknown"
        return self.status[0].upper() + self.status[1:]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert player to dictionary for JSON serialization.

        Returns:
            Dictionary shaped like the remote players row
        """
        return {
            "id": self.id,
            "team_id": self.team_id,
            "name": self.name,
            "jersey_number": self.jersey_number,
            "nickname": self.nickname,
            "position": self.position,
            "status": self.status,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Player':
        """
        Create player from a stored row.

        Missing text fields default to empty strings; jersey numbers stored as
        integers are converted to text. A missing or non-text status becomes
        the default status.

        Args:
            data: Dictionary representation of player

        Returns:
            Player instance
        """
        jersey = data.get("jersey_number")
        status = data.get("status")
        if not isinstance(status, str) or not status:
            status = DEFAULT_PLAYER_STATUS
        return cls(
            id=str(data.get("id") or ""),
            team_id=str(data.get("team_id") or ""),
            name=str(data.get("name") or ""),
            jersey_number=str(jersey) if jersey is not None else None,
            nickname=data.get("nickname"),
            position=data.get("position"),
            status=status,
            user_id=data.get("user_id"),
            created_at=parse_iso(data.get("created_at")),
        )
