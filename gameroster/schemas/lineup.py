"""
Schema for stored game roster rows.

The stored ``starters`` / ``substitutes`` columns are loosely typed JSON. This
module is the single place where that data is validated: each
``{player_id, slot_number}`` entry is checked on its own and malformed entries
are skipped, so one bad entry never prevents the rest of a lineup from being
restored.
"""
from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError, field_validator

from ..models.lineup import PersistedLineupRecord, SlotAssignment
from ..utils.constants import DEFAULT_STARTER_SLOTS, MAX_STARTER_SLOTS, MIN_STARTER_SLOTS


class SlotEntrySchema(BaseModel):
    """One stored slot entry: a non-empty string id and a positive integer slot."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    player_id: StrictStr
    slot_number: StrictInt

    @field_validator("player_id")
    @classmethod
    def _non_empty_id(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("player_id must not be empty")
        return v

    @field_validator("slot_number")
    @classmethod
    def _positive_slot(cls, v: int) -> int:
        if v < 1:
            raise ValueError("slot_number must be >= 1")
        return v

    def to_assignment(self) -> SlotAssignment:
        return SlotAssignment(player_id=self.player_id, slot_number=self.slot_number)


def parse_slot_entries(raw: Any) -> List[SlotAssignment]:
    """
    Parse a stored zone list, dropping malformed entries individually.

    Args:
        raw: Stored value; anything other than a list yields no entries

    Returns:
        Valid slot assignments in their stored (unsorted) order
    """
    if not isinstance(raw, list):
        return []
    entries = []
    for item in raw:
        try:
            entries.append(SlotEntrySchema.model_validate(item).to_assignment())
        except ValidationError:
            continue
    return entries


class LineupRecordSchema(BaseModel):
    """Stored game roster row with tolerant field handling."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    team_id: str = ""
    title: Optional[str] = None
    game_date: Optional[str] = None
    starter_slots: int = DEFAULT_STARTER_SLOTS
    starters: List[SlotAssignment] = []
    substitutes: List[SlotAssignment] = []
    created_at: Optional[str] = None
    created_by: Optional[str] = None

    @field_validator("id", "title", "game_date", "created_at", "created_by", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("team_id", mode="before")
    @classmethod
    def _team_text(cls, v: Any) -> str:
        return "" if v is None else str(v)

    @field_validator("starter_slots", mode="before")
    @classmethod
    def _capacity_or_default(cls, v: Any) -> int:
        # An unusable stored capacity must not block restoring the lineup
        if isinstance(v, bool) or not isinstance(v, int):
            return DEFAULT_STARTER_SLOTS
        if not MIN_STARTER_SLOTS <= v <= MAX_STARTER_SLOTS:
            return DEFAULT_STARTER_SLOTS
        return v

    @field_validator("starters", "substitutes", mode="before")
    @classmethod
    def _valid_entries(cls, v: Any) -> List[SlotAssignment]:
        return parse_slot_entries(v)

    def to_record(self) -> PersistedLineupRecord:
        return PersistedLineupRecord(
            lineup_id=self.id,
            team_id=self.team_id,
            title=self.title,
            game_date=self.game_date,
            starter_slots=self.starter_slots,
            starters=list(self.starters),
            substitutes=list(self.substitutes),
            created_at=self.created_at,
            created_by=self.created_by,
        )


def parse_lineup_record(data: Any) -> PersistedLineupRecord:
    """
    Validate a stored game roster row.

    Args:
        data: Stored row as loaded from JSON

    Returns:
        PersistedLineupRecord containing only well-formed slot entries

    Raises:
        ValueError: If ``data`` is not a mapping at all
    """
    if not isinstance(data, dict):
        raise ValueError(f"Game roster record must be an object, got {type(data).__name__}")
    return LineupRecordSchema.model_validate(data).to_record()
