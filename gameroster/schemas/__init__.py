"""
Schemas package for the Game Roster application.

Pydantic models validating stored data at the deserialization boundary.
"""
from .lineup import SlotEntrySchema, LineupRecordSchema, parse_slot_entries, parse_lineup_record

__all__ = ["SlotEntrySchema", "LineupRecordSchema", "parse_slot_entries", "parse_lineup_record"]
