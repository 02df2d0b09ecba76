"""
Game Roster

Starting lineup and substitutes bench management for team coaches.

This package provides the lineup partition engine, the stored-record
serializer, a JSON-file persistence gateway and a Flask web API for
building a game's lineup from the team roster.
"""
from .models import Player, RosterPool, Zone, Lineup, SlotAssignment, PersistedLineupRecord
from .services import (
    PartitionEngine, LineupSerializer, LineupEditingSession, LineupError,
    CapacityExceeded, InvalidCapacity, InvalidIndex
)
from .utils import APP_TITLE

__version__ = "1.0.0"

__all__ = [
    "Player", "RosterPool", "Zone", "Lineup", "SlotAssignment", "PersistedLineupRecord",
    "PartitionEngine", "LineupSerializer", "LineupEditingSession", "LineupError",
    "CapacityExceeded", "InvalidCapacity", "InvalidIndex", "APP_TITLE"
]
