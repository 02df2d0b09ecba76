"""
Models package for the Game Roster application.

This package contains the core data models used throughout the application.
"""
from .player import Player
from .roster import RosterPool
from .lineup import Zone, Lineup, SlotAssignment, PersistedLineupRecord

__all__ = [
    "Player", "RosterPool", "Zone", "Lineup", "SlotAssignment",
    "PersistedLineupRecord"
]
