"""
Utilities package for the Game Roster application.

This package contains constants, configuration and small helpers used
throughout the application.
"""
from .time_utils import now_iso, parse_iso
from .log_setup import configure_logging
from .constants import (
    APP_TITLE, DEFAULT_STARTER_SLOTS, MIN_STARTER_SLOTS, MAX_STARTER_SLOTS,
    DEFAULT_PLAYER_STATUS, PLAYER_STATUSES, MAX_INTENT_HISTORY
)

__all__ = [
    "now_iso", "parse_iso", "configure_logging", "APP_TITLE",
    "DEFAULT_STARTER_SLOTS", "MIN_STARTER_SLOTS", "MAX_STARTER_SLOTS",
    "DEFAULT_PLAYER_STATUS", "PLAYER_STATUSES", "MAX_INTENT_HISTORY"
]
