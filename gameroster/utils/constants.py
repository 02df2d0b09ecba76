"""
Constants for the Game Roster lineup application.

This module contains configuration constants used throughout the application.
"""

# Application metadata
APP_TITLE = "Game Roster"

# Starting lineup capacity (starter slots per game roster)
DEFAULT_STARTER_SLOTS = 5
MIN_STARTER_SLOTS = 1
MAX_STARTER_SLOTS = 50

# Attendance statuses carried on player rows
DEFAULT_PLAYER_STATUS = "present"
PLAYER_STATUSES = ["present", "absent", "late", "excused"]

# Web server defaults (bind to localhost only)
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 7122

# JSON data store layout
DEFAULT_DATA_DIR = "data"
PLAYERS_DIR_NAME = "players"
GAME_ROSTERS_DIR_NAME = "game_rosters"

# Number of dispatched intents remembered per editing session
MAX_INTENT_HISTORY = 50
