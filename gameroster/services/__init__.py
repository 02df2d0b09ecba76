"""
Services package for the Game Roster application.

This package contains the lineup engine, serializer, intents, persistence
gateway and the session glue tying them together.
"""
from .lineup_errors import (
    LineupError, CapacityExceeded, InvalidCapacity, InvalidIndex,
    PlayerAlreadyAssigned, PlayerNotInZone, UnknownPlayer
)
from .lineup_engine import PartitionEngine
from .lineup_serializer import LineupSerializer
from .lineup_validator import LineupValidator, ValidationResult, validate_starter_slots
from .lineup_intents import (
    AssignmentIntent, AddIntent, RemoveIntent, PromoteIntent, DemoteIntent,
    ReorderIntent, SetCapacityIntent, ClearIntent, LineupIntentDispatcher,
    intent_from_dict
)
from .persistence_service import (
    PersistenceGateway, JsonFilePersistenceService, PersistenceError,
    LineupNotFoundError, DuplicatePlayerError, PlayerNotFoundError, validate_player_status
)
from .lineup_session import LineupEditingSession
from .service_factory import ServiceFactory

__all__ = [
    "LineupError", "CapacityExceeded", "InvalidCapacity", "InvalidIndex",
    "PlayerAlreadyAssigned", "PlayerNotInZone", "UnknownPlayer",
    "PartitionEngine", "LineupSerializer", "LineupValidator", "ValidationResult",
    "validate_starter_slots", "AssignmentIntent", "AddIntent", "RemoveIntent",
    "PromoteIntent", "DemoteIntent", "ReorderIntent", "SetCapacityIntent",
    "ClearIntent", "LineupIntentDispatcher", "intent_from_dict",
    "PersistenceGateway", "JsonFilePersistenceService", "PersistenceError",
    "LineupNotFoundError", "DuplicatePlayerError", "PlayerNotFoundError",
    "validate_player_status", "LineupEditingSession", "ServiceFactory"
]
