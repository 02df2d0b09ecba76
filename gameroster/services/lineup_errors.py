"""
Exceptions raised by the lineup engine.

Every rejected lineup operation raises one of these and leaves the lineup
unchanged.
"""
from typing import Optional

from ..models.lineup import Zone


class LineupError(Exception):
    """Base class for rejected lineup operations."""
    pass


class CapacityExceeded(LineupError):
    """Starting lineup is full; free a slot or raise the capacity."""

    def __init__(self, starter_slots: int, starter_count: int, player_id: Optional[str] = None):
        self.starter_slots = starter_slots
        self.starter_count = starter_count
        self.player_id = player_id
        super().__init__(
            f"Lineup full ({starter_slots} spots, {starter_count} starters). "
            "Adjust the starter slots or bench a starter."
        )


class InvalidCapacity(LineupError):
    """Starter capacity outside the allowed range."""

    def __init__(self, value: object, minimum: int, maximum: int):
        self.value = value
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(f"Starter slots must be a whole number from {minimum} to {maximum}, got {value!r}")


class InvalidIndex(LineupError):
    """Reorder index outside the zone."""

    def __init__(self, zone: Zone, index: int, size: int):
        self.zone = zone
        self.index = index
        self.size = size
        super().__init__(f"Index {index} is out of range for {zone.value} list of size {size}")


class PlayerAlreadyAssigned(LineupError):
    """Player is already in a zone and must be removed or transferred first."""

    def __init__(self, player_id: str, zone: Zone):
        self.player_id = player_id
        self.zone = zone
        super().__init__(f"Player '{player_id}' is already a {zone.value}")


class PlayerNotInZone(LineupError):
    """Promote/demote target is not in the expected zone."""

    def __init__(self, player_id: str, zone: Zone):
        self.player_id = player_id
        self.zone = zone
        super().__init__(f"Player '{player_id}' is not a {zone.value}")


class UnknownPlayer(LineupError):
    """Player id is not part of the team's roster pool."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player '{player_id}' is not on this team's roster")
