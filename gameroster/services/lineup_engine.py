"""
Partition engine for game lineups.

This module owns the Starter / Substitute partition of a team's roster pool
for one lineup being edited. The named operations below are the only way to
change it. Each operation checks everything it needs before touching state,
so it either fully succeeds or raises a ``LineupError`` with the lineup left
exactly as it was.

The engine is synchronous and does no I/O; loading and saving happen around
it (see ``lineup_serializer`` and ``lineup_session``).
"""
from typing import List, Optional, Tuple

from ..models import Lineup, Player, RosterPool, Zone
from ..utils.constants import DEFAULT_STARTER_SLOTS
from .lineup_errors import (
    CapacityExceeded, InvalidCapacity, InvalidIndex, LineupError,
    PlayerAlreadyAssigned, PlayerNotInZone, UnknownPlayer
)
from .lineup_validator import ensure_starter_capacity, has_open_starter_slot, validate_starter_slots

__all__ = [
    "PartitionEngine", "LineupError", "CapacityExceeded", "InvalidCapacity",
    "InvalidIndex", "PlayerAlreadyAssigned", "PlayerNotInZone", "UnknownPlayer"
]


class PartitionEngine:
    """
    Starter / Substitute assignment for one lineup.

    Player state machine relative to the lineup::

        Available <-> Starter        add_to_starters / remove_from_starters
        Available <-> Substitute     add_to_substitutes / remove_from_substitutes
        Substitute <-> Starter       promote_to_starter / demote_to_substitute

    One instance belongs to one editing session and is not thread-safe.
    """

    def __init__(self, roster_pool: RosterPool, lineup: Optional[Lineup] = None):
        """
        Initialize the engine.

        Args:
            roster_pool: The team's players, loaded once per session
            lineup: Starting state; an empty lineup with default capacity if None

        Raises:
            InvalidCapacity: If the lineup capacity is out of range
            ValueError: If the lineup lists a player twice or a player not in the pool
        """
        if lineup is None:
            lineup = Lineup.empty(DEFAULT_STARTER_SLOTS)

        self._pool = roster_pool
        self._starter_slots = validate_starter_slots(lineup.starter_slots)
        self._check_members(lineup)
        self._starters: List[str] = list(lineup.starters)
        self._substitutes: List[str] = list(lineup.substitutes)

    def _check_members(self, lineup: Lineup) -> None:
        assigned = lineup.assigned_ids
        if len(set(assigned)) != len(assigned):
            raise ValueError("A player can appear only once across starters and substitutes")
        unknown = [pid for pid in assigned if pid not in self._pool]
        if unknown:
            raise ValueError(f"Players not in roster pool: {', '.join(unknown)}")

    # ==================== Queries ==================== #

    @property
    def roster_pool(self) -> RosterPool:
        return self._pool

    @property
    def lineup(self) -> Lineup:
        """Immutable snapshot of the current state."""
        return Lineup(
            starter_slots=self._starter_slots,
            starters=tuple(self._starters),
            substitutes=tuple(self._substitutes),
        )

    @property
    def starters(self) -> Tuple[str, ...]:
        return tuple(self._starters)

    @property
    def substitutes(self) -> Tuple[str, ...]:
        return tuple(self._substitutes)

    @property
    def starter_slots(self) -> int:
        return self._starter_slots

    def zone_of(self, player_id: str) -> Zone:
        if player_id in self._starters:
            return Zone.STARTER
        if player_id in self._substitutes:
            return Zone.SUBSTITUTE
        return Zone.AVAILABLE

    def is_full(self) -> bool:
        """True when no further starter can be added."""
        return not has_open_starter_slot(len(self._starters), self._starter_slots)

    def open_slots(self) -> int:
        return max(0, self._starter_slots - len(self._starters))

    def available_players(self) -> List[str]:
        """Roster pool ids that are neither starters nor substitutes, in pool order."""
        assigned = set(self._starters) | set(self._substitutes)
        return [pid for pid in self._pool.ids if pid not in assigned]

    def available(self) -> List[Player]:
        return self._pool.players(self.available_players())

    # ==================== Membership operations ==================== #

    def _require_available(self, player_id: str) -> None:
        if player_id not in self._pool:
            raise UnknownPlayer(player_id)
        zone = self.zone_of(player_id)
        if zone is not Zone.AVAILABLE:
            raise PlayerAlreadyAssigned(player_id, zone)

    def add_to_starters(self, player_id: str) -> None:
        """
        Append an available player to the end of the starting lineup.

        Raises:
            UnknownPlayer: If the player is not in the roster pool
            PlayerAlreadyAssigned: If the player is already a starter or substitute
            CapacityExceeded: If the starting lineup is full
        """
        self._require_available(player_id)
        ensure_starter_capacity(len(self._starters), self._starter_slots, player_id)
        self._starters.append(player_id)

    def add_to_substitutes(self, player_id: str) -> None:
        """
        Append an available player to the end of the bench.

        Raises:
            UnknownPlayer: If the player is not in the roster pool
            PlayerAlreadyAssigned: If the player is already a starter or substitute
        """
        self._require_available(player_id)
        self._substitutes.append(player_id)

    def remove_from_starters(self, player_id: str) -> bool:
        """Return a starter to the available list. Returns False if it was not a starter."""
        if player_id not in self._starters:
            return False
        self._starters.remove(player_id)
        return True

    def remove_from_substitutes(self, player_id: str) -> bool:
        """Return a substitute to the available list. Returns False if it was not a substitute."""
        if player_id not in self._substitutes:
            return False
        self._substitutes.remove(player_id)
        return True

    def promote_to_starter(self, player_id: str) -> None:
        """
        Move a substitute to the end of the starting lineup.

        Raises:
            PlayerNotInZone: If the player is not a substitute
            CapacityExceeded: If the starting lineup is full; the player stays on the bench
        """
        if player_id not in self._substitutes:
            raise PlayerNotInZone(player_id, Zone.SUBSTITUTE)
        ensure_starter_capacity(len(self._starters), self._starter_slots, player_id)
        self._substitutes.remove(player_id)
        self._starters.append(player_id)

    def demote_to_substitute(self, player_id: str) -> None:
        """
        Move a starter to the end of the bench. The bench has no capacity limit.

        Raises:
            PlayerNotInZone: If the player is not a starter
        """
        if player_id not in self._starters:
            raise PlayerNotInZone(player_id, Zone.STARTER)
        self._starters.remove(player_id)
        self._substitutes.append(player_id)

    def reorder(self, zone: Zone, from_index: int, to_index: int) -> None:
        """
        Move one entry within a zone so that it ends up at ``to_index``.

        Args:
            zone: Zone.STARTER or Zone.SUBSTITUTE
            from_index: Current position of the entry (0-based)
            to_index: Target position of the entry (0-based)

        Raises:
            ValueError: If zone is Zone.AVAILABLE
            InvalidIndex: If either index is outside [0, zone size)
        """
        if zone is Zone.STARTER:
            members = self._starters
        elif zone is Zone.SUBSTITUTE:
            members = self._substitutes
        else:
            raise ValueError("Available players have no stored order")

        size = len(members)
        for index in (from_index, to_index):
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
                raise InvalidIndex(zone, index, size)

        player_id = members.pop(from_index)
        members.insert(to_index, player_id)

    # ==================== Capacity ==================== #

    def set_starter_capacity(self, starter_slots: int) -> None:
        """
        Replace the starter capacity.

        Lowering it below the current number of starters keeps every starter;
        adding starters stays blocked until enough have been removed.

        Raises:
            InvalidCapacity: If the value is outside 1..50
        """
        self._starter_slots = validate_starter_slots(starter_slots)

    def clear(self) -> None:
        """Return every starter and substitute to the available list."""
        self._starters.clear()
        self._substitutes.clear()

    def __repr__(self) -> str:
        return (
            f"PartitionEngine(starters={len(self._starters)}/{self._starter_slots}, "
            f"substitutes={len(self._substitutes)}, available={len(self.available_players())})"
        )
