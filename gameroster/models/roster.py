"""
Roster pool model for the Game Roster application.

A RosterPool is the snapshot of all players on a team, loaded once per
lineup editing session. It keeps the order in which the players were loaded
and never changes afterwards.
"""
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .player import Player


class RosterPool:
    """
    Ordered, read-only collection of a team's players keyed by player id.

    Duplicate ids keep their first occurrence; rows without an id are ignored.
    """

    def __init__(self, players: Iterable[Player] = ()):
        by_id: Dict[str, Player] = {}
        for player in players:
            if player.id and player.id not in by_id:
                by_id[player.id] = player
        self._players: Dict[str, Player] = by_id
        self._order: Tuple[str, ...] = tuple(by_id)

    @property
    def ids(self) -> Tuple[str, ...]:
        """Player ids in pool order."""
        return self._order

    def get(self, player_id: str) -> Optional[Player]:
        return self._players.get(player_id)

    def players(self, player_ids: Optional[Iterable[str]] = None) -> List[Player]:
        """
        Get Player objects in pool order, or in the order of ``player_ids``.

        Ids that are not in the pool are skipped.
        """
        if player_ids is None:
            return [self._players[pid] for pid in self._order]
        return [self._players[pid] for pid in player_ids if pid in self._players]

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players())

    def __len__(self) -> int:
        return len(self._order)

    def __repr__(self) -> str:
        return f"RosterPool({len(self)} players)"
