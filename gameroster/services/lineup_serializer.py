"""
Conversion between lineups and stored game roster records.

Order inside a zone is stored only through 1-based slot numbers; list
position in the stored record means nothing. Restoring is tolerant of roster
changes since the last save: players no longer on the team are dropped and
new players simply show up as available.
"""
from typing import Any, Dict, List, Optional, Set

from ..models import Lineup, PersistedLineupRecord, RosterPool, SlotAssignment
from ..schemas.lineup import parse_lineup_record


class LineupSerializer:
    """Stateless export/restore of lineups."""

    @staticmethod
    def to_slot_assignments(player_ids) -> List[SlotAssignment]:
        """
        Number a zone's ids 1..N in their current order.

        Args:
            player_ids: Ordered ids of one zone

        Returns:
            One SlotAssignment per id with slot_number = position + 1
        """
        return [
            SlotAssignment(player_id=player_id, slot_number=index)
            for index, player_id in enumerate(player_ids, start=1)
        ]

    @staticmethod
    def export(lineup: Lineup, template: Optional[PersistedLineupRecord] = None) -> PersistedLineupRecord:
        """
        Build the stored record for a lineup.

        Args:
            lineup: Lineup snapshot to export
            template: Existing record whose id and metadata are carried over

        Returns:
            New PersistedLineupRecord; the template is not modified
        """
        template = template or PersistedLineupRecord()
        return PersistedLineupRecord(
            lineup_id=template.lineup_id,
            team_id=template.team_id,
            title=template.title,
            game_date=template.game_date,
            starter_slots=lineup.starter_slots,
            starters=LineupSerializer.to_slot_assignments(lineup.starters),
            substitutes=LineupSerializer.to_slot_assignments(lineup.substitutes),
            created_at=template.created_at,
            created_by=template.created_by,
        )

    @staticmethod
    def ordered_ids(pairs: List[SlotAssignment]) -> List[str]:
        """Ids sorted by slot number; equal slot numbers keep their stored order."""
        return [pair.player_id for pair in sorted(pairs, key=lambda pair: pair.slot_number)]

    @staticmethod
    def restore(record: PersistedLineupRecord, roster_pool: RosterPool) -> Lineup:
        """
        Rebuild a lineup from a stored record.

        Starters are placed before substitutes. An id is kept only if it is in
        the roster pool and has not been placed already, so an id stored in
        both zones ends up a starter, and a repeated id keeps its first slot.
        Stored starters beyond the capacity are all kept.

        Args:
            record: Stored record (already schema-validated)
            roster_pool: Current roster of the team

        Returns:
            Restored Lineup
        """
        placed: Set[str] = set()

        def _place(pairs: List[SlotAssignment]) -> List[str]:
            kept = []
            for player_id in LineupSerializer.ordered_ids(pairs):
                if player_id in roster_pool and player_id not in placed:
                    placed.add(player_id)
                    kept.append(player_id)
            return kept

        starters = _place(record.starters)
        substitutes = _place(record.substitutes)
        return Lineup(starter_slots=record.starter_slots, starters=starters, substitutes=substitutes)

    @staticmethod
    def restore_from_dict(data: Dict[str, Any], roster_pool: RosterPool) -> Lineup:
        """
        Rebuild a lineup straight from a stored row.

        Raises:
            ValueError: If data is not a mapping
        """
        return LineupSerializer.restore(parse_lineup_record(data), roster_pool)
