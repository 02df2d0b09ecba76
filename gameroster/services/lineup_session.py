"""
Lineup editing session.

Glue between the persistence gateway and the partition engine: a session
loads the roster pool once, restores the stored lineup if there is one,
applies intents, and saves on request. A failed save leaves the in-memory
lineup untouched so the coach can retry.
"""
import logging
from typing import Any, Dict, List, Optional

from ..models import Lineup, PersistedLineupRecord, Player, RosterPool
from ..utils.constants import DEFAULT_STARTER_SLOTS
from .lineup_engine import PartitionEngine
from .lineup_intents import AssignmentIntent, LineupIntentDispatcher
from .lineup_serializer import LineupSerializer
from .lineup_validator import LineupValidator, ValidationResult, validate_starter_slots
from .persistence_service import PersistenceGateway

logger = logging.getLogger(__name__)


class LineupEditingSession:
    """
    One coach editing one game lineup.

    Attributes:
        gateway: Storage boundary used for loading and saving
        team_id: Team whose roster is being assigned
        record: Stored record metadata (id, title, date); lineup_id is None until first save
        engine: Partition engine holding the current lineup
        dispatcher: Intent dispatcher bound to the engine
        dirty: True when there are changes not yet saved
    """

    def __init__(self, gateway: PersistenceGateway, roster_pool: RosterPool,
                 record: PersistedLineupRecord, lineup: Lineup):
        self.gateway = gateway
        self.team_id = record.team_id
        self.record = record
        self.engine = PartitionEngine(roster_pool, lineup)
        self.dispatcher = LineupIntentDispatcher(self.engine)
        self.validator = LineupValidator(roster_pool)
        self.dirty = False
        self._saved_lineup = lineup

    @classmethod
    def open(cls, gateway: PersistenceGateway, team_id: str, lineup_id: Optional[str] = None,
             title: Optional[str] = None, game_date: Optional[str] = None,
             starter_slots: int = DEFAULT_STARTER_SLOTS) -> 'LineupEditingSession':
        """
        Load a team's roster and, when ``lineup_id`` has a stored record, its lineup.

        Without a stored record the session starts from an empty lineup using
        ``title``, ``game_date`` and ``starter_slots``.

        Raises:
            PersistenceError: If the roster or the record cannot be loaded
            InvalidCapacity: If starter_slots is out of range
        """
        roster_pool = RosterPool(gateway.fetch_roster_pool(team_id))

        stored = gateway.fetch_persisted_lineup(lineup_id) if lineup_id else None
        if stored is not None:
            record = PersistedLineupRecord.from_dict(stored)
            record.lineup_id = record.lineup_id or lineup_id
            record.team_id = record.team_id or team_id
            lineup = LineupSerializer.restore(record, roster_pool)
            logger.info(
                "Restored game roster %s: %d starters, %d substitutes from %d players",
                lineup_id, len(lineup.starters), len(lineup.substitutes), len(roster_pool)
            )
        else:
            if lineup_id:
                logger.info("No stored game roster %s, starting empty", lineup_id)
            record = PersistedLineupRecord(
                lineup_id=None,
                team_id=team_id,
                title=title,
                game_date=game_date,
                starter_slots=validate_starter_slots(starter_slots),
            )
            lineup = Lineup.empty(record.starter_slots)

        return cls(gateway, roster_pool, record, lineup)

    @property
    def lineup_id(self) -> Optional[str]:
        return self.record.lineup_id

    @property
    def lineup(self) -> Lineup:
        return self.engine.lineup

    def dispatch(self, intent: AssignmentIntent) -> Lineup:
        """
        Apply an intent and return the resulting lineup.

        Raises:
            LineupError: If the engine rejects the intent (lineup unchanged)
        """
        self.dispatcher.dispatch(intent)
        self.dirty = self.engine.lineup != self._saved_lineup
        return self.engine.lineup

    def export(self) -> PersistedLineupRecord:
        return LineupSerializer.export(self.engine.lineup, self.record)

    def save(self) -> str:
        """
        Save the current lineup, creating the stored record first if needed.

        Returns:
            The lineup id the lineup was saved under

        Raises:
            PersistenceError: If storage fails; the in-memory lineup is kept as is
        """
        record = self.export()
        lineup_id = self.record.lineup_id
        if lineup_id is None:
            lineup_id = self.gateway.create_lineup_record(
                self.team_id,
                self.record.title or "",
                game_date=self.record.game_date,
                starter_slots=record.starter_slots,
            )
            # Keep the id even if the save below fails so a retry does not create a second record
            self.record.lineup_id = lineup_id
            record.lineup_id = lineup_id

        self.gateway.save_persisted_lineup(lineup_id, record)
        self.record.starter_slots = record.starter_slots
        self._saved_lineup = self.engine.lineup
        self.dirty = False
        return lineup_id

    def validate(self) -> ValidationResult:
        return self.validator.validate(self.engine.lineup)

    @staticmethod
    def _player_summary(player: Player, slot_number: Optional[int] = None) -> Dict[str, Any]:
        data = {
            "id": player.id,
            "name": player.name,
            "display_name": player.display_name,
            "jersey": player.display_jersey,
            "position": player.display_position,
            "status": player.status,
        }
        if slot_number is not None:
            data["slot_number"] = slot_number
        return data

    def _zone_summary(self, player_ids) -> List[Dict[str, Any]]:
        pool = self.engine.roster_pool
        return [
            self._player_summary(pool.get(player_id), slot)
            for slot, player_id in enumerate(player_ids, start=1)
        ]

    def summary(self) -> Dict[str, Any]:
        """Get the session state for presentation."""
        lineup = self.engine.lineup
        return {
            "lineup_id": self.record.lineup_id,
            "team_id": self.team_id,
            "title": self.record.title,
            "game_date": self.record.game_date,
            "starter_slots": lineup.starter_slots,
            "open_slots": self.engine.open_slots(),
            "is_full": self.engine.is_full(),
            "starters": self._zone_summary(lineup.starters),
            "substitutes": self._zone_summary(lineup.substitutes),
            "available": [self._player_summary(p) for p in self.engine.available()],
            "history": self.dispatcher.get_history(),
            "dirty": self.dirty,
        }
