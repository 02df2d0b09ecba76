"""
Persistence gateway for the Game Roster application.

This module defines the storage boundary used by lineup editing sessions and
a JSON-file implementation of it. Layout of the data directory::

    <data_dir>/players/<team_id>.json          list of player rows
    <data_dir>/game_rosters/<lineup_id>.json   one game roster row
"""
import json
import logging
import os
import re
import tempfile
import uuid
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ..models import PersistedLineupRecord, Player
from ..utils.constants import DEFAULT_STARTER_SLOTS, GAME_ROSTERS_DIR_NAME, PLAYER_STATUSES, PLAYERS_DIR_NAME
from ..utils.time_utils import now_iso
from .lineup_validator import validate_starter_slots

logger = logging.getLogger(__name__)

_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]+$")



def validate_player_status(status: Any) -> str:
    """
    Validate an attendance status.

    Raises:
        ValueError: If status is not one of PLAYER_STATUSES
    """
    if not isinstance(status, str) or status.strip().lower() not in PLAYER_STATUSES:
        raise ValueError(f"Invalid status {status!r}; use one of: {', '.join(PLAYER_STATUSES)}")
    return status.strip().lower()


class PersistenceError(Exception):
    """Storage could not be read or written."""
    pass


class DuplicatePlayerError(PersistenceError):
    """A player with the same id is already stored for the team."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player id already exists: {player_id}")


class PlayerNotFoundError(PersistenceError):
    """No stored player with the given id on the team."""

    def __init__(self, team_id: str, player_id: str):
        self.team_id = team_id
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found on team {team_id}")


class LineupNotFoundError(PersistenceError):
    """No game roster record exists for the given id."""

    def __init__(self, lineup_id: str):
        self.lineup_id = lineup_id
        super().__init__(f"Game roster not found: {lineup_id}")


class PersistenceGateway(ABC):
    """Storage boundary for roster pools and game roster records."""

    @abstractmethod
    def fetch_roster_pool(self, team_id: str) -> List[Player]:
        """Get all players of a team ordered by name."""
        pass

    @abstractmethod
    def save_players(self, team_id: str, players: List[Player]) -> None:
        """Replace the stored player list of a team."""
        pass

    @abstractmethod
    def add_player(self, player: Player) -> Player:
        """Store one new player and return it with its id."""
        pass

    @abstractmethod
    def update_player_status(self, team_id: str, player_id: str, status: str) -> Player:
        """
        Set the attendance status of one player.

        Raises:
            ValueError: If status is not a known attendance status
            PlayerNotFoundError: If the player is not on the team
        """
        pass

    @abstractmethod
    def bulk_update_status(self, team_id: str, status: str) -> int:
        """Set the attendance status of every player on a team. Returns the number updated."""
        pass

    @abstractmethod
    def delete_player(self, team_id: str, player_id: str) -> bool:
        """Delete a player from a team. Returns False if it did not exist."""
        pass

    @abstractmethod
    def fetch_persisted_lineup(self, lineup_id: str) -> Optional[Dict[str, Any]]:
        """Get the stored game roster row, or None if none exists."""
        pass

    @abstractmethod
    def save_persisted_lineup(self, lineup_id: str, record: PersistedLineupRecord) -> None:
        """
        Overwrite the stored starters, substitutes and starter slots of an
        existing game roster. Never creates a new id.

        Raises:
            LineupNotFoundError: If lineup_id does not exist
            PersistenceError: If storage fails
        """
        pass

    @abstractmethod
    def create_lineup_record(self, team_id: str, title: str, game_date: Optional[str] = None,
                             starter_slots: int = DEFAULT_STARTER_SLOTS,
                             created_by: Optional[str] = None) -> str:
        """Create an empty game roster and return its new id."""
        pass

    @abstractmethod
    def list_lineup_records(self, team_id: str) -> List[Dict[str, Any]]:
        """Get a team's game rosters, newest first."""
        pass

    @abstractmethod
    def delete_lineup_record(self, lineup_id: str) -> bool:
        """Delete a game roster. Returns False if it did not exist."""
        pass


class JsonFilePersistenceService(PersistenceGateway):
    """
    Persistence gateway storing JSON files under a data directory.

    This service handles file layout, atomic writes and conversion of
    storage failures into PersistenceError.
    """

    def __init__(self, data_dir: str):
        """
        Initialize the service.

        Args:
            data_dir: Root directory of the data store; created on first write
        """
        self.data_dir = data_dir

    # ==================== File helpers ==================== #

    @staticmethod
    def _check_id(value: str, kind: str) -> str:
        if not isinstance(value, str) or not _SAFE_ID.match(value):
            raise ValueError(f"Invalid {kind}: {value!r}")
        return value

    def _players_path(self, team_id: str) -> str:
        return os.path.join(self.data_dir, PLAYERS_DIR_NAME, f"{self._check_id(team_id, 'team id')}.json")

    def _roster_path(self, lineup_id: str) -> str:
        return os.path.join(self.data_dir, GAME_ROSTERS_DIR_NAME, f"{self._check_id(lineup_id, 'lineup id')}.json")

    @staticmethod
    def _read_json(file_path: str) -> Any:
        """
        Read a JSON file.

        Returns:
            Parsed data, or None if the file does not exist

        Raises:
            PersistenceError: If the file cannot be read or parsed
        """
        if not os.path.exists(file_path):
            return None
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("Failed to read %s: %s", file_path, e)
            raise PersistenceError(f"Could not read {os.path.basename(file_path)}: {e}") from e

    @staticmethod
    def _write_json(file_path: str, data: Any) -> None:
        """
        Write a JSON file atomically.

        Raises:
            PersistenceError: If the file cannot be written
        """
        directory = os.path.dirname(file_path)
        try:
            if directory and not os.path.exists(directory):
                os.makedirs(directory)
            fd, temp_path = tempfile.mkstemp(dir=directory or ".", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(temp_path, file_path)
            except BaseException:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise
        except OSError as e:
            logger.error("Failed to write %s: %s", file_path, e)
            raise PersistenceError(f"Could not write {os.path.basename(file_path)}: {e}") from e

    # ==================== Players ==================== #

    def _load_player_rows(self, team_id: str) -> List[Any]:
        rows = self._read_json(self._players_path(team_id)) or []
        if not isinstance(rows, list):
            raise PersistenceError(f"Player data for team {team_id} is not a list")
        return rows

    def fetch_roster_pool(self, team_id: str) -> List[Player]:
        rows = self._load_player_rows(team_id)

        players = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning("Skipping malformed player row for team %s", team_id)
                continue
            players.append(Player.from_dict(row))

        players.sort(key=lambda p: p.name.lower())
        logger.debug("Loaded %d players for team %s", len(players), team_id)
        return players

    def save_players(self, team_id: str, players: List[Player]) -> None:
        """Replace the stored player list of a team."""
        self._write_json(self._players_path(team_id), [p.to_dict() for p in players])

    def add_player(self, player: Player) -> Player:
        """
        Append a player to its team's stored roster.

        Returns:
            The stored player, with a new id when it had none
        """
        if not player.id:
            player = replace(player, id=uuid.uuid4().hex)
        rows = self._load_player_rows(player.team_id)
        if any(isinstance(row, dict) and row.get("id") == player.id for row in rows):
            raise DuplicatePlayerError(player.id)
        rows.append(player.to_dict())
        self._write_json(self._players_path(player.team_id), rows)
        logger.info("Added player %s to team %s", player.id, player.team_id)
        return player

    def update_player_status(self, team_id: str, player_id: str, status: str) -> Player:
        status = validate_player_status(status)
        rows = self._load_player_rows(team_id)
        for row in rows:
            if isinstance(row, dict) and row.get("id") == player_id:
                row["status"] = status
                self._write_json(self._players_path(team_id), rows)
                logger.info("Player %s on team %s marked %s", player_id, team_id, status)
                return Player.from_dict(row)
        raise PlayerNotFoundError(team_id, player_id)

    def bulk_update_status(self, team_id: str, status: str) -> int:
        status = validate_player_status(status)
        rows = self._load_player_rows(team_id)
        updated = 0
        for row in rows:
            if isinstance(row, dict):
                row["status"] = status
                updated += 1
        if updated:
            self._write_json(self._players_path(team_id), rows)
        logger.info("Marked %d players on team %s %s", updated, team_id, status)
        return updated

    def delete_player(self, team_id: str, player_id: str) -> bool:
        rows = self._load_player_rows(team_id)
        kept = [row for row in rows if not (isinstance(row, dict) and row.get("id") == player_id)]
        if len(kept) == len(rows):
            return False
        self._write_json(self._players_path(team_id), kept)
        logger.info("Deleted player %s from team %s", player_id, team_id)
        return True

    # ==================== Game rosters ==================== #

    def fetch_persisted_lineup(self, lineup_id: str) -> Optional[Dict[str, Any]]:
        data = self._read_json(self._roster_path(lineup_id))
        if data is not None and not isinstance(data, dict):
            raise PersistenceError(f"Game roster {lineup_id} is not an object")
        return data

    def save_persisted_lineup(self, lineup_id: str, record: PersistedLineupRecord) -> None:
        path = self._roster_path(lineup_id)
        stored = self._read_json(path)
        if stored is None:
            raise LineupNotFoundError(lineup_id)
        if not isinstance(stored, dict):
            raise PersistenceError(f"Game roster {lineup_id} is not an object")

        payload = record.to_dict()
        stored.update({
            "starter_slots": payload["starter_slots"],
            "starters": payload["starters"],
            "substitutes": payload["substitutes"],
            "updated_at": now_iso(),
        })
        self._write_json(path, stored)
        logger.info(
            "Saved game roster %s (%d starters, %d substitutes)",
            lineup_id, len(record.starters), len(record.substitutes)
        )

    def create_lineup_record(self, team_id: str, title: str, game_date: Optional[str] = None,
                             starter_slots: int = DEFAULT_STARTER_SLOTS,
                             created_by: Optional[str] = None) -> str:
        self._check_id(team_id, "team id")
        starter_slots = validate_starter_slots(starter_slots)
        lineup_id = uuid.uuid4().hex
        record = PersistedLineupRecord(
            lineup_id=lineup_id,
            team_id=team_id,
            title=title,
            game_date=game_date,
            starter_slots=starter_slots,
            created_at=now_iso(),
            created_by=created_by,
        )
        self._write_json(self._roster_path(lineup_id), record.to_dict())
        logger.info("Created game roster %s for team %s", lineup_id, team_id)
        return lineup_id

    def list_lineup_records(self, team_id: str) -> List[Dict[str, Any]]:
        self._check_id(team_id, "team id")
        directory = os.path.join(self.data_dir, GAME_ROSTERS_DIR_NAME)
        if not os.path.exists(directory):
            return []

        try:
            filenames = os.listdir(directory)
        except OSError as e:
            raise PersistenceError(f"Could not list game rosters: {e}") from e

        rows = []
        for filename in filenames:
            if not filename.endswith(".json"):
                continue
            data = self._read_json(os.path.join(directory, filename))
            if isinstance(data, dict) and data.get("team_id") == team_id:
                rows.append(data)

        rows.sort(key=lambda row: row.get("created_at") or "", reverse=True)
        return rows

    def delete_lineup_record(self, lineup_id: str) -> bool:
        path = self._roster_path(lineup_id)
        if not os.path.exists(path):
            return False
        try:
            os.remove(path)
        except OSError as e:
            raise PersistenceError(f"Could not delete game roster {lineup_id}: {e}") from e
        logger.info("Deleted game roster %s", lineup_id)
        return True
