"""
Web application module for the Game Roster application.

This module contains the Flask server exposing JSON endpoints for building a
game's starting lineup and substitutes bench. Requests are translated into
assignment intents and dispatched to the editing session of the lineup.
"""
import logging
from typing import Dict, Optional

from flask import Flask, jsonify, request

from ..models import Player
from ..services import (
    CapacityExceeded, DuplicatePlayerError, LineupEditingSession, LineupError, LineupNotFoundError,
    PersistenceError, PlayerNotFoundError, ServiceFactory, intent_from_dict, validate_player_status
)
from ..utils.config import AppSettings, get_settings
from ..utils.constants import APP_TITLE, PLAYER_STATUSES
from ..utils.log_setup import configure_logging

logger = logging.getLogger(__name__)


class WebAppState:
    """
    State holder for the web application.

    Keeps one editing session per open lineup id. Sessions live in process
    memory and assume a single editor per lineup.
    """

    def __init__(self, service_factory: Optional[ServiceFactory] = None):
        self.service_factory = service_factory or ServiceFactory()
        self.sessions: Dict[str, LineupEditingSession] = {}

    @property
    def gateway(self):
        return self.service_factory.get_gateway()

    def get_session(self, lineup_id: str) -> Optional[LineupEditingSession]:
        return self.sessions.get(lineup_id)

    def open_session(self, team_id: str, lineup_id: str) -> LineupEditingSession:
        session = self.service_factory.open_session(team_id, lineup_id=lineup_id)
        self.sessions[lineup_id] = session
        return session

    def close_session(self, lineup_id: str) -> None:
        self.sessions.pop(lineup_id, None)


def _player_dict(player: Player) -> dict:
    data = player.to_dict()
    data["display_name"] = player.display_name
    data["display_jersey"] = player.display_jersey
    data["display_position"] = player.display_position
    data["status_label"] = player.status_label
    return data


def _capacity_error_response(error: CapacityExceeded):
    return jsonify({
        "success": False,
        "error": str(error),
        "error_type": "capacity_exceeded",
        "starter_slots": error.starter_slots,
        "starter_count": error.starter_count,
        "suggestions": [
            "Bench or remove a starter to free a slot",
            "Raise the number of starter slots",
        ]
    }), 409


def _persistence_error_response(error: PersistenceError):
    return jsonify({
        "success": False,
        "error": f"Unable to save lineup: {error}",
        "error_type": "persistence_error",
        "suggestions": [
            "Your changes are still here; try saving again",
            "Check your connection or storage and retry",
        ]
    }), 503


def _invalid_status_response(status: object):
    return jsonify({
        "success": False,
        "error": f"Invalid status '{status}'",
        "suggestions": [f"Use one of: {', '.join(PLAYER_STATUSES)}"]
    }), 400


def _session_not_found(lineup_id: str):
    return jsonify({
        "success": False,
        "error": f"Lineup {lineup_id} is not open. Open it first.",
    }), 404


def create_app(state: Optional[WebAppState] = None) -> Flask:
    """
    Create and configure the Flask application with API endpoints.

    Args:
        state: Application state; a new one using environment settings if None

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app_state = state or WebAppState()
    app.extensions["gameroster"] = app_state

    # ==================== Roster Endpoints ==================== #

    @app.route("/api/teams/<team_id>/players", methods=["GET"])
    def get_players(team_id: str):
        """Get the full roster of a team ordered by name."""
        try:
            players = app_state.gateway.fetch_roster_pool(team_id)
            return jsonify({"success": True, "players": [_player_dict(p) for p in players]})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            logger.error("Failed to load players for team %s: %s", team_id, e)
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/teams/<team_id>/players", methods=["POST"])
    def add_player(team_id: str):
        """Add a player to a team's roster."""
        try:
            data = request.get_json(silent=True) or {}
            name = str(data.get("name", "")).strip()
            if not name:
                return jsonify({"success": False, "error": "Player name is required"}), 400

            player = Player.from_dict({**data, "team_id": team_id, "name": name})
            if player.status not in PLAYER_STATUSES:
                return _invalid_status_response(player.status)
            player = app_state.gateway.add_player(player)
            return jsonify({"success": True, "player": _player_dict(player)}), 201
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except DuplicatePlayerError as e:
            return jsonify({"success": False, "error": str(e)}), 409
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/teams/<team_id>/players/<player_id>/status", methods=["PATCH"])
    def update_player_status(team_id: str, player_id: str):
        """Set one player's attendance status."""
        data = request.get_json(silent=True) or {}
        try:
            status = validate_player_status(data.get("status"))
        except ValueError:
            return _invalid_status_response(data.get("status"))

        try:
            player = app_state.gateway.update_player_status(team_id, player_id, status)
            return jsonify({"success": True, "player": _player_dict(player)})
        except PlayerNotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/teams/<team_id>/players/status", methods=["PATCH"])
    def bulk_update_status(team_id: str):
        """Set every player's attendance status, e.g. mark the whole team present."""
        data = request.get_json(silent=True) or {}
        try:
            status = validate_player_status(data.get("status"))
        except ValueError:
            return _invalid_status_response(data.get("status"))

        try:
            updated = app_state.gateway.bulk_update_status(team_id, status)
            return jsonify({"success": True, "updated": updated, "message": f"Marked {updated} players {status}"})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/teams/<team_id>/players/<player_id>", methods=["DELETE"])
    def delete_player(team_id: str, player_id: str):
        """Remove a player from a team's roster."""
        try:
            if not app_state.gateway.delete_player(team_id, player_id):
                return jsonify({"success": False, "error": f"Player {player_id} not found on team {team_id}"}), 404
            return jsonify({"success": True, "message": "Player deleted"})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    # ==================== Game Roster Endpoints ==================== #

    @app.route("/api/teams/<team_id>/lineups", methods=["GET"])
    def list_lineups(team_id: str):
        """List a team's game rosters, newest first."""
        try:
            rows = app_state.gateway.list_lineup_records(team_id)
            return jsonify({"success": True, "lineups": rows})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/teams/<team_id>/lineups", methods=["POST"])
    def create_lineup(team_id: str):
        """Create an empty game roster."""
        try:
            data = request.get_json(silent=True) or {}
            title = str(data.get("title", "")).strip()
            if not title:
                return jsonify({"success": False, "error": "Roster title is required"}), 400

            starter_slots = data.get("starter_slots", app_state.service_factory.settings.default_starter_slots)
            lineup_id = app_state.gateway.create_lineup_record(
                team_id, title, game_date=data.get("game_date"), starter_slots=starter_slots
            )
            return jsonify({"success": True, "lineup_id": lineup_id}), 201
        except (LineupError, ValueError) as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/lineups/<lineup_id>/open", methods=["POST"])
    def open_lineup(lineup_id: str):
        """Start (or restart) an editing session from the stored lineup."""
        try:
            stored = app_state.gateway.fetch_persisted_lineup(lineup_id)
            if stored is None:
                return jsonify({"success": False, "error": f"Game roster not found: {lineup_id}"}), 404

            team_id = str(stored.get("team_id") or "")
            session = app_state.open_session(team_id, lineup_id)
            return jsonify({"success": True, "lineup": session.summary()})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            logger.error("Failed to open lineup %s: %s", lineup_id, e)
            return jsonify({"success": False, "error": str(e)}), 503

    @app.route("/api/lineups/<lineup_id>", methods=["GET"])
    def get_lineup(lineup_id: str):
        """Get the current state of an open lineup."""
        session = app_state.get_session(lineup_id)
        if session is None:
            return _session_not_found(lineup_id)
        return jsonify({"success": True, "lineup": session.summary()})

    @app.route("/api/lineups/<lineup_id>/intents", methods=["POST"])
    def dispatch_intent(lineup_id: str):
        """Apply one assignment intent (add, remove, promote, demote, reorder, ...)."""
        session = app_state.get_session(lineup_id)
        if session is None:
            return _session_not_found(lineup_id)

        try:
            intent = intent_from_dict(request.get_json(silent=True))
            session.dispatch(intent)
            return jsonify({"success": True, "message": intent.description, "lineup": session.summary()})
        except CapacityExceeded as e:
            return _capacity_error_response(e)
        except LineupError as e:
            return jsonify({"success": False, "error": str(e), "error_type": type(e).__name__}), 400
        except ValueError as e:
            return jsonify({"success": False, "error": str(e), "error_type": "invalid_intent"}), 400

    @app.route("/api/lineups/<lineup_id>/validate", methods=["GET"])
    def validate_lineup(lineup_id: str):
        """Validate the open lineup and report starting lineup completeness."""
        session = app_state.get_session(lineup_id)
        if session is None:
            return _session_not_found(lineup_id)

        result = session.validate()
        filled, capacity, open_slots = session.validator.completeness(session.lineup)
        return jsonify({
            "success": True,
            "validation": result.to_dict(),
            "completeness": {"filled": filled, "starter_slots": capacity, "open_slots": open_slots},
        })

    @app.route("/api/lineups/<lineup_id>/save", methods=["POST"])
    def save_lineup(lineup_id: str):
        """Save the open lineup. On failure the session is kept for a retry."""
        session = app_state.get_session(lineup_id)
        if session is None:
            return _session_not_found(lineup_id)

        try:
            session.save()
            return jsonify({"success": True, "message": "Roster saved!", "lineup": session.summary()})
        except LineupNotFoundError as e:
            return jsonify({"success": False, "error": str(e)}), 404
        except PersistenceError as e:
            logger.warning("Save failed for lineup %s: %s", lineup_id, e)
            return _persistence_error_response(e)

    @app.route("/api/lineups/<lineup_id>", methods=["DELETE"])
    def delete_lineup(lineup_id: str):
        """Delete a stored game roster and close its session."""
        try:
            deleted = app_state.gateway.delete_lineup_record(lineup_id)
            app_state.close_session(lineup_id)
            if not deleted:
                return jsonify({"success": False, "error": f"Game roster not found: {lineup_id}"}), 404
            return jsonify({"success": True, "message": "Game roster deleted"})
        except ValueError as e:
            return jsonify({"success": False, "error": str(e)}), 400
        except PersistenceError as e:
            return jsonify({"success": False, "error": str(e)}), 503

    return app


def run_web_app(settings: Optional[AppSettings] = None) -> None:
    """
    Run the web application.

    Args:
        settings: Application settings; environment settings if None
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = create_app(WebAppState(ServiceFactory(settings)))
    logger.info("Serving %s API on %s:%d (data in %s)", APP_TITLE, settings.host, settings.port, settings.data_dir)
    app.run(host=settings.host, port=settings.port, debug=False)


if __name__ == "__main__":
    run_web_app()
