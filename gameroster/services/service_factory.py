"""
Service Factory for dependency injection.

This module provides a factory for creating properly configured service
instances with their dependencies injected.
"""
from typing import Optional

from ..utils.config import AppSettings, get_settings
from .lineup_session import LineupEditingSession
from .persistence_service import JsonFilePersistenceService, PersistenceGateway


class ServiceFactory:
    """
    Factory for creating service instances with proper dependency injection.

    The persistence gateway is created once per factory and shared by every
    session it opens.
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        """
        Initialize factory.

        Args:
            settings: Application settings; the cached environment settings if None
        """
        self.settings = settings or get_settings()
        self._gateway: Optional[PersistenceGateway] = None

    def get_gateway(self) -> PersistenceGateway:
        """Get singleton persistence gateway."""
        if self._gateway is None:
            self._gateway = JsonFilePersistenceService(self.settings.data_dir)
        return self._gateway

    def configure_custom_gateway(self, gateway: PersistenceGateway) -> None:
        """Use a different storage backend for sessions opened from now on."""
        self._gateway = gateway

    def open_session(self, team_id: str, lineup_id: Optional[str] = None,
                     title: Optional[str] = None, game_date: Optional[str] = None,
                     starter_slots: Optional[int] = None) -> LineupEditingSession:
        """
        Open a lineup editing session.

        Args:
            team_id: Team whose roster is assigned
            lineup_id: Stored game roster to restore, None for a new lineup
            title: Title for a new lineup
            game_date: Game date for a new lineup
            starter_slots: Capacity for a new lineup; settings default if None

        Returns:
            Configured LineupEditingSession
        """
        if starter_slots is None:
            starter_slots = self.settings.default_starter_slots
        return LineupEditingSession.open(
            self.get_gateway(),
            team_id,
            lineup_id=lineup_id,
            title=title,
            game_date=game_date,
            starter_slots=starter_slots,
        )
