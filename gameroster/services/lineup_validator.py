"""
Capacity rules and lineup validation.

The capacity helpers are evaluated by the partition engine on every call that
depends on the starter capacity. ``LineupValidator`` checks a whole lineup
snapshot against a roster pool and reports problems without raising.
"""
from typing import List, Optional, Tuple

from ..models import Lineup, RosterPool
from ..utils.constants import MAX_STARTER_SLOTS, MIN_STARTER_SLOTS
from .lineup_errors import CapacityExceeded, InvalidCapacity


def validate_starter_slots(value: object) -> int:
    """
    Validate a starter capacity value.

    Args:
        value: Proposed capacity

    Returns:
        The capacity as an int

    Raises:
        InvalidCapacity: If value is not an int in MIN_STARTER_SLOTS..MAX_STARTER_SLOTS
    """
    # bool is an int subclass but never a capacity
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidCapacity(value, MIN_STARTER_SLOTS, MAX_STARTER_SLOTS)
    if not MIN_STARTER_SLOTS <= value <= MAX_STARTER_SLOTS:
        raise InvalidCapacity(value, MIN_STARTER_SLOTS, MAX_STARTER_SLOTS)
    return value


def has_open_starter_slot(starter_count: int, starter_slots: int) -> bool:
    return starter_count < starter_slots


def ensure_starter_capacity(starter_count: int, starter_slots: int, player_id: Optional[str] = None) -> None:
    """
    Raise CapacityExceeded unless one more starter fits.

    A lineup whose capacity was lowered below its starter count stays as it
    is; it only fails this check until enough starters are removed.
    """
    if not has_open_starter_slot(starter_count, starter_slots):
        raise CapacityExceeded(starter_slots, starter_count, player_id)


class ValidationResult:
    """Result of a validation operation with errors and warnings."""

    def __init__(self, is_valid: bool = True, errors: Optional[List[str]] = None,
                 warnings: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.warnings = warnings or []

    def add_error(self, error: str) -> None:
        """Add an error message and mark as invalid."""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def combine(self, other: 'ValidationResult') -> 'ValidationResult':
        """Combine with another validation result."""
        return ValidationResult(
            is_valid=self.is_valid and other.is_valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings
        )

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors), "warnings": list(self.warnings)}


class LineupValidator:
    """
    Validates a lineup snapshot against the team's roster pool.

    Lineups produced by the partition engine always pass; this is meant for
    lineups assembled elsewhere and for showing capacity warnings.
    """

    def __init__(self, roster_pool: RosterPool):
        self.roster_pool = roster_pool

    def validate(self, lineup: Lineup) -> ValidationResult:
        result = self._validate_capacity(lineup)
        result = result.combine(self._validate_membership(lineup))
        return result

    def _validate_capacity(self, lineup: Lineup) -> ValidationResult:
        result = ValidationResult()
        try:
            validate_starter_slots(lineup.starter_slots)
        except InvalidCapacity as e:
            result.add_error(str(e))
            return result

        if lineup.over_capacity:
            result.add_warning(
                f"Starting lineup has {len(lineup.starters)} players but only "
                f"{lineup.starter_slots} slots; bench a starter before adding more"
            )
        return result

    def _validate_membership(self, lineup: Lineup) -> ValidationResult:
        result = ValidationResult()

        seen = set()
        for player_id in lineup.assigned_ids:
            if player_id in seen:
                result.add_error(f"Player '{player_id}' is listed more than once")
            seen.add(player_id)

        for player_id in sorted(seen):
            if player_id not in self.roster_pool:
                result.add_error(f"Player '{player_id}' is not on this team's roster")

        return result

    def completeness(self, lineup: Lineup) -> Tuple[int, int, int]:
        """
        Get starting lineup completeness.

        Returns:
            Tuple of (filled_slots, starter_slots, open_slots)
        """
        filled = len(lineup.starters)
        return filled, lineup.starter_slots, max(0, lineup.starter_slots - filled)
