"""Logging setup shared by the entry points."""
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once for the process.

    Args:
        level: Level name such as "DEBUG" or "INFO"; unknown names fall back to INFO
    """
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)
    # Werkzeug request lines are noisy at INFO
    logging.getLogger("werkzeug").setLevel(max(numeric_level, logging.WARNING))
