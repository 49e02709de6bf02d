"""Observability – structured logging."""
from mp_query.observability.logging.factory import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
