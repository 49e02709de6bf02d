"""Observability – logging helpers."""
from mp_query.observability.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
