"""
Core utilities for Taskboard.

This package provides logging configuration, the error taxonomy, the
database layer and the API I/O models.
"""

from taskboard.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
