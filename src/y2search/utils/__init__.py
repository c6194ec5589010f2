"""Utility modules."""

from .logging import setup_logging, get_logger
from .retry import retry_with_backoff
from .validation import validate_youtube_url, validate_title

__all__ = [
    "setup_logging",
    "get_logger",
    "retry_with_backoff",
    "validate_youtube_url",
    "validate_title",
]
