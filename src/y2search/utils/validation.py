"""Validation utilities."""

import re

from ..exceptions import ValidationError

YOUTUBE_URL_PATTERNS = [
    r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"youtube\.com/(?:embed|shorts)/([a-zA-Z0-9_-]{11})",
]


def validate_youtube_url(url: str) -> str:
    """Validate and normalize YouTube URL."""
    if not url:
        raise ValidationError("URL cannot be empty")

    url = url.strip()
    for pattern in YOUTUBE_URL_PATTERNS:
        if re.search(pattern, url):
            return url

    raise ValidationError(f"Invalid YouTube URL: {url}")


def validate_title(title: str) -> str:
    """Validate a title passed on the command line."""
    if not title or not title.strip():
        raise ValidationError("Title cannot be empty")
    return title
