"""YouTube URL and channel helpers."""

import re
from typing import Optional

from .constants import CHANNEL_SUFFIXES

VIDEO_ID_PATTERNS = [
    r"(?:[?&]v=|/v/|youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"(?:embed/|shorts/)([a-zA-Z0-9_-]{11})",
]


def extract_video_id(url: Optional[str]) -> Optional[str]:
    """Extract the YouTube video ID from a URL, or None."""
    if not url:
        return None
    for pattern in VIDEO_ID_PATTERNS:
        match = re.search(pattern, url)
        if match:
            return match.group(1)
    return None


def clean_channel_name(channel: Optional[str]) -> str:
    """Clean a channel name for use as a fallback artist."""
    if not channel:
        return ""
    artist = channel.strip()
    for suffix in CHANNEL_SUFFIXES:
        if artist.endswith(suffix) and len(artist) > len(suffix):
            artist = artist[: -len(suffix)].strip()
    prefixes = ["Official"]
    for prefix in prefixes:
        if artist.startswith(prefix + " "):
            artist = artist[len(prefix):].strip()
    return artist
