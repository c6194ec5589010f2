"""Data models for title resolution and change tracking."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CandidateSource(str, Enum):
    """Tier that produced a candidate."""

    STRUCTURED = "structured"
    DOM = "dom"
    TITLE = "title"
    FALLBACK = "fallback"


@dataclass
class MetadataCandidate:
    """A tentative (artist, song) guess; artist may be empty."""

    artist: str
    song: str
    source: CandidateSource = CandidateSource.TITLE

    @property
    def search_query(self) -> str:
        if self.artist:
            return f"{self.artist} {self.song}"
        return self.song

    def to_dict(self) -> dict:
        return {
            "artist": self.artist,
            "song": self.song,
            "source": self.source.value,
            "query": self.search_query,
        }


@dataclass
class AttributionText:
    """Song and artist headings read from a rendered attribution element."""

    song: str
    artist: str


@dataclass
class ExtractionAttempt:
    """Outcome of one resolver strategy.

    ``not_loaded`` marks a transient miss: the data the strategy needs has
    not rendered yet, so a later attempt may succeed.
    """

    candidate: Optional[MetadataCandidate] = None
    not_loaded: bool = False


@dataclass
class Resolution:
    """Result of a resolver run."""

    result: MetadataCandidate
    pending: bool = False


class WatchState(str, Enum):
    """States of the change watcher."""

    IDLE = "idle"
    RESOLVING = "resolving"
    RETRY_SCHEDULED = "retry_scheduled"
