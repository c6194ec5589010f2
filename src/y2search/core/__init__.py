"""Core title-resolution modules."""

from .models import (
    AttributionText,
    CandidateSource,
    ExtractionAttempt,
    MetadataCandidate,
    Resolution,
    WatchState,
)
from .page import PageAdapter
from .text_normalizer import normalize
from .pattern_parser import TitleParser
from .structured_metadata import StructuredMetadataReader, try_read
from .dom_scraper import DomMetadataScraper
from .resolver import MetadataResolver
from .watcher import ChangeWatcher
from .watch_page import WatchPage

__all__ = [
    "AttributionText",
    "CandidateSource",
    "ExtractionAttempt",
    "MetadataCandidate",
    "Resolution",
    "WatchState",
    "PageAdapter",
    "normalize",
    "TitleParser",
    "StructuredMetadataReader",
    "try_read",
    "DomMetadataScraper",
    "MetadataResolver",
    "ChangeWatcher",
    "WatchPage",
]
