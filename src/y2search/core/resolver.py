"""Resolve the best (artist, song) guess for the current video.

Tiers, in strict priority order:
1. Music section in the page's structured metadata
2. Rendered music attribution element
3. Pattern parsing of the normalized title (channel name fills a missing artist)

The first tier returning a candidate wins. The title tier always produces
one, so resolution never fails; at worst the song is the cleaned title.
"""

from typing import Any, List, Optional

from ..utils.logging import get_logger
from .dom_scraper import DomMetadataScraper
from .models import CandidateSource, ExtractionAttempt, MetadataCandidate, Resolution
from .page import PageAdapter
from .pattern_parser import TitleParser
from .structured_metadata import StructuredMetadataReader
from .text_normalizer import normalize
from .youtube_metadata import clean_channel_name

logger = get_logger(__name__)


class TitlePatternStrategy:
    """Last tier: normalize the displayed title and split it."""

    name = "title"

    def __init__(self, parser: TitleParser):
        self.parser = parser

    def attempt(self, raw_title: str, structured: Any = None) -> ExtractionAttempt:
        normalized = normalize(raw_title)
        if not normalized:
            # Nothing but noise; keep the raw text rather than an empty song
            return ExtractionAttempt(
                candidate=MetadataCandidate(
                    artist=self.parser.fallback_artist(),
                    song=raw_title.strip(),
                    source=CandidateSource.FALLBACK,
                )
            )
        return ExtractionAttempt(candidate=self.parser.parse(normalized))


class MetadataResolver:
    """Runs the extraction tiers for one title."""

    def __init__(
        self,
        page: Optional[PageAdapter] = None,
        strategies: Optional[List[Any]] = None,
    ):
        if strategies is None:
            strategies = self.default_strategies(page)
        self.strategies = strategies

    @staticmethod
    def default_strategies(page: Optional[PageAdapter]) -> List[Any]:
        if page is None:
            return [StructuredMetadataReader(), TitlePatternStrategy(TitleParser())]

        def channel_name() -> str:
            return clean_channel_name(page.get_channel_name())

        return [
            StructuredMetadataReader(),
            DomMetadataScraper(page),
            TitlePatternStrategy(TitleParser(channel_name)),
        ]

    def resolve(self, raw_title: str, structured: Any = None) -> Resolution:
        not_loaded = False
        for strategy in self.strategies:
            attempt = strategy.attempt(raw_title, structured)
            if attempt.candidate is not None:
                candidate = attempt.candidate
                pending = not_loaded
                logger.debug(
                    f"Resolved via {strategy.name}: artist='{candidate.artist}', "
                    f"song='{candidate.song}', pending={pending}"
                )
                return Resolution(result=candidate, pending=pending)
            if attempt.not_loaded:
                logger.debug(f"Tier '{strategy.name}' not loaded yet")
                not_loaded = True

        # Only reachable with a custom strategy list lacking the title tier
        return Resolution(
            result=MetadataCandidate(
                artist="", song=raw_title.strip(), source=CandidateSource.FALLBACK
            ),
            pending=not_loaded,
        )
