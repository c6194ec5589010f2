"""Read artist/song from the rendered music attribution of a watch page."""

from typing import Any, Optional

from ..utils.logging import get_logger
from .models import CandidateSource, ExtractionAttempt, MetadataCandidate
from .page import PageAdapter

logger = get_logger(__name__)


class DomMetadataScraper:
    """Scrapes the attribution element, expanding the description if needed.

    The description region is collapsed again afterwards only when this
    scraper expanded it; a region the user opened stays open.
    """

    name = "dom"

    def __init__(self, page: PageAdapter):
        self.page = page

    def attempt(self, raw_title: str = "", structured: Any = None) -> ExtractionAttempt:
        page = self.page
        expanded_here = False

        if not page.has_music_attribution_elements() and page.is_content_region_collapsed():
            expanded_here = page.expand_content_region()
            if expanded_here:
                logger.debug("Expanded description to reach music attribution")

        try:
            if not page.has_music_attribution_elements():
                return ExtractionAttempt(not_loaded=True)

            attribution = page.read_music_attribution_elements()
            if attribution is None:
                return ExtractionAttempt()

            song = (attribution.song or "").strip()
            artist = (attribution.artist or "").strip()
            if not song or not artist:
                logger.debug("Music attribution present but incomplete")
                return ExtractionAttempt()

            return ExtractionAttempt(
                candidate=MetadataCandidate(
                    artist=artist, song=song, source=CandidateSource.DOM
                )
            )
        finally:
            if expanded_here:
                page.collapse_content_region()

    def try_scrape(self) -> Optional[MetadataCandidate]:
        return self.attempt().candidate
