"""Read the music section YouTube embeds in a watch page's ``ytInitialData``.

Path walked (every hop optional; any miss means "no data"):

    engagementPanels[*]
      .engagementPanelSectionListRenderer.content
      .structuredDescriptionContentRenderer.items[*]
      .videoDescriptionMusicSectionRenderer.carouselLockups

The section is only trusted when it lists exactly one song. Several lockups
mean the video uses several tracks, so there is no single confident answer.
"""

import re
import unicodedata
from typing import Any, List, Optional

from ..utils.logging import get_logger
from .constants import CJK_COMPATIBILITY_IDEOGRAPHS
from .models import CandidateSource, ExtractionAttempt, MetadataCandidate
from .text_normalizer import collapse_whitespace, strip_emoji

logger = get_logger(__name__)

SONG_ROW = 0
ARTIST_ROW = 1

# "(Taylor's Version)" -> "(Taylor's)"
NAMED_VERSION = re.compile(r"\(\s*([^()]+?)\s+(?:version|ver\.)\s*\)\s*$", re.IGNORECASE)


def dig(node: Any, *path: Any) -> Any:
    """Follow ``path`` through nested dicts/lists, returning None on any miss."""
    for key in path:
        if isinstance(node, dict) and isinstance(key, str):
            node = node.get(key)
        elif isinstance(node, list) and isinstance(key, int) and 0 <= key < len(node):
            node = node[key]
        else:
            return None
    return node


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def text_of(node: Any) -> Optional[str]:
    """Resolve a YouTube text object (``simpleText`` or ``runs``) to a string."""
    simple = dig(node, "simpleText")
    if isinstance(simple, str):
        return simple

    runs = dig(node, "runs")
    if not isinstance(runs, list) or not runs:
        return None
    fragments = [dig(run, "text") for run in runs]
    if not all(isinstance(fragment, str) for fragment in fragments):
        return None
    if len(fragments) == 1:
        return fragments[0]
    return "".join(fragments)


def fix_compatibility_ideographs(text: str) -> str:
    """Replace CJK compatibility ideographs with their unified twins."""
    return CJK_COMPATIBILITY_IDEOGRAPHS.sub(
        lambda m: unicodedata.normalize("NFC", m.group(0)), text
    )


def clean_song_text(text: str) -> str:
    text = strip_emoji(text)
    text = collapse_whitespace(text).strip()
    text = fix_compatibility_ideographs(text)
    return NAMED_VERSION.sub(r"(\1)", text).strip()


def clean_artist_text(text: str) -> str:
    return fix_compatibility_ideographs(text).strip()


def find_carousel_lockups(structured: Any) -> Optional[List[Any]]:
    for panel in _as_list(dig(structured, "engagementPanels")):
        items = dig(
            panel,
            "engagementPanelSectionListRenderer",
            "content",
            "structuredDescriptionContentRenderer",
            "items",
        )
        for item in _as_list(items):
            section = dig(item, "videoDescriptionMusicSectionRenderer")
            if section is None:
                continue
            lockups = dig(section, "carouselLockups")
            return lockups if isinstance(lockups, list) else None
    return None


def _row_text(rows: Any, index: int) -> Optional[str]:
    row = dig(rows, index, "infoRowRenderer")
    text = text_of(dig(row, "defaultMetadata"))
    if text is None:
        text = text_of(dig(row, "expandedMetadata"))
    return text


def try_read(structured: Any) -> Optional[MetadataCandidate]:
    """Extract (artist, song) from the music section, or None."""
    if not isinstance(structured, dict):
        return None

    lockups = find_carousel_lockups(structured)
    if lockups is None:
        logger.debug("No music section in structured metadata")
        return None
    if len(lockups) != 1:
        logger.debug(f"Music section lists {len(lockups)} songs, ignoring it")
        return None

    rows = dig(lockups, 0, "carouselLockupRenderer", "infoRows")
    song = _row_text(rows, SONG_ROW)
    artist = _row_text(rows, ARTIST_ROW)
    if song is None or artist is None:
        return None

    song = clean_song_text(song)
    if not song:
        return None
    return MetadataCandidate(
        artist=clean_artist_text(artist),
        song=song,
        source=CandidateSource.STRUCTURED,
    )


class StructuredMetadataReader:
    """Resolver strategy wrapping :func:`try_read`."""

    name = "structured"

    def attempt(self, raw_title: str, structured: Any) -> ExtractionAttempt:
        return ExtractionAttempt(candidate=try_read(structured))
