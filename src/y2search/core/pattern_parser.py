"""Split a normalized video title into artist and song."""

import re
from typing import Callable, Optional, Tuple

from ..utils.logging import get_logger
from .constants import CORNER_CLOSE, CORNER_OPEN, LATIN_LETTER, QUOTE_GLYPHS
from .models import CandidateSource, MetadataCandidate

logger = get_logger(__name__)

CORNER_QUOTE = re.compile(
    rf"^(?P<artist>[^{CORNER_OPEN}]*)[{CORNER_OPEN}](?P<song>[^{CORNER_CLOSE}]+)[{CORNER_CLOSE}]"
)
LEADING_TAG = re.compile(r"^\[[^\]]*\]\s*(?=\S)")
LEADING_TAGS = re.compile(r"^(?:\s*\[[^\]]*\])+\s*")
QUOTED_SONG = re.compile(
    rf"^(?P<artist>[^{QUOTE_GLYPHS}]*?)\s*[{QUOTE_GLYPHS}](?P<song>[^{QUOTE_GLYPHS}]+)[{QUOTE_GLYPHS}]"
)
BRACKETED_ARTIST = re.compile(r"^\[(?P<artist>[^\]]+)\]\s*(?P<song>.+)$")
SONG_BY_ARTIST = re.compile(r"^(?P<song>.+?)\s+by\s+(?P<artist>.+)$", re.IGNORECASE)

TRAILING_NOTE = re.compile(r"^(?P<prefix>.*?)\s*[\[(](?P<note>[^\[\]()]*)[\])]\s*$")
# A run that starts at a 4+ digit number (release year, upload date)
DATE_SUFFIX = re.compile(r"\s*[\[(]?(?<![^\s\[(])\d{4,}.*$")
EDGE_SEPARATORS = " -|:"

PatternResult = Optional[Tuple[str, str]]


def _clean_edges(text: str) -> str:
    return text.strip().strip(EDGE_SEPARATORS).strip()


def _split_note(side: str) -> Tuple[str, Optional[str]]:
    """Split ``name(note)`` into its parts; note is None when absent."""
    match = TRAILING_NOTE.match(side)
    if not match or not match.group("prefix").strip():
        return side, None
    return match.group("prefix").strip(), match.group("note").strip()


def refine_underscore_artist(side: str) -> str:
    prefix, note = _split_note(side.strip())
    if note is None:
        return side.strip()
    if note and LATIN_LETTER.search(prefix):
        return f"{prefix}({note})"
    return prefix


def refine_underscore_song(side: str) -> str:
    side = side.strip()
    without_date = DATE_SUFFIX.sub("", side).strip()
    if without_date:
        side = without_date

    prefix, note = _split_note(side)
    if note is None:
        return side
    if note and LATIN_LETTER.search(prefix):
        return f"{prefix} ({note})"
    return prefix


class TitleParser:
    """Applies title patterns in priority order; the first match wins.

    ``channel_name`` supplies the artist whenever a pattern finds a song but
    no artist, and for titles that match no pattern at all.
    """

    def __init__(self, channel_name: Optional[Callable[[], str]] = None):
        self._channel_name = channel_name

    def parse(self, normalized: str) -> MetadataCandidate:
        text = normalized.strip()

        matched = self._match_corner_quote(text)
        if matched is None:
            text = self._strip_leading_tag(text)
            for matcher in (
                self._match_underscore,
                self._match_quoted_song,
                self._match_bracketed_artist,
                self._match_hyphen,
                self._match_pipe,
                self._match_song_by_artist,
            ):
                matched = matcher(text)
                if matched is not None:
                    break

        if matched is None:
            logger.debug(f"No title pattern matched, using whole title: '{text}'")
            return MetadataCandidate(
                artist=self.fallback_artist(),
                song=_clean_edges(text) or text,
                source=CandidateSource.FALLBACK,
            )

        artist, song = matched
        if not artist:
            artist = self.fallback_artist()
        return MetadataCandidate(artist=artist, song=song, source=CandidateSource.TITLE)

    def fallback_artist(self) -> str:
        if self._channel_name is None:
            return ""
        return (self._channel_name() or "").strip()

    def _result(
        self, pattern: str, artist: str, song: str, trim_edges: bool = True
    ) -> PatternResult:
        if trim_edges:
            artist, song = _clean_edges(artist), _clean_edges(song)
        else:
            # Plain splits keep the sides as written, minus whitespace
            artist, song = artist.strip(), song.strip()
        if not song:
            return None
        logger.debug(f"Title pattern '{pattern}' matched: artist='{artist}', song='{song}'")
        return artist, song

    def _strip_leading_tag(self, text: str) -> str:
        """Drop one leading ``[...]`` block, treating it as a tag."""
        return LEADING_TAG.sub("", text, count=1)

    def _match_corner_quote(self, text: str) -> PatternResult:
        match = CORNER_QUOTE.match(text)
        if not match:
            return None
        artist = match.group("artist")
        if "|" in artist:
            artist = artist.rsplit("|", 1)[1]
        artist = LEADING_TAGS.sub("", artist)
        return self._result("corner-quote", artist, match.group("song"))

    def _match_underscore(self, text: str) -> PatternResult:
        if "_" not in text:
            return None
        artist, song = text.split("_", 1)
        return self._result(
            "underscore",
            refine_underscore_artist(artist),
            refine_underscore_song(song),
        )

    def _match_quoted_song(self, text: str) -> PatternResult:
        match = QUOTED_SONG.match(text)
        if not match:
            return None
        return self._result("quoted-song", match.group("artist"), match.group("song"))

    def _match_bracketed_artist(self, text: str) -> PatternResult:
        match = BRACKETED_ARTIST.match(text)
        if not match:
            return None
        return self._result("bracketed-artist", match.group("artist"), match.group("song"))

    def _match_hyphen(self, text: str) -> PatternResult:
        if " - " not in text:
            return None
        artist, song = text.split(" - ", 1)
        return self._result("hyphen", artist, song, trim_edges=False)

    def _match_pipe(self, text: str) -> PatternResult:
        if "|" not in text:
            return None
        artist, song = text.split("|", 1)
        return self._result("pipe", artist, song, trim_edges=False)

    def _match_song_by_artist(self, text: str) -> PatternResult:
        match = SONG_BY_ARTIST.match(text)
        if not match:
            return None
        return self._result("song-by-artist", match.group("artist"), match.group("song"))
