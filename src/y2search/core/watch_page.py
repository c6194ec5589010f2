"""Page adapter over a YouTube watch-page HTML snapshot.

Works with both the raw HTML served by youtube.com (meta tags plus the
embedded ``ytInitialData`` script) and a saved, browser-rendered page, which
additionally carries the ``ytd-*`` elements of the music attribution and the
collapsible description.
"""

import json
import re
from pathlib import Path
from typing import Any, Callable, List, Optional

from bs4 import BeautifulSoup

from ..utils.logging import get_logger
from .constants import (
    ATTRIBUTION_SELECTORS,
    DESCRIPTION_EXPANDER_SELECTOR,
    EXPANDED_ATTRIBUTE,
)
from .models import AttributionText
from .page import PageAdapter
from .structured_metadata import dig, text_of
from .youtube_metadata import extract_video_id

logger = get_logger(__name__)

YT_INITIAL_DATA_RE = re.compile(r'(?:var\s+|window\["|)ytInitialData(?:"\])?\s*=\s*')
TITLE_SUFFIX = " - YouTube"
RENDERED_TITLE_SELECTOR = "ytd-watch-metadata h1 yt-formatted-string"
RENDERED_CHANNEL_SELECTOR = "ytd-watch-metadata ytd-channel-name a"


def text_content(element: Any) -> str:
    """Element text with inner spacing kept, like the DOM's ``textContent.trim()``."""
    return element.get_text().strip()


def extract_json_object(html: str, start: int) -> Optional[str]:
    """Return the balanced ``{...}`` object starting at ``start``, or None."""
    if start >= len(html) or html[start] != "{":
        return None

    depth = 0
    in_string = False
    escape = False

    for i in range(start, len(html)):
        ch = html[i]

        if escape:
            escape = False
            continue
        if ch == "\\":
            if in_string:
                escape = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue

        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return html[start : i + 1]

    return None


def extract_initial_data(html: str) -> Optional[dict]:
    """Parse the ``ytInitialData`` object embedded in a watch page."""
    match = YT_INITIAL_DATA_RE.search(html)
    if not match:
        return None
    json_str = extract_json_object(html, match.end())
    if not json_str:
        return None
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.debug(f"Could not decode ytInitialData: {e}")
        return None
    return data if isinstance(data, dict) else None


class WatchPage(PageAdapter):
    """A :class:`PageAdapter` backed by one HTML snapshot at a time."""

    def __init__(self, html: str, url: Optional[str] = None):
        self.url = url
        self._callbacks: List[Callable[[], None]] = []
        self._load(html)

    @classmethod
    def from_file(cls, path: Path, url: Optional[str] = None) -> "WatchPage":
        return cls(Path(path).read_text(encoding="utf-8"), url=url)

    def _load(self, html: str) -> None:
        self.html = html
        self.soup = BeautifulSoup(html, "html.parser")
        self._initial_data: Optional[dict] = None
        self._initial_data_parsed = False

    def reload(self, html: str, url: Optional[str] = None) -> None:
        """Swap in a new snapshot (navigation) and notify subscribers."""
        if url is not None:
            self.url = url
        self._load(html)
        for callback in list(self._callbacks):
            callback()

    def on_page_may_have_changed(self, callback: Callable[[], None]) -> None:
        self._callbacks.append(callback)

    # ------------------------------------------------------------------
    # Title, identity, channel
    # ------------------------------------------------------------------
    def _meta_content(self, **attrs: str) -> str:
        tag = self.soup.find("meta", attrs=attrs)
        if tag is None:
            return ""
        return (tag.get("content") or "").strip()

    def get_displayed_title(self) -> str:
        rendered = self.soup.select_one(RENDERED_TITLE_SELECTOR)
        if rendered is not None and text_content(rendered):
            return text_content(rendered)

        title = self._meta_content(name="title") or self._meta_content(property="og:title")
        if title:
            return title

        title_tag = self.soup.find("title")
        if title_tag is None:
            return ""
        title = text_content(title_tag)
        if title.endswith(TITLE_SUFFIX):
            title = title[: -len(TITLE_SUFFIX)].strip()
        return "" if title == "YouTube" else title

    def get_video_identity(self) -> Optional[str]:
        video_id = extract_video_id(self.url)
        if video_id:
            return video_id
        video_id = self._meta_content(itemprop="videoId")
        if video_id:
            return video_id
        canonical = self.soup.find("link", attrs={"rel": "canonical"})
        if canonical is not None:
            return extract_video_id(canonical.get("href"))
        return None

    def get_channel_name(self) -> str:
        rendered = self.soup.select_one(RENDERED_CHANNEL_SELECTOR)
        if rendered is not None and text_content(rendered):
            return text_content(rendered)

        author = self.soup.find(attrs={"itemprop": "author"})
        if author is not None:
            name = author.find("link", attrs={"itemprop": "name"})
            if name is not None and name.get("content"):
                return name["content"].strip()

        for content in dig(
            self.get_structured_metadata(),
            "contents",
            "twoColumnWatchNextResults",
            "results",
            "results",
            "contents",
        ) or []:
            owner = dig(
                content, "videoSecondaryInfoRenderer", "owner", "videoOwnerRenderer", "title"
            )
            name = text_of(owner)
            if name:
                return name.strip()
        return ""

    def get_structured_metadata(self) -> Optional[dict]:
        if not self._initial_data_parsed:
            self._initial_data = extract_initial_data(self.html)
            self._initial_data_parsed = True
        return self._initial_data

    # ------------------------------------------------------------------
    # Music attribution and description expander
    # ------------------------------------------------------------------
    def _expander(self) -> Any:
        return self.soup.select_one(DESCRIPTION_EXPANDER_SELECTOR)

    def _reachable(self, element: Any) -> bool:
        expander = self._expander()
        if expander is None or expander.has_attr(EXPANDED_ATTRIBUTE):
            return True
        return not any(parent is expander for parent in element.parents)

    def _attribution(self) -> Optional[AttributionText]:
        for container_selector, song_selector, artist_selector in ATTRIBUTION_SELECTORS:
            for container in self.soup.select(container_selector):
                if not self._reachable(container):
                    continue
                song = container.select_one(song_selector)
                artist = container.select_one(artist_selector)
                return AttributionText(
                    song=text_content(song) if song is not None else "",
                    artist=text_content(artist) if artist is not None else "",
                )
        return None

    def has_music_attribution_elements(self) -> bool:
        return self._attribution() is not None

    def read_music_attribution_elements(self) -> Optional[AttributionText]:
        return self._attribution()

    def is_content_region_collapsed(self) -> bool:
        expander = self._expander()
        return expander is not None and not expander.has_attr(EXPANDED_ATTRIBUTE)

    def expand_content_region(self) -> bool:
        if not self.is_content_region_collapsed():
            return False
        self._expander()[EXPANDED_ATTRIBUTE] = ""
        return True

    def collapse_content_region(self) -> bool:
        expander = self._expander()
        if expander is None or not expander.has_attr(EXPANDED_ATTRIBUTE):
            return False
        del expander[EXPANDED_ATTRIBUTE]
        return True
