"""Test configuration and fixtures.

Provides reusable fixtures for:
- A scriptable in-memory page (FakePage) and scheduler (FakeScheduler)
- ytInitialData payloads with a music section
- Raw and browser-rendered watch-page HTML snapshots
"""

import json
import os
from typing import Callable, List, Optional

import pytest

from y2search.core.models import AttributionText
from y2search.core.page import PageAdapter


def pytest_addoption(parser):
    parser.addoption(
        "--run-network",
        action="store_true",
        default=False,
        help="Run tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    run_network = config.getoption("--run-network") or os.getenv(
        "RUN_INTEGRATION_TESTS"
    ) == "1"
    if run_network:
        return

    skip_network = pytest.mark.skip(
        reason="requires network access (use --run-network or RUN_INTEGRATION_TESTS=1)"
    )
    for item in items:
        if "network" in item.keywords:
            item.add_marker(skip_network)


# =============================================================================
# Fake page and scheduler
# =============================================================================


class FakePage(PageAdapter):
    """In-memory page whose state tests mutate directly.

    ``attribution_in_region`` places the attribution inside the collapsible
    description, so it is only visible while the region is expanded.
    """

    def __init__(
        self,
        title: str = "",
        video_id: Optional[str] = "vid00000001",
        channel: str = "",
        structured=None,
        attribution: Optional[AttributionText] = None,
        has_region: bool = True,
        expanded: bool = False,
        attribution_in_region: bool = False,
    ):
        self.title = title
        self.video_id = video_id
        self.channel = channel
        self.structured = structured
        self.attribution = attribution
        self.has_region = has_region
        self.expanded = expanded
        self.attribution_in_region = attribution_in_region

        self.callbacks: List[Callable[[], None]] = []
        self.expand_calls = 0
        self.collapse_calls = 0
        self.read_calls = 0

    def navigate(self, title: str, video_id: Optional[str] = None, **changes) -> None:
        self.title = title
        if video_id is not None:
            self.video_id = video_id
        for name, value in changes.items():
            setattr(self, name, value)
        self.signal()

    def signal(self) -> None:
        for callback in list(self.callbacks):
            callback()

    def get_displayed_title(self) -> str:
        return self.title

    def get_video_identity(self) -> Optional[str]:
        return self.video_id

    def get_structured_metadata(self):
        return self.structured

    def get_channel_name(self) -> str:
        return self.channel

    def has_music_attribution_elements(self) -> bool:
        if self.attribution is None:
            return False
        return not self.attribution_in_region or self.expanded

    def read_music_attribution_elements(self) -> Optional[AttributionText]:
        self.read_calls += 1
        if not self.has_music_attribution_elements():
            return None
        return self.attribution

    def is_content_region_collapsed(self) -> bool:
        return self.has_region and not self.expanded

    def expand_content_region(self) -> bool:
        if not self.is_content_region_collapsed():
            return False
        self.expand_calls += 1
        self.expanded = True
        return True

    def collapse_content_region(self) -> bool:
        if not self.has_region or not self.expanded:
            return False
        self.collapse_calls += 1
        self.expanded = False
        return True

    def on_page_may_have_changed(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)


class FakeTicket:
    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Records ``call_later`` requests; tests fire them explicitly."""

    def __init__(self):
        self.tickets: List[FakeTicket] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeTicket:
        ticket = FakeTicket(delay, callback)
        self.tickets.append(ticket)
        return ticket

    @property
    def live(self) -> List[FakeTicket]:
        return [t for t in self.tickets if not t.cancelled and not t.fired]

    def fire_all(self) -> int:
        """Run every live ticket once; returns how many ran."""
        due = self.live
        for ticket in due:
            ticket.fired = True
            ticket.callback()
        return len(due)


@pytest.fixture
def fake_page():
    return FakePage


@pytest.fixture
def scheduler():
    return FakeScheduler()


# =============================================================================
# Structured metadata (ytInitialData) Fixtures
# =============================================================================


def _simple(text: str) -> dict:
    return {"simpleText": text}


def _runs(*parts: str) -> dict:
    return {"runs": [{"text": part} for part in parts]}


def _lockup(song, artist) -> dict:
    rows = []
    for value in (song, artist):
        text = value if isinstance(value, dict) else _simple(value)
        rows.append({"infoRowRenderer": {"defaultMetadata": text}})
    return {"carouselLockupRenderer": {"infoRows": rows}}


def _initial_data(lockups: list, channel: Optional[str] = None) -> dict:
    data = {
        "engagementPanels": [
            {"engagementPanelSectionListRenderer": {"content": {"other": {}}}},
            {
                "engagementPanelSectionListRenderer": {
                    "content": {
                        "structuredDescriptionContentRenderer": {
                            "items": [
                                {"videoDescriptionHeaderRenderer": {}},
                                {
                                    "videoDescriptionMusicSectionRenderer": {
                                        "carouselLockups": lockups,
                                    }
                                },
                            ]
                        }
                    }
                }
            },
        ]
    }
    if channel is not None:
        data["contents"] = {
            "twoColumnWatchNextResults": {
                "results": {
                    "results": {
                        "contents": [
                            {"videoPrimaryInfoRenderer": {}},
                            {
                                "videoSecondaryInfoRenderer": {
                                    "owner": {
                                        "videoOwnerRenderer": {"title": _runs(channel)}
                                    }
                                }
                            },
                        ]
                    }
                }
            }
        }
    return data


@pytest.fixture
def simple_text():
    return _simple


@pytest.fixture
def runs_text():
    return _runs


@pytest.fixture
def make_lockup():
    return _lockup


@pytest.fixture
def make_initial_data():
    return _initial_data


@pytest.fixture
def single_song_data():
    """ytInitialData naming exactly one song."""
    return _initial_data([_lockup("Song Title", "Artist Name")])


# =============================================================================
# Watch page HTML Fixtures
# =============================================================================


@pytest.fixture
def raw_watch_html():
    """Watch page as served, with meta tags and ytInitialData."""

    def _build(
        title: str = "Artist Name - Song Title (Official Music Video)",
        initial_data: Optional[dict] = None,
        video_id: str = "dQw4w9WgXcQ",
        channel: str = "Artist NameVEVO",
    ) -> str:
        script = ""
        if initial_data is not None:
            script = f"<script>var ytInitialData = {json.dumps(initial_data)};</script>"
        return (
            "<html><head>"
            f"<title>{title} - YouTube</title>"
            f'<meta name="title" content="{title}">'
            f'<meta itemprop="videoId" content="{video_id}">'
            "</head><body>"
            f'<span itemprop="author"><link itemprop="name" content="{channel}"></span>'
            f"{script}"
            "</body></html>"
        )

    return _build


@pytest.fixture
def rendered_watch_html():
    """Browser-rendered watch page with the attribution in the description."""

    def _build(
        title: str = "Some Upload Title",
        song: str = "Song Title",
        artist: str = "Artist Name",
        expanded: bool = False,
        with_attribution: bool = True,
        channel: str = "Uploader",
    ) -> str:
        attribution = ""
        if with_attribution:
            attribution = (
                "<yt-video-attribute-view-model>"
                f"<h1>{song}</h1><h4>{artist}</h4>"
                "</yt-video-attribute-view-model>"
            )
        state = " is-expanded" if expanded else ""
        return (
            "<html><body><ytd-watch-metadata>"
            f"<h1><yt-formatted-string>{title}</yt-formatted-string></h1>"
            f"<ytd-channel-name><a>{channel}</a></ytd-channel-name>"
            f'<ytd-text-inline-expander id="description-inline-expander"{state}>'
            f"<span>Description text</span>{attribution}"
            "</ytd-text-inline-expander>"
            "</ytd-watch-metadata></body></html>"
        )

    return _build
