"""Re-run resolution once per distinct video title.

The watcher is driven by "page may have changed" signals, which can fire
spuriously and often. It resolves each (video id, title) pair once. When the
attribution elements have not rendered yet it arms a single delayed retry,
and drops that retry as soon as the video or title changes so a stale
resolution never overwrites a newer one.

``scheduler`` is anything with ``call_later(delay, callback)`` returning a
handle with ``cancel()``, such as an asyncio event loop.
"""

from typing import Any, Callable, Optional, Tuple

from ..config import RETRY_DELAY
from ..utils.logging import get_logger
from .models import MetadataCandidate, WatchState
from .page import PageAdapter
from .resolver import MetadataResolver

logger = get_logger(__name__)

WatchKey = Tuple[Optional[str], str]


class ChangeWatcher:
    def __init__(
        self,
        page: PageAdapter,
        scheduler: Any,
        on_result: Callable[[MetadataCandidate], None],
        resolver: Optional[MetadataResolver] = None,
        retry_delay: float = RETRY_DELAY,
    ):
        self.page = page
        self.scheduler = scheduler
        self.on_result = on_result
        self.resolver = resolver or MetadataResolver(page)
        self.retry_delay = retry_delay

        self.state = WatchState.IDLE
        self._last_key: Optional[WatchKey] = None
        self._retry_key: Optional[WatchKey] = None
        self._ticket: Any = None

    @property
    def retry_pending(self) -> bool:
        return self._ticket is not None

    def start(self) -> None:
        self.page.on_page_may_have_changed(self.check)
        self.check()

    def stop(self) -> None:
        self._cancel_retry()
        self.state = WatchState.IDLE

    def _current_key(self) -> WatchKey:
        title = (self.page.get_displayed_title() or "").strip()
        return self.page.get_video_identity(), title

    def check(self) -> None:
        """Handle a page-change signal."""
        key = self._current_key()
        video_id, title = key

        if self._retry_key is not None and video_id != self._retry_key[0]:
            logger.debug("Video changed, dropping scheduled retry")
            self._cancel_retry()

        if not title:
            return
        if key == self._retry_key:
            return

        # Any other title supersedes the scheduled retry
        self._cancel_retry()
        if key == self._last_key:
            return
        self._resolve(key, is_retry=False)

    def _resolve(self, key: WatchKey, is_retry: bool) -> None:
        self.state = WatchState.RESOLVING
        resolution = self.resolver.resolve(key[1], self.page.get_structured_metadata())

        if resolution.pending and not is_retry:
            self._retry_key = key
            self._ticket = self.scheduler.call_later(self.retry_delay, self._on_retry)
            self.state = WatchState.RETRY_SCHEDULED
            logger.info(
                f"Music attribution not loaded for '{key[1]}', retrying in {self.retry_delay}s"
            )
            return

        if resolution.pending:
            logger.debug(f"Attribution still missing after retry for '{key[1]}'")

        self._last_key = key
        self.state = WatchState.IDLE
        self.on_result(resolution.result)

    def _on_retry(self) -> None:
        key = self._retry_key
        self._ticket = None
        self._retry_key = None
        self.state = WatchState.IDLE
        if key is None:
            return

        if self._current_key() != key:
            self.check()
            return
        self._resolve(key, is_retry=True)

    def _cancel_retry(self) -> None:
        if self._ticket is not None:
            self._ticket.cancel()
        self._ticket = None
        self._retry_key = None
        if self.state == WatchState.RETRY_SCHEDULED:
            self.state = WatchState.IDLE
