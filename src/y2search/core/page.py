"""Interface between the resolver and the page hosting the video."""

from typing import Any, Callable, Optional

from .models import AttributionText


class PageAdapter:
    """What the resolver and watcher need to know about the host page.

    Subclasses implement the accessors; every method must tolerate a page
    that is still loading (empty title, missing elements, no structured data).
    """

    def get_displayed_title(self) -> str:
        raise NotImplementedError("Subclasses must implement get_displayed_title")

    def get_video_identity(self) -> Optional[str]:
        raise NotImplementedError("Subclasses must implement get_video_identity")

    def get_structured_metadata(self) -> Optional[Any]:
        return None

    def get_channel_name(self) -> str:
        return ""

    def has_music_attribution_elements(self) -> bool:
        return False

    def read_music_attribution_elements(self) -> Optional[AttributionText]:
        return None

    def is_content_region_collapsed(self) -> bool:
        return False

    def expand_content_region(self) -> bool:
        """Expand the description; return True only if this call expanded it."""
        return False

    def collapse_content_region(self) -> bool:
        return False

    def on_page_may_have_changed(self, callback: Callable[[], None]) -> None:
        raise NotImplementedError("Subclasses must implement on_page_may_have_changed")
