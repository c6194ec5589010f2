"""Download YouTube watch pages."""

import requests

from ..config import ACCEPT_LANGUAGE, FETCH_RETRIES, REQUEST_TIMEOUT, USER_AGENT
from ..exceptions import PageFetchError
from ..utils.logging import get_logger
from ..utils.retry import retry_with_backoff
from .watch_page import WatchPage

logger = get_logger(__name__)


@retry_with_backoff(max_retries=FETCH_RETRIES, exceptions=(requests.RequestException,))
def _get(url: str) -> str:
    headers = {"User-Agent": USER_AGENT, "Accept-Language": ACCEPT_LANGUAGE}
    response = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)
    response.raise_for_status()
    return response.text


def fetch_watch_page(url: str) -> str:
    """Return the HTML of a watch page, raising PageFetchError on failure."""
    logger.debug(f"Fetching {url}")
    try:
        return _get(url)
    except requests.RequestException as e:
        logger.warning(f"Failed to fetch watch page: {e}")
        raise PageFetchError(f"Failed to fetch {url}: {e}") from e


def load_watch_page(url: str) -> WatchPage:
    return WatchPage(fetch_watch_page(url), url=url)
