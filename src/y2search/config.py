"""Configuration settings for Y2Search."""

import os

from .exceptions import ConfigError

# Retry scheduling (seconds before re-resolving a page whose attribution
# elements have not rendered yet)
RETRY_DELAY = float(os.getenv("Y2SEARCH_RETRY_DELAY", "0.5"))

# Page fetching (can be overridden via environment variables)
REQUEST_TIMEOUT = float(os.getenv("Y2SEARCH_REQUEST_TIMEOUT", "10"))
FETCH_RETRIES = int(os.getenv("Y2SEARCH_FETCH_RETRIES", "3"))
USER_AGENT = os.getenv(
    "Y2SEARCH_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
)
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

# Search output
SPOTIFY_SEARCH_URL = "https://open.spotify.com/search/{query}"


def validate_config() -> None:
    """Validate configuration values."""
    if RETRY_DELAY <= 0:
        raise ConfigError("Retry delay must be positive")

    if REQUEST_TIMEOUT <= 0:
        raise ConfigError("Request timeout must be positive")

    if FETCH_RETRIES < 0:
        raise ConfigError("Fetch retries cannot be negative")

# Validate config on import
validate_config()
