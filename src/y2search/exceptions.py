"""Custom exceptions for Y2Search."""

class Y2SearchError(Exception):
    """Base exception for Y2Search."""
    pass

class PageFetchError(Y2SearchError):
    """Error downloading a YouTube watch page."""
    pass

class ValidationError(Y2SearchError):
    """Invalid input parameters."""
    pass

class ConfigError(Y2SearchError):
    """Invalid configuration value."""
    pass
