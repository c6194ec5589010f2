"""Y2Search - turn YouTube video titles into music search queries."""

__version__ = "0.3.0"
