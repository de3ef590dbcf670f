"""Incremental movie search with a persisted, rated watchlist."""

__version__ = "0.1.0"
