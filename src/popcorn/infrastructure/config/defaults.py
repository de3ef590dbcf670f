"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "popcorn",
    "environment": "dev",
    "omdb": {
        "api_key": None,
        "base_url": "https://www.omdbapi.com/",
    },
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "popcorn/0.1.0",
    },
    "search": {
        "min_query_length": 3,
    },
    "window": {
        "default_title": "usePopcorn",
        "detail_title_format": "Movie | {title}",
    },
    "storage": {
        "backend": "diskcache",
        "path": "./.data/popcorn",
        "key": "watched",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
