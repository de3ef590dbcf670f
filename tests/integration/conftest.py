"""Shared fixtures for integration tests.

These tests use real infrastructure components (HttpxOmdbClient,
DiskcacheWatchlistStorage, load_config) with mocked HTTP via respx.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import respx

from popcorn.infrastructure.config import AppConfig, load_config

OMDB_URL = "https://omdb.test/"


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    return load_config(
        cli_overrides={
            "environment": "test",
            "omdb": {"api_key": "integration-key", "base_url": OMDB_URL},
            "storage": {"backend": "diskcache", "path": str(tmp_path / "store")},
        }
    )


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
