"""Shared pytest fixtures for the full lsplocator test suite."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from lsplocator.discovery.index import clear_cache


@pytest.fixture(autouse=True)
def _fresh_manifest_index() -> Iterator[None]:
    """Drop process-wide manifest index state around every test."""

    clear_cache()
    yield
    clear_cache()
