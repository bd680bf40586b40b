"""Integration-test fixtures for deterministic, host-independent discovery."""

from __future__ import annotations

from typing import Iterator

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def _isolate_host_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Hide global installs and `LSPLOCATOR_*` variables of the machine running the tests."""

    monkeypatch.setattr(
        "lsplocator.discovery.global_modules.global_node_modules_paths",
        lambda *args, **kwargs: [],
    )
    for key in (
        "LSPLOCATOR_TOOL_NAME",
        "LSPLOCATOR_WORKSPACE",
        "LSPLOCATOR_BINARY_PATH",
        "LSPLOCATOR_RUNTIME_PATH",
        "LSPLOCATOR_TRUSTED",
        "LSPLOCATOR_HOST_RUNTIME",
    ):
        monkeypatch.delenv(key, raising=False)
    yield
    logger.remove()
    logger.disable("lsplocator")
