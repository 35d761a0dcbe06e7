from __future__ import annotations

from collections.abc import Iterator

import pytest

from cmdinvoke.config.settings import settings


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep cached command paths and env overrides from leaking across tests."""
    for key in ("COMMAND_AWS", "COMMAND_GIT", "CMDINVOKE_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)
    settings.clear_cache()
    try:
        yield
    finally:
        settings.clear_cache()


@pytest.fixture
def anyio_backend() -> str:
    """run_async is built on asyncio.wrap_future, so run anyio tests on asyncio."""
    return "asyncio"
