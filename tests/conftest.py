"""Pytest configuration helpers for the Media Stacks project.

The ``pytest`` plugin system automatically imports ``tests.conftest``. We use
that behavior to ensure the repository root is present on ``sys.path`` before
any test modules import application code.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from tests import _ensure_repo_on_path

_ensure_repo_on_path()

from mediastacks.schemas.media import MediaItem  # noqa: E402
from mediastacks.services.favorites import FavoritesStore, MemoryStorage  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Hook executed by pytest prior to running any tests."""

    _ensure_repo_on_path()


@pytest.fixture
def memory_storage() -> MemoryStorage:
    """Empty in-process storage backend."""
    return MemoryStorage()


@pytest.fixture
def favorites_store(memory_storage: MemoryStorage) -> FavoritesStore:
    """Favorites store persisting into :func:`memory_storage`."""
    return FavoritesStore(memory_storage)


@pytest.fixture
def make_item() -> Callable[..., MediaItem]:
    """Factory building normalized items with sensible defaults."""

    def _make(item_id: Any = "1", media_type: str = "movie", **overrides: Any) -> MediaItem:
        fields: dict[str, Any] = {
            "id": item_id,
            "type": media_type,
            "title": f"Title {item_id}",
            "subtitle": "(2001)",
            "image": "",
            "raw": {"id": item_id},
        }
        fields.update(overrides)
        return MediaItem(**fields)

    return _make
