import os

import pytest

from pagekit.core.config import get_settings

os.environ.setdefault("ENV", "test")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; drop the cache so monkeypatched env vars apply per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def rows() -> list[dict]:
    return [{"id": i, "name": f"item-{i:02d}", "group": i % 3} for i in range(25)]
