from __future__ import annotations

import pytest

from pricetracker.store.layout import DatabaseLayout


@pytest.fixture()
def layout(tmp_path):
    layout = DatabaseLayout(tmp_path / "database")
    layout.ensure_root()
    return layout


@pytest.fixture()
def sleeps():
    return []


@pytest.fixture()
def fake_sleep(sleeps):
    async def sleep(delay):
        sleeps.append(delay)

    return sleep
