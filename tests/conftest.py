"""Shared fixtures: every graph-store test runs against both backends."""

from __future__ import annotations

import pytest

from babbler.storage.graph_repository import SqliteBabblerRepository
from babbler.storage.memory_repository import InMemoryBabblerRepository


@pytest.fixture(params=["sqlite", "memory"])
def store(request, tmp_path):
    if request.param == "sqlite":
        return SqliteBabblerRepository(db_path=str(tmp_path / "babbler.sqlite3"))
    return InMemoryBabblerRepository()
