"""Shared fixtures: a throwaway store per test and a fixed clock."""

from datetime import datetime, timezone

import pytest

from todo_storage import Storage
from todo_list import TodoList

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=timezone.utc)
NOW_EPOCH = 1704196800
HEADER_LINE = "id,project,desc,completed,date_added,date_completed"


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "data" / "list.csv"


@pytest.fixture
def storage(store_path) -> Storage:
    return Storage(store_path)


@pytest.fixture
def todo(storage) -> TodoList:
    return TodoList(storage)
