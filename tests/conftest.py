"""Shared test fixtures for MoodCoach tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId

from factories import make_cursor


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() and aggregate() return cursors synchronously (not
    # coroutines), so use MagicMock for them. Async methods like find_one,
    # insert_one, count_documents etc. stay as AsyncMock.
    collection.find = MagicMock(return_value=make_cursor([]))
    collection.aggregate = MagicMock(return_value=make_cursor([]))
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db
