import os
import sys

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
os.environ.setdefault("JWT_SECRET", "test-secret")

from fastapi.testclient import TestClient

from main import app
from routes.auth import create_access_token


@pytest.fixture
def client():
    # No context manager: the startup hook (index creation) never runs
    return TestClient(app)


@pytest.fixture
def auth_headers():
    token = create_access_token("user-1", "alice")
    return {"Authorization": f"Bearer {token}"}


def make_cursor(docs):
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs)
    return cursor


@pytest.fixture
def mock_db():
    db = MagicMock()
    db.users.find_one = AsyncMock(return_value=None)
    db.users.insert_one = AsyncMock()
    db.courses.find_one = AsyncMock(return_value=None)
    db.courses.insert_one = AsyncMock()
    db.courses.update_one = AsyncMock()
    db.courses.find = MagicMock(return_value=make_cursor([]))
    db.quizzes.find_one = AsyncMock(return_value=None)
    db.quizzes.insert_one = AsyncMock()
    db.quizzes.find = MagicMock(return_value=make_cursor([]))
    with patch("routes.auth.db", db), patch("routes.courses.db", db), patch("routes.quizzes.db", db):
        yield db
