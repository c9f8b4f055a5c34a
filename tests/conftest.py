"""Shared pytest fixtures."""

import json
from pathlib import Path
from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient

from comments_api.app.core.config import Settings
from comments_api.app.core.storage import JsonFileStorage
from comments_api.app.main import create_app
from comments_api.app.services.comment_service import CommentService


@pytest.fixture
def stored_comments() -> List[Dict[str, Any]]:
    """Comments present in the file before each test."""
    return [
        {
            "id": "c-1",
            "name": "N",
            "email": "a@x.com",
            "body": "B",
            "postId": 1,
        },
        {
            "id": "c-2",
            "name": "quo vero reiciendis velit similique earum",
            "email": "Jayne_Kuhic@sydney.com",
            "body": "est natus enim nihil est dolore omnis voluptatem numquam",
            "postId": "1",
        },
    ]


@pytest.fixture
def comments_path(tmp_path: Path, stored_comments) -> Path:
    path = tmp_path / "comments.json"
    path.write_text(json.dumps(stored_comments), encoding="utf-8")
    return path


@pytest.fixture
def storage(comments_path: Path) -> JsonFileStorage:
    return JsonFileStorage(comments_path)


@pytest.fixture
def service(storage: JsonFileStorage) -> CommentService:
    return CommentService(storage)


@pytest.fixture
def client(comments_path: Path):
    """HTTP client for an app serving ``comments_path``."""
    app = create_app(Settings(comments_file=str(comments_path), api_prefix="/api/v1"))
    with TestClient(app) as test_client:
        yield test_client
