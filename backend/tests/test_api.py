"""HTTP level tests for the markup endpoints."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from ginko_markup.api.deps import get_markup_transformer
from ginko_markup.ids import SequentialIdSource
from ginko_markup.main import app
from ginko_markup.services.markup_transformer import MarkupTransformer


@pytest.fixture
def client() -> Iterator[TestClient]:
    app.dependency_overrides[get_markup_transformer] = lambda: MarkupTransformer(id_source=SequentialIdSource("t"))
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_health(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert "callout" in body["rules"]


def test_transform(client: TestClient) -> None:
    response = client.post("/api/markup/transform", json={"text": "::warning-\n--title Mind the gap\nBody\n::\n"})

    assert response.status_code == 200
    assert response.json() == {
        "output": '::ginko-callout{type="warning" collapsed title="Mind the gap"}\nBody\n::\n',
    }


def test_transform_reports_parse_errors(client: TestClient) -> None:
    response = client.post("/api/markup/transform", json={"text": "Intro\n::note\nHello"})

    assert response.status_code == 422
    assert response.json()["detail"] == {"message": "Line 2: Unclosed block: note", "line": 2}


def test_transform_requires_text(client: TestClient) -> None:
    response = client.post("/api/markup/transform", json={})

    assert response.status_code == 422


def test_parse_returns_tree(client: TestClient) -> None:
    response = client.post("/api/markup/parse", json={"text": "::note\nHello\n::\n"})

    assert response.status_code == 200
    assert response.json()["ast"] == {
        "type": "Document",
        "children": [
            {
                "type": "Block",
                "name": "note",
                "properties": {},
                "children": [{"type": "Text", "content": "Hello\n"}],
            }
        ],
    }


def test_parse_reports_stray_block_end(client: TestClient) -> None:
    response = client.post("/api/markup/parse", json={"text": "Text\n::\n"})

    assert response.status_code == 422
    assert response.json()["detail"]["line"] == 2
