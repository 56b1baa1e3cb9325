"""Tests for the validation API."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from mdtoc.config import MDTOC_ALLOWED_HOSTS
from mdtoc.exceptions import DocumentNotFoundError, DocumentRejectedError
from server.main import app
from server.server_config import MAX_DOCUMENT_SIZE

RAW_URL = "https://raw.githubusercontent.com/mdtoc/docs/main/guide.md"


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestValidateEndpoint:
    """Tests for POST /api/validate."""

    def test_reports_entries(self, client: TestClient, sample_markdown: str) -> None:
        response = client.post("/api/validate", json={"markdown": sample_markdown})

        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is False
        assert [r["status"] for r in body["results"]] == ["ok", "ok", "dangling"]
        assert body["results"][0]["heading"]["slug"] == "setup"
        assert [h["title"] for h in body["unlisted"]] == ["Extra"]
        assert body["sections_tree"].startswith("Sections:")

    def test_valid_cheatsheet(self, client: TestClient, cheatsheet_text: str) -> None:
        response = client.post("/api/validate", json={"markdown": cheatsheet_text})

        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_fetches_url(self, client: TestClient) -> None:
        url = RAW_URL
        with patch(
            "server.query_processor.fetch_markdown",
            AsyncMock(return_value="## Contents\n- [A](#a)\n## A\n"),
        ) as mock_fetch:
            response = client.post("/api/validate", json={"url": url})

        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert response.json()["source"] == url
        mock_fetch.assert_awaited_once_with(
            url, max_bytes=MAX_DOCUMENT_SIZE, allowed_hosts=MDTOC_ALLOWED_HOSTS
        )

    def test_fetch_error_is_400(self, client: TestClient) -> None:
        with patch(
            "server.query_processor.fetch_markdown",
            AsyncMock(side_effect=DocumentNotFoundError("Markdown document not found")),
        ):
            response = client.post("/api/validate", json={"url": RAW_URL})

        assert response.status_code == 400
        assert response.json() == {"error": "Markdown document not found"}

    def test_oversized_remote_document_is_400(self, client: TestClient) -> None:
        with patch(
            "server.query_processor.fetch_markdown",
            AsyncMock(side_effect=DocumentRejectedError("Document exceeds 1048576 bytes")),
        ):
            response = client.post("/api/validate", json={"url": RAW_URL})

        assert response.status_code == 400
        assert "exceeds" in response.json()["error"]

    def test_require_toc_is_400(self, client: TestClient) -> None:
        response = client.post("/api/validate", json={"markdown": "## A\n", "require_toc": True})

        assert response.status_code == 400
        assert "No table of contents" in response.json()["error"]

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"markdown": "# A", "url": RAW_URL},
            {"url": "file:///etc/passwd"},
            {"url": "http://169.254.169.254/latest/meta-data/"},
            {"url": "http://localhost:8000/health"},
            {"url": "https://raw.githubusercontent.com@evil.example/a.md"},
            {"url": "https://raw.githubusercontent.com.evil.example/a.md"},
            {"markdown": "# A", "min_level": 4, "max_level": 2},
            {"markdown": "# A", "max_level": 7},
        ],
    )
    def test_rejects_bad_requests(self, client: TestClient, payload: dict) -> None:
        response = client.post("/api/validate", json=payload)

        assert response.status_code == 422


def test_toc_endpoint(client: TestClient, sample_markdown: str) -> None:
    response = client.post("/api/toc", json={"markdown": sample_markdown})

    assert response.status_code == 200
    assert response.json() == {"toc": "- [Setup](#setup)\n- [Usage](#usage)\n- [Extra](#extra)"}
