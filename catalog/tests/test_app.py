import pytest
from fastapi.testclient import TestClient

from catalog.app import main
from catalog.app.config import get_settings
from catalog.app.pagination import configure_pagination


@pytest.fixture
def client(monkeypatch):
    get_settings.cache_clear()
    # Leave pytest's log capture handlers on the root logger alone.
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
    with TestClient(main.app) as test_client:
        yield test_client
    get_settings.cache_clear()
    configure_pagination()


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert client.get("/health").headers["X-Request-ID"]


def test_pagination_defaults_endpoint(client):
    response = client.get("/pagination")
    assert response.json() == {"page": 1, "items": 6, "size": [1, 4, 4, 1]}


def test_pagination_endpoint_parses_query(client):
    response = client.get("/pagination", params={"page": "2", "items": "500"})
    assert response.json() == {"page": 2, "items": 100, "size": [1, 4, 4, 1]}


def test_startup_reads_pagination_settings(monkeypatch):
    get_settings.cache_clear()
    monkeypatch.setenv("PAGINATION_ITEMS", "10")
    monkeypatch.setattr(main, "setup_logging", lambda *args, **kwargs: None)
    try:
        with TestClient(main.app) as test_client:
            assert test_client.get("/pagination").json()["items"] == 10
    finally:
        get_settings.cache_clear()
        configure_pagination()


def test_preview_renders_markdown(client):
    response = client.post("/preview", data={"text": "**bold** <script>alert(1)</script>"})
    assert response.status_code == 200
    assert "<strong>bold</strong>" in response.text
    assert "<script" not in response.text


def test_preview_blank_text(client):
    response = client.post("/preview", data={"text": "   "})
    assert "No description provided." in response.text
