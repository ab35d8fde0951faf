# tests/test_fastapi_api.py
import pytest
from fastapi.testclient import TestClient

from portcheck.adapters.api import fastapi_app
from portcheck.config import settings
from tests.fakes import FakeJobQueue, InMemoryResultStore


@pytest.fixture
def client(monkeypatch):
    store = InMemoryResultStore()
    queue = FakeJobQueue()
    monkeypatch.setattr(fastapi_app, "_store", store)
    monkeypatch.setattr(fastapi_app, "_queue", queue)
    monkeypatch.setattr(settings, "API_KEY", None)
    return TestClient(fastapi_app.app), store, queue


def test_health(client):
    c, _, _ = client
    assert c.get("/health").json() == {"status": "ok"}


def test_post_scan_returns_id_and_status(client):
    c, store, queue = client
    r = c.post("/scan", json={"host": "127.0.0.1", "ports": "80,443,8000-8002"})
    assert r.status_code == 200
    data = r.json()
    assert isinstance(data.get("scan_id"), str) and data["scan_id"]
    assert data["status"] == "pending"
    assert data["endpoints"] == 5
    assert queue.jobs == [(data["scan_id"], "127.0.0.1", "80,443,8000-8002")]
    assert store.get(data["scan_id"])["status"] == "pending"


def test_post_scan_without_ports_means_all(client):
    c, _, queue = client
    r = c.post("/scan", json={"host": "example.com"})
    assert r.json()["endpoints"] == 65535
    assert queue.jobs[0][2] is None


def test_blank_host_rejected(client):
    c, _, queue = client
    assert c.post("/scan", json={"host": "  "}).status_code == 400
    assert queue.jobs == []


def test_endpoint_cap(client, monkeypatch):
    c, _, _ = client
    monkeypatch.setattr(settings, "MAX_ENDPOINTS_PER_JOB", 10)
    assert c.post("/scan", json={"host": "h", "ports": "1-11"}).status_code == 400


def test_api_key_enforced(client, monkeypatch):
    c, _, _ = client
    monkeypatch.setattr(settings, "API_KEY", "secret")
    assert c.post("/scan", json={"host": "h", "ports": "80"}).status_code == 401
    ok = c.post("/scan", json={"host": "h", "ports": "80"}, headers={"X-API-Key": "secret"})
    assert ok.status_code == 200


def test_get_scan_roundtrip(client):
    c, store, _ = client
    store.set_pending("abc")
    store.add_open("abc", "h:22")
    assert c.get("/scan/abc").json() == {"status": "pending", "open": ["h:22"]}


def test_get_unknown_scan_returns_404(client):
    c, _, _ = client
    r = c.get("/scan/notfound")
    assert r.status_code == 404
