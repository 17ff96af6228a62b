import pytest
from fastapi.testclient import TestClient

from backend.app.main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_healthz(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_convert_deterministic(client, scenario_a):
    r = client.post("/convert", params={"deterministic": True}, json=scenario_a)
    assert r.status_code == 200
    body = r.json()
    assert list(body["blocks"]) == ["b_1", "root_id"]
    assert body["blocks"]["root_id"]["component"]["content"]["blockIds"] == ["b_1"]


def test_convert_rejects_payload_without_nodes(client):
    r = client.post("/convert", json={"foo": "bar"})
    assert r.status_code == 400
    assert "nodes" in r.json()["detail"]
