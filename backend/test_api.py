"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from eventflow.main import app
from eventflow.samples import list_examples

SCENARIO = "A: service\nB: service\nA -> B"


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_examples(client):
    data = client.get("/examples").json()

    assert data["status"] == "success"
    assert data["examples"] == list_examples()


def test_example_by_name(client):
    data = client.get("/examples/payment").json()

    assert data["name"] == "payment"
    assert "flow OrderFlow" in data["dsl"]


def test_unknown_example_is_404(client):
    assert client.get("/examples/nope").status_code == 404


def test_parse(client):
    data = client.post("/parse", json={"dsl": SCENARIO}).json()

    assert data["status"] == "success"
    assert [n["id"] for n in data["topology"]["nodes"]] == ["A", "B"]
    assert data["topology"]["edges"] == [
        {"source": "A", "target": "B", "from_side": "right", "to_side": "left"}
    ]
    assert data["topology"]["events"][0]["name"] == "event"
    assert data["errors"] == []


def test_parse_with_errors_is_a_warning(client):
    data = client.post("/parse", json={"dsl": "A: rocket\nA -> B"}).json()

    assert data["status"] == "warning"
    assert data["errors"][0]["line"] == 1
    assert data["errors"][0]["message"].startswith('Unknown node type "rocket"')


def test_parse_requires_dsl(client):
    assert client.post("/parse", json={}).status_code == 422


def test_validate(client):
    data = client.post("/validate", json={"dsl": 'subsystem "X" { nodes: [Y] }'}).json()

    assert data["status"] == "invalid"
    assert data["valid"] is False
    assert data["errors"] == ['Subsystem "X" references unknown node: Y']
    assert data["parse_errors"] == []


def test_layout(client):
    data = client.post("/layout", json={"dsl": SCENARIO}).json()

    assert data["status"] == "success"
    assert [(n["id"], n["x"], n["y"], n["level"]) for n in data["nodes"]] == [
        ("A", 0, 0, 0),
        ("B", 220, 0, 1),
    ]
    edge = data["edges"][0]
    assert (edge["source"], edge["target"], edge["offset_index"]) == ("A", "B", 0)
    assert set(edge["path"]) == {"start", "cp1", "cp2", "end"}


def test_simulate(client):
    data = client.post(
        "/simulate",
        json={"dsl": SCENARIO, "duration_ms": 1200, "frame_ms": 1200, "seed": 1},
    ).json()

    assert data["status"] == "success"
    assert data["spawned"] == 2
    assert data["completed"] == 0
    assert len(data["particles"]) == 2
    assert data["particles"][0]["state"] == "traveling"
    assert data["delayed"] == []
    assert data["elapsed_ms"] == 1200


def test_simulate_clamps_speed(client):
    data = client.post("/simulate", json={"dsl": SCENARIO, "duration_ms": 0, "speed": 50}).json()
    assert data["speed"] == 4


def test_simulate_rejects_bad_edge_selection(client):
    response = client.post("/simulate", json={"dsl": SCENARIO, "edge_selection": "sideways"})
    assert response.status_code == 422


def test_simulate_rejects_huge_duration(client):
    response = client.post("/simulate", json={"dsl": SCENARIO, "duration_ms": 10_000_000})
    assert response.status_code == 422


def test_export_mermaid(client):
    data = client.post("/export/mermaid", json={"dsl": SCENARIO}).json()

    assert data["status"] == "success"
    assert data["mermaid"].startswith("flowchart LR")
    assert "A --> B" in data["mermaid"]


def test_render_svg(client):
    response = client.post("/render/svg", json={"dsl": SCENARIO, "duration_ms": 600, "seed": 1})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert response.text.startswith("<svg")
    assert 'data-id="A"' in response.text
