from fastapi.testclient import TestClient

from johnson_apsp.api import app


client = TestClient(app)


def test_health():
    assert client.get("/health").json() == {"status": "ok"}


def test_apsp_endpoint():
    r = client.post("/api/apsp", json={"num_vertices": 4, "edges": [[1, 2, 1], [2, 3, 2], [2, 4, -3]]})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] and not body["negative_cycle"]
    assert body["shortest"] == -3
    assert body["distances"]["2"] == {"1": None, "2": 0, "3": 2, "4": -3}
    assert "X-Request-Id" in r.headers


def test_apsp_endpoint_single_source():
    r = client.post("/api/apsp", json={"num_vertices": 2, "edges": [[1, 2, 5]], "source": 1})
    assert r.json()["distances"] == {"1": {"1": 0, "2": 5}}


def test_apsp_negative_cycle():
    r = client.post("/api/apsp", json={"num_vertices": 2, "edges": [[1, 2, 1], [2, 1, -2]]})
    assert r.status_code == 200
    body = r.json()
    assert body["negative_cycle"] and not body["ok"]
    assert body["distances"] is None
    status = client.get("/api/status").json()
    assert status["last_result"]["negative_cycle"] is True
    assert status["last_result"]["num_vertices"] == 2
    assert status["last_result"]["num_edges"] == 2


def test_apsp_malformed_and_unknown_source():
    r = client.post("/api/apsp", json={"num_vertices": 2, "edges": [[1, 3, 1]]})
    assert r.status_code == 400
    r = client.post("/api/apsp", json={"num_vertices": 2, "num_edges": 3, "edges": [[1, 2, 1]]})
    assert r.status_code == 400
    r = client.post("/api/apsp", json={"num_vertices": 2, "edges": [[1, 2, 1]], "source": 7})
    assert r.status_code == 404


def test_potentials_endpoint():
    r = client.post("/api/potentials", json={"num_vertices": 4, "edges": [[3, 1, -1], [1, 2, -2], [2, 4, 4], [4, 3, 1]]})
    assert r.json() == {"ok": True, "negative_cycle": False, "potentials": {"1": -1, "2": -3, "3": 0, "4": 0}}
