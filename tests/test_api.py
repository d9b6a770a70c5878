import csv
import io

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    return TestClient(app)


BEAM = {
    "nodes": [{"id": "n1", "x": 0.0, "y": 0.0}, {"id": "n2", "x": 4.0, "y": 0.0}],
    "members": [{"id": "m1", "startNodeId": "n1", "endNodeId": "n2", "type": "beam"}],
    "supports": [{"nodeId": "n1", "type": "pin"}, {"nodeId": "n2", "type": "roller"}],
    "loads": [{"type": "member_point", "memberId": "m1", "magnitudeY": -10000.0,
               "location": 2.0}],
}

FLOATING = {
    "nodes": BEAM["nodes"],
    "members": BEAM["members"],
    "supports": [],
    "loads": [],
}


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_analyze_camel_case_response(client):
    r = client.post("/api/analyze", json=BEAM)
    assert r.status_code == 200
    body = r.json()
    assert body["isStable"] is True
    assert body["message"] == "Analysis completed successfully."
    assert body["reactions"]["n1"]["fy"] == pytest.approx(5000.0)
    assert set(body["memberForces"]["m1"]) == {"start", "end"}
    assert "stiffnessMatrix" not in body


def test_analyze_with_matrices(client):
    r = client.post("/api/analyze", params={"include_matrices": True}, json=BEAM)
    body = r.json()
    assert len(body["stiffnessMatrix"]) == 6
    # pin (x, y) + roller (y) leaves 3 free DOFs
    assert len(body["reducedStiffnessMatrix"]) == 3


def test_analyze_unstable_is_not_an_http_error(client):
    r = client.post("/api/analyze", json=FLOATING)
    assert r.status_code == 200
    body = r.json()
    assert body["isStable"] is False
    assert body["displacements"] == {}


def test_analyze_rejects_malformed_body(client):
    r = client.post("/api/analyze", json={"nodes": [{"id": "n1", "x": "far"}]})
    assert r.status_code == 422


def test_analyze_point_load_past_member_end(client):
    model = dict(BEAM, loads=[{"type": "member_point", "memberId": "m1",
                               "magnitudeY": -10.0, "location": 10.0}])
    r = client.post("/api/analyze", json=model)
    assert r.status_code == 200
    body = r.json()
    assert body["isStable"] is False
    assert body["message"].startswith("Invalid input")


def test_export_csv(client):
    r = client.post("/api/export/csv", json=BEAM)
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/csv")

    rows = list(csv.reader(io.StringIO(r.text)))
    assert rows[0] == ["member_id", "end", "axial_N", "shear_N", "moment_Nm"]
    assert [row[:2] for row in rows[1:]] == [["m1", "start"], ["m1", "end"]]
    assert float(rows[1][3]) == pytest.approx(5000.0)


def test_export_csv_unstable(client):
    r = client.post("/api/export/csv", json=FLOATING)
    assert r.status_code == 400
    assert "unstable" in r.json()["detail"].lower()


def test_export_json(client):
    r = client.post("/api/export/json", json=BEAM)
    assert r.status_code == 200
    doc = r.json()
    assert doc["version"] == "1.0"
    assert doc["model"]["members"][0]["startNodeId"] == "n1"
    assert doc["results"]["isStable"] is True
    assert doc["summary"]["sum_ry"] == pytest.approx(10000.0)
    assert doc["summary"]["max_moment"] == pytest.approx(0.0, abs=1e-6)
