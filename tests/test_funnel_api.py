from __future__ import annotations

SCENARIO = {"booked": 10, "meeting1": 8, "meeting2": 4, "contractReview": 3, "push": 2, "deal": 1}


def test_funnel_analysis(client):
    response = client.post("/api/v1/funnel", json={"totals": {**SCENARIO, "refusals": 3, "warming": 1}})
    assert response.status_code == 200
    payload = response.json()
    data = payload["data"]
    assert [stage["id"] for stage in data["funnel"]] == [
        "booked",
        "meeting1",
        "meeting2",
        "contractReview",
        "push",
        "deal",
    ]
    assert data["funnel"][0]["conversion"] == 100
    assert data["funnel"][4]["conversion"] == 66.67
    assert data["funnel"][5]["isRedZone"] is True
    assert data["northStarKpi"]["value"] == 12.5
    assert data["northStarKpi"]["isOnTrack"] is True
    assert data["totalConversion"] == 10
    assert data["sideFlow"]["refusals"]["total"] == 3
    assert data["sideFlow"]["refusals"]["byStage"][1]["stageId"] == "meeting1"
    assert data["sideFlow"]["warming"]["count"] == 1
    assert data["redZones"][0]["stageId"] == "deal"
    assert data["redZones"][0]["severity"] == "critical"
    assert payload["meta"]["source"] == "funnel"
    assert payload["meta"]["asOfDate"] == "2025-01-15"


def test_funnel_benchmark_override(client):
    response = client.post("/api/v1/funnel", json={"totals": SCENARIO, "benchmarks": {"pushToDeal": 40}})
    assert response.status_code == 200
    assert response.json()["data"]["redZones"] == []


def test_funnel_rejects_unknown_benchmark_keys(client):
    response = client.post("/api/v1/funnel", json={"totals": SCENARIO, "benchmarks": {"zoomToDeal": 40}})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"


def test_funnel_validation_error_envelope(client):
    response = client.post("/api/v1/funnel", json={"totals": {"booked": "many"}})
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"


def test_manager_stats(client):
    response = client.post(
        "/api/v1/funnel/manager-stats",
        json={"totals": {**SCENARIO, "sales": 80000}, "planSales": 100000},
    )
    assert response.status_code == 200
    payload = response.json()
    data = payload["data"]
    assert data["bookedToMeeting1"] == 80
    assert data["pushToDeal"] == 50
    assert data["planDeals"] == 1
    assert data["activityScore"] == 90
    assert data["trend"] == "up"
    assert payload["meta"]["currency"] == "RUB"
