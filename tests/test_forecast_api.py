from __future__ import annotations


def test_monthly_forecast(client):
    response = client.post("/api/v1/forecast/monthly", json={"currentSales": 150000, "monthlyGoal": 300000})
    assert response.status_code == 200
    payload = response.json()
    metrics = payload["data"]["metrics"]
    assert metrics["dailyAverage"] == 10000
    assert metrics["projected"] == 310000
    assert metrics["completion"] == 103
    assert metrics["isPacingGood"] is True
    chart = payload["data"]["chartData"]
    assert len(chart) == 31
    assert "forecast" not in chart[14] and chart[14]["actual"] == 150000
    assert "actual" not in chart[15] and chart[15]["forecast"] == 160000
    assert payload["meta"]["asOfDate"] == "2025-01-15"


def test_monthly_forecast_as_of_date(client):
    response = client.post(
        "/api/v1/forecast/monthly",
        json={"currentSales": 0, "monthlyGoal": 280000, "asOf": "2025-02-28"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["data"]["metrics"]["daysRemaining"] == 0
    assert payload["data"]["metrics"]["dailyRequired"] == 0
    assert len(payload["data"]["chartData"]) == 28
    assert payload["meta"]["asOfDate"] == "2025-02-28"


def test_weighted_forecast(client):
    entries = [{"reportDate": f"2025-01-{day:02d}", "amount": 100 if day <= 3 else 1000} for day in range(1, 11)]
    response = client.post("/api/v1/forecast/weighted", json={"dailySales": entries, "monthlyGoal": 30000})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["projected"] == 18980
    assert data["recentDaysCount"] == 7
    assert data["olderDaysCount"] == 3


def test_department_forecast(client):
    response = client.post(
        "/api/v1/forecast/department",
        json={
            "members": [{"id": "a", "monthlyGoal": 100000}, {"id": "b", "monthlyGoal": 200000}],
            "entries": [
                {"reportDate": "2025-01-01", "amount": 50000},
                {"reportDate": "2025-01-10", "amount": 100000},
                {"reportDate": "2024-12-30", "amount": 70000},
            ],
        },
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["teamSize"] == 2
    assert data["metrics"]["goal"] == 300000
    assert data["metrics"]["current"] == 150000
    assert data["metrics"]["completion"] == 103
    assert data["chartData"][0]["actual"] == 50000
    assert data["chartData"][9]["actual"] == 150000


def test_department_goal_override(client):
    response = client.post(
        "/api/v1/forecast/department",
        json={"members": [{"id": "a", "monthlyGoal": 100000}], "departmentGoal": 500000},
    )
    assert response.status_code == 200
    assert response.json()["data"]["metrics"]["goal"] == 500000
