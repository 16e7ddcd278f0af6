from __future__ import annotations


def test_motivation_calculate(client):
    response = client.post(
        "/api/v1/motivation/calculate",
        json={"factTurnover": 700000, "hotTurnover": 600000},
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {
        "factTurnover": 700000,
        "hotTurnover": 600000,
        "forecastTurnover": 300000,
        "totalPotentialTurnover": 1000000,
        "factRate": 0.05,
        "forecastRate": 0.07,
        "salaryFact": 35000,
        "salaryForecast": 70000,
        "potentialGain": 35000,
    }


def test_motivation_with_request_grades_and_weight(client):
    response = client.post(
        "/api/v1/motivation/calculate",
        json={
            "factTurnover": 1000,
            "hotTurnover": 1000,
            "forecastWeight": 1,
            "grades": [{"minTurnover": 0, "maxTurnover": None, "commissionRate": 0.1}],
        },
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalPotentialTurnover"] == 2000
    assert data["salaryForecast"] == 200


def test_motivation_rejects_out_of_range_weight(client):
    response = client.post("/api/v1/motivation/calculate", json={"forecastWeight": 2})
    assert response.status_code == 422


def test_commission_rate(client):
    response = client.post("/api/v1/motivation/commission-rate", json={"turnover": 1500000})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data == {"turnover": 1500000, "commissionRate": 0.07, "commission": 105000}


def test_income_forecast(client):
    response = client.post(
        "/api/v1/motivation/income-forecast",
        json={"currentSales": 300000, "monthlyGoal": 600000, "focusDealsAmount": 200000},
    )
    assert response.status_code == 200
    payload = response.json()
    data = payload["data"]
    assert data["sales"]["projected"] == 620000
    assert data["income"]["projected"] == 31000
    assert data["income"]["potentialGrowth"] == 10000
    assert data["grades"][-1]["maxTurnover"] is None
    assert payload["meta"]["asOfDate"] == "2025-01-15"
