#!/usr/bin/env python3
"""Run the HTTP surface in-process: build strategies, report progress, adjust, read the dashboard."""

import sys

import pytest

CONTEXT = {
    "guestCount": 200,
    "adultPercentage": 100,
    "kidPercentage": 0,
    "weather": "sunny",
    "temperature": 32,
    "mealTime": "lunch",
    "eventType": "wedding",
    "dietaryRequirements": [],
}
MENU = [
    {"name": "Paneer Butter Masala", "category": "MainCourse"},
    {"name": "Gulab Jamun", "category": "Dessert"},
    {"name": "Masala Chaas", "category": "Drinks"},
]
EVENTS = "/api/v1/events/5"
PANEER = f"{EVENTS}/dishes/Paneer Butter Masala"


@pytest.fixture
def built(client):
    response = client.post(f"{EVENTS}/strategies", json={"context": CONTEXT, "approvedMenu": MENU})
    assert response.status_code == 200
    return response.json()


def test_health_and_ready(client):
    assert client.get("/health").json()["status"] == "healthy"
    assert client.get("/ready").json() == {"status": "ready"}


def test_build_strategies(client, built):
    assert [s["dishName"] for s in built] == [m["name"] for m in MENU]
    paneer = built[0]
    assert paneer["totalPortions"] == 170
    assert paneer["riskLevel"] == "high"
    assert (paneer["batch1Quantity"], paneer["batch2Quantity"], paneer["batch3Quantity"]) == (68, 59, 43)
    for s in built:
        assert s["batch1Quantity"] + s["batch2Quantity"] + s["batch3Quantity"] == s["totalPortions"]
    assert client.get(f"{EVENTS}/strategies").json() == built


def test_progress_then_adjust(client, built):
    response = client.post(f"{PANEER}/progress", json={"state": "Batch1Complete"})
    assert response.json() == {"dishName": "Paneer Butter Masala", "state": "Batch1Complete"}

    response = client.post(f"{PANEER}/adjust", json={"direction": "reduce", "observedConsumption": 40})
    assert response.status_code == 200
    body = response.json()
    assert body["strategy"]["batch2Quantity"] == 48
    assert body["strategy"]["batch3Quantity"] == 35
    assert body["percentChange"] == 18
    assert body["previousBatch2Quantity"] == 59

    stored = client.get(f"{EVENTS}/strategies").json()[0]
    assert stored["batch2Quantity"] == 48


def test_adjust_before_batch1_complete_conflicts(client, built):
    response = client.post(f"{PANEER}/adjust", json={"direction": "reduce", "observedConsumption": 40})
    assert response.status_code == 409
    assert response.json()["error"] == "state_violation"


def test_skipping_progress_conflicts(client, built):
    response = client.post(f"{PANEER}/progress", json={"state": "Done"})
    assert response.status_code == 409
    assert response.json()["allowed_state"] == "Batch1Complete"


def test_unknown_dish_is_404(client, built):
    response = client.post(f"{EVENTS}/dishes/Rasmalai/adjust", json={"direction": "increase", "observedConsumption": 3})
    assert response.status_code == 404
    assert response.json()["error"] == "unknown_dish"


def test_direction_violation_conflicts(client):
    context = {"guestCount": 10}
    menu = [{"name": "Kulfi", "category": "Dessert", "approvedPortions": 3}]
    client.post(f"{EVENTS}/strategies", json={"context": context, "approvedMenu": menu})
    client.post(f"{EVENTS}/dishes/Kulfi/progress", json={"state": "Batch1Complete"})

    response = client.post(f"{EVENTS}/dishes/Kulfi/adjust", json={"direction": "increase", "observedConsumption": 2})
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "adjustment_direction_violation"
    assert body["old_batch2"] == body["attempted_batch2"] == 1


@pytest.mark.parametrize("value", ["NaN", "Infinity", "-Infinity", "-3"])
def test_non_finite_or_negative_consumption_is_422(client, built, value):
    client.post(f"{PANEER}/progress", json={"state": "Batch1Complete"})
    response = client.post(
        f"{PANEER}/adjust",
        content='{"direction": "reduce", "observedConsumption": ' + value + "}",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"
    assert client.get(f"{EVENTS}/strategies").json()[0]["batch2Quantity"] == 59


def test_invalid_inputs_are_422(client):
    bad_guests = {"context": {**CONTEXT, "guestCount": 0}, "approvedMenu": MENU}
    response = client.post(f"{EVENTS}/strategies", json=bad_guests)
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"

    empty_menu = {"context": CONTEXT, "approvedMenu": []}
    assert client.post(f"{EVENTS}/strategies", json=empty_menu).status_code == 422

    missing_context = {"approvedMenu": MENU}
    response = client.post(f"{EVENTS}/strategies", json=missing_context)
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"


def test_kitchen_and_dashboard(client, built):
    client.post(f"{PANEER}/progress", json={"state": "Batch1Complete"})
    client.post(f"{PANEER}/adjust", json={"direction": "reduce"})

    kitchen = client.get(f"{EVENTS}/kitchen").json()
    assert kitchen[0]["state"] == "Batch1Complete"
    assert kitchen[0]["canAdjust"] is True
    assert kitchen[1]["nextAction"] == "Complete Batch 1 first"

    board = client.get(f"{EVENTS}/dashboard").json()
    assert board["summary"]["totalDishes"] == 3
    assert board["summary"]["highRiskCount"] == 1
    assert board["alerts"][0] == "Batch strategies built for 3 dishes"
    assert board["alerts"][-1].startswith("Remaining batches of Paneer Butter Masala reduced by 18%")


def test_portion_endpoints(client):
    response = client.post(
        "/api/v1/portions/estimate",
        json={"guestCount": 200, "items": [{"name": "Dal Makhani", "category": "MainCourse"}]},
    )
    assert response.json()["items"][0]["estimatedPortions"] == 170

    preview = client.post(
        "/api/v1/portions/preview",
        json={"guestCount": 200, "category": "MainCourse", "dishCount": 2},
    ).json()
    assert preview["portionsPerDish"] == 85
    assert preview["isReasonable"] is True


def test_risk_endpoint(client):
    response = client.post(
        "/api/v1/risk/classify",
        json={"dish": {"name": "Paneer Butter Masala", "category": "MainCourse"}, "totalPortions": 170, "context": CONTEXT},
    )
    assert response.json()["riskScore"] == 77
    assert response.json()["riskLevel"] == "high"


def test_metrics_are_exposed(client, built):
    response = client.get("/metrics/")
    assert response.status_code == 200
    assert "batch_engine_strategies_built_total" in response.text


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
