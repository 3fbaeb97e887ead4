"""Tests for the HTTP API."""

from uuid import uuid4

from fastapi.testclient import TestClient

from four_six.api.app import create_app
from tests.conftest import ManualClock

SCHEDULE = {"coffee_mass_grams": 20, "flavor": "acidity", "intensity": "strong"}


def test_health(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_profiles(container) -> None:
    client = TestClient(create_app(container))

    data = client.get("/profiles").json()

    assert [flavor["value"] for flavor in data["flavors"]] == [
        "acidity",
        "balanced",
        "sweetness",
    ]
    assert data["intensities"][2] == {"value": "strong", "label": "Forte", "pours": 3}
    assert data["coffee_mass_grams"] == {"min": 10, "max": 50}


def test_compute_schedule(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/schedules",
        json={"coffee_mass_grams": 20, "flavor": "Balanced", "intensity": "MEDIUM"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_water_grams"] == 300
    assert data["flavor"] == "balanced"
    assert data["flavor_label"] == "Equilibrado"
    assert [step["mass_grams"] for step in data["steps"]] == [60, 60, 90, 90]
    assert data["steps"][2]["category"] == "Intensity"
    assert data["steps"][2]["category_label"] == "Intensidade"


def test_compute_schedule_rejects_bad_input(container) -> None:
    client = TestClient(create_app(container))

    zero = client.post("/schedules", json={**SCHEDULE, "coffee_mass_grams": 0})
    bitter = client.post("/schedules", json={**SCHEDULE, "flavor": "bitter"})

    assert zero.status_code == 422
    assert bitter.status_code == 422


def test_recipe_crud(container) -> None:
    client = TestClient(create_app(container))

    created = client.post("/recipes", json={**SCHEDULE, "name": "Bright"})
    assert created.status_code == 201
    recipe_id = created.json()["id"]

    assert [item["name"] for item in client.get("/recipes").json()] == ["Bright"]

    updated = client.put(
        f"/recipes/{recipe_id}",
        json={**SCHEDULE, "name": "Brighter", "coffee_mass_grams": 30},
    )
    assert updated.status_code == 200
    assert updated.json()["coffee_mass_grams"] == 30

    schedule = client.get(f"/recipes/{recipe_id}/schedule").json()
    assert schedule["total_water_grams"] == 450

    assert client.delete(f"/recipes/{recipe_id}").status_code == 204
    assert client.get(f"/recipes/{recipe_id}").status_code == 404
    assert client.delete(f"/recipes/{recipe_id}").status_code == 404


def test_pour_timer_flow(container, clocks: list[ManualClock]) -> None:
    client = TestClient(create_app(container))

    created = client.post("/timers", json={"schedule": SCHEDULE})
    assert created.status_code == 201
    timer = created.json()
    timer_id = timer["id"]
    assert timer["state"] == "idle"
    assert timer["total_duration"] == 250
    assert timer["total_display"] == "04:10"

    started = client.post(f"/timers/{timer_id}/start").json()
    assert started["state"] == "running"

    clocks[0].advance(50)

    snapshot = client.get(f"/timers/{timer_id}").json()
    assert snapshot["active_step_index"] == 1
    assert snapshot["current_step"]["index"] == 2
    assert snapshot["elapsed_display"] == "00:50"
    assert snapshot["timeline"][0]["done"] is True

    events = client.get(f"/timers/{timer_id}/events").json()
    assert events[0] == {
        "kind": "pour_ready",
        "at_second": 50,
        "pour_number": 2,
        "alert": None,
    }

    paused = client.post(f"/timers/{timer_id}/pause").json()
    assert paused["state"] == "paused"
    assert paused["elapsed_seconds"] == 50

    client.post(f"/timers/{timer_id}/start")
    clocks[0].advance(200)
    completed = client.get(f"/timers/{timer_id}").json()
    assert completed["state"] == "completed"
    assert completed["progress"] == 1.0

    again = client.post(f"/timers/{timer_id}/start").json()
    assert again["state"] == "completed"

    reset = client.post(f"/timers/{timer_id}/reset").json()
    assert reset["state"] == "idle"
    assert reset["elapsed_seconds"] == 0

    assert client.delete(f"/timers/{timer_id}").status_code == 204
    assert client.get(f"/timers/{timer_id}").status_code == 404


def test_timer_from_saved_recipe(container) -> None:
    client = TestClient(create_app(container))
    recipe_id = client.post("/recipes", json={**SCHEDULE, "name": "Saved"}).json()["id"]

    response = client.post("/timers", json={"recipe_id": recipe_id})

    assert response.status_code == 201
    data = response.json()
    assert data["recipe_name"] == "Saved"
    assert len(data["schedule"]["steps"]) == 5


def test_timer_requires_exactly_one_source(container) -> None:
    client = TestClient(create_app(container))

    neither = client.post("/timers", json={})
    both = client.post("/timers", json={"recipe_id": "1", "schedule": SCHEDULE})
    missing = client.post("/timers", json={"recipe_id": "missing"})

    assert neither.status_code == 422
    assert both.status_code == 422
    assert missing.status_code == 404


def test_brewing_timer_and_sound_toggle(container, clocks: list[ManualClock]) -> None:
    client = TestClient(create_app(container))

    created = client.post("/timers/brewing").json()
    timer_id = created["id"]
    assert created["kind"] == "brewing"
    assert created["current_pour"] == 1

    muted = client.put(f"/timers/{timer_id}/sound", json={"enabled": False}).json()
    assert muted["sound_enabled"] is False

    client.post(f"/timers/{timer_id}/start")
    clocks[0].advance(45)

    data = client.get(f"/timers/{timer_id}").json()
    assert data["current_pour"] == 2
    events = client.get(f"/timers/{timer_id}/events").json()
    assert [event["kind"] for event in events] == ["pour_ready"]


def test_unknown_timer_is_404(container) -> None:
    client = TestClient(create_app(container))

    assert client.get(f"/timers/{uuid4()}").status_code == 404
    assert client.post(f"/timers/{uuid4()}/start").status_code == 404


def test_shutdown_closes_open_timers(container, clocks: list[ManualClock]) -> None:
    with TestClient(create_app(container)) as client:
        timer_id = client.post("/timers", json={"schedule": SCHEDULE}).json()["id"]
        client.post(f"/timers/{timer_id}/start")
        assert clocks[0].running

    assert not clocks[0].running
    assert container.timer_session_service.open_ids() == []
