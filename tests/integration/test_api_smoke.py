from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from sortstep.api.routes.engine import replace_handle
from sortstep.app.main import create_app
from sortstep.core.engine.assembly import assemble


@pytest.fixture()
def client() -> Iterator[TestClient]:
    replace_handle(assemble(10, algorithm="quick", seed=1))
    with TestClient(create_app()) as c:
        yield c
    replace_handle(None)


def test_health(client: TestClient) -> None:
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_state_and_step(client: TestClient) -> None:
    r = client.get("/api/engine/state")
    assert r.status_code == 200
    body = r.json()
    assert sorted(body["array"]) == list(range(10))
    assert body["algorithm"] == "quick"
    assert body["algorithm_name"] == "Quick Sort"
    assert body["comparisons"] == 0
    assert body["paused"] is True
    assert (body["average_complexity"], body["worst_complexity"]) == ("O(n log n)", "O(n²)")

    r = client.post("/api/engine/step", json={"count": 5})
    assert r.status_code == 200
    assert r.json()["performed"] == 5
    assert r.json()["state"]["steps"] == 5

    r = client.post("/api/engine/step")
    assert r.json()["performed"] == 1


def test_algorithm_switch_resets_by_default(client: TestClient) -> None:
    client.post("/api/engine/step", json={"count": 20})

    r = client.post("/api/engine/algorithm", json={"algorithm": "Bubble Sort"})
    assert r.status_code == 200
    body = r.json()
    assert body["algorithm"] == "bubble"
    assert (body["comparisons"], body["swaps"], body["steps"]) == (0, 0, 0)
    assert body["cursors"] == {"current": 0, "compare": 1, "partition": 10}

    r = client.post("/api/engine/step", json={"count": 100000})
    body = r.json()
    assert r.json()["performed"] == 45
    assert body["state"]["finished"] is True
    assert body["state"]["array"] == list(range(10))


def test_unknown_algorithm_is_400(client: TestClient) -> None:
    r = client.post("/api/engine/algorithm", json={"algorithm": "bogo"})
    assert r.status_code == 400


def test_speed_is_clamped(client: TestClient) -> None:
    r = client.post("/api/engine/speed", json={"speed": 42})
    assert r.json()["speed"] == 5.0


def test_reset_and_shuffle(client: TestClient) -> None:
    client.post("/api/engine/step", json={"count": 10})

    r = client.post("/api/engine/shuffle")
    assert r.json()["comparisons"] > 0
    assert r.json()["finished"] is False

    r = client.post("/api/engine/reset")
    assert r.json()["comparisons"] == 0
    assert sorted(r.json()["array"]) == list(range(10))


def test_algorithms_listing(client: TestClient) -> None:
    r = client.get("/api/engine/algorithms")
    algorithms = r.json()["algorithms"]
    assert list(algorithms) == ["quick", "merge", "bubble", "heap"]
    assert algorithms["bubble"] == {
        "name": "Bubble Sort",
        "average_complexity": "O(n²)",
        "worst_complexity": "O(n²)",
    }
    assert algorithms["heap"]["worst_complexity"] == "O(n log n)"
    assert algorithms["quick"]["worst_complexity"] == "O(n²)"


def test_tick_does_nothing_while_paused(client: TestClient) -> None:
    r = client.post("/api/engine/tick", json={"ticks": 5})
    assert r.status_code == 200
    assert r.json()["performed"] == 0
    assert r.json()["state"]["steps"] == 0


def test_play_tick_pause(client: TestClient) -> None:
    r = client.post("/api/engine/play")
    assert r.json()["paused"] is False

    r = client.post("/api/engine/tick", json={"ticks": 3})
    assert r.json()["performed"] == 3
    assert r.json()["state"]["steps"] == 3

    r = client.post("/api/engine/pause")
    assert r.json()["paused"] is True

    r = client.post("/api/engine/tick")
    assert r.json()["performed"] == 0


def test_playback_runs_to_completion_and_pauses(client: TestClient) -> None:
    client.post("/api/engine/speed", json={"speed": 5})
    client.post("/api/engine/play")

    r = client.post("/api/engine/tick", json={"ticks": 1000})
    state = r.json()["state"]
    assert state["finished"] is True
    assert state["paused"] is True
    assert state["array"] == list(range(10))
    assert r.json()["performed"] == state["steps"]
