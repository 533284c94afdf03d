"""HTTP API tests through the Flask test client."""

import pytest
import requests

from algorithms import REGISTRY
from services.explanation import FAILURE_MESSAGE


def _run(client, **body):
    resp = client.post("/api/run", json=body)
    assert resp.status_code == 200, resp.get_json()
    return resp.get_json()


class TestTopics:
    def test_listing_covers_the_registry(self, client):
        topics = client.get("/api/topics").get_json()["topics"]
        assert {t["key"] for t in topics} == set(REGISTRY)

    def test_topic_card_has_sample_graph(self, client):
        card = client.get("/api/topics/dijkstra").get_json()
        assert card["data_structure"] == "Priority Queue"
        assert len(card["sample_graph"]["nodes"]) == 6

    def test_unknown_topic(self, client):
        resp = client.get("/api/topics/nope")
        assert resp.status_code == 400
        assert "Unknown algorithm" in resp.get_json()["error"]

    def test_comparisons(self, client):
        pairs = client.get("/api/comparisons").get_json()["comparisons"]
        assert {p["key"] for p in pairs} == {"bfs-vs-dfs", "prims-vs-kruskals"}


class TestRun:
    def test_run_returns_first_step_and_metrics(self, client):
        data = _run(client, topic="bfs")
        assert data["topic"] == "bfs"
        assert data["index"] == 0
        assert data["state"] == "idle"
        assert data["total_steps"] == data["metrics"]["total_steps"]
        assert data["step"]["distances"]["A"] == 0
        assert data["step"]["distances"]["B"] == "∞"
        assert data["pseudocode"]

    def test_custom_graph_and_endpoints(self, client):
        graph = {
            "nodes": [{"id": "X", "x": 0, "y": 0}, {"id": "Y", "x": 1, "y": 0}],
            "edges": [{"from": "X", "to": "Y", "weight": 7}],
        }
        data = _run(client, topic="dijkstra", graph=graph, start="X", end="Y")
        assert data["metrics"]["path_cost"] == 7
        assert [n["id"] for n in data["graph"]["nodes"]] == ["X", "Y"]
        assert data["graph"]["edges"] == [{"from": "X", "to": "Y", "weight": 7}]

    def test_source_target_edge_names_still_parse(self, client):
        graph = {
            "nodes": [{"id": "X", "x": 0, "y": 0}, {"id": "Y", "x": 1, "y": 0}],
            "edges": [{"source": "X", "target": "Y", "weight": 3}],
        }
        data = _run(client, topic="dijkstra", graph=graph, start="X", end="Y")
        assert data["metrics"]["path_cost"] == 3

    def test_edge_missing_an_endpoint(self, client):
        graph = {"nodes": [{"id": "X"}], "edges": [{"from": "X", "weight": 3}]}
        resp = client.post("/api/run", json={"topic": "dijkstra", "graph": graph, "start": "X"})
        assert resp.status_code == 400
        assert "Invalid graph" in resp.get_json()["error"]

    @pytest.mark.parametrize("topic", [
        "dijkstra", "prims", "zero_one_bfs", "dial", "desopo_pape", "bellman_ford", "johnson",
    ])
    def test_adjacency_only_graph_counts_unit_weights(self, client, topic):
        graph = {
            "nodes": [{"id": "A"}, {"id": "B"}, {"id": "C"}],
            "adj": {"A": ["B"], "B": ["A", "C"], "C": ["B"]},
        }
        data = _run(client, topic=topic, graph=graph, start="A")
        last = client.post("/api/step/goto", json={"index": data["total_steps"] - 1}).get_json()
        step = last["step"]
        if topic == "johnson":
            assert step["distance_matrix"][0] == [0, 1, 2]
        elif topic == "prims":
            assert sorted(step["mst_edges"]) == ["A-B", "B-C"]
        else:
            assert step["distances"] == {"A": 0, "B": 1, "C": 2}

    def test_seeded_randomized_run_repeats(self, client):
        a = _run(client, topic="karger", seed=4)
        client.post("/api/step/goto", json={"index": a["total_steps"] - 1})
        last_a = client.get("/api/state").get_json()["playback"]["step"]

        b = _run(client, topic="karger", seed=4)
        client.post("/api/step/goto", json={"index": b["total_steps"] - 1})
        last_b = client.get("/api/state").get_json()["playback"]["step"]
        assert last_a == last_b

    @pytest.mark.parametrize("body, fragment", [
        ({}, "Unknown algorithm"),
        ({"topic": "nope"}, "Unknown algorithm"),
        ({"topic": "bfs", "start": "Q"}, "not in the graph"),
        ({"topic": "bfs", "graph": {"nodes": [{"id": "A"}], "adj": {"A": ["Z"]}}}, "Invalid graph"),
    ])
    def test_bad_requests(self, client, body, fragment):
        resp = client.post("/api/run", json=body)
        assert resp.status_code == 400
        assert fragment in resp.get_json()["error"]


class TestStepping:
    def test_navigation(self, client):
        data = _run(client, topic="dijkstra")
        last = data["total_steps"] - 1

        assert client.post("/api/step/next").get_json()["index"] == 1
        assert client.post("/api/step/prev").get_json()["index"] == 0
        assert client.post("/api/step/prev").get_json()["index"] == 0
        assert client.post("/api/step/goto", json={"index": 999}).get_json()["index"] == last
        assert client.post("/api/step/reset").get_json()["index"] == 0

    def test_goto_requires_an_integer(self, client):
        _run(client, topic="bfs")
        assert client.post("/api/step/goto", json={"index": "3"}).status_code == 400
        assert client.post("/api/step/goto", json={"index": True}).status_code == 400

    def test_unknown_action(self, client):
        _run(client, topic="bfs")
        assert client.post("/api/step/jump").status_code == 400

    def test_step_before_run(self, client):
        resp = client.post("/api/step/next")
        assert resp.status_code == 400
        assert "No active run" in resp.get_json()["error"]

    def test_play_auto_advances_on_poll(self, client, clock):
        _run(client, topic="bfs")
        client.post("/api/config/speed", json={"speed": "fast"})
        assert client.post("/api/step/play").get_json()["state"] == "playing"

        clock.advance(700)
        state = client.get("/api/state").get_json()
        assert state["playback"]["index"] == 1

        client.post("/api/step/pause")
        clock.advance(5000)
        assert client.get("/api/state").get_json()["playback"]["index"] == 1

    def test_sessions_are_isolated(self, app):
        first, second = app.test_client(), app.test_client()
        _run(first, topic="bfs")
        first.post("/api/step/next")
        assert second.post("/api/step/next").status_code == 400
        assert first.get("/api/state").get_json()["topic"] == "bfs"


class TestSpeed:
    @pytest.mark.parametrize("speed, expected", [
        ("slow", 2500), ("turbo", 200), (900, 900), ("900", 900), (50, 200), (99999, 3000),
    ])
    def test_speed_values(self, client, speed, expected):
        resp = client.post("/api/config/speed", json={"speed": speed})
        assert resp.get_json() == {"speed_ms": expected}

    def test_unknown_preset(self, client):
        assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400

    def test_applies_to_the_active_run(self, client):
        _run(client, topic="bfs")
        client.post("/api/config/speed", json={"speed": "slow"})
        assert client.post("/api/step/next").get_json()["speed_ms"] == 2500


class TestCompare:
    def test_start_and_step_together(self, client):
        data = client.post("/api/compare/start", json={"pair": "bfs-vs-dfs"}).get_json()
        assert data["index"] == 0
        assert data["comparison"]["left"]["key"] == "bfs"

        for _ in range(data["max_index"] + 5):
            client.post("/api/compare/next")
        state = client.get("/api/compare/state").get_json()
        assert state["index"] == state["max_index"]
        assert state["left"]["index"] == state["left"]["total_steps"] - 1
        assert state["right"]["index"] == state["right"]["total_steps"] - 1

    def test_result(self, client):
        client.post("/api/compare/start", json={"pair": "prims-vs-kruskals"})
        result = client.get("/api/compare/result").get_json()
        assert result["left"]["mst_weight"] == result["right"]["mst_weight"] == 12

    def test_unknown_pair(self, client):
        assert client.post("/api/compare/start", json={"pair": "x"}).status_code == 400

    def test_actions_need_a_comparison(self, client):
        assert client.post("/api/compare/next").status_code == 400
        assert client.get("/api/compare/result").status_code == 400

    def test_state_reports_comparison(self, client):
        client.post("/api/compare/start", json={"pair": "bfs-vs-dfs"})
        assert client.get("/api/state").get_json()["comparison"] == "bfs-vs-dfs"


class TestExplainAndFeedback:
    def test_explain(self, app, client, monkeypatch):
        explainer = app.extensions["graph_animator"]["explainer"]

        class Response:
            def raise_for_status(self):
                pass

            def json(self):
                return {"candidates": [{"content": {"parts": [{"text": "## What is it?"}]}}]}

        monkeypatch.setattr(explainer.session, "post", lambda url, **kw: Response())
        data = client.get("/api/explain/Hamiltonian Path").get_json()
        assert data == {"topic": "Hamiltonian Path", "markdown": "## What is it?"}

    def test_explain_failure_is_a_502(self, app, client, monkeypatch):
        explainer = app.extensions["graph_animator"]["explainer"]

        def fail(url, **kw):
            raise requests.exceptions.Timeout("slow")

        monkeypatch.setattr(explainer.session, "post", fail)
        resp = client.get("/api/explain/BFS")
        assert resp.status_code == 502
        assert resp.get_json() == {"error": FAILURE_MESSAGE, "kind": "explanation_service"}

    def test_feedback_round_trip(self, client):
        assert client.get("/api/feedback/BFS").get_json() == {"topic": "BFS", "feedback": None}
        resp = client.post("/api/feedback/BFS", json={"feedback": "like"})
        assert resp.get_json() == {"topic": "BFS", "feedback": "like"}
        assert client.get("/api/feedback/BFS").get_json()["feedback"] == "like"

    def test_feedback_rejects_other_values(self, client):
        assert client.post("/api/feedback/BFS", json={"feedback": "meh"}).status_code == 400


class TestSessions:
    @pytest.fixture
    def small_app(self, app_config, clock):
        from main import create_app

        app_config.MAX_SESSIONS = 3
        return create_app(app_config, clock=clock)

    def test_table_stays_bounded(self, small_app):
        sessions = small_app.extensions["graph_animator"]["sessions"]
        for _ in range(10):
            _run(small_app.test_client(), topic="bfs")
            assert len(sessions) <= 3
        assert len(sessions) == 3

    def test_least_recently_used_is_dropped(self, small_app):
        clients = [small_app.test_client() for _ in range(4)]
        for c in clients[:3]:
            _run(c, topic="bfs")
        clients[0].post("/api/step/next")
        _run(clients[3], topic="bfs")

        assert clients[0].post("/api/step/next").status_code == 200
        resp = clients[1].post("/api/step/next")
        assert resp.status_code == 400
        assert "No active run" in resp.get_json()["error"]

    def test_reads_create_no_state(self, app):
        sessions = app.extensions["graph_animator"]["sessions"]
        client = app.test_client()
        client.get("/api/topics")
        client.get("/api/topics/bfs")
        state = client.get("/api/state").get_json()
        client.post("/api/step/next")
        client.get("/api/compare/state")
        assert len(sessions) == 0
        assert state == {"topic": None, "speed_ms": sessions.speed_ms, "playback": None, "comparison": None}

    def test_failed_run_creates_no_state(self, app):
        sessions = app.extensions["graph_animator"]["sessions"]
        resp = app.test_client().post("/api/run", json={"topic": "bfs", "start": "Q"})
        assert resp.status_code == 400
        assert len(sessions) == 0

    def test_run_and_compare_share_one_entry(self, app):
        sessions = app.extensions["graph_animator"]["sessions"]
        client = app.test_client()
        _run(client, topic="bfs")
        client.post("/api/compare/start", json={"pair": "bfs-vs-dfs"})
        assert len(sessions) == 1


class TestSessionTable:
    def test_get_does_not_create(self, clock):
        from main import SessionTable

        table = SessionTable(speed_ms=1000, clock=clock, limit=2)
        assert table.get("a") is None
        assert table.get(None) is None
        assert len(table) == 0

    def test_lru_eviction(self, clock):
        from main import SessionTable

        table = SessionTable(speed_ms=1000, clock=clock, limit=2)
        a = table.create("a")
        table.create("b")
        assert table.get("a") is a
        table.create("c")
        assert table.get("b") is None
        assert table.get("a") is a
        assert len(table) == 2

    def test_create_is_idempotent(self, clock):
        from main import SessionTable

        table = SessionTable(speed_ms=1000, clock=clock, limit=2)
        assert table.create("a") is table.create("a")
        assert len(table) == 1
