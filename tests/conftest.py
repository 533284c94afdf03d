"""
Pytest configuration for the graph animator tests.

Fixtures shared across the suite: a hand-driven clock and scheduler for
playback tests, a Flask test client wired to in-memory collaborators,
and small reference helpers the algorithm tests check traces against.
"""

from typing import Dict

import pytest

from config import Config
from engine.scheduler import TickScheduler
from graph import Graph


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return TickScheduler(clock=clock)


@pytest.fixture
def app_config(tmp_path):
    config = Config()
    config.TESTING = True
    config.SECRET_KEY = "test-secret"
    config.LOG_LEVEL = "WARNING"
    config.EXPLANATION_API_KEY = "test-key"
    config.FEEDBACK_PATH = str(tmp_path / "feedback.json")
    return config


@pytest.fixture
def app(app_config, clock):
    from main import create_app

    return create_app(app_config, clock=clock)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def shortest_paths():
    """Reference single-source shortest paths (plain Bellman-Ford, no cycles)."""

    def compute(graph: Graph, source: str) -> Dict[str, float]:
        dist = {nid: float("inf") for nid in graph.node_ids()}
        dist[source] = 0
        arcs = []
        for e in graph.edges:
            arcs.append((e.source, e.target, e.weight))
            if not graph.directed:
                arcs.append((e.target, e.source, e.weight))
        for _ in range(graph.node_count() - 1):
            for u, v, w in arcs:
                if dist[u] + w < dist[v]:
                    dist[v] = dist[u] + w
        return dist

    return compute


@pytest.fixture
def edge_weight_total():
    """Sum of graph edge weights for a collection of undirected edge keys."""

    def total(graph: Graph, keys) -> float:
        weights = {e.key: e.weight for e in graph.edges}
        return sum(weights[k] for k in keys)

    return total
