"""Tests for the run recorder and its analytics."""

import random

import pytest

from algorithms.comparisons import MST_GRAPH, TRAVERSAL_GRAPH
from engine.recorder import Recorder, compare


def _run(key, **kw):
    rec = Recorder()
    rec.start(key, **kw)
    rec.run_to_completion()
    return rec


class TestRecorder:
    def test_dijkstra_path_metrics(self):
        m = _run("dijkstra", start_node="A", end_node="F").metrics
        assert m.path_found
        assert m.path_length == 3
        assert m.path_cost == 6
        assert m.total_steps > 0
        assert m.nodes_visited == 6

    def test_mst_weight(self):
        assert _run("kruskal", graph=MST_GRAPH).metrics.mst_weight == 12
        assert _run("prims").metrics.mst_weight == 18

    def test_negative_cycle_flag(self):
        assert not _run("bellman_ford").metrics.negative_cycle

    def test_defaults_come_from_the_registry(self):
        rec = _run("ford_fulkerson")
        assert rec.metrics.start_node == "S"
        assert rec.metrics.end_node == "T"
        assert rec.algo_info.key == "ford_fulkerson"
        assert rec.graph is rec.algo_info.sample_graph

    def test_params_are_forwarded(self):
        a = _run("karger", rng=random.Random(1)).steps
        b = _run("karger", rng=random.Random(1)).steps
        assert a == b

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError):
            Recorder().start("nope")

    def test_run_requires_start(self):
        with pytest.raises(RuntimeError):
            Recorder().run_to_completion()

    def test_export(self):
        data = _run("bfs").export()
        assert data["algo_key"] == "bfs"
        assert data["start_node"] == "A"
        assert len(data["steps"]) == data["metrics"]["total_steps"]
        assert data["graph"]["nodes"]


def test_compare_bfs_and_dfs():
    bfs = _run("bfs", graph=TRAVERSAL_GRAPH, start_node="A")
    dfs = _run("dfs", graph=TRAVERSAL_GRAPH, start_node="A")
    result = compare(bfs, dfs)
    assert result.left.algo_key == "bfs"
    assert result.right.algo_key == "dfs"
    if bfs.metrics.total_steps == dfs.metrics.total_steps:
        assert result.winner_steps == "tie"
    else:
        assert result.winner_steps in (bfs.metrics.algo_label, dfs.metrics.algo_label)
    assert result.to_dict()["left"]["algo_key"] == "bfs"
