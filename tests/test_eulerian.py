"""Fleury's algorithm."""

import pytest

from graph import Graph, GraphError, edge_key
from algorithms import generate
from algorithms.fleury import SAMPLE_GRAPH, is_bridge


class TestFleury:
    def test_uses_every_edge_once(self):
        final = generate("fleury", SAMPLE_GRAPH)[-1]
        path = final.highlighted_path
        used = sorted(edge_key(u, v) for u, v in zip(path, path[1:]))
        assert used == sorted(e.key for e in SAMPLE_GRAPH.edges)
        assert final.description.endswith("Eulerian path found.")

    def test_starts_and_ends_on_odd_degree_nodes(self):
        path = generate("fleury", SAMPLE_GRAPH)[-1].highlighted_path
        assert path[0] == "A"
        assert path[-1] == "B"

    def test_remaining_graph_shrinks(self):
        steps = generate("fleury", SAMPLE_GRAPH)
        assert steps[0].graph_data.edge_count() == SAMPLE_GRAPH.edge_count()
        assert steps[-1].graph_data.edge_count() == 0

    def test_reports_when_stuck(self):
        g = Graph.build(
            {"A": (0, 0), "B": (1, 0), "C": (2, 0), "D": (3, 0)},
            edges=[("A", "B"), ("C", "D")],
        )
        final = generate("fleury", g, "A")[-1]
        assert final.description.startswith("Stuck")


def test_is_bridge():
    adj = {"A": ["B", "C"], "B": ["A", "C"], "C": ["A", "B", "D"], "D": ["C"]}
    assert is_bridge(adj, "C", "D")
    assert not is_bridge(adj, "A", "B")
    assert adj["C"] == ["A", "B", "D"]


class TestFleuryInput:
    def test_directed_graph_is_rejected(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B")], directed=True)
        with pytest.raises(GraphError, match="undirected"):
            generate("fleury", g, "A")

    def test_asymmetric_adjacency_is_rejected(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, adj={"A": ["B"], "B": []})
        with pytest.raises(GraphError, match="not symmetric"):
            generate("fleury", g, "A")

    def test_adjacency_only_graph(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0), "C": (2, 0)}, adj={"A": ["B"], "B": ["A", "C"], "C": ["B"]})
        final = generate("fleury", g)[-1]
        assert final.highlighted_path in (("A", "B", "C"), ("C", "B", "A"))
