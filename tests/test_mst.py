"""Union-find family: Kruskal, Borůvka, the DSU walkthrough, dynamic connectivity, plus Prim's."""

import pytest

from graph import Graph, GraphError
from algorithms import generate
from algorithms.boruvka import SAMPLE_GRAPH as BORUVKA_GRAPH
from algorithms.comparisons import MST_GRAPH
from algorithms.dsu import SAMPLE_GRAPH as DSU_GRAPH
from algorithms.prims import SAMPLE_GRAPH as PRIMS_GRAPH


@pytest.mark.parametrize("graph, expected", [(PRIMS_GRAPH, 18), (MST_GRAPH, 12)])
def test_prims_and_kruskal_agree(graph, expected, edge_weight_total):
    prims = generate("prims", graph, "A")[-1].mst_edges
    kruskal = generate("kruskal", graph)[-1].mst_edges
    assert edge_weight_total(graph, prims) == expected
    assert edge_weight_total(graph, kruskal) == expected
    assert len(prims) == len(kruskal) == graph.node_count() - 1


class TestPrims:
    def test_cycle_edges_are_discarded(self):
        steps = generate("prims", PRIMS_GRAPH, "A")
        assert any(s.description.startswith("Both nodes") for s in steps)

    def test_visits_every_node(self):
        assert generate("prims", PRIMS_GRAPH, "A")[-1].visited == frozenset("ABCDEF")


class TestKruskal:
    def test_single_set_at_the_end(self):
        final = generate("kruskal", PRIMS_GRAPH)[-1]
        assert len(set(final.node_sets.values())) == 1

    def test_edges_considered_in_weight_order(self):
        steps = generate("kruskal", PRIMS_GRAPH)
        weights = [s.highlighted_edge.weight for s in steps if s.description.startswith("Considering")]
        assert weights == sorted(weights)

    def test_disconnected_graph_gives_a_forest(self):
        g = Graph.build(
            {"A": (0, 0), "B": (1, 0), "C": (2, 0), "D": (3, 0)},
            edges=[("A", "B", 1), ("C", "D", 2)],
        )
        final = generate("kruskal", g)[-1]
        assert final.mst_edges == frozenset({"A-B", "C-D"})
        assert len(set(final.node_sets.values())) == 2


class TestBoruvka:
    def test_weight_matches_kruskal(self, edge_weight_total):
        boruvka = generate("boruvka", BORUVKA_GRAPH)[-1].mst_edges
        kruskal = generate("kruskal", BORUVKA_GRAPH)[-1].mst_edges
        assert edge_weight_total(BORUVKA_GRAPH, boruvka) == 24
        assert boruvka == kruskal

    def test_component_count_shrinks_each_phase(self):
        steps = generate("boruvka", BORUVKA_GRAPH)
        counts = [int(s.frontier[0]) for s in steps if "complete. Merge" in s.description]
        assert counts == sorted(counts, reverse=True)
        assert counts[-1] == 1

    def test_disconnected_graph_stops(self):
        g = Graph.build(
            {"A": (0, 0), "B": (1, 0), "C": (2, 0)},
            edges=[("A", "B", 1)],
        )
        final = generate("boruvka", g)[-1]
        assert final.mst_edges == frozenset({"A-B"})
        assert "forest" in final.description


class TestDSUWalkthrough:
    def test_find_shows_walk_then_compresses(self):
        steps = generate("dsu", DSU_GRAPH)
        find_h = next(i for i, s in enumerate(steps) if s.description.startswith("Operation: Find(H)"))
        assert steps[find_h].highlighted_path == ("H", "G", "E", "A")

        after = steps[find_h + 1].graph_data
        assert "H" in after.neighbours("A")

    def test_forest_is_drawn_as_parent_to_children(self):
        final = generate("dsu", DSU_GRAPH)[-1]
        assert final.graph_data.layout == "tree"
        assert len(set(final.node_sets.values())) == 1

    def test_unknown_operand(self):
        with pytest.raises(GraphError):
            generate("dsu", DSU_GRAPH, operations=[("union", "A", "Z")])

    def test_unknown_operation(self):
        with pytest.raises(ValueError, match="Unknown DSU operation"):
            generate("dsu", DSU_GRAPH, operations=[("split", "A", None)])


class TestDynamicConnectivity:
    def test_queries_before_and_after_adds(self):
        steps = generate("dynamic_connectivity")
        assert steps[2].description == "find(A) is A, find(C) is C. They are different. Result: No."
        assert steps[-1].description == "find(A) is A, find(G) is A. They are the same. Result: Yes."

    def test_added_edges_accumulate(self):
        final = generate("dynamic_connectivity")[-1]
        assert final.mst_edges == frozenset({"A-B", "C-D", "E-F", "G-H", "A-D", "E-G", "B-F"})
        assert len(set(final.node_sets.values())) == 1

    def test_redundant_edge_is_reported(self):
        ops = [("add", "A", "B"), ("add", "B", "C"), ("add", "A", "C")]
        steps = generate("dynamic_connectivity", operations=ops)
        assert steps[-1].description == "A and C were already connected. The edge closes a cycle."

    def test_edges_of_a_custom_graph_become_adds(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0), "C": (2, 0)}, edges=[("A", "B")])
        steps = generate("dynamic_connectivity", g, "A", "C")
        assert [s.frontier for s in steps[1:]] == [("Add(A,B)",)] * 2 + [("Query(A,C)",)] * 2
        assert steps[-1].description.endswith("Result: No.")

    def test_unknown_operation(self):
        with pytest.raises(ValueError, match="Unknown connectivity operation"):
            generate("dynamic_connectivity", operations=[("remove", "A", "B")])

    def test_unknown_operand(self):
        with pytest.raises(GraphError):
            generate("dynamic_connectivity", operations=[("query", "A", "Z")])
