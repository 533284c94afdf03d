"""Tests for the GraphData value types."""

import pytest

from graph import Edge, Graph, GraphError, Node, edge_key


class TestEdge:
    def test_undirected_key_is_sorted(self):
        assert Edge("B", "A", 3).key == "A-B"
        assert edge_key("C", "A") == "A-C"

    def test_connects_respects_direction(self):
        e = Edge("A", "B")
        assert e.connects("B", "A")
        assert not e.connects("B", "A", directed=True)

    def test_reweighted_keeps_endpoints(self):
        e = Edge("A", "B", 3, kind="ladder").reweighted(7)
        assert (e.source, e.target, e.weight, e.kind) == ("A", "B", 7, "ladder")

    def test_wire_form(self):
        assert Edge("A", "B", 2).to_dict() == {"from": "A", "to": "B", "weight": 2}
        assert Edge("A", "B", kind="snake").to_dict() == {"from": "A", "to": "B", "weight": 1, "type": "snake"}

    def test_from_dict_reads_wire_form(self):
        e = Edge.from_dict({"from": "A", "to": "B", "weight": 5, "type": "ladder"})
        assert (e.source, e.target, e.weight, e.kind) == ("A", "B", 5, "ladder")

    def test_from_dict_accepts_source_target(self):
        e = Edge.from_dict({"source": "A", "target": "B", "kind": "snake"})
        assert (e.source, e.target, e.weight, e.kind) == ("A", "B", 1, "snake")

    def test_from_dict_needs_both_endpoints(self):
        with pytest.raises(KeyError, match="to"):
            Edge.from_dict({"from": "A"})


class TestGraph:
    def test_build_derives_adjacency_from_edges(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0), "C": (2, 0)}, edges=[("A", "B", 2), ("B", "C")])
        assert g.neighbours("B") == ("A", "C")
        assert g.weight("A", "B") == 2
        assert g.weight("C", "B") == 1

    def test_arc_falls_back_to_unit_edge(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, adj={"A": ["B"], "B": ["A"]})
        assert g.edge_between("A", "B") is None
        assert g.arc("A", "B") == Edge("A", "B", 1)

    def test_arc_prefers_the_real_edge(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B", 4)])
        assert g.arc("B", "A").weight == 4

    def test_directed_adjacency_is_one_way(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B")], directed=True)
        assert g.neighbours("A") == ("B",)
        assert g.neighbours("B") == ()
        assert g.incoming("B") == ["A"]

    def test_validate_rejects_unknown_neighbour(self):
        with pytest.raises(GraphError, match="unknown neighbour"):
            Graph.build({"A": (0, 0)}, adj={"A": ["Z"]})

    def test_validate_rejects_unknown_edge_endpoint(self):
        with pytest.raises(GraphError):
            Graph([Node("A")], adj={"A": []}, edges=[Edge("A", "Q")]).validate()

    def test_require_node(self):
        g = Graph.build({"A": (0, 0)})
        assert g.require_node("A") == "A"
        with pytest.raises(GraphError, match="Sink node 'T'"):
            g.require_node("T", role="sink")
        with pytest.raises(GraphError):
            g.require_node(None)

    def test_adjacency_is_read_only(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B")])
        with pytest.raises(TypeError):
            g.adj["A"] = ("B", "B")

    def test_dict_round_trip(self):
        g = Graph.build(
            {"A": (0, 0), "B": (1, 0)}, edges=[("A", "B", 4)], directed=True, layout="tree",
        )
        assert Graph.from_dict(g.to_dict()) == g

    def test_from_adjacency_list_with_weights(self):
        g = Graph.from_adjacency_list("A: B(3) C\nB: C(2)")
        assert g.node_ids() == ["A", "B", "C"]
        assert g.edge_count() == 3
        assert g.weight("A", "B") == 3
        assert g.weight("C", "A") == 1

    def test_from_adjacency_list_rejects_garbage(self):
        with pytest.raises(GraphError):
            Graph.from_adjacency_list("this line has no separator")

    def test_with_topology_leaves_original_untouched(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B")])
        bare = g.with_topology(adj={}, edges=())
        assert bare.edge_count() == 0
        assert g.edge_count() == 1
