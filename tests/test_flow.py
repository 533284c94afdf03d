"""Flow family and cuts: Ford-Fulkerson, min cut, Dinic, push-relabel, Karger."""

import random

import pytest

from graph import GraphError
from algorithms import generate
from algorithms.dinic import SAMPLE_GRAPH as DINIC_GRAPH
from algorithms.ford_fulkerson import SAMPLE_GRAPH as FLOW_GRAPH, ford_fulkerson
from algorithms.karger import SAMPLE_GRAPH as KARGER_GRAPH
from algorithms.push_relabel import SAMPLE_GRAPH as PR_GRAPH


def _outflow(flows, source):
    return sum(f for (u, _), f in flows.items() if u == source)


def _assert_feasible(graph, flows):
    for (u, v), f in flows.items():
        assert f == -flows[(v, u)]
    for e in graph.edges:
        assert flows[(e.source, e.target)] <= e.weight


class TestFordFulkerson:
    def test_max_flow_value(self):
        final = generate("ford_fulkerson", FLOW_GRAPH, "S", "T")[-1]
        assert _outflow(final.flows, "S") == 18
        assert final.frontier == ("18",)

    def test_flows_stay_feasible_every_step(self):
        for step in generate("ford_fulkerson", FLOW_GRAPH, "S", "T"):
            _assert_feasible(FLOW_GRAPH, step.flows)

    def test_needs_a_sink(self):
        with pytest.raises(GraphError, match="Sink"):
            list(ford_fulkerson(FLOW_GRAPH, "S", None))


class TestMinCut:
    def test_cut_capacity_equals_max_flow(self):
        final = generate("min_cut", FLOW_GRAPH, "S", "T")[-1]
        weights = {e.key: e.weight for e in FLOW_GRAPH.edges}
        assert sum(weights[k] for k in final.mst_edges) == 18
        assert final.frontier == ("18 / 18",)

    def test_source_side(self):
        final = generate("min_cut", FLOW_GRAPH, "S", "T")[-1]
        assert "S" in final.cut_set and "T" not in final.cut_set


class TestDinic:
    def test_max_flow_value(self):
        final = generate("dinic", DINIC_GRAPH, "S", "T")[-1]
        assert _outflow(final.flows, "S") == 13
        _assert_feasible(DINIC_GRAPH, final.flows)

    def test_levels_strictly_increase_along_pushed_paths(self):
        for step in generate("dinic", DINIC_GRAPH, "S", "T"):
            if step.highlighted_path:
                levels = [step.distances[n] for n in step.highlighted_path]
                assert levels == list(range(len(levels)))

    def test_agrees_with_ford_fulkerson(self):
        dinic = generate("dinic", FLOW_GRAPH, "S", "T")[-1]
        assert _outflow(dinic.flows, "S") == 18


class TestPushRelabel:
    def test_excess_at_sink_is_max_flow(self):
        final = generate("push_relabel", PR_GRAPH, "S", "T")[-1]
        assert final.excess["T"] == 18
        assert final.frontier == ()
        _assert_feasible(PR_GRAPH, final.flows)

    def test_source_height_is_node_count(self):
        first = generate("push_relabel", PR_GRAPH, "S", "T")[0]
        assert first.heights["S"] == PR_GRAPH.node_count()

    def test_agrees_with_ford_fulkerson(self):
        final = generate("push_relabel", FLOW_GRAPH, "S", "T")[-1]
        assert final.excess["T"] == 18


class TestKarger:
    def test_trace_length_is_fixed_for_connected_input(self):
        for seed in range(5):
            steps = generate("karger", KARGER_GRAPH, rng=random.Random(seed))
            n = KARGER_GRAPH.node_count()
            assert len(steps) == 2 * (n - 2) + 2

    def test_two_supernodes_partition_the_nodes(self):
        final = generate("karger", KARGER_GRAPH, rng=random.Random(11))[-1]
        assert len(final.supernodes) == 2
        members = sorted(m for group in final.supernodes.values() for m in group)
        assert members == sorted(KARGER_GRAPH.node_ids())

    def test_seeded_runs_repeat(self):
        a = generate("karger", KARGER_GRAPH, rng=random.Random(5))
        b = generate("karger", KARGER_GRAPH, rng=random.Random(5))
        assert a == b

    def test_no_self_loops_after_contraction(self):
        for step in generate("karger", KARGER_GRAPH, rng=random.Random(2)):
            assert all(e.source != e.target for e in step.graph_data.edges)


class TestBipartiteMatching:
    def test_matching_size(self):
        final = generate("bipartite_matching")[-1]
        assert "matching size is 4" in final.description

    def test_matching_is_one_to_one(self):
        from algorithms.bipartite_matching import PAIRS

        final = generate("bipartite_matching")[-1]
        pairs = [tuple(key.split("-")) for key in final.mst_edges]
        assert len(pairs) == 4
        assert len({a for a, _ in pairs}) == len({j for _, j in pairs}) == 4
        assert all(p in PAIRS for p in pairs)

    def test_later_paths_reroute_through_reverse_edges(self):
        paths = [s.highlighted_path for s in generate("bipartite_matching") if s.description.startswith("Found")]
        assert len(paths) == 4
        longest = max(paths, key=len)
        assert len(longest) > 4

    def test_custom_bipartite_graph(self):
        from algorithms.bipartite_matching import matching_network

        g = matching_network(["L1", "L2"], ["R1"], [("L1", "R1"), ("L2", "R1")])
        final = generate("bipartite_matching", g, "S", "T")[-1]
        assert final.description.endswith("matching size is 1: L1-R1.")


class TestEdgeDisjointPaths:
    def test_sample_paths(self):
        final = generate("edge_disjoint_paths")[-1]
        assert final.frontier == ("S → A → C → T", "S → B → D → T")
        assert final.mst_edges == frozenset({"A-S", "A-C", "C-T", "B-S", "B-D", "D-T"})

    def test_paths_share_no_edge(self):
        from algorithms.edge_disjoint_paths import SAMPLE_GRAPH

        steps = generate("edge_disjoint_paths")
        arcs = [(u, v) for s in steps if s.description.startswith("Found")
                for u, v in zip(s.highlighted_path, s.highlighted_path[1:])]
        assert len(arcs) == len(set(arcs))
        assert all(SAMPLE_GRAPH.edge_between(u, v) is not None for u, v in arcs)

    def test_weights_are_ignored(self):
        from graph import Graph

        g = Graph.build({"S": (0, 0), "A": (1, 0), "T": (2, 0)}, edges=[("S", "A", 9), ("A", "T", 9)], directed=True)
        final = generate("edge_disjoint_paths", g, "S", "T")[-1]
        assert final.frontier == ("S → A → T",)

    def test_no_path(self):
        from graph import Graph

        g = Graph.build({"S": (0, 0), "T": (1, 0)}, directed=True)
        final = generate("edge_disjoint_paths", g, "S", "T")[-1]
        assert final.description.startswith("Max flow of 0")
        assert final.frontier == ("0",)
