"""Priority-relaxation and all-pairs generators."""

import itertools

import pytest

from graph import Graph, GraphError
from algorithms import generate
from algorithms.bellman_ford import SAMPLE_GRAPH as BF_GRAPH, trace_cycle
from algorithms.count_walks import SAMPLE_GRAPH as WALK_GRAPH, adjacency_matrix, multiply
from algorithms.dijkstra import SAMPLE_GRAPH as DIJKSTRA_GRAPH
from algorithms.floyd_warshall import SAMPLE_GRAPH as FW_GRAPH
from algorithms.johnson import SAMPLE_GRAPH as JOHNSON_GRAPH
from algorithms.step import INF
from algorithms.transitive_closure import SAMPLE_GRAPH as TC_GRAPH


NEGATIVE_CYCLE = Graph.build(
    {"S": (0, 0), "A": (1, 0), "B": (2, 0), "C": (3, 0)},
    edges=[("S", "A", 1), ("A", "B", 1), ("B", "C", -3), ("C", "A", 1)],
    directed=True,
)


class TestDijkstra:
    def test_matches_reference(self, shortest_paths):
        final = generate("dijkstra", DIJKSTRA_GRAPH, "A")[-1].distances
        expected = shortest_paths(DIJKSTRA_GRAPH, "A")
        for node in DIJKSTRA_GRAPH.node_ids():
            assert final[node] == expected[node], node

    def test_final_path_to_target(self):
        final = generate("dijkstra", DIJKSTRA_GRAPH, "A", "F")[-1]
        assert final.highlighted_path == ("A", "C", "E", "F")
        assert final.frontier == ()

    def test_each_node_is_extracted_once(self):
        steps = generate("dijkstra", DIJKSTRA_GRAPH, "A")
        extracted = [s.current_node for s in steps if s.description.startswith("Extract")]
        assert sorted(extracted) == sorted(DIJKSTRA_GRAPH.node_ids())

    def test_frontier_is_in_pop_order(self):
        for step in generate("dijkstra", DIJKSTRA_GRAPH, "A"):
            priorities = [int(label[label.index("(") + 1:-1]) for label in step.frontier]
            assert priorities == sorted(priorities)


class TestBellmanFord:
    def test_sample_distances(self, shortest_paths):
        final = generate("bellman_ford", BF_GRAPH, "A")[-1]
        assert dict(final.distances) == shortest_paths(BF_GRAPH, "A")
        assert final.highlighted_cycle is None

    def test_negative_cycle_is_reported(self):
        final = generate("bellman_ford", NEGATIVE_CYCLE, "S")[-1]
        cycle = final.highlighted_cycle
        assert cycle[0] == cycle[-1]
        assert sum(NEGATIVE_CYCLE.weight(u, v) for u, v in zip(cycle, cycle[1:])) < 0

    def test_trace_cycle_forward_order(self):
        assert trace_cycle({"A": "C", "C": "B", "B": "A"}, "A") == ["A", "B", "C", "A"]

    def test_trace_cycle_without_cycle_returns_path(self):
        assert trace_cycle({"B": "A", "C": "B"}, "C") == ["A", "B", "C"]


class TestJohnson:
    def test_matches_floyd_warshall(self):
        johnson = generate("johnson", JOHNSON_GRAPH)[-1].distance_matrix
        floyd = generate("floyd_warshall", JOHNSON_GRAPH)[-1].distance_matrix
        assert johnson == floyd

    def test_reweighted_edges_are_non_negative(self):
        steps = generate("johnson", JOHNSON_GRAPH)
        reweighted = next(s.graph_data for s in steps if s.graph_data is not None)
        assert all(e.weight >= 0 for e in reweighted.edges)

    def test_aborts_on_negative_cycle(self):
        steps = generate("johnson", NEGATIVE_CYCLE)
        assert steps[-1].highlighted_cycle
        assert all(s.distance_matrix is None for s in steps)


class TestFloydWarshall:
    def test_triangle_inequality(self):
        final = generate("floyd_warshall", FW_GRAPH)[-1].distance_matrix
        n = len(final)
        for i, j, k in itertools.product(range(n), repeat=3):
            if final[i][k] is INF or final[k][j] is INF:
                continue
            assert final[i][j] <= final[i][k] + final[k][j]

    def test_matches_reference(self, shortest_paths):
        final = generate("floyd_warshall", FW_GRAPH)[-1]
        for i, src in enumerate(final.matrix_labels):
            expected = shortest_paths(FW_GRAPH, src)
            for j, dst in enumerate(final.matrix_labels):
                assert final.distance_matrix[i][j] == expected[dst]

    def test_one_step_per_check(self):
        steps = generate("floyd_warshall", FW_GRAPH)
        checks = [s for s in steps if s.description.startswith("Checking")]
        assert len(checks) == FW_GRAPH.node_count() ** 3


class TestTransitiveClosure:
    def test_reachability(self):
        final = generate("transitive_closure", TC_GRAPH)[-1]
        labels = final.matrix_labels
        reach = {(labels[i], labels[j]) for i, row in enumerate(final.reachability_matrix)
                 for j, cell in enumerate(row) if cell}
        assert ("A", "C") in reach and ("D", "C") in reach
        assert ("C", "A") not in reach and ("B", "A") not in reach
        assert all((n, n) in reach for n in labels)

    def test_terminates_on_cycles(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, adj={"A": ["B"], "B": ["A"]}, directed=True)
        final = generate("transitive_closure", g)[-1]
        assert final.reachability_matrix == ((1, 1), (1, 1))


class TestCountWalks:
    def test_powers_of_adjacency(self):
        steps = generate("count_walks", WALK_GRAPH)
        nodes = WALK_GRAPH.node_ids()
        base = adjacency_matrix(WALK_GRAPH, nodes)
        assert len(steps) == 4
        power = base
        for step in steps[1:]:
            power = multiply(power, base)
            assert step.distance_matrix == tuple(tuple(row) for row in power)

    def test_walks_of_length_two(self):
        a2 = generate("count_walks", WALK_GRAPH)[1].distance_matrix
        # only A→B→C
        assert a2[0][2] == 1


class TestMultistageGraph:
    def test_cheapest_route(self):
        final = generate("multistage_graph")[-1]
        assert final.highlighted_path == ("A", "B", "F", "G")
        assert final.frontier == ("Cost: 14",)
        assert dict(final.distances) == {"A": 14, "B": 12, "C": 15, "D": 15, "E": 8, "F": 9, "G": 0}

    def test_every_edge_is_checked_once(self):
        from algorithms.multistage_graph import SAMPLE_GRAPH

        checks = [s for s in generate("multistage_graph") if s.description.startswith("Check path")]
        assert len(checks) == SAMPLE_GRAPH.edge_count()

    def test_unreachable_destination(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0), "C": (2, 0)}, edges=[("A", "B", 1)], directed=True)
        steps = generate("multistage_graph", g, "A", "C")
        assert steps[-1].frontier == ("Cost: ∞",)
        assert steps[-1].distances["A"] is INF

    def test_rejects_cycles(self):
        with pytest.raises(GraphError, match="acyclic"):
            generate("multistage_graph", NEGATIVE_CYCLE, "S", "C")

    def test_needs_a_destination(self):
        with pytest.raises(GraphError, match="Destination node"):
            generate("multistage_graph", start_node="A", end_node="Z")


class TestMinMeanCycle:
    def test_sample_mean(self):
        final = generate("min_mean_cycle")[-1]
        assert final.frontier == ("Result: 0.50",)

    def test_walk_table_rows(self):
        table = generate("min_mean_cycle")[-1].distance_matrix
        assert table == (
            (0, 0, 0, 0),
            (1, 3, 2, -4),
            (-3, 4, 5, -2),
            (-1, 0, 6, 1),
            (2, 2, 2, 2),
        )

    def test_one_step_per_relaxation(self):
        from algorithms.min_mean_cycle import SAMPLE_GRAPH

        n = SAMPLE_GRAPH.node_count()
        steps = generate("min_mean_cycle")
        assert len(steps) == 1 + n * (1 + SAMPLE_GRAPH.edge_count()) + n + 1

    def test_two_cycles_pick_the_cheaper_mean(self):
        g = Graph.build(
            {"A": (0, 0), "B": (1, 0), "C": (2, 0)},
            edges=[("A", "B", 1), ("B", "A", 3), ("B", "C", 5), ("C", "B", 5)],
            directed=True,
        )
        assert generate("min_mean_cycle", g)[-1].frontier == ("Result: 2.00",)

    def test_acyclic_graph(self):
        g = Graph.build({"A": (0, 0), "B": (1, 0)}, edges=[("A", "B", 1)], directed=True)
        assert generate("min_mean_cycle", g)[-1].frontier == ("Result: none",)

    def test_needs_a_directed_graph(self):
        with pytest.raises(GraphError, match="directed"):
            generate("min_mean_cycle", FW_GRAPH.with_topology(directed=False))
