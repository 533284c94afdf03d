"""Tests for the Step snapshot, its builder and the distance sentinels."""

import dataclasses

import pytest

from graph import Edge
from algorithms.step import INF, NEG_INF, Step, StepBuilder, fmt, is_finite


class TestSentinels:
    def test_ordering_against_numbers(self):
        assert 10**9 < INF
        assert INF > -5
        assert NEG_INF < -10**9
        assert NEG_INF < INF
        assert not INF < INF

    def test_min_and_sorting(self):
        assert min(INF, 3) == 3
        assert sorted([INF, 2, NEG_INF, 0.5]) == [NEG_INF, 0.5, 2, INF]

    def test_identity_equality(self):
        assert INF == INF
        assert INF != float("inf")
        assert not is_finite(INF)
        assert is_finite(0)

    def test_display(self):
        assert fmt(INF) == "∞"
        assert fmt(NEG_INF) == "-∞"
        assert fmt(3.0) == "3"
        assert fmt(2.5) == "2.5"


class TestStepBuilder:
    def test_build_snapshots_live_structures(self):
        queue = ["A"]
        visited = {"A"}
        dist = {"A": 0, "B": INF}
        sb = StepBuilder(frontier=queue, visited=visited, distances=dist)

        first = sb.build("start")
        queue.append("B")
        visited.add("B")
        dist["B"] = 1
        second = sb.build("discover B", current_node="A")

        assert first.frontier == ("A",)
        assert first.visited == frozenset({"A"})
        assert first.distances["B"] is INF
        assert second.frontier == ("A", "B")
        assert second.distances["B"] == 1

    def test_callable_facets_are_evaluated_per_build(self):
        counter = {"n": 0}

        def label():
            counter["n"] += 1
            return [str(counter["n"])]

        sb = StepBuilder(frontier=label)
        assert sb.build("one").frontier == ("1",)
        assert sb.build("two").frontier == ("2",)

    def test_overrides_and_none_skipping(self):
        sb = StepBuilder(frontier=["A"])
        step = sb.build("x", frontier=(), highlighted_path=None)
        assert step.frontier == ()
        assert step.highlighted_path is None
        assert step.facets() == ("frontier",)

    def test_unknown_facet_rejected(self):
        with pytest.raises(TypeError):
            StepBuilder(colour="red")
        with pytest.raises(TypeError):
            StepBuilder().build("x", colour="red")

    def test_step_is_frozen(self):
        step = StepBuilder(visited={"A"}).build("x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            step.description = "changed"
        with pytest.raises(AttributeError):
            step.visited.add("B")

    def test_mappings_are_read_only(self):
        step = StepBuilder(distances={"A": 0}).build("x")
        with pytest.raises(TypeError):
            step.distances["A"] = 5

    def test_unbind(self):
        sb = StepBuilder(frontier=["A"], visited={"A"})
        sb.unbind("visited")
        assert sb.build("x").visited is None


class TestWireForm:
    def test_to_dict_omits_absent_facets(self):
        data = Step(description="hello").to_dict()
        assert data == {"description": "hello", "current_node": None}

    def test_sentinels_and_flow_keys_are_stringified(self):
        step = StepBuilder().build(
            "x",
            distances={"A": 0, "B": INF},
            flows={("S", "A"): 4},
            distance_matrix=[[0, INF], [NEG_INF, 0]],
            visited={"B", "A"},
            highlighted_edge=Edge("A", "B", 2),
        )
        data = step.to_dict()
        assert data["distances"] == {"A": 0, "B": "∞"}
        assert data["flows"] == {"S->A": 4}
        assert data["distance_matrix"] == [[0, "∞"], ["-∞", 0]]
        assert data["visited"] == ["A", "B"]
        assert data["highlighted_edge"] == {"from": "A", "to": "B", "weight": 2}
