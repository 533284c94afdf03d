"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every trace generator the animator knows about.

    from algorithms import REGISTRY, get_algorithm, generate

REGISTRY is a dict:
    {
        "bfs": AlgoInfo(key, label, fn, family, sample_graph, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and the HTTP layer both
consume it, so adding a new algorithm is: write the generator module
(generator + SAMPLE_GRAPH + DATA_STRUCTURE), add one entry here.

`generate()` is the one cross-family entry point: it drains a generator
EAGERLY into a list, so a trace is produced once, in full, and never
streamed.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from graph import Graph
from algorithms.step import Step

# ---------------------------------------------------------------------------
# Import all algorithm modules
# ---------------------------------------------------------------------------
from algorithms import (
    articulation_points, bellman_ford, bfs, biconnected_components,
    bipartite_check, bipartite_matching, boruvka, bridges, count_walks,
    cycle_detection, desopo_pape, dfs, dial, dijkstra, dinic, dsu,
    dynamic_connectivity, edge_disjoint_paths, fleury, flood_fill,
    floyd_warshall, ford_fulkerson, johnson, karger, kruskal, min_cut,
    min_mean_cycle, multi_source_bfs, multistage_graph, prims, push_relabel,
    tarjan_scc, topological_sort, transitive_closure, word_ladder,
    zero_one_bfs,
)


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generator families
# ---------------------------------------------------------------------------
FRONTIER   = "frontier-traversal"
PRIORITY   = "priority-relaxation"
UNION_FIND = "union-find"
LOW_LINK   = "low-link-dfs"
FLOW       = "flow-network"
ALL_PAIRS  = "all-pairs-dp"
RANDOMIZED = "randomized"
EULERIAN   = "eulerian"

FAMILIES = (FRONTIER, PRIORITY, UNION_FIND, LOW_LINK, FLOW, ALL_PAIRS, RANDOMIZED, EULERIAN)


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "bfs"
    label:             str                    # human label, e.g. "Breadth-First Search"
    fn:                Callable               # the generator function
    family:            str                    # one of FAMILIES
    sample_graph:      Graph                  # module SAMPLE_GRAPH
    data_structure:    str                    # caption for the frontier panel
    pseudocode:        List[str] = field(default_factory=list)
    tags:              List[str] = field(default_factory=list)
    default_start:     Optional[str] = None
    default_end:       Optional[str] = None
    supports_negative: bool     = False       # can handle negative edges?
    randomized:        bool     = False       # output differs between runs
    complexity_time:   str      = ""          # e.g. "O(V + E)"
    complexity_space:  str      = ""          # e.g. "O(V)"
    description:       str      = ""          # one-liner for the topic card

    def to_dict(self) -> dict:
        return {
            "key":               self.key,
            "label":             self.label,
            "family":            self.family,
            "data_structure":    self.data_structure,
            "pseudocode":        list(self.pseudocode),
            "tags":              list(self.tags),
            "default_start":     self.default_start,
            "default_end":       self.default_end,
            "supports_negative": self.supports_negative,
            "randomized":        self.randomized,
            "complexity_time":   self.complexity_time,
            "complexity_space":  self.complexity_space,
            "description":       self.description,
        }


def _info(key: str, module, label: str, family: str, **kw) -> AlgoInfo:
    return AlgoInfo(
        key=key,
        label=label,
        fn=getattr(module, key),
        family=family,
        sample_graph=module.SAMPLE_GRAPH,
        data_structure=module.DATA_STRUCTURE,
        pseudocode=list(getattr(module, "PSEUDOCODE", [])),
        **kw,
    )


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
_ENTRIES = [
    # ---- frontier traversal ----
    _info("bfs", bfs, "Breadth-First Search", FRONTIER,
          tags=["unweighted", "traversal", "shortest-path"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Explores layer-by-layer. Finds shortest paths by hop count."),
    _info("dfs", dfs, "Depth-First Search", FRONTIER,
          tags=["unweighted", "traversal"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Dives deep before backtracking. Does NOT guarantee shortest paths."),
    _info("zero_one_bfs", zero_one_bfs, "0-1 BFS", FRONTIER,
          tags=["weighted", "shortest-path", "deque"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Deque-based shortest paths when every weight is 0 or 1."),
    _info("dial", dial, "Dial's Algorithm", FRONTIER,
          tags=["weighted", "shortest-path", "buckets"], default_start="A",
          complexity_time="O(E + W·V)", complexity_space="O(W·V)",
          description="Dijkstra with a bucket array instead of a heap, for small integer weights."),
    _info("desopo_pape", desopo_pape, "D'Esopo-Pape Algorithm", FRONTIER,
          tags=["weighted", "shortest-path", "negative-edges", "deque"], default_start="S",
          supports_negative=True,
          complexity_time="O(V · E) typical, exponential worst case", complexity_space="O(V)",
          description="Label-correcting shortest paths: re-improved nodes jump to the front."),
    _info("flood_fill", flood_fill, "Flood Fill", FRONTIER,
          tags=["grid", "traversal"], default_start="2-1",
          complexity_time="O(R · C)", complexity_space="O(R · C)",
          description="Recolours the 4-connected region of the start cell."),
    _info("multi_source_bfs", multi_source_bfs, "Multi-Source BFS (Rotting Oranges)", FRONTIER,
          tags=["grid", "traversal", "multi-source"],
          complexity_time="O(R · C)", complexity_space="O(R · C)",
          description="Every rotten cell starts in the queue. BFS levels are minutes."),
    _info("word_ladder", word_ladder, "Word Ladder", FRONTIER,
          tags=["unweighted", "shortest-path", "implicit-graph"], default_start="HIT", default_end="COG",
          complexity_time="O(N² · L)", complexity_space="O(N · L)",
          description="BFS over whole paths between words one letter apart."),
    _info("topological_sort", topological_sort, "Topological Sort (Kahn)", FRONTIER,
          tags=["directed", "dag", "ordering"],
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Repeatedly removes a node with in-degree 0. Leftover nodes mean a cycle."),
    _info("cycle_detection", cycle_detection, "Cycle Detection (DFS)", FRONTIER,
          tags=["traversal", "cycles"],
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="A back edge to a node still on the DFS path closes a cycle."),
    _info("bipartite_check", bipartite_check, "Bipartite Check", FRONTIER,
          tags=["undirected", "coloring"],
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="BFS 2-colouring. Two neighbours of the same colour prove an odd cycle."),

    # ---- priority relaxation ----
    _info("dijkstra", dijkstra, "Dijkstra's Algorithm", PRIORITY,
          tags=["weighted", "shortest-path"], default_start="A",
          complexity_time="O((V + E) log V)", complexity_space="O(V)",
          description="Greedily finalises the closest node. Optimal for non-negative weights."),
    _info("prims", prims, "Prim's Algorithm", PRIORITY,
          tags=["weighted", "mst"], default_start="A",
          complexity_time="O(E log V)", complexity_space="O(E)",
          description="Grows one tree by the cheapest edge leaving it."),
    _info("bellman_ford", bellman_ford, "Bellman–Ford", PRIORITY,
          tags=["weighted", "shortest-path", "negative-edges"], default_start="A",
          supports_negative=True,
          complexity_time="O(V · E)", complexity_space="O(V)",
          description="Handles negative edges. Detects negative cycles. Slower than Dijkstra."),
    _info("johnson", johnson, "Johnson's Algorithm", PRIORITY,
          tags=["weighted", "all-pairs", "negative-edges"],
          supports_negative=True,
          complexity_time="O(V · E log V)", complexity_space="O(V²)",
          description="Bellman-Ford potentials, re-weighting, then Dijkstra from every node."),

    # ---- union-find ----
    _info("kruskal", kruskal, "Kruskal's Algorithm", UNION_FIND,
          tags=["weighted", "mst"],
          complexity_time="O(E log E)", complexity_space="O(V)",
          description="Adds edges cheapest-first unless they would close a cycle."),
    _info("boruvka", boruvka, "Borůvka's Algorithm", UNION_FIND,
          tags=["weighted", "mst"],
          complexity_time="O(E log V)", complexity_space="O(V)",
          description="Every component grabs its cheapest outgoing edge, all at once."),
    _info("dsu", dsu, "Disjoint Set Union", UNION_FIND,
          tags=["data-structure"],
          complexity_time="O(α(n)) amortised per operation", complexity_space="O(n)",
          description="Union and find with path compression, drawn as a parent-pointer forest."),
    _info("dynamic_connectivity", dynamic_connectivity, "Dynamic Connectivity", UNION_FIND,
          tags=["data-structure", "connectivity"],
          complexity_time="O(α(n)) amortised per operation", complexity_space="O(n)",
          description="Edges arrive over time. Connectivity queries are answered with find."),

    # ---- low-link DFS ----
    _info("tarjan_scc", tarjan_scc, "Tarjan's SCC Algorithm", LOW_LINK,
          tags=["directed", "components"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Strongly connected components in a single DFS."),
    _info("articulation_points", articulation_points, "Articulation Points", LOW_LINK,
          tags=["undirected", "connectivity"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Vertices whose removal disconnects the graph."),
    _info("bridges", bridges, "Bridges in a Graph", LOW_LINK,
          tags=["undirected", "connectivity"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Edges whose removal disconnects the graph."),
    _info("biconnected_components", biconnected_components, "Biconnected Components", LOW_LINK,
          tags=["undirected", "components"], default_start="A",
          complexity_time="O(V + E)", complexity_space="O(E)",
          description="Maximal subgraphs with no articulation point, via an edge stack."),

    # ---- flow networks ----
    _info("ford_fulkerson", ford_fulkerson, "Ford-Fulkerson (Edmonds-Karp)", FLOW,
          tags=["directed", "max-flow"], default_start="S", default_end="T",
          complexity_time="O(V · E²)", complexity_space="O(V + E)",
          description="Augments along shortest residual paths until none remain."),
    _info("dinic", dinic, "Dinic's Algorithm", FLOW,
          tags=["directed", "max-flow"], default_start="S", default_end="T",
          complexity_time="O(V² · E)", complexity_space="O(V + E)",
          description="Level graphs and blocking flows."),
    _info("push_relabel", push_relabel, "Push-Relabel", FLOW,
          tags=["directed", "max-flow"], default_start="S", default_end="T",
          complexity_time="O(V² · E)", complexity_space="O(V + E)",
          description="Preflow pushed downhill; nodes relabelled when stuck."),
    _info("min_cut", min_cut, "Minimum s-t Cut", FLOW,
          tags=["directed", "min-cut"], default_start="S", default_end="T",
          complexity_time="O(V · E²)", complexity_space="O(V + E)",
          description="Source side = residual reachability after max flow."),
    _info("bipartite_matching", bipartite_matching, "Maximum Bipartite Matching", FLOW,
          tags=["bipartite", "max-flow", "matching"], default_start="S", default_end="T",
          complexity_time="O(V · E²)", complexity_space="O(V + E)",
          description="Unit capacities from source to applicants to jobs to sink. Max flow = matching size."),
    _info("edge_disjoint_paths", edge_disjoint_paths, "Edge-Disjoint Paths", FLOW,
          tags=["directed", "max-flow", "paths"], default_start="S", default_end="T",
          complexity_time="O(V · E²)", complexity_space="O(V + E)",
          description="Every edge gets capacity 1. Max flow counts the paths sharing no edge."),

    # ---- all-pairs / DP ----
    _info("floyd_warshall", floyd_warshall, "Floyd–Warshall", ALL_PAIRS,
          tags=["weighted", "all-pairs", "negative-edges"], supports_negative=True,
          complexity_time="O(V³)", complexity_space="O(V²)",
          description="All-pairs shortest paths via dynamic programming. Watch the matrix evolve!"),
    _info("transitive_closure", transitive_closure, "Transitive Closure (DFS)", ALL_PAIRS,
          tags=["directed", "reachability"],
          complexity_time="O(V · (V + E))", complexity_space="O(V²)",
          description="One DFS per vertex fills the reachability matrix row by row."),
    _info("count_walks", count_walks, "Count Walks of Length k", ALL_PAIRS,
          tags=["directed", "matrix"],
          complexity_time="O(k · V³)", complexity_space="O(V²)",
          description="Powers of the adjacency matrix count walks of each length."),
    _info("multistage_graph", multistage_graph, "Multistage Graph Shortest Path", ALL_PAIRS,
          tags=["weighted", "dag", "shortest-path"], default_start="A", default_end="G",
          complexity_time="O(V + E)", complexity_space="O(V)",
          description="Backward DP: each node's cost to the destination, solved in reverse stage order."),
    _info("min_mean_cycle", min_mean_cycle, "Karp's Minimum Mean Cycle", ALL_PAIRS,
          tags=["weighted", "directed", "cycles", "negative-edges"], supports_negative=True,
          complexity_time="O(V · E)", complexity_space="O(V²)",
          description="D[k][v] walk table. The min over v of the max over k gives the smallest cycle mean."),

    # ---- randomized ----
    _info("karger", karger, "Karger's Min Cut", RANDOMIZED,
          tags=["undirected", "min-cut"], randomized=True,
          complexity_time="O(V²) per trial", complexity_space="O(V + E)",
          description="Contract random edges until two supernodes remain."),

    # ---- eulerian ----
    _info("fleury", fleury, "Fleury's Algorithm", EULERIAN,
          tags=["undirected", "eulerian"],
          complexity_time="O((V + E) · E)", complexity_space="O(V + E)",
          description="Eulerian path that only burns a bridge when it must."),
]

REGISTRY: Dict[str, AlgoInfo] = {info.key: info for info in _ENTRIES}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_family(family: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.family == family]


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    """Filter registry by tag."""
    return [a for a in REGISTRY.values() if tag in a.tags]


# ---------------------------------------------------------------------------
# Eager generation
# ---------------------------------------------------------------------------
def generate(
    key: str,
    graph: Optional[Graph] = None,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
    **params,
) -> List[Step]:
    """
    Produce the complete trace for one algorithm run.

    graph / start_node / end_node default to the algorithm's sample graph
    and default endpoints.  Extra keyword params go to the generator
    (e.g. `rng` for karger).

    Raises:
        ValueError  – unknown key
        GraphError  – missing start / sink node or malformed graph
    """
    info = REGISTRY.get(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")

    if graph is None:
        graph = info.sample_graph
    if start_node is None:
        start_node = info.default_start
    if end_node is None:
        end_node = info.default_end

    steps = list(info.fn(graph, start_node, end_node, **params))
    logger.debug("Generated %d steps for %s (start=%s, end=%s)", len(steps), key, start_node, end_node)
    return steps


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "FAMILIES",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_family",
    "algorithms_by_tag",
    "generate",
]
