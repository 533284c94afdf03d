"""
word_ladder.py — Word Ladder (BFS over paths)
==============================================
Words are nodes; two words are adjacent when they differ in exactly one
letter.  The shortest transformation sequence is a shortest path in that
unweighted graph, so BFS finds it.  The queue holds whole PATHS rather
than single nodes, which lets every Step highlight the ladder built so far.

The generator works on any graph: start_node is the first word and
end_node the word to reach.
"""

from collections import deque
from typing import Dict, Iterator, List, Optional, Sequence

from graph import Graph
from algorithms.step import Step, StepBuilder


DATA_STRUCTURE = "Queue of Paths"

WORDS = ("HOT", "DOT", "DOG", "LOT", "LOG", "COG", "HIT")


def one_letter_apart(a: str, b: str) -> bool:
    return len(a) == len(b) and sum(x != y for x, y in zip(a, b)) == 1


def word_graph(words: Sequence[str]) -> Graph:
    """Undirected graph linking every pair of words one letter apart."""
    adj: Dict[str, List[str]] = {w: [] for w in words}
    for i, a in enumerate(words):
        for b in words[i + 1:]:
            if one_letter_apart(a, b):
                adj[a].append(b)
                adj[b].append(a)
    positions = {
        w: (100 + (i % 3) * 220 + ((i // 3) % 2) * 110, 100 + (i // 3) * 120)
        for i, w in enumerate(words)
    }
    return Graph.build(positions, adj=adj)


SAMPLE_GRAPH = word_graph(WORDS)


def _label(path: List[str]) -> str:
    return f"[{'→'.join(path)}]"


def word_ladder(
    graph: Graph,
    start_node: Optional[str] = None,
    end_node: Optional[str] = None,
) -> Iterator[Step]:
    start = graph.require_node(start_node)
    target = graph.require_node(end_node, role="target")

    queue = deque([[start]])
    visited = {start}
    sb = StepBuilder(frontier=lambda: [_label(p) for p in queue], visited=visited)

    yield sb.build(
        f'Start BFS from "{start}". Add the initial path to the queue.',
        current_node=start,
        highlighted_path=[start],
    )

    while queue:
        path = queue.popleft()
        word = path[-1]
        yield sb.build(
            f'Dequeue path {_label(path)}. Current word is "{word}".',
            current_node=word,
            highlighted_path=path,
        )

        if word == target:
            yield sb.build(
                f'Found the end word "{target}"! Shortest path is {_label(path)}.',
                current_node=word,
                highlighted_path=path,
            )
            return

        for nbr in graph.neighbours(word):
            if nbr in visited:
                continue
            visited.add(nbr)
            longer = path + [nbr]
            queue.append(longer)
            yield sb.build(
                f'Explore neighbor "{nbr}". Add new path {_label(longer)} to queue.',
                current_node=nbr,
                neighbor=nbr,
                highlighted_path=longer,
            )

    yield sb.build("Queue is empty, but end word was not found. No path exists.", highlighted_path=[])
