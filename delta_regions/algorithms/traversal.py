"""
Region growing: breadth-first traversals seeded from a single vertex.

All traversals run over one graph version (normally graph-2, the "current"
graph) and return a Region whose subgraph holds exactly the edges with both
endpoints inside the region.

Variants:
  - bfs:           plain FIFO expansion, stops at a target vertex count
  - bfs_radius:    FIFO expansion bounded by hop distance from the seed
  - bfs_biased:    only the top-k highest-scored unvisited neighbours are
                   enqueued at each step
  - bfs_priority:  the frontier is a max-heap on score, so the highest scored
                   frontier vertex is always expanded next
"""
import heapq
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Mapping, Optional, Set, Tuple

import networkx as nx

from delta_regions.utils import by_distortion_descending, neighbors_of


class TraversalMethod(Enum):
    BFS = "bfs"
    RADIUS_BFS = "radius_bfs"
    BIASED_BFS = "biased_bfs"
    PRIORITY_BFS = "priority_bfs"

    @classmethod
    def parse(cls, value) -> "TraversalMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown traversal method {value!r} (expected one of: {valid})") from None

    @property
    def count_bounded(self) -> bool:
        """True for methods that stop at a target vertex count."""
        return self is not TraversalMethod.RADIUS_BFS


@dataclass
class Region:
    """A set of vertices produced by one traversal, with its induced subgraph."""
    vertices: FrozenSet[int]
    subgraph: nx.Graph = field(repr=False, compare=False)
    seed: int
    score: float = 0.0
    radius: int = 0

    @property
    def size(self) -> int:
        return len(self.vertices)

    def __contains__(self, v) -> bool:
        return v in self.vertices


def _check_size(max_vertices: int) -> None:
    if max_vertices < 1:
        raise ValueError(f"max_vertices must be >= 1, got {max_vertices}")


def bfs(G: nx.Graph, seed, max_vertices: int) -> Set[int]:
    """FIFO expansion from seed until max_vertices vertices have been visited."""
    _check_size(max_vertices)
    found = {seed}
    queue = deque([seed])
    visited = set()
    while queue:
        current = queue.popleft()
        visited.add(current)
        if len(visited) == max_vertices:
            break
        for neighbor in sorted(neighbors_of(G, current)):
            if neighbor not in found:
                found.add(neighbor)
                queue.append(neighbor)
    return visited


def bfs_radius(G: nx.Graph, seed, radius: int) -> Tuple[Set[int], int]:
    """
    FIFO expansion tagging each vertex with its hop distance from seed.
    Vertices at ``radius`` hops are kept but not expanded.

    Returns:
        (vertex set, largest hop distance actually reached)
    """
    if radius < 0:
        raise ValueError(f"radius must be >= 0, got {radius}")
    found = {seed}
    queue = deque([(seed, 0)])
    visited = set()
    reached = 0
    while queue:
        current, hops = queue.popleft()
        visited.add(current)
        reached = max(reached, hops)
        if hops == radius:
            continue
        for neighbor in sorted(neighbors_of(G, current)):
            if neighbor not in found:
                found.add(neighbor)
                queue.append((neighbor, hops + 1))
    return visited, reached


def bfs_biased(G: nx.Graph, seed, max_vertices: int, biased_k: int,
               scores: Mapping[int, float]) -> Set[int]:
    """
    FIFO expansion that only follows the ``biased_k`` highest scored unvisited
    neighbours of each dequeued vertex. The other neighbours are dropped at
    that step; they can still be reached later through another vertex.
    """
    _check_size(max_vertices)
    if biased_k < 1:
        raise ValueError(f"biased_k must be >= 1, got {biased_k}")
    found = {seed}
    queue = deque([seed])
    visited = set()
    while queue:
        current = queue.popleft()
        visited.add(current)
        if len(visited) == max_vertices:
            break
        added = 0
        for neighbor in by_distortion_descending(neighbors_of(G, current), scores):
            if neighbor in found:
                continue
            found.add(neighbor)
            queue.append(neighbor)
            added += 1
            if added == biased_k:
                break
    return visited


def bfs_priority(G: nx.Graph, seed, max_vertices: int,
                 scores: Mapping[int, float]) -> Set[int]:
    """Expansion ordered by a max-heap on score (ties: lower id first)."""
    _check_size(max_vertices)
    found = {seed}
    heap = [(-scores.get(seed, 0.0), seed)]
    visited = set()
    while heap:
        _, current = heapq.heappop(heap)
        visited.add(current)
        if len(visited) == max_vertices:
            break
        for neighbor in neighbors_of(G, current):
            if neighbor not in found:
                found.add(neighbor)
                heapq.heappush(heap, (-scores.get(neighbor, 0.0), neighbor))
    return visited


def induced_region_graph(G: nx.Graph, vertices) -> nx.Graph:
    """
    Subgraph of G on ``vertices`` keeping only edges with both endpoints inside.
    Vertices absent from G are added as isolated nodes.
    """
    H = G.subgraph([v for v in vertices if v in G]).copy()
    H.add_nodes_from(vertices)
    return H


def grow_region(G: nx.Graph,
                seed,
                method=TraversalMethod.BFS,
                max_vertices: Optional[int] = None,
                scores: Optional[Mapping[int, float]] = None,
                biased_k: int = 5,
                radius: int = 2) -> Region:
    """
    Grow a region from seed with the given traversal method.

    Args:
        G: Graph to traverse (normally graph-2)
        seed: Start vertex
        method: TraversalMethod or its string value
        max_vertices: Target vertex count for count-bounded methods
        scores: Per-vertex ordering for the biased and priority variants
        biased_k: Neighbours followed per step by the biased variant
        radius: Hop bound for the radius variant

    Returns:
        Region with its induced subgraph; score is left at 0 for the caller.
    """
    method = TraversalMethod.parse(method)
    scores = scores or {}
    reached = 0
    if method.count_bounded and max_vertices is None:
        raise ValueError(f"{method.value} needs max_vertices")

    if method is TraversalMethod.BFS:
        vertices = bfs(G, seed, max_vertices)
    elif method is TraversalMethod.BIASED_BFS:
        vertices = bfs_biased(G, seed, max_vertices, biased_k, scores)
    elif method is TraversalMethod.PRIORITY_BFS:
        vertices = bfs_priority(G, seed, max_vertices, scores)
    else:
        vertices, reached = bfs_radius(G, seed, radius)

    return Region(
        vertices=frozenset(vertices),
        subgraph=induced_region_graph(G, vertices),
        seed=seed,
        radius=reached,
    )
