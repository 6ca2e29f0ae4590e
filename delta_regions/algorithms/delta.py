"""
Per-vertex change scoring between two versions of a weighted graph.

Both versions are networkx graphs keyed by the same external vertex ids, so the
id itself correlates a vertex across versions. The distortion of a logical
vertex is stored once, in ``GraphPair.distortion``, and read from there by
every later stage regardless of which version is being traversed.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Optional

import networkx as nx

from delta_regions.utils import all_vertices, neighbors_of

logger = logging.getLogger(__name__)


@dataclass
class GraphPair:
    """Two versions of a graph plus the distortion computed between them."""
    graph1: nx.Graph
    graph2: nx.Graph
    distortion: Dict[int, float] = field(default_factory=dict)
    min_delta: float = math.inf
    max_delta: float = -math.inf

    def copy(self) -> "GraphPair":
        """Independent copy; pruning the copy leaves this pair untouched."""
        return GraphPair(
            graph1=self.graph1.copy(),
            graph2=self.graph2.copy(),
            distortion=dict(self.distortion),
            min_delta=self.min_delta,
            max_delta=self.max_delta,
        )

    def vertices(self):
        return all_vertices(self.graph1, self.graph2)

    def delta(self, v) -> float:
        return self.distortion.get(v, 0.0)


def vertex_delta(G1: nx.Graph, G2: nx.Graph, v) -> int:
    """
    Sum of absolute weight changes over the edges incident to v.

    Edges present in only one version count with their full weight; a vertex
    missing from one version has no neighbours there.
    """
    nbrs1 = neighbors_of(G1, v)
    nbrs2 = neighbors_of(G2, v)
    delta = 0
    for n, attrs in nbrs1.items():
        w1 = attrs.get("weight", 1)
        other = nbrs2.get(n)
        w2 = other.get("weight", 1) if other is not None else 0
        delta += abs(w1 - w2)
    for n, attrs in nbrs2.items():
        if n not in nbrs1:
            delta += attrs.get("weight", 1)
    return delta


def compute_distortion(pair: GraphPair) -> Dict[int, float]:
    """
    Compute the delta of every vertex present in either graph and store it on
    the pair. Also records the min/max delta for colour normalisation.
    """
    distortion = {}
    min_delta: Optional[float] = None
    max_delta: Optional[float] = None
    for v in pair.vertices():
        delta = vertex_delta(pair.graph1, pair.graph2, v)
        distortion[v] = delta
        min_delta = delta if min_delta is None else min(min_delta, delta)
        max_delta = delta if max_delta is None else max(max_delta, delta)

    pair.distortion = distortion
    pair.min_delta = min_delta if min_delta is not None else math.inf
    pair.max_delta = max_delta if max_delta is not None else -math.inf
    logger.debug("Computed distortion for %d vertices (min=%s, max=%s)",
                 len(distortion), pair.min_delta, pair.max_delta)
    return distortion
