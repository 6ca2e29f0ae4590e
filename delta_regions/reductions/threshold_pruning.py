import logging
import math
from typing import List, Mapping, Optional

import networkx as nx

from delta_regions.algorithms.delta import GraphPair
from delta_regions.utils import by_distortion_ascending

logger = logging.getLogger(__name__)


def prune_count(step: float, num_vertices: int) -> int:
    """Number of vertices removed for a given step: floor(step * num_vertices)."""
    if num_vertices < 0:
        raise ValueError(f"num_vertices must be >= 0, got {num_vertices}")
    if step > 1.0:
        raise ValueError(f"step must be <= 1, got {step}")
    if step <= 0:
        return 0
    # 0.3 * 10 evaluates to 3.0000000000000004, 0.7 * 10 to 7.000000000000001
    return int(math.floor(step * num_vertices + 1e-9))


def remove_vertex(G: nx.Graph, v) -> bool:
    """Removes v and its incident edges from G. Returns False if v was absent."""
    if v not in G:
        return False
    G.remove_node(v)
    return True


def remove_vertices_below_threshold(pair: GraphPair,
                                    step: float,
                                    num_vertices: int,
                                    scores: Optional[Mapping[int, float]] = None) -> List[int]:
    """
    Removes the floor(step * num_vertices) least distorted vertices from both
    graphs of the pair, in place.

    Vertices are ranked over the union of both graphs' current vertex sets with
    by_distortion_ascending (ties by ascending id). ``scores`` overrides the
    ranking, e.g. with an externally supplied ranking slice; it defaults to the
    pair's own distortion. Distortion of the survivors is left as is.

    Returns:
        The removed vertex ids, in removal order.
    """
    count = prune_count(step, num_vertices)
    if count == 0:
        return []
    if scores is None:
        scores = pair.distortion

    ranked = by_distortion_ascending(pair.vertices(), scores)
    removed = []
    for v in ranked[:count]:
        in_g1 = remove_vertex(pair.graph1, v)
        in_g2 = remove_vertex(pair.graph2, v)
        if in_g1 or in_g2:
            removed.append(v)

    logger.debug("Pruned %d of %d vertices (step=%s, reference count=%d)",
                 len(removed), len(ranked), step, num_vertices)
    return removed
