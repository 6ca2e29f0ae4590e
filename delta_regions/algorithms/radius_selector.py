"""
Max-changing-radius region selection.

Every vertex grows a radius-bounded BFS region, increasing the radius from 0
until the region holds at least ``min_vertices`` vertices. Regions are scored
by their mean distortion, or by the edge-normalised distortion when
``size_normalized`` is set, and the best ones are returned.
"""
import logging
from typing import List

from delta_regions.algorithms.delta import GraphPair
from delta_regions.algorithms.traversal import Region, bfs_radius, induced_region_graph
from delta_regions.algorithms.region_selector import rank_regions
from delta_regions.evaluation.metrics import size_normalized_score

logger = logging.getLogger(__name__)


def grow_to_size(pair: GraphPair, seed, min_vertices: int) -> Region:
    """
    Smallest radius-bounded region around seed with at least min_vertices
    vertices, or the whole reachable component if it is smaller.
    """
    G = pair.graph2
    vertices, radius = {seed}, 0
    previous_size = -1
    for r in range(max(1, G.number_of_nodes())):
        vertices, _ = bfs_radius(G, seed, r)
        radius = r
        if len(vertices) >= min_vertices or len(vertices) == previous_size:
            break
        previous_size = len(vertices)
    return Region(vertices=frozenset(vertices),
                  subgraph=induced_region_graph(G, vertices),
                  seed=seed,
                  radius=radius)


def select_max_changing_radius(pair: GraphPair,
                               region_count: int,
                               min_vertices: int,
                               size_normalized: bool = False) -> List[Region]:
    """
    Args:
        pair: Graph pair with distortion computed
        region_count: Maximum number of regions to return
        min_vertices: Minimum region size; smaller regions are dropped
        size_normalized: Score with metric (c) instead of mean distortion

    Returns:
        Up to region_count regions, best first. Regions may overlap.
    """
    candidates = []
    for seed in sorted(pair.graph2.nodes()):
        region = grow_to_size(pair, seed, min_vertices)
        if region.size < min_vertices:
            continue
        if size_normalized:
            region.score = size_normalized_score(pair, region)
        else:
            region.score = sum(pair.delta(v) for v in region.vertices) / region.size
        candidates.append(region)

    logger.debug("Radius selection: %d candidates with >= %d vertices",
                 len(candidates), min_vertices)
    return rank_regions(candidates)[:region_count]
