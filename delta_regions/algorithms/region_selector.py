"""
Turning grown regions into a final, ranked list of regions.

Two main policies:
  - greedy: seeds in descending distortion order, each accepted region must
    not overlap the already selected vertices by more than a threshold
  - exhaustive: grow from every vertex, rank all candidates globally by the
    size-normalised distortion score, keep the top N. No overlap check unless
    one is explicitly requested, so returned regions may share vertices.
"""
import logging
from typing import List, Mapping, Optional

import networkx as nx

from delta_regions.algorithms.delta import GraphPair
from delta_regions.algorithms.traversal import Region, TraversalMethod, grow_region, induced_region_graph
from delta_regions.evaluation.metrics import size_normalized_score
from delta_regions.utils import by_distortion_descending

logger = logging.getLogger(__name__)


def _overlap(region: Region, selected: set) -> float:
    if region.size == 0:
        return 0.0
    return len(region.vertices & selected) / region.size


def rank_regions(regions: List[Region]) -> List[Region]:
    """Score descending, ties by ascending seed id."""
    return sorted(regions, key=lambda r: (-r.score, r.seed))


def select_greedy_regions(pair: GraphPair,
                          region_count: int,
                          max_vertices: int,
                          overlap_threshold: float = 0.0,
                          method=TraversalMethod.BFS,
                          biased_k: int = 5,
                          radius: int = 2,
                          scores: Optional[Mapping[int, float]] = None) -> List[Region]:
    """
    Greedy non-overlapping region selection over graph-2.

    Seeds are visited in by_distortion_descending order; a seed already inside
    an accepted region is skipped. A grown region is accepted only if the
    fraction of its vertices already selected is <= overlap_threshold and, for
    count-bounded traversals, its size is exactly max_vertices. Radius-bounded
    regions are accepted at whatever size they reach.

    Args:
        pair: Graph pair with distortion computed
        region_count: Maximum number of regions to return
        max_vertices: Target region size
        overlap_threshold: Maximum allowed overlap fraction
        method: TraversalMethod used to grow each region
        biased_k: Neighbours followed per step by the biased traversal
        radius: Hop bound for the radius traversal
        scores: Seed / traversal ordering, defaults to the pair's distortion

    Returns:
        Accepted regions in acceptance order
    """
    method = TraversalMethod.parse(method)
    if scores is None:
        scores = pair.distortion
    G = pair.graph2
    selected = set()
    regions = []

    for seed in by_distortion_descending(G.nodes(), scores):
        if len(regions) >= region_count:
            break
        if seed in selected:
            continue
        region = grow_region(G, seed, method, max_vertices, scores, biased_k, radius)
        if _overlap(region, selected) > overlap_threshold:
            continue
        if method.count_bounded and region.size != max_vertices:
            continue
        region.score = size_normalized_score(pair, region)
        regions.append(region)
        selected.update(region.vertices)

    logger.debug("Greedy selection (%s) accepted %d/%d regions",
                 method.value, len(regions), region_count)
    return regions


def select_exhaustive_regions(pair: GraphPair,
                              region_count: int,
                              max_vertices: int,
                              method=TraversalMethod.PRIORITY_BFS,
                              biased_k: int = 5,
                              radius: int = 2,
                              scores: Optional[Mapping[int, float]] = None,
                              overlap_threshold: Optional[float] = None) -> List[Region]:
    """
    Exhaustive region selection: every graph-2 vertex seeds a candidate.

    Candidates whose size differs from max_vertices are discarded; the rest are
    scored with the size-normalised distortion (metric (c)) and sorted
    globally. The top region_count are returned without an overlap check
    unless ``overlap_threshold`` is given.
    """
    method = TraversalMethod.parse(method)
    if scores is None:
        scores = pair.distortion
    G = pair.graph2
    candidates = []
    for seed in sorted(G.nodes()):
        region = grow_region(G, seed, method, max_vertices, scores, biased_k, radius)
        if region.size != max_vertices:
            continue
        region.score = size_normalized_score(pair, region)
        candidates.append(region)

    ranked = rank_regions(candidates)
    logger.debug("Exhaustive selection (%s): %d candidates of size %d",
                 method.value, len(ranked), max_vertices)
    if overlap_threshold is None:
        return ranked[:region_count]

    selected = set()
    regions = []
    for region in ranked:
        if len(regions) >= region_count:
            break
        if _overlap(region, selected) > overlap_threshold:
            continue
        regions.append(region)
        selected.update(region.vertices)
    return regions


def select_top_changing_vertices(pair: GraphPair, region_count: int,
                                 scores: Optional[Mapping[int, float]] = None) -> List[Region]:
    """The region_count most distorted graph-2 vertices, each as a singleton region."""
    if scores is None:
        scores = pair.distortion
    G = pair.graph2
    regions = []
    for v in by_distortion_descending(G.nodes(), scores)[:region_count]:
        regions.append(Region(vertices=frozenset([v]),
                              subgraph=induced_region_graph(G, [v]),
                              seed=v,
                              score=float(pair.delta(v))))
    return regions


def select_top_changing_regions(pair: GraphPair,
                                region_count: int,
                                max_vertices: int,
                                method=TraversalMethod.BFS,
                                biased_k: int = 5,
                                radius: int = 2,
                                scores: Optional[Mapping[int, float]] = None) -> List[Region]:
    """
    Grow one region from each of the region_count most distorted vertices.

    No overlap or size filtering: every seed yields a region, so regions may
    overlap and may be smaller than max_vertices on small components.
    """
    method = TraversalMethod.parse(method)
    if scores is None:
        scores = pair.distortion
    G = pair.graph2
    regions = []
    for seed in by_distortion_descending(G.nodes(), scores)[:region_count]:
        region = grow_region(G, seed, method, max_vertices, scores, biased_k, radius)
        region.score = size_normalized_score(pair, region)
        regions.append(region)
    return regions


def map_region_to_graph(region: Region, G: nx.Graph) -> nx.Graph:
    """
    Induced subgraph of the region's vertices inside another graph version,
    normally graph-1, giving the "before" view of an "after" region.
    """
    return induced_region_graph(G, region.vertices)
