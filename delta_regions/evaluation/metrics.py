"""
Metrics for evaluating how much change a set of regions captures.
"""
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union

import networkx as nx
import numpy as np
import pandas as pd

from delta_regions.algorithms.delta import GraphPair
from delta_regions.algorithms.traversal import Region
from delta_regions.utils import degree_of, neighbors_of

METRIC_NAMES = (
    "edges_graph1",
    "edges_graph2",
    "edges_min",
    "degree_graph1",
    "degree_graph2",
    "degree_min",
)

RegionLike = Union[Region, Iterable[int]]


@dataclass(frozen=True)
class RegionStatistics:
    distortion_sum: float
    edges_graph1: int
    edges_graph2: int
    degree_graph1: int
    degree_graph2: int


def _vertex_set(region: RegionLike) -> frozenset:
    if isinstance(region, Region):
        return region.vertices
    return frozenset(region)


def internal_edge_count(G: nx.Graph, vertices) -> int:
    """Number of undirected edges of G with both endpoints in vertices."""
    count = 0
    for v in vertices:
        for n in neighbors_of(G, v):
            if n == v:
                count += 2
            elif n in vertices:
                count += 1
    # each internal edge was seen from both endpoints
    return count // 2


def region_statistics(pair: GraphPair, region: RegionLike) -> RegionStatistics:
    """
    Collect the distortion sum, internal edge counts and degree sums of a
    region in both graph versions.

    Args:
        pair: Graph pair with distortion computed
        region: Region or iterable of vertex ids

    Returns:
        RegionStatistics for the region
    """
    vertices = _vertex_set(region)
    return RegionStatistics(
        distortion_sum=float(sum(pair.delta(v) for v in vertices)),
        edges_graph1=internal_edge_count(pair.graph1, vertices),
        edges_graph2=internal_edge_count(pair.graph2, vertices),
        degree_graph1=sum(degree_of(pair.graph1, v) for v in vertices),
        degree_graph2=sum(degree_of(pair.graph2, v) for v in vertices),
    )


def metric_vector(stats: RegionStatistics) -> np.ndarray:
    """
    Six normalised distortion scores; every denominator is floored at 1.

    (a) sum / E1, (b) sum / E2, (c) sum / min(E1, E2),
    (d) sum / D1, (e) sum / D2, (f) sum / min(D1, D2)
    """
    s = stats.distortion_sum
    e1 = max(1, stats.edges_graph1)
    e2 = max(1, stats.edges_graph2)
    d1 = max(1, stats.degree_graph1)
    d2 = max(1, stats.degree_graph2)
    return np.array([s / e1, s / e2, s / min(e1, e2),
                     s / d1, s / d2, s / min(d1, d2)], dtype=float)


def size_normalized_score(pair: GraphPair, region: RegionLike) -> float:
    """Metric (c): distortion sum over the smaller internal edge count."""
    return float(metric_vector(region_statistics(pair, region))[2])


def evaluate_region(pair: GraphPair, region: RegionLike) -> np.ndarray:
    return metric_vector(region_statistics(pair, region))


def evaluate_regions(pair: GraphPair, regions: Sequence[RegionLike]) -> np.ndarray:
    """
    Evaluate every region.

    Returns:
        Array of shape (len(regions), 6), one row per region in input order
    """
    if not regions:
        return np.zeros((0, len(METRIC_NAMES)))
    return np.vstack([evaluate_region(pair, r) for r in regions])


def average_distortion(pair: GraphPair, regions: Sequence[RegionLike]) -> np.ndarray:
    """Mean distortion per region (0 for an empty region)."""
    values = []
    for region in regions:
        vertices = _vertex_set(region)
        if vertices:
            values.append(sum(pair.delta(v) for v in vertices) / len(vertices))
        else:
            values.append(0.0)
    return np.array(values, dtype=float)


def metrics_frame(matrix: np.ndarray) -> pd.DataFrame:
    """Label an evaluation matrix with metric names and R1..Rn row labels."""
    matrix = np.asarray(matrix, dtype=float).reshape(-1, len(METRIC_NAMES))
    index = [f"R{i}" for i in range(1, matrix.shape[0] + 1)]
    return pd.DataFrame(matrix, columns=list(METRIC_NAMES), index=index)


def metric_sums(matrix: np.ndarray) -> List[float]:
    """Column sums of an evaluation matrix (zeros for an empty one)."""
    matrix = np.asarray(matrix, dtype=float).reshape(-1, len(METRIC_NAMES))
    return [float(x) for x in matrix.sum(axis=0)]
