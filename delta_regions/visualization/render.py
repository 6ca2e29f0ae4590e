"""
Text rendering of regions for display: edge strings per graph version and
per-vertex colours derived from distortion.
"""
from dataclasses import dataclass
from typing import List

import matplotlib
import networkx as nx
from matplotlib import colors as mcolors

from delta_regions.algorithms.delta import GraphPair
from delta_regions.algorithms.region_selector import map_region_to_graph
from delta_regions.algorithms.traversal import Region


@dataclass
class RegionView:
    graph1_edges: List[str]
    graph2_edges: List[str]
    colors: List[str]


def region_edge_strings(G: nx.Graph) -> List[str]:
    """'from,to' once per undirected edge, smaller id first, sorted."""
    edges = {tuple(sorted((u, v))) for u, v in G.edges()}
    return [f"{u},{v}" for u, v in sorted(edges)]


def _normalize(value: float, low: float, high: float) -> float:
    if high <= low:
        return 0.0
    return min(1.0, max(0.0, (value - low) / (high - low)))


def node_colors(pair: GraphPair, cmap: str = "viridis") -> List[str]:
    """
    'id,#RRGGBB' for every graph-2 vertex, sorted by id. Distortion is
    min-max normalised over the whole pair before going through the colour map.
    """
    colormap = matplotlib.colormaps[cmap]
    result = []
    for v in sorted(pair.graph2.nodes()):
        x = _normalize(pair.delta(v), pair.min_delta, pair.max_delta)
        result.append(f"{v},{mcolors.to_hex(colormap(x)).upper()}")
    return result


def render_region(pair: GraphPair, region: Region) -> RegionView:
    """Before/after edge lists of a region plus the colours of its vertices."""
    before = map_region_to_graph(region, pair.graph1)
    after = map_region_to_graph(region, pair.graph2)
    colors = [c for c in node_colors(pair) if int(c.split(",")[0]) in region.vertices]
    return RegionView(graph1_edges=region_edge_strings(before),
                      graph2_edges=region_edge_strings(after),
                      colors=colors)
