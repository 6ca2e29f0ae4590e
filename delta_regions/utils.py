"""
Shared helpers: neighbour lookups that tolerate missing vertices and the two
named vertex orderings used for seeding and pruning.
"""
from types import MappingProxyType
from typing import Hashable, Iterable, List, Mapping, Optional

import networkx as nx

_EMPTY: Mapping = MappingProxyType({})


def neighbors_of(G: nx.Graph, v) -> Mapping:
    """Adjacency mapping of v in G, or an empty mapping when v is not in G."""
    if v in G:
        return G.adj[v]
    return _EMPTY


def edge_weight(G: nx.Graph, u, v, default: int = 0) -> int:
    """Weight of edge (u, v) in G, `default` when the edge does not exist."""
    attrs = neighbors_of(G, u).get(v)
    if attrs is None:
        return default
    return attrs.get("weight", 1)


def degree_of(G: nx.Graph, v) -> int:
    return len(neighbors_of(G, v))


def by_distortion_descending(vertices: Iterable[Hashable],
                             scores: Mapping[Hashable, float]) -> List:
    """
    Highest score first. Ties are broken by ascending vertex id so that
    repeated runs over the same input give the same order.
    """
    return sorted(vertices, key=lambda v: (-scores.get(v, 0.0), v))


def by_distortion_ascending(vertices: Iterable[Hashable],
                            scores: Mapping[Hashable, float]) -> List:
    """Lowest score first, ties by ascending vertex id (pruning order)."""
    return sorted(vertices, key=lambda v: (scores.get(v, 0.0), v))


def all_vertices(G1: nx.Graph, G2: Optional[nx.Graph] = None) -> List:
    """Sorted union of the vertex sets of G1 and G2."""
    nodes = set(G1.nodes())
    if G2 is not None:
        nodes.update(G2.nodes())
    return sorted(nodes)


def format_metric(value: float) -> str:
    """Truncate (not round) to three fractional digits for display."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = f"{float(value):.10f}"
    if text in ("inf", "-inf", "nan"):
        return text
    whole, _, frac = text.partition(".")
    frac = frac[:3].rstrip("0")
    return f"{whole}.{frac}" if frac else whole
