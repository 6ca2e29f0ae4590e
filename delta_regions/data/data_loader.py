"""
Utilities for loading and saving weighted graph pairs.

Supported inputs:
  - (from_id, to_id, weight) triples
  - edge strings of the form "1,2,5-2,3,4-" (one triple per dash)
  - edge-list files with one "from,to,weight" line per edge
  - adjacency-record files with one "id,value,[neighbor:weight,...]" line per vertex
"""
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple, Union

import networkx as nx

from delta_regions.algorithms.delta import GraphPair, compute_distortion

logger = logging.getLogger(__name__)

Triple = Tuple[int, int, int]
PathLike = Union[str, Path]


class GraphFormatError(ValueError):
    """Raised for an input line or triple that cannot be parsed."""


def _parse_int(token: str, context: str) -> int:
    token = token.strip()
    try:
        return int(token)
    except ValueError:
        try:
            value = float(token)
        except ValueError:
            raise GraphFormatError(f"Invalid integer {token!r} in {context}") from None
        if not value.is_integer():
            raise GraphFormatError(f"Invalid integer {token!r} in {context}")
        return int(value)


def _check_id(vertex: int, context: str) -> int:
    if vertex < 1:
        raise GraphFormatError(f"Vertex ids must be positive in {context}, got {vertex}")
    return vertex


def build_weighted_graph(triples: Iterable[Sequence]) -> nx.Graph:
    """
    Build an undirected weighted graph from (from_id, to_id, weight) triples.

    Later triples for the same edge overwrite earlier ones.
    """
    G = nx.Graph()
    for index, triple in enumerate(triples):
        try:
            fields = tuple(triple)
        except TypeError:
            raise GraphFormatError(f"Triple #{index} {triple!r} is not a sequence") from None
        if len(fields) != 3:
            raise GraphFormatError(f"Triple #{index} {fields!r} does not have 3 fields")
        context = f"triple #{index} {fields!r}"
        u = _parse_int(str(fields[0]), context)
        v = _parse_int(str(fields[1]), context)
        w = _parse_int(str(fields[2]), context)
        G.add_edge(_check_id(u, context), _check_id(v, context), weight=w)
    return G


def parse_edge_string(data: str) -> List[Triple]:
    """Parse "u,v,w-u,v,w-..." into triples, ignoring empty segments."""
    triples = []
    for segment in data.split("-"):
        segment = segment.strip()
        if segment.startswith(","):
            segment = segment[1:]
        if not segment:
            continue
        parts = segment.split(",")
        if len(parts) != 3:
            raise GraphFormatError(f"Edge {segment!r} must have the form from,to,weight")
        context = f"edge {segment!r}"
        triples.append(tuple(_parse_int(p, context) for p in parts))
    return triples


def read_edge_list(path: PathLike) -> nx.Graph:
    """Read a file with one "from,to,weight" line per edge."""
    triples = []
    with open(path, "r") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if line.startswith(","):
                line = line[1:]
            if not line or line.startswith("#"):
                continue
            parts = line.split(",")
            if len(parts) != 3:
                raise GraphFormatError(f"{path}:{lineno}: expected from,to,weight, got {line!r}")
            context = f"{path}:{lineno}"
            triples.append(tuple(_parse_int(p, context) for p in parts))
    return build_weighted_graph(triples)


def read_adjacency_records(path: PathLike) -> nx.Graph:
    """
    Read a file with one "id,value,[neighbor:weight,...]" line per vertex.

    The value field is ignored; vertices with an empty neighbour list are kept.
    """
    G = nx.Graph()
    with open(path, "r") as f:
        for lineno, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            context = f"{path}:{lineno}"
            head, sep, rest = line.partition("[")
            if not sep or not rest.endswith("]"):
                raise GraphFormatError(f"{context}: missing neighbour list in {line!r}")
            vertex = _check_id(_parse_int(head.split(",")[0], context), context)
            G.add_node(vertex)
            for entry in rest[:-1].split(","):
                entry = entry.strip()
                if not entry:
                    continue
                neighbor, colon, weight = entry.partition(":")
                if not colon:
                    raise GraphFormatError(f"{context}: neighbour entry {entry!r} has no weight")
                G.add_edge(vertex, _check_id(_parse_int(neighbor, context), context),
                           weight=_parse_int(weight, context))
    return G


def write_adjacency_records(G: nx.Graph, path: PathLike, distortion=None) -> None:
    """Write G in the adjacency-record format read by read_adjacency_records."""
    distortion = distortion or {}
    lines = []
    for v in sorted(G.nodes()):
        neighbours = ",".join(f"{n}:{G[v][n].get('weight', 1)}" for n in sorted(G.adj[v]))
        lines.append(f"{v},{distortion.get(v, 0.0)},[{neighbours}]")
    Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


def read_graph(path: PathLike) -> nx.Graph:
    """Dispatch on content: adjacency records contain '[', edge lists do not."""
    with open(path, "r") as f:
        first = ""
        for line in f:
            if line.strip():
                first = line
                break
    if "[" in first:
        return read_adjacency_records(path)
    return read_edge_list(path)


def load_graph_pair(path1: PathLike, path2: PathLike, compute: bool = True) -> GraphPair:
    """Load both graph versions and (by default) compute their distortion."""
    pair = GraphPair(read_graph(path1), read_graph(path2))
    logger.info("Loaded %s (%d vertices, %d edges) and %s (%d vertices, %d edges)",
                path1, pair.graph1.number_of_nodes(), pair.graph1.number_of_edges(),
                path2, pair.graph2.number_of_nodes(), pair.graph2.number_of_edges())
    if compute:
        compute_distortion(pair)
    return pair


def pair_from_triples(triples1: Iterable[Sequence], triples2: Iterable[Sequence],
                      compute: bool = True) -> GraphPair:
    pair = GraphPair(build_weighted_graph(triples1), build_weighted_graph(triples2))
    if compute:
        compute_distortion(pair)
    return pair


def vertex_count(pair: GraphPair) -> int:
    """Ids are dense from 1, so the count is the largest id seen in either graph."""
    vertices = pair.vertices()
    return max(vertices) if vertices else 0
