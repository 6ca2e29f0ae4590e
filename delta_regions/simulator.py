"""
Synthetic graph pairs for region-selection experiments.

Graph-1 is a random weighted graph; graph-2 is a copy in which a few localized
"hotspots" (vertices near chosen centres) get their edge weights perturbed.
"""
import logging
from dataclasses import dataclass
from typing import List, Tuple

import networkx as nx
import numpy as np

from delta_regions.algorithms.delta import GraphPair, compute_distortion

logger = logging.getLogger(__name__)


@dataclass
class PerturbationConfig:
    """Configuration for graph pair generation."""
    num_vertices: int = 60
    edge_prob: float = 0.08
    min_weight: int = 1
    max_weight: int = 10
    num_hotspots: int = 2
    hotspot_radius: int = 1
    perturbation: int = 8
    background_noise: float = 0.0  # probability of perturbing an edge outside hotspots
    seed: int = 42


class GraphPairGenerator:
    """Generates graph pairs with known change hotspots."""

    def __init__(self, config: PerturbationConfig):
        self.config = config
        self.rng = np.random.default_rng(config.seed)

    def base_graph(self) -> nx.Graph:
        """Random weighted graph on vertices 1..num_vertices."""
        c = self.config
        G = nx.gnp_random_graph(c.num_vertices, c.edge_prob, seed=c.seed)
        G = nx.relabel_nodes(G, {v: v + 1 for v in G.nodes()})
        for u, v in G.edges():
            G[u][v]["weight"] = int(self.rng.integers(c.min_weight, c.max_weight + 1))
        return G

    def hotspots(self, G: nx.Graph) -> List[int]:
        nodes = sorted(v for v in G.nodes() if G.degree(v) > 0)
        if not nodes:
            return []
        count = min(self.config.num_hotspots, len(nodes))
        return sorted(int(v) for v in self.rng.choice(nodes, size=count, replace=False))

    def perturb(self, G: nx.Graph, centres: List[int]) -> nx.Graph:
        """Copy of G with weights around the hotspot centres increased."""
        c = self.config
        H = G.copy()
        affected = set()
        for centre in centres:
            affected.update(nx.single_source_shortest_path_length(G, centre, cutoff=c.hotspot_radius))

        for u, v in H.edges():
            if u in affected and v in affected:
                H[u][v]["weight"] += c.perturbation
            elif c.background_noise > 0 and self.rng.random() < c.background_noise:
                H[u][v]["weight"] += 1
        logger.debug("Perturbed %d vertices around centres %s", len(affected), centres)
        return H

    def generate(self) -> Tuple[GraphPair, List[int]]:
        """
        Returns:
            (GraphPair with distortion computed, hotspot centre ids)
        """
        G1 = self.base_graph()
        centres = self.hotspots(G1)
        G2 = self.perturb(G1, centres)
        pair = GraphPair(G1, G2)
        compute_distortion(pair)
        return pair, centres


def generate_graph_pair(config: PerturbationConfig = None) -> Tuple[GraphPair, List[int]]:
    return GraphPairGenerator(config or PerturbationConfig()).generate()
