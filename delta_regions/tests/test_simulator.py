import unittest

from delta_regions.algorithms.region_selector import select_greedy_regions
from delta_regions.config import RegionConfig, SearchConfig
from delta_regions.simulator import GraphPairGenerator, PerturbationConfig, generate_graph_pair


class TestGraphPairGenerator(unittest.TestCase):

    def setUp(self):
        self.config = PerturbationConfig(num_vertices=40, edge_prob=0.15, num_hotspots=2, seed=7)

    def test_same_vertices_in_both_versions(self):
        pair, _ = generate_graph_pair(self.config)
        self.assertEqual(set(pair.graph1.nodes()), set(range(1, 41)))
        self.assertEqual(set(pair.graph1.nodes()), set(pair.graph2.nodes()))
        self.assertEqual(set(map(frozenset, pair.graph1.edges())),
                         set(map(frozenset, pair.graph2.edges())))

    def test_reproducible(self):
        first, centres1 = generate_graph_pair(self.config)
        second, centres2 = generate_graph_pair(self.config)
        self.assertEqual(centres1, centres2)
        self.assertEqual(first.distortion, second.distortion)

    def test_hotspot_centres_change(self):
        pair, centres = generate_graph_pair(self.config)
        self.assertEqual(len(centres), 2)
        for centre in centres:
            self.assertGreater(pair.delta(centre), 0)

    def test_no_perturbation_means_no_distortion(self):
        config = PerturbationConfig(num_vertices=20, perturbation=0, seed=1)
        pair, _ = GraphPairGenerator(config).generate()
        self.assertTrue(all(d == 0 for d in pair.distortion.values()))

    def test_greedy_finds_changed_vertices(self):
        pair, _ = generate_graph_pair(self.config)
        regions = select_greedy_regions(pair, 3, 3, overlap_threshold=0.0)
        self.assertTrue(regions)
        self.assertGreater(sum(pair.delta(v) for r in regions for v in r.vertices), 0)


class TestConfig(unittest.TestCase):

    def test_defaults(self):
        config = SearchConfig()
        self.assertEqual(config.region.region_count, 10)
        self.assertEqual(config.region.max_vertices, 16)
        self.assertEqual(config.region.biased_k, 5)
        self.assertEqual(list(config.k_values)[:2], [12, 22])
        self.assertEqual(config.region_selectors, 10)

    def test_validation(self):
        with self.assertRaises(ValueError):
            RegionConfig(max_vertices=0)
        with self.assertRaises(ValueError):
            RegionConfig(overlap_threshold=1.5)
        with self.assertRaises(ValueError):
            SearchConfig(step=0)
        with self.assertRaises(ValueError):
            SearchConfig(max_threshold=2.0)
        with self.assertRaises(ValueError):
            SearchConfig(step=1.5)
        with self.assertRaises(ValueError):
            SearchConfig(step=0.6, max_threshold=0.5)
        self.assertEqual(SearchConfig(step=1.0).thresholds(), [0.0])
