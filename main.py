import argparse
import logging
import sys

from delta_regions.algorithms.radius_selector import select_max_changing_radius
from delta_regions.algorithms.ranking import load_ranking
from delta_regions.algorithms.region_selector import (select_exhaustive_regions, select_greedy_regions,
                                                      select_top_changing_regions, select_top_changing_vertices)
from delta_regions.algorithms.traversal import TraversalMethod
from delta_regions.config import RegionConfig, SearchConfig
from delta_regions.data.data_loader import GraphFormatError, load_graph_pair
from delta_regions.evaluation.metrics import evaluate_regions, metrics_frame
from delta_regions.evaluation.parameter_search import (default_methods, exhaustive_threshold_sweep,
                                                       ranking_sweep, threshold_sweep)
from delta_regions.simulator import PerturbationConfig, generate_graph_pair
from delta_regions.visualization.render import render_region

logger = logging.getLogger(__name__)

SELECTORS = ["greedy", "exhaustive", "top-vertices", "top-regions", "radius", "radius-size"]


def select(pair, selector, config: RegionConfig, method):
    if selector == "greedy":
        return select_greedy_regions(pair, config.region_count, config.max_vertices,
                                     config.overlap_threshold, method, config.biased_k, config.radius)
    if selector == "exhaustive":
        return select_exhaustive_regions(pair, config.region_count, config.max_vertices,
                                         method, config.biased_k, config.radius)
    if selector == "top-vertices":
        return select_top_changing_vertices(pair, config.region_count)
    if selector == "top-regions":
        return select_top_changing_regions(pair, config.region_count, config.max_vertices,
                                           method, config.biased_k, config.radius)
    return select_max_changing_radius(pair, config.region_count, config.max_vertices,
                                      size_normalized=selector == "radius-size")


def print_regions(pair, regions):
    if not regions:
        print("No regions found")
        return
    for i, region in enumerate(regions, start=1):
        view = render_region(pair, region)
        print(f"R{i} seed={region.seed} size={region.size} score={region.score:.3f}")
        print("  graph1: " + " ".join(view.graph1_edges))
        print("  graph2: " + " ".join(view.graph2_edges))
        print("  colors: " + " ".join(view.colors))
    print(metrics_frame(evaluate_regions(pair, regions)).round(3).to_string())


def add_region_arguments(parser):
    parser.add_argument('--regions', type=int, default=10, help='Number of regions to select')
    parser.add_argument('--max-vertices', type=int, default=16, help='Vertices per region')
    parser.add_argument('--biased-k', type=int, default=5, help='Neighbours followed by the biased BFS')
    parser.add_argument('--overlap', type=float, default=0.0, help='Maximum overlap fraction (greedy)')
    parser.add_argument('--radius', type=int, default=2, help='Hop bound for the radius BFS')


def region_config(args) -> RegionConfig:
    return RegionConfig(region_count=args.regions,
                        max_vertices=args.max_vertices,
                        biased_k=args.biased_k,
                        overlap_threshold=args.overlap,
                        radius=args.radius)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Find regions of concentrated change between two graph versions")
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    regions_parser = sub.add_parser('regions', help='Select regions for one graph pair')
    regions_parser.add_argument('graph1', help='Edge list or adjacency records of the first version')
    regions_parser.add_argument('graph2', help='Edge list or adjacency records of the second version')
    regions_parser.add_argument('--selector', choices=SELECTORS, default='greedy')
    regions_parser.add_argument('--method', default='bfs', help='bfs, radius_bfs, biased_bfs or priority_bfs')
    add_region_arguments(regions_parser)

    sweep_parser = sub.add_parser('sweep', help='Sweep pruning thresholds and report the best settings')
    sweep_parser.add_argument('graph1')
    sweep_parser.add_argument('graph2')
    sweep_parser.add_argument('--step', type=float, default=0.1, help='Pruning step')
    sweep_parser.add_argument('--max-threshold', type=float, default=1.0, help='Threshold ceiling (exclusive)')
    sweep_parser.add_argument('--exhaustive', action='store_true', help='Fresh-copy exhaustive sweep')
    sweep_parser.add_argument('--ranking', help='Flat ranking array (.npy or text) for a ranking sweep')
    sweep_parser.add_argument('--output', help='Write the result table to this CSV file')
    add_region_arguments(sweep_parser)

    demo_parser = sub.add_parser('demo', help='Run greedy selection on a generated graph pair')
    demo_parser.add_argument('--vertices', type=int, default=60)
    demo_parser.add_argument('--seed', type=int, default=42)
    demo_parser.add_argument('--plot', action='store_true', help='Plot the best region')
    add_region_arguments(demo_parser)

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(name)s %(levelname)s: %(message)s')

    try:
        config = region_config(args)
        if args.command == 'regions':
            pair = load_graph_pair(args.graph1, args.graph2)
            regions = select(pair, args.selector, config, TraversalMethod.parse(args.method))
            print_regions(pair, regions)

        elif args.command == 'sweep':
            pair = load_graph_pair(args.graph1, args.graph2)
            search = SearchConfig(step=args.step, max_threshold=args.max_threshold, region=config)
            if args.ranking:
                ranking = load_ranking(args.ranking)
                # a precomputed ranking has no rank cutoff to sweep
                search.k_values = [0]
                accumulator = ranking_sweep(pair, lambda k: ranking, search,
                                            exhaustive=args.exhaustive)
            elif args.exhaustive:
                accumulator = exhaustive_threshold_sweep(pair, search)
            else:
                accumulator = threshold_sweep(pair, default_methods(search), search)
            frame = accumulator.to_frame()
            print(frame.to_string(index=False))
            if args.output:
                frame.to_csv(args.output, index=False)
                logger.info("Results saved to %s", args.output)

        else:
            pair, centres = generate_graph_pair(PerturbationConfig(num_vertices=args.vertices, seed=args.seed))
            logger.info("Generated pair with hotspots around %s", centres)
            regions = select_greedy_regions(pair, config.region_count, config.max_vertices,
                                            config.overlap_threshold, TraversalMethod.BFS)
            print_regions(pair, regions)
            if args.plot and regions:
                from delta_regions.visualization.plot import visualize_region_comparison
                visualize_region_comparison(pair, regions[0], title=f"Region around {regions[0].seed}")
    except (GraphFormatError, ValueError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
