"""
Parameter sweeps over pruning thresholds and rank cutoffs.

Every sweep works on copies of the input pair and records its results in a
ScoreAccumulator, one record per method identifier.
"""
import logging
from functools import partial
from typing import Callable, Dict, List, Optional

import numpy as np

from delta_regions.algorithms.delta import GraphPair
from delta_regions.algorithms.radius_selector import select_max_changing_radius
from delta_regions.algorithms.ranking import ranking_slice
from delta_regions.algorithms.region_selector import select_exhaustive_regions, select_greedy_regions
from delta_regions.algorithms.traversal import Region, TraversalMethod
from delta_regions.config import SearchConfig
from delta_regions.data.data_loader import vertex_count
from delta_regions.evaluation.best_scores import ScoreAccumulator
from delta_regions.evaluation.metrics import evaluate_regions
from delta_regions.reductions.threshold_pruning import remove_vertices_below_threshold

logger = logging.getLogger(__name__)

RegionMethod = Callable[[GraphPair], List[Region]]


def default_methods(config: SearchConfig) -> Dict[str, RegionMethod]:
    """
    All selection strategies keyed by method identifier, configured from
    config.region.
    """
    rc = config.region
    greedy = partial(select_greedy_regions,
                     region_count=rc.region_count,
                     max_vertices=rc.max_vertices,
                     overlap_threshold=rc.overlap_threshold,
                     biased_k=rc.biased_k,
                     radius=rc.radius)
    exhaustive = partial(select_exhaustive_regions,
                         region_count=rc.region_count,
                         max_vertices=rc.max_vertices,
                         biased_k=rc.biased_k,
                         radius=rc.radius)
    return {
        "greedy-bfs": partial(greedy, method=TraversalMethod.BFS),
        "greedy-biased": partial(greedy, method=TraversalMethod.BIASED_BFS),
        "greedy-priority": partial(greedy, method=TraversalMethod.PRIORITY_BFS),
        "greedy-radius": partial(greedy, method=TraversalMethod.RADIUS_BFS),
        "exhaustive-bfs": partial(exhaustive, method=TraversalMethod.BFS),
        "exhaustive-biased": partial(exhaustive, method=TraversalMethod.BIASED_BFS),
        "exhaustive-priority": partial(exhaustive, method=TraversalMethod.PRIORITY_BFS),
        "radius": partial(select_max_changing_radius,
                          region_count=rc.region_count,
                          min_vertices=rc.max_vertices),
        "radius-size": partial(select_max_changing_radius,
                               region_count=rc.region_count,
                               min_vertices=rc.max_vertices,
                               size_normalized=True),
    }


def threshold_sweep(pair: GraphPair,
                    methods: Dict[str, RegionMethod],
                    config: SearchConfig,
                    accumulator: Optional[ScoreAccumulator] = None) -> ScoreAccumulator:
    """
    Running pruning sweep.

    At each threshold every method runs on the current (progressively pruned)
    copy and its evaluation is offered to the accumulator with the non-strict
    comparison. Between thresholds another ``step`` fraction of the original
    vertex count is pruned.

    Args:
        pair: Graph pair with distortion computed; left untouched
        methods: Method identifier -> callable returning regions for a pair
        config: Sweep configuration
        accumulator: Accumulator to extend, a new one by default

    Returns:
        The accumulator holding the best result per method
    """
    if accumulator is None:
        accumulator = ScoreAccumulator()
    work = pair.copy()
    n = vertex_count(pair)

    thresholds = config.thresholds()
    for i, threshold in enumerate(thresholds):
        for method_id, method in methods.items():
            regions = method(work)
            if not regions:
                logger.info("%s: no regions at threshold=%s", method_id, threshold)
                continue
            accumulator.update(method_id, evaluate_regions(work, regions), threshold, strict=False)
        if i < len(thresholds) - 1:
            remove_vertices_below_threshold(work, config.step, n)

    return accumulator


def exhaustive_threshold_sweep(pair: GraphPair,
                               config: SearchConfig,
                               method=TraversalMethod.PRIORITY_BFS,
                               accumulator: Optional[ScoreAccumulator] = None) -> ScoreAccumulator:
    """
    Exhaustive selection at every threshold, each time on a fresh copy pruned
    by the cumulative threshold. Uses the strict comparison, so the lowest
    threshold reaching a given best sum is kept.
    """
    method = TraversalMethod.parse(method)
    if accumulator is None:
        accumulator = ScoreAccumulator(strict=True)
    method_id = f"exhaustive-{method.value}"
    rc = config.region
    n = vertex_count(pair)

    for threshold in config.thresholds():
        work = pair.copy()
        remove_vertices_below_threshold(work, threshold, n)
        regions = select_exhaustive_regions(work, rc.region_count, rc.max_vertices,
                                            method, rc.biased_k, rc.radius)
        if not regions:
            logger.info("%s: no regions at threshold=%s", method_id, threshold)
            continue
        accumulator.update(method_id, evaluate_regions(work, regions), threshold, strict=True)

    return accumulator


def ranking_sweep(pair: GraphPair,
                  ranking_provider: Callable[[int], np.ndarray],
                  config: SearchConfig,
                  method_id: str = "ranking",
                  exhaustive: bool = False,
                  accumulator: Optional[ScoreAccumulator] = None) -> ScoreAccumulator:
    """
    Sweep pruning threshold x rank cutoff k with an external ranking.

    ``ranking_provider(k)`` returns a flat array holding
    ``config.region_selectors`` rankings back to back. Each ranking slice
    orders seeds, traversal and pruning on its own fresh copy of the pair and
    contributes one region; the regions of all slices are evaluated together
    against delta and offered to the accumulator with k as the parameter.
    Cutoffs above the vertex count are not requested. A provider error or an
    empty or short ranking skips that k.
    """
    if accumulator is None:
        accumulator = ScoreAccumulator()
    rc = config.region
    n = vertex_count(pair)

    for threshold in config.thresholds():
        for k in config.k_values:
            if k > n:
                continue
            try:
                ranking = ranking_provider(k)
            except (ValueError, IndexError) as e:
                logger.warning("Ranking for k=%s unavailable: %s", k, e)
                continue

            slices = [ranking_slice(ranking, s, n) for s in range(1, config.region_selectors + 1)]
            if any(scores is None for scores in slices):
                logger.info("Ranking for k=%s is empty or too short, skipping", k)
                continue

            rows = []
            for scores in slices:
                work = pair.copy()
                remove_vertices_below_threshold(work, threshold, n, scores=scores)
                if exhaustive:
                    regions = select_exhaustive_regions(work, 1, rc.max_vertices,
                                                        TraversalMethod.PRIORITY_BFS,
                                                        scores=scores)
                else:
                    regions = select_greedy_regions(work, 1, rc.max_vertices,
                                                    rc.overlap_threshold,
                                                    TraversalMethod.PRIORITY_BFS,
                                                    scores=scores)
                if regions:
                    rows.append(evaluate_regions(work, regions))

            if not rows:
                logger.info("%s: no regions at threshold=%s k=%s", method_id, threshold, k)
                continue
            accumulator.update(method_id, np.vstack(rows), threshold, parameter=k, strict=exhaustive)

    return accumulator
