"""
Best-score tracking across repeated evaluations of one parameter search.

A ScoreAccumulator belongs to a single search session and is passed around
explicitly. Records are keyed by method identifier, so different selection
strategies never overwrite each other's history.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional

import numpy as np
import pandas as pd

from delta_regions.evaluation.metrics import METRIC_NAMES, metric_sums
from delta_regions.utils import format_metric

logger = logging.getLogger(__name__)

NUM_METRICS = len(METRIC_NAMES)


@dataclass
class BestRecord:
    """Best per-region column, its sum and the settings that produced it, per metric slot."""
    columns: List[np.ndarray] = field(default_factory=lambda: [np.zeros(0) for _ in range(NUM_METRICS)])
    sums: List[float] = field(default_factory=lambda: [0.0] * NUM_METRICS)
    thresholds: List[float] = field(default_factory=lambda: [0.0] * NUM_METRICS)
    parameters: List[Optional[float]] = field(default_factory=lambda: [None] * NUM_METRICS)
    updates: int = 0


class ScoreAccumulator:
    """
    Keeps, per method identifier and metric slot, the best evaluation seen.

    Args:
        strict: Improvement requires a strictly larger column sum (``>``).
            With the default non-strict comparison (``>=``) a later setting
            with an equal sum replaces the earlier one.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self._records: Dict[Hashable, BestRecord] = {}

    def _improves(self, current: float, best: float, strict: bool) -> bool:
        if strict:
            return current > best
        return current >= best

    def update(self, method_id: Hashable, matrix: np.ndarray, threshold: float,
               parameter: Optional[float] = None, strict: Optional[bool] = None) -> List[int]:
        """
        Compare the column sums of a new evaluation matrix with the stored best
        and overwrite every metric slot that improved. ``strict`` overrides the
        accumulator default for this one update.

        Returns:
            Indices of the improved metric slots
        """
        matrix = np.asarray(matrix, dtype=float).reshape(-1, NUM_METRICS)
        record = self._records.setdefault(method_id, BestRecord())
        if strict is None:
            strict = self.strict
        improved = []
        for i, current in enumerate(metric_sums(matrix)):
            if self._improves(current, record.sums[i], strict):
                record.columns[i] = matrix[:, i].copy()
                record.sums[i] = current
                record.thresholds[i] = threshold
                record.parameters[i] = parameter
                improved.append(i)
        record.updates += 1
        if improved:
            logger.debug("%s: metrics %s improved at threshold=%s parameter=%s",
                         method_id, improved, threshold, parameter)
        return improved

    def best(self, method_id: Hashable) -> BestRecord:
        """Best record for method_id; KeyError if that method was never evaluated."""
        return self._records[method_id]

    def method_ids(self) -> List[Hashable]:
        return list(self._records)

    def __contains__(self, method_id) -> bool:
        return method_id in self._records

    def to_frame(self) -> pd.DataFrame:
        """One row per (method, metric) with the best sum and its settings."""
        rows = []
        for method_id, record in self._records.items():
            for i, name in enumerate(METRIC_NAMES):
                rows.append({
                    "method": method_id,
                    "metric": name,
                    "best_sum": record.sums[i],
                    "threshold": record.thresholds[i],
                    "parameter": record.parameters[i],
                    "regions": len(record.columns[i]),
                })
        return pd.DataFrame(rows, columns=["method", "metric", "best_sum", "threshold",
                                           "parameter", "regions"])

    def report(self, method_id: Hashable) -> List[str]:
        """Human-readable lines: per metric the best region values and threshold."""
        record = self.best(method_id)
        lines = [str(method_id)]
        for i, name in enumerate(METRIC_NAMES):
            lines.append(f"[{name}]")
            for r, value in enumerate(record.columns[i], start=1):
                lines.append(f"R{r}={format_metric(value)}")
            lines.append(f"threshold={format_metric(record.thresholds[i])}")
            if record.parameters[i] is not None:
                lines.append(f"parameter={record.parameters[i]}")
        return lines
