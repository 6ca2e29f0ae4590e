"""
Externally supplied per-vertex rankings.

An external embedding computation may hand back one flat array holding several
rankings back to back; ranking number ``selector`` (1-based) for vertex id ``v``
lives at ``ranking[(selector - 1) * vertex_count + (v - 1)]``.
"""
import logging
from pathlib import Path
from typing import Dict, Optional, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)


def ranking_slice(ranking: Optional[Sequence[float]],
                  selector: int,
                  vertex_count: int) -> Optional[Dict[int, float]]:
    """
    Per-vertex scores of one ranking slice, keyed by vertex id 1..vertex_count.

    Returns None when the ranking is empty or too short to hold the slice, so
    callers can skip that configuration.
    """
    if ranking is None or vertex_count <= 0 or selector < 1:
        return None
    values = np.asarray(ranking, dtype=float).ravel()
    start = (selector - 1) * vertex_count
    end = start + vertex_count
    if values.size == 0 or end > values.size:
        logger.debug("Ranking of length %d has no slice %d for %d vertices",
                     values.size, selector, vertex_count)
        return None
    return {i + 1: float(values[start + i]) for i in range(vertex_count)}


def load_ranking(path: Union[str, Path]) -> np.ndarray:
    """Load a flat ranking from a .npy file or a comma/whitespace separated text file."""
    path = Path(path)
    if path.suffix == ".npy":
        return np.load(path).ravel()
    text = path.read_text().replace(",", " ").split()
    return np.array([float(x) for x in text], dtype=float)
