"""
Run configuration for region selection and parameter sweeps.
"""
from dataclasses import dataclass, field
from typing import List, Sequence


@dataclass
class RegionConfig:
    """Configuration for one region-selection run."""
    region_count: int = 10
    max_vertices: int = 16
    biased_k: int = 5
    overlap_threshold: float = 0.0
    radius: int = 2

    def __post_init__(self):
        if self.region_count < 1:
            raise ValueError(f"region_count must be >= 1, got {self.region_count}")
        if self.max_vertices < 1:
            raise ValueError(f"max_vertices must be >= 1, got {self.max_vertices}")
        if self.biased_k < 1:
            raise ValueError(f"biased_k must be >= 1, got {self.biased_k}")
        if not 0.0 <= self.overlap_threshold <= 1.0:
            raise ValueError(f"overlap_threshold must be in [0, 1], got {self.overlap_threshold}")
        if self.radius < 0:
            raise ValueError(f"radius must be >= 0, got {self.radius}")


@dataclass
class SearchConfig:
    """Configuration for the threshold / rank-cutoff sweeps."""
    step: float = 0.1
    max_threshold: float = 1.0
    k_values: Sequence[int] = field(default_factory=lambda: range(12, 401, 10))
    region_selectors: int = 10
    region: RegionConfig = field(default_factory=RegionConfig)

    def __post_init__(self):
        if not 0.0 < self.max_threshold <= 1.0:
            raise ValueError(f"max_threshold must be in (0, 1], got {self.max_threshold}")
        if not 0.0 < self.step <= self.max_threshold:
            raise ValueError(f"step must be in (0, max_threshold={self.max_threshold}], got {self.step}")
        if self.region_selectors < 1:
            raise ValueError(f"region_selectors must be >= 1, got {self.region_selectors}")

    def thresholds(self) -> List[float]:
        """0, step, 2*step, ... strictly below max_threshold."""
        values = []
        i = 0
        while True:
            threshold = round(i * self.step, 10)
            if threshold >= self.max_threshold:
                break
            values.append(threshold)
            i += 1
        return values
