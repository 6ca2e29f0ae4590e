import os
import sys

import pytest

_REPO_ROOT = os.path.dirname(os.path.abspath(__file__))
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

from delta_regions.data.data_loader import pair_from_triples  # noqa: E402

PATH_GRAPH1 = [(1, 2, 5), (2, 3, 5), (3, 4, 5)]
PATH_GRAPH2 = [(1, 2, 9), (2, 3, 5), (3, 4, 1)]


@pytest.fixture
def path_pair():
    """Path 1-2-3-4 whose outer edges change by +4 and -4."""
    return pair_from_triples(PATH_GRAPH1, PATH_GRAPH2)


@pytest.fixture
def two_cluster_pair():
    """Two triangles joined by a bridge; only the left triangle changes."""
    g1 = [(1, 2, 1), (2, 3, 1), (1, 3, 1), (3, 4, 1), (4, 5, 1), (5, 6, 1), (4, 6, 1)]
    g2 = [(1, 2, 6), (2, 3, 6), (1, 3, 6), (3, 4, 1), (4, 5, 1), (5, 6, 1), (4, 6, 1)]
    return pair_from_triples(g1, g2)
