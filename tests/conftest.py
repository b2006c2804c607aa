"""
Shared graph fixtures.

sample:   hexagon 1..6 with rim edges and diagonals 1-3, 1-4, 1-5, 3-5
fan:      the same hexagon without 3-5 (a fan from vertex 1)
strip:    two rows 1-2-3-4 / 5-6-7-8 zig-zag triangulated by 1-6, 2-7, 3-8
twin:     edges 3-4 and 5-6 that both have apexes {1, 2}
"""

import pytest

from graph import Graph
from graph_helpers import build


@pytest.fixture
def sample():
    g = Graph()
    g.seedSample()
    return g


@pytest.fixture
def fan(sample):
    assert sample.removeEdge(3, 5)
    return sample


@pytest.fixture
def strip():
    return build(8, [
        (1, 2), (2, 3), (3, 4),
        (5, 6), (6, 7), (7, 8),
        (1, 5), (2, 6), (3, 7), (4, 8),
        (1, 6), (2, 7), (3, 8),
    ])


@pytest.fixture
def twin():
    return build(6, [
        (3, 4), (5, 6),
        (1, 3), (1, 4), (1, 5), (1, 6),
        (2, 3), (2, 4), (2, 5), (2, 6),
    ])
