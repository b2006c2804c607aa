"""
Graph store: vertex/edge mutators and the adjacency invariants.
"""

import random

from graph import Graph
from graph_helpers import assert_symmetric


class TestVertices:

    def test_ids_are_monotonic_and_never_reused(self):
        g = Graph()
        a = g.addVertex()
        b = g.addVertex()
        assert (a, b) == (1, 2)
        assert g.removeVertex(b)
        assert g.addVertex() == 3
        assert g.getVertexIds() == [1, 3]

    def test_position_is_carried_untouched(self):
        g = Graph()
        payload = object()
        vid = g.addVertex(payload)
        assert g.getVertex(vid).getPosition() is payload

    def test_remove_unknown_vertex_fails(self):
        g = Graph()
        g.addVertex()
        assert not g.removeVertex(42)
        assert g.getVertexIds() == [1]

    def test_remove_vertex_cleans_adjacency_and_selection(self, strip):
        assert strip.tryAddToSelection(1, 6) is None
        assert strip.tryAddToSelection(3, 8) is None

        assert strip.removeVertex(6)

        for u in strip.getVertexIds():
            assert 6 not in strip.getNeighbors(u)
        assert not strip.hasVertex(6)
        assert strip.getVertex(6) is None
        assert all(6 not in key for key in strip.getSelection())
        assert strip.getSelection() == ((3, 8),)
        assert strip.validate_invariants()

    def test_reset_restarts_ids(self, sample):
        sample.tryAddToSelection(1, 4)
        sample.resetGraph()
        assert sample.getVertexIds() == []
        assert sample.getEdges() == []
        assert sample.getSelection() == ()
        assert sample.addVertex() == 1


class TestEdges:

    def test_add_edge_is_symmetric(self):
        g = Graph()
        u, v = g.addVertex(), g.addVertex()
        assert g.addEdge(v, u)
        assert g.getNeighbors(u) == {v}
        assert g.getNeighbors(v) == {u}
        assert g.getEdges() == [(1, 2)]

    def test_self_loop_rejected(self):
        g = Graph()
        u = g.addVertex()
        assert not g.addEdge(u, u)
        assert g.getNeighbors(u) == frozenset()

    def test_unknown_endpoint_rejected(self):
        g = Graph()
        u = g.addVertex()
        assert not g.addEdge(u, 99)
        assert not g.removeEdge(u, 99)
        assert g.getNeighbors(99) == frozenset()

    def test_duplicate_edge_fails_and_leaves_adjacency(self, sample):
        before = sample.getEdges()
        assert not sample.addEdge(1, 3)
        assert not sample.addEdge(3, 1)
        assert sample.getEdges() == before

    def test_remove_missing_edge_fails(self, sample):
        before = sample.getEdges()
        assert not sample.removeEdge(2, 5)
        assert sample.getEdges() == before

    def test_remove_edge_drops_selection_key(self, fan):
        assert fan.tryAddToSelection(1, 4) is None
        assert fan.removeEdge(4, 1)
        assert fan.getSelection() == ()
        assert not fan.hasEdge(1, 4)

    def test_neighbors_is_a_copy(self, sample):
        nbrs = sample.getNeighbors(1)
        assert isinstance(nbrs, frozenset)
        assert nbrs == {2, 3, 4, 5, 6}

    def test_stats(self, sample):
        stats = sample.get_stats()
        assert stats == {"V": 6, "E": 10, "T": 6, "selected": 0, "valid": True}


def test_random_mutations_keep_invariants():
    rng = random.Random(1234)
    g = Graph()
    for _ in range(8):
        g.addVertex()

    for _ in range(600):
        ids = g.getVertexIds()
        roll = rng.random()
        if roll < 0.08 or len(ids) < 3:
            g.addVertex()
        elif roll < 0.12:
            g.removeVertex(rng.choice(ids))
        elif roll < 0.50:
            g.addEdge(rng.choice(ids), rng.choice(ids))
        elif roll < 0.65:
            g.removeEdge(rng.choice(ids), rng.choice(ids))
        elif roll < 0.80:
            g.flipEdge(rng.choice(ids), rng.choice(ids))
        elif roll < 0.95:
            g.toggleSelection(rng.choice(ids), rng.choice(ids), extend=rng.random() < 0.7)
        else:
            g.commitBatchFlip()

        assert_symmetric(g)
        assert g.validate_invariants(verbose=True)
