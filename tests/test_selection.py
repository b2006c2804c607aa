"""
Selection admission gate: incremental checks as edges join the selection.
"""

from flips import Conflict
from selection import Selection


class TestAdmission:

    def test_two_edges_of_one_triangle(self, fan):
        # 1-3 and 1-4 are both sides of triangle 1-3-4
        assert fan.tryAddToSelection(1, 3) is None
        assert fan.tryAddToSelection(1, 4) is Conflict.SHARED_TRIANGLE
        assert fan.getSelection() == ((1, 3),)
        assert fan.last_conflict is Conflict.SHARED_TRIANGLE

    def test_sample_edges_rejected_as_unflippable(self, sample):
        assert sample.tryAddToSelection(1, 4) is Conflict.NOT_FLIPPABLE
        assert sample.tryAddToSelection(3, 4) is Conflict.NOT_FLIPPABLE
        assert sample.getSelection() == ()

    def test_missing_edge(self, fan):
        assert fan.tryAddToSelection(2, 4) is Conflict.NO_SUCH_EDGE

    def test_reselecting_is_a_no_op(self, strip):
        assert strip.tryAddToSelection(6, 1) is None
        assert strip.tryAddToSelection(1, 6) is None
        assert strip.getSelection() == ((1, 6),)

    def test_duplicate_new_edge(self, twin):
        assert twin.tryAddToSelection(3, 4) is None
        assert twin.tryAddToSelection(5, 6) is Conflict.DUPLICATE_NEW_EDGE
        assert twin.getSelection() == ((3, 4),)

    def test_new_edges_forming_triangle(self, strip):
        assert strip.tryAddToSelection(1, 6) is None
        assert strip.tryAddToSelection(3, 7) is Conflict.NEW_EDGES_FORM_TRIANGLE

    def test_admitted_selection_always_commits(self, strip):
        for e in strip.getEdges():
            strip.tryAddToSelection(*e)
        assert strip.getSelection()
        assert strip.commitBatchFlip()

    def test_removal_needs_no_validation(self, strip):
        strip.tryAddToSelection(1, 6)
        strip.tryAddToSelection(3, 8)
        assert strip.removeFromSelection(8, 3)
        assert not strip.removeFromSelection(8, 3)
        assert strip.getSelection() == ((1, 6),)
        strip.clearSelection()
        assert strip.getSelection() == ()


class TestToggle:

    def test_click_replaces_selection(self, strip):
        assert strip.toggleSelection(1, 6) is None
        assert strip.toggleSelection(3, 8) is None
        assert strip.getSelection() == ((3, 8),)

    def test_click_selected_edge_deselects(self, strip):
        strip.toggleSelection(1, 6)
        assert strip.toggleSelection(6, 1) is None
        assert strip.getSelection() == ()

    def test_click_unflippable_keeps_selection(self, strip):
        strip.toggleSelection(1, 6)
        assert strip.toggleSelection(1, 2) is Conflict.NOT_FLIPPABLE
        assert strip.getSelection() == ((1, 6),)

    def test_shift_click_extends(self, strip):
        strip.toggleSelection(1, 6)
        assert strip.toggleSelection(3, 8, extend=True) is None
        assert strip.toggleSelection(2, 6, extend=True) is Conflict.SHARED_TRIANGLE
        assert strip.getSelection() == ((1, 6), (3, 8))


class TestSelectionStore:

    def test_keys_are_canonical_and_ordered(self):
        s = Selection()
        assert s.add(5, 2)
        assert not s.add(2, 5)
        assert s.add(1, 9)
        assert s.getKeys() == ((2, 5), (1, 9))
        assert (5, 2) in s
        assert len(s) == 2

    def test_discard_vertex(self):
        s = Selection()
        s.add(1, 2)
        s.add(2, 3)
        s.add(3, 4)
        assert s.discardVertex(2) == 2
        assert s.getKeys() == ((3, 4),)

    def test_replace(self):
        s = Selection()
        s.add(1, 2)
        s.replace([(9, 4)])
        assert s.getKeys() == ((4, 9),)
