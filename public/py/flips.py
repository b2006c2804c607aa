# flips.py
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, Set

from edge import EdgeKey, edge_key


class Conflict(Enum):
    """Why a flip, a batch commit or a selection admission was rejected."""

    NO_SUCH_EDGE = "edge does not exist"
    NOT_FLIPPABLE = "edge not flippable (must be shared by exactly 2 triangles and opposite vertices not connected)"
    EMPTY_SELECTION = "nothing selected"
    SHARED_TRIANGLE = "shares a triangle with the selection"
    DUPLICATE_NEW_EDGE = "new edge conflict (two flips create the same edge)"
    NEW_EDGES_FORM_TRIANGLE = "bad pair (new edges would form a triangle)"
    NEW_EDGE_EXISTS = "new edge already exists"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class FlipOperation:
    """
    One pending flip: edge {u, v} is replaced by {a, b}, where a and b are the
    apexes of the two triangles on {u, v}. Only valid for the graph state it
    was computed from.
    """

    u: int
    v: int
    a: int
    b: int

    @property
    def removed(self) -> EdgeKey:
        return edge_key(self.u, self.v)

    @property
    def added(self) -> EdgeKey:
        return edge_key(self.a, self.b)


def _spans_one_triangle(e1: EdgeKey, e2: EdgeKey) -> bool:
    # Two distinct edges on exactly three vertices are two sides of one triangle.
    return len({e1[0], e1[1], e2[0], e2[1]}) == 3


def existing_edge_conflict(
    op: FlipOperation,
    removed_keys: Set[EdgeKey],
    has_edge: Callable[[int, int], bool],
) -> Optional[Conflict]:
    """The new edge may already exist only if the same batch removes it."""
    if has_edge(op.a, op.b) and op.added not in removed_keys:
        return Conflict.NEW_EDGE_EXISTS
    return None


def check_batch(
    ops: Sequence[FlipOperation],
    has_edge: Callable[[int, int], bool],
) -> Optional[Conflict]:
    """
    Validate a whole batch. All pairs are tested for removed edges on a
    common triangle, identical new edges, and new edges on one triangle;
    then every new edge is tested against the current graph.
    Returns the first conflict found, or None if the batch can be applied.
    """
    n = len(ops)
    # Independence of all removed edges first, then the new-edge checks.
    for check in _PAIR_CHECKS:
        for i in range(n):
            for j in range(i + 1, n):
                conflict = check(ops[i], ops[j])
                if conflict is not None:
                    return conflict

    removed_keys = {op.removed for op in ops}
    for op in ops:
        conflict = existing_edge_conflict(op, removed_keys, has_edge)
        if conflict is not None:
            return conflict
    return None


def check_candidate(
    candidate: FlipOperation,
    selected: Iterable[FlipOperation],
    has_edge: Callable[[int, int], bool],
) -> Optional[Conflict]:
    """
    Incremental form of check_batch: only pairs involving the candidate are
    tested, since the selected operations are already pairwise consistent.
    """
    selected = list(selected)
    for check in _PAIR_CHECKS:
        for op in selected:
            conflict = check(op, candidate)
            if conflict is not None:
                return conflict

    removed_keys = {op.removed for op in selected}
    return existing_edge_conflict(candidate, removed_keys, has_edge)


def _removed_pair(op1: FlipOperation, op2: FlipOperation) -> Optional[Conflict]:
    if _spans_one_triangle(op1.removed, op2.removed):
        return Conflict.SHARED_TRIANGLE
    return None


def _duplicate_pair(op1: FlipOperation, op2: FlipOperation) -> Optional[Conflict]:
    if op1.added == op2.added:
        return Conflict.DUPLICATE_NEW_EDGE
    return None


def _added_pair(op1: FlipOperation, op2: FlipOperation) -> Optional[Conflict]:
    if _spans_one_triangle(op1.added, op2.added):
        return Conflict.NEW_EDGES_FORM_TRIANGLE
    return None


_PAIR_CHECKS = (_removed_pair, _duplicate_pair, _added_pair)
