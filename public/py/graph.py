# graph.py

from vertex import Vertex
from edge import EdgeKey, edge_key, format_edge_key
from flips import Conflict, FlipOperation, check_batch, check_candidate
from selection import Selection
from typing import Callable, Dict, FrozenSet, List, Optional, Set, Tuple
from dataclasses import dataclass, field
import logging
import math

logger = logging.getLogger(__name__)

PI = math.pi

# Diagonals that fan the seed hexagon into five triangles.
SAMPLE_DIAGONALS = ((1, 3), (1, 4), (1, 5), (3, 5))


@dataclass
class SampleConfig:
    # Seed hexagon placement (scene units)
    center_x: float = 400.0
    center_y: float = 300.0
    radius: float = 160.0
    sides: int = 6


@dataclass
class GraphConfig:
    sample: SampleConfig = field(default_factory=SampleConfig)


class Graph:
    """
    Combinatorial triangulation: vertices, symmetric adjacency, and the
    selection of edges waiting for a batch flip.

    Triangles are never stored. Every triangle query is answered from the
    current adjacency, so there is nothing to invalidate after a mutation.
    Every mutator validates first and reports failure by return value,
    leaving the graph untouched.
    """

    def __init__(self, config: Optional[GraphConfig] = None):
        self.config = config or GraphConfig()
        # vertices[vid - 1] is the vertex with id vid; removed ids stay None
        self.vertices: List[Optional[Vertex]] = []
        self._adjacency: Dict[int, Set[int]] = {}
        self.selection = Selection()
        self.last_conflict: Optional[Conflict] = None

    # --------------------------
    # Small helpers
    # --------------------------
    def _next_id(self) -> int:
        return len(self.vertices) + 1

    def hasVertex(self, vid) -> bool:
        return vid in self._adjacency

    def hasEdge(self, u, v) -> bool:
        return u != v and v in self._adjacency.get(u, ())

    def _reject(self, conflict: Conflict) -> Conflict:
        self.last_conflict = conflict
        return conflict

    # --------------------------
    # Base graph ops
    # --------------------------
    def resetGraph(self):
        self.vertices.clear()
        self._adjacency.clear()
        self.selection.clear()
        self.last_conflict = None
        logger.debug("graph reset")

    def addVertex(self, position=None) -> int:
        vid = self._next_id()
        self.vertices.append(Vertex(vid, position))
        self._adjacency[vid] = set()
        logger.debug("added vertex %d", vid)
        return vid

    def removeVertex(self, vid) -> bool:
        if not self.hasVertex(vid):
            return False
        for nb in self._adjacency.pop(vid):
            self._adjacency[nb].discard(vid)
        self.vertices[vid - 1] = None
        dropped = self.selection.discardVertex(vid)
        logger.debug("removed vertex %d (%d selected edges dropped)", vid, dropped)
        return True

    def addEdge(self, u, v) -> bool:
        if u == v:
            return False
        if not self.hasVertex(u) or not self.hasVertex(v):
            return False
        if v in self._adjacency[u]:
            return False
        self._adjacency[u].add(v)
        self._adjacency[v].add(u)
        logger.debug("added edge %s", format_edge_key(edge_key(u, v)))
        return True

    def removeEdge(self, u, v) -> bool:
        if not self.hasVertex(u) or not self.hasVertex(v):
            return False
        if v not in self._adjacency[u]:
            return False
        self._adjacency[u].discard(v)
        self._adjacency[v].discard(u)
        self.selection.discard(u, v)
        logger.debug("removed edge %s", format_edge_key(edge_key(u, v)))
        return True

    def seedSample(self, make_point: Callable = None) -> List[int]:
        """
        Reset and build the sample triangulation: a hexagon 1..6 with rim
        edges and the diagonals 1-3, 1-4, 1-5, 3-5 (five triangles).
        make_point(x, y) builds the position payload; defaults to a tuple.
        """
        self.resetGraph()
        cfg = self.config.sample
        make_point = make_point or (lambda x, y: (x, y))
        n = cfg.sides
        ids = []
        for i in range(n):
            ang = 2 * PI * i / n - PI / 2
            ids.append(self.addVertex(make_point(
                cfg.center_x + math.cos(ang) * cfg.radius,
                cfg.center_y + math.sin(ang) * cfg.radius,
            )))
        for i in range(n):
            self.addEdge(ids[i], ids[(i + 1) % n])
        for a, b in SAMPLE_DIAGONALS:
            self.addEdge(ids[a - 1], ids[b - 1])
        logger.info("seeded sample graph: %d vertices, %d edges", n, self.edgeCount())
        return ids

    # --------------------------
    # Queries
    # --------------------------
    def getVertex(self, vid) -> Optional[Vertex]:
        if not self.hasVertex(vid):
            return None
        return self.vertices[vid - 1]

    def getVertices(self) -> List[Vertex]:
        return [v for v in self.vertices if v is not None]

    def getVertexIds(self) -> List[int]:
        return sorted(self._adjacency)

    def getNeighbors(self, vid) -> FrozenSet[int]:
        return frozenset(self._adjacency.get(vid, ()))

    def getDegree(self, vid) -> int:
        return len(self._adjacency.get(vid, ()))

    def getEdges(self) -> List[EdgeKey]:
        return sorted((u, v) for u, nbrs in self._adjacency.items() for v in nbrs if u < v)

    def edgeCount(self) -> int:
        return sum(len(nbrs) for nbrs in self._adjacency.values()) // 2

    def getSelection(self) -> Tuple[EdgeKey, ...]:
        return self.selection.getKeys()

    def get_stats(self):
        return {
            "V": len(self._adjacency),
            "E": self.edgeCount(),
            "T": len(self.triangles()),
            "selected": self.selection.size(),
            "valid": self.isValidTriangulation(),
        }

    # --------------------------
    # Triangle oracle
    # --------------------------
    def apexesOf(self, u, v) -> Set[int]:
        """Third vertices of every triangle on {u, v}: common neighbours of u and v."""
        if not self.hasVertex(u) or not self.hasVertex(v):
            return set()
        return (self._adjacency[u] & self._adjacency[v]) - {u, v}

    def isFlippable(self, u, v) -> bool:
        """
        True iff {u, v} is shared by exactly two triangles u-v-a, u-v-b and
        the other diagonal a-b is not already an edge.
        """
        if not self.hasEdge(u, v):
            return False
        apexes = self.apexesOf(u, v)
        if len(apexes) != 2:
            return False
        a, b = sorted(apexes)
        return not self.hasEdge(a, b)

    def flipOperation(self, u, v) -> Optional[FlipOperation]:
        if not self.isFlippable(u, v):
            return None
        a, b = sorted(self.apexesOf(u, v))
        return FlipOperation(u, v, a, b)

    def isValidTriangulation(self) -> bool:
        """Every edge lies on at least one triangle. Geometry is not checked."""
        for u, v in self.getEdges():
            if not self.apexesOf(u, v):
                return False
        return True

    def triangles(self) -> List[Tuple[int, int, int]]:
        """Every 3-clique once, as an ascending triple."""
        tris = []
        for u, v in self.getEdges():
            for w in self.apexesOf(u, v):
                if w > v:
                    tris.append((u, v, w))
        tris.sort()
        return tris

    # --------------------------
    # Flips
    # --------------------------
    def flipEdge(self, u, v) -> bool:
        op = self.flipOperation(u, v)
        if op is None:
            self._reject(Conflict.NOT_FLIPPABLE)
            logger.debug("flip %s rejected: not flippable", format_edge_key(edge_key(u, v)))
            return False
        self.removeEdge(op.u, op.v)
        self.addEdge(op.a, op.b)
        self.last_conflict = None
        logger.info("flipped %s -> %s", format_edge_key(op.removed), format_edge_key(op.added))
        return True

    def _selected_operations(self) -> Optional[List[FlipOperation]]:
        ops = []
        for u, v in self.selection.getKeys():
            op = self.flipOperation(u, v)
            if op is None:
                return None
            ops.append(op)
        return ops

    def commitBatchFlip(self) -> bool:
        """
        Flip every selected edge at once, or none of them.
        - every selected edge must still be flippable in the current graph,
        - the operations must be pairwise conflict-free (see flips.check_batch),
        - all removals are applied before any addition.
        On success the selection is cleared. On failure last_conflict holds
        the reason and neither graph nor selection changes.
        """
        if self.selection.size() == 0:
            self._reject(Conflict.EMPTY_SELECTION)
            return False

        ops = self._selected_operations()
        if ops is None:
            self._reject(Conflict.NOT_FLIPPABLE)
            logger.debug("batch flip rejected: %s", Conflict.NOT_FLIPPABLE.name)
            return False

        conflict = check_batch(ops, self.hasEdge)
        if conflict is not None:
            self._reject(conflict)
            logger.debug("batch flip rejected: %s", conflict.name)
            return False

        for op in ops:
            self.removeEdge(op.u, op.v)
        for op in ops:
            self.addEdge(op.a, op.b)
        self.selection.clear()
        self.last_conflict = None
        logger.info("batch flipped %d edges", len(ops))
        return True

    # --------------------------
    # Selection
    # --------------------------
    def tryAddToSelection(self, u, v) -> Optional[Conflict]:
        """
        Admit {u, v} into the selection if the selection would still be a
        valid batch. Returns None on success, else the reason for rejection.
        Checks only the candidate against each selected edge.
        """
        if not self.hasEdge(u, v):
            return self._reject(Conflict.NO_SUCH_EDGE)
        if self.selection.contains(u, v):
            return None
        candidate = self.flipOperation(u, v)
        if candidate is None:
            return self._reject(Conflict.NOT_FLIPPABLE)

        existing = self._selected_operations()
        if existing is None:
            # Only reachable if the graph changed under a stale selection.
            return self._reject(Conflict.NOT_FLIPPABLE)

        conflict = check_candidate(candidate, existing, self.hasEdge)
        if conflict is not None:
            logger.debug("selection of %s rejected: %s",
                         format_edge_key(candidate.removed), conflict.name)
            return self._reject(conflict)

        self.selection.add(u, v)
        self.last_conflict = None
        return None

    def removeFromSelection(self, u, v) -> bool:
        return self.selection.discard(u, v)

    def clearSelection(self):
        self.selection.clear()

    def toggleSelection(self, u, v, extend: bool = False) -> Optional[Conflict]:
        """
        Click semantics of the editor.
        - extend (shift-click): admit through tryAddToSelection,
        - otherwise: a selected edge is deselected; a flippable one becomes
          the whole selection.
        """
        if extend:
            return self.tryAddToSelection(u, v)
        if self.selection.contains(u, v):
            self.selection.discard(u, v)
            return None
        if not self.hasEdge(u, v):
            return self._reject(Conflict.NO_SUCH_EDGE)
        if not self.isFlippable(u, v):
            return self._reject(Conflict.NOT_FLIPPABLE)
        self.selection.replace([edge_key(u, v)])
        return None

    def deleteSelectedEdges(self) -> int:
        removed = 0
        for u, v in self.selection.getKeys():
            if self.removeEdge(u, v):
                removed += 1
        self.selection.clear()
        return removed

    # --------------------------
    # Invariants
    # --------------------------
    def validate_invariants(self, verbose: bool = False) -> bool:
        ok = True

        # Vertex table and adjacency must agree
        live = {v.getIndex() for v in self.vertices if v is not None}
        if live != set(self._adjacency):
            ok = False
            if verbose:
                logger.warning("Vertex table and adjacency disagree: %s vs %s",
                               sorted(live), sorted(self._adjacency))

        # Adjacency symmetry and no self-loops
        for u, nbrs in self._adjacency.items():
            if u in nbrs:
                ok = False
                if verbose:
                    logger.warning("Self-loop at %s", u)
            for v in nbrs:
                if v not in self._adjacency:
                    ok = False
                    if verbose:
                        logger.warning("Invalid neighbor %s for %s", v, u)
                    continue
                if u not in self._adjacency[v]:
                    ok = False
                    if verbose:
                        logger.warning("Asymmetry: %s has %s, but %s missing %s", u, v, v, u)

        # Selected keys must name existing edges
        for u, v in self.selection.getKeys():
            if not self.hasEdge(u, v):
                ok = False
                if verbose:
                    logger.warning("Selected edge %s is not in the graph", format_edge_key((u, v)))

        return ok
