# hittest.py
"""
Resolve a pointer position to a vertex id or an edge key.

Positions are whatever the renderer stored on the vertices: a Qt QPointF in
the desktop editor, a plain (x, y) tuple in the browser bridge. Pointer
coordinates and thresholds are in device pixels; vertex positions are in
logical pixels and get scaled by the device pixel ratio.
"""
import math
from typing import Optional, Tuple

from edge import EdgeKey

VERTEX_HIT_RADIUS = 12.0
EDGE_HIT_THRESHOLD = 8.0


def xy(p) -> Tuple[float, float]:
    x = getattr(p, "x", None)
    if callable(x):
        return float(p.x()), float(p.y())
    return float(p[0]), float(p[1])


def point_segment_distance(px, py, x1, y1, x2, y2) -> float:
    abx, aby = (x2 - x1), (y2 - y1)
    denom = abx * abx + aby * aby
    if denom <= 1e-18:
        return math.hypot(px - x1, py - y1)
    t = ((px - x1) * abx + (py - y1) * aby) / denom
    t = 0.0 if t < 0.0 else (1.0 if t > 1.0 else t)
    qx = x1 + t * abx
    qy = y1 + t * aby
    return math.hypot(px - qx, py - qy)


def find_vertex_at(graph, px, py, dpr: float = 1.0,
                   radius: float = VERTEX_HIT_RADIUS) -> Optional[int]:
    """First vertex (in creation order) within radius*dpr of the pointer."""
    r = radius * dpr
    for v in graph.getVertices():
        pos = v.getPosition()
        if pos is None:
            continue
        x, y = xy(pos)
        dx = x * dpr - px
        dy = y * dpr - py
        if dx * dx + dy * dy <= r * r:
            return v.getIndex()
    return None


def find_edge_at(graph, px, py, dpr: float = 1.0,
                 threshold: float = EDGE_HIT_THRESHOLD) -> Optional[EdgeKey]:
    """Closest edge within threshold*dpr of the pointer, as a canonical key."""
    thr = threshold * dpr
    best = None
    best_d = math.inf
    for u, v in graph.getEdges():
        a = graph.getVertex(u).getPosition()
        b = graph.getVertex(v).getPosition()
        if a is None or b is None:
            continue
        ax, ay = xy(a)
        bx, by = xy(b)
        d = point_segment_distance(px, py, ax * dpr, ay * dpr, bx * dpr, by * dpr)
        if d < best_d and d <= thr:
            best_d = d
            best = (u, v)
    return best
