# public/py/bridge.py
import json
import logging

from edge import format_edge_key, parse_edge_key
from graph import Graph
from hittest import find_edge_at, find_vertex_at, xy

logger = logging.getLogger(__name__)

MODES = ("select", "addv", "adde", "delete")

_g = Graph()
# First endpoint picked in "adde" mode, waiting for the second click
_pending_edge_start = None


def _state_dict():
    verts = []
    for v in _g.getVertices():
        p = v.getPosition()
        x, y = xy(p) if p is not None else (0.0, 0.0)
        verts.append({"id": v.getIndex(), "x": x, "y": y})
    selected = set(_g.getSelection())
    edges = [
        {
            "u": u,
            "v": v,
            "selected": (u, v) in selected,
            "flippable": _g.isFlippable(u, v),
        }
        for u, v in _g.getEdges()
    ]
    return {
        "vertices": verts,
        "edges": edges,
        "selection": [format_edge_key(k) for k in _g.getSelection()],
        "triangles": [list(t) for t in _g.triangles()],
        "pendingEdgeStart": _pending_edge_start,
        "meta": _g.get_stats(),
    }


def _reply(ok, status, **extra):
    out = {"ok": bool(ok), "status": status, "state": _state_dict()}
    out.update(extra)
    return json.dumps(out)


def _conflict_reply(conflict, ok_status, fail_prefix):
    if conflict is None:
        return _reply(True, ok_status)
    return _reply(False, f"{fail_prefix}: {conflict.message}", reason=conflict.name)


# ------------- Commands exported to the worker -------------
def get_state():
    return json.dumps(_state_dict())


def reset():
    global _pending_edge_start
    _g.resetGraph()
    _pending_edge_start = None
    return _reply(True, "Status: cleared")


def seed_sample():
    global _pending_edge_start
    _g.seedSample()
    _pending_edge_start = None
    return _reply(True, "Status: sample graph loaded")


def add_vertex(x: float, y: float):
    vid = _g.addVertex((float(x), float(y)))
    return _reply(True, "Status: vertex added", id=vid)


def remove_vertex(vid: int):
    global _pending_edge_start
    ok = _g.removeVertex(int(vid))
    if ok and _pending_edge_start == int(vid):
        _pending_edge_start = None
    return _reply(ok, f"Status: vertex {vid} deleted" if ok else f"Status: no vertex {vid}")


def add_edge(u: int, v: int):
    u, v = int(u), int(v)
    ok = _g.addEdge(u, v)
    return _reply(ok, f"Status: edge {u}-{v} added" if ok else "Status: edge exists or invalid")


def remove_edge(u: int, v: int):
    u, v = int(u), int(v)
    ok = _g.removeEdge(u, v)
    return _reply(ok, f"Status: edge {u}-{v} deleted" if ok else "Status: no such edge")


def flip_edge(u: int, v: int):
    u, v = int(u), int(v)
    ok = _g.flipEdge(u, v)
    return _reply(ok, f"Status: flipped edge {u}-{v}" if ok else "Status: edge not flippable")


def select_edge(u: int, v: int, extend: bool = False):
    u, v = int(u), int(v)
    key = format_edge_key((min(u, v), max(u, v)))
    conflict = _g.toggleSelection(u, v, extend=bool(extend))
    if extend:
        return _conflict_reply(conflict, f"Status: edge {key} multi-selected",
                               "Status: cannot multi-select")
    return _conflict_reply(conflict, f"Status: selection updated ({key})",
                           "Status: cannot select")


def select_key(key: str, extend: bool = True):
    u, v = parse_edge_key(key)
    return select_edge(u, v, extend)


def deselect_edge(u: int, v: int):
    ok = _g.removeFromSelection(int(u), int(v))
    return _reply(ok, "Status: edge deselected" if ok else "Status: edge was not selected")


def clear_selection():
    _g.clearSelection()
    return _reply(True, "Status: selection cleared")


def flip_selected():
    ok = _g.commitBatchFlip()
    if ok:
        return _reply(True, "Status: Flipped selected edges.")
    reason = _g.last_conflict
    return _reply(
        False,
        "Status: Flip failed: selection invalid or interference.",
        reason=reason.name if reason else None,
    )


def delete_selected():
    n = _g.deleteSelectedEdges()
    return _reply(n > 0, "Status: deleted selected edges" if n else "Status: nothing selected")


def validate():
    ok = _g.isValidTriangulation()
    status = (
        "Status: VALID triangulation (each edge participates in at least one triangle)."
        if ok else
        "Status: INVALID triangulation: some edges are not part of any triangle."
    )
    return _reply(ok, status)


def click(x: float, y: float, mode: str = "select", extend: bool = False, dpr: float = 1.0):
    """
    Pointer press at logical (x, y), dispatched like the desktop editor.
    - addv: new vertex at the pointer
    - adde: first click picks the start vertex, second click adds the edge
    - delete: vertex under pointer, else edge under pointer
    - select: toggle / shift-extend the flip selection
    """
    global _pending_edge_start
    if mode not in MODES:
        raise ValueError(f"Unknown mode: {mode!r}")
    px, py = float(x) * dpr, float(y) * dpr
    logger.debug("click mode=%s at (%.1f, %.1f) extend=%s", mode, float(x), float(y), extend)

    if mode == "addv":
        return add_vertex(x, y)

    if mode == "adde":
        vid = find_vertex_at(_g, px, py, dpr)
        if vid is None:
            return _reply(False, "Status: click a vertex to start/finish an edge")
        if _pending_edge_start is None:
            _pending_edge_start = vid
            return _reply(True, f"Status: first vertex selected for edge ({vid})")
        u = _pending_edge_start
        _pending_edge_start = None
        if u == vid:
            return _reply(False, "Status: same vertex, cancelled")
        return add_edge(u, vid)

    if mode == "delete":
        vid = find_vertex_at(_g, px, py, dpr)
        if vid is not None:
            return remove_vertex(vid)
        e = find_edge_at(_g, px, py, dpr)
        if e is not None:
            return remove_edge(*e)
        return _reply(False, "Status: click a vertex or edge to delete")

    e = find_edge_at(_g, px, py, dpr)
    if e is None:
        return _reply(False, "Status: click on an edge to select/flippable-check")
    return select_edge(e[0], e[1], extend)
