# graphwidget.py

from PyQt5.QtWidgets import (
    QGraphicsView, QGraphicsScene,
    QGraphicsSimpleTextItem, QMenu, QGraphicsItem,
)
from PyQt5.QtCore import Qt, QPointF
from PyQt5.QtGui import QPen, QColor, QPainter, QBrush, QPolygonF, QFont
from PyQt5.QtWidgets import QGraphicsScene as QGS
from dataclasses import dataclass
from typing import Optional
from edge import format_edge_key
from graph import Graph
from hittest import find_edge_at, find_vertex_at, xy
import logging

logger = logging.getLogger(__name__)

# Zoom behavior constants
ZOOM_FACTOR = 1.15
ZOOM_MAX = 50.0
ZOOM_MIN = 0.05

MODES = ("select", "addv", "adde", "delete")
MODE_NAMES = {
    "select": "Select / Flip",
    "addv": "Add Vertex",
    "adde": "Add Edge",
    "delete": "Delete",
}


@dataclass
class EditorConfig:
    # Hit-testing, in screen pixels (scaled into scene units by the zoom)
    vertex_hit_radius: float = 12.0
    edge_hit_threshold: float = 8.0

    # Drawing
    node_radius: float = 6.0
    edge_width: float = 2.0
    selected_edge_width: float = 4.0
    triangle_alpha: float = 0.06
    label_px: int = 11

    # Status bar message lifetime (ms, 0 = until replaced)
    status_timeout_ms: int = 0


THEMES = {
    "dark": {
        "background": "#0b1a24",
        "edge": "#cde8f8",
        "selected": "#7dd3fc",
        "triangle": "#7dd3fc",
        "node_fill": "#052233",
        "node_outline": "#bfe9ff",
        "label": "#dff4ff",
        "pending": "#feca57",
    },
    "light": {
        "background": "#ffffff",
        "edge": "#3c3c3c",
        "selected": "#3498db",
        "triangle": "#48dbfb",
        "node_fill": "#ffffff",
        "node_outline": "#2c3e50",
        "label": "#000000",
        "pending": "#e67e22",
    },
}


class GraphWidget(QGraphicsView):
    def __init__(self, parent=None, config: Optional[EditorConfig] = None):
        super().__init__(parent)
        self.graph = Graph()
        self.config = config or EditorConfig()
        scene = QGraphicsScene(self)
        scene.setItemIndexMethod(QGS.NoIndex)
        self.setScene(scene)

        self.setRenderHint(QPainter.Antialiasing)
        self.setDragMode(QGraphicsView.NoDrag)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setViewportUpdateMode(QGraphicsView.SmartViewportUpdate)
        self.setFocusPolicy(Qt.StrongFocus)

        self.currentMode = "select"
        self.tempEdgeFirst = None
        self.showTriangles = False
        self.panning = False
        self.lastPanPoint = None
        self._in_update_scene = False

        self.themeMode = "dark"
        self.colors = {}
        self.setTheme("dark")  # MainWindow may override

    # --------------------------
    # Status + theme helpers
    # --------------------------
    def _status(self, text: str):
        try:
            self.parent().statusBar().showMessage(text, self.config.status_timeout_ms)
        except Exception:
            pass

    def setTheme(self, mode: str):
        m = (mode or "").strip().lower()
        if m not in THEMES:
            m = "dark"
        self.themeMode = m
        self.colors = {k: QColor(v) for k, v in THEMES[m].items()}
        self.setBackgroundBrush(QBrush(self.colors["background"]))
        self.updateGraphScene()

    def _scaleNow(self) -> float:
        return max(1e-6, self.transform().m11())

    # --------------------------
    # Commands (toolbar / shortcuts)
    # --------------------------
    def setMode(self, mode: str):
        if mode not in MODES:
            raise ValueError(f"Unknown editor mode: {mode!r}")
        self.currentMode = mode
        self.tempEdgeFirst = None
        logger.debug("editor mode -> %s", mode)
        self._status(f"Mode: {MODE_NAMES[mode]}")
        self.updateGraphScene()

    def validateTriangulation(self) -> bool:
        ok = self.graph.isValidTriangulation()
        self._status(
            "Status: VALID triangulation (each edge participates in at least one triangle)."
            if ok else
            "Status: INVALID triangulation, some edges are not part of any triangle."
        )
        return ok

    def flipSelected(self) -> bool:
        ok = self.graph.commitBatchFlip()
        if ok:
            self._status("Status: Flipped selected edges.")
        else:
            reason = self.graph.last_conflict
            detail = f" ({reason.message})" if reason else ""
            self._status(f"Status: Flip failed, selection invalid or interference{detail}.")
        self.updateGraphScene()
        return ok

    def deleteSelectedEdges(self) -> int:
        n = self.graph.deleteSelectedEdges()
        if n:
            self._status("Status: deleted selected edges")
            self.updateGraphScene()
        return n

    def clearGraph(self):
        self.graph.resetGraph()
        self.tempEdgeFirst = None
        self._status("Status: cleared")
        self.updateGraphScene()

    def seedSample(self):
        self.graph.seedSample(make_point=QPointF)
        self.tempEdgeFirst = None
        self._status("Status: sample graph loaded")
        self.updateGraphScene()
        self.centerGraph()

    def toggleTriangles(self):
        self.showTriangles = not self.showTriangles
        self._status(f"Triangles: {'shown' if self.showTriangles else 'hidden'}")
        self.updateGraphScene()

    # --------------------------
    # Drawing
    # --------------------------
    def _pos(self, vid) -> QPointF:
        x, y = xy(self.graph.getVertex(vid).getPosition())
        return QPointF(x, y)

    def updateGraphScene(self):
        if self._in_update_scene:
            return
        self._in_update_scene = True
        try:
            scene = self.scene()
            scene.clear()
            cfg = self.config
            c = self.colors

            # --- Triangle fills ---
            if self.showTriangles:
                fill = QColor(c["triangle"])
                fill.setAlphaF(cfg.triangle_alpha)
                for tri in self.graph.triangles():
                    poly = QPolygonF([self._pos(t) for t in tri])
                    scene.addPolygon(poly, QPen(Qt.NoPen), QBrush(fill)).setZValue(-20)

            # --- Edges ---
            edge_pen = QPen(c["edge"])
            edge_pen.setWidthF(cfg.edge_width)
            edge_pen.setCosmetic(True)
            edge_pen.setCapStyle(Qt.RoundCap)
            sel_pen = QPen(c["selected"])
            sel_pen.setWidthF(cfg.selected_edge_width)
            sel_pen.setCosmetic(True)
            sel_pen.setCapStyle(Qt.RoundCap)

            selected = set(self.graph.getSelection())
            for u, v in self.graph.getEdges():
                pen = sel_pen if (u, v) in selected else edge_pen
                p1, p2 = self._pos(u), self._pos(v)
                scene.addLine(p1.x(), p1.y(), p2.x(), p2.y(), pen).setZValue(-10)

            # --- Nodes + labels (constant on-screen size) ---
            scale_now = self._scaleNow()
            r = cfg.node_radius / scale_now
            font = QFont("Arial")
            font.setPixelSize(cfg.label_px)
            for vert in self.graph.getVertices():
                vid = vert.getIndex()
                pos = self._pos(vid)
                outline = c["pending"] if vid == self.tempEdgeFirst else c["node_outline"]
                pen = QPen(outline, 2)
                pen.setCosmetic(True)
                scene.addEllipse(pos.x() - r, pos.y() - r, 2 * r, 2 * r, pen, QBrush(c["node_fill"])).setZValue(10)

                text = QGraphicsSimpleTextItem(str(vid))
                text.setFont(font)
                text.setBrush(c["label"])
                text.setFlag(QGraphicsItem.ItemIgnoresTransformations, True)
                text.setPos(pos.x() + 8 / scale_now, pos.y() - 8 / scale_now - cfg.label_px / scale_now)
                text.setZValue(20)
                scene.addItem(text)

            self.viewport().update()
        finally:
            self._in_update_scene = False

    # --------------------------
    # View
    # --------------------------
    def zoomIn(self):
        scale_now = self._scaleNow()
        target = min(ZOOM_MAX, scale_now * ZOOM_FACTOR)
        if target <= scale_now + 1e-12:
            return
        factor = target / scale_now
        self.scale(factor, factor)
        self.updateGraphScene()

    def zoomOut(self):
        scale_now = self._scaleNow()
        target = max(ZOOM_MIN, scale_now / ZOOM_FACTOR)
        if target >= scale_now - 1e-12:
            return
        factor = target / scale_now
        self.scale(factor, factor)
        self.updateGraphScene()

    def centerGraph(self):
        if self.scene().items():
            rect = self.scene().itemsBoundingRect()
            safe_rect = rect.adjusted(-50, -50, 50, 50)
            if safe_rect.width() < 1e-6 or safe_rect.height() < 1e-6:
                return
            self.fitInView(safe_rect, Qt.KeepAspectRatio)
            self.updateGraphScene()

    def wheelEvent(self, event):
        if event.angleDelta().y() > 0:
            self.zoomIn()
        else:
            self.zoomOut()
        event.accept()

    # --------------------------
    # Pointer + keyboard
    # --------------------------
    def _hitVertex(self, scenePos):
        radius = self.config.vertex_hit_radius / self._scaleNow()
        return find_vertex_at(self.graph, scenePos.x(), scenePos.y(), radius=radius)

    def _hitEdge(self, scenePos):
        thr = self.config.edge_hit_threshold / self._scaleNow()
        return find_edge_at(self.graph, scenePos.x(), scenePos.y(), threshold=thr)

    def mousePressEvent(self, event):
        # Middle button pans in every mode
        if event.button() == Qt.MiddleButton:
            self.panning = True
            self.lastPanPoint = event.pos()
            self.setCursor(Qt.ClosedHandCursor)
            return
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return

        scenePos = self.mapToScene(event.pos())
        mode = self.currentMode

        if mode == "addv":
            vid = self.graph.addVertex(QPointF(scenePos))
            self._status(f"Status: vertex {vid} added")
            self.updateGraphScene()
            return

        if mode == "adde":
            vid = self._hitVertex(scenePos)
            if vid is None:
                self._status("Status: click a vertex to start/finish an edge")
                return
            if self.tempEdgeFirst is None:
                self.tempEdgeFirst = vid
                self._status(f"Status: first vertex selected for edge ({vid})")
                self.updateGraphScene()
                return
            u = self.tempEdgeFirst
            self.tempEdgeFirst = None
            if u == vid:
                self._status("Status: same vertex, cancelled")
            else:
                ok = self.graph.addEdge(u, vid)
                self._status(f"Status: edge {u}-{vid} added" if ok else "Status: edge exists or invalid")
            self.updateGraphScene()
            return

        if mode == "delete":
            vid = self._hitVertex(scenePos)
            if vid is not None:
                self.graph.removeVertex(vid)
                self._status(f"Status: vertex {vid} deleted")
                self.updateGraphScene()
                return
            e = self._hitEdge(scenePos)
            if e is not None:
                self.graph.removeEdge(*e)
                self._status(f"Status: edge {e[0]}-{e[1]} deleted")
                self.updateGraphScene()
                return
            self._status("Status: click a vertex or edge to delete")
            return

        # select/flip mode
        e = self._hitEdge(scenePos)
        if e is None:
            self._status("Status: click on an edge to select/flippable-check")
            return
        extend = bool(event.modifiers() & Qt.ShiftModifier)
        key = format_edge_key(e)
        conflict = self.graph.toggleSelection(e[0], e[1], extend=extend)
        if conflict is not None:
            prefix = "cannot multi-select" if extend else "cannot select"
            self._status(f"Status: {prefix}, {conflict.message}")
        elif self.graph.selection.contains(*e):
            self._status(f"Status: edge {key} {'multi-selected' if extend else 'selected'}")
        else:
            self._status(f"Status: edge {key} deselected")
        self.updateGraphScene()

    def mouseMoveEvent(self, event):
        if self.panning:
            delta = self.mapToScene(self.lastPanPoint) - self.mapToScene(event.pos())
            self.lastPanPoint = event.pos()
            self.translate(delta.x(), delta.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MiddleButton and self.panning:
            self.panning = False
            self.setCursor(Qt.ArrowCursor)
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_F:
            self.flipSelected()
            return
        if key in (Qt.Key_Delete, Qt.Key_Backspace):
            self.deleteSelectedEdges()
            return
        if key == Qt.Key_Escape:
            self.tempEdgeFirst = None
            self.graph.clearSelection()
            self._status("Selection cancelled.")
            self.updateGraphScene()
            return
        super().keyPressEvent(event)

    def contextMenuEvent(self, event):
        menu = QMenu(self)
        act_flip = menu.addAction("Flip Selected (F)")
        act_flip.triggered.connect(self.flipSelected)
        act_flip.setEnabled(self.graph.selection.size() > 0)
        menu.addAction("Validate Triangulation", self.validateTriangulation)
        menu.addSeparator()
        menu.addAction("Toggle Triangles", self.toggleTriangles)
        menu.addAction("Load Sample", self.seedSample)
        menu.addAction("Center Graph", self.centerGraph)
        menu.exec_(event.globalPos())
