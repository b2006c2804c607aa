# vertex.py


class Vertex:
    """
    A graph vertex: a stable integer id plus an opaque position payload.
    The graph never reads the payload; only the renderer and hit-testing do.
    """

    __slots__ = ("_index", "_position")

    def __init__(self, index: int, position=None):
        self._index = int(index)
        self._position = position

    def getIndex(self) -> int:
        return self._index

    def getPosition(self):
        return self._position

    def setPosition(self, position):
        self._position = position

    def __repr__(self):
        return f"Vertex({self._index}, {self._position!r})"
