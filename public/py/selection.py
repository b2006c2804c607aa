# selection.py
from typing import Dict, Iterable, Tuple

from edge import EdgeKey, edge_key, key_mentions


class Selection:
    """
    Edges marked for a batch flip, as canonical keys in click order.
    - _keys: insertion-ordered dict used as an ordered set

    Admission rules live in Graph.tryAddToSelection; this class only stores
    keys and never validates them.
    """

    def __init__(self):
        self._keys: Dict[EdgeKey, None] = {}

    # -------- basic ops --------
    def add(self, u: int, v: int) -> bool:
        key = edge_key(u, v)
        if key in self._keys:
            return False
        self._keys[key] = None
        return True

    def discard(self, u: int, v: int) -> bool:
        key = edge_key(u, v)
        if key not in self._keys:
            return False
        del self._keys[key]
        return True

    def discardVertex(self, vid: int) -> int:
        """Drop every key with vid as an endpoint. Returns how many were dropped."""
        doomed = [k for k in self._keys if key_mentions(k, vid)]
        for k in doomed:
            del self._keys[k]
        return len(doomed)

    def replace(self, keys: Iterable[EdgeKey]):
        self._keys = {edge_key(*k): None for k in keys}

    def clear(self):
        self._keys.clear()

    # -------- queries --------
    def contains(self, u: int, v: int) -> bool:
        return edge_key(u, v) in self._keys

    def getKeys(self) -> Tuple[EdgeKey, ...]:
        """Immutable snapshot, so callers can mutate the graph while iterating."""
        return tuple(self._keys)

    def size(self) -> int:
        return len(self._keys)

    def __len__(self):
        return len(self._keys)

    def __iter__(self):
        return iter(self.getKeys())

    def __contains__(self, key) -> bool:
        return edge_key(*key) in self._keys
