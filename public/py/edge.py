# edge.py
from typing import Tuple

EdgeKey = Tuple[int, int]


def edge_key(u: int, v: int) -> EdgeKey:
    """Canonical key of the undirected edge {u, v}: smaller id first."""
    u = int(u)
    v = int(v)
    return (u, v) if u < v else (v, u)


def format_edge_key(key: EdgeKey) -> str:
    return f"{key[0]}-{key[1]}"


def parse_edge_key(text: str) -> EdgeKey:
    """
    Parse the "u-v" wire form back into a canonical key.
    Raises ValueError for anything that is not two distinct integer ids.
    """
    parts = str(text).strip().split("-")
    if len(parts) != 2:
        raise ValueError(f"Malformed edge key: {text!r}")
    try:
        u, v = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"Malformed edge key: {text!r}") from None
    if u == v:
        raise ValueError(f"Edge key is a self-loop: {text!r}")
    return edge_key(u, v)


def key_mentions(key: EdgeKey, vid: int) -> bool:
    return key[0] == vid or key[1] == vid
