"""
Pytest configuration: puts public/py on sys.path so the flat editor modules
(graph, flips, bridge, ...) import without installation.
"""

import sys
from pathlib import Path

PY_ROOT = Path(__file__).parent / "public" / "py"
if str(PY_ROOT) not in sys.path:
    sys.path.insert(0, str(PY_ROOT))
