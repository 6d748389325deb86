"""Pytest configuration shared by the test suite."""

import sys
from pathlib import Path

# Make ``tests``, ``stats`` and ``benchmarks`` importable as packages when
# pytest is started from outside the project root.
_project_root = str(Path(__file__).resolve().parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)
