"""Task record service: JSON-backed task storage with a query engine."""
from __future__ import annotations

__version__ = "0.1.0"
