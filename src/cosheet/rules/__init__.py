"""
Token and sheet rules as pure functions.

Separates logic from the store for easier testing.
"""

from .markers import (
    STANDARD_MARKERS,
    MARKER_ATTRIBUTES,
    MarkerAction,
    MarkerOp,
    MarkerUpdate,
    apply_marker_ops,
    sync_markers,
)
from .bars import BarMode, BarAssignment, BarLinkSummary, link_bars, link_token
from .stats import roll_stats, render_stats

__all__ = [
    "STANDARD_MARKERS",
    "MARKER_ATTRIBUTES",
    "MarkerAction",
    "MarkerOp",
    "MarkerUpdate",
    "apply_marker_ops",
    "sync_markers",
    "BarMode",
    "BarAssignment",
    "BarLinkSummary",
    "link_bars",
    "link_token",
    "roll_stats",
    "render_stats",
]
