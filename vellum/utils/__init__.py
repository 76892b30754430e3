"""
Shared utilities for Vellum.

Common functionality used across contexts:
- Balanced marker-pair scanning
- Logger setup
- Timestamps
"""

from vellum.utils.text_processing import find_marker_pairs, replace_marker_pairs
from vellum.utils.timestamp import now_exact, session_stamp

__all__ = ["find_marker_pairs", "replace_marker_pairs", "now_exact", "session_stamp"]
