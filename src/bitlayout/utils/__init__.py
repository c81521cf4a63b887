"""Utility functions for bitlayout.

This module provides textual rendering and layout introspection.
"""

from __future__ import annotations

from .render import as_dict, render_flags, render_structured
from .sizing import LayoutRow, field_sizes, layout_table, unused_bits, used_bits

__all__ = [
    # Rendering
    "render_structured",
    "render_flags",
    "as_dict",
    # Introspection
    "used_bits",
    "unused_bits",
    "field_sizes",
    "layout_table",
    "LayoutRow",
]
