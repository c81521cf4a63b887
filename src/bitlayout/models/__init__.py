"""Pydantic layout declarations for bitlayout.

This module provides the declaration models, helper constructors, and the
compiler that places and validates declared layouts.
"""

from __future__ import annotations

from .base import FieldDeclaration, FlagsDeclaration, LayoutDeclaration
from .compiler import compile_layout
from .fields import field, flags, layout

__all__ = [
    "FieldDeclaration",
    "FlagsDeclaration",
    "LayoutDeclaration",
    "compile_layout",
    "field",
    "flags",
    "layout",
]
