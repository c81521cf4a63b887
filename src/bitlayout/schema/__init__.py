"""Layout schema model and validation.

This module provides the entry specifications, the layout validator, and the
immutable Schema they produce.
"""

from __future__ import annotations

from .layout import Schema, validate
from .spec import Entry, FieldSpec, FlagGroupSpec

__all__ = [
    "Schema",
    "validate",
    "Entry",
    "FieldSpec",
    "FlagGroupSpec",
]
