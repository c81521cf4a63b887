"""Storage and value types.

This module provides the catalog of storage integer widths and the descriptors of
the types a field can store.
"""

from __future__ import annotations

from .enums import EnumClassCodec, EnumCodec
from .storage import StorageType
from .values import (
    BOOL,
    I8,
    I16,
    I32,
    I64,
    I128,
    U8,
    U16,
    U32,
    U64,
    U128,
    Signedness,
    ValueType,
    enum_type,
    primitive,
)

__all__ = [
    "StorageType",
    "ValueType",
    "Signedness",
    "EnumCodec",
    "EnumClassCodec",
    "enum_type",
    "primitive",
    "BOOL",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
]
