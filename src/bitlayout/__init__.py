"""bitlayout: Validated Bit Field Layouts

A Python library for declaring how named fields and flags are packed into a
single unsigned storage integer, validating the layout once, and reading and
writing fields of storage values without disturbing neighbouring bits.

Key Features:
- Pydantic-based layout declarations with automatic placement
- Layout validation with precise, named failures (overlaps, widths, bounds)
- Two's-complement signed fields and enum fields with unrecognized values
- Flag groups with set/test/toggle and lazy iteration
- Pure Python implementation

Quick Start:
    >>> import enum
    >>> from bitlayout import field, flags, layout, enum_type
    >>>
    >>> class Color(enum.Enum):
    ...     Black = 0
    ...     Blue = 1
    ...     Green = 2
    ...     Red = 4
    >>>
    >>> COLOR = enum_type(Color, bits=8)
    >>> Styles = layout(
    ...     "Styles", 8,
    ...     field("foreground", COLOR, width=3),
    ...     field("foreground_bright", "bool"),
    ...     field("background", COLOR, width=3),
    ...     field("blink", "bool"),
    ... )
    >>> styles = Styles.new().set("foreground", Color.Red).set("blink", True)
    >>> int(styles)
    132
"""

from __future__ import annotations

from .accessors import (
    DecodeResult,
    FlagsView,
    Recognized,
    Unrecognized,
    decode,
    encode,
    flags_set,
    has_flag,
    invert_flag,
    iter_flags,
    set_flag,
)
from .bitfield import BitField
from .exceptions import (
    AsymmetricOverlapAllowance,
    BitlayoutError,
    DecodeError,
    DiscriminantExceedsField,
    DuplicateFieldName,
    EncodeError,
    FieldExceedsStorage,
    FlagsExceedStorage,
    IncompleteField,
    InvalidValueType,
    SchemaError,
    SignedFieldNeverNegative,
    TypeTooSmall,
    UnintendedOverlap,
    UnknownFieldError,
    UnnecessaryOrUnknownOverlapAllowance,
)
from .models import FieldDeclaration, FlagsDeclaration, LayoutDeclaration, field, flags, layout
from .schema import FieldSpec, FlagGroupSpec, Schema, validate
from .types import (
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
    StorageType,
    ValueType,
    enum_type,
)
from .utils import as_dict, field_sizes, layout_table, render_flags, render_structured

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Schema",
    "validate",
    "BitField",
    "decode",
    "encode",
    # Declarations
    "field",
    "flags",
    "layout",
    "FieldDeclaration",
    "FlagsDeclaration",
    "LayoutDeclaration",
    # Layout entries
    "FieldSpec",
    "FlagGroupSpec",
    # Types
    "StorageType",
    "ValueType",
    "enum_type",
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
    # Decode results
    "DecodeResult",
    "Recognized",
    "Unrecognized",
    # Flags
    "has_flag",
    "set_flag",
    "invert_flag",
    "iter_flags",
    "flags_set",
    "FlagsView",
    # Rendering and introspection
    "render_structured",
    "render_flags",
    "as_dict",
    "field_sizes",
    "layout_table",
    # Exceptions
    "BitlayoutError",
    "SchemaError",
    "InvalidValueType",
    "DuplicateFieldName",
    "TypeTooSmall",
    "SignedFieldNeverNegative",
    "FieldExceedsStorage",
    "DiscriminantExceedsField",
    "IncompleteField",
    "FlagsExceedStorage",
    "UnintendedOverlap",
    "AsymmetricOverlapAllowance",
    "UnnecessaryOrUnknownOverlapAllowance",
    "EncodeError",
    "DecodeError",
    "UnknownFieldError",
    # Version
    "__version__",
]
