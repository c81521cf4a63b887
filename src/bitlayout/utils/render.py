"""Textual rendering of storage values.

Everything here is derived from a Schema and a storage value only.
"""

from __future__ import annotations

from typing import Any

from ..accessors.engine import decode, flag_name, iter_flags
from ..accessors.result import Recognized, Unrecognized
from ..schema.layout import Schema
from ..schema.spec import FieldSpec


def _value_text(value: Any) -> str:
    if isinstance(value, (Recognized, Unrecognized)):
        return str(value)
    return repr(value)


def render_structured(schema: Schema, storage: int) -> str:
    """Render every entry of a storage value.

    Args:
        schema: Validated schema
        storage: Storage value

    Returns:
        Text of the form ``Name(field=value, flags={A, B})``

    Example:
        >>> render_structured(Styles, 0b1001_0100)
        'Styles(foreground=Red, foreground_bright=False, background=Green, blink=True)'
    """
    parts = []
    for entry in schema.entries:
        if isinstance(entry, FieldSpec):
            parts.append(f"{entry.name}={_value_text(decode(schema, entry.name, storage))}")
        else:
            names = ", ".join(flag_name(flag) for flag in iter_flags(schema, entry.name, storage))
            parts.append(f"{entry.name}={{{names}}}")
    return f"{schema.name}({', '.join(parts)})"


def render_flags(schema: Schema, storage: int) -> str:
    """Render the set flags of a storage value compactly.

    Set flags are joined with ``" | "``; ``"-"`` means no flag is set. With
    more than one flag group each flag is prefixed by its enum's name.

    Example:
        >>> render_flags(Dr7, 0b0101)
        'L0 | L1'
    """
    groups = schema.flag_groups
    qualified = len(groups) > 1
    names = []
    for group in groups:
        for flag in iter_flags(schema, group.name, storage):
            name = flag_name(flag)
            names.append(f"{group.codec.name}.{name}" if qualified else name)
    return " | ".join(names) if names else "-"


def as_dict(schema: Schema, storage: int) -> dict[str, Any]:
    """Return decoded values keyed by entry name.

    Flag groups map to the tuple of their set flags.
    """
    result: dict[str, Any] = {}
    for entry in schema.entries:
        if isinstance(entry, FieldSpec):
            result[entry.name] = decode(schema, entry.name, storage)
        else:
            result[entry.name] = tuple(iter_flags(schema, entry.name, storage))
    return result
