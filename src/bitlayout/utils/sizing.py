"""Layout introspection utilities.

This module provides functions to inspect how a layout uses its storage bits
without touching any storage value.
"""

from __future__ import annotations

from typing import NamedTuple

from ..schema.layout import Schema
from ..schema.spec import FieldSpec


class LayoutRow(NamedTuple):
    """One row of a layout table."""

    name: str
    kind: str
    offset: int
    width: int
    value_type: str


def used_bits(schema: Schema) -> int:
    """Return a mask of every storage bit occupied by at least one entry.

    Example:
        >>> bin(used_bits(Styles))
        '0b11111111'
    """
    mask = 0
    for entry in schema.entries:
        mask |= entry.occupied_bits
    return mask


def unused_bits(schema: Schema) -> int:
    """Return a mask of the storage bits no entry occupies."""
    return schema.storage.mask & ~used_bits(schema)


def field_sizes(schema: Schema) -> dict[str, int]:
    """Get the bit width of each entry in a layout.

    Flag groups count one bit per flag.

    Args:
        schema: Validated schema

    Returns:
        Dictionary mapping entry names to bit counts

    Example:
        >>> field_sizes(Styles)
        {'foreground': 3, 'foreground_bright': 1, 'background': 3, 'blink': 1}
    """
    sizes = {}
    for entry in schema.entries:
        if isinstance(entry, FieldSpec):
            sizes[entry.name] = entry.width
        else:
            sizes[entry.name] = bin(entry.occupied_bits).count("1")
    return sizes


def layout_table(schema: Schema) -> list[LayoutRow]:
    """Describe every entry of a layout in declaration order.

    A flag group's offset is its lowest flag position and its width spans up to
    its highest one.
    """
    rows = []
    for entry in schema.entries:
        if isinstance(entry, FieldSpec):
            rows.append(
                LayoutRow(entry.name, entry.kind, entry.offset, entry.width, str(entry.value_type))
            )
        else:
            positions = entry.positions()
            low, high = min(positions), max(positions)
            rows.append(LayoutRow(entry.name, entry.kind, low, high - low + 1, entry.codec.name))
    return rows
