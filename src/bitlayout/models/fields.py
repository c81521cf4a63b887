"""Declaration helpers.

This module provides convenience functions for declaring layouts without
spelling out the declaration models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

from ..types.storage import StorageType
from ..types.values import ValueType
from .base import EntryDeclaration, FieldDeclaration, FlagsDeclaration, LayoutDeclaration

if TYPE_CHECKING:
    from ..schema.layout import Schema


def field(
    name: str,
    value_type: ValueType | str,
    *,
    offset: Optional[int] = None,
    width: Optional[int] = None,
    complete: bool = False,
    allow_overlap: Iterable[str] = (),
) -> FieldDeclaration:
    """Declare a field.

    Args:
        name: Field name
        value_type: Stored type, a ValueType or a primitive name
        offset: Bit position (default: right after the previous field)
        width: Number of bits (default: the value type's bit capacity)
        complete: Require every raw value to map to an enum variant
        allow_overlap: Names of entries this field may share bits with

    Returns:
        FieldDeclaration

    Example:
        >>> field("vehicle_id", "u8")
        >>> field("color", enum_type(Color, bits=8), width=3)
        >>> field("alias", "bool", offset=30, allow_overlap={"enabled"})
    """
    return FieldDeclaration(
        name=name,
        value_type=value_type,
        offset=offset,
        width=width,
        complete=complete,
        allow_overlap=frozenset(allow_overlap),
    )


def flags(name: str, flag_type: Any, *, allow_overlap: Iterable[str] = ()) -> FlagsDeclaration:
    """Declare a flag group.

    Args:
        name: Group name
        flag_type: Enum subclass whose integer values are bit positions
        allow_overlap: Names of entries this group may share bits with

    Returns:
        FlagsDeclaration
    """
    return FlagsDeclaration(name=name, flags=flag_type, allow_overlap=frozenset(allow_overlap))


def layout(name: str, storage: StorageType | int | str, *entries: EntryDeclaration) -> Schema:
    """Declare, place and validate a layout in one call.

    Args:
        name: Layout name
        storage: Storage type, or its width (8/16/32/64/128, ``"size"``)
        *entries: Field and flag group declarations in order

    Returns:
        Validated Schema

    Raises:
        SchemaError: If the layout is invalid

    Example:
        >>> Styles = layout(
        ...     "Styles", 8,
        ...     field("foreground", COLOR, width=3),
        ...     field("foreground_bright", "bool"),
        ...     field("background", COLOR, width=3),
        ...     field("blink", "bool"),
        ... )
    """
    if not isinstance(storage, StorageType):
        storage = StorageType.from_bits(storage)
    return LayoutDeclaration(name=name, storage=storage, entries=entries).compile()
