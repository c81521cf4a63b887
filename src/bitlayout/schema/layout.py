"""Validated layouts.

A Schema is the immutable aggregate of a storage type and its entries. It only
comes into existence after the whole layout passed validation, so every accessor
can rely on the layout's invariants.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Iterator, Mapping, Sequence

from ..exceptions import UnknownFieldError
from ..types.storage import StorageType
from .spec import Entry, FieldSpec, FlagGroupSpec
from .validator import check_layout

if TYPE_CHECKING:
    from ..bitfield import BitField

logger = logging.getLogger(__name__)


class Schema:
    """Validated, immutable bit field layout.

    Example:
        >>> schema = validate(StorageType.U8, [
        ...     FieldSpec("low", offset=0, width=4, value_type=U8),
        ...     FieldSpec("high", offset=4, width=4, value_type=U8),
        ... ], name="Nibbles")
        >>> schema.storage.bit_capacity
        8
        >>> [spec.name for spec in schema.fields]
        ['low', 'high']
    """

    __slots__ = ("_name", "_storage", "_entries", "_by_name")

    def __init__(self, storage: StorageType, entries: Iterable[Entry], name: str = "BitField") -> None:
        """Validate ``entries`` and build the schema.

        Raises:
            SchemaError: If the layout violates any validation rule
        """
        entries = tuple(entries)
        check_layout(storage, entries)

        self._name = name
        self._storage = storage
        self._entries = entries
        self._by_name: Mapping[str, Entry] = MappingProxyType({e.name: e for e in entries})

        logger.debug(
            "Validated layout %s: %d entries in %d bits", name, len(entries), storage.bit_capacity
        )

    def __setattr__(self, key: str, value: object) -> None:
        if hasattr(self, "_by_name"):
            raise AttributeError(f"{type(self).__name__} is immutable")
        super().__setattr__(key, value)

    @property
    def name(self) -> str:
        return self._name

    @property
    def storage(self) -> StorageType:
        return self._storage

    @property
    def entries(self) -> tuple[Entry, ...]:
        """All fields and flag groups in declaration order."""
        return self._entries

    @property
    def fields(self) -> tuple[FieldSpec, ...]:
        return tuple(e for e in self._entries if isinstance(e, FieldSpec))

    @property
    def flag_groups(self) -> tuple[FlagGroupSpec, ...]:
        return tuple(e for e in self._entries if isinstance(e, FlagGroupSpec))

    def entry(self, name: str) -> Entry:
        """Return the field or flag group called ``name``.

        Raises:
            UnknownFieldError: If the schema has no such entry
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownFieldError(self._name, name) from None

    def field(self, name: str) -> FieldSpec:
        """Return the field called ``name``.

        Raises:
            UnknownFieldError: If the schema has no field of that name
        """
        entry = self.entry(name)
        if not isinstance(entry, FieldSpec):
            raise UnknownFieldError(self._name, name)
        return entry

    def flag_group(self, name: str) -> FlagGroupSpec:
        """Return the flag group called ``name``.

        Raises:
            UnknownFieldError: If the schema has no flag group of that name
        """
        entry = self.entry(name)
        if not isinstance(entry, FlagGroupSpec):
            raise UnknownFieldError(self._name, name)
        return entry

    def new(self, value: int = 0) -> BitField:
        """Create a storage value owner for this schema, zero-initialized by default."""
        from ..bitfield import BitField

        return BitField(self, value)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Schema({self._name!r}, {self._storage!r}, {len(self._entries)} entries)"


def validate(
    storage: StorageType, entries: Sequence[Entry], *, name: str = "BitField"
) -> Schema:
    """Validate a layout and return its immutable Schema.

    Args:
        storage: Storage type selected from the catalog
        entries: Field specifications and flag groups in declaration order
        name: Name of the layout, used when rendering values

    Returns:
        Validated Schema

    Raises:
        SchemaError: The subclass naming the first rule that failed; no partially
            validated schema is ever returned
    """
    return Schema(storage, entries, name=name)
