"""Decode and encode operations over storage values.

Every function here is pure: it takes a validated Schema and a storage value (a
plain ``int``) and returns a decoded value or a new storage value. Encoding one
field only ever changes that field's bits.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..exceptions import BitlayoutError, DecodeError, EncodeError
from ..schema.layout import Schema
from ..schema.spec import FieldSpec, FlagGroupSpec
from ..types.values import Signedness
from . import bitops
from .result import Recognized, Unrecognized


def check_storage(schema: Schema, storage: int, error: type[BitlayoutError]) -> None:
    """Raise ``error`` unless ``storage`` is a valid storage value of ``schema``."""
    if not isinstance(storage, int) or isinstance(storage, bool):
        raise error(f"{schema.name}: storage value must be an int, got {type(storage).__name__}")
    if not schema.storage.contains(storage):
        raise error(
            f"{schema.name}: storage value {storage} out of range for "
            f"{schema.storage.bit_capacity}-bit storage"
        )


def decode(schema: Schema, name: str, storage: int) -> Any:
    """Decode the value of field ``name`` from ``storage``.

    Args:
        schema: Validated schema
        name: Field name
        storage: Storage value of the schema's storage type

    Returns:
        ``bool`` for boolean fields, ``int`` for integer fields, and for
        enumerated fields either ``Recognized(variant)`` or ``Unrecognized(raw)``

    Raises:
        UnknownFieldError: If the schema has no field called ``name``
        DecodeError: If ``storage`` is outside the storage type's range
    """
    spec = schema.field(name)
    check_storage(schema, storage, DecodeError)
    return decode_field(spec, storage, schema.storage.bit_capacity)


def decode_field(spec: FieldSpec, storage: int, capacity: int) -> Any:
    """Decode one field from a storage value already known to be in range."""
    raw = bitops.extract(storage, spec.offset, spec.width, capacity)
    value_type = spec.value_type
    kind = value_type.signedness

    if kind is Signedness.BOOLEAN:
        return raw != 0

    if kind is Signedness.UNSIGNED:
        return raw

    if kind is Signedness.SIGNED:
        # width == bit_capacity is guaranteed by validation
        return bitops.from_twos_complement(raw, value_type.bit_capacity)

    codec = value_type.require_codec()
    if value_type.signed_repr:
        raw = bitops.from_twos_complement(raw, value_type.bit_capacity)
    try:
        return Recognized(codec.to_variant(raw))
    except ValueError:
        return Unrecognized(raw)


def encode(schema: Schema, name: str, storage: int, value: Any) -> int:
    """Encode ``value`` into field ``name`` of ``storage``.

    Args:
        schema: Validated schema
        name: Field name
        storage: Storage value of the schema's storage type
        value: New value of the field's value type

    Returns:
        New storage value; every bit outside the field is unchanged

    Raises:
        UnknownFieldError: If the schema has no field called ``name``
        EncodeError: If ``value`` is not a value of the field's type, does not fit
            the field, or ``storage`` is out of range
    """
    spec = schema.field(name)
    check_storage(schema, storage, EncodeError)
    bits = bits_of(spec, value)
    capacity = schema.storage.bit_capacity
    return bitops.insert(storage, bits, spec.offset, spec.width, capacity)


def bits_of(spec: FieldSpec, value: Any) -> int:
    """Convert a field value to the raw bit pattern stored in the field.

    Raises:
        EncodeError: If value is invalid for the field
    """
    value_type = spec.value_type
    kind = value_type.signedness

    if kind is Signedness.BOOLEAN:
        if not isinstance(value, bool):
            raise EncodeError(f"Field {spec.name}: expected bool, got {type(value).__name__}")
        return 1 if value else 0

    if kind is Signedness.ENUMERATED:
        codec = value_type.require_codec()
        if not codec.owns(value):
            raise EncodeError(
                f"Field {spec.name}: expected {codec.name}, got {type(value).__name__}"
            )
        raw = codec.to_raw(value)
        if value_type.signed_repr:
            return bitops.to_twos_complement(raw, value_type.bit_capacity)
        return raw

    if not isinstance(value, int):
        raise EncodeError(f"Field {spec.name}: expected int, got {type(value).__name__}")

    if kind is Signedness.SIGNED:
        try:
            return bitops.to_twos_complement(int(value), value_type.bit_capacity)
        except ValueError as err:
            raise EncodeError(f"Field {spec.name}: {err}") from err

    low, high = value_type.value_range()
    if value < low or value > high:
        raise EncodeError(
            f"Field {spec.name}: value {value} out of bounds for {value_type} [{low}, {high}]"
        )
    if value >> spec.width:
        raise EncodeError(
            f"Field {spec.name}: value {value} requires more than {spec.width} bits "
            f"(max: {(1 << spec.width) - 1})"
        )
    return int(value)


def _flag_position(group: FlagGroupSpec, flag: Any, error: type[BitlayoutError]) -> int:
    if not group.codec.owns(flag):
        raise error(f"Flags {group.name}: expected {group.codec.name}, got {flag!r}")
    return group.codec.to_raw(flag)


def has_flag(schema: Schema, group_name: str, storage: int, flag: Any) -> bool:
    """Return True if ``flag`` of flag group ``group_name`` is set in ``storage``."""
    group = schema.flag_group(group_name)
    check_storage(schema, storage, DecodeError)
    return bitops.bit_is_set(storage, _flag_position(group, flag, DecodeError))


def set_flag(schema: Schema, group_name: str, storage: int, flag: Any, value: bool = True) -> int:
    """Return ``storage`` with ``flag`` set to ``value``."""
    group = schema.flag_group(group_name)
    check_storage(schema, storage, EncodeError)
    if not isinstance(value, bool):
        raise EncodeError(f"Flags {group.name}: expected bool, got {type(value).__name__}")
    position = _flag_position(group, flag, EncodeError)
    return bitops.set_bit(storage, position, value, schema.storage.bit_capacity)


def invert_flag(schema: Schema, group_name: str, storage: int, flag: Any) -> int:
    """Return ``storage`` with ``flag`` toggled."""
    group = schema.flag_group(group_name)
    check_storage(schema, storage, EncodeError)
    return bitops.invert_bit(storage, _flag_position(group, flag, EncodeError))


def flags_mask(schema: Schema, group_name: str) -> int:
    """Return a bit mask of all flags in a group."""
    return schema.flag_group(group_name).occupied_bits


def all_flags(schema: Schema, group_name: str, storage: int) -> bool:
    """Return True if every flag of the group is set."""
    check_storage(schema, storage, DecodeError)
    mask = flags_mask(schema, group_name)
    return storage & mask == mask


def any_flags(schema: Schema, group_name: str, storage: int) -> bool:
    """Return True if at least one flag of the group is set."""
    check_storage(schema, storage, DecodeError)
    return storage & flags_mask(schema, group_name) != 0


def set_all_flags(schema: Schema, group_name: str, storage: int) -> int:
    """Return ``storage`` with every flag of the group set."""
    check_storage(schema, storage, EncodeError)
    return storage | flags_mask(schema, group_name)


def clear_flags(schema: Schema, group_name: str, storage: int) -> int:
    """Return ``storage`` with every flag of the group cleared."""
    check_storage(schema, storage, EncodeError)
    return storage & ~flags_mask(schema, group_name) & schema.storage.mask


class FlagsView:
    """Set flags of one group in one storage value.

    Iteration is lazy and can be restarted: each ``iter()`` tests the flags again
    in declaration order.

    Example:
        >>> view = iter_flags(schema, "status", 0b1001)
        >>> [flag.name for flag in view]
        ['F0', 'F3']
    """

    __slots__ = ("_group", "_storage")

    def __init__(self, group: FlagGroupSpec, storage: int) -> None:
        self._group = group
        self._storage = storage

    def __iter__(self) -> Iterator[Any]:
        for flag in self._group.codec.variants():
            if bitops.bit_is_set(self._storage, self._group.codec.to_raw(flag)):
                yield flag

    def __contains__(self, flag: object) -> bool:
        return any(flag is member or flag == member for member in self)

    def __bool__(self) -> bool:
        return any(True for _ in self)

    def __repr__(self) -> str:
        names = ", ".join(flag_name(flag) for flag in self)
        return f"FlagsView({self._group.name}: {{{names}}})"


def iter_flags(schema: Schema, group_name: str, storage: int) -> FlagsView:
    """Return the set flags of a group, in declaration order."""
    group = schema.flag_group(group_name)
    check_storage(schema, storage, DecodeError)
    return FlagsView(group, storage)


def flags_set(schema: Schema, storage: int) -> tuple[str, ...]:
    """Return the names of all set flags of all flag groups, in declaration order."""
    check_storage(schema, storage, DecodeError)
    names: list[str] = []
    for group in schema.flag_groups:
        names.extend(flag_name(flag) for flag in FlagsView(group, storage))
    return tuple(names)


def flag_name(flag: Any) -> str:
    name = getattr(flag, "name", None)
    return name if isinstance(name, str) else str(flag)


