"""Exception hierarchy for bitlayout.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BitlayoutError for easy catching of any bitlayout-specific error.

Layout validation failures are all subclasses of SchemaError. Each one carries the
``rule`` it violated and the names of the entries involved, plus the numeric
quantities of that rule as attributes.
"""

from __future__ import annotations

from typing import Iterable

# IncompleteField messages list at most this many missing raw values
MAX_REPORTED_MISSING = 8


class BitlayoutError(Exception):
    """Base exception for all bitlayout errors."""

    pass


class SchemaError(BitlayoutError):
    """Raised when a layout or a value type descriptor is invalid.

    Examples:
        - Field wider than its value type
        - Field running past the end of the storage integer
        - Two fields sharing bits without a mutual overlap allowance
    """

    rule: str = "SchemaError"

    def __init__(self, message: str, *, field_names: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.field_names: tuple[str, ...] = tuple(field_names)


class InvalidValueType(SchemaError):
    """Raised when a value type descriptor is malformed.

    Examples:
        - Enum discriminant that does not fit the declared bit capacity
        - Enum member whose value is not an integer
        - Bit capacity outside 1..128
    """

    rule = "InvalidValueType"


class DuplicateFieldName(SchemaError):
    """Raised when two entries of a layout share a name, or a name is empty."""

    rule = "DuplicateFieldName"

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Field name {field_name!r} is empty or declared more than once",
            field_names=(field_name,),
        )
        self.field_name = field_name


class TypeTooSmall(SchemaError):
    """Raised when a field is declared wider than its value type can hold."""

    rule = "TypeTooSmall"

    def __init__(self, field_name: str, declared_width: int, type_capacity: int) -> None:
        super().__init__(
            f"Field {field_name}: type is smaller than the specified size of "
            f"{declared_width} bits (type holds {type_capacity} bits)",
            field_names=(field_name,),
        )
        self.field_name = field_name
        self.declared_width = declared_width
        self.type_capacity = type_capacity


class SignedFieldNeverNegative(SchemaError):
    """Raised when a signed field is narrower than its type, so its sign bit is unreachable."""

    rule = "SignedFieldNeverNegative"

    def __init__(self, field_name: str, declared_width: int, type_capacity: int) -> None:
        super().__init__(
            f"Field {field_name}: a signed type with a size of {declared_width} bits "
            f"can not store negative numbers, use an unsigned type or a size of "
            f"{type_capacity} bits",
            field_names=(field_name,),
        )
        self.field_name = field_name
        self.declared_width = declared_width
        self.type_capacity = type_capacity


class FieldExceedsStorage(SchemaError):
    """Raised when a field's bit range runs past the storage type's capacity."""

    rule = "FieldExceedsStorage"

    def __init__(
        self, field_name: str, offset: int, declared_width: int, storage_capacity: int
    ) -> None:
        super().__init__(
            f"Field {field_name}: bits {offset}..{offset + declared_width - 1} are out of "
            f"bounds, must not exceed {storage_capacity} bits",
            field_names=(field_name,),
        )
        self.field_name = field_name
        self.offset = offset
        self.declared_width = declared_width
        self.storage_capacity = storage_capacity


class DiscriminantExceedsField(SchemaError):
    """Raised when an enum discriminant can not be stored in the field's declared width."""

    rule = "DiscriminantExceedsField"

    def __init__(self, field_name: str, discriminant: int, declared_width: int) -> None:
        super().__init__(
            f"Field {field_name}: discriminant {discriminant} exceeds the field size of "
            f"{declared_width} bit{'s' if declared_width != 1 else ''}",
            field_names=(field_name,),
        )
        self.field_name = field_name
        self.discriminant = discriminant
        self.declared_width = declared_width


class IncompleteField(SchemaError):
    """Raised when a field declared complete has raw values without a variant.

    ``missing`` holds the lowest missing raw values, not necessarily all of them.
    """

    rule = "IncompleteField"

    def __init__(self, field_name: str, missing: Iterable[int]) -> None:
        self.missing = tuple(missing)
        shown = ", ".join(str(value) for value in self.missing[:MAX_REPORTED_MISSING])
        if len(self.missing) > MAX_REPORTED_MISSING:
            shown += ", ..."
        super().__init__(
            f"Field {field_name}: complete field must not have gaps, missing raw values: {shown}",
            field_names=(field_name,),
        )
        self.field_name = field_name


class FlagsExceedStorage(SchemaError):
    """Raised when a flag position lies outside the storage type."""

    rule = "FlagsExceedStorage"

    def __init__(self, group_name: str, position: int, storage_capacity: int) -> None:
        super().__init__(
            f"Flags {group_name}: flag at bit {position} exceeds the bit field size of "
            f"{storage_capacity} bits",
            field_names=(group_name,),
        )
        self.group_name = group_name
        self.position = position
        self.storage_capacity = storage_capacity


class UnintendedOverlap(SchemaError):
    """Raised when two entries share bits without any overlap allowance."""

    rule = "UnintendedOverlap"

    def __init__(self, field_a: str, field_b: str) -> None:
        super().__init__(
            f"Field {field_b} overlaps with field {field_a}, allow the overlap on both "
            f"fields if this is intended",
            field_names=(field_a, field_b),
        )
        self.field_a = field_a
        self.field_b = field_b


class AsymmetricOverlapAllowance(SchemaError):
    """Raised when one entry allows an overlap that the other entry does not allow back."""

    rule = "AsymmetricOverlapAllowance"

    def __init__(self, granting: str, other: str) -> None:
        super().__init__(
            f"Field {granting} allows overlapping with {other}, but {other} does not "
            f"allow overlapping with {granting}",
            field_names=(granting, other),
        )
        self.granting = granting
        self.other = other


class UnnecessaryOrUnknownOverlapAllowance(SchemaError):
    """Raised when an overlap allowance names an unknown or a non-overlapping entry."""

    rule = "UnnecessaryOrUnknownOverlapAllowance"

    def __init__(self, field_name: str, allowed: str, *, unknown: bool) -> None:
        reason = "no such field" if unknown else "the fields do not overlap"
        super().__init__(
            f"Field {field_name}: overlap allowance for {allowed!r} is unnecessary ({reason})",
            field_names=(field_name, allowed),
        )
        self.field_name = field_name
        self.allowed = allowed
        self.unknown = unknown


class EncodeError(BitlayoutError):
    """Raised when a value can not be encoded into a field.

    Examples:
        - Value of the wrong type for the field
        - Integer outside the value type's range
        - Unsigned value needing more bits than the field's width
        - Storage value outside the storage type's range
    """

    pass


class DecodeError(BitlayoutError):
    """Raised when decoding from a storage value fails.

    Examples:
        - Storage value outside the storage type's range
        - Unwrapping an unrecognized enum discriminant
    """

    pass


class UnknownFieldError(BitlayoutError, KeyError):
    """Raised when a schema has no field or flag group of the requested name."""

    def __init__(self, schema_name: str, field_name: str) -> None:
        super().__init__(f"{schema_name} has no field named {field_name!r}")
        self.schema_name = schema_name
        self.field_name = field_name

    def __str__(self) -> str:
        return str(self.args[0])
