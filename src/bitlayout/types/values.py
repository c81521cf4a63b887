"""Value type descriptors.

A value type describes what a single field stores: how many bits the type needs
to represent its full range, and whether it is an unsigned integer, a signed
integer, a boolean or an enumerated type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Optional

from ..exceptions import InvalidValueType
from .enums import EnumCodec, as_codec

PRIMITIVE_WIDTHS = (8, 16, 32, 64, 128)
MAX_ENUM_BITS = 128


class Signedness(enum.Enum):
    """Kind of a value type."""

    UNSIGNED = "unsigned"
    SIGNED = "signed"
    BOOLEAN = "boolean"
    ENUMERATED = "enumerated"


@dataclass(frozen=True)
class ValueType:
    """Descriptor of the type stored in a field.

    Attributes:
        name: Type name used in diagnostics and rendering (``u8``, ``bool``, enum name)
        bit_capacity: Bits needed to represent the full range of the type
        signedness: Kind of the type
        codec: Raw/variant conversion, only for enumerated types
        signed_repr: Enumerated types only, discriminants are two's complement
    """

    name: str
    bit_capacity: int
    signedness: Signedness
    codec: Optional[EnumCodec] = None
    signed_repr: bool = False

    def __post_init__(self) -> None:
        if self.signedness is Signedness.BOOLEAN and self.bit_capacity != 1:
            raise InvalidValueType(f"{self.name}: boolean types hold exactly 1 bit")
        if self.signedness in (Signedness.UNSIGNED, Signedness.SIGNED):
            if self.bit_capacity not in PRIMITIVE_WIDTHS:
                raise InvalidValueType(
                    f"{self.name}: integer types hold 8/16/32/64/128 bits, "
                    f"got {self.bit_capacity}"
                )
        if self.signedness is Signedness.ENUMERATED:
            if self.codec is None:
                raise InvalidValueType(f"{self.name}: enumerated types need a codec")
            if not 1 <= self.bit_capacity <= MAX_ENUM_BITS:
                raise InvalidValueType(
                    f"{self.name}: bit capacity must be 1-{MAX_ENUM_BITS}, got {self.bit_capacity}"
                )
            self._check_discriminants(self.codec)
        elif self.codec is not None or self.signed_repr:
            raise InvalidValueType(f"{self.name}: only enumerated types take a codec")

    def _check_discriminants(self, codec: EnumCodec) -> None:
        low, high = self.value_range()
        for variant in codec.variants():
            raw = codec.to_raw(variant)
            if not low <= raw <= high:
                raise InvalidValueType(
                    f"{self.name}: discriminant {raw} of {variant!r} does not fit in "
                    f"{self.bit_capacity} {'signed ' if self.signed_repr else ''}bits"
                )

    def require_codec(self) -> EnumCodec:
        """Return the enum codec of an enumerated type.

        Raises:
            InvalidValueType: If the type has no codec
        """
        if self.codec is None:
            raise InvalidValueType(f"{self.name}: not an enumerated type")
        return self.codec

    @property
    def is_signed(self) -> bool:
        """True for signed integers and enumerated types with a signed repr."""
        return self.signedness is Signedness.SIGNED or (
            self.signedness is Signedness.ENUMERATED and self.signed_repr
        )

    def value_range(self) -> tuple[int, int]:
        """Inclusive range of raw integer values the type can represent."""
        if self.is_signed:
            half = 1 << (self.bit_capacity - 1)
            return -half, half - 1
        return 0, (1 << self.bit_capacity) - 1

    def discriminants(self) -> tuple[int, ...]:
        """Raw values of all enum variants, in declaration order."""
        if self.codec is None:
            return ()
        return tuple(self.codec.to_raw(variant) for variant in self.codec.variants())

    def __str__(self) -> str:
        return self.name


BOOL = ValueType("bool", 1, Signedness.BOOLEAN)
U8 = ValueType("u8", 8, Signedness.UNSIGNED)
U16 = ValueType("u16", 16, Signedness.UNSIGNED)
U32 = ValueType("u32", 32, Signedness.UNSIGNED)
U64 = ValueType("u64", 64, Signedness.UNSIGNED)
U128 = ValueType("u128", 128, Signedness.UNSIGNED)
I8 = ValueType("i8", 8, Signedness.SIGNED)
I16 = ValueType("i16", 16, Signedness.SIGNED)
I32 = ValueType("i32", 32, Signedness.SIGNED)
I64 = ValueType("i64", 64, Signedness.SIGNED)
I128 = ValueType("i128", 128, Signedness.SIGNED)

PRIMITIVES: dict[str, ValueType] = {
    vt.name: vt for vt in (BOOL, U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)
}


def enum_type(source: Any, bits: int, *, signed: bool = False) -> ValueType:
    """Create an enumerated value type.

    The bit capacity is declared, not inferred: it is the width of the enum's
    representation (``repr(u8)`` is 8 bits), and every discriminant must fit in it.

    Args:
        source: Enum subclass with integer values, or an EnumCodec
        bits: Bit capacity of the enumerated type
        signed: Whether discriminants are stored in two's complement

    Returns:
        ValueType with ``Signedness.ENUMERATED``

    Raises:
        InvalidValueType: If a discriminant does not fit or a value is not an integer

    Example:
        >>> class Color(enum.Enum):
        ...     BLACK = 0
        ...     BLUE = 1
        >>> enum_type(Color, bits=8).bit_capacity
        8
    """
    codec = as_codec(source)
    return ValueType(codec.name, bits, Signedness.ENUMERATED, codec=codec, signed_repr=signed)


def primitive(name: str) -> ValueType:
    """Look up a primitive value type by its name (``bool``, ``u8`` ... ``i128``).

    Raises:
        InvalidValueType: If the name is not a primitive type
    """
    try:
        return PRIMITIVES[name]
    except KeyError:
        raise InvalidValueType(f"Unknown primitive type {name!r}") from None
