"""Enum round-trip capability.

An enumerated field type is described by a codec rather than by reflection at
decode time: ``to_variant`` converts a raw discriminant back to a variant and
fails with ``ValueError`` when no variant matches, ``to_raw`` goes the other way.
"""

from __future__ import annotations

import enum
from typing import Any, Protocol, Sequence, runtime_checkable

from ..exceptions import InvalidValueType


@runtime_checkable
class EnumCodec(Protocol):
    """Conversion between raw discriminants and the variants of an enumerated type."""

    @property
    def name(self) -> str: ...

    def variants(self) -> Sequence[Any]: ...

    def to_variant(self, raw: int) -> Any: ...

    def to_raw(self, variant: Any) -> int: ...

    def owns(self, value: Any) -> bool: ...


class EnumClassCodec:
    """EnumCodec backed by a Python ``enum.Enum`` subclass with integer values.

    Aliases (members sharing a value) are not separate variants, so the mapping
    from raw values to variants stays injective.

    Example:
        >>> class Color(enum.Enum):
        ...     BLACK = 0
        ...     BLUE = 1
        >>> codec = EnumClassCodec(Color)
        >>> codec.to_variant(1)
        <Color.BLUE: 1>
        >>> codec.to_raw(Color.BLACK)
        0
    """

    def __init__(self, enum_class: type[enum.Enum]) -> None:
        if not (isinstance(enum_class, type) and issubclass(enum_class, enum.Enum)):
            raise InvalidValueType(f"{enum_class!r} is not an Enum subclass")

        members = tuple(enum_class)
        if not members:
            raise InvalidValueType(f"Enum {enum_class.__name__} has no values")

        for member in members:
            # bool is an int subclass but never a meaningful discriminant
            if not isinstance(member.value, int) or isinstance(member.value, bool):
                raise InvalidValueType(
                    f"Enum {enum_class.__name__}.{member.name}: discriminant must be an "
                    f"integer, got {type(member.value).__name__}"
                )

        self.enum_class = enum_class
        self._members = members
        self._by_raw = {member.value: member for member in members}

    @property
    def name(self) -> str:
        return self.enum_class.__name__

    def variants(self) -> Sequence[enum.Enum]:
        """Return all variants in declaration order."""
        return self._members

    def to_variant(self, raw: int) -> enum.Enum:
        """Return the variant for ``raw``.

        Raises:
            ValueError: If no variant has this discriminant
        """
        try:
            return self._by_raw[raw]
        except KeyError:
            raise ValueError(f"{raw} is not a valid {self.name}") from None

    def to_raw(self, variant: enum.Enum) -> int:
        return int(variant.value)

    def owns(self, value: Any) -> bool:
        return isinstance(value, self.enum_class)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EnumClassCodec):
            return NotImplemented
        return self.enum_class is other.enum_class

    def __hash__(self) -> int:
        return hash(self.enum_class)

    def __repr__(self) -> str:
        return f"EnumClassCodec({self.name})"


def as_codec(source: EnumCodec | type[enum.Enum]) -> EnumCodec:
    """Return ``source`` as an EnumCodec, wrapping Enum subclasses."""
    if isinstance(source, type) and issubclass(source, enum.Enum):
        return EnumClassCodec(source)
    if isinstance(source, EnumCodec):
        return source
    raise InvalidValueType(f"Expected an Enum subclass or an EnumCodec, got {source!r}")
