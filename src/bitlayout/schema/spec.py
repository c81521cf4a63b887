"""Entry specifications of a layout.

A layout is an ordered list of entries. An entry is either a FieldSpec (one named
value stored in a contiguous bit range) or a FlagGroupSpec (a set of 1-bit flags
whose positions are the discriminants of an enumerated type).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Union

from ..exceptions import SchemaError
from ..types.enums import EnumCodec, as_codec
from ..types.values import Signedness, ValueType


@dataclass(frozen=True)
class FieldSpec:
    """Schema information for a single field.

    Attributes:
        name: Field name, unique within a layout
        offset: Index of the field's least significant bit in the storage integer
        width: Number of bits the field occupies
        value_type: Descriptor of the stored type
        overlap_allowances: Names of entries this field may share bits with
        complete: Every raw value of the field maps to an enum variant
    """

    name: str
    offset: int
    width: int
    value_type: ValueType
    overlap_allowances: FrozenSet[str] = field(default_factory=frozenset)
    complete: bool = False

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise SchemaError(
                f"Field {self.name}: offset must be >= 0, got {self.offset}",
                field_names=(self.name,),
            )
        if self.width < 1:
            raise SchemaError(
                f"Field {self.name}: width must be >= 1, got {self.width}",
                field_names=(self.name,),
            )
        if self.complete and self.value_type.signedness is not Signedness.ENUMERATED:
            raise SchemaError(
                f"Field {self.name}: only enumerated fields can be complete",
                field_names=(self.name,),
            )
        # Accept any iterable of names, store a frozenset
        object.__setattr__(self, "overlap_allowances", frozenset(self.overlap_allowances))

    @property
    def end(self) -> int:
        """Bit index one past the field's most significant bit."""
        return self.offset + self.width

    @property
    def occupied_bits(self) -> int:
        """Mask of the storage bits this field occupies."""
        return ((1 << self.width) - 1) << self.offset

    @property
    def kind(self) -> str:
        return self.value_type.signedness.value


@dataclass(frozen=True)
class FlagGroupSpec:
    """Schema information for a group of 1-bit flags.

    Each variant of the flag type names one flag; its discriminant is the bit
    position of that flag in the storage integer.

    Attributes:
        name: Group name, unique within a layout
        codec: Enum codec whose discriminants are bit positions
        overlap_allowances: Names of entries this group may share bits with
    """

    name: str
    codec: EnumCodec
    overlap_allowances: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "codec", as_codec(self.codec))
        object.__setattr__(self, "overlap_allowances", frozenset(self.overlap_allowances))

    @classmethod
    def of(cls, name: str, flags: Any, overlap_allowances: Any = ()) -> FlagGroupSpec:
        """Create a flag group from an Enum subclass or an EnumCodec."""
        return cls(name, as_codec(flags), frozenset(overlap_allowances))

    def positions(self) -> tuple[int, ...]:
        """Bit positions of all flags, in declaration order."""
        return tuple(self.codec.to_raw(flag) for flag in self.codec.variants())

    @property
    def occupied_bits(self) -> int:
        """Mask of the storage bits used by any flag of the group."""
        mask = 0
        for position in self.positions():
            if position >= 0:
                mask |= 1 << position
        return mask

    @property
    def kind(self) -> str:
        return "flags"


Entry = Union[FieldSpec, FlagGroupSpec]
