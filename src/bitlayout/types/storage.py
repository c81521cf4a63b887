"""Catalog of supported storage integer types.

A storage type is the fixed-width unsigned integer that physically holds every
field of a layout. Python integers are unbounded, so the catalog is what gives a
storage value its width.
"""

from __future__ import annotations

import enum
import struct

POINTER_BITS = struct.calcsize("P") * 8


class StorageType(enum.Enum):
    """Native unsigned integer widths a layout can be packed into.

    Example:
        >>> StorageType.U16.bit_capacity
        16
        >>> StorageType.from_bits(32) is StorageType.U32
        True
    """

    U8 = 8
    U16 = 16
    U32 = 32
    U64 = 64
    U128 = 128
    # Pointer sized: its value is not a literal so that it never aliases U32/U64.
    USIZE = "size"

    @property
    def bit_capacity(self) -> int:
        """Number of bits in the storage integer."""
        if self is StorageType.USIZE:
            return POINTER_BITS
        return int(self.value)

    @property
    def mask(self) -> int:
        """All ones across the storage width."""
        return (1 << self.bit_capacity) - 1

    def contains(self, value: int) -> bool:
        """Return True if ``value`` is a valid storage value of this type."""
        return 0 <= value <= self.mask

    @classmethod
    def from_bits(cls, bits: int | str) -> StorageType:
        """Look up a storage type by its width, or ``"size"`` for pointer width.

        Raises:
            ValueError: If no storage type has that width
        """
        if bits in ("size", "usize"):
            return cls.USIZE
        for member in cls:
            if member is not cls.USIZE and member.value == bits:
                return member
        raise ValueError(f"Unsupported storage width {bits!r}, expected 8/16/32/64/128 or 'size'")

    def __repr__(self) -> str:
        return f"StorageType.{self.name}"
