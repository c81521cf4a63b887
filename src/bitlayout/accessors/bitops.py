"""Bit-level extraction and insertion over fixed-width storage integers.

Python integers are unbounded, so every helper takes the storage capacity and
keeps its result inside ``[0, 2**capacity)``. Bit 0 is the least significant bit.
"""

from __future__ import annotations


def mask(width: int, capacity: int) -> int:
    """Return ``width`` low bits set, computed within a ``capacity``-bit integer.

    A width equal to the capacity yields all ones, a width of 0 yields 0.

    Args:
        width: Number of bits in the mask (0 to capacity)
        capacity: Width of the integer the mask is used with

    Raises:
        ValueError: If width is outside 0..capacity
    """
    if width < 0 or width > capacity:
        raise ValueError(f"width must be 0-{capacity}, got {width}")
    return (1 << width) - 1


def extract(storage: int, offset: int, width: int, capacity: int) -> int:
    """Read the unsigned bits ``[offset, offset + width)`` of ``storage``."""
    return (storage >> offset) & mask(width, capacity)


def insert(storage: int, bits: int, offset: int, width: int, capacity: int) -> int:
    """Return ``storage`` with bits ``[offset, offset + width)`` replaced by ``bits``.

    Only the low ``width`` bits of ``bits`` are used; every other bit of
    ``storage`` is returned unchanged.
    """
    field_mask = mask(width, capacity)
    all_ones = mask(capacity, capacity)
    cleared = storage & ~(field_mask << offset) & all_ones
    return cleared | ((bits & field_mask) << offset)


def bit_is_set(storage: int, position: int) -> bool:
    """Return True if the bit at ``position`` is set."""
    return (storage >> position) & 1 != 0


def set_bit(storage: int, position: int, value: bool, capacity: int) -> int:
    """Return ``storage`` with the bit at ``position`` set to ``value``."""
    return insert(storage, 1 if value else 0, position, 1, capacity)


def invert_bit(storage: int, position: int) -> int:
    """Return ``storage`` with the bit at ``position`` toggled."""
    return storage ^ (1 << position)


def to_twos_complement(value: int, num_bits: int) -> int:
    """Convert a signed integer to its unsigned two's complement bit pattern.

    Args:
        value: Signed integer value
        num_bits: Number of bits of the signed type

    Raises:
        ValueError: If value doesn't fit in num_bits using two's complement
    """
    min_value = -(1 << (num_bits - 1))
    max_value = (1 << (num_bits - 1)) - 1

    if value < min_value or value > max_value:
        raise ValueError(
            f"Value {value} doesn't fit in {num_bits} bits (range: {min_value} to {max_value})"
        )

    if value < 0:
        return (1 << num_bits) + value
    return value


def from_twos_complement(bits: int, num_bits: int) -> int:
    """Reinterpret an unsigned bit pattern as a two's complement signed integer.

    This is a reinterpretation of the pattern, not a numeric narrowing: the bit
    at ``num_bits - 1`` is the sign bit.
    """
    bits &= (1 << num_bits) - 1
    sign_bit = 1 << (num_bits - 1)
    if bits & sign_bit:
        return bits - (1 << num_bits)
    return bits
