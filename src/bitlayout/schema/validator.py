"""Layout validation rules.

The checks stop at the first violation:

1. Per entry, in declaration order: capacity, signed range and storage bounds
   for fields (plus enum discriminant fit and completeness), position bounds
   for flag groups. Then the entry must have a mutual allowance with every
   earlier entry whose bits it shares.
2. Every overlap allowance must name an existing entry that actually overlaps.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..exceptions import (
    MAX_REPORTED_MISSING,
    AsymmetricOverlapAllowance,
    DiscriminantExceedsField,
    DuplicateFieldName,
    FieldExceedsStorage,
    FlagsExceedStorage,
    IncompleteField,
    SchemaError,
    SignedFieldNeverNegative,
    TypeTooSmall,
    UnintendedOverlap,
    UnnecessaryOrUnknownOverlapAllowance,
)
from ..types.storage import StorageType
from ..types.values import Signedness
from .spec import Entry, FieldSpec, FlagGroupSpec

logger = logging.getLogger(__name__)


def check_layout(storage: StorageType, entries: Sequence[Entry]) -> None:
    """Validate a layout.

    Args:
        storage: Storage type the entries are packed into
        entries: Fields and flag groups in declaration order

    Raises:
        SchemaError: The subclass naming the first rule that failed
    """
    _check_names(entries)

    for index, entry in enumerate(entries):
        if isinstance(entry, FieldSpec):
            check_field(storage, entry)
        elif isinstance(entry, FlagGroupSpec):
            check_flag_group(storage, entry)
        else:
            raise SchemaError(f"Unsupported layout entry {entry!r}")

        for earlier in entries[:index]:
            check_overlap(earlier, entry)

    check_allowances(entries)


def _check_names(entries: Sequence[Entry]) -> None:
    seen: set[str] = set()
    for entry in entries:
        if not entry.name or entry.name in seen:
            raise DuplicateFieldName(entry.name)
        seen.add(entry.name)


def check_field(storage: StorageType, spec: FieldSpec) -> None:
    """Check one field against its value type and the storage width."""
    value_type = spec.value_type

    if spec.width > value_type.bit_capacity:
        raise TypeTooSmall(spec.name, spec.width, value_type.bit_capacity)

    # The sign bit lives at bit_capacity - 1 of the value type, which a narrower
    # field never fills.
    if value_type.is_signed and spec.width != value_type.bit_capacity:
        raise SignedFieldNeverNegative(spec.name, spec.width, value_type.bit_capacity)

    if spec.end > storage.bit_capacity:
        raise FieldExceedsStorage(spec.name, spec.offset, spec.width, storage.bit_capacity)

    if value_type.signedness is Signedness.ENUMERATED:
        _check_enum_field(spec)


def _check_enum_field(spec: FieldSpec) -> None:
    value_type = spec.value_type
    discriminants = value_type.discriminants()

    if not value_type.is_signed:
        limit = 1 << spec.width
        for raw in discriminants:
            if raw >= limit:
                raise DiscriminantExceedsField(spec.name, raw, spec.width)

    if spec.complete:
        field_mask = (1 << spec.width) - 1
        present = {raw & field_mask for raw in discriminants}
        if len(present) < 1 << spec.width:
            raise IncompleteField(spec.name, _first_missing(present, MAX_REPORTED_MISSING + 1))


def _first_missing(present: set[int], count: int) -> list[int]:
    """Return up to ``count`` raw values, in ascending order, that are not in ``present``."""
    missing = []
    raw = 0
    while len(missing) < count:
        if raw not in present:
            missing.append(raw)
        raw += 1
    return missing


def check_flag_group(storage: StorageType, group: FlagGroupSpec) -> None:
    """Check that every flag of a group addresses a bit of the storage type."""
    for position in group.positions():
        if not 0 <= position < storage.bit_capacity:
            raise FlagsExceedStorage(group.name, position, storage.bit_capacity)


def check_overlap(first: Entry, second: Entry) -> None:
    """Require a mutual allowance if two entries share bits.

    Overlap is checked pairwise, so bits shared by three entries need an
    allowance between each pair of them.
    """
    if not first.occupied_bits & second.occupied_bits:
        return

    first_allows = second.name in first.overlap_allowances
    second_allows = first.name in second.overlap_allowances
    if first_allows and second_allows:
        logger.debug("Fields %s and %s share bits by agreement", first.name, second.name)
        return
    if first_allows:
        raise AsymmetricOverlapAllowance(first.name, second.name)
    if second_allows:
        raise AsymmetricOverlapAllowance(second.name, first.name)
    raise UnintendedOverlap(first.name, second.name)


def check_allowances(entries: Sequence[Entry]) -> None:
    """Reject allowances that name nothing, the entry itself, or a disjoint entry."""
    by_name = {entry.name: entry for entry in entries}

    for entry in entries:
        for allowed in sorted(entry.overlap_allowances):
            other = by_name.get(allowed)
            if other is None or other is entry:
                raise UnnecessaryOrUnknownOverlapAllowance(entry.name, allowed, unknown=True)
            if not entry.occupied_bits & other.occupied_bits:
                raise UnnecessaryOrUnknownOverlapAllowance(entry.name, allowed, unknown=False)
            if entry.name not in other.overlap_allowances:
                raise AsymmetricOverlapAllowance(entry.name, other.name)
