"""Turn layout declarations into validated schemas.

Fields without an explicit offset are placed right after the previous field,
and fields without an explicit width take their value type's full bit capacity.
Flag groups name their own bit positions and do not move the placement cursor.
"""

from __future__ import annotations

import logging

from ..schema.layout import Schema, validate
from ..schema.spec import Entry, FieldSpec, FlagGroupSpec
from .base import FieldDeclaration, LayoutDeclaration

logger = logging.getLogger(__name__)


def compile_layout(declaration: LayoutDeclaration) -> Schema:
    """Place every declared entry and validate the resulting layout.

    Args:
        declaration: Layout declaration

    Returns:
        Validated Schema

    Raises:
        SchemaError: If the placed layout violates a validation rule
    """
    entries: list[Entry] = []
    cursor = 0

    for item in declaration.entries:
        if isinstance(item, FieldDeclaration):
            width = item.width if item.width is not None else item.value_type.bit_capacity
            if item.offset is None:
                offset = cursor
                logger.debug("%s.%s: placed at bit %d", declaration.name, item.name, offset)
            else:
                offset = item.offset
            cursor = offset + width

            entries.append(
                FieldSpec(
                    name=item.name,
                    offset=offset,
                    width=width,
                    value_type=item.value_type,
                    overlap_allowances=item.allow_overlap,
                    complete=item.complete,
                )
            )
        else:
            entries.append(FlagGroupSpec(item.name, item.flags, item.allow_overlap))

    return validate(declaration.storage, entries, name=declaration.name)
