"""Pydantic models for layout declarations.

A declaration is the plain-data description of a layout before placement and
validation: which fields and flag groups it has, and where they live. Offsets
and widths are optional and filled in by the compiler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, FrozenSet, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from ..types.enums import EnumCodec, as_codec
from ..types.storage import StorageType
from ..types.values import ValueType, primitive

if TYPE_CHECKING:
    from ..schema.layout import Schema


class Declaration(BaseModel):
    """Base class for all bitlayout declarations."""

    model_config = ConfigDict(
        # Declarations are values; compiled schemas must not change underneath
        frozen=True,
        # Value types and enum codecs are plain Python objects
        arbitrary_types_allowed=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )


class FieldDeclaration(Declaration):
    """Declaration of one field.

    Attributes:
        name: Field name
        value_type: Stored type, a ValueType or a primitive name (``"u8"``, ``"bool"``)
        offset: Bit position, or None to place it right after the previous field
        width: Number of bits, or None to use the value type's full bit capacity
        complete: Every raw value of the field maps to an enum variant
        allow_overlap: Names of entries this field may share bits with
    """

    name: str = Field(min_length=1)
    value_type: InstanceOf[ValueType]
    offset: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, ge=1)
    complete: bool = False
    allow_overlap: FrozenSet[str] = frozenset()

    @field_validator("value_type", mode="before")
    @classmethod
    def _primitive_by_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return primitive(value)
        return value


class FlagsDeclaration(Declaration):
    """Declaration of a flag group.

    Attributes:
        name: Group name
        flags: Enum subclass (or EnumCodec) whose discriminants are bit positions
        allow_overlap: Names of entries this group may share bits with
    """

    name: str = Field(min_length=1)
    flags: Any
    allow_overlap: FrozenSet[str] = frozenset()

    @field_validator("flags")
    @classmethod
    def _flags_codec(cls, value: Any) -> EnumCodec:
        return as_codec(value)


EntryDeclaration = Union[FieldDeclaration, FlagsDeclaration]


class LayoutDeclaration(Declaration):
    """Declaration of a whole layout.

    Example:
        >>> declaration = LayoutDeclaration(
        ...     name="Styles",
        ...     storage=8,
        ...     entries=[
        ...         FieldDeclaration(name="foreground", value_type=COLOR, width=3),
        ...         FieldDeclaration(name="bright", value_type="bool"),
        ...     ],
        ... )
        >>> schema = declaration.compile()

    Attributes:
        name: Layout name
        storage: Storage type (``StorageType`` member, or 8/16/32/64/128/"size")
        entries: Fields and flag groups in declaration order
    """

    name: str = Field(default="BitField", min_length=1)
    storage: StorageType
    entries: Tuple[EntryDeclaration, ...] = ()

    def compile(self) -> Schema:
        """Place and validate the declared entries.

        Returns:
            Validated Schema

        Raises:
            SchemaError: If the layout is invalid
        """
        from .compiler import compile_layout

        return compile_layout(self)
