"""Storage value owner.

A BitField pairs a validated Schema with one storage value and exposes the
schema's accessors as methods and operators. The storage value only changes
through encode operations, so it always stays a valid value of the storage type.
"""

from __future__ import annotations

from typing import Any, Union

from .accessors import engine
from .exceptions import EncodeError, UnknownFieldError
from .schema.layout import Schema
from .schema.spec import FieldSpec
from .types.values import Signedness
from .utils.render import render_flags, render_structured

FlagRef = Union[str, Any]


class BitField:
    """One storage value of a layout.

    Example:
        >>> styles = Styles.new()
        >>> styles.set("foreground", Color.Red).set("blink", True)
        >>> styles.get("foreground")
        Recognized(variant=<Color.Red: 4>)
        >>> dr7 = Dr7.new() + Dr7Flags.L0
        >>> str(dr7)
        'L0'
    """

    __slots__ = ("_schema", "_value")

    def __init__(self, schema: Schema, value: int = 0) -> None:
        """Create an owner for ``value``.

        Raises:
            EncodeError: If ``value`` is not a valid storage value of the schema
        """
        engine.check_storage(schema, value, EncodeError)
        self._schema = schema
        self._value = value

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def value(self) -> int:
        """The raw storage value."""
        return self._value

    # Fields

    def get(self, name: str) -> Any:
        """Decode field ``name``."""
        return engine.decode(self._schema, name, self._value)

    def set(self, name: str, value: Any) -> BitField:
        """Encode ``value`` into field ``name`` in place.

        Returns:
            self, so calls can be chained

        Raises:
            EncodeError: If ``value`` is not valid for the field
        """
        self._value = engine.encode(self._schema, name, self._value, value)
        return self

    def with_value(self, name: str, value: Any) -> BitField:
        """Return a copy with field ``name`` set to ``value``."""
        return BitField(self._schema, engine.encode(self._schema, name, self._value, value))

    # Flags

    def _flag_target(self, flag: FlagRef) -> tuple[str, Any]:
        """Resolve a flag variant or a boolean field name to (entry name, flag)."""
        if isinstance(flag, str):
            spec = self._schema.field(flag)
            if spec.value_type.signedness is not Signedness.BOOLEAN:
                raise EncodeError(f"Field {flag}: not a flag (type {spec.value_type})")
            return flag, None
        for group in self._schema.flag_groups:
            if group.codec.owns(flag):
                return group.name, flag
        raise UnknownFieldError(self._schema.name, repr(flag))

    def has(self, flag: FlagRef) -> bool:
        """Return True if a flag (variant, or boolean field name) is set."""
        name, member = self._flag_target(flag)
        if member is None:
            return engine.decode(self._schema, name, self._value)
        return engine.has_flag(self._schema, name, self._value, member)

    def set_flag(self, flag: FlagRef, value: bool = True) -> BitField:
        """Set or clear a flag in place."""
        name, member = self._flag_target(flag)
        if member is None:
            self._value = engine.encode(self._schema, name, self._value, value)
        else:
            self._value = engine.set_flag(self._schema, name, self._value, member, value)
        return self

    def invert(self, flag: FlagRef) -> BitField:
        """Toggle a flag in place."""
        name, member = self._flag_target(flag)
        if member is None:
            current = engine.decode(self._schema, name, self._value)
            self._value = engine.encode(self._schema, name, self._value, not current)
        else:
            self._value = engine.invert_flag(self._schema, name, self._value, member)
        return self

    def flags(self, group: str | None = None) -> engine.FlagsView:
        """Return the set flags of a flag group.

        Args:
            group: Group name; may be omitted when the layout has one flag group

        Raises:
            UnknownFieldError: If the group does not exist or cannot be inferred
        """
        if group is None:
            groups = self._schema.flag_groups
            if len(groups) != 1:
                raise UnknownFieldError(self._schema.name, "<flags>")
            group = groups[0].name
        return engine.iter_flags(self._schema, group, self._value)

    # Operators

    def _variant_field(self, variant: Any) -> FieldSpec:
        matches = [
            spec
            for spec in self._schema.fields
            if spec.value_type.codec is not None and spec.value_type.codec.owns(variant)
        ]
        if len(matches) != 1:
            raise EncodeError(
                f"{self._schema.name}: {variant!r} matches {len(matches)} fields, expected one"
            )
        return matches[0]

    def _add(self, item: Any) -> int:
        if isinstance(item, str) or any(g.codec.owns(item) for g in self._schema.flag_groups):
            name, member = self._flag_target(item)
            if member is None:
                return engine.encode(self._schema, name, self._value, True)
            return engine.set_flag(self._schema, name, self._value, member)
        spec = self._variant_field(item)
        return engine.encode(self._schema, spec.name, self._value, item)

    def _sub(self, item: FlagRef) -> int:
        name, member = self._flag_target(item)
        if member is None:
            return engine.encode(self._schema, name, self._value, False)
        return engine.set_flag(self._schema, name, self._value, member, False)

    def __add__(self, item: Any) -> BitField:
        return BitField(self._schema, self._add(item))

    def __iadd__(self, item: Any) -> BitField:
        self._value = self._add(item)
        return self

    def __sub__(self, item: FlagRef) -> BitField:
        return BitField(self._schema, self._sub(item))

    def __isub__(self, item: FlagRef) -> BitField:
        self._value = self._sub(item)
        return self

    def __xor__(self, item: FlagRef) -> BitField:
        return self.copy().invert(item)

    def __ixor__(self, item: FlagRef) -> BitField:
        return self.invert(item)

    def copy(self) -> BitField:
        return BitField(self._schema, self._value)

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitField):
            return NotImplemented
        return self._schema is other._schema and self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return render_structured(self._schema, self._value)

    def __str__(self) -> str:
        return render_flags(self._schema, self._value)
