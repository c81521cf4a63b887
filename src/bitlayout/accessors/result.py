"""Outcome of decoding an enumerated field.

Decoding never raises for an unknown discriminant. It returns either a
``Recognized`` variant or an ``Unrecognized`` raw value, and the caller decides
what to do with the latter.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ..exceptions import DecodeError

V = TypeVar("V")


@dataclass(frozen=True)
class Recognized(Generic[V]):
    """The raw bits matched a declared variant."""

    variant: V

    @property
    def is_recognized(self) -> bool:
        return True

    def unwrap(self) -> V:
        return self.variant

    def unwrap_or(self, default: Any) -> V:
        return self.variant

    def __str__(self) -> str:
        name = getattr(self.variant, "name", None)
        return name if isinstance(name, str) else str(self.variant)


@dataclass(frozen=True)
class Unrecognized:
    """The raw bits matched no declared variant.

    Attributes:
        raw: Discriminant read from the storage value
    """

    raw: int

    @property
    def is_recognized(self) -> bool:
        return False

    def unwrap(self) -> Any:
        raise DecodeError(f"Unrecognized discriminant {self.raw}")

    def unwrap_or(self, default: Any) -> Any:
        return default

    def __str__(self) -> str:
        return f"unrecognized({self.raw})"


DecodeResult = Union[Recognized[Any], Unrecognized]
