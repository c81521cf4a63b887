"""Field accessors.

This module provides the decode/encode operations generated for every field of
a validated schema, and the flag operations of flag groups.
"""

from __future__ import annotations

from .engine import (
    FlagsView,
    all_flags,
    any_flags,
    clear_flags,
    decode,
    encode,
    flags_mask,
    flags_set,
    has_flag,
    invert_flag,
    iter_flags,
    set_all_flags,
    set_flag,
)
from .result import DecodeResult, Recognized, Unrecognized

__all__ = [
    "decode",
    "encode",
    "has_flag",
    "set_flag",
    "invert_flag",
    "flags_mask",
    "all_flags",
    "any_flags",
    "set_all_flags",
    "clear_flags",
    "iter_flags",
    "flags_set",
    "FlagsView",
    "DecodeResult",
    "Recognized",
    "Unrecognized",
]
