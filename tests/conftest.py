"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import enum

import pytest

from bitlayout import Schema, enum_type, field, flags, layout


class Color(enum.Enum):
    """VGA text mode colors."""

    Black = 0
    Blue = 1
    Green = 2
    Cyan = 3
    Red = 4
    Magenta = 5
    Brown = 6
    Gray = 7


class Control(enum.Enum):
    """x86 DR7 control flags, values are bit positions."""

    DebugRegister0Local = 0
    DebugRegister0Global = 1
    DebugRegister1Local = 2
    DebugRegister1Global = 3
    DebugRegister2Local = 4
    DebugRegister2Global = 5
    DebugRegister3Local = 6
    DebugRegister3Global = 7
    ExactInstructionLocal = 8
    ExactInstructionGlobal = 9
    RestrictedTransactionalMemory = 11
    DebugRegisterAccess = 13


class BreakPointType(enum.Enum):
    Execute = 0
    Write = 1
    ReadWriteIo = 2
    ReadWrite = 3


class BreakPointLength(enum.Enum):
    One = 0
    Two = 1
    Eight = 2
    Four = 3


class Severity(enum.Enum):
    Success = 0
    Information = 1
    Warning = 2
    Error = 3


COLOR = enum_type(Color, bits=8)
BREAK_POINT_TYPE = enum_type(BreakPointType, bits=8)
BREAK_POINT_LENGTH = enum_type(BreakPointLength, bits=8)
SEVERITY = enum_type(Severity, bits=8)


@pytest.fixture
def styles() -> Schema:
    """VGA text mode character styles in 8 bits."""
    return layout(
        "Styles",
        8,
        field("foreground", COLOR, width=3),
        field("foreground_bright", "bool"),
        field("background", COLOR, width=3),
        field("blink", "bool"),
    )


@pytest.fixture
def debug_control() -> Schema:
    """x86 debug control register (DR7)."""
    return layout(
        "DebugControl",
        "size",
        flags("flag", Control),
        field("type0", BREAK_POINT_TYPE, offset=16, width=2, complete=True),
        field("length0", BREAK_POINT_LENGTH, width=2),
        field("type1", BREAK_POINT_TYPE, width=2, complete=True),
        field("length1", BREAK_POINT_LENGTH, width=2),
        field("type2", BREAK_POINT_TYPE, width=2, complete=True),
        field("length2", BREAK_POINT_LENGTH, width=2),
        field("type3", BREAK_POINT_TYPE, width=2, complete=True),
        field("length3", BREAK_POINT_LENGTH, width=2),
    )


@pytest.fixture
def nt_status() -> Schema:
    """Windows NTSTATUS code in 32 bits."""
    return layout(
        "NtStatus",
        32,
        field("code", "u16"),
        field("facility", "u16", width=12),
        field("reserved", "bool"),
        field("customer", "bool"),
        field("severity", SEVERITY, width=2),
    )
