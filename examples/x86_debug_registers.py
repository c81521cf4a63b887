#!/usr/bin/env python3
"""x86 debug registers example for bitlayout.

This example demonstrates:
1. Flag groups whose enum values are bit positions
2. Complete enum fields placed after an explicit offset
3. Operator forms for setting and testing flags
"""

from __future__ import annotations

import enum

from bitlayout import enum_type, field, flags, layout


class Control(enum.Enum):
    """DR7 control flags."""

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


class Status(enum.Enum):
    """DR6 status flags."""

    DebugRegister0Hit = 0
    DebugRegister1Hit = 1
    DebugRegister2Hit = 2
    DebugRegister3Hit = 3
    DebugRegisterAccessed = 13
    SingleStepped = 14
    TaskSwitched = 15
    NotInRestrictedTransactionalMemory = 16


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


TYPE = enum_type(BreakPointType, bits=8)
LENGTH = enum_type(BreakPointLength, bits=8)

DebugStatus = layout("DebugStatus", "size", flags("status", Status))

DebugControl = layout(
    "DebugControl",
    "size",
    flags("flag", Control),
    field("type0", TYPE, offset=16, width=2, complete=True),
    field("length0", LENGTH, width=2),
    field("type1", TYPE, width=2, complete=True),
    field("length1", LENGTH, width=2),
    field("type2", TYPE, width=2, complete=True),
    field("length2", LENGTH, width=2),
    field("type3", TYPE, width=2, complete=True),
    field("length3", LENGTH, width=2),
)


def main() -> None:
    """Run the debug register example."""
    # BreakPointType is used by four fields, so it is set by name, not with `+`
    control = (
        DebugControl.new()
        .set("type0", BreakPointType.Execute)
        .set("length0", BreakPointLength.One)
        + Control.ExactInstructionLocal
        + Control.DebugRegister0Local
    )
    print(repr(control))
    print(f"DR7 = {int(control):#x} ({control})")

    status = DebugStatus.new(0b1)
    if status.has(Status.DebugRegister0Hit):
        print("Break point 0 hit")


if __name__ == "__main__":
    main()
