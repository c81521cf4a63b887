#!/usr/bin/env python3
"""Windows NTSTATUS example for bitlayout.

Builds the STATUS_ACCESS_VIOLATION code (0xC0000005) field by field and
decodes it again.
"""

from __future__ import annotations

import enum

from bitlayout import EncodeError, as_dict, enum_type, field, layout


class Severity(enum.Enum):
    Success = 0
    Information = 1
    Warning = 2
    Error = 3


NtStatus = layout(
    "NtStatus",
    32,
    field("code", "u16"),
    field("facility", "u16", width=12),
    field("reserved", "bool"),
    field("customer", "bool"),
    field("severity", enum_type(Severity, bits=8), width=2),
)


def main() -> None:
    """Run the NTSTATUS example."""
    status = NtStatus.new().set("code", 5).set("severity", Severity.Error)
    print(f"{int(status):#010x}")
    for name, value in as_dict(NtStatus, int(status)).items():
        print(f"   {name}: {value}")

    try:
        status.set("facility", 0x1000)
    except EncodeError as err:
        print(f"Rejected: {err}")


if __name__ == "__main__":
    main()
