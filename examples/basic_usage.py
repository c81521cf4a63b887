#!/usr/bin/env python3
"""Basic usage example for bitlayout.

This example demonstrates:
1. Declaring a layout with automatic field placement
2. Reading and writing fields of a storage value
3. Inspecting the layout's bit usage
4. Handling layout validation failures
"""

from __future__ import annotations

import enum

from bitlayout import SchemaError, enum_type, field, field_sizes, layout, layout_table


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


COLOR = enum_type(Color, bits=8)

# The attribute byte of a VGA text mode screen character
Styles = layout(
    "Styles",
    8,
    field("foreground", COLOR, width=3),
    field("foreground_bright", "bool"),
    field("background", COLOR, width=3),
    field("blink", "bool"),
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("bitlayout Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Layout of the attribute byte...")
    for row in layout_table(Styles):
        print(f"   {row.name:<18} bits {row.offset}..{row.offset + row.width - 1}  ({row.value_type})")
    print(f"   Total: {sum(field_sizes(Styles).values())} bits")
    print()

    print("2. Writing fields...")
    styles = Styles.new()
    styles.set("foreground", Color.Green).set("background", Color.Black).set("blink", True)
    if not styles.has("foreground_bright"):
        styles.invert("foreground_bright")
    print(f"   {styles!r}")
    print(f"   Raw: 0b{int(styles):08b}")
    print()

    print("3. Reading a raw attribute byte...")
    raw = Styles.new(0x17)
    print(f"   foreground: {raw.get('foreground')}")
    print(f"   background: {raw.get('background')}")
    print()

    print("4. Rejecting an invalid layout...")
    try:
        layout("Broken", 8, field("a", "u8", width=4), field("b", "u8", offset=2, width=4))
    except SchemaError as err:
        print(f"   {err.rule}: {err}")
    print()


if __name__ == "__main__":
    main()
