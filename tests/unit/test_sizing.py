"""Unit tests for layout introspection."""

from __future__ import annotations

from bitlayout import Schema
from bitlayout.utils import LayoutRow, field_sizes, layout_table, unused_bits, used_bits


class TestBitUsage:
    """Test occupied and free bit masks."""

    def test_full_layout(self, styles: Schema) -> None:
        assert used_bits(styles) == 0xFF
        assert unused_bits(styles) == 0

    def test_reserved_bits(self, nt_status: Schema) -> None:
        assert used_bits(nt_status) == 0xFFFF_FFFF
        assert unused_bits(nt_status) == 0

    def test_flag_gaps(self, debug_control: Schema) -> None:
        assert used_bits(debug_control) & 0xFFFF == 0b0010_1011_1111_1111
        assert unused_bits(debug_control) & (1 << 10)
        assert not unused_bits(debug_control) & (1 << 16)


class TestFieldSizes:
    """Test per-entry bit counts."""

    def test_styles(self, styles: Schema) -> None:
        assert field_sizes(styles) == {
            "foreground": 3,
            "foreground_bright": 1,
            "background": 3,
            "blink": 1,
        }

    def test_flag_group_counts_flags(self, debug_control: Schema) -> None:
        assert field_sizes(debug_control)["flag"] == 12


class TestLayoutTable:
    """Test the layout description rows."""

    def test_rows(self, nt_status: Schema) -> None:
        assert layout_table(nt_status) == [
            LayoutRow("code", "unsigned", 0, 16, "u16"),
            LayoutRow("facility", "unsigned", 16, 12, "u16"),
            LayoutRow("reserved", "boolean", 28, 1, "bool"),
            LayoutRow("customer", "boolean", 29, 1, "bool"),
            LayoutRow("severity", "enumerated", 30, 2, "Severity"),
        ]

    def test_flag_group_row(self, debug_control: Schema) -> None:
        row = layout_table(debug_control)[0]
        assert row == LayoutRow("flag", "flags", 0, 14, "Control")
