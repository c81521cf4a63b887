"""Unit tests for layout validation."""

from __future__ import annotations

import enum

import pytest

from bitlayout import (
    BOOL,
    I8,
    I16,
    U8,
    U16,
    U32,
    U64,
    U128,
    FieldSpec,
    FlagGroupSpec,
    StorageType,
    enum_type,
    validate,
)
from bitlayout.exceptions import (
    AsymmetricOverlapAllowance,
    DiscriminantExceedsField,
    DuplicateFieldName,
    FieldExceedsStorage,
    FlagsExceedStorage,
    IncompleteField,
    SchemaError,
    SignedFieldNeverNegative,
    TypeTooSmall,
    UnintendedOverlap,
    UnnecessaryOrUnknownOverlapAllowance,
)


class Mode(enum.Enum):
    Off = 0
    Slow = 1
    Fast = 2
    Turbo = 3


class Sparse(enum.Enum):
    Zero = 0
    Two = 2
    Three = 3


class Bits(enum.Enum):
    Low = 0
    High = 7


class Pair(enum.Enum):
    First = 0
    Second = 1


class TestAcceptedLayouts:
    """Layouts that validate."""

    def test_disjoint_fields(self) -> None:
        schema = validate(
            StorageType.U8,
            [
                FieldSpec("low", offset=0, width=4, value_type=U8),
                FieldSpec("high", offset=4, width=4, value_type=U8),
            ],
        )
        assert [spec.name for spec in schema.fields] == ["low", "high"]
        assert schema.name == "BitField"

    @pytest.mark.parametrize(
        "storage, value_type",
        [
            (StorageType.U8, U8),
            (StorageType.U16, U16),
            (StorageType.U32, U32),
            (StorageType.U64, U64),
            (StorageType.U128, U128),
        ],
    )
    def test_field_uses_whole_storage(self, storage: StorageType, value_type) -> None:
        schema = validate(storage, [FieldSpec("all", 0, storage.bit_capacity, value_type)])
        assert schema.field("all").width == storage.bit_capacity

    def test_field_uses_whole_pointer_sized_storage(self) -> None:
        bits = StorageType.USIZE.bit_capacity
        value_type = U64 if bits == 64 else U32
        schema = validate(StorageType.USIZE, [FieldSpec("all", 0, bits, value_type)])
        assert schema.storage is StorageType.USIZE

    def test_mutual_overlap_allowance(self) -> None:
        """Two booleans at bit 30 sharing the bit by agreement."""
        schema = validate(
            StorageType.U32,
            [
                FieldSpec("a", 30, 1, BOOL, overlap_allowances={"b"}),
                FieldSpec("b", 30, 1, BOOL, overlap_allowances={"a"}),
            ],
        )
        assert len(schema) == 2

    def test_three_way_overlap_all_pairs(self) -> None:
        validate(
            StorageType.U8,
            [
                FieldSpec("a", 0, 1, BOOL, overlap_allowances={"b", "c"}),
                FieldSpec("b", 0, 1, BOOL, overlap_allowances={"a", "c"}),
                FieldSpec("c", 0, 1, BOOL, overlap_allowances={"a", "b"}),
            ],
        )

    def test_full_width_signed(self) -> None:
        validate(StorageType.U16, [FieldSpec("temperature", 0, 16, I16)])

    def test_complete_enum_field(self) -> None:
        validate(StorageType.U8, [FieldSpec("mode", 0, 2, enum_type(Mode, 8), complete=True)])

    def test_flag_group(self) -> None:
        schema = validate(StorageType.U8, [FlagGroupSpec.of("bits", Bits)])
        assert schema.flag_group("bits").occupied_bits == 0b1000_0001

    def test_flag_group_shares_bits_with_field(self) -> None:
        validate(
            StorageType.U8,
            [
                FlagGroupSpec.of("bits", Bits, {"raw"}),
                FieldSpec("raw", 0, 8, U8, overlap_allowances={"bits"}),
            ],
        )


class TestFieldRules:
    """Per-field rejections."""

    def test_type_too_small(self) -> None:
        with pytest.raises(TypeTooSmall) as exc_info:
            validate(StorageType.U16, [FieldSpec("x", 0, 9, U8)])
        err = exc_info.value
        assert err.rule == "TypeTooSmall"
        assert (err.field_name, err.declared_width, err.type_capacity) == ("x", 9, 8)

    def test_signed_narrower_than_type(self) -> None:
        with pytest.raises(SignedFieldNeverNegative) as exc_info:
            validate(StorageType.U8, [FieldSpec("x", 0, 7, I8)])
        assert exc_info.value.declared_width == 7
        assert exc_info.value.type_capacity == 8

    def test_signed_enum_narrower_than_type(self) -> None:
        class Signed(enum.Enum):
            Minus = -1
            Plus = 1

        with pytest.raises(SignedFieldNeverNegative):
            validate(StorageType.U8, [FieldSpec("x", 0, 2, enum_type(Signed, 8, signed=True))])

    def test_field_exceeds_storage(self) -> None:
        with pytest.raises(FieldExceedsStorage) as exc_info:
            validate(StorageType.U8, [FieldSpec("x", 5, 4, U8)])
        err = exc_info.value
        assert (err.offset, err.declared_width, err.storage_capacity) == (5, 4, 8)

    def test_too_small_checked_before_storage_bounds(self) -> None:
        with pytest.raises(TypeTooSmall):
            validate(StorageType.U8, [FieldSpec("x", 4, 9, U8)])

    def test_discriminant_exceeds_field(self) -> None:
        with pytest.raises(DiscriminantExceedsField) as exc_info:
            validate(StorageType.U8, [FieldSpec("mode", 0, 1, enum_type(Mode, 8))])
        assert exc_info.value.discriminant == 2
        assert exc_info.value.declared_width == 1

    def test_incomplete_field(self) -> None:
        with pytest.raises(IncompleteField) as exc_info:
            validate(
                StorageType.U8, [FieldSpec("x", 0, 2, enum_type(Sparse, 8), complete=True)]
            )
        assert exc_info.value.missing == (1,)

    def test_incomplete_field_gap_at_end(self) -> None:
        with pytest.raises(IncompleteField) as exc_info:
            validate(StorageType.U8, [FieldSpec("x", 0, 3, enum_type(Mode, 8), complete=True)])
        assert exc_info.value.missing == (4, 5, 6, 7)

    @pytest.mark.parametrize("storage, bits", [(StorageType.U64, 64), (StorageType.U128, 128)])
    def test_incomplete_wide_field(self, storage: StorageType, bits: int) -> None:
        with pytest.raises(IncompleteField) as exc_info:
            validate(storage, [FieldSpec("x", 0, bits, enum_type(Pair, bits), complete=True)])
        assert exc_info.value.missing[:3] == (2, 3, 4)
        assert str(exc_info.value).endswith(", ...")

    def test_complete_needs_enum(self) -> None:
        with pytest.raises(SchemaError, match="only enumerated"):
            FieldSpec("x", 0, 2, U8, complete=True)

    def test_flags_exceed_storage(self) -> None:
        class Wide(enum.Enum):
            Low = 0
            Far = 8

        with pytest.raises(FlagsExceedStorage) as exc_info:
            validate(StorageType.U8, [FlagGroupSpec.of("wide", Wide)])
        assert exc_info.value.position == 8

    def test_duplicate_name(self) -> None:
        with pytest.raises(DuplicateFieldName):
            validate(
                StorageType.U8,
                [FieldSpec("x", 0, 1, BOOL), FieldSpec("x", 1, 1, BOOL)],
            )

    def test_invalid_width(self) -> None:
        with pytest.raises(SchemaError, match="width must be"):
            FieldSpec("x", 0, 0, U8)


class TestOverlapRules:
    """Overlap and overlap allowance rejections."""

    def test_unintended_overlap(self) -> None:
        """Two booleans at bit 30 without allowances."""
        with pytest.raises(UnintendedOverlap) as exc_info:
            validate(StorageType.U32, [FieldSpec("a", 30, 1, BOOL), FieldSpec("b", 30, 1, BOOL)])
        assert exc_info.value.field_names == ("a", "b")

    def test_overlap_reported_before_later_field_errors(self) -> None:
        with pytest.raises(UnintendedOverlap) as exc_info:
            validate(
                StorageType.U16,
                [
                    FieldSpec("a", 0, 1, BOOL),
                    FieldSpec("b", 0, 1, BOOL),
                    FieldSpec("c", 1, 9, U8),
                ],
            )
        assert exc_info.value.field_names == ("a", "b")

    def test_field_errors_reported_before_later_overlaps(self) -> None:
        with pytest.raises(TypeTooSmall):
            validate(
                StorageType.U16,
                [
                    FieldSpec("a", 0, 9, U8),
                    FieldSpec("b", 0, 1, BOOL),
                ],
            )

    def test_partial_overlap(self) -> None:
        with pytest.raises(UnintendedOverlap):
            validate(StorageType.U8, [FieldSpec("a", 0, 4, U8), FieldSpec("b", 3, 4, U8)])

    def test_asymmetric_allowance(self) -> None:
        with pytest.raises(AsymmetricOverlapAllowance) as exc_info:
            validate(
                StorageType.U32,
                [
                    FieldSpec("a", 30, 1, BOOL, overlap_allowances={"b"}),
                    FieldSpec("b", 30, 1, BOOL),
                ],
            )
        assert exc_info.value.granting == "a"
        assert exc_info.value.other == "b"

    def test_asymmetric_allowance_from_second_field(self) -> None:
        with pytest.raises(AsymmetricOverlapAllowance) as exc_info:
            validate(
                StorageType.U32,
                [
                    FieldSpec("a", 30, 1, BOOL),
                    FieldSpec("b", 30, 1, BOOL, overlap_allowances={"a"}),
                ],
            )
        assert exc_info.value.granting == "b"

    def test_three_way_overlap_missing_pair(self) -> None:
        with pytest.raises(UnintendedOverlap) as exc_info:
            validate(
                StorageType.U8,
                [
                    FieldSpec("a", 0, 1, BOOL, overlap_allowances={"b", "c"}),
                    FieldSpec("b", 0, 1, BOOL, overlap_allowances={"a"}),
                    FieldSpec("c", 0, 1, BOOL, overlap_allowances={"a"}),
                ],
            )
        assert exc_info.value.field_names == ("b", "c")

    def test_unknown_allowance(self) -> None:
        with pytest.raises(UnnecessaryOrUnknownOverlapAllowance) as exc_info:
            validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL, overlap_allowances={"ghost"})])
        assert exc_info.value.unknown
        assert exc_info.value.allowed == "ghost"

    def test_self_allowance(self) -> None:
        with pytest.raises(UnnecessaryOrUnknownOverlapAllowance):
            validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL, overlap_allowances={"a"})])

    def test_unnecessary_allowance(self) -> None:
        with pytest.raises(UnnecessaryOrUnknownOverlapAllowance) as exc_info:
            validate(
                StorageType.U8,
                [
                    FieldSpec("a", 0, 1, BOOL, overlap_allowances={"b"}),
                    FieldSpec("b", 1, 1, BOOL, overlap_allowances={"a"}),
                ],
            )
        assert not exc_info.value.unknown

    def test_failures_are_schema_errors(self) -> None:
        with pytest.raises(SchemaError):
            validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL), FieldSpec("b", 0, 1, BOOL)])


class TestSchema:
    """Validated schema behaviour."""

    def test_lookup(self) -> None:
        schema = validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL)], name="One")
        assert "a" in schema
        assert "b" not in schema
        assert schema.field("a").offset == 0
        assert list(schema) == [schema.field("a")]

    def test_unknown_name(self) -> None:
        schema = validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL)])
        with pytest.raises(KeyError, match="no field named 'b'"):
            schema.field("b")

    def test_immutable(self) -> None:
        schema = validate(StorageType.U8, [FieldSpec("a", 0, 1, BOOL)])
        with pytest.raises(AttributeError):
            schema._name = "Other"  # type: ignore[misc]
