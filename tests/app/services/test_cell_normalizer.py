"""Testes do cell_normalizer (listas, horas e datas de planilha)."""

from __future__ import annotations

from datetime import date, datetime, time

import pytest

from app.domain.cells import NativeDateTimeCell, NumericSerialCell, TextCell, classify_cell
from app.services.cell_normalizer import (
    normalize_date,
    normalize_date_list,
    normalize_list,
    normalize_time,
    normalize_time_list,
    serial_to_datetime,
    split_list,
)


class TestClassifyCell:
    """Testes da classificação de valores brutos."""

    def test_none_and_blank_text_are_empty(self) -> None:
        assert classify_cell(None) is None
        assert classify_cell("   ") is None

    def test_datetime_and_time_are_native(self) -> None:
        assert classify_cell(datetime(2024, 1, 1, 9, 0)) == NativeDateTimeCell(
            datetime(2024, 1, 1, 9, 0)
        )
        assert classify_cell(time(9, 0)) == NativeDateTimeCell(time(9, 0))

    def test_plain_date_becomes_midnight(self) -> None:
        assert classify_cell(date(2024, 5, 1)) == NativeDateTimeCell(datetime(2024, 5, 1))

    def test_numbers_are_serials(self) -> None:
        assert classify_cell(44562) == NumericSerialCell(44562.0)
        assert classify_cell(0.375) == NumericSerialCell(0.375)

    def test_bool_is_text(self) -> None:
        assert classify_cell(True) == TextCell("True")

    def test_text_is_stripped(self) -> None:
        assert classify_cell("  olá  ") == TextCell("olá")


class TestSerialToDatetime:
    """Testes da conversão de serial do Excel."""

    def test_known_serial(self) -> None:
        assert serial_to_datetime(44562) == datetime(2022, 1, 1)

    def test_fraction_rounds_to_exact_time(self) -> None:
        assert serial_to_datetime(45292.5) == datetime(2024, 1, 1, 12, 0)

    @pytest.mark.parametrize("serial", [float("inf"), float("nan"), 1e20])
    def test_unrepresentable_serial_returns_none(self, serial: float) -> None:
        assert serial_to_datetime(serial) is None


class TestLists:
    """Testes de split_list e normalize_list."""

    def test_dedupes_preserving_order(self) -> None:
        assert normalize_list("a,a;b") == ["a", "b"]

    def test_all_delimiters(self) -> None:
        assert normalize_list("x | y\nz\tw, v") == ["x", "y", "z", "w", "v"]

    def test_collapses_empty_parts(self) -> None:
        assert split_list(";;a;; ; b;") == ["a", "b"]

    def test_empty_cell(self) -> None:
        assert normalize_list(None) == []
        assert normalize_list("  ") == []
        assert normalize_list(" ; , ") == []

    def test_numbers_become_single_item(self) -> None:
        assert normalize_list(42) == ["42"]
        assert normalize_list(1.5) == ["1.5"]

    def test_native_datetime_becomes_iso(self) -> None:
        assert normalize_list(datetime(2024, 1, 1, 9, 0)) == ["2024-01-01T09:00:00"]


class TestNormalizeTime:
    """Testes de normalize_time."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("9:05", "09:05"),
            ("9.05", "09:05"),
            ("14h30", "14:30"),
            ("905", "09:05"),
            ("0905", "09:05"),
            (" 18:45 ", "18:45"),
        ],
    )
    def test_text_forms(self, raw: str, expected: str) -> None:
        assert normalize_time(raw) == expected

    def test_ranges_are_not_checked(self) -> None:
        assert normalize_time("2561") == "25:61"

    @pytest.mark.parametrize("raw", ["abc", "12345", "9", "", None])
    def test_unrecognized_returns_none(self, raw: object) -> None:
        assert normalize_time(raw) is None

    def test_native_values(self) -> None:
        assert normalize_time(time(9, 30)) == "09:30"
        assert normalize_time(datetime(2024, 1, 1, 18, 45)) == "18:45"

    def test_serial_fraction(self) -> None:
        assert normalize_time(0.375) == "09:00"


class TestNormalizeDate:
    """Testes de normalize_date."""

    def test_serial(self) -> None:
        assert normalize_date(44562) == "01.01.2022"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("01.01.2024", "01.01.2024"),
            ("1/2/2024", "01.02.2024"),
            ("2024-03-05", "05.03.2024"),
            ("2024-03-05T10:00:00", "05.03.2024"),
            ("5 3 2024", "05.03.2024"),
            ("05..03..2024", "05.03.2024"),
        ],
    )
    def test_text_forms(self, raw: str, expected: str) -> None:
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["32.01.2024", "01.13.2024", "01.01.1899", "01.01.3001", "01.01.24", "hello", None],
    )
    def test_invalid_returns_none(self, raw: object) -> None:
        assert normalize_date(raw) is None

    def test_day_month_consistency_is_deferred(self) -> None:
        assert normalize_date("31.04.2024") == "31.04.2024"

    def test_native_values(self) -> None:
        assert normalize_date(datetime(2024, 2, 29, 8, 0)) == "29.02.2024"
        assert normalize_date(date(2024, 5, 1)) == "01.05.2024"
        assert normalize_date(time(9, 0)) is None

    @pytest.mark.parametrize("raw", ["1/2/2024", "2024-03-05", 44562, datetime(2024, 7, 9)])
    def test_idempotent_on_canonical_output(self, raw: object) -> None:
        canonical = normalize_date(raw)
        assert canonical is not None
        assert normalize_date(canonical) == canonical


class TestNormalizeLists:
    """Testes de normalize_date_list e normalize_time_list."""

    def test_date_list(self) -> None:
        assert normalize_date_list("01.01.2024, 02.01.2024") == ["01.01.2024", "02.01.2024"]

    def test_date_list_drops_invalid_and_duplicates(self) -> None:
        assert normalize_date_list("01.01.2024;1/1/2024;bad") == ["01.01.2024"]

    def test_date_list_from_serial(self) -> None:
        assert normalize_date_list(45292) == ["01.01.2024"]

    def test_date_list_from_native(self) -> None:
        assert normalize_date_list(datetime(2024, 1, 2)) == ["02.01.2024"]

    def test_empty(self) -> None:
        assert normalize_date_list(None) == []
        assert normalize_time_list(None) == []

    def test_time_list(self) -> None:
        assert normalize_time_list("09:00 | 14:30") == ["09:00", "14:30"]

    def test_time_list_dedupes_canonical_values(self) -> None:
        assert normalize_time_list("9:00;09:00") == ["09:00"]

    def test_time_list_from_native(self) -> None:
        assert normalize_time_list(time(7, 15)) == ["07:15"]
