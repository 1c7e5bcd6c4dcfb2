"""Tests for the data file parser."""

import pytest

from sankeyplot.model.dataset import ErrorKind, FormatError, NumericError, FlowRecord
from sankeyplot.model.parser import parse_lines, parse_text, parse_value, read_dataset


class TestParseText:
    def test_budget_example(self, budget_text):
        ds = parse_text(budget_text)
        assert ds.title == "Budget"
        assert ds.source_label == "Income"
        assert ds.records == (
            FlowRecord("Rent", 500.0),
            FlowRecord("Food", 300.0),
            FlowRecord("Savings", 200.0),
        )
        assert ds.total == 1000.0

    def test_reparse_is_idempotent(self, budget_text):
        assert parse_text(budget_text) == parse_text(budget_text)

    def test_label_with_spaces(self):
        ds = parse_text("T\nS\nHeating and Cooling 420.5\n")
        assert ds.labels == ["Heating and Cooling"]
        assert ds.values == [420.5]

    def test_double_space_keeps_empty_token(self):
        # Tokens are split on single spaces, so the empty token survives in the label
        ds = parse_text("T\nS\nRent  500\n")
        assert ds.labels == ["Rent "]

    @pytest.mark.parametrize("line", ["Rent 500 ", "Rent 500   ", "Rent 500\t"])
    def test_trailing_whitespace_is_ignored(self, line):
        ds = parse_text(f"T\nS\n{line}\n")
        assert ds.records == (FlowRecord("Rent", 500.0),)

    def test_input_order_is_kept(self):
        ds = parse_text("T\nS\nsmall 1\nbig 100\nmid 50\n")
        assert ds.labels == ["small", "big", "mid"]

    def test_empty_data_section(self):
        ds = parse_text("Budget\nIncome\n")
        assert ds.is_empty
        assert ds.total == 0

    def test_crlf_line_endings(self):
        ds = parse_text("Budget\r\nIncome\r\nRent 500\r\n")
        assert ds.title == "Budget"
        assert ds.records == (FlowRecord("Rent", 500.0),)

    def test_negative_and_zero_values_accepted(self):
        ds = parse_text("T\nS\nloss -20\nnothing 0\n")
        assert ds.values == [-20.0, 0.0]

    def test_duplicate_label_overwrites_in_place(self):
        ds = parse_text("T\nS\nRent 500\nFood 300\nRent 100\n")
        assert ds.labels == ["Rent", "Food"]
        assert ds.values == [100.0, 300.0]


class TestParseErrors:
    def test_single_token_is_format_error(self):
        with pytest.raises(FormatError) as exc_info:
            parse_text("T\nS\nOnlyOneToken\n")
        assert exc_info.value.line_number == 3
        assert exc_info.value.kind == ErrorKind.FORMAT

    def test_blank_data_line_is_format_error(self):
        with pytest.raises(FormatError):
            parse_text("T\nS\nRent 500\n\n")

    @pytest.mark.parametrize("line", ["Rent ", "   "])
    def test_line_of_label_and_spaces_is_format_error(self, line):
        with pytest.raises(FormatError):
            parse_text(f"T\nS\n{line}\n")

    def test_non_numeric_value(self):
        with pytest.raises(NumericError) as exc_info:
            parse_text("T\nS\nRent abc\n")
        assert exc_info.value.line_number == 3
        assert exc_info.value.kind == ErrorKind.NUMERIC

    def test_empty_file(self):
        with pytest.raises(FormatError):
            parse_text("")

    def test_missing_source_line(self):
        with pytest.raises(FormatError):
            parse_text("Only a title")

    def test_error_after_valid_lines_returns_nothing(self):
        lines = ["T", "S", "Rent 500", "Food x"]
        with pytest.raises(NumericError):
            parse_lines(lines)


class TestParseValue:
    @pytest.mark.parametrize("token, expected", [
        ("500", 500.0),
        ("-20", -20.0),
        ("+3.5", 3.5),
        (".25", 0.25),
        ("7.", 7.0),
        ("1e3", 1000.0),
        ("2.5E-1", 0.25),
        (" 42\t", 42.0),
    ])
    def test_accepts_real_literals(self, token, expected):
        assert parse_value(token) == expected

    @pytest.mark.parametrize("token", ["abc", "nan", "inf", "-Infinity", "1_000", "1,5", "", "0x10", "."])
    def test_rejects_everything_else(self, token):
        with pytest.raises(NumericError):
            parse_value(token)


class TestReadDataset:
    def test_success(self, budget_file):
        result = read_dataset(budget_file)
        assert result.ok
        assert result.error is None
        assert result.dataset.labels == ["Rent", "Food", "Savings"]

    def test_missing_file_is_io_error(self, tmp_path):
        result = read_dataset(tmp_path / "does-not-exist.txt")
        assert not result.ok
        assert result.dataset is None
        assert result.error.kind == ErrorKind.IO

    def test_directory_is_io_error(self, tmp_path):
        result = read_dataset(tmp_path)
        assert result.error.kind == ErrorKind.IO

    def test_undecodable_file_is_io_error(self, tmp_path):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa\x00garbage")
        result = read_dataset(path)
        assert result.error.kind == ErrorKind.IO

    def test_format_error_is_reported(self, write_data):
        path = write_data("T\nS\nOnlyOneToken\n")
        result = read_dataset(path)
        assert result.error.kind == ErrorKind.FORMAT
        assert result.error.line_number == 3
        assert result.error.path == str(path)

    def test_numeric_error_is_reported(self, write_data):
        result = read_dataset(write_data("T\nS\nRent abc\n"))
        assert result.error.kind == ErrorKind.NUMERIC
