"""Tests for bank statement CSV import."""

from decimal import Decimal

import pytest

from sebenza.importer import (
    normalize_date,
    parse_amount,
    parse_bank_csv,
    valid_transactions,
)

STATEMENT = """Date,Description,Amount,Reference
2024-06-01,Client payment Global Corp,"$1,250.00",TRX-1
06/03/2024,Fuel for Truck #12,-250.00
06-04-2024,Port fees,-1500
2024/06/05,Toll,-150
2024-06-06,Ok,100
2024-06-07,Zero amount row,0
too,short
"""


class TestNormalizeDate:
    """Tests for statement date formats."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2024-06-01", "2024-06-01"),
            ("06/03/2024", "2024-06-03"),
            ("06-04-2024", "2024-06-04"),
        ],
    )
    def test_supported_formats(self, raw, expected):
        """Test ISO and US date layouts are normalized."""
        assert normalize_date(raw) == expected

    @pytest.mark.parametrize("raw", ["2024/06/05", "06/04-2024", "June 1 2024", ""])
    def test_unsupported_formats(self, raw):
        """Test other date layouts are rejected."""
        assert normalize_date(raw) is None


class TestParseAmount:
    """Tests for amount parsing."""

    def test_currency_formatting_stripped(self):
        """Test dollar signs and thousands separators are removed."""
        assert parse_amount("$1,250.00") == Decimal("1250.00")

    def test_negative(self):
        """Test negative amounts keep their sign."""
        assert parse_amount("-300") == Decimal("-300")

    def test_zero_is_invalid(self):
        """Test a zero amount is invalid."""
        assert parse_amount("0.00") is None

    def test_garbage_is_invalid(self):
        """Test non-numeric text is invalid."""
        assert parse_amount("abc") is None

    @pytest.mark.parametrize("raw", ["sNaN", "NaN", "Infinity", "-inf"])
    def test_non_finite_is_invalid(self, raw):
        """Test NaN and infinite values are invalid."""
        assert parse_amount(raw) is None


class TestParseBankCsv:
    """Tests for parsing whole statements."""

    def test_header_and_short_rows_skipped(self):
        """Test the header and rows with fewer than three columns are dropped."""
        parsed = parse_bank_csv(STATEMENT)

        assert len(parsed) == 6

    def test_credit_and_debit(self):
        """Test the sign of the amount decides the transaction type."""
        parsed = parse_bank_csv(STATEMENT)

        assert parsed[0].type == "credit"
        assert parsed[0].amount == Decimal("1250.00")
        assert parsed[0].reference == "TRX-1"
        assert parsed[1].type == "debit"
        assert parsed[1].amount == Decimal("250.00")
        assert parsed[1].date == "2024-06-03"

    def test_row_errors(self):
        """Test invalid rows keep their errors."""
        parsed = parse_bank_csv(STATEMENT)

        assert parsed[3].errors == ["Invalid date format"]
        assert parsed[4].errors == ["Description too short"]
        assert parsed[5].errors == ["Invalid amount"]
        assert [t.valid for t in parsed] == [True, True, True, False, False, False]

    def test_empty_text(self):
        """Test empty text yields no transactions."""
        assert parse_bank_csv("") == []

    def test_non_finite_amount_flagged(self):
        """Test a NaN amount marks the row invalid instead of failing the parse."""
        parsed = parse_bank_csv(
            "Date,Description,Amount\n"
            "2024-06-01,Fuel top-up,sNaN\n"
            "2024-06-02,Toll road fee,Infinity\n"
        )

        assert [t.errors for t in parsed] == [["Invalid amount"], ["Invalid amount"]]

    def test_source_line_numbers(self):
        """Test each row records its file line, counting skipped rows."""
        parsed = parse_bank_csv(STATEMENT)

        assert [t.line for t in parsed] == [2, 3, 4, 5, 6, 7]

    def test_line_numbers_after_skipped_row(self):
        """Test a short row does not shift the line of later rows."""
        parsed = parse_bank_csv(
            "Date,Description,Amount\n"
            "too,short\n"
            "\n"
            "2024-06-01,Fuel top-up,abc\n"
        )

        assert len(parsed) == 1
        assert parsed[0].line == 4
        assert parsed[0].errors == ["Invalid amount"]


class TestValidTransactions:
    """Tests for building import records."""

    def test_only_valid_rows_tagged_with_account(self):
        """Test invalid rows are excluded and records carry the account id."""
        rows = valid_transactions(parse_bank_csv(STATEMENT), "acct-001")

        assert len(rows) == 3
        assert all(row["bank_account_id"] == "acct-001" for row in rows)
        assert all(row["category"] == "Other Expenses" for row in rows)
        assert rows[2] == {
            "date": "2024-06-04",
            "description": "Port fees",
            "amount": Decimal("1500"),
            "type": "debit",
            "bank_account_id": "acct-001",
            "reference": "",
            "category": "Other Expenses",
        }

    def test_custom_category(self):
        """Test the category can be overridden."""
        rows = valid_transactions(parse_bank_csv(STATEMENT), "acct-001", category="Income")

        assert {row["category"] for row in rows} == {"Income"}
