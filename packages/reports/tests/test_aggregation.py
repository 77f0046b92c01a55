"""Tests for revenue and expense aggregation."""

from datetime import date
from decimal import Decimal

from factories import JUNE_1, JUNE_30, make_expense, make_invoice

from sebenza.models import ExpenseCategory, InvoiceStatus
from sebenza.reporting.aggregation import (
    expenses_by_category,
    profit_margin,
    sum_amounts,
    summarize,
    summarize_period,
)


class TestSummarizePeriod:
    """Tests for filtering plus aggregation over a period."""

    def test_paid_and_draft_scenario(self, scenario_invoices, scenario_expenses):
        """Test only the paid invoice counts toward revenue."""
        summary = summarize_period(scenario_invoices, scenario_expenses, JUNE_1, JUNE_30)

        assert summary.total_revenue == Decimal("1000")
        assert summary.total_expenses == Decimal("300")
        assert summary.net_profit == Decimal("700")
        assert summary.profit_margin == Decimal("70")
        assert summary.invoice_count == 1
        assert summary.expense_count == 1

    def test_empty_period(self):
        """Test an empty period yields all zeros."""
        summary = summarize_period([], [], JUNE_1, JUNE_30)

        assert summary.total_revenue == 0
        assert summary.total_expenses == 0
        assert summary.net_profit == 0
        assert summary.profit_margin == 0
        assert not summary.is_profitable

    def test_total_expenses_matches_in_range_sum(self):
        """Test total expenses equals the sum of in-range amounts only."""
        expenses = [
            make_expense("250.10", date(2024, 6, 2), expense_id="a"),
            make_expense("99.95", date(2024, 6, 29), expense_id="b"),
            make_expense("1000", date(2024, 7, 2), expense_id="c"),
        ]

        summary = summarize_period([], expenses, JUNE_1, JUNE_30)

        expected = sum(
            (e.amount for e in expenses if JUNE_1 <= e.date <= JUNE_30), Decimal("0")
        )
        assert summary.total_expenses == expected == Decimal("350.05")

    def test_net_profit_is_exact_difference(self):
        """Test net profit is revenue minus expenses with no rounding drift."""
        invoices = [make_invoice("0.10", invoice_id=f"inv-{i}") for i in range(3)]
        expenses = [make_expense("0.30")]

        summary = summarize_period(invoices, expenses, JUNE_1, JUNE_30)

        assert summary.total_revenue == Decimal("0.30")
        assert summary.net_profit == summary.total_revenue - summary.total_expenses
        assert summary.net_profit == 0


class TestSummarize:
    """Tests for aggregating pre-filtered records."""

    def test_sums_records_as_given(self):
        """Test summarize does not re-filter by status."""
        invoices = [make_invoice("200", InvoiceStatus.SENT)]

        summary = summarize(invoices, [])

        assert summary.total_revenue == Decimal("200")

    def test_loss_margin_is_negative(self):
        """Test a loss produces a negative margin."""
        summary = summarize([make_invoice("1000")], [make_expense("1500")])

        assert summary.net_profit == Decimal("-500")
        assert summary.profit_margin == Decimal("-50.00")

    def test_averages(self):
        """Test average invoice and expense values."""
        summary = summarize(
            [make_invoice("100"), make_invoice("200")],
            [make_expense("10"), make_expense("20"), make_expense("40")],
        )

        assert summary.average_invoice == Decimal("150.00")
        assert summary.average_expense == Decimal("23.33")

    def test_averages_zero_without_records(self):
        """Test averages are zero when nothing was counted."""
        summary = summarize([], [])

        assert summary.average_invoice == 0
        assert summary.average_expense == 0


class TestProfitMargin:
    """Tests for the margin guard."""

    def test_zero_revenue_margin_is_zero(self):
        """Test zero revenue never divides."""
        assert profit_margin(Decimal("-300"), Decimal("0")) == 0

    def test_margin_rounded_to_cents(self):
        """Test margin is quantized to two places."""
        assert profit_margin(Decimal("1"), Decimal("3")) == Decimal("33.33")


class TestHelpers:
    """Tests for sum and category helpers."""

    def test_sum_amounts_empty(self):
        """Test an empty sum is a Decimal zero."""
        total = sum_amounts([], lambda e: e.amount)

        assert total == Decimal("0")
        assert isinstance(total, Decimal)

    def test_expenses_by_category_sorted_descending(self):
        """Test category totals are grouped and ordered largest first."""
        expenses = [
            make_expense("250", category=ExpenseCategory.MATERIALS),
            make_expense("800", category=ExpenseCategory.LABOR),
            make_expense("500", category=ExpenseCategory.MATERIALS),
        ]

        totals = expenses_by_category(expenses)

        assert list(totals) == ["Labor", "Materials"]
        assert totals["Materials"] == Decimal("750")
