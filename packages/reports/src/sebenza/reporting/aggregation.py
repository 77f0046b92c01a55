"""Revenue, expense and profit aggregation over a reporting period."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

import structlog

from sebenza.models import CENTS, Expense, Invoice
from sebenza.reporting.filters import expenses_in_range, paid_invoices_in_range

logger = structlog.get_logger(__name__)

T = TypeVar("T")

ZERO = Decimal("0")


def sum_amounts(records: Iterable[T], amount_of: Callable[[T], Decimal]) -> Decimal:
    """Sum a money field over records. An empty input sums to zero."""
    return sum((amount_of(r) for r in records), ZERO)


def profit_margin(net_profit: Decimal, total_revenue: Decimal) -> Decimal:
    """Net profit as a percentage of revenue; zero when there is no revenue."""
    if total_revenue <= 0:
        return ZERO
    margin = net_profit / total_revenue * Decimal("100")
    return margin.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class FinancialSummary:
    """Aggregate figures for one reporting period."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal
    invoice_count: int
    expense_count: int

    @property
    def average_invoice(self) -> Decimal:
        if not self.invoice_count:
            return ZERO
        return (self.total_revenue / self.invoice_count).quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def average_expense(self) -> Decimal:
        if not self.expense_count:
            return ZERO
        return (self.total_expenses / self.expense_count).quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def is_profitable(self) -> bool:
        return self.net_profit > 0


def summarize(invoices: Sequence[Invoice], expenses: Sequence[Expense]) -> FinancialSummary:
    """Aggregate already-filtered invoices and expenses.

    Revenue is the sum of invoice totals, expenses the sum of expense amounts.
    Net profit is their exact difference.
    """
    total_revenue = sum_amounts(invoices, lambda invoice: invoice.total)
    total_expenses = sum_amounts(expenses, lambda expense: expense.amount)
    net_profit = total_revenue - total_expenses

    return FinancialSummary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_profit=net_profit,
        profit_margin=profit_margin(net_profit, total_revenue),
        invoice_count=len(invoices),
        expense_count=len(expenses),
    )


def summarize_period(
    invoices: Iterable[Invoice],
    expenses: Iterable[Expense],
    start: date | datetime,
    end: date | datetime,
) -> FinancialSummary:
    """Filter to paid invoices and expenses in [start, end], then aggregate."""
    paid = paid_invoices_in_range(invoices, start, end)
    spent = expenses_in_range(expenses, start, end)
    summary = summarize(paid, spent)

    logger.debug(
        "period_summarized",
        start=str(start),
        end=str(end),
        invoices=summary.invoice_count,
        expenses=summary.expense_count,
        net_profit=str(summary.net_profit),
    )
    return summary


def expenses_by_category(expenses: Iterable[Expense]) -> dict[str, Decimal]:
    """Total expense amount per category, largest first."""
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        key = expense.category.value
        totals[key] = totals.get(key, ZERO) + expense.amount
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))
