"""Plain-text Profit & Loss narrative rendered from a FinancialSummary."""

from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from sebenza.models import CENTS
from sebenza.reporting.aggregation import FinancialSummary

PROFITABLE = "Profitable"
BREAK_EVEN = "Break-even"
LOSS = "Loss"


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format money with thousands separators, e.g. ``-$1,250.00``."""
    rounded = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{abs(rounded):,.2f}"


def format_period(start: date | datetime, end: date | datetime) -> str:
    """Human-readable period such as ``June 1, 2024 - June 30, 2024``."""
    return f"{start:%B} {start.day}, {start.year} - {end:%B} {end.day}, {end.year}"


def profitability_verdict(net_profit: Decimal) -> str:
    if net_profit > 0:
        return PROFITABLE
    if net_profit == 0:
        return BREAK_EVEN
    return LOSS


def _insights(summary: FinancialSummary, symbol: str) -> list[str]:
    verdict = profitability_verdict(summary.net_profit)
    if verdict == PROFITABLE:
        return [
            f"Revenue covered expenses with {format_currency(summary.net_profit, symbol)} "
            f"to spare, a margin of {summary.profit_margin}%.",
            "Keep collecting on sent and overdue invoices to sustain cash flow.",
        ]
    if verdict == BREAK_EVEN:
        return [
            "Revenue exactly matched expenses; there is no buffer for cost overruns.",
            "Prioritize billing completed work and review upcoming expenses.",
        ]
    return [
        f"Expenses exceeded paid revenue by {format_currency(-summary.net_profit, symbol)}.",
        "Review the largest expense categories and follow up on unpaid invoices.",
    ]


def render_narrative(
    summary: FinancialSummary,
    start: date | datetime,
    end: date | datetime,
    currency_symbol: str = "$",
) -> str:
    """Render the aggregates as a fixed multi-paragraph report."""
    verdict = profitability_verdict(summary.net_profit)

    def money(amount: Decimal) -> str:
        return format_currency(amount, currency_symbol)

    paragraphs = [
        f"Financial summary for {format_period(start, end)}.",
        (
            f"Total revenue from {summary.invoice_count} paid invoice(s) was "
            f"{money(summary.total_revenue)} (average {money(summary.average_invoice)}). "
            f"Total expenses across {summary.expense_count} expense(s) were "
            f"{money(summary.total_expenses)} (average {money(summary.average_expense)})."
        ),
        (
            f"Net result: {money(summary.net_profit)} ({verdict}), "
            f"with a profit margin of {summary.profit_margin}%."
        ),
        "Key insights:\n" + "\n".join(f"- {line}" for line in _insights(summary, currency_symbol)),
    ]
    return "\n\n".join(paragraphs)
