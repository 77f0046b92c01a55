"""Date-range selection of invoices and expenses."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import TypeVar

from sebenza.models import Expense, Invoice

T = TypeVar("T")


def _as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def filter_by_date(
    records: Iterable[T],
    start: date | datetime,
    end: date | datetime,
    date_of: Callable[[T], date],
) -> list[T]:
    """Return the records whose date falls inside the inclusive [start, end] window.

    A window with ``start > end`` selects nothing.
    """
    start_day = _as_date(start)
    end_day = _as_date(end)
    return [r for r in records if start_day <= _as_date(date_of(r)) <= end_day]


def paid_invoices_in_range(
    invoices: Iterable[Invoice], start: date | datetime, end: date | datetime
) -> list[Invoice]:
    """Select paid invoices issued inside the window."""
    paid = (invoice for invoice in invoices if invoice.is_paid)
    return filter_by_date(paid, start, end, lambda invoice: invoice.issue_date)


def expenses_in_range(
    expenses: Iterable[Expense], start: date | datetime, end: date | datetime
) -> list[Expense]:
    """Select expenses dated inside the window, whatever their category."""
    return filter_by_date(expenses, start, end, lambda expense: expense.date)
