"""Financial report entry points: local narrative report and AI-written report."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog
from pydantic import BaseModel

from sebenza.config import get_settings
from sebenza.flows.base import StructuredClient
from sebenza.flows.financial_report import AIFinancialReport, generate_financial_report
from sebenza.reporting.aggregation import summarize_period
from sebenza.reporting.filters import paid_invoices_in_range
from sebenza.reporting.narrative import render_narrative

if TYPE_CHECKING:
    from sebenza.repository import ReportRepository

logger = structlog.get_logger(__name__)

_BULLET_RE = re.compile(r"^(?:•|-|\*)\s*")


class FinancialReport(BaseModel):
    """Locally computed Profit & Loss report."""

    summary: str
    total_revenue: Decimal
    total_expenses: Decimal
    net_profit: Decimal
    profit_margin: Decimal


def build_financial_report(
    repository: ReportRepository,
    start: date | datetime,
    end: date | datetime,
    currency_symbol: str | None = None,
) -> FinancialReport:
    """Aggregate paid revenue and expenses in [start, end] and narrate them."""
    symbol = currency_symbol if currency_symbol is not None else get_settings().currency_symbol
    summary = summarize_period(
        repository.list_invoices(start, end),
        repository.list_expenses(start, end),
        start,
        end,
    )

    logger.info(
        "report_built",
        start=str(start),
        end=str(end),
        total_revenue=str(summary.total_revenue),
        total_expenses=str(summary.total_expenses),
    )

    return FinancialReport(
        summary=render_narrative(summary, start, end, currency_symbol=symbol),
        total_revenue=summary.total_revenue,
        total_expenses=summary.total_expenses,
        net_profit=summary.net_profit,
        profit_margin=summary.profit_margin,
    )


async def generate_ai_financial_report(
    repository: ReportRepository,
    start: date | datetime,
    end: date | datetime,
    client: StructuredClient,
) -> AIFinancialReport:
    """Filter the period's records and let the model write the report."""
    invoices = paid_invoices_in_range(repository.list_invoices(start, end), start, end)
    expenses = repository.list_expenses(start, end)

    logger.info(
        "ai_report_requested",
        start=str(start),
        end=str(end),
        invoices=len(invoices),
        expenses=len(expenses),
    )
    return await generate_financial_report(client, start, end, invoices, expenses)


def recommendation_bullets(recommendations: str) -> list[str]:
    """Split markdown recommendations into clean bullet strings."""
    bullets = []
    for line in recommendations.splitlines():
        cleaned = _BULLET_RE.sub("", line.strip())
        if cleaned:
            bullets.append(cleaned)
    return bullets
