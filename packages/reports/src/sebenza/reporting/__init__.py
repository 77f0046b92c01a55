"""Period filtering, aggregation and report rendering."""

from sebenza.reporting.aggregation import (
    FinancialSummary,
    expenses_by_category,
    profit_margin,
    sum_amounts,
    summarize,
    summarize_period,
)
from sebenza.reporting.filters import expenses_in_range, filter_by_date, paid_invoices_in_range
from sebenza.reporting.narrative import (
    format_currency,
    format_period,
    profitability_verdict,
    render_narrative,
)
from sebenza.reporting.report import (
    FinancialReport,
    build_financial_report,
    generate_ai_financial_report,
    recommendation_bullets,
)

__all__ = [
    # Filters
    "filter_by_date",
    "paid_invoices_in_range",
    "expenses_in_range",
    # Aggregation
    "FinancialSummary",
    "sum_amounts",
    "profit_margin",
    "summarize",
    "summarize_period",
    "expenses_by_category",
    # Narrative
    "format_currency",
    "format_period",
    "profitability_verdict",
    "render_narrative",
    # Reports
    "FinancialReport",
    "build_financial_report",
    "generate_ai_financial_report",
    "recommendation_bullets",
]
