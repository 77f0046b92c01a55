"""AI-written Profit & Loss report over paid invoices and expenses."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date, datetime

from pydantic import BaseModel, Field

from sebenza.flows.base import PromptFlow, StructuredClient
from sebenza.models import Expense, Invoice


class FinancialReportInput(BaseModel):
    report_data: str = Field(
        description="A JSON string containing filtered invoices and expenses for the period."
    )
    start_date: str = Field(description="The start date of the report period in ISO format.")
    end_date: str = Field(description="The end date of the report period in ISO format.")


class AIFinancialReport(BaseModel):
    """Model-written Profit & Loss report."""

    title: str = Field(description="The title of the report, e.g. 'Profit & Loss Statement'.")
    period: str = Field(
        description="The reporting period, e.g. 'January 1, 2024 - June 30, 2024'."
    )
    summary: str = Field(
        description="A narrative summary of financial performance, 2-3 paragraphs long."
    )
    total_revenue: float = Field(description="The total revenue from paid invoices.")
    total_expenses: float = Field(description="The total of all expenses.")
    net_profit: float = Field(description="The net profit (revenue minus expenses).")
    recommendations: str = Field(
        description="Actionable recommendations as a markdown bulleted list using '-' or '*'."
    )


SYSTEM_PROMPT = (
    "You are an expert financial analyst for a construction and logistics "
    "project management company."
)

TEMPLATE = """Generate a clear and insightful Profit & Loss style report from the financial data below.

The report is for the period from {start_date} to {end_date}.

Financial data for the period, in JSON format:
{report_data}

Analyze the invoices and expenses. For revenue, only consider invoices with a status of 'Paid'.
Calculate the total revenue, total expenses, and the resulting net profit.

Provide a concise narrative summary of the company's performance, highlighting key trends or
significant figures, and a few actionable recommendations as a bulleted list.

The 'period' field should be a human-readable string like 'January 1, 2024 - June 30, 2024'."""

financial_report_flow: PromptFlow[FinancialReportInput, AIFinancialReport] = PromptFlow(
    name="generate_financial_report",
    system_prompt=SYSTEM_PROMPT,
    template=TEMPLATE,
    input_model=FinancialReportInput,
    output_model=AIFinancialReport,
)


def build_report_data(invoices: Sequence[Invoice], expenses: Sequence[Expense]) -> str:
    """Serialize the slice of invoices and expenses the model needs."""
    return json.dumps({
        "invoices": [
            {
                "date": invoice.issue_date.isoformat(),
                "amount": float(invoice.total),
                "status": invoice.status.value,
            }
            for invoice in invoices
        ],
        "expenses": [
            {
                "date": expense.date.isoformat(),
                "amount": float(expense.amount),
                "category": expense.category.value,
            }
            for expense in expenses
        ],
    })


async def generate_financial_report(
    client: StructuredClient,
    start: date | datetime,
    end: date | datetime,
    invoices: Sequence[Invoice],
    expenses: Sequence[Expense],
) -> AIFinancialReport:
    """Ask the model for a P&L report over already-filtered records."""
    return await financial_report_flow.run(
        client,
        {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "report_data": build_report_data(invoices, expenses),
        },
    )
