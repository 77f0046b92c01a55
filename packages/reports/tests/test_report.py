"""Tests for the financial report entry points."""

import json
from decimal import Decimal

import pytest
from factories import JUNE_1, JUNE_30, make_expense, make_invoice

from sebenza.errors import FlowOutputError
from sebenza.models import InvoiceStatus
from sebenza.reporting import (
    FinancialReport,
    build_financial_report,
    generate_ai_financial_report,
    recommendation_bullets,
)
from sebenza.repository import InMemoryRepository, sample_repository


class TestBuildFinancialReport:
    """Tests for the local report path."""

    def test_scenario_report(self, scenario_invoices, scenario_expenses):
        """Test the paid/draft scenario figures and narrative."""
        repository = InMemoryRepository(invoices=scenario_invoices, expenses=scenario_expenses)

        report = build_financial_report(repository, JUNE_1, JUNE_30, currency_symbol="$")

        assert isinstance(report, FinancialReport)
        assert report.total_revenue == Decimal("1000")
        assert report.total_expenses == Decimal("300")
        assert report.net_profit == Decimal("700")
        assert report.profit_margin == Decimal("70")
        assert "Profitable" in report.summary

    def test_net_profit_invariant_on_sample(self):
        """Test net profit equals revenue minus expenses on the sample data."""
        report = build_financial_report(sample_repository(), JUNE_1, JUNE_30)

        assert report.total_revenue == Decimal("50000")
        assert report.total_expenses == Decimal("3200")
        assert report.net_profit == report.total_revenue - report.total_expenses
        assert report.profit_margin == Decimal("93.60")

    def test_empty_repository(self):
        """Test an empty period reports zeros and break-even."""
        report = build_financial_report(InMemoryRepository(), JUNE_1, JUNE_30)

        assert report.total_revenue == 0
        assert report.profit_margin == 0
        assert "Break-even" in report.summary

    def test_uses_configured_currency_symbol(self, monkeypatch):
        """Test the currency symbol defaults to settings."""
        from sebenza.config import get_settings

        monkeypatch.setenv("REPORT_CURRENCY_SYMBOL", "R")
        get_settings.cache_clear()
        try:
            report = build_financial_report(
                InMemoryRepository(invoices=[make_invoice("1000")]), JUNE_1, JUNE_30
            )
        finally:
            get_settings.cache_clear()

        assert "R1,000.00" in report.summary


class TestGenerateAIFinancialReport:
    """Tests for the AI-delegated report path."""

    @pytest.mark.asyncio
    async def test_only_paid_invoices_sent_to_model(self, mock_llm_client, ai_report_payload):
        """Test unpaid invoices are filtered out before serialization."""
        mock_llm_client.generate_structured.return_value = ai_report_payload
        repository = InMemoryRepository(
            invoices=[
                make_invoice("1000", InvoiceStatus.PAID, invoice_id="paid"),
                make_invoice("500", InvoiceStatus.OVERDUE, invoice_id="overdue"),
            ],
            expenses=[make_expense("300")],
        )

        report = await generate_ai_financial_report(repository, JUNE_1, JUNE_30, mock_llm_client)

        assert report.title == "Profit & Loss Statement"
        prompt = mock_llm_client.generate_structured.await_args.args[1]
        data_line = next(line for line in prompt.splitlines() if line.startswith("{"))
        data = json.loads(data_line)
        assert [i["amount"] for i in data["invoices"]] == [1000.0]
        assert len(data["expenses"]) == 1

    @pytest.mark.asyncio
    async def test_failure_propagates(self, mock_llm_client):
        """Test an invalid model answer rejects the whole report."""
        mock_llm_client.generate_structured.return_value = {"title": "Partial"}

        with pytest.raises(FlowOutputError):
            await generate_ai_financial_report(
                InMemoryRepository(), JUNE_1, JUNE_30, mock_llm_client
            )


class TestRecommendationBullets:
    """Tests for splitting model recommendations."""

    def test_strips_markers_and_blanks(self):
        """Test dash, star and bullet markers are removed."""
        text = "- Chase overdue invoices\n* Cut idle truck time\n\n• Review port fees\nPlain line"

        assert recommendation_bullets(text) == [
            "Chase overdue invoices",
            "Cut idle truck time",
            "Review port fees",
            "Plain line",
        ]

    def test_empty(self):
        """Test empty text yields no bullets."""
        assert recommendation_bullets("") == []
