"""Pytest configuration and fixtures."""

import os
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

# Set test environment variables before importing settings
os.environ.setdefault("ANTHROPIC_API_KEY", "sk-ant-test")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("GOOGLE_API_KEY", "test-key")

from factories import make_expense, make_invoice  # noqa: E402
from sebenza.models import (  # noqa: E402
    InvoiceStatus,
    Project,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
)


@pytest.fixture
def scenario_invoices():
    """One paid and one draft invoice on the same day."""
    return [
        make_invoice("1000", InvoiceStatus.PAID, invoice_id="inv-1"),
        make_invoice("500", InvoiceStatus.DRAFT, invoice_id="inv-2"),
    ]


@pytest.fixture
def scenario_expenses():
    """A single expense inside June 2024."""
    return [make_expense("300")]


@pytest.fixture
def sample_project():
    return Project(
        id="proj-002",
        name="Durban Port Clearance",
        manager="Bob Vance",
        status=ProjectStatus.AT_RISK,
        completion=40,
        budget=Decimal("12000"),
        spent=Decimal("6000"),
        start_date=date(2023, 3, 1),
        end_date=date(2024, 8, 30),
        client_id="client-2",
        client_name="Innovate LLC",
    )


@pytest.fixture
def sample_tasks():
    return [
        Task(
            id="task-002-2",
            name="Utility Installation",
            assignee="Grace Grader",
            start_date=date(2023, 4, 16),
            due_date=date(2024, 7, 10),
            status=TaskStatus.IN_PROGRESS,
            priority=TaskPriority.URGENT,
            project_id="proj-002",
        ),
        Task(
            id="task-002-1",
            name="Site Clearing and Grading",
            assignee="Frank Formwork",
            start_date=date(2023, 3, 1),
            due_date=date(2023, 4, 15),
            status=TaskStatus.DONE,
            priority=TaskPriority.HIGH,
            project_id="proj-002",
        ),
    ]


@pytest.fixture
def mock_llm_client():
    """A structured-output client that never touches the network."""
    client = AsyncMock()
    client.generate_structured = AsyncMock()
    return client


@pytest.fixture
def ai_report_payload():
    """Valid model output for the financial report flow."""
    return {
        "title": "Profit & Loss Statement",
        "period": "June 1, 2024 - June 30, 2024",
        "summary": "Revenue was strong this month.",
        "total_revenue": 50000,
        "total_expenses": 3200,
        "net_profit": 46800,
        "recommendations": "- Chase the overdue invoice\n* Renegotiate port fees\n\n",
    }
