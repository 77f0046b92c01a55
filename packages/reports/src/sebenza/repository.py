"""Read-only data access for reporting.

The reporting pipeline only talks to ``ReportRepository``. The in-memory
implementation is fed either from the bundled sample dataset or from a YAML
file with top-level ``invoices``, ``expenses``, ``projects`` and ``tasks``
lists.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Protocol, TypeVar

import structlog
import yaml  # type: ignore[import-untyped]

from sebenza.config import get_settings
from sebenza.errors import DatasetError
from sebenza.models import (
    Expense,
    ExpenseCategory,
    Invoice,
    InvoiceStatus,
    LineItem,
    Project,
    ProjectStatus,
    Task,
    TaskPriority,
    TaskStatus,
    invoice_total,
)
from sebenza.reporting.filters import filter_by_date

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class ReportRepository(Protocol):
    """Narrow storage interface used by the reporting pipeline."""

    def list_invoices(self, start: date | datetime, end: date | datetime) -> list[Invoice]: ...

    def list_expenses(self, start: date | datetime, end: date | datetime) -> list[Expense]: ...

    def list_projects(self) -> list[Project]: ...

    def list_tasks(self) -> list[Task]: ...


class InMemoryRepository:
    """Repository backed by immutable in-memory collections."""

    def __init__(
        self,
        invoices: Iterable[Invoice] = (),
        expenses: Iterable[Expense] = (),
        projects: Iterable[Project] = (),
        tasks: Iterable[Task] = (),
    ):
        self._invoices = tuple(invoices)
        self._expenses = tuple(expenses)
        self._projects = tuple(projects)
        self._tasks = tuple(tasks)

    def list_invoices(self, start: date | datetime, end: date | datetime) -> list[Invoice]:
        """Invoices issued in [start, end], any status."""
        return filter_by_date(self._invoices, start, end, lambda invoice: invoice.issue_date)

    def list_expenses(self, start: date | datetime, end: date | datetime) -> list[Expense]:
        """Expenses dated in [start, end]."""
        return filter_by_date(self._expenses, start, end, lambda expense: expense.date)

    def list_projects(self) -> list[Project]:
        return list(self._projects)

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)


# ============================================================================
# YAML DATASETS
# ============================================================================


def _money(value: Any) -> Decimal:
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"invalid amount {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


def _day(value: Any) -> date:
    # YAML already parses unquoted ISO dates
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_invoice(item: dict[str, Any]) -> Invoice:
    line_items = tuple(
        LineItem(
            id=str(li["id"]),
            description=str(li["description"]),
            quantity=_money(li.get("quantity", 1)),
            unit_price=_money(li["unit_price"]),
        )
        for li in item.get("line_items", [])
    )
    subtotal = (
        _money(item["subtotal"])
        if "subtotal" in item
        else sum((li.total for li in line_items), Decimal("0"))
    )
    tax = _money(item.get("tax", 0))
    discount = _money(item.get("discount", 0))
    total = _money(item["total"]) if "total" in item else invoice_total(subtotal, tax, discount)

    return Invoice(
        id=str(item["id"]),
        client_id=str(item["client_id"]),
        project_id=str(item["project_id"]),
        subtotal=subtotal,
        tax=tax,
        discount=discount,
        total=total,
        issue_date=_day(item["issue_date"]),
        due_date=_day(item["due_date"]),
        status=InvoiceStatus(item["status"]),
        line_items=line_items,
        client_name=item.get("client_name", ""),
        project_name=item.get("project_name", ""),
        notes=item.get("notes"),
        terms=item.get("terms"),
        is_recurring=bool(item.get("is_recurring", False)),
        recurring_interval=item.get("recurring_interval"),
        recurring_period=item.get("recurring_period"),
    )


def _parse_expense(item: dict[str, Any]) -> Expense:
    return Expense(
        id=str(item["id"]),
        description=str(item["description"]),
        amount=_money(item["amount"]),
        category=ExpenseCategory(item.get("category", "Other")),
        date=_day(item["date"]),
        project_id=str(item["project_id"]),
        project_name=item.get("project_name", ""),
        is_billable=bool(item.get("is_billable", False)),
        is_recurring=bool(item.get("is_recurring", False)),
    )


def _parse_project(item: dict[str, Any]) -> Project:
    return Project(
        id=str(item["id"]),
        name=str(item["name"]),
        manager=str(item["manager"]),
        status=ProjectStatus(item["status"]),
        completion=int(item.get("completion", 0)),
        budget=_money(item.get("budget", 0)),
        spent=_money(item.get("spent", 0)),
        start_date=_day(item["start_date"]),
        end_date=_day(item["end_date"]),
        client_id=str(item["client_id"]),
        client_name=item.get("client_name", ""),
    )


def _parse_task(item: dict[str, Any]) -> Task:
    return Task(
        id=str(item["id"]),
        name=str(item["name"]),
        assignee=str(item["assignee"]),
        start_date=_day(item["start_date"]),
        due_date=_day(item["due_date"]),
        status=TaskStatus(item["status"]),
        priority=TaskPriority(item.get("priority", "Medium")),
        project_id=str(item["project_id"]),
        dependencies=tuple(item.get("dependencies", [])),
    )


def _parse_section(
    data: dict[str, Any],
    key: str,
    parse: Callable[[dict[str, Any]], T],
    source: str,
) -> list[T]:
    raw = data.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise DatasetError(source, f"{key} must be a list")

    parsed: list[T] = []
    for idx, item in enumerate(raw):
        if not isinstance(item, dict):
            raise DatasetError(source, f"{key}[{idx}] must be a mapping")
        try:
            parsed.append(parse(item))
        except (KeyError, TypeError, ValueError) as exc:
            raise DatasetError(source, f"{key}[{idx}] is invalid: {exc}") from exc
    return parsed


def load_dataset(path: str | Path) -> InMemoryRepository:
    """Load a YAML dataset into an in-memory repository."""
    path = Path(path)
    if not path.exists():
        raise DatasetError(str(path), "dataset file not found")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise DatasetError(path.name, f"invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise DatasetError(path.name, "top level must be a mapping")

    repository = InMemoryRepository(
        invoices=_parse_section(data, "invoices", _parse_invoice, path.name),
        expenses=_parse_section(data, "expenses", _parse_expense, path.name),
        projects=_parse_section(data, "projects", _parse_project, path.name),
        tasks=_parse_section(data, "tasks", _parse_task, path.name),
    )
    logger.info("dataset_loaded", path=str(path))
    return repository


# ============================================================================
# SAMPLE DATA
# ============================================================================


def sample_repository() -> InMemoryRepository:
    """The bundled logistics sample dataset."""
    # (id, name, assignee, start, due, status, priority, project, dependencies)
    task_rows = [
        ("task-001-1", "Foundation & Structural Work", "Bob Builder",
         date(2023, 1, 15), date(2023, 4, 30), "Done", "High", "proj-001", ()),
        ("task-001-2", "Exterior Cladding", "Charlie Crane",
         date(2023, 5, 1), date(2024, 8, 14), "In Progress", "High", "proj-001", ("task-001-1",)),
        ("task-001-3", "Interior Wiring and Plumbing", "Jane Doe",
         date(2023, 8, 16), date(2024, 9, 14), "To Do", "Medium", "proj-001", ("task-001-2",)),
        ("task-001-4", "Finishing and Landscaping", "Eve Electric",
         date(2023, 12, 1), date(2024, 12, 15), "To Do", "Low", "proj-001", ("task-001-3",)),
        ("task-002-1", "Site Clearing and Grading", "Frank Formwork",
         date(2023, 3, 1), date(2023, 4, 15), "Done", "High", "proj-002", ()),
        ("task-002-2", "Utility Installation", "Grace Grader",
         date(2023, 4, 16), date(2024, 7, 10), "In Progress", "Urgent", "proj-002", ()),
        ("task-002-3", "Playground and Pavilion", "Jane Doe",
         date(2023, 7, 1), date(2024, 7, 22), "To Do", "Medium", "proj-002", ()),
        ("task-004-1", "Finalize architectural plans", "Jane Doe",
         date(2024, 6, 1), date(2024, 7, 13), "To Do", "Urgent", "proj-004", ()),
        ("task-004-2", "Client sign-off on materials", "Alice Johnson",
         date(2024, 6, 5), date(2024, 7, 25), "In Progress", "High", "proj-004", ()),
    ]
    tasks = [
        Task(
            id=tid, name=name, assignee=assignee, start_date=start, due_date=due,
            status=TaskStatus(status), priority=TaskPriority(priority),
            project_id=project_id, dependencies=deps,
        )
        for tid, name, assignee, start, due, status, priority, project_id, deps in task_rows
    ]

    projects = [
        Project("proj-001", "Johannesburg to Cape Town", "Alice Johnson", ProjectStatus.ON_TRACK,
                65, Decimal("50000"), Decimal("32500"), date(2023, 1, 15), date(2024, 12, 31),
                "client-1", "Global Corp"),
        Project("proj-002", "Durban Port Clearance", "Bob Vance", ProjectStatus.AT_RISK,
                40, Decimal("12000"), Decimal("6000"), date(2023, 3, 1), date(2024, 8, 30),
                "client-2", "Innovate LLC"),
        Project("proj-003", "Cross-Border to Zimbabwe", "Carol Danvers", ProjectStatus.OFF_TRACK,
                20, Decimal("150000"), Decimal("45000"), date(2023, 6, 1), date(2025, 5, 31),
                "client-4", "Quantum Solutions"),
        Project("proj-004", "Local Warehouse Distribution", "Alice Johnson", ProjectStatus.ON_TRACK,
                85, Decimal("85000"), Decimal("72250"), date(2022, 9, 1), date(2024, 6, 30),
                "client-1", "Global Corp"),
    ]

    # (id, client, client name, project, project name, line description,
    #  amount, tax %, discount, issued, due, status)
    invoice_rows = [
        ("inv-001", "client-1", "Global Corp", "proj-001", "Johannesburg to Cape Town",
         "Phase 1 Payment", "50000", "0", "0", date(2024, 6, 1), date(2024, 7, 1), "Paid"),
        ("inv-002", "client-2", "Innovate LLC", "proj-002", "Durban Port Clearance",
         "Consulting Services", "75000", "10", "5000", date(2024, 6, 5), date(2024, 7, 5), "Sent"),
        ("inv-003", "client-1", "Global Corp", "proj-004", "Local Warehouse Distribution",
         "Full Project Billing", "120000", "0", "0", date(2024, 5, 1), date(2024, 6, 20), "Overdue"),
        ("inv-004", "client-4", "Quantum Solutions", "proj-002", "Durban Port Clearance",
         "Initial Mobilization", "35000", "0", "0", date(2024, 6, 10), date(2024, 7, 10), "Draft"),
        ("inv-005", "client-2", "Innovate LLC", "proj-002", "Durban Port Clearance",
         "Retainer - June", "10000", "0", "0", date(2024, 6, 15), date(2024, 7, 15), "Partial"),
    ]
    invoices = []
    for idx, row in enumerate(invoice_rows, start=1):
        inv_id, client_id, client_name, project_id, project_name, desc, amount, tax, discount, issued, due, status = row
        subtotal = Decimal(amount)
        invoices.append(
            Invoice(
                id=inv_id,
                client_id=client_id,
                client_name=client_name,
                project_id=project_id,
                project_name=project_name,
                line_items=(LineItem(f"li-inv-{idx}", desc, Decimal("1"), subtotal),),
                subtotal=subtotal,
                tax=Decimal(tax),
                discount=Decimal(discount),
                total=invoice_total(subtotal, Decimal(tax), Decimal(discount)),
                issue_date=issued,
                due_date=due,
                status=InvoiceStatus(status),
                is_recurring=inv_id == "inv-005",
                recurring_interval="days" if inv_id == "inv-005" else None,
                recurring_period=30 if inv_id == "inv-005" else None,
            )
        )

    expenses = [
        Expense("exp-001", "Fuel for Truck #12", Decimal("250"), ExpenseCategory.MATERIALS,
                date(2024, 6, 15), "proj-001", "Johannesburg to Cape Town"),
        Expense("exp-002", "Port Handling Fees", Decimal("1500"), ExpenseCategory.SUBCONTRACTOR,
                date(2024, 6, 18), "proj-002", "Durban Port Clearance", is_billable=True),
        Expense("exp-003", "Warehouse Supplies", Decimal("500"), ExpenseCategory.MATERIALS,
                date(2024, 6, 20), "proj-004", "Local Warehouse Distribution"),
        Expense("exp-004", "Border Crossing Toll", Decimal("150"), ExpenseCategory.PERMITS,
                date(2024, 6, 22), "proj-003", "Cross-Border to Zimbabwe"),
        Expense("exp-005", "Driver Overtime", Decimal("800"), ExpenseCategory.LABOR,
                date(2024, 6, 25), "proj-004", "Local Warehouse Distribution"),
    ]

    return InMemoryRepository(invoices=invoices, expenses=expenses, projects=projects, tasks=tasks)


def get_repository() -> InMemoryRepository:
    """Repository configured by SEBENZA_DATA_FILE, else the sample dataset."""
    settings = get_settings()
    if settings.data_file is not None:
        return load_dataset(settings.data_file)
    return sample_repository()
