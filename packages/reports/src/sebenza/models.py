"""Domain records for projects, tasks, invoices and expenses.

Money is held as ``Decimal`` throughout. Records are frozen: the reporting
pipeline reads them and never mutates them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

CENTS = Decimal("0.01")


class InvoiceStatus(str, Enum):
    """Lifecycle states of an invoice."""

    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"
    PARTIAL = "Partial"


class ExpenseCategory(str, Enum):
    """Expense categories used on job costing."""

    MATERIALS = "Materials"
    LABOR = "Labor"
    PERMITS = "Permits"
    SUBCONTRACTOR = "Subcontractor"
    OTHER = "Other"


class ProjectStatus(str, Enum):
    """Health status of a project."""

    ON_TRACK = "On Track"
    AT_RISK = "At Risk"
    OFF_TRACK = "Off Track"


class TaskStatus(str, Enum):
    """Progress status of a task."""

    DONE = "Done"
    IN_PROGRESS = "In Progress"
    TO_DO = "To Do"


class TaskPriority(str, Enum):
    """Priority of a task."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"


def invoice_total(subtotal: Decimal, tax_percent: Decimal, discount: Decimal) -> Decimal:
    """Return the invoice total: subtotal plus percentage tax, less a fixed discount."""
    total = subtotal * (Decimal("1") + tax_percent / Decimal("100")) - discount
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class LineItem:
    """A single quantity x unit price entry on an invoice."""

    id: str
    description: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def total(self) -> Decimal:
        return (self.quantity * self.unit_price).quantize(CENTS, rounding=ROUND_HALF_UP)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "quantity": float(self.quantity),
            "unit_price": float(self.unit_price),
            "total": float(self.total),
        }


@dataclass(frozen=True)
class Invoice:
    """A client invoice. Only paid invoices count as realized revenue."""

    id: str
    client_id: str
    project_id: str
    subtotal: Decimal
    tax: Decimal  # percentage
    discount: Decimal  # fixed amount
    total: Decimal
    issue_date: date
    due_date: date
    status: InvoiceStatus
    line_items: tuple[LineItem, ...] = ()
    client_name: str = ""
    project_name: str = ""
    notes: str | None = None
    terms: str | None = None
    is_recurring: bool = False
    recurring_interval: str | None = None  # "days", "weeks" or "months"
    recurring_period: int | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == InvoiceStatus.PAID

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "client_id": self.client_id,
            "client_name": self.client_name,
            "project_id": self.project_id,
            "project_name": self.project_name,
            "line_items": [item.to_dict() for item in self.line_items],
            "subtotal": float(self.subtotal),
            "tax": float(self.tax),
            "discount": float(self.discount),
            "total": float(self.total),
            "issue_date": self.issue_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class Expense:
    """A cost booked against a project."""

    id: str
    description: str
    amount: Decimal
    category: ExpenseCategory
    date: date
    project_id: str
    project_name: str = ""
    is_billable: bool = False
    is_recurring: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category.value,
            "date": self.date.isoformat(),
            "project_id": self.project_id,
            "project_name": self.project_name,
            "is_billable": self.is_billable,
            "is_recurring": self.is_recurring,
        }


@dataclass(frozen=True)
class Task:
    """A unit of work on a project."""

    id: str
    name: str
    assignee: str
    start_date: date
    due_date: date
    status: TaskStatus
    priority: TaskPriority
    project_id: str
    dependencies: tuple[str, ...] = ()

    def is_overdue(self, today: date) -> bool:
        return self.status != TaskStatus.DONE and self.due_date < today

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "assignee": self.assignee,
            "start_date": self.start_date.isoformat(),
            "due_date": self.due_date.isoformat(),
            "status": self.status.value,
            "priority": self.priority.value,
            "project_id": self.project_id,
            "dependencies": list(self.dependencies),
        }


@dataclass(frozen=True)
class Project:
    """A client project with budget tracking."""

    id: str
    name: str
    manager: str
    status: ProjectStatus
    completion: int  # percent
    budget: Decimal
    spent: Decimal
    start_date: date
    end_date: date
    client_id: str
    client_name: str = ""

    @property
    def remaining_budget(self) -> Decimal:
        return self.budget - self.spent

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "manager": self.manager,
            "status": self.status.value,
            "completion": self.completion,
            "budget": float(self.budget),
            "spent": float(self.spent),
            "remaining_budget": float(self.remaining_budget),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "client_id": self.client_id,
            "client_name": self.client_name,
        }
