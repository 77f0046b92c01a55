"""Bank statement CSV import.

Rows are ``date, description, amount[, reference]`` after a header row.
Every row is kept with its validation errors so the caller can show what
would be rejected; only valid rows are turned into import records.
"""

from __future__ import annotations

import csv
import io
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Literal

import structlog

logger = structlog.get_logger(__name__)

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
US_DATE_RE = re.compile(r"^(\d{2})[/-](\d{2})[/-](\d{4})$")

DEFAULT_CATEGORY = "Other Expenses"


@dataclass
class ParsedTransaction:
    """One statement row after parsing and validation."""

    date: str
    description: str
    amount: Decimal
    type: Literal["credit", "debit"]
    reference: str = ""
    errors: list[str] = field(default_factory=list)
    line: int = 0

    @property
    def valid(self) -> bool:
        return not self.errors


def normalize_date(raw: str) -> str | None:
    """Return the date as YYYY-MM-DD, or None if the format is unsupported.

    Accepts YYYY-MM-DD, MM/DD/YYYY and MM-DD-YYYY.
    """
    if ISO_DATE_RE.match(raw):
        return raw
    match = US_DATE_RE.match(raw)
    if match is None or raw[2] != raw[5]:
        return None
    month, day, year = match.groups()
    return f"{year}-{month}-{day}"


def parse_amount(raw: str) -> Decimal | None:
    """Parse an amount like ``$1,250.00`` or ``-300``. Zero counts as invalid."""
    try:
        amount = Decimal(raw.replace(",", "").replace("$", ""))
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount == 0:
        return None
    return amount


def _parse_row(columns: list[str], line: int) -> ParsedTransaction:
    errors: list[str] = []
    raw_date, description, raw_amount = columns[0], columns[1], columns[2]
    reference = columns[3] if len(columns) > 3 else ""

    date = normalize_date(raw_date)
    if date is None:
        errors.append("Invalid date format")
        date = raw_date

    if len(description) < 3:
        errors.append("Description too short")

    amount = parse_amount(raw_amount)
    if amount is None:
        errors.append("Invalid amount")
        amount = Decimal("0")

    return ParsedTransaction(
        date=date,
        description=description,
        amount=abs(amount),
        type="credit" if amount > 0 else "debit",
        reference=reference,
        errors=errors,
        line=line,
    )


def parse_bank_csv(text: str) -> list[ParsedTransaction]:
    """Parse statement CSV text, skipping the header and short rows.

    Each transaction records the file line it came from.
    """
    reader = csv.reader(io.StringIO(text))

    transactions: list[ParsedTransaction] = []
    header_seen = False
    skipped = 0
    for row in reader:
        columns = [col.strip().replace('"', "") for col in row]
        if not any(columns):
            continue
        if not header_seen:
            header_seen = True
            continue
        if len(columns) < 3:
            skipped += 1
            continue
        transactions.append(_parse_row(columns, reader.line_num))

    logger.info(
        "bank_csv_parsed",
        rows=len(transactions),
        valid=sum(1 for t in transactions if t.valid),
        skipped=skipped,
    )
    return transactions


def valid_transactions(
    parsed: list[ParsedTransaction],
    bank_account_id: str,
    category: str = DEFAULT_CATEGORY,
) -> list[dict[str, Any]]:
    """Import records for the valid rows, tagged with the target bank account."""
    return [
        {
            "date": t.date,
            "description": t.description,
            "amount": t.amount,
            "type": t.type,
            "bank_account_id": bank_account_id,
            "reference": t.reference,
            "category": category,
        }
        for t in parsed
        if t.valid
    ]
