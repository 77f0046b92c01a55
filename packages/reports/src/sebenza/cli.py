"""Command line entry point for Sebenza reports.

Usage:
    # Local Profit & Loss narrative
    sebenza-report pnl --start 2024-06-01 --end 2024-06-30

    # Same period, written by the configured LLM provider
    sebenza-report pnl --start 2024-06-01 --end 2024-06-30 --ai

    # Daily briefing for a project manager
    sebenza-report briefing --user "Jane Doe"

    # Progress summary from free-form updates
    sebenza-report progress "Foundations poured, cladding 40% done"

    # Check a bank statement before importing it
    sebenza-report import-csv statement.csv --account acct-001
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any

import structlog

from sebenza.clients import LLMClient, create_client
from sebenza.config import configure_logging
from sebenza.errors import DatasetError, SebenzaError
from sebenza.flows import generate_daily_briefing, summarize_project_updates
from sebenza.importer import parse_bank_csv, valid_transactions
from sebenza.reporting import (
    build_financial_report,
    expenses_by_category,
    expenses_in_range,
    generate_ai_financial_report,
    recommendation_bullets,
)
from sebenza.repository import InMemoryRepository, get_repository, load_dataset

logger = structlog.get_logger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _repository(data: Path | None) -> InMemoryRepository:
    return load_dataset(data) if data else get_repository()


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


async def _close(client: LLMClient) -> None:
    close = getattr(client, "close", None)
    if close is not None:
        await close()


async def _run_pnl(args: argparse.Namespace) -> None:
    repository = _repository(args.data)

    if not args.ai:
        report = build_financial_report(repository, args.start, args.end)
        if args.json:
            payload = report.model_dump()
            payload["expenses_by_category"] = expenses_by_category(
                expenses_in_range(repository.list_expenses(args.start, args.end), args.start, args.end)
            )
            _print_json(payload)
        else:
            print(report.summary)
        return

    client = create_client(args.provider)
    try:
        ai_report = await generate_ai_financial_report(repository, args.start, args.end, client)
    finally:
        await _close(client)

    if args.json:
        _print_json(ai_report.model_dump())
        return
    print(ai_report.title)
    print(ai_report.period)
    print()
    print(ai_report.summary)
    print()
    print("Recommendations:")
    for bullet in recommendation_bullets(ai_report.recommendations):
        print(f"  - {bullet}")


async def _run_briefing(args: argparse.Namespace) -> None:
    repository = _repository(args.data)
    client = create_client(args.provider)
    try:
        briefing = await generate_daily_briefing(
            client,
            args.user,
            repository.list_projects(),
            repository.list_tasks(),
        )
    finally:
        await _close(client)
    _print_json(briefing.model_dump())


async def _run_progress(args: argparse.Namespace) -> None:
    client = create_client(args.provider)
    try:
        summary = await summarize_project_updates(client, " ".join(args.updates))
    finally:
        await _close(client)
    _print_json(summary.model_dump())


def _run_import(args: argparse.Namespace) -> None:
    try:
        text = args.file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetError(str(args.file), f"cannot read statement: {exc}") from exc

    parsed = parse_bank_csv(text)
    rows = valid_transactions(parsed, args.account)
    invalid = [{"line": t.line, "errors": t.errors} for t in parsed if not t.valid]
    _print_json({"valid": len(rows), "invalid": invalid, "transactions": rows})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sebenza-report",
        description="Financial and project reports for Sebenza",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--provider",
        choices=["claude", "openai", "gemini", "ollama"],
        default=None,
        help="LLM provider for AI commands (default: LLM_PROVIDER)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    pnl = subparsers.add_parser("pnl", help="Profit & Loss report for a period")
    pnl.add_argument("--start", type=_iso_date, required=True, help="Period start (YYYY-MM-DD)")
    pnl.add_argument("--end", type=_iso_date, required=True, help="Period end (YYYY-MM-DD)")
    pnl.add_argument("--ai", action="store_true", help="Have the LLM write the report")
    pnl.add_argument("--json", action="store_true", help="Print JSON instead of text")
    pnl.add_argument("--data", type=Path, default=None, help="YAML dataset file")

    briefing = subparsers.add_parser("briefing", help="Daily briefing for a project manager")
    briefing.add_argument("--user", required=True, help="Project manager name")
    briefing.add_argument("--data", type=Path, default=None, help="YAML dataset file")

    progress = subparsers.add_parser("progress", help="Summarize project updates")
    progress.add_argument("updates", nargs="+", help="Latest project updates")

    importer = subparsers.add_parser("import-csv", help="Validate a bank statement CSV")
    importer.add_argument("file", type=Path, help="CSV file to parse")
    importer.add_argument("--account", required=True, help="Target bank account id")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    configure_logging()
    args = build_parser().parse_args(argv)

    try:
        if args.command == "pnl":
            asyncio.run(_run_pnl(args))
        elif args.command == "briefing":
            asyncio.run(_run_briefing(args))
        elif args.command == "progress":
            asyncio.run(_run_progress(args))
        elif args.command == "import-csv":
            _run_import(args)
    except SebenzaError as e:
        logger.error("command_failed", command=args.command, error=str(e))
        print(f"Failed to generate the {args.command} output. Please try again.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
