"""Prompt flows for AI-generated reports."""

from sebenza.flows.base import PromptFlow, StructuredClient
from sebenza.flows.daily_briefing import (
    DailyBriefing,
    DailyBriefingInput,
    daily_briefing_flow,
    generate_daily_briefing,
)
from sebenza.flows.financial_report import (
    AIFinancialReport,
    FinancialReportInput,
    financial_report_flow,
    generate_financial_report,
)
from sebenza.flows.project_progress import (
    PROGRESS_MESSAGE,
    ProjectProgressInput,
    ProjectProgressSummary,
    project_progress_flow,
    summarize_project_updates,
)

__all__ = [
    # Runtime
    "PromptFlow",
    "StructuredClient",
    # Financial report
    "AIFinancialReport",
    "FinancialReportInput",
    "financial_report_flow",
    "generate_financial_report",
    # Daily briefing
    "DailyBriefing",
    "DailyBriefingInput",
    "daily_briefing_flow",
    "generate_daily_briefing",
    # Project progress
    "PROGRESS_MESSAGE",
    "ProjectProgressInput",
    "ProjectProgressSummary",
    "project_progress_flow",
    "summarize_project_updates",
]
