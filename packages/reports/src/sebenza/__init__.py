"""Sebenza - financial reporting and AI briefings for project-based businesses."""

__version__ = "0.1.0"

from sebenza.clients import ClaudeClient, GeminiClient, OllamaClient, OpenAIClient, create_client
from sebenza.config import configure_logging, get_settings
from sebenza.errors import (
    DatasetError,
    FlowError,
    FlowInputError,
    FlowOutputError,
    GenerationError,
    SebenzaError,
)
from sebenza.flows import (
    generate_daily_briefing,
    generate_financial_report,
    summarize_project_updates,
)
from sebenza.reporting import (
    FinancialReport,
    FinancialSummary,
    build_financial_report,
    generate_ai_financial_report,
    render_narrative,
    summarize_period,
)
from sebenza.repository import (
    InMemoryRepository,
    ReportRepository,
    get_repository,
    load_dataset,
    sample_repository,
)

__all__ = [
    # Version
    "__version__",
    # Reporting
    "FinancialReport",
    "FinancialSummary",
    "build_financial_report",
    "generate_ai_financial_report",
    "render_narrative",
    "summarize_period",
    # Flows
    "generate_daily_briefing",
    "generate_financial_report",
    "summarize_project_updates",
    # Data
    "ReportRepository",
    "InMemoryRepository",
    "get_repository",
    "load_dataset",
    "sample_repository",
    # LLM Clients
    "ClaudeClient",
    "OpenAIClient",
    "GeminiClient",
    "OllamaClient",
    "create_client",
    # Errors
    "SebenzaError",
    "DatasetError",
    "FlowError",
    "FlowInputError",
    "FlowOutputError",
    "GenerationError",
    # Config
    "get_settings",
    "configure_logging",
]
