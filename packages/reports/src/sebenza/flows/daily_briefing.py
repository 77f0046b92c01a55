"""Personalized daily briefing for a project manager."""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from sebenza.config import get_settings
from sebenza.flows.base import PromptFlow, StructuredClient
from sebenza.models import Project, Task


class DailyBriefingInput(BaseModel):
    user_name: str = Field(description="The name of the project manager.")
    current_date: str = Field(description="The current date in ISO format.")
    assistant_name: str = Field(description="The name the assistant introduces itself with.")
    projects: str = Field(description="A JSON string of all projects.")
    tasks: str = Field(description="A JSON string of all tasks.")


class DailyBriefing(BaseModel):
    """Daily briefing returned by the model."""

    greeting: str = Field(description="A personalized greeting for the user.")
    key_priorities: list[str] = Field(
        description="The most important action items or tasks for the day."
    )
    potential_risks: list[str] = Field(
        description="Potential risks or issues that need attention."
    )
    positive_updates: list[str] = Field(
        description="Positive updates or milestones recently achieved."
    )


SYSTEM_PROMPT = (
    "You are an expert project management assistant. Your goal is to provide a clear, "
    "concise, and actionable daily briefing for a project manager."
)

TEMPLATE = """Your name is '{assistant_name}'.

Today's Date: {current_date}
Project Manager: {user_name}

Analyze the following project and task data. Identify the most critical priorities, upcoming
deadlines, potential risks (e.g. overdue tasks, off-track projects), and recent positive
accomplishments.

- For 'key_priorities', focus on the most urgent tasks assigned to {user_name} and critical
  project-level actions needed. Be specific and actionable.
- For 'potential_risks', identify projects that are 'At Risk' or 'Off Track', and any tasks that
  are overdue. Mention the number of overdue days.
- For 'positive_updates', highlight tasks recently completed or projects performing well.
- Keep each item in the lists as a short, single sentence.
- The greeting should be friendly and mention the user by name.

Project Data:
{projects}

Task Data:
{tasks}"""

daily_briefing_flow: PromptFlow[DailyBriefingInput, DailyBriefing] = PromptFlow(
    name="generate_daily_briefing",
    system_prompt=SYSTEM_PROMPT,
    template=TEMPLATE,
    input_model=DailyBriefingInput,
    output_model=DailyBriefing,
)


def _task_payload(task: Task, today: date) -> dict[str, Any]:
    payload = task.to_dict()
    if task.is_overdue(today):
        payload["days_overdue"] = (today - task.due_date).days
    return payload


async def generate_daily_briefing(
    client: StructuredClient,
    user_name: str,
    projects: Sequence[Project],
    tasks: Sequence[Task],
    today: date | None = None,
) -> DailyBriefing:
    """Summarize today's priorities, risks and wins for ``user_name``."""
    today = today or date.today()
    return await daily_briefing_flow.run(
        client,
        {
            "user_name": user_name,
            "current_date": today.isoformat(),
            "assistant_name": get_settings().assistant_name,
            "projects": json.dumps([project.to_dict() for project in projects], indent=2),
            "tasks": json.dumps([_task_payload(task, today) for task in tasks], indent=2),
        },
    )
