"""Project progress summary from free-form project updates."""

from __future__ import annotations

from pydantic import BaseModel, Field

from sebenza.flows.base import PromptFlow, StructuredClient

PROGRESS_MESSAGE = "The project progress summary has been generated successfully."


class ProjectProgressInput(BaseModel):
    project_updates: str = Field(description="The latest updates for the project.")


class ProjectProgressSummary(BaseModel):
    summary: str = Field(description="The generated project progress summary.")
    progress: str = Field(description="A short, one-sentence summary of the progress.")


class ProjectProgressFlow(PromptFlow[ProjectProgressInput, ProjectProgressSummary]):
    """Progress flow whose ``progress`` field is a fixed status message."""

    def postprocess(self, output: ProjectProgressSummary) -> ProjectProgressSummary:
        return output.model_copy(update={"progress": PROGRESS_MESSAGE})


project_progress_flow = ProjectProgressFlow(
    name="generate_project_progress_summary",
    system_prompt="You are a project manager.",
    template=(
        "Generate a project progress summary based on the latest project updates provided.\n\n"
        "Latest Project Updates: {project_updates}"
    ),
    input_model=ProjectProgressInput,
    output_model=ProjectProgressSummary,
)


async def summarize_project_updates(
    client: StructuredClient, project_updates: str
) -> ProjectProgressSummary:
    return await project_progress_flow.run(client, {"project_updates": project_updates})
