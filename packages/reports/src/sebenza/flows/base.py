"""Prompt flows: a prompt template bound to validated input and output schemas.

A flow validates its input, renders the prompt, makes exactly one structured
generation call and validates the result. Any failure is raised to the caller;
there is no retry and no partial result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, Protocol, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from sebenza.errors import FlowInputError, FlowOutputError

logger = structlog.get_logger(__name__)

InputT = TypeVar("InputT", bound=BaseModel)
OutputT = TypeVar("OutputT", bound=BaseModel)


class StructuredClient(Protocol):
    """Anything that can turn a prompt into a JSON object matching a schema."""

    async def generate_structured(
        self,
        system_prompt: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any] | None: ...


class PromptFlow(Generic[InputT, OutputT]):
    """A named prompt template with declared input and output models."""

    def __init__(
        self,
        name: str,
        system_prompt: str,
        template: str,
        input_model: type[InputT],
        output_model: type[OutputT],
    ):
        self.name = name
        self.system_prompt = system_prompt
        self.template = template
        self.input_model = input_model
        self.output_model = output_model

    def validate_input(self, data: InputT | Mapping[str, Any]) -> InputT:
        if isinstance(data, self.input_model):
            return data
        try:
            return self.input_model.model_validate(data)
        except ValidationError as e:
            logger.warning("flow_input_invalid", flow=self.name, errors=e.error_count())
            raise FlowInputError(self.name, "input does not match schema", e.errors()) from e

    def render(self, flow_input: InputT) -> str:
        return self.template.format(**flow_input.model_dump())

    def output_schema(self) -> dict[str, Any]:
        return self.output_model.model_json_schema()

    def postprocess(self, output: OutputT) -> OutputT:
        """Hook for flows that adjust the validated output."""
        return output

    async def run(self, client: StructuredClient, data: InputT | Mapping[str, Any]) -> OutputT:
        """Validate, prompt the model once, and validate its answer."""
        flow_input = self.validate_input(data)
        prompt = self.render(flow_input)

        # Flows are module globals; bind after logging is configured
        log = logger.bind(flow=self.name)
        log.info("flow_started", prompt_chars=len(prompt))

        raw = await client.generate_structured(
            self.system_prompt,
            prompt,
            self.name,
            self.output_schema(),
        )
        if raw is None:
            log.error("flow_output_missing")
            raise FlowOutputError(self.name, "model returned no structured output")

        try:
            output = self.output_model.model_validate(raw)
        except ValidationError as e:
            log.error("flow_output_invalid", errors=e.error_count())
            raise FlowOutputError(self.name, "output does not match schema", e.errors()) from e

        log.info("flow_completed")
        return self.postprocess(output)
