"""Claude (Anthropic) client producing schema-constrained output via forced tool use."""

from typing import Any

import anthropic
import structlog

from sebenza.clients.base import LLMResponse, extract_json
from sebenza.config import get_settings
from sebenza.errors import GenerationError

logger = structlog.get_logger(__name__)


class ClaudeClient:
    """Client for Anthropic's Claude API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        settings = get_settings()
        self._api_key = api_key or settings.anthropic_api_key.get_secret_value()
        self._model = model or settings.claude_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature

        self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        self._logger = logger.bind(client="claude", model=self._model)

    def _build_tool(self, schema_name: str, schema: dict[str, Any]) -> dict[str, Any]:
        """Wrap the output schema as the single tool Claude must call."""
        return {
            "name": schema_name,
            "description": f"Return the {schema_name} result as structured data.",
            "input_schema": schema,
        }

    def _parse_response(self, response: anthropic.types.Message) -> LLMResponse:
        """Parse Anthropic response into our format."""
        content = ""
        structured: dict[str, Any] | None = None

        for block in response.content:
            if block.type == "text":
                content = block.text
            elif block.type == "tool_use":
                structured = dict(block.input)

        # Fall back to JSON in the text when the model ignored the tool
        if structured is None and content:
            structured = extract_json(content)

        return LLMResponse(
            content=content,
            structured=structured,
            stop_reason=response.stop_reason or "end_turn",
            usage={
                "input_tokens": response.usage.input_tokens,
                "output_tokens": response.usage.output_tokens,
            },
        )

    async def generate_structured(
        self,
        system_prompt: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Generate an object matching ``schema`` from Claude.

        Args:
            system_prompt: The system prompt defining assistant behavior.
            prompt: The rendered user prompt.
            schema_name: Tool name used to carry the result.
            schema: JSON Schema of the expected object.

        Returns:
            The decoded object, or None if Claude returned none.
        """
        self._logger.debug("generating_response", prompt_chars=len(prompt))

        try:
            response = await self._client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=system_prompt,
                messages=[{"role": "user", "content": prompt}],
                tools=[self._build_tool(schema_name, schema)],
                tool_choice={"type": "tool", "name": schema_name},
            )
        except anthropic.APIError as e:
            self._logger.error("api_error", error=str(e))
            raise GenerationError("claude", str(e)) from e

        parsed = self._parse_response(response)
        self._logger.info(
            "response_generated",
            stop_reason=parsed.stop_reason,
            structured=parsed.structured is not None,
            input_tokens=parsed.usage["input_tokens"],
            output_tokens=parsed.usage["output_tokens"],
        )
        return parsed.structured
