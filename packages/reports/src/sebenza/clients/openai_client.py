"""OpenAI GPT client producing schema-constrained output via a forced function call."""

import json
from typing import Any

import openai
import structlog

from sebenza.clients.base import LLMResponse, extract_json
from sebenza.config import get_settings
from sebenza.errors import GenerationError

logger = structlog.get_logger(__name__)


class OpenAIClient:
    """Client for OpenAI's GPT API.

    Also supports OpenAI-compatible APIs like LM Studio via custom base_url.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        settings = get_settings()
        self._api_key = api_key or settings.openai_api_key.get_secret_value()
        self._base_url = base_url  # None means use OpenAI's default
        self._model = model or settings.gpt_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature

        client_kwargs: dict[str, Any] = {"api_key": self._api_key}
        if self._base_url:
            client_kwargs["base_url"] = self._base_url

        self._client = openai.AsyncOpenAI(**client_kwargs)
        client_name = "lm_studio" if self._base_url else "openai"
        self._logger = logger.bind(client=client_name, model=self._model)

    def _build_tool(self, schema_name: str, schema: dict[str, Any]) -> dict[str, Any]:
        """Wrap the output schema in OpenAI's function tool format."""
        return {
            "type": "function",
            "function": {
                "name": schema_name,
                "description": f"Return the {schema_name} result as structured data.",
                "parameters": schema,
            },
        }

    def _request_kwargs(self) -> dict[str, Any]:
        # GPT-5+ and o-series models use max_completion_tokens; nano models
        # only support the default temperature
        is_gpt5_plus = self._model.startswith("gpt-5") or self._model.startswith("o3")
        kwargs: dict[str, Any] = {"model": self._model}
        if "nano" not in self._model:
            kwargs["temperature"] = self._temperature
        if is_gpt5_plus:
            kwargs["max_completion_tokens"] = self._max_tokens
        else:
            kwargs["max_tokens"] = self._max_tokens
        return kwargs

    def _parse_response(
        self, response: openai.types.chat.ChatCompletion
    ) -> LLMResponse:
        """Parse OpenAI response into our format."""
        message = response.choices[0].message
        content = message.content or ""
        structured: dict[str, Any] | None = None

        if message.tool_calls:
            arguments = message.tool_calls[0].function.arguments
            try:
                decoded = json.loads(arguments)
            except json.JSONDecodeError:
                self._logger.warning("tool_arguments_not_json", chars=len(arguments))
            else:
                structured = decoded if isinstance(decoded, dict) else None
        elif content:
            structured = extract_json(content)

        stop_reason_map = {
            "stop": "end_turn",
            "tool_calls": "tool_use",
            "length": "max_tokens",
            "content_filter": "content_filter",
        }
        finish_reason = response.choices[0].finish_reason
        stop_reason = stop_reason_map.get(finish_reason or "stop", "end_turn")

        return LLMResponse(
            content=content,
            structured=structured,
            stop_reason=stop_reason,
            usage={
                "input_tokens": response.usage.prompt_tokens if response.usage else 0,
                "output_tokens": response.usage.completion_tokens if response.usage else 0,
            },
        )

    async def generate_structured(
        self,
        system_prompt: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Generate an object matching ``schema`` from GPT."""
        self._logger.debug("generating_response", prompt_chars=len(prompt))

        try:
            response = await self._client.chat.completions.create(
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": prompt},
                ],
                tools=[self._build_tool(schema_name, schema)],
                tool_choice={"type": "function", "function": {"name": schema_name}},
                **self._request_kwargs(),
            )
        except openai.APIError as e:
            self._logger.error("api_error", error=str(e))
            raise GenerationError("openai", str(e)) from e

        parsed = self._parse_response(response)
        self._logger.info(
            "response_generated",
            stop_reason=parsed.stop_reason,
            structured=parsed.structured is not None,
            input_tokens=parsed.usage["input_tokens"],
            output_tokens=parsed.usage["output_tokens"],
        )
        return parsed.structured
