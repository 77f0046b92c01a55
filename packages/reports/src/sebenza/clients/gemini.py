"""Google Gemini client producing schema-constrained JSON output.

Uses the google-genai SDK (v1.0+) with ``response_schema`` so the model
answers with a JSON document instead of free text.
"""

from typing import Any

import structlog
from google import genai
from google.genai import types

from sebenza.clients.base import LLMResponse, extract_json
from sebenza.config import get_settings
from sebenza.errors import GenerationError

logger = structlog.get_logger(__name__)


class GeminiClient:
    """Client for Google's Gemini API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ):
        settings = get_settings()
        self._api_key = api_key or settings.google_api_key.get_secret_value()
        self._model_name = model or settings.gemini_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature

        self._client = genai.Client(api_key=self._api_key)
        self._logger = logger.bind(client="gemini", model=self._model_name)

    def _convert_json_schema_to_gemini(self, schema: dict[str, Any]) -> dict[str, Any]:
        """Convert JSON Schema to Gemini's schema format.

        Gemini uses a subset of OpenAPI schema format; titles and other
        unsupported keywords are dropped.
        """
        gemini_schema: dict[str, Any] = {}

        if "type" in schema:
            type_map = {
                "string": "STRING",
                "integer": "INTEGER",
                "number": "NUMBER",
                "boolean": "BOOLEAN",
                "array": "ARRAY",
                "object": "OBJECT",
            }
            gemini_schema["type"] = type_map.get(schema["type"], "STRING")

        if "description" in schema:
            gemini_schema["description"] = schema["description"]

        if "enum" in schema:
            gemini_schema["enum"] = schema["enum"]

        if "properties" in schema:
            gemini_schema["properties"] = {
                k: self._convert_json_schema_to_gemini(v)
                for k, v in schema["properties"].items()
            }

        if "required" in schema:
            gemini_schema["required"] = schema["required"]

        if "items" in schema:
            gemini_schema["items"] = self._convert_json_schema_to_gemini(schema["items"])

        return gemini_schema

    def _parse_response(self, response: Any) -> LLMResponse:
        """Parse Gemini response into our format."""
        content = ""
        stop_reason = "end_turn"

        if response.candidates:
            candidate = response.candidates[0]
            parts = candidate.content.parts if candidate.content else None
            for part in parts or []:
                if getattr(part, "text", None):
                    content += part.text

            stop_reason_map = {
                "STOP": "end_turn",
                "MAX_TOKENS": "max_tokens",
                "SAFETY": "content_filter",
                "RECITATION": "content_filter",
            }
            finish_reason = candidate.finish_reason
            finish_name = getattr(finish_reason, "name", str(finish_reason))
            stop_reason = stop_reason_map.get(finish_name, "end_turn")

        usage = {"input_tokens": 0, "output_tokens": 0}
        if getattr(response, "usage_metadata", None):
            usage["input_tokens"] = (
                getattr(response.usage_metadata, "prompt_token_count", 0) or 0
            )
            usage["output_tokens"] = (
                getattr(response.usage_metadata, "candidates_token_count", 0) or 0
            )

        return LLMResponse(
            content=content,
            structured=extract_json(content) if content else None,
            stop_reason=stop_reason,
            usage=usage,
        )

    async def generate_structured(
        self,
        system_prompt: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Generate an object matching ``schema`` from Gemini."""
        self._logger.debug("generating_response", schema=schema_name, prompt_chars=len(prompt))

        config = types.GenerateContentConfig(
            max_output_tokens=self._max_tokens,
            temperature=self._temperature,
            system_instruction=system_prompt,
            response_mime_type="application/json",
            response_schema=types.Schema.model_validate(
                self._convert_json_schema_to_gemini(schema)
            ),
        )

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            self._logger.error("api_error", error=str(e))
            raise GenerationError("gemini", str(e)) from e

        parsed = self._parse_response(response)
        self._logger.info(
            "response_generated",
            stop_reason=parsed.stop_reason,
            structured=parsed.structured is not None,
            input_tokens=parsed.usage["input_tokens"],
            output_tokens=parsed.usage["output_tokens"],
        )
        return parsed.structured
