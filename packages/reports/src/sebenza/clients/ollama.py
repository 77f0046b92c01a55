"""Ollama client producing schema-constrained output from local models."""

from typing import Any

import httpx
import structlog

from sebenza.clients.base import LLMResponse, extract_json
from sebenza.config import get_settings
from sebenza.errors import GenerationError

logger = structlog.get_logger(__name__)


class OllamaClient:
    """Client for Ollama's local LLM API.

    Ollama's /api/chat endpoint accepts a JSON Schema in ``format`` and
    constrains the reply to it, so local models can stand in for cloud APIs.
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._model = model or settings.ollama_model
        self._max_tokens = max_tokens or settings.llm_max_tokens
        self._temperature = temperature if temperature is not None else settings.llm_temperature

        # Local models can be slow
        self._client = httpx.AsyncClient(timeout=timeout or settings.llm_timeout)
        self._logger = logger.bind(client="ollama", model=self._model)

    def _build_payload(
        self, system_prompt: str, prompt: str, schema: dict[str, Any]
    ) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            "stream": False,
            "format": schema,
            "options": {
                "num_predict": self._max_tokens,
                "temperature": self._temperature,
            },
        }

    def _parse_response(self, response_data: dict[str, Any]) -> LLMResponse:
        """Parse Ollama response into our format."""
        message = response_data.get("message", {})
        content = message.get("content", "")

        done_reason = response_data.get("done_reason", "")
        stop_reason = "max_tokens" if done_reason == "length" else "end_turn"

        return LLMResponse(
            content=content,
            structured=extract_json(content) if content else None,
            stop_reason=stop_reason,
            usage={
                "input_tokens": response_data.get("prompt_eval_count", 0),
                "output_tokens": response_data.get("eval_count", 0),
            },
        )

    async def generate_structured(
        self,
        system_prompt: str,
        prompt: str,
        schema_name: str,
        schema: dict[str, Any],
    ) -> dict[str, Any] | None:
        """Generate an object matching ``schema`` from the local model."""
        self._logger.debug("generating_response", schema=schema_name, prompt_chars=len(prompt))

        try:
            response = await self._client.post(
                f"{self._base_url}/api/chat",
                json=self._build_payload(system_prompt, prompt, schema),
            )
            response.raise_for_status()
            response_data = response.json()
        except httpx.HTTPStatusError as e:
            self._logger.error("api_error", status=e.response.status_code, error=str(e))
            raise GenerationError("ollama", str(e)) from e
        except httpx.RequestError as e:
            self._logger.error("connection_error", error=str(e))
            raise GenerationError("ollama", str(e)) from e

        parsed = self._parse_response(response_data)
        self._logger.info(
            "response_generated",
            stop_reason=parsed.stop_reason,
            structured=parsed.structured is not None,
            input_tokens=parsed.usage["input_tokens"],
            output_tokens=parsed.usage["output_tokens"],
        )
        return parsed.structured

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()
