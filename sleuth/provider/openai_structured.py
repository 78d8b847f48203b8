from __future__ import annotations

import logging
import time
from typing import Any, Optional, Type

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from sleuth.config import Settings, load_settings
from sleuth.schemas._helpers import provider_schema

from .base import GenerationError
from .json_utils import extract_and_validate
from .registry import register_generator
from .telemetry import LLMTelemetry

logger = logging.getLogger(__name__)


def _extract_usage(resp: Any) -> tuple[int, int]:
    usage = getattr(resp, "usage", None)
    if not usage:
        return 0, 0
    tokens_in = int(getattr(usage, "prompt_tokens", 0) or 0)
    tokens_out = int(getattr(usage, "completion_tokens", 0) or 0)
    return tokens_in, tokens_out


def _extract_output_text(resp: Any) -> Optional[str]:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    text = getattr(message, "content", None) if message is not None else None
    return str(text) if text else None


def response_format_for(schema: Type[BaseModel]) -> dict[str, Any]:
    """JSON-schema response format for chat completions."""

    return {"type": "json_schema", "json_schema": provider_schema(schema)}


class OpenAIStructuredGenerator:
    """Structured generation through OpenAI chat completions with a JSON schema."""

    name = "openai"

    def __init__(self, *, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None) -> None:
        self._settings = settings or load_settings()
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI()
        return self._client

    async def generate(self, *, role: str, schema: Type[BaseModel], prompt: str) -> BaseModel:
        model = self._settings.model_for_role(role)
        client = self._get_client()
        t0 = time.time()
        resp = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            response_format=response_format_for(schema),
            max_tokens=self._settings.max_output_tokens,
            temperature=0,
        )
        latency_ms = int((time.time() - t0) * 1000)

        raw_text = _extract_output_text(resp)
        if not raw_text:
            raise GenerationError(f"openai returned no content for {schema.__name__} (resp_id={getattr(resp, 'id', None)})")
        try:
            value, warnings = extract_and_validate(raw_text, schema)
        except (ValueError, ValidationError) as exc:
            logger.warning("openai_structured: parse failed schema=%s raw=%s", schema.__name__, raw_text[:4000])
            raise GenerationError(f"openai output does not match {schema.__name__}: {exc}") from exc

        tokens_in, tokens_out = _extract_usage(resp)
        telemetry = LLMTelemetry(
            provider="openai",
            role=role,
            api_model=str(getattr(resp, "model", model) or model),
            schema_name=schema.__name__,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            latency_ms=latency_ms,
        )
        logger.info("openai_structured: generated %s", schema.__name__, extra={"telemetry": telemetry.model_dump(), "warnings": warnings})
        return value


register_generator(aliases=("openai", "openai:chat", "gpt"), factory=OpenAIStructuredGenerator)


__all__ = ["OpenAIStructuredGenerator", "response_format_for"]
