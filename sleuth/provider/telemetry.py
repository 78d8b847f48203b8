from __future__ import annotations

from pydantic import BaseModel


class LLMTelemetry(BaseModel):
    """Normalized telemetry emitted alongside generator results."""

    provider: str
    role: str
    api_model: str | None
    schema_name: str
    tokens_in: int = 0
    tokens_out: int = 0
    latency_ms: int = 0


__all__ = ["LLMTelemetry"]
