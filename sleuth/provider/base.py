from __future__ import annotations

from typing import Protocol, Type, runtime_checkable

from pydantic import BaseModel


class GenerationError(RuntimeError):
    """Raised when a generator cannot produce a value conforming to the schema."""


@runtime_checkable
class StructuredGenerator(Protocol):
    """Boundary to the structured generation service.

    ``role`` names the logical model slot (e.g. ``"evaluator"`` or ``"agent"``),
    ``schema`` is a composed contract model, and the returned value is an
    instance of that model. Implementations own retries, timeouts and provider
    selection; callers here never retry.
    """

    name: str

    async def generate(
        self,
        *,
        role: str,
        schema: Type[BaseModel],
        prompt: str,
    ) -> BaseModel:  # pragma: no cover - Protocol stub
        ...
