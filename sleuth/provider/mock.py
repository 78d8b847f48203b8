from __future__ import annotations

import asyncio
import hashlib
import json
import logging
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel

from .base import GenerationError
from .json_utils import extract_and_validate
from .registry import register_generator

logger = logging.getLogger(__name__)

_DEFAULT_RESPONSES: Dict[str, Dict[str, Any]] = {
    "LanguageDetectionV1": {"langCode": "en", "langStyle": "formal English"},
    "GapCheckV1": {
        "needsFreshness": False,
        "needsPlurality": False,
        "needsCompleteness": True,
        "think": "Mock gap check",
    },
    "QueryRewriteV1": {"think": "Mock rewrite", "queries": ["mock query"]},
}


class MockGenerator:
    """Deterministic generator for tests and offline runs (no network).

    Responses are canned payloads keyed by schema class name and are validated
    through the requested schema exactly like live output. ``gate`` holds the
    call open until it is set; ``fail`` makes every call raise.
    """

    name = "mock"

    def __init__(
        self,
        responses: Optional[Dict[str, Dict[str, Any]]] = None,
        *,
        fail: bool = False,
        gate: Optional[asyncio.Event] = None,
    ) -> None:
        self._responses = dict(_DEFAULT_RESPONSES)
        if responses:
            self._responses.update(responses)
        self._fail = fail
        self._gate = gate
        self.calls: List[Dict[str, Any]] = []

    async def generate(self, *, role: str, schema: Type[BaseModel], prompt: str) -> BaseModel:
        prompt_sha256 = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
        self.calls.append({"role": role, "schema": schema.__name__, "prompt": prompt, "prompt_sha256": prompt_sha256})
        if self._gate is not None:
            await self._gate.wait()
        if self._fail:
            raise GenerationError(f"mock generator configured to fail ({schema.__name__})")
        payload = self._responses.get(schema.__name__)
        if payload is None:
            raise GenerationError(f"No mock response for schema {schema.__name__}")
        value, warnings = extract_and_validate(json.dumps(payload), schema)
        logger.debug("mock generate role=%s schema=%s warnings=%s", role, schema.__name__, warnings)
        return value


def _factory(*, settings: Any = None, **kwargs: Any) -> MockGenerator:
    return MockGenerator(**kwargs)


register_generator(aliases=("mock", "offline"), factory=_factory)


__all__ = ["MockGenerator"]
