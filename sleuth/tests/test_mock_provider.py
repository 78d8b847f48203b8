from __future__ import annotations

import pytest

from sleuth.provider.base import GenerationError
from sleuth.provider.mock import MockGenerator
from sleuth.schemas import LanguageDetectionV1
from sleuth.types import ActionCapabilities


class UnknownSchema(LanguageDetectionV1):
    pass


@pytest.mark.asyncio
async def test_mock_returns_validated_instance():
    gen = MockGenerator()
    value = await gen.generate(role="evaluator", schema=LanguageDetectionV1, prompt="Hello there")
    assert isinstance(value, LanguageDetectionV1)
    assert value.langCode == "en"
    assert gen.calls[0]["prompt_sha256"]


@pytest.mark.asyncio
async def test_mock_validates_through_composed_schema(composer):
    model = composer.decision_schema(ActionCapabilities.of("search", "visit"))
    gen = MockGenerator(
        {"DecisionV1": {"action": "visit", "URLTargets": ["https://a.example"], "think": "read the source"}}
    )
    decision = await gen.generate(role="agent", schema=model, prompt="decide")
    assert decision.action == "visit"
    assert decision.active().URLTargets == ["https://a.example"]


@pytest.mark.asyncio
async def test_mock_failure_modes():
    with pytest.raises(GenerationError):
        await MockGenerator(fail=True).generate(role="evaluator", schema=LanguageDetectionV1, prompt="x")
    with pytest.raises(GenerationError):
        await MockGenerator().generate(role="agent", schema=UnknownSchema, prompt="x")
