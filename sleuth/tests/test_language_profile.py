from __future__ import annotations

import asyncio
import logging

import pytest

from sleuth.composer import SchemaComposer
from sleuth.constants import QUESTION_SAMPLE_CHARS
from sleuth.language import LanguageProfile
from sleuth.provider.mock import MockGenerator
from sleuth.types import ActionCapabilities, DEFAULT_LANGUAGE, LanguageSetting

DEFAULT_DIRECTIVE = "first-person, lang:en, style:formal English"
FRENCH_DIRECTIVE = "first-person, lang:fr, style:casual French"
FRENCH = {"LanguageDetectionV1": {"langCode": "fr", "langStyle": "casual French"}}


def test_defaults_before_resolution():
    profile = LanguageProfile("Quelle est la capitale de la France ?", MockGenerator(FRENCH))
    assert profile.directive() == DEFAULT_DIRECTIVE
    assert profile.setting is DEFAULT_LANGUAGE
    assert not profile.is_resolved


def test_question_sample_is_truncated():
    profile = LanguageProfile("x" * 250)
    assert len(profile.question_sample) == QUESTION_SAMPLE_CHARS


@pytest.mark.asyncio
async def test_resolution_updates_directive_but_not_built_schemas():
    gate = asyncio.Event()
    generator = MockGenerator(FRENCH, gate=gate)
    profile = LanguageProfile.launch("Salut, c'est quoi le meilleur resto à Lyon ?", generator)
    composer = SchemaComposer(profile)

    await asyncio.sleep(0)
    assert profile.directive() == DEFAULT_DIRECTIVE
    before = composer.decision_schema(ActionCapabilities.of("search"))
    before_gap = composer.gap_check_schema()

    gate.set()
    setting = await profile.resolve()

    assert setting == LanguageSetting("fr", "casual French")
    assert profile.directive() == FRENCH_DIRECTIVE
    assert DEFAULT_DIRECTIVE in before.model_fields["think"].description
    assert FRENCH_DIRECTIVE not in before.model_fields["think"].description
    assert DEFAULT_DIRECTIVE in before_gap.model_fields["think"].description

    after = composer.decision_schema(ActionCapabilities.of("search"))
    assert FRENCH_DIRECTIVE in after.model_fields["think"].description


@pytest.mark.asyncio
async def test_detection_runs_once():
    generator = MockGenerator(FRENCH)
    profile = LanguageProfile("Bonjour", generator)
    first = profile.start()
    assert profile.start() is first
    await profile.resolve()
    await profile.resolve()
    assert len(generator.calls) == 1
    call = generator.calls[0]
    assert call["role"] == "evaluator"
    assert call["schema"] == "LanguageDetectionV1"
    assert "Bonjour" in call["prompt"]


@pytest.mark.asyncio
async def test_detection_prompt_uses_truncated_sample():
    generator = MockGenerator(FRENCH)
    question = "a" * 100 + "TAIL_MARKER"
    await LanguageProfile(question, generator).resolve()
    assert "TAIL_MARKER" not in generator.calls[0]["prompt"]


@pytest.mark.asyncio
async def test_failed_detection_keeps_defaults(caplog: pytest.LogCaptureFixture):
    caplog.set_level(logging.WARNING, logger="sleuth.language")
    profile = LanguageProfile("Hola", MockGenerator(fail=True))
    setting = await profile.resolve()
    assert setting == DEFAULT_LANGUAGE
    assert profile.directive() == DEFAULT_DIRECTIVE
    assert not profile.is_resolved
    assert "language detection failed" in caplog.text


@pytest.mark.asyncio
async def test_invalid_detection_payload_keeps_defaults():
    bad = {"LanguageDetectionV1": {"langCode": "fr-FR-variant-x", "langStyle": "casual French"}}
    profile = LanguageProfile("Salut", MockGenerator(bad))
    await profile.resolve()
    assert profile.setting == DEFAULT_LANGUAGE


@pytest.mark.asyncio
async def test_profile_without_generator_keeps_defaults():
    profile = LanguageProfile("Hello")
    assert await profile.resolve() == DEFAULT_LANGUAGE


def test_publication_happens_once():
    profile = LanguageProfile("Hello")
    assert profile.publish(LanguageSetting("de", "technical German"))
    assert not profile.publish(LanguageSetting("fr", "casual French"))
    assert profile.language_code == "de"
    assert profile.language_style == "technical German"


def test_resolved_profile():
    profile = LanguageProfile.resolved("zh", "formal technical Chinese")
    assert profile.is_resolved
    assert profile.directive() == "first-person, lang:zh, style:formal technical Chinese"


def test_custom_default_language():
    profile = LanguageProfile("Hallo", default=LanguageSetting("de", "formal German"))
    assert profile.directive() == "first-person, lang:de, style:formal German"


def test_start_requires_running_loop():
    with pytest.raises(RuntimeError):
        LanguageProfile("Hello", MockGenerator()).start()


@pytest.mark.asyncio
async def test_readers_never_see_torn_pair():
    gate = asyncio.Event()
    profile = LanguageProfile.launch("Salut", MockGenerator(FRENCH, gate=gate))
    seen = set()

    async def reader():
        for _ in range(50):
            setting = profile.setting
            seen.add((setting.code, setting.style))
            await asyncio.sleep(0)

    task = asyncio.create_task(reader())
    await asyncio.sleep(0)
    gate.set()
    await asyncio.gather(task, profile.resolve())
    assert seen <= {("en", "formal English"), ("fr", "casual French")}
