from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sleuth.composer import SchemaComposer  # noqa: E402
from sleuth.language import LanguageProfile  # noqa: E402


@pytest.fixture
def composer() -> SchemaComposer:
    """Composer over an unresolved profile (default language)."""
    return SchemaComposer(LanguageProfile("What is the capital of France?"))


@pytest.fixture
def french_composer() -> SchemaComposer:
    return SchemaComposer(LanguageProfile.resolved("fr", "casual French"))


@pytest.fixture(autouse=True)
def _clear_sleuth_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer SLEUTH_* settings out of the test run."""
    for key in (
        "SLEUTH_DEFAULT_LANG",
        "SLEUTH_DEFAULT_STYLE",
        "SLEUTH_GENERATOR",
        "SLEUTH_EVALUATOR_MODEL",
        "SLEUTH_AGENT_MODEL",
        "SLEUTH_MAX_OUTPUT_TOKENS",
    ):
        monkeypatch.delenv(key, raising=False)
