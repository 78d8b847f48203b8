from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict

import yaml

from sleuth.types import DEFAULT_LANGUAGE, LanguageSetting


@dataclass(frozen=True)
class Settings:
    default_lang_code: str = DEFAULT_LANGUAGE.code
    default_lang_style: str = DEFAULT_LANGUAGE.style
    generator: str = "openai"
    evaluator_model: str = "gpt-4o-mini"
    agent_model: str = "gpt-4o"
    max_output_tokens: int = 1024

    @property
    def default_language(self) -> LanguageSetting:
        return LanguageSetting(code=self.default_lang_code, style=self.default_lang_style)

    def model_for_role(self, role: str) -> str:
        """Map a logical role to a model id (``evaluator`` or anything else -> agent)."""

        if (role or "").strip().lower() == "evaluator":
            return self.evaluator_model
        return self.agent_model


_ENV_KEYS = {
    "default_lang_code": "SLEUTH_DEFAULT_LANG",
    "default_lang_style": "SLEUTH_DEFAULT_STYLE",
    "generator": "SLEUTH_GENERATOR",
    "evaluator_model": "SLEUTH_EVALUATOR_MODEL",
    "agent_model": "SLEUTH_AGENT_MODEL",
    "max_output_tokens": "SLEUTH_MAX_OUTPUT_TOKENS",
}


def load_settings() -> Settings:
    """Return settings from the environment, falling back to built-in defaults."""

    overrides: Dict[str, Any] = {}
    for name, env_key in _ENV_KEYS.items():
        raw = os.getenv(env_key)
        if raw is None or not raw.strip():
            continue
        if name == "max_output_tokens":
            try:
                overrides[name] = int(raw)
            except ValueError as exc:
                raise ValueError(f"{env_key} must be an integer, got {raw!r}") from exc
            continue
        overrides[name] = raw.strip()
    return Settings(**overrides)


def load_settings_file(path: str | Path, *, base: Settings | None = None) -> Settings:
    """Apply a YAML/JSON settings file on top of ``base`` (env settings by default)."""

    p = Path(path)
    text = p.read_text(encoding="utf-8")
    data = yaml.safe_load(text) if p.suffix in {".yaml", ".yml"} else json.loads(text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"{p} must contain a mapping")
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings in {p}: {', '.join(unknown)}")
    return replace(base or load_settings(), **data)


__all__ = ["Settings", "load_settings", "load_settings_file"]
