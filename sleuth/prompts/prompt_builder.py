from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from importlib import resources

__all__ = [
    "PromptParts",
    "PromptTemplateError",
    "build_language_prompt",
    "with_directive",
]


class PromptTemplateError(RuntimeError):
    """Raised when a requested prompt resource cannot be located."""


@dataclass(frozen=True)
class PromptParts:
    """Container for the system + user prompt pair passed to generators."""

    system: str
    user: str

    def render(self) -> str:
        return f"{self.system}\n\n{self.user}".strip()


@lru_cache(maxsize=None)
def _load_text(relative_path: str) -> str:
    """Read and cache prompt text from the package resources."""

    base = resources.files("sleuth.prompts")
    target = base.joinpath(relative_path)
    if not target.is_file():
        raise PromptTemplateError(f"Missing prompt template: {relative_path}")
    return target.read_text(encoding="utf-8").strip()


def build_language_prompt(question: str) -> PromptParts:
    """Construct the language/tone detection prompt for a question sample."""

    system = _load_text("language_detect/shared_v1.md")
    user = f"Now evaluate this question:\n{question.strip()}"
    return PromptParts(system=system, user=user)


def with_directive(text: str, directive: str) -> str:
    """Append a localization directive to prompt text."""

    body = (text or "").rstrip()
    if not directive:
        return body
    return f"{body}\n\nRespond {directive}."
