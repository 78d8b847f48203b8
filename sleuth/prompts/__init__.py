"""Prompt assets and builders for agent steps."""

from .prompt_builder import PromptParts, PromptTemplateError, build_language_prompt, with_directive

__all__ = ["PromptParts", "PromptTemplateError", "build_language_prompt", "with_directive"]
