from __future__ import annotations

from typing import Type

from pydantic import BaseModel, Field

from sleuth.constants import CODE_THINK_MAX_CHARS

from ._helpers import compose_model, localized_text

# Content rules for generated code; not checkable by the schema itself.
CODE_CONTENT_RULES = (
    "The JavaScript code that solves the problem and always use 'return' statement to return the result. "
    "Focus on solving the core problem; No need for error handling or try-catch blocks or code comments. "
    "No need to declare variables that are already available, especially big long strings or arrays."
)


def build_code_schema(directive: str) -> Type[BaseModel]:
    return compose_model(
        "CodeGenerationV1",
        {
            "think": localized_text(
                "Short explanation or comments on the thought process behind the code",
                directive,
                max_length=CODE_THINK_MAX_CHARS,
            ),
            "code": (str, Field(..., description=CODE_CONTENT_RULES)),
        },
        doc="Code synthesized to solve a coding issue.",
    )


__all__ = ["CODE_CONTENT_RULES", "build_code_schema"]
