from __future__ import annotations

from typing import List, Type

from pydantic import BaseModel, Field

from sleuth.constants import MAX_REFLECT_PER_STEP, THINK_MAX_CHARS

from ._helpers import compose_model, localized_text

REFLECT_QUESTION_RULES = (
    "each question must be a single line, concise and clear. not composite or compound, less than 20 words."
)


def build_error_analysis_schema(directive: str) -> Type[BaseModel]:
    """Post-mortem of a rejected answer: what happened, who is to blame, what next."""

    return compose_model(
        "ErrorAnalysisV1",
        {
            "recap": (
                str,
                Field(
                    ...,
                    max_length=THINK_MAX_CHARS,
                    description="Recap of the actions taken and the steps conducted in first person narrative.",
                ),
            ),
            "blame": localized_text(
                "Which action or the step was the root cause of the answer rejection",
                directive,
                max_length=THINK_MAX_CHARS,
            ),
            "improvement": localized_text(
                "Suggested key improvement for the next iteration, do not use bullet points, be concise and hot-take vibe",
                directive,
                max_length=THINK_MAX_CHARS,
            ),
            "questionsToAnswer": (
                List[str],
                Field(
                    default_factory=list,
                    max_length=MAX_REFLECT_PER_STEP,
                    description=(
                        "List of most important reflect questions to fill the knowledge gaps. "
                        f"Maximum provide {MAX_REFLECT_PER_STEP} reflect questions. {REFLECT_QUESTION_RULES}"
                    ),
                ),
            ),
        },
        doc="Failure analysis of a rejected answer.",
    )


__all__ = ["REFLECT_QUESTION_RULES", "build_error_analysis_schema"]
