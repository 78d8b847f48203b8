from __future__ import annotations

from typing import Type

from pydantic import BaseModel, Field

from sleuth.constants import THINK_MAX_CHARS

from ._helpers import compose_model, localized_text


def build_gap_check_schema(directive: str) -> Type[BaseModel]:
    """Which answer checks a question needs before evaluation runs."""

    return compose_model(
        "GapCheckV1",
        {
            "needsFreshness": (bool, Field(..., description="If the question requires freshness check")),
            "needsPlurality": (bool, Field(..., description="If the question requires plurality check")),
            "needsCompleteness": (bool, Field(..., description="If the question requires completeness check")),
            "think": localized_text(
                "A very concise explanation of why those checks are needed",
                directive,
                max_length=THINK_MAX_CHARS,
            ),
        },
        doc="Evaluation checks required by the question.",
    )


__all__ = ["build_gap_check_schema"]
