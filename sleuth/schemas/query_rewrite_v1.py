from __future__ import annotations

from typing import Annotated, List, Type

from pydantic import BaseModel, Field

from sleuth.constants import MAX_QUERIES_PER_STEP, SEARCH_REQUEST_MAX_CHARS, THINK_MAX_CHARS

from ._helpers import compose_model, localized_text


def build_query_rewrite_schema(directive: str) -> Type[BaseModel]:
    return compose_model(
        "QueryRewriteV1",
        {
            "think": localized_text(
                "Explain why you choose those search queries",
                directive,
                max_length=THINK_MAX_CHARS,
            ),
            "queries": (
                List[Annotated[str, Field(max_length=SEARCH_REQUEST_MAX_CHARS)]],
                Field(
                    ...,
                    min_length=1,
                    max_length=MAX_QUERIES_PER_STEP,
                    description=(
                        "Array of search keywords queries, orthogonal to each other. "
                        f"Maximum {MAX_QUERIES_PER_STEP} queries allowed. Each is a keyword-based search query, "
                        f"2-3 words preferred, total length < {SEARCH_REQUEST_MAX_CHARS} characters."
                    ),
                ),
            ),
        },
        doc="Search queries rewritten from a search intent.",
    )


__all__ = ["build_query_rewrite_schema"]
