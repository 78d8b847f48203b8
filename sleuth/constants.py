from __future__ import annotations

from dataclasses import dataclass

# Per-step list limits; callers compose prompt copy and UI limits from these.
MAX_URLS_PER_STEP = 2
MAX_QUERIES_PER_STEP = 5
MAX_REFLECT_PER_STEP = 3

# Per-field character caps.
LANG_CODE_MAX_CHARS = 10
LANG_STYLE_MAX_CHARS = 100
THINK_MAX_CHARS = 500
CODE_THINK_MAX_CHARS = 200
SEARCH_REQUEST_MAX_CHARS = 30
URL_MAX_CHARS = 100
DATETIME_MAX_CHARS = 16

# Length of the question sample that seeds language detection.
QUESTION_SAMPLE_CHARS = 100


@dataclass(frozen=True)
class ConstraintPolicy:
    """Bundle of the numeric/length bounds shared by every schema builder."""

    max_urls_per_step: int = MAX_URLS_PER_STEP
    max_queries_per_step: int = MAX_QUERIES_PER_STEP
    max_reflect_per_step: int = MAX_REFLECT_PER_STEP
    lang_code_max_chars: int = LANG_CODE_MAX_CHARS
    lang_style_max_chars: int = LANG_STYLE_MAX_CHARS
    think_max_chars: int = THINK_MAX_CHARS
    code_think_max_chars: int = CODE_THINK_MAX_CHARS
    search_request_max_chars: int = SEARCH_REQUEST_MAX_CHARS
    url_max_chars: int = URL_MAX_CHARS
    datetime_max_chars: int = DATETIME_MAX_CHARS
    question_sample_chars: int = QUESTION_SAMPLE_CHARS

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


DEFAULT_POLICY = ConstraintPolicy()


__all__ = [
    "MAX_URLS_PER_STEP",
    "MAX_QUERIES_PER_STEP",
    "MAX_REFLECT_PER_STEP",
    "LANG_CODE_MAX_CHARS",
    "LANG_STYLE_MAX_CHARS",
    "THINK_MAX_CHARS",
    "CODE_THINK_MAX_CHARS",
    "SEARCH_REQUEST_MAX_CHARS",
    "URL_MAX_CHARS",
    "DATETIME_MAX_CHARS",
    "QUESTION_SAMPLE_CHARS",
    "ConstraintPolicy",
    "DEFAULT_POLICY",
]
