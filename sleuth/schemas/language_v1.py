from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from sleuth.constants import LANG_CODE_MAX_CHARS, LANG_STYLE_MAX_CHARS

from ._helpers import CONTRACT_CONFIG


class LanguageDetectionV1(BaseModel):
    """Language code and tone detected from the user's question."""

    model_config = CONTRACT_CONFIG

    langCode: str = Field(..., max_length=LANG_CODE_MAX_CHARS, description="ISO 639-1 language code")
    langStyle: str = Field(
        ...,
        max_length=LANG_STYLE_MAX_CHARS,
        description=(
            "[vibe & tone] in [what language], such as formal english, informal chinese, "
            "technical german, humor english, slang, genZ, emojis etc."
        ),
    )

    @field_validator("langCode", "langStyle")
    @classmethod
    def _strip(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("language fields must be non-empty")
        return cleaned


__all__ = ["LanguageDetectionV1"]
