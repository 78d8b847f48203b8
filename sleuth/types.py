from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class ContractConfigError(ValueError):
    """Raised when a schema is requested with an invalid configuration.

    Covers an evaluation type outside the closed tag set and a decision step
    with no enabled actions. Both are caller errors and abort composition.
    """


class EvaluationType(str, Enum):
    DEFINITIVE = "definitive"
    FRESHNESS = "freshness"
    PLURALITY = "plurality"
    ATTRIBUTION = "attribution"
    COMPLETENESS = "completeness"

    @classmethod
    def parse(cls, value: Union["EvaluationType", str]) -> "EvaluationType":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower()
        try:
            return cls(key)
        except ValueError as exc:
            raise ContractConfigError(f"Unknown evaluation type: {value!r}") from exc


class ActionKind(str, Enum):
    """Agent action kinds; declaration order is the fixed priority order."""

    SEARCH = "search"
    CODING = "coding"
    ANSWER = "answer"
    REFLECT = "reflect"
    VISIT = "visit"


ACTION_PRIORITY: Tuple[ActionKind, ...] = tuple(ActionKind)


@dataclass(frozen=True)
class ActionCapabilities:
    """Per-step capability flags gating which actions are offered."""

    search: bool = False
    coding: bool = False
    answer: bool = False
    reflect: bool = False
    visit: bool = False

    def allows(self, kind: ActionKind) -> bool:
        return bool(getattr(self, kind.value))

    def enabled(self) -> Tuple[ActionKind, ...]:
        return tuple(kind for kind in ACTION_PRIORITY if self.allows(kind))

    @classmethod
    def from_flags(
        cls,
        *,
        allow_reflect: bool = False,
        allow_read: bool = False,
        allow_answer: bool = False,
        allow_search: bool = False,
        allow_coding: bool = False,
    ) -> "ActionCapabilities":
        """Build from the agent loop's ``allow_*`` flags (``read`` maps to ``visit``)."""

        return cls(
            search=allow_search,
            coding=allow_coding,
            answer=allow_answer,
            reflect=allow_reflect,
            visit=allow_read,
        )

    @classmethod
    def of(cls, *kinds: Union[ActionKind, str]) -> "ActionCapabilities":
        flags = {}
        for kind in kinds:
            try:
                flags[ActionKind(str(getattr(kind, "value", kind)).strip().lower()).value] = True
            except ValueError as exc:
                raise ContractConfigError(f"Unknown action: {kind!r}") from exc
        return cls(**flags)

    @classmethod
    def all_enabled(cls) -> "ActionCapabilities":
        return cls(search=True, coding=True, answer=True, reflect=True, visit=True)


@dataclass(frozen=True)
class LanguageSetting:
    """Resolved language code and descriptive style, published as one unit."""

    code: str
    style: str

    def directive(self) -> str:
        return f"first-person, lang:{self.code}, style:{self.style}"


DEFAULT_LANGUAGE = LanguageSetting(code="en", style="formal English")


__all__ = [
    "ContractConfigError",
    "EvaluationType",
    "ActionKind",
    "ACTION_PRIORITY",
    "ActionCapabilities",
    "LanguageSetting",
    "DEFAULT_LANGUAGE",
]
