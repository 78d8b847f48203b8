from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, List, Literal, Mapping, Optional, Tuple, Type, get_args

from pydantic import BaseModel, Field, field_validator, model_validator

from sleuth.constants import (
    DATETIME_MAX_CHARS,
    MAX_QUERIES_PER_STEP,
    MAX_REFLECT_PER_STEP,
    MAX_URLS_PER_STEP,
    SEARCH_REQUEST_MAX_CHARS,
    THINK_MAX_CHARS,
    URL_MAX_CHARS,
)
from sleuth.types import ACTION_PRIORITY, ActionCapabilities, ActionKind, ContractConfigError, LanguageSetting

from ._helpers import CONTRACT_CONFIG, coerce_string_list, compose_model, localize

SearchRequest = Annotated[
    str,
    Field(
        max_length=SEARCH_REQUEST_MAX_CHARS,
        description=(
            "A natural language search request. Based on the deep intention behind the original question "
            "and the expected answer format."
        ),
    ),
]


class SearchAction(BaseModel):
    model_config = CONTRACT_CONFIG

    searchRequests: List[SearchRequest] = Field(..., min_length=1, max_length=MAX_QUERIES_PER_STEP)

    @field_validator("searchRequests", mode="before")
    @classmethod
    def _clean_requests(cls, value: object) -> List[str]:
        return coerce_string_list(value)


class CodingAction(BaseModel):
    model_config = CONTRACT_CONFIG

    codingIssue: str = Field(
        ...,
        max_length=THINK_MAX_CHARS,
        description=(
            "Describe what issue to solve with coding, format like a github issue ticket. "
            "Specify the input value when it is short."
        ),
    )


class Reference(BaseModel):
    model_config = CONTRACT_CONFIG

    exactQuote: str = Field(
        ...,
        max_length=SEARCH_REQUEST_MAX_CHARS,
        description="Exact relevant quote from the document, must be a soundbite, short and to the point, no fluff",
    )
    url: str = Field(..., max_length=URL_MAX_CHARS, description="source URL; must be directly from the context")
    dateTime: str = Field(
        ...,
        max_length=DATETIME_MAX_CHARS,
        description=(
            "Apply this evidence hierarchy to determine the source timestamp: (1) Explicit dates in "
            "metadata/content, (2) Internal time references, (3) Contextual clues, (4) Version history if "
            "available. Format as YYYY-MM-DD when possible; otherwise provide narrowest defensible range."
        ),
    )


class AnswerAction(BaseModel):
    model_config = CONTRACT_CONFIG

    references: List[Reference] = Field(
        ...,
        description=(
            "Must be an array of references that support the answer, each reference must contain an exact quote "
            "and the URL of the document"
        ),
    )
    answer: str = Field(
        ...,
        description=(
            "Must be definitive, no ambiguity, uncertainty, or disclaimers. Use markdown footnote syntax "
            "like [^1], [^2] to refer the corresponding reference item."
        ),
    )


class ReflectAction(BaseModel):
    model_config = CONTRACT_CONFIG

    questionsToAnswer: List[str] = Field(
        default_factory=list,
        max_length=MAX_REFLECT_PER_STEP,
        description=(
            "each question must be a single line, Questions must be: Original (not variations of existing "
            "questions); Focused on single concepts; Under 20 words; Non-compound/non-complex"
        ),
    )

    @field_validator("questionsToAnswer", mode="before")
    @classmethod
    def _clean_questions(cls, value: object) -> List[str]:
        return coerce_string_list(value)


class VisitAction(BaseModel):
    model_config = CONTRACT_CONFIG

    URLTargets: List[str] = Field(default_factory=list, max_length=MAX_URLS_PER_STEP)

    @field_validator("URLTargets", mode="before")
    @classmethod
    def _clean_urls(cls, value: object) -> List[str]:
        return coerce_string_list(value)


@dataclass(frozen=True)
class ActionSpec:
    """One member of the closed action variant set."""

    kind: ActionKind
    model: Type[BaseModel]
    describe: Callable[[LanguageSetting], str]


def _describe_search(language: LanguageSetting) -> str:
    return (
        f"Required when action='search'. Requests written in {language.style}. Always prefer a single "
        "request, only add another request if the original question covers multiple aspects or elements "
        "and one search request is definitely not enough, each request focus on one specific aspect of the "
        "original question. Minimize mutual information between each request. "
        f"Maximum {MAX_QUERIES_PER_STEP} search requests."
    )


def _describe_coding(language: LanguageSetting) -> str:
    return "Required when action='coding'."


def _describe_answer(language: LanguageSetting) -> str:
    return f"Required when action='answer'. The answer must be in {language.style} and confident."


def _describe_reflect(language: LanguageSetting) -> str:
    return (
        "Required when action='reflect'. List of most important questions to fill the knowledge gaps of "
        f"finding the answer to the original question. Maximum provide {MAX_REFLECT_PER_STEP} reflect questions."
    )


def _describe_visit(language: LanguageSetting) -> str:
    return (
        "Required when action='visit'. Must be an array of URLs, choose up the most relevant "
        f"{MAX_URLS_PER_STEP} URLs to visit"
    )


_SPECS = {
    ActionKind.SEARCH: ActionSpec(ActionKind.SEARCH, SearchAction, _describe_search),
    ActionKind.CODING: ActionSpec(ActionKind.CODING, CodingAction, _describe_coding),
    ActionKind.ANSWER: ActionSpec(ActionKind.ANSWER, AnswerAction, _describe_answer),
    ActionKind.REFLECT: ActionSpec(ActionKind.REFLECT, ReflectAction, _describe_reflect),
    ActionKind.VISIT: ActionSpec(ActionKind.VISIT, VisitAction, _describe_visit),
}

# Fixed priority order, independent of how capability flags were set.
ACTION_CATALOG: Mapping[ActionKind, ActionSpec] = {kind: _SPECS[kind] for kind in ACTION_PRIORITY}

THINK_DESCRIPTION = (
    "Articulate your strategic reasoning process: (1) What specific information is still needed? "
    "(2) Why is this action most likely to provide that information? (3) What alternatives did you consider "
    "and why were they rejected? (4) How will this action advance toward the complete answer? "
    "Be concise yet thorough"
)


def _kind_of(value: Any) -> Optional[ActionKind]:
    try:
        return ActionKind(str(getattr(value, "value", value)))
    except ValueError:
        return None


class DecisionBase(BaseModel):
    """Behaviour shared by every composed decision model.

    Only the action-named field matching ``action`` is meaningful; other
    enabled action fields may be present and are ignored.
    """

    model_config = CONTRACT_CONFIG

    @model_validator(mode="before")
    @classmethod
    def _fold_flat_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        kind = _kind_of(data.get("action"))
        if kind is None or isinstance(data.get(kind.value), (dict, BaseModel)):
            return data
        fragment_keys = [key for key in ACTION_CATALOG[kind].model.model_fields if key in data]
        if not fragment_keys:
            return data
        folded = {key: value for key, value in data.items() if key not in fragment_keys}
        folded[kind.value] = {key: data[key] for key in fragment_keys}
        return folded

    @model_validator(mode="after")
    def _require_active_fragment(self) -> "DecisionBase":
        action = getattr(self, "action")
        if getattr(self, action, None) is None:
            raise ValueError(f"field '{action}' is required when action='{action}'")
        return self

    def active(self) -> BaseModel:
        """Return the fragment selected by ``action``."""

        return getattr(self, getattr(self, "action"))

    @classmethod
    def available_actions(cls) -> Tuple[str, ...]:
        return tuple(get_args(cls.model_fields["action"].annotation))


def enabled_actions(capabilities: ActionCapabilities) -> Tuple[ActionSpec, ...]:
    return tuple(spec for kind, spec in ACTION_CATALOG.items() if capabilities.allows(kind))


def build_decision_schema(capabilities: ActionCapabilities, language: LanguageSetting) -> Type[BaseModel]:
    """Compose the single-action decision contract for the enabled actions.

    ``language`` is read once here; the returned class keeps that text even if
    the profile resolves later.
    """

    specs = enabled_actions(capabilities)
    if not specs:
        raise ContractConfigError("At least one action must be enabled for a decision step")

    names = tuple(spec.kind.value for spec in specs)
    fields: Dict[str, Tuple[Any, Any]] = {
        "action": (
            Literal[names],  # type: ignore[valid-type]
            Field(
                ...,
                description="Choose exactly one best action from the available actions",
                json_schema_extra={"enum": list(names)},
            ),
        ),
    }
    for spec in specs:
        fields[spec.kind.value] = (Optional[spec.model], Field(default=None, description=spec.describe(language)))
    fields["think"] = (
        str,
        Field(..., max_length=THINK_MAX_CHARS, description=localize(THINK_DESCRIPTION, language.directive())),
    )

    return compose_model("DecisionV1", fields, base=DecisionBase, doc="Agent decision for one step.")


__all__ = [
    "SearchAction",
    "CodingAction",
    "Reference",
    "AnswerAction",
    "ReflectAction",
    "VisitAction",
    "ActionSpec",
    "ACTION_CATALOG",
    "DecisionBase",
    "enabled_actions",
    "build_decision_schema",
]
