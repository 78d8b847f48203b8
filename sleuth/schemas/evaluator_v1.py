from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Tuple, Type, Union

from pydantic import BaseModel, Field

from sleuth.constants import THINK_MAX_CHARS
from sleuth.types import EvaluationType

from ._helpers import CONTRACT_CONFIG, compose_model, localized_text


class FreshnessAnalysis(BaseModel):
    model_config = CONTRACT_CONFIG

    days_ago: float = Field(
        ...,
        description="Inferred dates or timeframes mentioned in the answer and relative to the current time",
    )
    max_age_days: Optional[float] = Field(
        default=None,
        description="Maximum allowed age in days before content is considered outdated",
    )


class PluralityAnalysis(BaseModel):
    model_config = CONTRACT_CONFIG

    count_expected: Optional[int] = Field(
        default=None, description="Number of items expected if specified in question"
    )
    count_provided: int = Field(..., description="Number of items provided in answer")


class AttributionAnalysis(BaseModel):
    model_config = CONTRACT_CONFIG

    sources_provided: bool = Field(..., description="Whether the answer provides source references")
    sources_verified: bool = Field(..., description="Whether the provided sources contain the claimed information")
    quotes_accurate: bool = Field(..., description="Whether the quotes accurately represent the source content")


class CompletenessAnalysis(BaseModel):
    model_config = CONTRACT_CONFIG

    aspects_expected: str = Field(
        ...,
        description="Comma-separated list of all aspects or dimensions that the question explicitly asks for.",
    )
    aspects_provided: str = Field(
        ...,
        description="Comma-separated list of all aspects or dimensions that were actually addressed in the answer",
    )


class EvaluatorBase(BaseModel):
    """Shared behaviour of every composed evaluator model."""

    model_config = CONTRACT_CONFIG

    def analysis(self) -> Optional[BaseModel]:
        """Return the tag-specific analysis record, if the variant carries one."""

        field_name = ANALYSIS_FIELDS.get(EvaluationType(getattr(self, "type")))
        if field_name is None:
            return None
        return getattr(self, field_name)


# Tag -> (field name, record model). ``definitive`` carries no analysis record.
EVALUATION_RECORDS: Dict[EvaluationType, Optional[Tuple[str, Type[BaseModel]]]] = {
    EvaluationType.DEFINITIVE: None,
    EvaluationType.FRESHNESS: ("freshness_analysis", FreshnessAnalysis),
    EvaluationType.PLURALITY: ("plurality_analysis", PluralityAnalysis),
    EvaluationType.ATTRIBUTION: ("attribution_analysis", AttributionAnalysis),
    EvaluationType.COMPLETENESS: ("completeness_analysis", CompletenessAnalysis),
}

ANALYSIS_FIELDS: Dict[EvaluationType, str] = {
    tag: record[0] for tag, record in EVALUATION_RECORDS.items() if record is not None
}


def build_evaluator_schema(eval_type: Union[EvaluationType, str], directive: str) -> Type[BaseModel]:
    """Compose the pass/fail contract for one evaluation type.

    Raises ``ContractConfigError`` for a tag outside the closed set.
    """

    tag = EvaluationType.parse(eval_type)
    fields: Dict[str, Tuple[Any, Any]] = {
        "passed": (
            bool,
            Field(
                ...,
                alias="pass",
                description="Whether the answer passes the evaluation criteria defined by the evaluator",
            ),
        ),
        "think": localized_text(
            "Explanation the thought process why the answer does not pass the evaluation criteria",
            directive,
            max_length=THINK_MAX_CHARS,
        ),
        "type": (Literal[tag.value], Field(..., description="Evaluation type this judgment answers")),  # type: ignore[valid-type]
    }
    record = EVALUATION_RECORDS[tag]
    if record is not None:
        field_name, record_model = record
        fields[field_name] = (record_model, Field(...))

    model_name = f"{tag.value.capitalize()}EvaluationV1"
    return compose_model(model_name, fields, base=EvaluatorBase, doc=f"Evaluator verdict ({tag.value}).")


__all__ = [
    "FreshnessAnalysis",
    "PluralityAnalysis",
    "AttributionAnalysis",
    "CompletenessAnalysis",
    "EvaluatorBase",
    "EVALUATION_RECORDS",
    "ANALYSIS_FIELDS",
    "build_evaluator_schema",
]
