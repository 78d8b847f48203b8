"""Structured-output contracts for every agent step."""

from sleuth.types import ContractConfigError

from .language_v1 import LanguageDetectionV1
from .gap_check_v1 import build_gap_check_schema
from .code_v1 import CODE_CONTENT_RULES, build_code_schema
from .error_analysis_v1 import build_error_analysis_schema
from .query_rewrite_v1 import build_query_rewrite_schema
from .evaluator_v1 import (
    ANALYSIS_FIELDS,
    AttributionAnalysis,
    CompletenessAnalysis,
    EvaluatorBase,
    FreshnessAnalysis,
    PluralityAnalysis,
    build_evaluator_schema,
)
from .decision_v1 import (
    ACTION_CATALOG,
    ActionSpec,
    AnswerAction,
    CodingAction,
    DecisionBase,
    Reference,
    ReflectAction,
    SearchAction,
    VisitAction,
    build_decision_schema,
    enabled_actions,
)

__all__ = [
    "ContractConfigError",
    "LanguageDetectionV1",
    "build_gap_check_schema",
    "CODE_CONTENT_RULES",
    "build_code_schema",
    "build_error_analysis_schema",
    "build_query_rewrite_schema",
    "ANALYSIS_FIELDS",
    "AttributionAnalysis",
    "CompletenessAnalysis",
    "EvaluatorBase",
    "FreshnessAnalysis",
    "PluralityAnalysis",
    "build_evaluator_schema",
    "ACTION_CATALOG",
    "ActionSpec",
    "AnswerAction",
    "CodingAction",
    "DecisionBase",
    "Reference",
    "ReflectAction",
    "SearchAction",
    "VisitAction",
    "build_decision_schema",
    "enabled_actions",
]
