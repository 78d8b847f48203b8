from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Type, Union

from pydantic import BaseModel

from sleuth.constants import DEFAULT_POLICY, ConstraintPolicy
from sleuth.language import LanguageProfile
from sleuth.prompts import with_directive
from sleuth.schemas import (
    LanguageDetectionV1,
    build_code_schema,
    build_decision_schema,
    build_error_analysis_schema,
    build_evaluator_schema,
    build_gap_check_schema,
    build_query_rewrite_schema,
)
from sleuth.schemas._helpers import provider_schema
from sleuth.types import ActionCapabilities, ContractConfigError, EvaluationType


class Step(str, Enum):
    LANGUAGE = "language"
    GAP_CHECK = "gap_check"
    CODE = "code"
    ERROR_ANALYSIS = "error_analysis"
    QUERY_REWRITE = "query_rewrite"
    EVALUATOR = "evaluator"
    DECISION = "decision"

    @classmethod
    def parse(cls, value: Union["Step", str]) -> "Step":
        if isinstance(value, cls):
            return value
        key = str(value or "").strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError as exc:
            raise ContractConfigError(f"Unknown step: {value!r}") from exc


class SchemaComposer:
    """Builds the output contract for each agent step.

    Holds no state of its own beyond the language profile it reads. Every
    builder returns a new model class; localized descriptions are captured
    from the profile when the builder runs.
    """

    def __init__(self, profile: Optional[LanguageProfile] = None) -> None:
        self._profile = profile or LanguageProfile("")

    @property
    def profile(self) -> LanguageProfile:
        return self._profile

    @property
    def policy(self) -> ConstraintPolicy:
        return DEFAULT_POLICY

    def language_schema(self) -> Type[BaseModel]:
        return LanguageDetectionV1

    def gap_check_schema(self) -> Type[BaseModel]:
        return build_gap_check_schema(self._profile.directive())

    def code_schema(self) -> Type[BaseModel]:
        return build_code_schema(self._profile.directive())

    def error_analysis_schema(self) -> Type[BaseModel]:
        return build_error_analysis_schema(self._profile.directive())

    def query_rewrite_schema(self) -> Type[BaseModel]:
        return build_query_rewrite_schema(self._profile.directive())

    def evaluator_schema(self, eval_type: Union[EvaluationType, str]) -> Type[BaseModel]:
        return build_evaluator_schema(eval_type, self._profile.directive())

    def decision_schema(self, capabilities: ActionCapabilities) -> Type[BaseModel]:
        return build_decision_schema(capabilities, self._profile.setting)

    def for_step(
        self,
        step: Union[Step, str],
        *,
        eval_type: Union[EvaluationType, str, None] = None,
        capabilities: Optional[ActionCapabilities] = None,
    ) -> Type[BaseModel]:
        """Dispatch to the builder for ``step``."""

        kind = Step.parse(step)
        if kind is Step.EVALUATOR:
            if eval_type is None:
                raise ContractConfigError("evaluator step requires an evaluation type")
            return self.evaluator_schema(eval_type)
        if kind is Step.DECISION:
            if capabilities is None:
                raise ContractConfigError("decision step requires a capability set")
            return self.decision_schema(capabilities)
        builders = {
            Step.LANGUAGE: self.language_schema,
            Step.GAP_CHECK: self.gap_check_schema,
            Step.CODE: self.code_schema,
            Step.ERROR_ANALYSIS: self.error_analysis_schema,
            Step.QUERY_REWRITE: self.query_rewrite_schema,
        }
        return builders[kind]()

    def localize_prompt(self, text: str) -> str:
        """Append the current language directive to a step prompt."""

        return with_directive(text, self._profile.directive())

    @staticmethod
    def json_schema(model: Type[BaseModel]) -> Dict[str, Any]:
        """Provider-ready ``{"name", "schema", "strict"}`` block for a composed model."""

        return provider_schema(model)


__all__ = ["Step", "SchemaComposer"]
