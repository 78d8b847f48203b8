"""Structured-output contracts for a research agent's steps."""

from sleuth.composer import SchemaComposer, Step
from sleuth.constants import (
    DEFAULT_POLICY,
    MAX_QUERIES_PER_STEP,
    MAX_REFLECT_PER_STEP,
    MAX_URLS_PER_STEP,
    ConstraintPolicy,
)
from sleuth.language import LanguageProfile
from sleuth.types import (
    ActionCapabilities,
    ActionKind,
    ContractConfigError,
    EvaluationType,
    LanguageSetting,
)

__all__ = [
    "SchemaComposer",
    "Step",
    "DEFAULT_POLICY",
    "MAX_QUERIES_PER_STEP",
    "MAX_REFLECT_PER_STEP",
    "MAX_URLS_PER_STEP",
    "ConstraintPolicy",
    "LanguageProfile",
    "ActionCapabilities",
    "ActionKind",
    "ContractConfigError",
    "EvaluationType",
    "LanguageSetting",
]
