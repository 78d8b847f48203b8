from __future__ import annotations

import pytest
from pydantic import ValidationError

from sleuth.schemas import (
    AttributionAnalysis,
    CompletenessAnalysis,
    FreshnessAnalysis,
    PluralityAnalysis,
)
from sleuth.types import ContractConfigError, EvaluationType

ANALYSIS_FIELD = {
    "definitive": None,
    "freshness": "freshness_analysis",
    "plurality": "plurality_analysis",
    "attribution": "attribution_analysis",
    "completeness": "completeness_analysis",
}

SAMPLE_RECORDS = {
    "freshness": {"days_ago": 12, "max_age_days": 30},
    "plurality": {"count_expected": 3, "count_provided": 2},
    "attribution": {"sources_provided": True, "sources_verified": False, "quotes_accurate": True},
    "completeness": {"aspects_expected": "cost, speed", "aspects_provided": "cost"},
}


@pytest.mark.parametrize("tag", [t.value for t in EvaluationType])
def test_evaluator_fields_per_tag(composer, tag):
    model = composer.evaluator_schema(tag)
    schema = model.model_json_schema(by_alias=True)
    expected = {"pass", "think", "type"}
    if ANALYSIS_FIELD[tag]:
        expected.add(ANALYSIS_FIELD[tag])
    assert set(schema["properties"]) == expected
    assert schema["properties"]["think"]["maxLength"] == 500


@pytest.mark.parametrize("tag", [t.value for t in EvaluationType])
def test_evaluator_accepts_matching_payload(composer, tag):
    model = composer.evaluator_schema(EvaluationType(tag))
    payload = {"pass": False, "think": "Answer is outdated", "type": tag}
    if ANALYSIS_FIELD[tag]:
        payload[ANALYSIS_FIELD[tag]] = SAMPLE_RECORDS[tag]
    verdict = model.model_validate(payload)
    assert verdict.passed is False
    assert verdict.model_dump(by_alias=True)["pass"] is False
    record = verdict.analysis()
    if ANALYSIS_FIELD[tag]:
        assert record is not None
    else:
        assert record is None


def test_analysis_record_types(composer):
    assert isinstance(
        composer.evaluator_schema("freshness").model_validate(
            {"pass": True, "think": "ok", "type": "freshness", "freshness_analysis": {"days_ago": 1}}
        ).analysis(),
        FreshnessAnalysis,
    )
    built = {
        "plurality": PluralityAnalysis,
        "attribution": AttributionAnalysis,
        "completeness": CompletenessAnalysis,
    }
    for tag, record_cls in built.items():
        model = composer.evaluator_schema(tag)
        assert model.model_fields[ANALYSIS_FIELD[tag]].annotation is record_cls


def test_freshness_max_age_is_optional(composer):
    model = composer.evaluator_schema("freshness")
    verdict = model.model_validate(
        {"pass": True, "think": "recent", "type": "freshness", "freshness_analysis": {"days_ago": 2}}
    )
    assert verdict.freshness_analysis.max_age_days is None


def test_evaluator_rejects_wrong_type_tag(composer):
    model = composer.evaluator_schema("plurality")
    with pytest.raises(ValidationError):
        model.model_validate(
            {
                "pass": True,
                "think": "ok",
                "type": "freshness",
                "plurality_analysis": {"count_provided": 1},
            }
        )


def test_evaluator_rejects_missing_record(composer):
    model = composer.evaluator_schema("attribution")
    with pytest.raises(ValidationError):
        model.model_validate({"pass": True, "think": "ok", "type": "attribution"})


def test_evaluator_rejects_foreign_record(composer):
    model = composer.evaluator_schema("definitive")
    with pytest.raises(ValidationError):
        model.model_validate(
            {"pass": True, "think": "ok", "type": "definitive", "freshness_analysis": {"days_ago": 1}}
        )


def test_evaluator_think_cap(composer):
    model = composer.evaluator_schema("definitive")
    with pytest.raises(ValidationError):
        model.model_validate({"pass": True, "think": "x" * 501, "type": "definitive"})


@pytest.mark.parametrize("tag", ["strict", "", "FRESHNESS_V2", None])
def test_unknown_evaluation_type_is_config_error(composer, tag):
    with pytest.raises(ContractConfigError):
        composer.evaluator_schema(tag)


def test_evaluation_type_parse_is_case_insensitive():
    assert EvaluationType.parse(" Freshness ") is EvaluationType.FRESHNESS


def test_evaluator_think_is_localized(french_composer):
    model = french_composer.evaluator_schema("completeness")
    assert "lang:fr" in model.model_fields["think"].description
