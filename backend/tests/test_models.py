import math

import pytest
from pydantic import ValidationError

from models.schemas import (
    KeywordSet,
    KeywordTier,
    ParsedResume,
    PipelinePhase,
    PipelineResult,
    TailorOptions,
)


@pytest.mark.parametrize("n", [0, 1, 2, 3, 4, 5, 10, 35])
def test_tier_sizes(n):
    ks = KeywordSet.from_terms([f"kw{i}" for i in range(n)])
    assert ks.total == n
    assert len(ks.high) == math.ceil(0.35 * n)
    assert len(ks.medium) == min(math.ceil(0.35 * n), n - len(ks.high))
    assert len(ks.high) + len(ks.medium) + len(ks.low) == n
    assert ks.all == ks.high + ks.medium + ks.low


def test_single_keyword_is_high():
    ks = KeywordSet.from_terms(["python"])
    assert ks.all[0].tier == KeywordTier.HIGH
    assert ks.medium == [] and ks.low == []


def test_from_terms_dedupes_case_insensitively_and_truncates():
    ks = KeywordSet.from_terms(["Python", "python", " AWS ", "", "Go"], max_keywords=2)
    assert ks.terms == ["Python", "AWS"]
    assert ks.all[1].normalized == "aws"


def test_inconsistent_tiers_rejected():
    ks = KeywordSet.from_terms(["a1", "b2"])
    with pytest.raises(ValidationError):
        KeywordSet(all=ks.all, high=ks.high, medium=[], low=[], total=5)


def test_keyword_set_is_frozen():
    ks = KeywordSet.from_terms(["a1"])
    with pytest.raises(ValidationError):
        ks.total = 3
    assert ks.with_timing(12.5).timing_ms == 12.5
    assert ks.timing_ms == 0


def test_parsed_resume_helpers():
    parsed = ParsedResume(skills="Go", education="BSc")
    assert parsed.sections_found == ["skills", "education"]
    assert not parsed.is_empty
    assert [name for name, _ in parsed.sections()] == [
        "summary", "experience", "skills", "education", "certifications",
    ]


def test_tailor_options_bounds():
    assert TailorOptions().strategy == "sections"
    with pytest.raises(ValidationError):
        TailorOptions(strategy="rewrite")
    with pytest.raises(ValidationError):
        TailorOptions(target_score=120)


def test_pipeline_result_is_frozen():
    result = PipelineResult(success=False, error="No keywords extracted", phase=PipelinePhase.FAILED)
    with pytest.raises(ValidationError):
        result.success = True
