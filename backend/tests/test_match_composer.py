"""Tests for weighted totals, reasons and highlights."""

import math

import pytest

from models.schemas.match_record import CandidateKind, MatchStatus
from models.schemas.profiles import AdvisorProfile, InvestorProfile, StartupProfile
from services.match_composer import (
    ADVISOR_WEIGHTS,
    FALLBACK_REASON,
    INVESTOR_WEIGHTS,
    MAX_HIGHLIGHTS,
    advisor_scores,
    compose_match,
    investor_scores,
    weighted_total,
)

from conftest import advisor_doc, investor_doc, startup_doc


@pytest.fixture
def startup() -> StartupProfile:
    return StartupProfile.model_validate(startup_doc())


def _investor(**overrides) -> InvestorProfile:
    return InvestorProfile.model_validate(investor_doc("i1", **overrides))


def _advisor(**overrides) -> AdvisorProfile:
    return AdvisorProfile.model_validate(advisor_doc("a1", **overrides))


class TestWeights:
    def test_investor_weights_sum_to_one(self):
        assert math.fsum(INVESTOR_WEIGHTS.values()) == 1.0

    def test_advisor_weights_sum_to_one(self):
        assert math.fsum(ADVISOR_WEIGHTS.values()) == 1.0


class TestInvestorComposition:
    def test_total_is_weighted_sum(self, startup):
        investor = _investor()
        scored = compose_match(startup, investor, semantic=60)
        scores = investor_scores(startup, investor, 60)
        # sector 100, stage 100, funding 100, location 50 (no focus), semantic 60
        expected = 100 * 0.25 + 100 * 0.20 + 100 * 0.20 + 50 * 0.10 + 60 * 0.25
        assert scored.total == pytest.approx(expected)
        assert scored.total == pytest.approx(weighted_total(scores, INVESTOR_WEIGHTS))
        assert scored.record.score == round(expected)

    def test_record_fields(self, startup):
        record = compose_match(startup, _investor(), semantic=0).record
        assert record.startup_id == "s1"
        assert record.candidate_id == "i1"
        assert record.candidate_kind == CandidateKind.INVESTOR
        assert record.type == CandidateKind.INVESTOR
        assert record.status == MatchStatus.RECOMMENDED
        assert record.is_active is True
        assert record.id is None

    def test_only_investor_factors_populated(self, startup):
        factors = compose_match(startup, _investor(), semantic=40).record.match_factors
        assert factors.sector_match == 100
        assert factors.stage_match == 100
        assert factors.funding_match == 100
        assert factors.location_match == 50
        assert factors.semantic_match == 40
        assert factors.experience_match is None
        assert factors.rating_match is None

    def test_total_within_bounds(self, startup):
        worst = _investor(
            sectors=["Healthtech"], preferred_stages=["Growth"],
            investment_range={"min": 10, "max": 20}, geographic_focus=["Mars"],
        )
        best = compose_match(startup, _investor(geographic_focus=["Berlin"]), semantic=100)
        low = compose_match(startup, worst, semantic=0)
        assert best.record.score == 100
        assert 0 <= low.record.score <= 100

    def test_reason_rules(self, startup):
        record = compose_match(startup, _investor(), semantic=80).record
        assert record.reason == (
            "Strong sector alignment, Perfect stage match, "
            "Funding range fits well, High interest alignment"
        )

    def test_fallback_reason(self, startup):
        weak = _investor(
            sectors=["Healthtech"], preferred_stages=["Growth"],
            investment_range={"min": 10, "max": 20},
        )
        assert compose_match(startup, weak, semantic=0).record.reason == FALLBACK_REASON

    def test_highlights(self, startup):
        investor = _investor(sectors=["Fintech", "SaaS"], previous_investments=12)
        highlights = compose_match(startup, investor, semantic=0).record.highlights
        assert highlights == [
            "Invests in Fintech, SaaS",
            "Focuses on Seed stage",
            "12 previous investments",
        ]


class TestAdvisorComposition:
    def test_total_is_weighted_sum(self, startup):
        advisor = _advisor(years_of_experience=10, average_rating=4.0)
        scored = compose_match(startup, advisor, semantic=50)
        # industry 100, experience 50, semantic 50, rating 80
        expected = 100 * 0.30 + 50 * 0.25 + 50 * 0.30 + 80 * 0.15
        assert scored.total == pytest.approx(expected)
        assert scored.total == pytest.approx(
            weighted_total(advisor_scores(startup, advisor, 50), ADVISOR_WEIGHTS)
        )

    def test_only_advisor_factors_populated(self, startup):
        record = compose_match(startup, _advisor(years_of_experience=25), semantic=10).record
        assert record.candidate_kind == CandidateKind.ADVISOR
        assert record.match_factors.experience_match == 100
        assert record.match_factors.rating_match == 80
        assert record.match_factors.stage_match is None
        assert record.match_factors.funding_match is None
        assert record.match_factors.location_match is None

    def test_reason_rules(self, startup):
        advisor = _advisor(years_of_experience=18, average_rating=4.5)
        record = compose_match(startup, advisor, semantic=75).record
        assert record.reason == (
            "Industry expertise match, Extensive experience, "
            "Relevant background, Highly rated advisor"
        )

    def test_highlights(self, startup):
        advisor = _advisor(
            years_of_experience=15,
            average_rating=4.3,
            specializations=["Operations", "Growth Strategy", "Marketing & Sales"],
        )
        highlights = compose_match(startup, advisor, semantic=0).record.highlights
        assert highlights == [
            "Expert in Fintech",
            "15+ years of experience",
            "4.3⭐ rating",
            "Specializes in Operations, Growth Strategy",
        ]
        assert len(highlights) <= MAX_HIGHLIGHTS

    def test_low_rating_not_highlighted(self, startup):
        advisor = _advisor(industries=["Edtech"], average_rating=3.9, specializations=[])
        highlights = compose_match(startup, advisor, semantic=0).record.highlights
        assert highlights == ["12+ years of experience"]


def test_unknown_candidate_type(startup):
    with pytest.raises(TypeError):
        compose_match(startup, object(), semantic=0)
