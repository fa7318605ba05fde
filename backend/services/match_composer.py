"""Combine sub-scores into a weighted total and build the match record.

Each candidate kind has a fixed weight table and a fixed set of
applicable factors. Reasons and highlights are template rules gated by
sub-score thresholds.
"""

import logging
from dataclasses import dataclass

from models.schemas.match_record import CandidateKind, MatchFactors, MatchRecord
from models.schemas.profiles import AdvisorProfile, InvestorProfile, StartupProfile
from services import attribute_scorers as scorers

logger = logging.getLogger(__name__)

INVESTOR_WEIGHTS: dict[str, float] = {
    "sector": 0.25,
    "stage": 0.20,
    "funding": 0.20,
    "location": 0.10,
    "semantic": 0.25,
}

ADVISOR_WEIGHTS: dict[str, float] = {
    "industry": 0.30,
    "experience": 0.25,
    "semantic": 0.30,
    "rating": 0.15,
}

FALLBACK_REASON = "Potential good fit based on profile analysis"
MAX_REASON_LENGTH = 500
MAX_HIGHLIGHTS = 4


@dataclass
class ScoredMatch:
    """A match record draft plus the unrounded total used for thresholding."""
    record: MatchRecord
    total: float


def weighted_total(scores: dict[str, float], weights: dict[str, float]) -> float:
    return sum(scores[name] * weight for name, weight in weights.items())


def _pct(value: float) -> int:
    return min(100, max(0, round(value)))


def candidate_text(candidate: InvestorProfile | AdvisorProfile) -> str:
    """Free text embedded for the semantic factor."""
    if isinstance(candidate, InvestorProfile):
        return scorers.investor_text(candidate)
    if isinstance(candidate, AdvisorProfile):
        return scorers.advisor_text(candidate)
    raise TypeError(f"Unsupported candidate type: {type(candidate).__name__}")


def compose_match(
    startup: StartupProfile,
    candidate: InvestorProfile | AdvisorProfile,
    semantic: float,
) -> ScoredMatch:
    """Score a candidate against a startup given its semantic sub-score."""
    if isinstance(candidate, InvestorProfile):
        return _compose_investor(startup, candidate, semantic)
    if isinstance(candidate, AdvisorProfile):
        return _compose_advisor(startup, candidate, semantic)
    raise TypeError(f"Unsupported candidate type: {type(candidate).__name__}")


# ---------------------------------------------------------------------------
# Investors
# ---------------------------------------------------------------------------

def investor_scores(
    startup: StartupProfile,
    investor: InvestorProfile,
    semantic: float,
) -> dict[str, float]:
    return {
        "sector": scorers.sector_match(startup.sector, investor.sectors),
        "stage": scorers.stage_match(startup.stage, investor.preferred_stages),
        "funding": scorers.funding_match(startup.funding_required, investor.investment_range),
        "location": scorers.location_match(startup.location, investor.geographic_focus),
        "semantic": semantic,
    }


def _investor_reason(scores: dict[str, float]) -> str:
    reasons: list[str] = []
    if scores["sector"] >= 80:
        reasons.append("Strong sector alignment")
    if scores["stage"] >= 80:
        reasons.append("Perfect stage match")
    if scores["funding"] >= 80:
        reasons.append("Funding range fits well")
    if scores["semantic"] >= 70:
        reasons.append("High interest alignment")
    return _join_reasons(reasons)


def _investor_highlights(scores: dict[str, float], investor: InvestorProfile) -> list[str]:
    highlights: list[str] = []
    if scores["sector"] >= 80:
        highlights.append(f"Invests in {', '.join(s.value for s in investor.sectors)}")
    if scores["stage"] >= 80:
        highlights.append(f"Focuses on {', '.join(s.value for s in investor.preferred_stages)} stage")
    if investor.previous_investments > 0:
        highlights.append(f"{investor.previous_investments} previous investments")
    return highlights[:MAX_HIGHLIGHTS]


def _compose_investor(
    startup: StartupProfile,
    investor: InvestorProfile,
    semantic: float,
) -> ScoredMatch:
    scores = investor_scores(startup, investor, semantic)
    total = weighted_total(scores, INVESTOR_WEIGHTS)

    record = MatchRecord(
        startup_id=startup.id,
        candidate_id=investor.id,
        candidate_kind=CandidateKind.INVESTOR,
        type=CandidateKind.INVESTOR,
        score=_pct(total),
        match_factors=MatchFactors(
            sector_match=_pct(scores["sector"]),
            stage_match=_pct(scores["stage"]),
            funding_match=_pct(scores["funding"]),
            location_match=_pct(scores["location"]),
            semantic_match=_pct(scores["semantic"]),
        ),
        reason=_investor_reason(scores),
        highlights=_investor_highlights(scores, investor),
    )
    return ScoredMatch(record=record, total=total)


# ---------------------------------------------------------------------------
# Advisors
# ---------------------------------------------------------------------------

def advisor_scores(
    startup: StartupProfile,
    advisor: AdvisorProfile,
    semantic: float,
) -> dict[str, float]:
    return {
        "industry": scorers.sector_match(startup.sector, advisor.industries),
        "experience": scorers.experience_match(advisor.years_of_experience),
        "semantic": semantic,
        "rating": scorers.rating_match(advisor.average_rating),
    }


def _advisor_reason(scores: dict[str, float]) -> str:
    reasons: list[str] = []
    if scores["industry"] >= 80:
        reasons.append("Industry expertise match")
    if scores["experience"] >= 70:
        reasons.append("Extensive experience")
    if scores["semantic"] >= 70:
        reasons.append("Relevant background")
    if scores["rating"] >= 80:
        reasons.append("Highly rated advisor")
    return _join_reasons(reasons)


def _advisor_highlights(scores: dict[str, float], advisor: AdvisorProfile) -> list[str]:
    highlights: list[str] = []
    if scores["industry"] >= 80:
        highlights.append(f"Expert in {', '.join(s.value for s in advisor.industries)}")
    highlights.append(f"{advisor.years_of_experience:g}+ years of experience")
    if advisor.average_rating >= 4:
        highlights.append(f"{advisor.average_rating:.1f}⭐ rating")
    if advisor.specializations:
        highlights.append(f"Specializes in {', '.join(advisor.specializations[:2])}")
    return highlights[:MAX_HIGHLIGHTS]


def _compose_advisor(
    startup: StartupProfile,
    advisor: AdvisorProfile,
    semantic: float,
) -> ScoredMatch:
    scores = advisor_scores(startup, advisor, semantic)
    total = weighted_total(scores, ADVISOR_WEIGHTS)

    record = MatchRecord(
        startup_id=startup.id,
        candidate_id=advisor.id,
        candidate_kind=CandidateKind.ADVISOR,
        type=CandidateKind.ADVISOR,
        score=_pct(total),
        match_factors=MatchFactors(
            sector_match=_pct(scores["industry"]),
            experience_match=_pct(scores["experience"]),
            rating_match=_pct(scores["rating"]),
            semantic_match=_pct(scores["semantic"]),
        ),
        reason=_advisor_reason(scores),
        highlights=_advisor_highlights(scores, advisor),
    )
    return ScoredMatch(record=record, total=total)


def _join_reasons(reasons: list[str]) -> str:
    if not reasons:
        return FALLBACK_REASON
    return ", ".join(reasons)[:MAX_REASON_LENGTH]
