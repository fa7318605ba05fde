"""Pure sub-score functions comparing a startup with a candidate.

Every scorer returns a float in [0, 100]. Rounding happens when the
match record is built, so the weighted total uses unrounded values.
"""

import logging

import numpy as np

from models.schemas.profiles import (
    STAGE_ORDER,
    AdvisorProfile,
    InvestorProfile,
    MoneyRange,
    Sector,
    Stage,
    StartupProfile,
)
from services.embedding_provider import EmbeddingProvider
from services.errors import EmbeddingUnavailable
from services.similarity import cosine_score

logger = logging.getLogger(__name__)

STAGE_STEP_PENALTY = 25  # points lost per stage of distance
EXPERIENCE_CAP_YEARS = 20
MAX_RATING = 5

# Location credit when the investor has a focus list that misses / has no focus list
LOCATION_OUTSIDE_FOCUS = 30.0
LOCATION_NO_PREFERENCE = 50.0


def sector_match(startup_sector: Sector, candidate_sectors: list[Sector]) -> float:
    """100 on a direct sector hit, 50 if the candidate covers "Other", else 0."""
    if startup_sector in candidate_sectors:
        return 100.0
    if Sector.OTHER in candidate_sectors:
        return 50.0
    return 0.0


def stage_match(startup_stage: Stage, preferred_stages: list[Stage]) -> float:
    """100 on an exact stage, then 25 points off per stage of distance."""
    if startup_stage in preferred_stages:
        return 100.0
    if not preferred_stages:
        return 0.0

    startup_idx = STAGE_ORDER.index(startup_stage)
    distance = min(abs(STAGE_ORDER.index(s) - startup_idx) for s in preferred_stages)
    return float(max(0, 100 - distance * STAGE_STEP_PENALTY))


def funding_match(funding_required: MoneyRange, investment_range: MoneyRange) -> float:
    """100 when the startup's mid-ask lies in the investor's range.

    Outside the range the score falls off linearly with the distance from
    the investor's midpoint, normalized by the investor's upper bound.
    """
    required = funding_required.midpoint
    if investment_range.min <= required <= investment_range.max:
        return 100.0
    if investment_range.max <= 0:
        return 0.0

    difference = abs(required - investment_range.midpoint)
    return max(0.0, 100.0 - (difference / investment_range.max) * 100.0)


def location_match(startup_location: str, geographic_focus: list[str] | None) -> float:
    focus = [loc.strip().lower() for loc in geographic_focus or [] if loc and loc.strip()]
    if not focus:
        return LOCATION_NO_PREFERENCE

    location = startup_location.strip().lower()
    if location and any(loc in location or location in loc for loc in focus):
        return 100.0
    return LOCATION_OUTSIDE_FOCUS


def experience_match(years_of_experience: float) -> float:
    return min(100.0, (years_of_experience / EXPERIENCE_CAP_YEARS) * 100.0)


def rating_match(average_rating: float) -> float:
    return (average_rating / MAX_RATING) * 100.0


# ---------------------------------------------------------------------------
# Semantic match
# ---------------------------------------------------------------------------

def startup_text(startup: StartupProfile) -> str:
    return " ".join([startup.name, startup.description, " ".join(startup.tags)]).strip()


def investor_text(investor: InvestorProfile) -> str:
    sectors = " ".join(s.value for s in investor.sectors)
    return " ".join([investor.bio, investor.looking_for, sectors]).strip()


def advisor_text(advisor: AdvisorProfile) -> str:
    return " ".join([
        advisor.bio,
        " ".join(advisor.specializations),
        " ".join(advisor.expertise_areas),
        " ".join(s.value for s in advisor.industries),
    ]).strip()


def semantic_match(
    embedder: EmbeddingProvider,
    startup_vector: np.ndarray | None,
    candidate_text: str,
) -> float:
    """Similarity between the startup's precomputed vector and the candidate text.

    Best-effort: a missing startup vector, blank candidate text or an
    embedding failure scores 0 instead of failing the candidate.
    """
    if startup_vector is None or not candidate_text:
        return 0.0
    try:
        candidate_vector = embedder.embed(candidate_text)
    except EmbeddingUnavailable as e:
        logger.debug("Semantic match degraded to 0: %s", e)
        return 0.0
    return cosine_score(startup_vector, candidate_vector)
