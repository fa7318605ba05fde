"""Pydantic contracts shared by the match-scoring engine and the API."""

from models.schemas.match_record import (
    CandidateKind,
    GenerationOutcome,
    GenerationResult,
    MatchFactors,
    MatchRecord,
    MatchStatus,
)
from models.schemas.profiles import (
    AdvisorProfile,
    Availability,
    CandidateProfile,
    InvestorProfile,
    MoneyRange,
    Sector,
    Stage,
    StartupProfile,
)

__all__ = [
    "AdvisorProfile",
    "Availability",
    "CandidateKind",
    "CandidateProfile",
    "GenerationOutcome",
    "GenerationResult",
    "InvestorProfile",
    "MatchFactors",
    "MatchRecord",
    "MatchStatus",
    "MoneyRange",
    "Sector",
    "Stage",
    "StartupProfile",
]
