"""Match records produced by generation and mutated by the match lifecycle."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class CandidateKind(str, Enum):
    INVESTOR = "Investor"
    ADVISOR = "Advisor"


class MatchStatus(str, Enum):
    RECOMMENDED = "Recommended"
    VIEWED = "Viewed"
    CONTACTED = "Contacted"
    IN_DISCUSSION = "In Discussion"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    CLOSED = "Closed"


class MatchFactors(BaseModel):
    """Per-factor breakdown, each 0-100. Factors that do not apply to the
    candidate kind are left as None."""
    sector_match: int | None = Field(None, ge=0, le=100)  # sector or industry
    stage_match: int | None = Field(None, ge=0, le=100)
    funding_match: int | None = Field(None, ge=0, le=100)
    location_match: int | None = Field(None, ge=0, le=100)
    experience_match: int | None = Field(None, ge=0, le=100)
    rating_match: int | None = Field(None, ge=0, le=100)
    semantic_match: int | None = Field(None, ge=0, le=100)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MatchRecord(BaseModel):
    id: str | None = None  # assigned by the match store on insert
    startup_id: str
    candidate_id: str
    candidate_kind: CandidateKind
    type: CandidateKind
    score: int = Field(..., ge=0, le=100)
    match_factors: MatchFactors = Field(default_factory=MatchFactors)
    reason: str = Field(..., max_length=500)
    highlights: list[str] = []
    status: MatchStatus = MatchStatus.RECOMMENDED
    notes: str | None = Field(None, max_length=1000)
    is_active: bool = True
    viewed_at: datetime | None = None
    contacted_at: datetime | None = None
    created_at: datetime = Field(default_factory=_utcnow)


class GenerationOutcome(BaseModel):
    """Result of one kind's pipeline. ``succeeded=False`` means the run
    failed; an empty ``matches`` with ``succeeded=True`` means nothing
    cleared the threshold."""
    kind: CandidateKind
    succeeded: bool = True
    matches: list[MatchRecord] = []
    error: str | None = None


class GenerationResult(BaseModel):
    startup_id: str
    investors: GenerationOutcome
    advisors: GenerationOutcome

    @property
    def investor_matches(self) -> list[MatchRecord]:
        return self.investors.matches

    @property
    def advisor_matches(self) -> list[MatchRecord]:
        return self.advisors.matches

    @property
    def total_matches(self) -> int:
        return len(self.investors.matches) + len(self.advisors.matches)
