"""Read-only profile contracts consumed by the match-scoring engine."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Sector(str, Enum):
    FINTECH = "Fintech"
    EDTECH = "Edtech"
    HEALTHTECH = "Healthtech"
    ECOMMERCE = "E-commerce"
    SAAS = "SaaS"
    AI_ML = "AI/ML"
    BLOCKCHAIN = "Blockchain"
    IOT = "IoT"
    CLEANTECH = "Cleantech"
    AGRITECH = "Agritech"
    FOODTECH = "Foodtech"
    PROPTECH = "Proptech"
    LOGISTICS = "Logistics"
    ENTERTAINMENT = "Entertainment"
    OTHER = "Other"


class Stage(str, Enum):
    IDEA = "Idea"
    PRE_SEED = "Pre-seed"
    SEED = "Seed"
    SERIES_A = "Series A"
    SERIES_B = "Series B"
    SERIES_C_PLUS = "Series C+"
    GROWTH = "Growth"


# Funding stages from earliest to latest; stage proximity is measured along this order.
STAGE_ORDER: list[Stage] = list(Stage)


class Availability(str, Enum):
    AVAILABLE = "Available"
    LIMITED = "Limited"
    NOT_AVAILABLE = "Not Available"


class MoneyRange(BaseModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    currency: str = "USD"

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


class StartupProfile(BaseModel):
    id: str
    name: str
    sector: Sector
    stage: Stage
    description: str
    funding_required: MoneyRange
    tags: list[str] = []
    location: str = ""


class InvestorProfile(BaseModel):
    """An investor candidate.

    ``previous_investments`` is the count of prior deals, not the deal list.
    """
    kind: Literal["Investor"] = "Investor"
    id: str
    name: str = ""
    sectors: list[Sector] = []
    preferred_stages: list[Stage] = []
    investment_range: MoneyRange
    geographic_focus: list[str] | None = None
    bio: str = ""
    looking_for: str = ""
    previous_investments: int = Field(0, ge=0)


class AdvisorProfile(BaseModel):
    """An advisor candidate.

    ``average_rating`` is maintained elsewhere as the mean of review ratings.
    """
    kind: Literal["Advisor"] = "Advisor"
    id: str
    name: str = ""
    industries: list[Sector] = []
    years_of_experience: float = Field(..., ge=0)
    bio: str = ""
    specializations: list[str] = []
    expertise_areas: list[str] = []
    average_rating: float = Field(0.0, ge=0, le=5)
    availability: Availability = Availability.AVAILABLE


CandidateProfile = Annotated[
    Union[InvestorProfile, AdvisorProfile],
    Field(discriminator="kind"),
]
