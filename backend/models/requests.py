from pydantic import BaseModel, Field

from models.schemas.match_record import MatchStatus


class GenerateMatchesRequest(BaseModel):
    startup_id: str = Field(..., min_length=1, description="Startup to generate matches for")


class UpdateMatchStatusRequest(BaseModel):
    status: MatchStatus
    notes: str | None = Field(None, max_length=1000)
