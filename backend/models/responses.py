from pydantic import BaseModel

from models.schemas.match_record import MatchRecord


class HealthResponse(BaseModel):
    status: str = "ok"
    embedding_model: str = ""
    embedder_loaded: bool = False


class GenerateMatchesResponse(BaseModel):
    startup_id: str
    investors: list[MatchRecord] = []
    advisors: list[MatchRecord] = []
    total_matches: int = 0
    # kind -> error message, only for kinds whose generation failed
    errors: dict[str, str] = {}


class MatchListResponse(BaseModel):
    count: int = 0
    total_pages: int = 0
    current_page: int = 1
    data: list[MatchRecord] = []


class MatchTypeStats(BaseModel):
    type: str
    total: int = 0
    avg_score: float = 0.0
    contacted: int = 0
    accepted: int = 0
