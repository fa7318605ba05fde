from fastapi import APIRouter, Depends, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_embedder, get_match_generator, get_match_store, get_profile_store
from config import settings
from models.requests import GenerateMatchesRequest, UpdateMatchStatusRequest
from models.responses import (
    GenerateMatchesResponse,
    HealthResponse,
    MatchListResponse,
    MatchTypeStats,
)
from models.schemas.match_record import CandidateKind, MatchRecord, MatchStatus
from services import match_lifecycle
from services.embedding_provider import EmbeddingProvider
from services.errors import InvalidProfile, NotFound
from services.match_generator import MatchGenerator
from services.match_store import MatchStore
from services.profile_store import ProfileStore

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health(embedder: EmbeddingProvider = Depends(get_embedder)):
    return HealthResponse(
        status="ok",
        embedding_model=embedder.model_name,
        embedder_loaded=embedder.is_loaded,
    )


@router.post("/matches/generate", response_model=GenerateMatchesResponse)
@limiter.limit(settings.generate_rate_limit)
async def generate_matches(
    request: Request,
    body: GenerateMatchesRequest,
    generator: MatchGenerator = Depends(get_match_generator),
):
    try:
        result = await generator.generate_matches(body.startup_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidProfile as e:
        raise HTTPException(status_code=422, detail=str(e))

    outcomes = (result.investors, result.advisors)
    errors = {o.kind.value: o.error or "generation failed" for o in outcomes if not o.succeeded}
    if len(errors) == len(outcomes):
        raise HTTPException(status_code=503, detail=f"Match generation failed: {errors}")

    return GenerateMatchesResponse(
        startup_id=result.startup_id,
        investors=result.investor_matches,
        advisors=result.advisor_matches,
        total_matches=result.total_matches,
        errors=errors,
    )


@router.get("/matches/investor/{investor_id}", response_model=MatchListResponse)
async def get_matches_for_investor(
    investor_id: str,
    status: MatchStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    matches: MatchStore = Depends(get_match_store),
):
    records = await matches.find_matches(
        candidate_id=investor_id, kind=CandidateKind.INVESTOR, status=status
    )
    return _page(records, page, limit)


@router.get("/matches/advisor/{advisor_id}", response_model=MatchListResponse)
async def get_matches_for_advisor(
    advisor_id: str,
    status: MatchStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    matches: MatchStore = Depends(get_match_store),
):
    records = await matches.find_matches(
        candidate_id=advisor_id, kind=CandidateKind.ADVISOR, status=status
    )
    return _page(records, page, limit)


@router.get("/matches/detail/{match_id}", response_model=MatchRecord)
async def get_match(match_id: str, matches: MatchStore = Depends(get_match_store)):
    return await _get_or_404(matches, match_id)


@router.put("/matches/{match_id}/status", response_model=MatchRecord)
async def update_match_status(
    match_id: str,
    body: UpdateMatchStatusRequest,
    matches: MatchStore = Depends(get_match_store),
):
    record = await _get_or_404(matches, match_id)
    updated = match_lifecycle.apply_status_change(record, body.status, body.notes)
    return await matches.save_match(updated)


@router.delete("/matches/{match_id}", response_model=MatchRecord)
async def delete_match(match_id: str, matches: MatchStore = Depends(get_match_store)):
    record = await _get_or_404(matches, match_id)
    return await matches.save_match(match_lifecycle.soft_delete(record))


@router.get("/matches/{startup_id}/stats", response_model=list[MatchTypeStats])
async def get_match_stats(startup_id: str, matches: MatchStore = Depends(get_match_store)):
    records = await matches.find_matches(startup_id=startup_id)
    return match_lifecycle.summarize_matches(records)


@router.get("/matches/{startup_id}", response_model=MatchListResponse)
async def get_matches(
    startup_id: str,
    kind: CandidateKind | None = Query(None, alias="type"),
    status: MatchStatus | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    profiles: ProfileStore = Depends(get_profile_store),
    matches: MatchStore = Depends(get_match_store),
):
    if await profiles.load_startup(startup_id) is None:
        raise HTTPException(status_code=404, detail="Startup not found")

    records = await matches.find_matches(startup_id=startup_id, kind=kind, status=status)
    return _page(records, page, limit)


async def _get_or_404(matches: MatchStore, match_id: str) -> MatchRecord:
    record = await matches.get_match(match_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Match not found")
    return record


def _page(records: list[MatchRecord], page: int, limit: int) -> MatchListResponse:
    data, count, total_pages = match_lifecycle.paginate(records, page, limit)
    return MatchListResponse(count=count, total_pages=total_pages, current_page=page, data=data)
