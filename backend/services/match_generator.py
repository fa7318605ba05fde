"""Match generation: score every active candidate, rank, keep the top N.

Flow per startup:
    load startup ──> embed startup text once
      ├─ investors: fetch pool → score → threshold → rank → top N → replace
      └─ advisors:  fetch pool → score → threshold → rank → top N → replace

The two kinds run concurrently and write disjoint partitions. Within a
kind, candidates are scored in worker threads up to ``concurrency`` at a
time; the only write is the final replace step.
"""

import asyncio
import logging

import numpy as np
from pydantic import ValidationError

from config import settings
from models.schemas.match_record import (
    CandidateKind,
    GenerationOutcome,
    GenerationResult,
    MatchRecord,
)
from models.schemas.profiles import AdvisorProfile, InvestorProfile, StartupProfile
from services.attribute_scorers import semantic_match, startup_text
from services.embedding_provider import EmbeddingProvider
from services.errors import EmbeddingUnavailable, InvalidProfile, MatchStoreError, NotFound
from services.match_composer import ScoredMatch, candidate_text, compose_match
from services.match_store import MatchStore
from services.profile_store import Document, ProfileStore

logger = logging.getLogger(__name__)

_CANDIDATE_MODELS: dict[CandidateKind, type[InvestorProfile] | type[AdvisorProfile]] = {
    CandidateKind.INVESTOR: InvestorProfile,
    CandidateKind.ADVISOR: AdvisorProfile,
}

# Advisors marked "Not Available" never enter the pool
_EXCLUDE_UNAVAILABLE: dict[CandidateKind, bool] = {
    CandidateKind.INVESTOR: False,
    CandidateKind.ADVISOR: True,
}


def parse_startup(doc: Document) -> StartupProfile:
    try:
        return StartupProfile.model_validate(doc)
    except ValidationError as e:
        raise InvalidProfile("startup", doc.get("id"), str(e)) from e


def parse_candidate(kind: CandidateKind, doc: Document) -> InvestorProfile | AdvisorProfile:
    try:
        return _CANDIDATE_MODELS[kind].model_validate({**doc, "kind": kind.value})
    except ValidationError as e:
        raise InvalidProfile(kind.value.lower(), doc.get("id"), str(e)) from e


class MatchGenerator:
    def __init__(
        self,
        profiles: ProfileStore,
        matches: MatchStore,
        embedder: EmbeddingProvider,
        *,
        min_score: float | None = None,
        top_n: int | None = None,
        concurrency: int | None = None,
    ) -> None:
        self.profiles = profiles
        self.matches = matches
        self.embedder = embedder
        self.min_score = settings.match_min_score if min_score is None else min_score
        self.top_n = settings.match_top_n if top_n is None else top_n
        self.concurrency = max(1, settings.scoring_concurrency if concurrency is None else concurrency)

    async def load_startup(self, startup_id: str) -> StartupProfile:
        doc = await self.profiles.load_startup(startup_id)
        if doc is None:
            raise NotFound("Startup", startup_id)
        return parse_startup(doc)

    async def generate_matches(self, startup_id: str) -> GenerationResult:
        """Regenerate the stored investor and advisor matches for a startup.

        Raises NotFound if the startup does not exist. A storage failure in
        one kind is reported in that kind's outcome and does not affect the
        other.
        """
        startup = await self.load_startup(startup_id)
        startup_vector = await asyncio.to_thread(self._embed_startup, startup)

        investors, advisors = await asyncio.gather(
            self._run_kind(startup, CandidateKind.INVESTOR, startup_vector),
            self._run_kind(startup, CandidateKind.ADVISOR, startup_vector),
        )
        return GenerationResult(startup_id=startup.id, investors=investors, advisors=advisors)

    async def _run_kind(
        self,
        startup: StartupProfile,
        kind: CandidateKind,
        startup_vector: np.ndarray | None,
    ) -> GenerationOutcome:
        try:
            stored = await self.generate_for_kind(startup, kind, startup_vector)
        except MatchStoreError as e:
            logger.exception("%s match generation failed for startup %s", kind.value, startup.id)
            return GenerationOutcome(kind=kind, succeeded=False, error=str(e))
        return GenerationOutcome(kind=kind, matches=stored)

    async def generate_for_kind(
        self,
        startup: StartupProfile,
        kind: CandidateKind,
        startup_vector: np.ndarray | None = None,
    ) -> list[MatchRecord]:
        """Score, rank and store the top matches of one candidate kind."""
        docs = await self.profiles.list_active_candidates(
            kind, exclude_unavailable=_EXCLUDE_UNAVAILABLE[kind]
        )
        candidates = self._parse_pool(kind, docs)

        semaphore = asyncio.Semaphore(self.concurrency)

        async def _score(candidate):
            async with semaphore:
                return await asyncio.to_thread(
                    self.score_candidate, startup, candidate, startup_vector
                )

        scored: list[ScoredMatch] = await asyncio.gather(*(_score(c) for c in candidates))
        top = self.rank(scored)

        stored = await self.matches.replace_match_set(
            startup.id, kind, [s.record for s in top]
        )
        logger.info(
            "%s matches for startup %s: pool=%d scored=%d stored=%d",
            kind.value, startup.id, len(docs), len(scored), len(stored),
        )
        return stored

    def rank(self, scored: list[ScoredMatch]) -> list[ScoredMatch]:
        """Drop drafts below the threshold, sort by score, keep the top N.

        The sort is stable, so equal scores keep candidate-pool order.
        """
        kept = [s for s in scored if s.total >= self.min_score]
        kept.sort(key=lambda s: s.record.score, reverse=True)
        return kept[: self.top_n]

    def score_candidate(
        self,
        startup: StartupProfile,
        candidate: InvestorProfile | AdvisorProfile,
        startup_vector: np.ndarray | None,
    ) -> ScoredMatch:
        semantic = semantic_match(self.embedder, startup_vector, candidate_text(candidate))
        return compose_match(startup, candidate, semantic)

    def _parse_pool(
        self,
        kind: CandidateKind,
        docs: list[Document],
    ) -> list[InvestorProfile | AdvisorProfile]:
        candidates = []
        for doc in docs:
            try:
                candidates.append(parse_candidate(kind, doc))
            except InvalidProfile as e:
                logger.warning("Skipping candidate: %s", e)
        return candidates

    def _embed_startup(self, startup: StartupProfile) -> np.ndarray | None:
        text = startup_text(startup)
        if not text:
            return None
        try:
            return self.embedder.embed(text)
        except EmbeddingUnavailable as e:
            logger.warning("Semantic scoring disabled for startup %s: %s", startup.id, e)
            return None
