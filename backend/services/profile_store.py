"""Read side of the profile document store.

Profiles are returned as raw documents; the match generator validates
them into pydantic models so one malformed record can be skipped
without failing the whole batch.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from models.schemas.match_record import CandidateKind
from models.schemas.profiles import Availability

logger = logging.getLogger(__name__)

Document = dict[str, Any]


class ProfileStore(ABC):
    @abstractmethod
    async def load_startup(self, startup_id: str) -> Document | None:
        """Fetch a startup document, or None if it does not exist."""

    @abstractmethod
    async def list_active_candidates(
        self,
        kind: CandidateKind,
        exclude_unavailable: bool = False,
    ) -> list[Document]:
        """All active candidate documents of a kind, in insertion order."""


class InMemoryProfileStore(ProfileStore):
    def __init__(self) -> None:
        self._startups: dict[str, Document] = {}
        self._candidates: dict[CandidateKind, dict[str, Document]] = {
            CandidateKind.INVESTOR: {},
            CandidateKind.ADVISOR: {},
        }

    @classmethod
    def from_json(cls, path: str | Path) -> "InMemoryProfileStore":
        """Seed a store from ``{"startups": [...], "investors": [...], "advisors": [...]}``."""
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        store = cls()
        for doc in data.get("startups", []):
            store.add_startup(doc)
        for doc in data.get("investors", []):
            store.add_investor(doc)
        for doc in data.get("advisors", []):
            store.add_advisor(doc)
        logger.info(
            "Loaded %d startups, %d investors, %d advisors from %s",
            len(store._startups),
            len(store._candidates[CandidateKind.INVESTOR]),
            len(store._candidates[CandidateKind.ADVISOR]),
            path,
        )
        return store

    def add_startup(self, doc: Document) -> None:
        self._startups[str(doc["id"])] = dict(doc)

    def add_investor(self, doc: Document) -> None:
        self._candidates[CandidateKind.INVESTOR][str(doc["id"])] = {**doc, "kind": "Investor"}

    def add_advisor(self, doc: Document) -> None:
        self._candidates[CandidateKind.ADVISOR][str(doc["id"])] = {**doc, "kind": "Advisor"}

    async def load_startup(self, startup_id: str) -> Document | None:
        doc = self._startups.get(startup_id)
        return dict(doc) if doc is not None else None

    async def list_active_candidates(
        self,
        kind: CandidateKind,
        exclude_unavailable: bool = False,
    ) -> list[Document]:
        docs = []
        for doc in self._candidates[kind].values():
            if not doc.get("is_active", True):
                continue
            if exclude_unavailable and doc.get("availability") == Availability.NOT_AVAILABLE.value:
                continue
            docs.append(dict(doc))
        return docs
