"""Match record storage with an atomic replace-on-regenerate operation."""

import asyncio
import logging
import uuid
import weakref
from abc import ABC, abstractmethod

from models.schemas.match_record import CandidateKind, MatchRecord, MatchStatus
from services.errors import MatchStoreError

logger = logging.getLogger(__name__)


class MatchStore(ABC):
    """Document-store boundary for match records.

    Subclasses implement the primitive operations; ``replace_match_set``
    composes them under a per-(startup, kind) lock so overlapping
    regenerate calls for the same key never interleave.
    """

    def __init__(self) -> None:
        # An entry lives only while some replace call holds or awaits its lock
        self._replace_locks: weakref.WeakValueDictionary[
            tuple[str, CandidateKind], asyncio.Lock
        ] = weakref.WeakValueDictionary()

    @abstractmethod
    async def delete_matches(
        self,
        startup_id: str,
        kind: CandidateKind,
        keep_ids: set[str] | None = None,
    ) -> int:
        """Delete all records for (startup, kind) except ``keep_ids``. Returns the count removed."""

    @abstractmethod
    async def delete_matches_by_id(self, match_ids: set[str]) -> int:
        """Delete the records with the given ids. Returns the count removed."""

    @abstractmethod
    async def bulk_insert_matches(self, records: list[MatchRecord]) -> list[MatchRecord]:
        """Insert records, returning the stored copies with ids assigned."""

    @abstractmethod
    async def find_matches(
        self,
        *,
        startup_id: str | None = None,
        candidate_id: str | None = None,
        kind: CandidateKind | None = None,
        status: MatchStatus | None = None,
        active_only: bool = True,
    ) -> list[MatchRecord]:
        """Records matching every given filter."""

    @abstractmethod
    async def get_match(self, match_id: str) -> MatchRecord | None:
        """Fetch one record by id."""

    @abstractmethod
    async def save_match(self, record: MatchRecord) -> MatchRecord:
        """Persist changes to an existing record."""

    def _replace_lock(self, startup_id: str, kind: CandidateKind) -> asyncio.Lock:
        key = (startup_id, kind)
        lock = self._replace_locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._replace_locks[key] = lock
        return lock

    async def replace_match_set(
        self,
        startup_id: str,
        kind: CandidateKind,
        records: list[MatchRecord],
    ) -> list[MatchRecord]:
        """Replace every stored record for (startup, kind) with ``records``.

        The new set is inserted first and the previous set evicted by
        exclusion afterwards, so readers never observe an empty set. If
        either step fails the key is left holding only the previous set.
        """
        async with self._replace_lock(startup_id, kind):
            stored = await self.bulk_insert_matches(records) if records else []
            new_ids = {r.id for r in stored}
            try:
                removed = await self.delete_matches(startup_id, kind, keep_ids=new_ids)
            except MatchStoreError:
                if new_ids:
                    logger.warning(
                        "Evicting old %s matches for startup %s failed; rolling back %d inserts",
                        kind.value, startup_id, len(new_ids),
                    )
                    await self.delete_matches_by_id(new_ids)
                raise
            logger.debug(
                "Replaced %s matches for startup %s: %d removed, %d stored",
                kind.value, startup_id, removed, len(stored),
            )
            return stored


class InMemoryMatchStore(MatchStore):
    """Process-local store. Record order is insertion order."""

    def __init__(self) -> None:
        super().__init__()
        self._records: dict[str, MatchRecord] = {}

    async def delete_matches(
        self,
        startup_id: str,
        kind: CandidateKind,
        keep_ids: set[str] | None = None,
    ) -> int:
        keep_ids = keep_ids or set()
        stale = [
            match_id
            for match_id, r in self._records.items()
            if r.startup_id == startup_id and r.type == kind and match_id not in keep_ids
        ]
        for match_id in stale:
            del self._records[match_id]
        return len(stale)

    async def delete_matches_by_id(self, match_ids: set[str]) -> int:
        removed = [match_id for match_id in match_ids if self._records.pop(match_id, None) is not None]
        return len(removed)

    async def bulk_insert_matches(self, records: list[MatchRecord]) -> list[MatchRecord]:
        stored = [r.model_copy(update={"id": uuid.uuid4().hex}, deep=True) for r in records]
        for r in stored:
            self._records[r.id] = r
        return [r.model_copy(deep=True) for r in stored]

    async def find_matches(
        self,
        *,
        startup_id: str | None = None,
        candidate_id: str | None = None,
        kind: CandidateKind | None = None,
        status: MatchStatus | None = None,
        active_only: bool = True,
    ) -> list[MatchRecord]:
        results = []
        for r in self._records.values():
            if startup_id is not None and r.startup_id != startup_id:
                continue
            if candidate_id is not None and r.candidate_id != candidate_id:
                continue
            if kind is not None and r.type != kind:
                continue
            if status is not None and r.status != status:
                continue
            if active_only and not r.is_active:
                continue
            results.append(r.model_copy(deep=True))
        return results

    async def get_match(self, match_id: str) -> MatchRecord | None:
        record = self._records.get(match_id)
        return record.model_copy(deep=True) if record is not None else None

    async def save_match(self, record: MatchRecord) -> MatchRecord:
        if record.id is None or record.id not in self._records:
            raise MatchStoreError(f"Unknown match record: {record.id}")
        self._records[record.id] = record.model_copy(deep=True)
        return record
