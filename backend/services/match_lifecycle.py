"""Status transitions, soft delete and reporting over stored matches.

These operate on records after generation; the scoring engine itself
never changes status, notes or timestamps.
"""

import math
from collections import defaultdict
from datetime import datetime, timezone

from models.responses import MatchTypeStats
from models.schemas.match_record import MatchRecord, MatchStatus


def apply_status_change(
    record: MatchRecord,
    status: MatchStatus,
    notes: str | None = None,
    now: datetime | None = None,
) -> MatchRecord:
    """Return a copy of record moved to status.

    viewed_at / contacted_at are stamped on the first transition into
    Viewed / Contacted and never overwritten afterwards.
    """
    now = now or datetime.now(timezone.utc)
    update: dict = {"status": status}
    if notes:
        update["notes"] = notes
    if status == MatchStatus.VIEWED and record.viewed_at is None:
        update["viewed_at"] = now
    if status == MatchStatus.CONTACTED and record.contacted_at is None:
        update["contacted_at"] = now
    return record.model_copy(update=update)


def soft_delete(record: MatchRecord) -> MatchRecord:
    return record.model_copy(update={"is_active": False})


def paginate(
    records: list[MatchRecord],
    page: int = 1,
    limit: int = 10,
) -> tuple[list[MatchRecord], int, int]:
    """Sort by score then recency (both descending) and slice one page.

    Returns (page_records, total_count, total_pages).
    """
    ordered = sorted(records, key=lambda r: (r.score, r.created_at), reverse=True)
    total = len(ordered)
    start = (page - 1) * limit
    return ordered[start:start + limit], total, math.ceil(total / limit) if limit else 0


def summarize_matches(records: list[MatchRecord]) -> list[MatchTypeStats]:
    """Per-type counts and average score over active records."""
    grouped: dict[str, list[MatchRecord]] = defaultdict(list)
    for r in records:
        if r.is_active:
            grouped[r.type.value].append(r)

    stats = []
    for kind, group in sorted(grouped.items()):
        stats.append(MatchTypeStats(
            type=kind,
            total=len(group),
            avg_score=round(sum(r.score for r in group) / len(group), 2),
            contacted=sum(1 for r in group if r.status == MatchStatus.CONTACTED),
            accepted=sum(1 for r in group if r.status == MatchStatus.ACCEPTED),
        ))
    return stats
