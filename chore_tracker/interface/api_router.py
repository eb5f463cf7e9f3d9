"""HTTP routes for chores, team members, and calendar views."""

import logging
from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel

from chore_tracker.core.dates import format_iso, parse_iso
from chore_tracker.core.recurrence import describe_recurrence, expand_occurrences, next_occurrence
from chore_tracker.domain.chore import Category, Chore, ChoreInstance, Priority
from chore_tracker.domain.create_models import ChoreCreate, TeamMemberCreate
from chore_tracker.domain.team import TeamMember
from chore_tracker.services import chore_service, team_service
from chore_tracker.services.calendar_service import ChoreFilter, MonthView, day_view, filter_instances, month_view
from chore_tracker.services.storage_service import ChoreStore, get_backend


logger = logging.getLogger(__name__)

router = APIRouter()

_store: ChoreStore | None = None


def get_store() -> ChoreStore:
    """Return the process-wide chore store, creating it on first use."""
    global _store  # noqa: PLW0603
    if _store is None:
        _store = ChoreStore(get_backend())
    return _store


def get_filters(
    category: Category | None = None,
    priority: Priority | None = None,
    assignee_id: str | None = None,
) -> ChoreFilter:
    """Collect instance filters from query parameters."""
    return ChoreFilter(category=category, priority=priority, assignee_id=assignee_id)


class ChoreDetail(BaseModel):
    """A chore with its schedule summary."""

    chore: Chore
    schedule: str
    next_occurrence: date | None


class NextOccurrenceResponse(BaseModel):
    chore_id: str
    after: date
    next_occurrence: date | None


# Chores


@router.get("/chores", tags=["chores"])
async def list_chores(store: ChoreStore = Depends(get_store)) -> list[Chore]:
    """List every chore definition."""
    return list(await store.load_chores())


@router.post("/chores", status_code=status.HTTP_201_CREATED, tags=["chores"])
async def create_chore(data: ChoreCreate, store: ChoreStore = Depends(get_store)) -> Chore:
    """Create a chore."""
    async with store.transaction() as documents:
        team_service.check_assignee(documents.members, data.assignee_id)
        chore = chore_service.build_chore(data)
        documents.chores = chore_service.add_chore(documents.chores, chore)
    logger.info("chore_created", extra={"chore_id": chore.id, "recurrence": chore.recurrence.type.value})
    return chore


@router.get("/chores/{chore_id}", tags=["chores"])
async def get_chore(chore_id: str, store: ChoreStore = Depends(get_store)) -> ChoreDetail:
    """Get a chore with its schedule description and next occurrence after today."""
    chore = chore_service.get_chore(await store.load_chores(), chore_id)
    today = datetime.now(UTC).date()
    return ChoreDetail(
        chore=chore,
        schedule=describe_recurrence(chore.recurrence),
        next_occurrence=next_occurrence(chore, today),
    )


@router.put("/chores/{chore_id}", tags=["chores"])
async def update_chore(chore_id: str, data: ChoreCreate, store: ChoreStore = Depends(get_store)) -> Chore:
    """Replace a chore's editable fields, keeping its completion history."""
    async with store.transaction() as documents:
        existing = chore_service.get_chore(documents.chores, chore_id)
        team_service.check_assignee(documents.members, data.assignee_id)
        chore = chore_service.build_chore(data, existing=existing)
        documents.chores = chore_service.update_chore(documents.chores, chore)
    logger.info("chore_updated", extra={"chore_id": chore.id})
    return chore


@router.delete("/chores/{chore_id}", tags=["chores"])
async def delete_chore(chore_id: str, store: ChoreStore = Depends(get_store)) -> dict[str, str]:
    """Delete a chore."""
    async with store.transaction() as documents:
        documents.chores = chore_service.delete_chore(documents.chores, chore_id)
    logger.info("chore_deleted", extra={"chore_id": chore_id})
    return {"status": "deleted", "chore_id": chore_id}


@router.post("/chores/{chore_id}/completions/{day}", tags=["chores"])
async def toggle_completion(chore_id: str, day: str, store: ChoreStore = Depends(get_store)) -> ChoreInstance:
    """Toggle completion of the occurrence on `day` (YYYY-MM-DD)."""
    occurrence = parse_iso(day)
    async with store.transaction() as documents:
        documents.chores = chore_service.toggle_completion(documents.chores, chore_id, occurrence)

    chore = chore_service.get_chore(documents.chores, chore_id)
    key = format_iso(occurrence)
    completed = chore.is_completed_on(key)
    logger.info("chore_completion_toggled", extra={"chore_id": chore_id, "date": key, "completed": completed})
    return ChoreInstance(chore=chore, date=key, is_completed=completed)


@router.get("/chores/{chore_id}/next", tags=["chores"])
async def get_next_occurrence(
    chore_id: str,
    after: date,
    store: ChoreStore = Depends(get_store),
) -> NextOccurrenceResponse:
    """Find the first occurrence strictly after `after`."""
    chore = chore_service.get_chore(await store.load_chores(), chore_id)
    return NextOccurrenceResponse(chore_id=chore_id, after=after, next_occurrence=next_occurrence(chore, after))


# Calendar


@router.get("/occurrences", tags=["calendar"])
async def list_occurrences(
    start: date,
    end: date,
    filters: ChoreFilter = Depends(get_filters),
    store: ChoreStore = Depends(get_store),
) -> list[ChoreInstance]:
    """Expand every chore over the inclusive range [start, end]."""
    return filter_instances(expand_occurrences(await store.load_chores(), start, end), filters)


@router.get("/calendar/days/{day}", tags=["calendar"])
async def get_day(
    day: str,
    filters: ChoreFilter = Depends(get_filters),
    store: ChoreStore = Depends(get_store),
) -> list[ChoreInstance]:
    """List the chore instances due on one date (YYYY-MM-DD)."""
    return day_view(await store.load_chores(), parse_iso(day), filters)


@router.get("/calendar/{year}/{month}", tags=["calendar"])
async def get_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    filters: ChoreFilter = Depends(get_filters),
    store: ChoreStore = Depends(get_store),
) -> MonthView:
    """Month grid, padded to whole weeks, with the instances due on each day."""
    return month_view(await store.load_chores(), year, month, filters)


# Team


@router.get("/team", tags=["team"])
async def list_team(store: ChoreStore = Depends(get_store)) -> list[TeamMember]:
    """List team members."""
    return list(await store.load_team_members())


@router.post("/team", status_code=status.HTTP_201_CREATED, tags=["team"])
async def add_team_member(data: TeamMemberCreate, store: ChoreStore = Depends(get_store)) -> TeamMember:
    """Add a team member, picking an unused palette color when none is given."""
    async with store.transaction() as documents:
        member = team_service.build_member(data, documents.members)
        documents.members = team_service.add_member(documents.members, member)
    logger.info("team_member_added", extra={"member_id": member.id, "color": member.color})
    return member


@router.delete("/team/{member_id}", tags=["team"])
async def remove_team_member(member_id: str, store: ChoreStore = Depends(get_store)) -> dict[str, str]:
    """Remove a team member and unassign their chores."""
    async with store.transaction() as documents:
        documents.members, documents.chores = team_service.remove_member(
            documents.members,
            documents.chores,
            member_id,
        )
    logger.info("team_member_removed", extra={"member_id": member_id})
    return {"status": "deleted", "member_id": member_id}
