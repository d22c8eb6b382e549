"""
Stats overview endpoints

One counters row per user. The dashboard bumps it through the
increment route after logging a workout.
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import StatsOverview
from fitness_api.models.schemas import StatsCounters, StatsPayload
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ResourceNotFound
from fitness_api.utils.validators import parse_int, parse_optional_int, utc_now_iso

router = APIRouter(prefix="/api/stats-overview")

NOT_FOUND = ("Stats overview not found", "NOT_FOUND")
COUNTERS = tuple(StatsCounters.model_fields)


def _initial_values(payload: StatsCounters, user_id: Optional[int]) -> dict:
    values = {field: getattr(payload, field) or 0 for field in COUNTERS}
    values["user_id"] = user_id
    values["last_updated"] = utc_now_iso()
    return values


@router.get("")
async def list_stats(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    if id is not None:
        stats = await ResourceService.get_or_404(session, StatsOverview, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return stats.to_dict()

    query = (
        ListQuery(StatsOverview)
        .equals(StatsOverview.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .sort(None, None, {"lastUpdated": StatsOverview.last_updated}, "lastUpdated")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_stats(payload: StatsPayload, session: AsyncSession = Depends(get_db_session)):
    stats = await ResourceService.create(session, StatsOverview, _initial_values(payload, payload.user_id))
    return stats.to_dict()


@router.put("")
async def overwrite_stats(
    payload: StatsPayload,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Replace the provided counters as-is"""
    stats_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, StatsOverview, stats_id, *NOT_FOUND)

    updates = payload.provided()
    updates["last_updated"] = utc_now_iso()
    stats = await ResourceService.update(session, StatsOverview, stats_id, updates)
    return stats.to_dict()


@router.delete("")
async def delete_stats(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    stats_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, StatsOverview, stats_id, *NOT_FOUND)
    stats = await ResourceService.delete(session, StatsOverview, stats_id)
    return {"message": "Stats overview deleted successfully", "stats": stats.to_dict()}


@router.get("/user/{user_id}")
async def get_user_stats(user_id: str, session: AsyncSession = Depends(get_db_session)):
    owner = parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required")
    stats = await ResourceService.find(session, StatsOverview, StatsOverview.user_id == owner)
    if stats is None:
        raise ResourceNotFound("Stats overview not found for this user", "STATS_NOT_FOUND")
    return stats.to_dict()


@router.put("/user/{user_id}")
async def increment_user_stats(user_id: str, payload: StatsCounters, session: AsyncSession = Depends(get_db_session)):
    """
    Add the provided counters to the user's row

    A user without a row gets one created from the payload.
    """
    owner = parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required")
    stats = await ResourceService.find(session, StatsOverview, StatsOverview.user_id == owner)
    if stats is None:
        created = await ResourceService.create(session, StatsOverview, _initial_values(payload, owner))
        return created.to_dict()

    increments = {
        field: func.coalesce(getattr(StatsOverview, field), 0) + amount
        for field, amount in payload.provided().items()
        if amount is not None
    }
    increments["last_updated"] = utc_now_iso()
    stats = await ResourceService.update(session, StatsOverview, stats.id, increments)
    return stats.to_dict()
