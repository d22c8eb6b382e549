"""
Leaderboard endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import LeaderboardEntry
from fitness_api.models.schemas import LeaderboardCreate, LeaderboardUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import parse_int, parse_optional_int, require_text, trim_or_none, utc_now_iso

router = APIRouter(prefix="/api/leaderboard")

NOT_FOUND = ("Leaderboard entry not found", "NOT_FOUND")


async def _apply_update(session: AsyncSession, entry_id: int, payload: LeaderboardUpdate) -> dict:
    await ResourceService.get_or_404(session, LeaderboardEntry, entry_id, *NOT_FOUND)

    updates = payload.provided()
    if "user_name" in updates:
        updates["user_name"] = require_text(updates["user_name"], "INVALID_USER_NAME", "userName must be a non-empty string")
    if "user_avatar" in updates:
        updates["user_avatar"] = trim_or_none(updates["user_avatar"])
    for field, code in (("points", "INVALID_POINTS"), ("rank", "INVALID_RANK")):
        if field in updates and updates[field] is None:
            raise ValidationFailed(f"{field} must be a number", code)
    updates["updated_at"] = utc_now_iso()

    entry = await ResourceService.update(session, LeaderboardEntry, entry_id, updates)
    return entry.to_dict()


async def _apply_delete(session: AsyncSession, entry_id: int) -> dict:
    await ResourceService.get_or_404(session, LeaderboardEntry, entry_id, *NOT_FOUND)
    entry = await ResourceService.delete(session, LeaderboardEntry, entry_id)
    return {"message": "Leaderboard entry deleted successfully", "entry": entry.to_dict()}


@router.get("")
async def list_leaderboard(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Standings, highest points first"""
    if id is not None:
        entry = await ResourceService.get_or_404(session, LeaderboardEntry, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return entry.to_dict()

    query = (
        ListQuery(LeaderboardEntry)
        .equals(LeaderboardEntry.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .sort(None, None, {"points": LeaderboardEntry.points}, "points")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(payload: LeaderboardCreate, session: AsyncSession = Depends(get_db_session)):
    user_name = require_text(payload.user_name, "MISSING_USER_NAME", "userName is required")

    now = utc_now_iso()
    entry = await ResourceService.create(session, LeaderboardEntry, {
        "user_id": payload.user_id,
        "user_name": user_name,
        "user_avatar": trim_or_none(payload.user_avatar),
        "points": 0,
        "rank": payload.rank,
        "created_at": now,
        "updated_at": now,
    })
    return entry.to_dict()


@router.put("")
async def update_entry(
    payload: LeaderboardUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    return await _apply_update(session, parse_int(id, "INVALID_ID"), payload)


@router.delete("")
async def delete_entry(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/{entry_id}")
async def get_entry(entry_id: str, session: AsyncSession = Depends(get_db_session)):
    entry = await ResourceService.get_or_404(session, LeaderboardEntry, parse_int(entry_id, "INVALID_ID"), *NOT_FOUND)
    return entry.to_dict()


@router.put("/{entry_id}")
async def update_entry_by_path(entry_id: str, payload: LeaderboardUpdate, session: AsyncSession = Depends(get_db_session)):
    return await _apply_update(session, parse_int(entry_id, "INVALID_ID"), payload)


@router.delete("/{entry_id}")
async def delete_entry_by_path(entry_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(entry_id, "INVALID_ID"))
