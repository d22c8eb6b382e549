"""
Challenge endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import Challenge
from fitness_api.models.schemas import ChallengeCreate, ChallengeUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import check_min, parse_int, parse_optional_int, require_text, trim_or_none, utc_now_iso

router = APIRouter(prefix="/api/challenges")

NOT_FOUND = ("Challenge not found", "NOT_FOUND")
SORT_COLUMNS = {
    "participantsCount": Challenge.participants_count,
    "daysLeft": Challenge.days_left,
    "title": Challenge.title,
    "createdAt": Challenge.created_at,
}


def _clean_updates(payload: ChallengeUpdate) -> dict:
    updates = payload.provided()
    if "title" in updates:
        updates["title"] = require_text(updates["title"], "INVALID_TITLE", "title must be a non-empty string")
    if "description" in updates:
        updates["description"] = require_text(updates["description"], "INVALID_DESCRIPTION", "description must be a non-empty string")
    if "days_left" in updates:
        if updates["days_left"] is None:
            raise ValidationFailed("daysLeft must be a non-negative number", "INVALID_DAYS_LEFT")
        check_min(updates["days_left"], 0, "INVALID_DAYS_LEFT", "daysLeft must be a non-negative number")
    check_min(updates.get("participants_count"), 0, "INVALID_PARTICIPANTS_COUNT", "participantsCount must be a non-negative number")
    if "reward" in updates:
        updates["reward"] = trim_or_none(updates["reward"])
    updates["updated_at"] = utc_now_iso()
    return updates


async def _apply_update(session: AsyncSession, challenge_id: int, payload: ChallengeUpdate) -> dict:
    await ResourceService.get_or_404(session, Challenge, challenge_id, *NOT_FOUND)
    challenge = await ResourceService.update(session, Challenge, challenge_id, _clean_updates(payload))
    return challenge.to_dict()


async def _apply_delete(session: AsyncSession, challenge_id: int) -> dict:
    await ResourceService.get_or_404(session, Challenge, challenge_id, *NOT_FOUND)
    challenge = await ResourceService.delete(session, Challenge, challenge_id)
    return {"message": "Challenge deleted successfully", "challenge": challenge.to_dict()}


@router.get("")
async def list_challenges(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    daysLeft: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List challenges, daysLeft=n keeps those ending within n days"""
    if id is not None:
        challenge = await ResourceService.get_or_404(session, Challenge, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return challenge.to_dict()

    query = (
        ListQuery(Challenge)
        .search(search, Challenge.title, Challenge.description)
        .at_most(Challenge.days_left, parse_optional_int(daysLeft, "INVALID_DAYS_LEFT", "daysLeft must be a number"))
        .sort(sort, order, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_challenge(payload: ChallengeCreate, session: AsyncSession = Depends(get_db_session)):
    title = require_text(payload.title, "MISSING_TITLE", "title is required")
    description = require_text(payload.description, "MISSING_DESCRIPTION", "description is required")
    check_min(payload.days_left, 0, "INVALID_DAYS_LEFT", "daysLeft must be a non-negative number")

    now = utc_now_iso()
    challenge = await ResourceService.create(session, Challenge, {
        "title": title,
        "description": description,
        "days_left": payload.days_left,
        "reward": trim_or_none(payload.reward),
        "participants_count": 0,
        "created_at": now,
        "updated_at": now,
    })
    return challenge.to_dict()


@router.put("")
async def update_challenge(
    payload: ChallengeUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    return await _apply_update(session, parse_int(id, "INVALID_ID"), payload)


@router.delete("")
async def delete_challenge(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/{challenge_id}")
async def get_challenge(challenge_id: str, session: AsyncSession = Depends(get_db_session)):
    challenge = await ResourceService.get_or_404(session, Challenge, parse_int(challenge_id, "INVALID_ID"), *NOT_FOUND)
    return challenge.to_dict()


@router.put("/{challenge_id}")
async def update_challenge_by_path(challenge_id: str, payload: ChallengeUpdate, session: AsyncSession = Depends(get_db_session)):
    return await _apply_update(session, parse_int(challenge_id, "INVALID_ID"), payload)


@router.delete("/{challenge_id}")
async def delete_challenge_by_path(challenge_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(challenge_id, "INVALID_ID"))
