"""
Goal endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import Goal
from fitness_api.models.schemas import GoalCreate, GoalUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import (
    check_min,
    parse_int,
    parse_optional_int,
    require_text,
    trim_or_none,
    utc_now_iso,
    validate_choice,
)

router = APIRouter(prefix="/api/goals")

NOT_FOUND = ("Goal not found", "GOAL_NOT_FOUND")
GOAL_STATUSES = ("in_progress", "completed", "abandoned")
TEXT_FIELDS = ("title", "unit", "category")
SORT_COLUMNS = {
    "deadline": Goal.deadline,
    "title": Goal.title,
    "status": Goal.status,
    "category": Goal.category,
    "target": Goal.target,
    "current": Goal.current,
    "updatedAt": Goal.updated_at,
    "createdAt": Goal.created_at,
}


def _clean_updates(payload: GoalUpdate, strict: bool, *exclude: str) -> dict:
    """
    Validate the provided goal fields

    The item route is strict: target must be positive, current non-negative,
    and text fields cannot be blanked.
    """
    updates = payload.provided(*exclude)
    if "status" in updates:
        validate_choice(updates["status"], GOAL_STATUSES, "INVALID_STATUS")
        if updates["status"] is None:
            raise ValidationFailed(f"Status must be one of: {', '.join(GOAL_STATUSES)}", "INVALID_STATUS")

    for field in TEXT_FIELDS:
        if field not in updates:
            continue
        if strict or updates[field] is None:
            updates[field] = require_text(updates[field], f"INVALID_{field.upper()}", f"{field} must be a non-empty string")
        else:
            updates[field] = updates[field].strip()

    if "target" in updates:
        if updates["target"] is None:
            raise ValidationFailed("target must be a number", "INVALID_TARGET")
        if strict:
            check_min(updates["target"], 0, "INVALID_TARGET", "target must be a positive number", inclusive=False)
    if "current" in updates:
        if updates["current"] is None:
            raise ValidationFailed("current must be a number", "INVALID_CURRENT")
        if strict:
            check_min(updates["current"], 0, "INVALID_CURRENT", "current must be a non-negative number")
    if "deadline" in updates:
        updates["deadline"] = trim_or_none(updates["deadline"])

    updates["updated_at"] = utc_now_iso()
    return updates


@router.get("")
async def list_goals(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List goals filtered by user, status and category, or fetch one with ?id="""
    if id is not None:
        goal = await ResourceService.get_or_404(session, Goal, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return goal.to_dict()

    query = (
        ListQuery(Goal)
        .equals(Goal.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .equals(Goal.status, status)
        .equals(Goal.category, category)
        .search(search, Goal.title)
        .sort(None, None, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_goal(payload: GoalCreate, session: AsyncSession = Depends(get_db_session)):
    values = {
        field: require_text(getattr(payload, field), f"MISSING_{field.upper()}", f"{field} is required")
        for field in TEXT_FIELDS
    }
    now = utc_now_iso()
    values.update({
        "user_id": payload.user_id,
        "target": payload.target,
        "current": payload.current,
        "deadline": trim_or_none(payload.deadline),
        "status": "in_progress",
        "created_at": now,
        "updated_at": now,
    })
    goal = await ResourceService.create(session, Goal, values)
    return goal.to_dict()


@router.put("")
async def update_goal(
    payload: GoalUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    goal_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, Goal, goal_id, *NOT_FOUND)
    goal = await ResourceService.update(session, Goal, goal_id, _clean_updates(payload, False))
    return goal.to_dict()


@router.delete("")
async def delete_goal(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    goal_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, Goal, goal_id, *NOT_FOUND)
    goal = await ResourceService.delete(session, Goal, goal_id)
    return {"message": "Goal deleted successfully", "goal": goal.to_dict()}


@router.get("/user/{user_id}")
async def list_user_goals(
    user_id: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    query = (
        ListQuery(Goal)
        .where(Goal.user_id == parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required"))
        .equals(Goal.status, status)
        .sort(sort, order, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.get("/{goal_id}")
async def get_goal(goal_id: str, session: AsyncSession = Depends(get_db_session)):
    goal = await ResourceService.get_or_404(session, Goal, parse_int(goal_id, "INVALID_ID"), *NOT_FOUND)
    return goal.to_dict()


@router.put("/{goal_id}")
async def update_goal_by_path(goal_id: str, payload: GoalUpdate, session: AsyncSession = Depends(get_db_session)):
    row_id = parse_int(goal_id, "INVALID_ID")
    if "user_id" in payload.model_fields_set:
        raise ValidationFailed("User ID cannot be updated", "USER_ID_NOT_ALLOWED")

    await ResourceService.get_or_404(session, Goal, row_id, *NOT_FOUND)
    goal = await ResourceService.update(session, Goal, row_id, _clean_updates(payload, True, "user_id"))
    return goal.to_dict()


@router.delete("/{goal_id}")
async def delete_goal_by_path(goal_id: str, session: AsyncSession = Depends(get_db_session)):
    row_id = parse_int(goal_id, "INVALID_ID")
    await ResourceService.get_or_404(session, Goal, row_id, *NOT_FOUND)
    goal = await ResourceService.delete(session, Goal, row_id)
    return {"message": "Goal deleted successfully", "goal": goal.to_dict()}
