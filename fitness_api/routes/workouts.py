"""
Workout endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import User, Workout
from fitness_api.models.schemas import WorkoutCreate, WorkoutUpdate
from fitness_api.routes.dependencies import current_user, get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import check_min, parse_int, parse_optional_int, require_text, trim_or_none, utc_now_iso

router = APIRouter(prefix="/api/workouts")

NOT_FOUND = ("Workout not found", "NOT_FOUND")
SORT_COLUMNS = {"date": Workout.date}


def _check_numbers(duration_minutes=None, calories_burned=None, user_id=None) -> None:
    check_min(duration_minutes, 0, "INVALID_DURATION", "durationMinutes must be a positive number", inclusive=False)
    check_min(calories_burned, 0, "INVALID_CALORIES", "caloriesBurned must be a non-negative number")
    check_min(user_id, 0, "INVALID_USER_ID", "userId must be a positive number", inclusive=False)


def _clean_updates(payload: WorkoutUpdate, *exclude: str) -> dict:
    updates = payload.provided(*exclude)
    _check_numbers(
        updates.get("duration_minutes"),
        updates.get("calories_burned"),
        updates.get("user_id"),
    )
    if "duration_minutes" in updates and updates["duration_minutes"] is None:
        raise ValidationFailed("durationMinutes must be a positive number", "INVALID_DURATION")
    if "workout_type" in updates:
        updates["workout_type"] = require_text(updates["workout_type"], "INVALID_WORKOUT_TYPE", "Valid workout type is required")
    if "date" in updates:
        updates["date"] = require_text(updates["date"], "INVALID_DATE", "Valid date is required")
    if "notes" in updates:
        updates["notes"] = trim_or_none(updates["notes"])
    updates["updated_at"] = utc_now_iso()
    return updates


@router.get("")
async def list_workouts(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List workouts (filter by userId, search type and notes) or fetch one with ?id="""
    if id is not None:
        workout = await ResourceService.get_or_404(session, Workout, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return workout.to_dict()

    query = (
        ListQuery(Workout)
        .equals(Workout.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .search(search, Workout.workout_type, Workout.notes)
        .sort(None, None, SORT_COLUMNS, "date")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_workout(payload: WorkoutCreate, session: AsyncSession = Depends(get_db_session)):
    workout_type = require_text(payload.workout_type, "MISSING_WORKOUT_TYPE", "workoutType is required")
    date = require_text(payload.date, "MISSING_DATE", "date is required")
    _check_numbers(payload.duration_minutes, payload.calories_burned, payload.user_id)

    now = utc_now_iso()
    workout = await ResourceService.create(session, Workout, {
        "user_id": payload.user_id,
        "workout_type": workout_type,
        "duration_minutes": payload.duration_minutes,
        "calories_burned": payload.calories_burned,
        "date": date,
        "notes": trim_or_none(payload.notes),
        "created_at": now,
        "updated_at": now,
    })
    return workout.to_dict()


@router.put("")
async def update_workout(
    payload: WorkoutUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    workout_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, Workout, workout_id, *NOT_FOUND)
    workout = await ResourceService.update(session, Workout, workout_id, _clean_updates(payload))
    return workout.to_dict()


@router.delete("")
async def delete_workout(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    workout_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, Workout, workout_id, *NOT_FOUND)
    workout = await ResourceService.delete(session, Workout, workout_id)
    return {"message": "Workout deleted successfully", "workout": workout.to_dict()}


@router.get("/user/{user_id}")
async def list_user_workouts(
    user_id: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """A user's workouts, newest first unless order=asc"""
    query = (
        ListQuery(Workout)
        .where(Workout.user_id == parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required"))
        .sort(sort, order, SORT_COLUMNS, "date")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


# Item routes below only expose the authenticated user's own workouts

@router.get("/{workout_id}")
async def get_own_workout(
    workout_id: str,
    user: User = Depends(current_user("UNAUTHORIZED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(workout_id, "INVALID_ID")
    workout = await ResourceService.get_or_404(session, Workout, row_id, *NOT_FOUND, Workout.user_id == user.id)
    return workout.to_dict()


@router.put("/{workout_id}")
async def update_own_workout(
    workout_id: str,
    payload: WorkoutUpdate,
    user: User = Depends(current_user("UNAUTHORIZED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(workout_id, "INVALID_ID")
    if "user_id" in payload.model_fields_set:
        raise ValidationFailed("User ID cannot be provided in request body", "USER_ID_NOT_ALLOWED")

    await ResourceService.get_or_404(session, Workout, row_id, *NOT_FOUND, Workout.user_id == user.id)
    workout = await ResourceService.update(session, Workout, row_id, _clean_updates(payload, "user_id"))
    return workout.to_dict()


@router.delete("/{workout_id}")
async def delete_own_workout(
    workout_id: str,
    user: User = Depends(current_user("UNAUTHORIZED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(workout_id, "INVALID_ID")
    await ResourceService.get_or_404(session, Workout, row_id, *NOT_FOUND, Workout.user_id == user.id)
    workout = await ResourceService.delete(session, Workout, row_id)
    return {"message": "Workout deleted successfully", "workout": workout.to_dict()}
