"""
Exercise endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import Exercise
from fitness_api.models.schemas import ExerciseCreate, ExerciseUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.validators import check_min, parse_int, parse_optional_int, require_text, utc_now_iso

router = APIRouter(prefix="/api/exercises")

NOT_FOUND = ("Exercise not found", "EXERCISE_NOT_FOUND")


def _check_amounts(sets=None, reps=None, weight_lbs=None) -> None:
    check_min(sets, 0, "INVALID_SETS", "Sets must be a valid non-negative number")
    check_min(reps, 0, "INVALID_REPS", "Reps must be a valid non-negative number")
    check_min(weight_lbs, 0, "INVALID_WEIGHT", "WeightLbs must be a valid non-negative number")


async def _apply_update(session: AsyncSession, exercise_id: int, payload: ExerciseUpdate) -> dict:
    await ResourceService.get_or_404(session, Exercise, exercise_id, *NOT_FOUND)

    updates = payload.provided()
    if "name" in updates:
        updates["name"] = require_text(updates["name"], "INVALID_NAME", "Name must be a non-empty string")
    _check_amounts(updates.get("sets"), updates.get("reps"), updates.get("weight_lbs"))

    exercise = await ResourceService.update(session, Exercise, exercise_id, updates) if updates else None
    if exercise is None:
        exercise = await ResourceService.get_or_404(session, Exercise, exercise_id, *NOT_FOUND)
    return exercise.to_dict()


async def _apply_delete(session: AsyncSession, exercise_id: int) -> dict:
    await ResourceService.get_or_404(session, Exercise, exercise_id, *NOT_FOUND)
    exercise = await ResourceService.delete(session, Exercise, exercise_id)
    return {"message": "Exercise deleted successfully", "exercise": exercise.to_dict()}


@router.get("")
async def list_exercises(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    workoutId: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    if id is not None:
        exercise = await ResourceService.get_or_404(session, Exercise, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return exercise.to_dict()

    query = (
        ListQuery(Exercise)
        .equals(Exercise.workout_id, parse_optional_int(workoutId, "INVALID_WORKOUT_ID", "Valid workoutId is required"))
        .search(search, Exercise.name)
        .sort(None, None, {"createdAt": Exercise.created_at}, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_exercise(payload: ExerciseCreate, session: AsyncSession = Depends(get_db_session)):
    name = require_text(payload.name, "MISSING_NAME", "Name is required")
    _check_amounts(payload.sets, payload.reps, payload.weight_lbs)

    exercise = await ResourceService.create(session, Exercise, {
        "name": name,
        "workout_id": payload.workout_id,
        "sets": payload.sets,
        "reps": payload.reps,
        "weight_lbs": payload.weight_lbs,
        "created_at": utc_now_iso(),
    })
    return exercise.to_dict()


@router.put("")
async def update_exercise(
    payload: ExerciseUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    return await _apply_update(session, parse_int(id, "INVALID_ID"), payload)


@router.delete("")
async def delete_exercise(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/workout/{workout_id}")
async def list_workout_exercises(
    workout_id: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """Exercises logged under one workout, in insertion order"""
    query = (
        ListQuery(Exercise)
        .where(Exercise.workout_id == parse_int(workout_id, "INVALID_WORKOUT_ID", "Valid workout ID is required"))
        .sort(None, "asc", {"id": Exercise.id}, "id")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.get("/{exercise_id}")
async def get_exercise(exercise_id: str, session: AsyncSession = Depends(get_db_session)):
    exercise = await ResourceService.get_or_404(session, Exercise, parse_int(exercise_id, "INVALID_ID"), *NOT_FOUND)
    return exercise.to_dict()


@router.put("/{exercise_id}")
async def update_exercise_by_path(exercise_id: str, payload: ExerciseUpdate, session: AsyncSession = Depends(get_db_session)):
    return await _apply_update(session, parse_int(exercise_id, "INVALID_ID"), payload)


@router.delete("/{exercise_id}")
async def delete_exercise_by_path(exercise_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(exercise_id, "INVALID_ID"))
