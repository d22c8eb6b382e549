"""
Weight history endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import WeightRecord
from fitness_api.models.schemas import WeightRecordCreate, WeightRecordUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import (
    check_min,
    parse_int,
    parse_optional_int,
    require_text,
    utc_now_iso,
    validate_date,
)

router = APIRouter(prefix="/api/weight-history")

NOT_FOUND = ("Weight record not found", "RECORD_NOT_FOUND")
SORT_COLUMNS = {"recordedDate": WeightRecord.recorded_date}


def _check_weight(weight_lbs: Optional[float]) -> None:
    if weight_lbs is None:
        raise ValidationFailed("weightLbs must be a positive number", "INVALID_WEIGHT")
    check_min(weight_lbs, 0, "INVALID_WEIGHT", "weightLbs must be a positive number", inclusive=False)


async def _apply_update(session: AsyncSession, record_id: int, payload: WeightRecordUpdate) -> dict:
    await ResourceService.get_or_404(session, WeightRecord, record_id, *NOT_FOUND)

    updates = payload.provided("user_id")
    if not updates:
        raise ValidationFailed("No valid fields to update", "NO_UPDATES")
    if "weight_lbs" in updates:
        _check_weight(updates["weight_lbs"])
    if "recorded_date" in updates:
        updates["recorded_date"] = require_text(updates["recorded_date"], "INVALID_DATE", "recordedDate must be a non-empty string")

    record = await ResourceService.update(session, WeightRecord, record_id, updates)
    return record.to_dict()


async def _apply_delete(session: AsyncSession, record_id: int) -> dict:
    await ResourceService.get_or_404(session, WeightRecord, record_id, *NOT_FOUND)
    record = await ResourceService.delete(session, WeightRecord, record_id)
    return {"message": "Weight record deleted successfully", "record": record.to_dict()}


@router.get("")
async def list_records(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List weigh-ins, most recent first, optionally within a date range"""
    if id is not None:
        record = await ResourceService.get_or_404(session, WeightRecord, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return record.to_dict()

    query = (
        ListQuery(WeightRecord)
        .equals(WeightRecord.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .at_least(WeightRecord.recorded_date, startDate)
        .at_most(WeightRecord.recorded_date, endDate)
        .sort(sort, order, SORT_COLUMNS, "recordedDate")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_record(payload: WeightRecordCreate, session: AsyncSession = Depends(get_db_session)):
    _check_weight(payload.weight_lbs)
    recorded_date = require_text(payload.recorded_date, "MISSING_DATE", "recordedDate is required")

    record = await ResourceService.create(session, WeightRecord, {
        "user_id": payload.user_id,
        "weight_lbs": payload.weight_lbs,
        "recorded_date": recorded_date,
        "created_at": utc_now_iso(),
    })
    return record.to_dict()


@router.put("")
async def update_record(
    payload: WeightRecordUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    return await _apply_update(session, parse_int(id, "INVALID_ID"), payload)


@router.delete("")
async def delete_record(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/user/{user_id}")
async def list_user_records(
    user_id: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    startDate: Optional[str] = Query(None),
    endDate: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    query = (
        ListQuery(WeightRecord)
        .where(WeightRecord.user_id == parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required"))
        .at_least(WeightRecord.recorded_date, validate_date(startDate, "INVALID_START_DATE", "startDate must be a valid date"))
        .at_most(WeightRecord.recorded_date, validate_date(endDate, "INVALID_END_DATE", "endDate must be a valid date"))
        .sort(sort, order, SORT_COLUMNS, "recordedDate")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.get("/{record_id}")
async def get_record(record_id: str, session: AsyncSession = Depends(get_db_session)):
    record = await ResourceService.get_or_404(session, WeightRecord, parse_int(record_id, "INVALID_ID"), *NOT_FOUND)
    return record.to_dict()


@router.put("/{record_id}")
async def update_record_by_path(record_id: str, payload: WeightRecordUpdate, session: AsyncSession = Depends(get_db_session)):
    row_id = parse_int(record_id, "INVALID_ID")
    if "user_id" in payload.model_fields_set:
        raise ValidationFailed("User ID cannot be updated", "USER_ID_NOT_ALLOWED")
    return await _apply_update(session, row_id, payload)


@router.delete("/{record_id}")
async def delete_record_by_path(record_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(record_id, "INVALID_ID"))
