"""
Wearable device endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import WearableDevice
from fitness_api.models.schemas import WearableDeviceCreate, WearableDeviceUpdate
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import parse_int, parse_optional_int, require_text, trim_or_none, utc_now_iso

router = APIRouter(prefix="/api/wearable-devices")

NOT_FOUND = ("Device not found", "DEVICE_NOT_FOUND")
SORT_COLUMNS = {"createdAt": WearableDevice.created_at}


def _clean_updates(payload: WearableDeviceUpdate, *exclude: str) -> dict:
    updates = payload.provided(*exclude)
    if "device_name" in updates:
        updates["device_name"] = require_text(updates["device_name"], "INVALID_DEVICE_NAME", "deviceName must be a non-empty string")
    if "device_type" in updates:
        updates["device_type"] = require_text(updates["device_type"], "INVALID_DEVICE_TYPE", "deviceType must be a non-empty string")
    if "status" in updates:
        updates["status"] = require_text(updates["status"], "INVALID_STATUS", "status must be a non-empty string")
    if "last_sync" in updates:
        updates["last_sync"] = trim_or_none(updates["last_sync"])
    updates["updated_at"] = utc_now_iso()
    return updates


async def _apply_delete(session: AsyncSession, device_id: int) -> dict:
    await ResourceService.get_or_404(session, WearableDevice, device_id, *NOT_FOUND)
    device = await ResourceService.delete(session, WearableDevice, device_id)
    return {"message": "Device deleted successfully", "device": device.to_dict()}


@router.get("")
async def list_devices(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    if id is not None:
        device = await ResourceService.get_or_404(session, WearableDevice, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return device.to_dict()

    query = (
        ListQuery(WearableDevice)
        .equals(WearableDevice.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .equals(WearableDevice.status, status)
        .search(search, WearableDevice.device_name)
        .sort(None, None, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_device(payload: WearableDeviceCreate, session: AsyncSession = Depends(get_db_session)):
    device_name = require_text(payload.device_name, "MISSING_DEVICE_NAME", "deviceName is required")
    device_type = require_text(payload.device_type, "MISSING_DEVICE_TYPE", "deviceType is required")

    now = utc_now_iso()
    device = await ResourceService.create(session, WearableDevice, {
        "user_id": payload.user_id,
        "device_name": device_name,
        "device_type": device_type,
        "status": "connected",
        "last_sync": trim_or_none(payload.last_sync),
        "created_at": now,
        "updated_at": now,
    })
    return device.to_dict()


@router.put("")
async def update_device(
    payload: WearableDeviceUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    device_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, WearableDevice, device_id, *NOT_FOUND)
    device = await ResourceService.update(session, WearableDevice, device_id, _clean_updates(payload))
    return device.to_dict()


@router.delete("")
async def delete_device(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/user/{user_id}")
async def list_user_devices(
    user_id: str,
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    query = (
        ListQuery(WearableDevice)
        .where(WearableDevice.user_id == parse_int(user_id, "INVALID_USER_ID", "Valid user ID is required"))
        .equals(WearableDevice.status, status)
        .sort(None, None, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.get("/{device_id}")
async def get_device(device_id: str, session: AsyncSession = Depends(get_db_session)):
    device = await ResourceService.get_or_404(session, WearableDevice, parse_int(device_id, "INVALID_ID"), *NOT_FOUND)
    return device.to_dict()


@router.put("/{device_id}")
async def update_device_by_path(device_id: str, payload: WearableDeviceUpdate, session: AsyncSession = Depends(get_db_session)):
    """Sync and connect toggles from the dashboard land here"""
    row_id = parse_int(device_id, "INVALID_ID")
    if "user_id" in payload.model_fields_set:
        raise ValidationFailed("User ID cannot be updated", "USER_ID_NOT_ALLOWED")

    await ResourceService.get_or_404(session, WearableDevice, row_id, *NOT_FOUND)
    device = await ResourceService.update(session, WearableDevice, row_id, _clean_updates(payload, "user_id"))
    return device.to_dict()


@router.delete("/{device_id}")
async def delete_device_by_path(device_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(device_id, "INVALID_ID"))
