"""
User endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import User
from fitness_api.models.schemas import UserPayload
from fitness_api.routes.dependencies import get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import parse_int, trim_or_none, utc_now_iso, validate_email

router = APIRouter(prefix="/api/users")

NOT_FOUND = ("User not found", "USER_NOT_FOUND")


async def _ensure_email_free(session: AsyncSession, email: str, user_id: Optional[int] = None) -> None:
    existing = await ResourceService.find(session, User, User.email == email)
    if existing is not None and existing.id != user_id:
        raise ValidationFailed("Email already exists", "DUPLICATE_EMAIL")


async def _apply_update(session: AsyncSession, user_id: int, payload: UserPayload) -> dict:
    await ResourceService.get_or_404(session, User, user_id, *NOT_FOUND)

    updates = payload.provided()
    if "name" in updates:
        if not updates["name"] or not updates["name"].strip():
            raise ValidationFailed("Name cannot be empty", "INVALID_NAME")
        updates["name"] = updates["name"].strip()
    if "email" in updates:
        if not updates["email"]:
            raise ValidationFailed("Invalid email format", "INVALID_EMAIL_FORMAT")
        updates["email"] = validate_email(updates["email"])
        await _ensure_email_free(session, updates["email"], user_id)
    if "primary_goal" in updates:
        updates["primary_goal"] = trim_or_none(updates["primary_goal"])
    updates["updated_at"] = utc_now_iso()

    user = await ResourceService.update(session, User, user_id, updates)
    return user.to_dict()


async def _apply_delete(session: AsyncSession, user_id: int) -> dict:
    await ResourceService.get_or_404(session, User, user_id, *NOT_FOUND)
    user = await ResourceService.delete(session, User, user_id)
    return {"message": "User deleted successfully", "user": user.to_dict()}


@router.get("")
async def list_users(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List users (search over name and email) or fetch one with ?id="""
    if id is not None:
        user = await ResourceService.get_or_404(session, User, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return user.to_dict()

    query = ListQuery(User).search(search, User.name, User.email).paginate(parse_page(limit, offset))
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserPayload, session: AsyncSession = Depends(get_db_session)):
    if not payload.name or not payload.name.strip() or not payload.email or not payload.email.strip():
        raise ValidationFailed("Name and email are required", "MISSING_REQUIRED_FIELDS")

    email = validate_email(payload.email)
    await _ensure_email_free(session, email)

    now = utc_now_iso()
    user = await ResourceService.create(session, User, {
        "name": payload.name.strip(),
        "email": email,
        "age": payload.age,
        "height_inches": payload.height_inches,
        "weight_lbs": payload.weight_lbs,
        "primary_goal": trim_or_none(payload.primary_goal),
        "created_at": now,
        "updated_at": now,
    })
    return user.to_dict()


@router.put("")
async def update_user(
    payload: UserPayload,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    return await _apply_update(session, parse_int(id, "INVALID_ID"), payload)


@router.delete("")
async def delete_user(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(id, "INVALID_ID"))


@router.get("/{user_id}")
async def get_user(user_id: str, session: AsyncSession = Depends(get_db_session)):
    user = await ResourceService.get_or_404(session, User, parse_int(user_id, "INVALID_ID"), *NOT_FOUND)
    return user.to_dict()


@router.put("/{user_id}")
async def update_user_by_path(user_id: str, payload: UserPayload, session: AsyncSession = Depends(get_db_session)):
    """Profile save from the dashboard"""
    return await _apply_update(session, parse_int(user_id, "INVALID_ID"), payload)


@router.delete("/{user_id}")
async def delete_user_by_path(user_id: str, session: AsyncSession = Depends(get_db_session)):
    return await _apply_delete(session, parse_int(user_id, "INVALID_ID"))
