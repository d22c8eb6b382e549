"""
Community post endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.tables import CommunityPost, User
from fitness_api.models.schemas import CommunityPostCreate, CommunityPostUpdate
from fitness_api.routes.dependencies import current_user, get_db_session
from fitness_api.services.list_query import ListQuery, parse_page
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import parse_int, parse_optional_int, require_text, trim_or_none, utc_now_iso

router = APIRouter(prefix="/api/community-posts")

NOT_FOUND = ("Post not found", "POST_NOT_FOUND")
SORT_COLUMNS = {"likes": CommunityPost.likes, "createdAt": CommunityPost.created_at}
TEXT_FIELDS = {"author_name": "authorName", "content": "content", "category": "category"}


def _clean_updates(payload: CommunityPostUpdate, *exclude: str) -> dict:
    updates = payload.provided("likes", *exclude)
    for field, label in TEXT_FIELDS.items():
        if field in updates:
            code = "INVALID_" + field.upper()
            updates[field] = require_text(updates[field], code, f"{label} must be a non-empty string")
    if "author_avatar" in updates:
        updates["author_avatar"] = trim_or_none(updates["author_avatar"])
    updates["updated_at"] = utc_now_iso()
    return updates


@router.get("")
async def list_posts(
    id: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    userId: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    """List posts (newest first by default, or by likes) or fetch one with ?id="""
    if id is not None:
        post = await ResourceService.get_or_404(session, CommunityPost, parse_int(id, "INVALID_ID"), *NOT_FOUND)
        return post.to_dict()

    query = (
        ListQuery(CommunityPost)
        .equals(CommunityPost.user_id, parse_optional_int(userId, "INVALID_USER_ID", "Valid userId is required"))
        .equals(CommunityPost.category, category)
        .search(search, CommunityPost.content, CommunityPost.author_name)
        .sort(sort, order, SORT_COLUMNS, "createdAt")
        .paginate(parse_page(limit, offset))
    )
    return await ResourceService.list_rows(session, query)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(payload: CommunityPostCreate, session: AsyncSession = Depends(get_db_session)):
    values = {
        field: require_text(getattr(payload, field), "MISSING_" + field.upper(), f"{label} is required")
        for field, label in TEXT_FIELDS.items()
    }
    now = utc_now_iso()
    values.update({
        "user_id": payload.user_id,
        "author_avatar": trim_or_none(payload.author_avatar),
        "likes": 0,
        "created_at": now,
        "updated_at": now,
    })
    post = await ResourceService.create(session, CommunityPost, values)
    return post.to_dict()


@router.put("")
async def update_post(
    payload: CommunityPostUpdate,
    id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_db_session),
):
    post_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, CommunityPost, post_id, *NOT_FOUND)
    post = await ResourceService.update(session, CommunityPost, post_id, _clean_updates(payload))
    return post.to_dict()


@router.delete("")
async def delete_post(id: Optional[str] = Query(None), session: AsyncSession = Depends(get_db_session)):
    post_id = parse_int(id, "INVALID_ID")
    await ResourceService.get_or_404(session, CommunityPost, post_id, *NOT_FOUND)
    post = await ResourceService.delete(session, CommunityPost, post_id)
    return {"message": "Post deleted successfully", "post": post.to_dict()}


@router.post("/{post_id}/like")
async def like_post(post_id: str, session: AsyncSession = Depends(get_db_session)):
    row_id = parse_int(post_id, "INVALID_ID")
    await ResourceService.get_or_404(session, CommunityPost, row_id, *NOT_FOUND)
    post = await ResourceService.update(session, CommunityPost, row_id, {
        "likes": func.coalesce(CommunityPost.likes, 0) + 1,
        "updated_at": utc_now_iso(),
    })
    return post.to_dict()


# Item routes below only expose the authenticated user's own posts

@router.get("/{post_id}")
async def get_own_post(
    post_id: str,
    user: User = Depends(current_user("AUTH_REQUIRED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(post_id, "INVALID_ID")
    post = await ResourceService.get_or_404(session, CommunityPost, row_id, *NOT_FOUND, CommunityPost.user_id == user.id)
    return post.to_dict()


@router.put("/{post_id}")
async def update_own_post(
    post_id: str,
    payload: CommunityPostUpdate,
    user: User = Depends(current_user("AUTH_REQUIRED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(post_id, "INVALID_ID")
    if "user_id" in payload.model_fields_set:
        raise ValidationFailed("User ID cannot be provided in request body", "USER_ID_NOT_ALLOWED")
    if "likes" in payload.model_fields_set:
        raise ValidationFailed("Likes can only be changed through the like endpoint", "LIKES_UPDATE_NOT_ALLOWED")

    await ResourceService.get_or_404(session, CommunityPost, row_id, *NOT_FOUND, CommunityPost.user_id == user.id)
    post = await ResourceService.update(session, CommunityPost, row_id, _clean_updates(payload, "user_id"))
    return post.to_dict()


@router.delete("/{post_id}")
async def delete_own_post(
    post_id: str,
    user: User = Depends(current_user("AUTH_REQUIRED")),
    session: AsyncSession = Depends(get_db_session),
):
    row_id = parse_int(post_id, "INVALID_ID")
    await ResourceService.get_or_404(session, CommunityPost, row_id, *NOT_FOUND, CommunityPost.user_id == user.id)
    post = await ResourceService.delete(session, CommunityPost, row_id)
    return {"message": "Post deleted successfully", "post": post.to_dict()}
