"""
Request dependencies shared by the resource routers
"""
from typing import AsyncIterator, Optional

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.connection import get_session, is_initialized
from fitness_api.database.tables import User
from fitness_api.services.firebase_auth import extract_bearer_token, verify_id_token
from fitness_api.services.resource_service import ResourceService
from fitness_api.utils.errors import DatabaseUnavailable, Unauthorized


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Open one session per request, 503 if the database is not configured"""
    if not is_initialized():
        raise DatabaseUnavailable()

    session_maker = get_session()
    if not session_maker:
        raise DatabaseUnavailable()

    async with session_maker() as session:
        yield session


def current_user(code: str):
    """
    Build a dependency resolving the caller from a bearer token

    The token's email claim must match a users row. Any failure is a 401
    carrying the given code.
    """

    async def dependency(
        authorization: Optional[str] = Header(None),
        session: AsyncSession = Depends(get_db_session),
    ) -> User:
        token = extract_bearer_token(authorization)
        if token is None:
            raise Unauthorized("Authentication required", code)

        claims = verify_id_token(token)
        email = (claims or {}).get("email")
        if not email:
            raise Unauthorized("Authentication required", code)

        user = await ResourceService.find(session, User, User.email == email.strip().lower())
        if user is None:
            raise Unauthorized("Authentication required", code)
        return user

    return dependency
