"""
Resource service - row-level operations shared by all resources
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_api.database.queries import execute_with_retry
from fitness_api.services.list_query import ListQuery
from fitness_api.utils.errors import ResourceNotFound


class ResourceService:
    """CRUD helpers working on any table from fitness_api.database.tables"""

    @staticmethod
    async def list_rows(session: AsyncSession, query: ListQuery) -> List[Dict[str, Any]]:
        """
        Run a list query

        Returns:
            Rows serialized to dicts
        """
        result = await execute_with_retry(session, query.statement())
        return [row.to_dict() for row in result.scalars().all()]

    @staticmethod
    async def find(session: AsyncSession, table: Any, *conditions: Any) -> Optional[Any]:
        """
        Fetch the first row matching all conditions

        Returns:
            ORM row or None
        """
        result = await execute_with_retry(session, select(table).where(*conditions).limit(1))
        return result.scalars().first()

    @staticmethod
    async def get_or_404(
        session: AsyncSession,
        table: Any,
        row_id: int,
        message: str,
        code: str,
        *conditions: Any,
    ) -> Any:
        """
        Fetch a row by id, optionally narrowed by extra conditions

        Raises:
            ResourceNotFound: If no row matches
        """
        row = await ResourceService.find(session, table, table.id == row_id, *conditions)
        if row is None:
            raise ResourceNotFound(message, code)
        return row

    @staticmethod
    async def create(session: AsyncSession, table: Any, values: Dict[str, Any]) -> Any:
        result = await execute_with_retry(session, insert(table).values(**values).returning(table))
        row = result.scalars().one()
        await session.commit()
        return row

    @staticmethod
    async def update(session: AsyncSession, table: Any, row_id: int, values: Dict[str, Any]) -> Optional[Any]:
        """
        Apply values to one row

        Values may be SQL expressions (likes + 1) as well as plain values.

        Returns:
            Updated row or None if it vanished in the meantime
        """
        result = await execute_with_retry(
            session,
            update(table)
            .where(table.id == row_id)
            .values(**values)
            .returning(table)
            .execution_options(populate_existing=True),
        )
        row = result.scalars().first()
        await session.commit()
        return row

    @staticmethod
    async def delete(session: AsyncSession, table: Any, row_id: int) -> Optional[Any]:
        """
        Delete one row

        Returns:
            Deleted row or None if it was already gone
        """
        result = await execute_with_retry(
            session,
            delete(table)
            .where(table.id == row_id)
            .returning(table)
            .execution_options(populate_existing=True),
        )
        row = result.scalars().first()
        await session.commit()
        return row
