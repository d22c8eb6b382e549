"""
List query builder shared by every collection endpoint

Each resource listing is the same shape: optional equality/substring/range
filters AND-ed together, one sort column, then limit/offset.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import Select, and_, asc, desc, or_, select
from sqlalchemy.orm import InstrumentedAttribute

from fitness_api.config import settings
from fitness_api.utils.errors import ValidationFailed
from fitness_api.utils.validators import INT64_MAX


@dataclass
class Page:
    limit: int
    offset: int


def parse_page(limit: Optional[str], offset: Optional[str]) -> Page:
    """
    Parse limit/offset query strings

    limit defaults to DEFAULT_PAGE_SIZE and is capped at MAX_PAGE_SIZE.

    Raises:
        ValidationFailed: On non-integer, negative or out-of-range values
    """
    try:
        parsed_limit = settings.DEFAULT_PAGE_SIZE if limit in (None, "") else int(limit)
    except ValueError:
        raise ValidationFailed("limit must be a non-negative integer", "INVALID_LIMIT")
    try:
        parsed_offset = 0 if offset in (None, "") else int(offset)
    except ValueError:
        raise ValidationFailed("offset must be a non-negative integer", "INVALID_OFFSET")

    if parsed_limit < 0:
        raise ValidationFailed("limit must be a non-negative integer", "INVALID_LIMIT")
    if parsed_offset < 0 or parsed_offset > INT64_MAX:
        raise ValidationFailed("offset must be a non-negative integer", "INVALID_OFFSET")

    return Page(limit=min(parsed_limit, settings.MAX_PAGE_SIZE), offset=parsed_offset)


class ListQuery:
    """Accumulates filters and ordering for one table"""

    def __init__(self, table: Any):
        self.table = table
        self.conditions: List[Any] = []
        self.ordering: Optional[Any] = None
        self.page = Page(limit=settings.DEFAULT_PAGE_SIZE, offset=0)

    def where(self, condition: Any) -> "ListQuery":
        self.conditions.append(condition)
        return self

    def equals(self, column: InstrumentedAttribute, value: Any) -> "ListQuery":
        """Filter on column == value, skipped when value is None or empty"""
        if value is not None and value != "":
            self.conditions.append(column == value)
        return self

    def search(self, term: Optional[str], *columns: InstrumentedAttribute) -> "ListQuery":
        """Case-insensitive substring match over any of the columns"""
        if term:
            pattern = f"%{term}%"
            self.conditions.append(or_(*(column.ilike(pattern) for column in columns)))
        return self

    def at_least(self, column: InstrumentedAttribute, value: Any) -> "ListQuery":
        if value is not None and value != "":
            self.conditions.append(column >= value)
        return self

    def at_most(self, column: InstrumentedAttribute, value: Any) -> "ListQuery":
        if value is not None and value != "":
            self.conditions.append(column <= value)
        return self

    def sort(
        self,
        sort: Optional[str],
        order: Optional[str],
        columns: Dict[str, InstrumentedAttribute],
        default: str,
        default_order: str = "desc",
    ) -> "ListQuery":
        """
        Order by one of the allowed columns

        Unknown sort keys fall back to the default column; any order other
        than "asc" sorts descending.
        """
        column = columns.get(sort or default, columns[default])
        direction = (order or default_order).lower()
        self.ordering = asc(column) if direction == "asc" else desc(column)
        return self

    def paginate(self, page: Page) -> "ListQuery":
        self.page = page
        return self

    def statement(self) -> Select:
        stmt = select(self.table)
        if self.conditions:
            stmt = stmt.where(and_(*self.conditions))
        if self.ordering is not None:
            stmt = stmt.order_by(self.ordering, self.table.id)
        return stmt.limit(self.page.limit).offset(self.page.offset)
