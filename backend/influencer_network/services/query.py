"""
Influencer Network Backend: Query Helpers
==========================================

What:  Pagination, text search, JSON-array membership and date-range filters
       shared by every list endpoint.
How:   Helpers return SQLAlchemy clauses; `paginate` runs the count query
       and the page query against the same filtered statement.

Pagination arithmetic:
    skip = (page - 1) * limit
    total_pages = ceil(total / limit)
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import ColumnElement, Select, String, cast, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession


@dataclass(frozen=True)
class PaginationParams:
    page: int = 1
    limit: int = 10

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


async def paginate(
    db: AsyncSession,
    stmt: Select,
    params: PaginationParams,
) -> Tuple[List[Any], int]:
    """
    Execute `stmt` for one page and count every row it matches.

    Returns:
        (items, total) where items are ORM instances of the first selected entity.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar() or 0

    result = await db.execute(stmt.offset(params.skip).limit(params.limit))
    return list(result.scalars().all()), total


def search_clause(term: Optional[str], columns: Sequence[Any]) -> Optional[ColumnElement]:
    """Case-insensitive substring match OR'ed across `columns`; None for blank terms."""
    if not term or not term.strip():
        return None
    term = term.strip()
    return or_(*(column.icontains(term, autoescape=True) for column in columns))


def json_array_contains_any(column: Any, values: Iterable[Any]) -> ColumnElement:
    """
    Match rows whose JSON string array holds at least one of `values`.

    Compares against the array's serialized text (`"value"` including quotes),
    which behaves the same on PostgreSQL JSONB and SQLite JSON.
    """
    needles = [json.dumps(str(value)) for value in values]
    if not needles:
        return false()
    text_column = cast(column, String)
    return or_(*(text_column.contains(needle, autoescape=True) for needle in needles))


def date_range_clauses(
    column: Any,
    date_from: Optional[datetime],
    date_to: Optional[datetime],
) -> List[ColumnElement]:
    """Inclusive lower and upper bounds; either side may be omitted."""
    clauses: List[ColumnElement] = []
    if date_from is not None:
        clauses.append(column >= date_from)
    if date_to is not None:
        clauses.append(column <= date_to)
    return clauses


def parse_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated query value into trimmed, non-empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
