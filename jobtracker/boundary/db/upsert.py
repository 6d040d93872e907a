"""
Dialect-aware INSERT ... ON CONFLICT helper.

PostgreSQL and SQLite both support ON CONFLICT DO UPDATE with RETURNING,
but through separate insert() constructs.

Dependencies: sqlalchemy
System role: Atomic upserts for outreach messages, settings and Gmail tokens
"""

from typing import Any, Sequence, TypeVar

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from jobtracker.boundary.db.base import Base, utc_now

ModelT = TypeVar("ModelT", bound=Base)


async def upsert(
    session: AsyncSession,
    model: type[ModelT],
    values: dict[str, Any],
    conflict_columns: Sequence[str],
    update_columns: Sequence[str],
) -> ModelT:
    """
    Insert a row or update it in place when a unique key already exists.

    Args:
        session: Async database session
        model: ORM model class
        values: Column values for the insert
        conflict_columns: Columns of the unique constraint to conflict on
        update_columns: Columns overwritten from `values` on conflict

    Returns:
        The inserted or updated model instance
    """
    dialect = session.get_bind().dialect.name
    insert = postgresql.insert if dialect == "postgresql" else sqlite.insert

    stmt = insert(model).values(**values)
    set_ = {column: stmt.excluded[column] for column in update_columns}
    if hasattr(model, "updated_at"):
        set_["updated_at"] = utc_now()
    stmt = stmt.on_conflict_do_update(
        index_elements=list(conflict_columns),
        set_=set_,
    ).returning(model)

    result = await session.scalars(stmt, execution_options={"populate_existing": True})
    return result.one()
