"""Persistence helpers shared by the resource services."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.exceptions import ConflictError, DatabaseError, NotFoundError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


async def get_or_404(
    db: AsyncSession,
    model: Type[ModelT],
    resource_id: Any,
    resource_name: Optional[str] = None,
) -> ModelT:
    """Load a row by primary key or raise NotFoundError."""
    instance = await db.get(model, resource_id)
    if instance is None:
        raise NotFoundError(resource_name or model.__name__, resource_id)
    return instance


def apply_changes(instance: Any, changes: Dict[str, Any]) -> None:
    """
    Copy already-validated field values onto an ORM instance and touch updated_at.

    Explicit nulls for NOT NULL columns are ignored rather than written.
    """
    columns = instance.__table__.columns
    for field, value in changes.items():
        if value is None and field in columns and not columns[field].nullable:
            continue
        setattr(instance, field, value)
    instance.updated_at = utcnow()


async def flush_changes(db: AsyncSession, conflict_message: str = "Duplicate field value") -> None:
    """
    Flush pending writes so constraint violations surface inside the service.

    Raises:
        ConflictError: a unique constraint was violated.
        DatabaseError: any other database failure (details logged, not returned).
    """
    try:
        await db.flush()
    except IntegrityError as e:
        logger.warning("Integrity error on flush: %s", e.orig)
        raise ConflictError(conflict_message)
    except SQLAlchemyError as e:
        logger.error("Database error on flush: %s", str(e))
        raise DatabaseError("Failed to save changes", context={"error": str(e)})
