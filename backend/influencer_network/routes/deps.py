"""Shared route dependencies and envelope builders."""

from typing import Any, List, Type

from fastapi import Depends, Query, Response
from pydantic import BaseModel

from influencer_network.config import settings
from influencer_network.middleware.auth import rate_limit_by_user
from influencer_network.schemas.common import PaginatedResponse, PaginationMeta
from influencer_network.services.query import PaginationParams

# Attached to every authenticated resource router
PROTECTED = [Depends(rate_limit_by_user)]


def pagination_params(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(
        default=settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description=f"Items per page (max {settings.max_page_size})",
    ),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)


def paginated(
    response: Response,
    items: List[Any],
    total: int,
    params: PaginationParams,
    message: str,
    schema: Type[BaseModel],
) -> PaginatedResponse:
    """Wrap one page of rows in the paginated envelope and set X-Total-Count."""
    response.headers["X-Total-Count"] = str(total)
    return PaginatedResponse[schema](
        message=message,
        data=[item if isinstance(item, schema) else schema.model_validate(item) for item in items],
        pagination=PaginationMeta.build(total, params.page, params.limit),
    )
