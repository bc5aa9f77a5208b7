"""
Influencer Network Backend: Shared API Schemas
===============================================

What:  Base model, response envelopes, pagination metadata, error and
       health payloads shared by every resource.
How:   Python attributes are snake_case; the wire format is camelCase via
       an alias generator. Input accepts both spellings.

Envelopes:
    Success:   {"success": true, "message": ..., "data": ..., "timestamp": ...}
    Paginated: {"success": true, "message": ..., "data": [...],
                "pagination": {...}, "timestamp": ...}
"""

import math
from datetime import datetime
from typing import Annotated, Generic, List, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, Field
from pydantic.alias_generators import to_camel

from influencer_network.database import ensure_utc, utcnow

# Incoming timestamps without an offset are read as UTC
UTCDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


class CamelModel(BaseModel):
    """Base for every API schema: camelCase aliases, ORM-readable, enum values."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
        "use_enum_values": True,
        "validate_default": True,
    }


DataT = TypeVar("DataT")
ItemT = TypeVar("ItemT")


# ══════════════════════════════════════════════════════════════════════════
# Pagination
# ══════════════════════════════════════════════════════════════════════════


class PaginationMeta(CamelModel):
    current_page: int
    total_pages: int
    total_count: int
    limit: int
    has_next_page: bool
    has_prev_page: bool
    next_page: Optional[int] = None
    prev_page: Optional[int] = None

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PaginationMeta":
        """Derive page navigation from a total count; empty results have zero pages."""
        total_pages = math.ceil(total / limit) if limit else 0
        has_next = page < total_pages
        has_prev = page > 1
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_count=total,
            limit=limit,
            has_next_page=has_next,
            has_prev_page=has_prev,
            next_page=page + 1 if has_next else None,
            prev_page=page - 1 if has_prev else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Envelopes
# ══════════════════════════════════════════════════════════════════════════


class ApiResponse(CamelModel, Generic[DataT]):
    success: bool = True
    message: str
    data: Optional[DataT] = None
    timestamp: datetime = Field(default_factory=utcnow)


class PaginatedResponse(CamelModel, Generic[ItemT]):
    success: bool = True
    message: str
    data: List[ItemT]
    pagination: PaginationMeta
    timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(BaseModel):
    """
    Error payload produced by the exception handlers in main.py.

    Example:
        {
            "success": false,
            "error": "not_found",
            "message": "Invoice with ID 'INV-2025-001' was not found",
            "details": null,
            "request_id": "a1b2c3d4",
            "path": "/api/invoices/INV-2025-001",
            "method": "GET",
            "timestamp": "2025-01-15T10:00:00Z"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
    path: Optional[str] = None
    method: Optional[str] = None
    timestamp: Optional[datetime] = None


COMMON_ERROR_RESPONSES = {
    400: {"description": "Invalid input", "model": ErrorResponse},
    401: {"description": "Missing or invalid credentials", "model": ErrorResponse},
    404: {"description": "Resource not found", "model": ErrorResponse},
    429: {"description": "Rate limit exceeded", "model": ErrorResponse},
}


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy or degraded")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
    timestamp: datetime = Field(default_factory=utcnow)


class AddressSchema(CamelModel):
    line1: Optional[str] = Field(default=None, max_length=200)
    line2: Optional[str] = Field(default=None, max_length=200)
    city: Optional[str] = Field(default=None, max_length=100)
    state: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=20)
    country: Optional[str] = Field(default=None, max_length=100)
