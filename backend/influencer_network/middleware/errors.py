"""Builds the JSON error envelope shared by exception handlers and middleware."""

from typing import Any, Dict, Optional

from starlette.requests import Request
from starlette.responses import JSONResponse

from influencer_network.database import utcnow
from influencer_network.middleware.request_id import request_id_var
from influencer_network.schemas.common import ErrorResponse


def current_request_id(request: Request) -> Optional[str]:
    """The id set by RequestIDMiddleware, also reachable outside its task context."""
    return getattr(request.state, "request_id", None) or request_id_var.get("") or None


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=current_request_id(request),
        path=request.url.path,
        method=request.method,
        timestamp=utcnow(),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"), headers=headers)
