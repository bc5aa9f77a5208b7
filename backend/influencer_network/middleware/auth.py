"""
Influencer Network Backend: Authentication Dependencies
========================================================

What:  Request guards for protected routes: bearer-token authentication,
       role authorization, verified-email checks and per-user rate limiting.
How:   Implemented as FastAPI dependencies rather than Starlette middleware
       so they can load the user through the request's database session and
       be attached per router.

Usage:
    router = APIRouter(prefix="/api/clients", dependencies=[Depends(rate_limit_by_user)])

    @router.get("/")
    async def list_clients(user: User = Depends(get_current_user)): ...

    @router.get("/", dependencies=[Depends(require_roles(UserRole.ADMIN))])
"""

import logging
import time
import uuid
from typing import Callable, Dict, Optional, Tuple, Union

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    RateLimitExceededError,
)
from influencer_network.models.enums import UserRole
from influencer_network.models.user import User
from influencer_network.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")


# ══════════════════════════════════════════════════════════════════════════
# Per-user rate limiter
# ══════════════════════════════════════════════════════════════════════════


class UserRateLimiter:
    """
    Fixed-window request counter keyed by user id.

    Each user gets `max_requests` per `window_seconds`; the window starts at
    the user's first request and resets once it has fully elapsed.
    In-memory and per-process, like RateLimitMiddleware. Every
    `cleanup_every` hits, windows that have fully elapsed are dropped.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: int,
        clock: Callable[[], float] = time.monotonic,
        cleanup_every: int = 1000,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.cleanup_every = cleanup_every
        self._clock = clock
        # user key -> (window start, request count)
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._seen = 0

    def hit(self, key: str) -> None:
        """Count one request for `key`; raises RateLimitExceededError once over the limit."""
        now = self._clock()
        window_start, count = self._windows.get(key, (now, 0))

        if now - window_start >= self.window_seconds:
            window_start, count = now, 0

        if count >= self.max_requests:
            retry_after = max(1, int(window_start + self.window_seconds - now))
            logger.warning("User rate limit exceeded for %s", key)
            raise RateLimitExceededError(
                message="Too many requests from this user, please try again later.",
                retry_after=retry_after,
            )

        self._windows[key] = (window_start, count + 1)

        self._seen += 1
        if self._seen % self.cleanup_every == 0:
            self.purge_expired(now)

    def purge_expired(self, now: Optional[float] = None) -> int:
        """Drop windows that have fully elapsed; returns how many were removed."""
        now = self._clock() if now is None else now
        expired = [
            key for key, (window_start, _) in self._windows.items()
            if now - window_start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug("Purged %d expired user rate-limit windows", len(expired))
        return len(expired)

    @property
    def tracked_keys(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        self._windows.clear()
        self._seen = 0


# ══════════════════════════════════════════════════════════════════════════
# Dependencies
# ══════════════════════════════════════════════════════════════════════════


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> User:
    """
    Resolve the bearer token to an active user.

    Raises:
        AuthenticationError: missing/invalid/expired token, unknown or
        deactivated user, or a token issued before the last password change.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token is required")

    claims = decode_access_token(credentials.credentials)
    try:
        user_id = uuid.UUID(str(claims["userId"]))
    except ValueError:
        raise AuthenticationError("Invalid token")

    user = await db.get(User, user_id)
    if user is None:
        raise AuthenticationError("User not found")
    if not user.is_active:
        logger.warning("Rejected token for deactivated user %s", user.id)
        raise AuthenticationError("Account is deactivated")

    issued_at = claims.get("iat")
    if (
        user.password_changed_at is not None
        and issued_at is not None
        and int(issued_at) < int(user.password_changed_at.timestamp())
    ):
        raise AuthenticationError("User recently changed password. Please log in again")

    return user


def require_roles(*roles: Union[UserRole, str]) -> Callable:
    """Build a dependency that only lets the listed roles through (403 otherwise)."""
    allowed = {role.value if isinstance(role, UserRole) else role for role in roles}

    async def role_checker(user: User = Depends(get_current_user)) -> User:
        if user.role not in allowed:
            logger.warning("User %s with role %s denied; requires %s", user.id, user.role, sorted(allowed))
            raise PermissionDeniedError(
                "Insufficient permissions",
                context={"required_roles": sorted(allowed)},
            )
        return user

    return role_checker


async def require_verified_email(user: User = Depends(get_current_user)) -> User:
    if not user.is_email_verified:
        raise PermissionDeniedError("Please verify your email address")
    return user


async def rate_limit_by_user(
    request: Request,
    user: User = Depends(get_current_user),
) -> User:
    """Apply the application's UserRateLimiter to the authenticated caller."""
    limiter: Optional[UserRateLimiter] = getattr(request.app.state, "user_rate_limiter", None)
    if limiter is not None:
        limiter.hit(str(user.id))
    return user
