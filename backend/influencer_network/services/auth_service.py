"""
Influencer Network Backend: Authentication Service
===================================================

What:  Registration, login, profile and password management, password reset
       and email verification.
How:   bcrypt hashing runs in the threadpool so it never blocks the event
       loop; tokens come from influencer_network.security.
Who:   Called by routes/auth.py and by the startup admin bootstrap.
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.config import settings
from influencer_network.database import utcnow
from influencer_network.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from influencer_network.models.enums import UserRole
from influencer_network.models.user import User
from influencer_network.schemas.user import RegisterRequest, UpdateProfileRequest
from influencer_network.security import (
    create_access_token,
    generate_one_time_token,
    hash_password,
    hash_token,
    verify_password,
)
from influencer_network.services.base import apply_changes, flush_changes

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.email, user.role)


class AuthService:
    """Account lifecycle operations; every method works on the caller's session."""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email.strip().lower()))
        return result.scalar_one_or_none()

    async def register(self, db: AsyncSession, data: RegisterRequest) -> Tuple[User, str]:
        """Create a non-admin account and return it with a fresh access token."""
        email = data.email.strip().lower()
        if await self.get_by_email(db, email) is not None:
            raise ConflictError("User with this email already exists", context={"field": "email"})

        password_hash = await run_in_threadpool(hash_password, data.password)
        user = User(
            email=email,
            password_hash=password_hash,
            phone_number=data.phone_number,
            role=data.role,
            is_active=True,
            is_email_verified=False,
        )
        user.set_names(data.first_name.strip(), data.last_name.strip())
        db.add(user)
        await flush_changes(db, "User with this email already exists")

        logger.info("Registered user %s with role %s", user.id, user.role)
        return user, issue_token(user)

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> Tuple[User, str]:
        if not email or not password:
            raise ValidationError("Please provide email and password")

        user = await self.get_by_email(db, email)
        if user is None or not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.warning("Failed login attempt for %s", email.strip().lower())
            raise AuthenticationError("Incorrect email or password")
        if not user.is_active:
            raise AuthenticationError("Account is deactivated")

        user.last_login = utcnow()
        await flush_changes(db)
        logger.info("User %s logged in", user.id)
        return user, issue_token(user)

    async def update_profile(self, db: AsyncSession, user: User, data: UpdateProfileRequest) -> User:
        """Names, contact and public profile fields only; fullName follows the names."""
        changes = data.model_dump(exclude_unset=True)
        first_name = changes.pop("first_name", None) or user.first_name
        last_name = changes.pop("last_name", None) or user.last_name
        user.set_names(first_name, last_name)
        apply_changes(user, changes)
        await flush_changes(db)
        return user

    async def change_password(
        self,
        db: AsyncSession,
        user: User,
        current_password: str,
        new_password: str,
    ) -> str:
        if not await run_in_threadpool(verify_password, current_password, user.password_hash):
            raise ValidationError("Current password is incorrect", field="currentPassword")

        user.password_hash = await run_in_threadpool(hash_password, new_password)
        user.password_changed_at = utcnow()
        await flush_changes(db)
        logger.info("User %s changed password", user.id)
        return issue_token(user)

    async def forgot_password(self, db: AsyncSession, email: str) -> str:
        """Store a hashed reset token (10 minutes) and return the raw token."""
        user = await self.get_by_email(db, email)
        if user is None:
            raise NotFoundError("User", message="No user found with that email address")

        raw_token, token_hash = generate_one_time_token()
        user.password_reset_token = token_hash
        user.password_reset_expires = utcnow() + timedelta(minutes=settings.password_reset_expires_minutes)
        await flush_changes(db)
        logger.info("Password reset requested for user %s", user.id)
        return raw_token

    async def reset_password(self, db: AsyncSession, raw_token: str, new_password: str) -> Tuple[User, str]:
        result = await db.execute(
            select(User).where(
                User.password_reset_token == hash_token(raw_token),
                User.password_reset_expires > utcnow(),
            )
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ValidationError("Token is invalid or has expired")

        user.password_hash = await run_in_threadpool(hash_password, new_password)
        user.password_reset_token = None
        user.password_reset_expires = None
        user.password_changed_at = utcnow()
        await flush_changes(db)
        logger.info("Password reset completed for user %s", user.id)
        return user, issue_token(user)

    async def verify_email(self, db: AsyncSession, raw_token: str) -> User:
        result = await db.execute(
            select(User).where(
                User.email_verification_token == hash_token(raw_token),
                User.email_verification_expires > utcnow(),
            )
        )
        user = result.scalar_one_or_none()
        if user is None:
            raise ValidationError("Verification token is invalid or has expired")

        user.is_email_verified = True
        user.email_verification_token = None
        user.email_verification_expires = None
        await flush_changes(db)
        logger.info("Email verified for user %s", user.id)
        return user

    async def resend_verification(self, db: AsyncSession, user: User) -> str:
        if user.is_email_verified:
            raise ValidationError("Email is already verified")

        raw_token, token_hash = generate_one_time_token()
        user.email_verification_token = token_hash
        user.email_verification_expires = utcnow() + timedelta(
            hours=settings.email_verification_expires_hours
        )
        await flush_changes(db)
        return raw_token

    async def ensure_admin(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """Create the bootstrap admin if no account uses `email` yet."""
        existing = await self.get_by_email(db, email)
        if existing is not None:
            return existing

        user = User(
            email=email.strip().lower(),
            password_hash=await run_in_threadpool(hash_password, password),
            role=UserRole.ADMIN.value,
            is_active=True,
            is_email_verified=True,
        )
        user.set_names(first_name, last_name)
        db.add(user)
        await flush_changes(db)
        logger.info("Bootstrap admin %s created", user.id)
        return user


auth_service = AuthService()
