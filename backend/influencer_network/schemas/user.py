"""Request/response schemas for authentication and user administration."""

import uuid
from datetime import datetime
from typing import Dict, Optional

from pydantic import EmailStr, Field, field_validator

from influencer_network.models.enums import UserRole
from influencer_network.schemas.common import CamelModel

PHONE_PATTERN = r"^[+]?[1-9]\d{0,15}$"
# Free-form entry as typed on forms: "+91 98765-43210", "(022) 2345 6789"
CONTACT_NUMBER_PATTERN = r"^[+]?[\d\s\-()]+$"


class UserSocialMedia(CamelModel):
    instagram: Optional[str] = Field(default=None, max_length=200)
    twitter: Optional[str] = Field(default=None, max_length=200)
    linkedin: Optional[str] = Field(default=None, max_length=200)
    youtube: Optional[str] = Field(default=None, max_length=200)
    tiktok: Optional[str] = Field(default=None, max_length=200)


class UserResponse(CamelModel):
    """Public view of a user; hashes and tokens are never exposed."""
    id: uuid.UUID
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    website: Optional[str] = None
    company_name: Optional[str] = None
    location: Optional[str] = None
    social_media: Optional[UserSocialMedia] = None
    role: UserRole
    is_active: bool
    is_email_verified: bool
    profile_photo: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


# ── Auth requests ─────────────────────────────────────────────────────────


class RegisterRequest(CamelModel):
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    phone_number: Optional[str] = Field(default=None, max_length=30, pattern=CONTACT_NUMBER_PATTERN)
    role: UserRole = UserRole.USER

    @field_validator("role")
    @classmethod
    def reject_admin_signup(cls, v: str) -> str:
        if v == UserRole.ADMIN.value:
            raise ValueError("Admin accounts cannot be self-registered")
        return v


class LoginRequest(CamelModel):
    # Optional so a missing field produces the domain message instead of a schema error
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone_number: Optional[str] = Field(default=None, max_length=30, pattern=CONTACT_NUMBER_PATTERN)
    bio: Optional[str] = Field(default=None, max_length=500)
    website: Optional[str] = Field(default=None, max_length=500)
    company_name: Optional[str] = Field(default=None, max_length=100)
    location: Optional[str] = Field(default=None, max_length=100)
    social_media: Optional[UserSocialMedia] = None
    profile_photo: Optional[str] = Field(default=None, max_length=500)


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6, max_length=128)


class ForgotPasswordRequest(CamelModel):
    email: EmailStr


class ResetPasswordRequest(CamelModel):
    password: str = Field(min_length=6, max_length=128)


# ── Auth responses ────────────────────────────────────────────────────────


class AuthData(CamelModel):
    user: UserResponse
    token: str


class UserData(CamelModel):
    user: UserResponse


class ResetTokenData(CamelModel):
    reset_token: str


class VerificationTokenData(CamelModel):
    verification_token: str


# ── Admin user management ─────────────────────────────────────────────────


class AdminUserUpdate(CamelModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    phone_number: Optional[str] = Field(default=None, max_length=30, pattern=CONTACT_NUMBER_PATTERN)
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None
    is_email_verified: Optional[bool] = None


class UserStats(CamelModel):
    total_users: int
    active_users: int
    verified_users: int
    inactive_users: int
    unverified_users: int
    role_breakdown: Dict[str, int]


class UserStatsData(CamelModel):
    stats: UserStats
