"""
Influencer Network Backend: User Model
=======================================

What:  Portal accounts (agency staff, influencers, brands).
How:   Passwords are stored as bcrypt hashes; reset and verification tokens
       are stored as SHA-256 digests with expiry timestamps.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import UserRole


class User(TimestampedMixin, Base):
    __tablename__ = "users"

    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    full_name: Mapped[str] = mapped_column(String(101), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Lower-cased login email",
    )
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # Public profile
    bio: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    company_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    # {instagram, twitter, linkedin, youtube, tiktok}
    social_media: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)

    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.USER.value)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_email_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    profile_photo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    last_login: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    password_changed_at: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)

    password_reset_token: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    password_reset_expires: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    email_verification_token: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    email_verification_expires: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)

    __table_args__ = (
        Index("idx_users_role", "role"),
        Index("idx_users_created_at", "created_at"),
    )

    def set_names(self, first_name: str, last_name: str) -> None:
        self.first_name = first_name
        self.last_name = last_name
        self.full_name = f"{first_name} {last_name}"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
