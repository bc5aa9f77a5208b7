"""Influencers and creators represented by the agency."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import (
    PersonStatus,
    PreferredPaymentMethod,
    VisibilityLevel,
)


class Person(TimestampedMixin, Base):
    __tablename__ = "people"

    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    profile_photo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    roles: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    organization: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    short_bio: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    long_bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # {instagram: {followers, engagement}, youtube: {subscribers}, ...}
    platform_metrics: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    # [{id, file_name, file_url, file_type, file_size, uploaded_at, tags, description}]
    portfolio_files: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    default_rate_card_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    pricing_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_negotiable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    typical_deliverables: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    preferred_payment_method: Mapped[str] = mapped_column(
        String(30), nullable=False, default=PreferredPaymentMethod.BANK_TRANSFER.value
    )

    availability_status: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    next_available_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    preferred_locations: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    tags: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default=PersonStatus.ACTIVE.value)
    visibility_level: Mapped[str] = mapped_column(
        String(20), nullable=False, default=VisibilityLevel.PRIVATE.value
    )
    is_claimable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    assigned_to: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    last_activity: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)

    __table_args__ = (
        Index("idx_people_full_name", "full_name"),
        Index("idx_people_status", "status"),
        Index("idx_people_assigned_to", "assigned_to"),
        Index("idx_people_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Person(id={self.id}, full_name='{self.full_name}', status='{self.status}')>"
