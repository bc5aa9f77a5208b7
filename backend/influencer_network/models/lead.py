"""Sales pipeline leads."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime, utcnow
from influencer_network.models.base import TimestampedMixin
from influencer_network.models.enums import LeadStatus


class Lead(TimestampedMixin, Base):
    __tablename__ = "leads"

    business_name: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(100), nullable=False)
    contact_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    lead_type: Mapped[str] = mapped_column(String(30), nullable=False)
    lead_source: Mapped[str] = mapped_column(String(30), nullable=False)
    budget_range: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=LeadStatus.NEW.value)

    last_contacted: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True, default=utcnow)
    next_follow_up: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    # Free-text owner name as entered on the lead form
    assigned_to: Mapped[str] = mapped_column(String(100), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    conversion_probability: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    attachments: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    has_reminders: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_leads_business_name", "business_name"),
        Index("idx_leads_status", "status"),
        Index("idx_leads_assigned_to", "assigned_to"),
        Index("idx_leads_next_follow_up", "next_follow_up"),
        Index("idx_leads_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Lead(id={self.id}, business_name='{self.business_name}', status='{self.status}')>"
