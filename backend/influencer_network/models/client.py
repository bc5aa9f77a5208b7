"""Client (brand/business) records."""

import uuid
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base
from influencer_network.models.base import JSONType, TimestampedMixin


class Client(TimestampedMixin, Base):
    __tablename__ = "clients"

    business_name: Mapped[str] = mapped_column(String(200), nullable=False)
    logo: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_gst_registered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    gst_number: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    pan_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # {line1, line2, city, state, postal_code, country}
    business_address: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    # Denormalized from business_address for search
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    social_media: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_clients_business_name", "business_name"),
        Index("idx_clients_category", "category"),
        Index("idx_clients_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, business_name='{self.business_name}')>"
