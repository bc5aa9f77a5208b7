"""Reusable milestone schedules for project billing."""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import Boolean, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base
from influencer_network.models.base import JSONType, TimestampedMixin


class PaymentTermsTemplate(TimestampedMixin, Base):
    __tablename__ = "payment_terms_templates"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    # [{id, description, percentage, amount, days_from_start, is_percentage, conditions}]
    milestones: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_payment_terms_is_active", "is_active"),
    )

    def __repr__(self) -> str:
        return f"<PaymentTermsTemplate(id={self.id}, name='{self.name}', default={self.is_default})>"
