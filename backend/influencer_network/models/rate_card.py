"""Priced service offerings for influencers."""

import uuid
from typing import List, Optional

from sqlalchemy import Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import RateCardVisibility


class RateCard(TimestampedMixin, Base):
    __tablename__ = "rate_cards"

    rate_card_name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False)
    service_type: Mapped[str] = mapped_column(String(20), nullable=False)
    pricing_type: Mapped[str] = mapped_column(String(20), nullable=False)
    applicable_for: Mapped[str] = mapped_column(String(30), nullable=False)

    base_rate: Mapped[float] = mapped_column(Float, nullable=False)
    discount_percentage: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    final_rate: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        comment="base_rate less discount_percentage, recomputed on every save",
    )

    inclusions: Mapped[str] = mapped_column(Text, nullable=False)
    delivery_time: Mapped[str] = mapped_column(String(100), nullable=False)
    content_duration: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    linked_influencer: Mapped[str] = mapped_column(String(200), nullable=False)
    attachments: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    visibility: Mapped[str] = mapped_column(
        String(10), nullable=False, default=RateCardVisibility.PRIVATE.value
    )

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_rate_cards_category", "category"),
        Index("idx_rate_cards_visibility", "visibility"),
        Index("idx_rate_cards_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<RateCard(id={self.id}, name='{self.rate_card_name}', final_rate={self.final_rate})>"
