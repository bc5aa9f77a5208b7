"""Standalone payment records, numbered PAY-<code>-YYYYMM-NNNN."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime, utcnow
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import Currency, PaymentStatus


class Payment(TimestampedMixin, Base):
    __tablename__ = "payments"

    payment_number: Mapped[str] = mapped_column(String(40), nullable=False, unique=True)
    invoice_ids: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default=Currency.INR.value)
    payment_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    payment_method: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=PaymentStatus.PENDING.value)
    transaction_reference: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    receipt_attachment: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # [{id, invoice_id, allocated_amount, created_on}]
    allocations: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    recorded_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    recorded_on: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)
    last_updated: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (
        Index("idx_payments_status", "status"),
        Index("idx_payments_payment_date", "payment_date"),
        Index("idx_payments_recorded_by", "recorded_by"),
    )

    @property
    def total_allocated(self) -> float:
        return round(sum(float(a.get("allocated_amount", 0)) for a in self.allocations or []), 2)

    @property
    def unallocated_amount(self) -> float:
        return round(self.amount - self.total_allocated, 2)

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, number='{self.payment_number}', amount={self.amount})>"
