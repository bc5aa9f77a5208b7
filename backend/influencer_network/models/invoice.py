"""
Influencer Network Backend: Invoice Model
==========================================

What:  Invoices with embedded line items, activity log and recorded payments.
How:   Line items, activities and embedded payments are JSON arrays; the
       monetary summary columns are derived by InvoiceService.recalculate()
       before every flush.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Float, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import Currency, DiscountType, InvoiceStatus


class Invoice(TimestampedMixin, Base):
    __tablename__ = "invoices"

    invoice_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    issue_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    due_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=InvoiceStatus.DRAFT.value)

    # ── Client & campaign ─────────────────────────────────────────────────
    client_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    client_name: Mapped[str] = mapped_column(String(200), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(100), nullable=False)
    client_email: Mapped[str] = mapped_column(String(255), nullable=False)
    client_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    client_gst: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    campaign_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    campaign_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    # [{id, description, quantity, unit_price, tax_percentage, line_total, tax_amount, total_with_tax}]
    line_items: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    # ── Totals ────────────────────────────────────────────────────────────
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default=Currency.INR.value)
    subtotal: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    discount_type: Mapped[str] = mapped_column(
        String(10), nullable=False, default=DiscountType.AMOUNT.value
    )
    discount_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    discount_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    tax_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    adjustments: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    amount_paid: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    balance_due: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    # ── Terms & tracking ──────────────────────────────────────────────────
    payment_terms: Mapped[str] = mapped_column(String(200), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    terms_and_conditions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    attachments: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    sent_date: Mapped[Optional[datetime]] = mapped_column(UTCDateTime, nullable=True)
    reminders_sent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_payment_method: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    # [{id, type, description, performed_by, performed_on, metadata}]
    activities: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)
    # [{id, invoice_id, amount, payment_date, payment_method, transaction_reference, notes,
    #   receipt_attachment, status, recorded_by, recorded_on, last_updated}]
    payments: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    created_by: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    __table_args__ = (
        Index("idx_invoices_status", "status"),
        Index("idx_invoices_client_id", "client_id"),
        Index("idx_invoices_due_date", "due_date"),
        Index("idx_invoices_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Invoice(id={self.id}, number='{self.invoice_number}', "
            f"status='{self.status}', total={self.total_amount})>"
        )
