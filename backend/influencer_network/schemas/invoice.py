"""
Invoice schemas.

Inputs carry only the editable fields; every monetary summary (line totals,
subtotal, discount, tax, total, balance) is derived by the service layer.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import EmailStr, Field

from influencer_network.models.enums import (
    Currency,
    DiscountType,
    InvoiceStatus,
    PaymentMethod,
    PaymentStatus,
)
from influencer_network.schemas.common import CamelModel, UTCDatetime


class LineItemInput(CamelModel):
    id: Optional[str] = None
    description: str = Field(min_length=1, max_length=500)
    quantity: float = Field(ge=0.01)
    unit_price: float = Field(ge=0)
    tax_percentage: float = Field(default=0, ge=0, le=100)


class LineItemResponse(CamelModel):
    id: str
    description: str
    quantity: float
    unit_price: float
    tax_percentage: float
    line_total: float
    tax_amount: float
    total_with_tax: float


class ActivityResponse(CamelModel):
    id: str
    type: str
    description: str
    performed_by: Optional[str] = None
    performed_on: datetime
    metadata: Optional[Dict[str, Any]] = None


class EmbeddedPaymentResponse(CamelModel):
    id: str
    invoice_id: Optional[str] = None
    amount: float
    payment_date: datetime
    payment_method: str
    transaction_reference: Optional[str] = None
    notes: Optional[str] = None
    receipt_attachment: Optional[str] = None
    status: str
    recorded_by: Optional[str] = None
    recorded_on: datetime
    last_updated: Optional[datetime] = None


class InvoiceBase(CamelModel):
    client_address: Optional[str] = Field(default=None, max_length=500)
    client_gst: Optional[str] = Field(default=None, max_length=30)
    campaign_id: Optional[uuid.UUID] = None
    campaign_name: Optional[str] = Field(default=None, max_length=200)
    notes: Optional[str] = Field(default=None, max_length=1000)
    terms_and_conditions: Optional[str] = Field(default=None, max_length=2000)


class InvoiceCreate(InvoiceBase):
    invoice_number: str = Field(min_length=1, max_length=50)
    issue_date: UTCDatetime
    due_date: UTCDatetime
    status: InvoiceStatus = InvoiceStatus.DRAFT
    client_id: uuid.UUID
    client_name: str = Field(min_length=1, max_length=200)
    contact_person: str = Field(min_length=1, max_length=100)
    client_email: EmailStr
    line_items: List[LineItemInput] = Field(min_length=1)
    currency: Currency = Currency.INR
    discount_type: DiscountType = DiscountType.AMOUNT
    discount_value: float = Field(default=0, ge=0)
    adjustments: float = 0
    payment_terms: str = Field(min_length=1, max_length=200)
    attachments: List[str] = Field(default_factory=list)


class InvoiceUpdate(InvoiceBase):
    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    issue_date: Optional[UTCDatetime] = None
    due_date: Optional[UTCDatetime] = None
    status: Optional[InvoiceStatus] = None
    client_id: Optional[uuid.UUID] = None
    client_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    contact_person: Optional[str] = Field(default=None, min_length=1, max_length=100)
    client_email: Optional[EmailStr] = None
    line_items: Optional[List[LineItemInput]] = Field(default=None, min_length=1)
    currency: Optional[Currency] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[float] = Field(default=None, ge=0)
    adjustments: Optional[float] = None
    payment_terms: Optional[str] = Field(default=None, min_length=1, max_length=200)
    attachments: Optional[List[str]] = None


class RecordPaymentRequest(CamelModel):
    amount: float = Field(gt=0)
    payment_method: PaymentMethod
    payment_date: Optional[UTCDatetime] = None
    transaction_reference: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=500)
    receipt_attachment: Optional[str] = Field(default=None, max_length=500)
    status: PaymentStatus = PaymentStatus.COMPLETED


class InvoiceResponse(InvoiceBase):
    id: uuid.UUID
    invoice_number: str
    issue_date: datetime
    due_date: datetime
    status: str
    client_id: uuid.UUID
    client_name: str
    contact_person: str
    client_email: str
    line_items: List[LineItemResponse]
    currency: str
    subtotal: float
    discount_type: str
    discount_value: float
    discount_amount: float
    tax_amount: float
    adjustments: float
    total_amount: float
    amount_paid: float
    balance_due: float
    payment_terms: str
    attachments: List[str]
    sent_date: Optional[datetime] = None
    reminders_sent: int
    last_payment_method: Optional[str] = None
    activities: List[ActivityResponse]
    payments: List[EmbeddedPaymentResponse]
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class InvoiceData(CamelModel):
    invoice: InvoiceResponse
