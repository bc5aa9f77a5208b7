"""Standalone payment schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from influencer_network.models.enums import Currency, PaymentMethod, PaymentStatus
from influencer_network.schemas.common import CamelModel, UTCDatetime

PAYMENT_NUMBER_PATTERN = r"^PAY-[A-Z0-9]+-\d{6}-\d{4}$"


class AllocationInput(CamelModel):
    id: Optional[str] = None
    invoice_id: str = Field(min_length=1)
    allocated_amount: float = Field(ge=0)


class AllocationResponse(CamelModel):
    id: str
    invoice_id: str
    allocated_amount: float
    created_on: datetime


class PaymentBase(CamelModel):
    transaction_reference: Optional[str] = Field(default=None, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=1000)
    receipt_attachment: Optional[str] = Field(default=None, max_length=500)


class PaymentCreate(PaymentBase):
    payment_number: Optional[str] = Field(default=None, pattern=PAYMENT_NUMBER_PATTERN)
    invoice_ids: List[str] = Field(default_factory=list)
    amount: float = Field(ge=0)
    currency: Currency = Currency.INR
    payment_date: Optional[UTCDatetime] = None
    payment_method: PaymentMethod
    status: PaymentStatus = PaymentStatus.PENDING
    allocations: List[AllocationInput] = Field(default_factory=list)


class PaymentUpdate(PaymentBase):
    invoice_ids: Optional[List[str]] = None
    amount: Optional[float] = Field(default=None, ge=0)
    currency: Optional[Currency] = None
    payment_date: Optional[UTCDatetime] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    allocations: Optional[List[AllocationInput]] = None


class PaymentResponse(PaymentBase):
    id: uuid.UUID
    payment_number: str
    invoice_ids: List[str]
    amount: float
    currency: str
    payment_date: datetime
    payment_method: str
    status: str
    allocations: List[AllocationResponse]
    total_allocated: float
    unallocated_amount: float
    recorded_by: uuid.UUID
    recorded_on: datetime
    last_updated: datetime
    created_at: datetime
    updated_at: datetime


class PaymentData(CamelModel):
    payment: PaymentResponse


class PaymentStatusStat(CamelModel):
    status: str
    count: int
    total_amount: float


class PaymentMethodStat(CamelModel):
    payment_method: str
    count: int
    total_amount: float


class PaymentStats(CamelModel):
    by_status: List[PaymentStatusStat]
    by_method: List[PaymentMethodStat]


class PaymentStatsData(CamelModel):
    stats: PaymentStats
