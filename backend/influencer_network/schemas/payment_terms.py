"""Payment-terms template schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from influencer_network.schemas.common import CamelModel


class TermsMilestoneInput(CamelModel):
    id: Optional[str] = None
    description: str = Field(min_length=1, max_length=200)
    percentage: float = Field(default=0, ge=0, le=100)
    amount: float = Field(default=0, ge=0)
    days_from_start: int = Field(default=0, ge=0)
    is_percentage: bool = True
    conditions: Optional[str] = Field(default=None, max_length=500)


class TermsMilestoneResponse(CamelModel):
    id: str
    description: str
    percentage: float
    amount: float
    days_from_start: int
    is_percentage: bool
    conditions: Optional[str] = None


class PaymentTermsCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    milestones: List[TermsMilestoneInput] = Field(min_length=1)
    is_default: bool = False
    is_active: bool = True


class PaymentTermsUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    milestones: Optional[List[TermsMilestoneInput]] = Field(default=None, min_length=1)
    is_default: Optional[bool] = None
    is_active: Optional[bool] = None


class PaymentTermsResponse(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    milestones: List[TermsMilestoneResponse]
    is_default: bool
    is_active: bool
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class PaymentTermsData(CamelModel):
    payment_terms: PaymentTermsResponse
