"""Rate card schemas. `finalRate` is always computed server-side."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from influencer_network.models.enums import (
    ApplicableFor,
    PricingType,
    RateCardCategory,
    RateCardVisibility,
    ServiceType,
)
from influencer_network.schemas.common import CamelModel


class RateCardCreate(CamelModel):
    rate_card_name: str = Field(min_length=1, max_length=200)
    category: RateCardCategory
    service_type: ServiceType
    pricing_type: PricingType
    applicable_for: ApplicableFor
    base_rate: float = Field(ge=0)
    discount_percentage: float = Field(default=0, ge=0, le=100)
    inclusions: str = Field(min_length=1, max_length=1000)
    delivery_time: str = Field(min_length=1, max_length=100)
    content_duration: Optional[str] = Field(default=None, max_length=100)
    linked_influencer: str = Field(min_length=1, max_length=200)
    attachments: List[str] = Field(default_factory=list)
    visibility: RateCardVisibility = RateCardVisibility.PRIVATE


class RateCardUpdate(CamelModel):
    rate_card_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[RateCardCategory] = None
    service_type: Optional[ServiceType] = None
    pricing_type: Optional[PricingType] = None
    applicable_for: Optional[ApplicableFor] = None
    base_rate: Optional[float] = Field(default=None, ge=0)
    discount_percentage: Optional[float] = Field(default=None, ge=0, le=100)
    inclusions: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    delivery_time: Optional[str] = Field(default=None, min_length=1, max_length=100)
    content_duration: Optional[str] = Field(default=None, max_length=100)
    linked_influencer: Optional[str] = Field(default=None, min_length=1, max_length=200)
    attachments: Optional[List[str]] = None
    visibility: Optional[RateCardVisibility] = None


class RateCardResponse(CamelModel):
    id: uuid.UUID
    rate_card_name: str
    category: str
    service_type: str
    pricing_type: str
    applicable_for: str
    base_rate: float
    discount_percentage: float
    final_rate: float
    inclusions: str
    delivery_time: str
    content_duration: Optional[str] = None
    linked_influencer: str
    attachments: List[str]
    visibility: str
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime


class RateCardData(CamelModel):
    rate_card: RateCardResponse
