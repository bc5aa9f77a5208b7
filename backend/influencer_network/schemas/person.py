"""Person (influencer) schemas."""

import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, field_validator

from influencer_network.database import utcnow
from influencer_network.models.enums import (
    AvailabilityStatus,
    PersonStatus,
    PortfolioFileType,
    PreferredPaymentMethod,
    VisibilityLevel,
)
from influencer_network.schemas.common import CamelModel, UTCDatetime
from influencer_network.schemas.user import PHONE_PATTERN


class PlatformStats(CamelModel):
    followers: Optional[int] = Field(default=None, ge=0)
    engagement: Optional[float] = Field(default=None, ge=0, le=100)
    subscribers: Optional[int] = Field(default=None, ge=0)
    connections: Optional[int] = Field(default=None, ge=0)


class PlatformMetrics(CamelModel):
    instagram: Optional[PlatformStats] = None
    youtube: Optional[PlatformStats] = None
    tiktok: Optional[PlatformStats] = None
    linkedin: Optional[PlatformStats] = None


class PortfolioFile(CamelModel):
    """A work sample, usually stored through /api/uploads."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()), min_length=1)
    file_name: str = Field(min_length=1, max_length=255)
    file_url: str = Field(min_length=1, max_length=1000)
    file_type: PortfolioFileType
    file_size: int = Field(ge=0)
    uploaded_at: UTCDatetime = Field(default_factory=utcnow)
    tags: List[str] = Field(default_factory=list)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip() for tag in v if tag.strip()]


class PersonBase(CamelModel):
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    profile_photo: Optional[str] = Field(default=None, max_length=500)
    organization: Optional[str] = Field(default=None, max_length=200)
    location: Optional[str] = Field(default=None, max_length=200)
    website: Optional[str] = Field(default=None, max_length=500)
    short_bio: Optional[str] = Field(default=None, max_length=500)
    long_bio: Optional[str] = Field(default=None, max_length=2000)
    platform_metrics: Optional[PlatformMetrics] = None
    default_rate_card_id: Optional[uuid.UUID] = None
    pricing_notes: Optional[str] = Field(default=None, max_length=1000)
    availability_status: Optional[AvailabilityStatus] = None
    next_available_date: Optional[UTCDatetime] = None


class PersonCreate(PersonBase):
    full_name: str = Field(min_length=1, max_length=100)
    roles: List[str] = Field(default_factory=list)
    portfolio_files: List[PortfolioFile] = Field(default_factory=list)
    is_negotiable: bool = True
    typical_deliverables: List[str] = Field(default_factory=list)
    preferred_payment_method: PreferredPaymentMethod = PreferredPaymentMethod.BANK_TRANSFER
    preferred_locations: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    status: PersonStatus = PersonStatus.ACTIVE
    visibility_level: VisibilityLevel = VisibilityLevel.PRIVATE
    is_claimable: bool = False

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip().lower() for tag in v if tag.strip()]


class PersonUpdate(PersonBase):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    roles: Optional[List[str]] = None
    portfolio_files: Optional[List[PortfolioFile]] = None
    is_negotiable: Optional[bool] = None
    typical_deliverables: Optional[List[str]] = None
    preferred_payment_method: Optional[PreferredPaymentMethod] = None
    preferred_locations: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    status: Optional[PersonStatus] = None
    visibility_level: Optional[VisibilityLevel] = None
    is_claimable: Optional[bool] = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [tag.strip().lower() for tag in v if tag.strip()]


class PersonResponse(PersonBase):
    id: uuid.UUID
    full_name: str
    email: Optional[str] = None
    roles: List[str]
    portfolio_files: List[PortfolioFile]
    is_negotiable: bool
    typical_deliverables: List[str]
    preferred_payment_method: str
    preferred_locations: List[str]
    tags: List[str]
    status: str
    visibility_level: str
    is_claimable: bool
    assigned_to: Optional[uuid.UUID] = None
    last_activity: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime


class PersonData(CamelModel):
    person: PersonResponse
