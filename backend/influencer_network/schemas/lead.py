"""Lead schemas, including the computed follow-up and age fields."""

import math
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field, computed_field

from influencer_network.database import utcnow
from influencer_network.models.enums import BudgetRange, LeadSource, LeadStatus, LeadType
from influencer_network.schemas.common import CamelModel, UTCDatetime
from influencer_network.schemas.user import CONTACT_NUMBER_PATTERN

SECONDS_PER_DAY = 86400

# Scheme optional: "nimbustech.io" and "https://nimbustech.io/about" both pass
LEAD_WEBSITE_PATTERN = r"^(https?://)?[\da-z.-]+\.[a-z.]{2,6}[/\w .-]*$"


class LeadCreate(CamelModel):
    business_name: str = Field(min_length=1, max_length=100)
    contact_person: str = Field(min_length=1, max_length=100)
    contact_number: Optional[str] = Field(default=None, max_length=30, pattern=CONTACT_NUMBER_PATTERN)
    email: EmailStr
    website: Optional[str] = Field(default=None, max_length=500, pattern=LEAD_WEBSITE_PATTERN)
    lead_type: LeadType
    lead_source: LeadSource
    budget_range: BudgetRange
    status: LeadStatus = LeadStatus.NEW
    last_contacted: Optional[UTCDatetime] = None
    next_follow_up: UTCDatetime
    assigned_to: str = Field(min_length=1, max_length=100, description="Name of the owner, e.g. 'Ritika (Manager)'")
    notes: Optional[str] = Field(default=None, max_length=2000)
    conversion_probability: Optional[int] = Field(default=None, ge=0, le=100)
    attachments: Optional[str] = Field(default=None, max_length=500)
    has_reminders: bool = False


class LeadUpdate(CamelModel):
    business_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    contact_person: Optional[str] = Field(default=None, min_length=1, max_length=100)
    contact_number: Optional[str] = Field(default=None, max_length=30, pattern=CONTACT_NUMBER_PATTERN)
    email: Optional[EmailStr] = None
    website: Optional[str] = Field(default=None, max_length=500, pattern=LEAD_WEBSITE_PATTERN)
    lead_type: Optional[LeadType] = None
    lead_source: Optional[LeadSource] = None
    budget_range: Optional[BudgetRange] = None
    status: Optional[LeadStatus] = None
    last_contacted: Optional[UTCDatetime] = None
    next_follow_up: Optional[UTCDatetime] = None
    assigned_to: Optional[str] = Field(default=None, min_length=1, max_length=100)
    notes: Optional[str] = Field(default=None, max_length=2000)
    conversion_probability: Optional[int] = Field(default=None, ge=0, le=100)
    attachments: Optional[str] = Field(default=None, max_length=500)
    has_reminders: Optional[bool] = None


class LeadStatusUpdate(CamelModel):
    status: LeadStatus


class LeadResponse(CamelModel):
    id: uuid.UUID
    business_name: str
    contact_person: str
    contact_number: Optional[str] = None
    email: str
    website: Optional[str] = None
    lead_type: str
    lead_source: str
    budget_range: str
    status: str
    last_contacted: Optional[UTCDatetime] = None
    next_follow_up: UTCDatetime
    assigned_to: str
    notes: Optional[str] = None
    conversion_probability: Optional[int] = None
    attachments: Optional[str] = None
    has_reminders: bool = False
    created_by: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="daysUntilFollowUp")
    @property
    def days_until_follow_up(self) -> int:
        delta = (self.next_follow_up - utcnow()).total_seconds()
        return math.ceil(delta / SECONDS_PER_DAY)

    @computed_field(alias="leadAge")
    @property
    def lead_age(self) -> int:
        delta = (utcnow() - self.created_at).total_seconds()
        return math.floor(delta / SECONDS_PER_DAY)


class LeadData(CamelModel):
    lead: LeadResponse


class LeadConversionStat(CamelModel):
    status: str
    count: int
    avg_probability: Optional[float] = None


class LeadStatsData(CamelModel):
    stats: List[LeadConversionStat]
