"""Project (campaign) schemas, including related-record summaries."""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field

from influencer_network.models.enums import (
    CampaignType,
    MilestonePaymentType,
    MilestoneStatus,
    ProjectPaymentTerms,
    ProjectStatus,
)
from influencer_network.schemas.common import CamelModel, UTCDatetime


class MilestonePayment(CamelModel):
    type: MilestonePaymentType
    value: float = Field(ge=0)


class ProjectMilestoneInput(CamelModel):
    id: Optional[str] = None
    milestone_name: str = Field(min_length=1, max_length=200)
    payment: MilestonePayment
    collect_in: int = Field(ge=0)
    status: MilestoneStatus = MilestoneStatus.PENDING
    completed_at: Optional[UTCDatetime] = None


class ProjectMilestoneResponse(CamelModel):
    id: str
    milestone_name: str
    payment: MilestonePayment
    collect_in: int
    status: str
    completed_at: Optional[datetime] = None


class ProjectCreate(CamelModel):
    campaign_name: str = Field(min_length=1, max_length=200)
    client_id: uuid.UUID
    project_agreed_budget: float = Field(ge=0)
    start_date: UTCDatetime
    end_date: UTCDatetime
    campaign_type: CampaignType
    people_involved: List[uuid.UUID] = Field(default_factory=list)
    payment_terms: ProjectPaymentTerms = ProjectPaymentTerms.DEFAULT
    payment_terms_template_id: Optional[uuid.UUID] = None
    milestones: List[ProjectMilestoneInput] = Field(default_factory=list)
    target_platform: List[str] = Field(min_length=1)
    status: ProjectStatus = ProjectStatus.DRAFT
    description: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=2000)
    deliverables: List[str] = Field(default_factory=list)


class ProjectUpdate(CamelModel):
    campaign_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    client_id: Optional[uuid.UUID] = None
    project_agreed_budget: Optional[float] = Field(default=None, ge=0)
    start_date: Optional[UTCDatetime] = None
    end_date: Optional[UTCDatetime] = None
    campaign_type: Optional[CampaignType] = None
    people_involved: Optional[List[uuid.UUID]] = None
    payment_terms: Optional[ProjectPaymentTerms] = None
    payment_terms_template_id: Optional[uuid.UUID] = None
    milestones: Optional[List[ProjectMilestoneInput]] = Field(default=None, min_length=1)
    target_platform: Optional[List[str]] = Field(default=None, min_length=1)
    status: Optional[ProjectStatus] = None
    description: Optional[str] = Field(default=None, max_length=2000)
    notes: Optional[str] = Field(default=None, max_length=2000)
    deliverables: Optional[List[str]] = None


class MilestoneStatusUpdate(CamelModel):
    status: MilestoneStatus
    completed_at: Optional[UTCDatetime] = None


# ── Related-record summaries ──────────────────────────────────────────────


class ClientSummary(CamelModel):
    id: uuid.UUID
    business_name: str
    logo: Optional[str] = None
    category: Optional[str] = None


class PersonSummary(CamelModel):
    id: uuid.UUID
    full_name: str
    email: Optional[str] = None
    roles: List[str] = Field(default_factory=list)
    profile_photo: Optional[str] = None


class TemplateSummary(CamelModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None


class CreatorSummary(CamelModel):
    id: uuid.UUID
    full_name: str
    email: str


class ProjectResponse(CamelModel):
    id: uuid.UUID
    campaign_name: str
    client_id: uuid.UUID
    client: Optional[ClientSummary] = None
    project_agreed_budget: float
    start_date: datetime
    end_date: datetime
    campaign_type: str
    people_involved: List[str]
    people: List[PersonSummary] = Field(default_factory=list)
    payment_terms: str
    payment_terms_template_id: Optional[uuid.UUID] = None
    payment_terms_template: Optional[TemplateSummary] = None
    milestones: List[ProjectMilestoneResponse]
    target_platform: List[str]
    status: str
    description: Optional[str] = None
    notes: Optional[str] = None
    deliverables: List[str]
    created_by: uuid.UUID
    creator: Optional[CreatorSummary] = None
    created_at: datetime
    updated_at: datetime


class ProjectData(CamelModel):
    project: ProjectResponse


class ProjectListData(CamelModel):
    projects: List[ProjectResponse]


class ProjectStatusStat(CamelModel):
    status: str
    count: int
    total_budget: float


class CampaignTypeStat(CamelModel):
    campaign_type: str
    count: int
    total_budget: float


class ProjectStats(CamelModel):
    status_stats: List[ProjectStatusStat]
    campaign_type_stats: List[CampaignTypeStat]


class ProjectStatsData(CamelModel):
    stats: ProjectStats


SortOrder = Literal["asc", "desc"]
