"""Client campaigns with payment milestones."""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import Float, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import Base, UTCDateTime
from influencer_network.models.base import JSONType, TimestampedMixin
from influencer_network.models.enums import ProjectPaymentTerms, ProjectStatus


class Project(TimestampedMixin, Base):
    __tablename__ = "projects"

    campaign_name: Mapped[str] = mapped_column(String(200), nullable=False)
    client_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    project_agreed_budget: Mapped[float] = mapped_column(Float, nullable=False)
    start_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    campaign_type: Mapped[str] = mapped_column(String(30), nullable=False)
    # Person ids as strings
    people_involved: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    payment_terms: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProjectPaymentTerms.DEFAULT.value
    )
    payment_terms_template_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    # [{id, milestone_name, payment: {type, value}, collect_in, status, completed_at}]
    milestones: Mapped[List[Dict[str, Any]]] = mapped_column(JSONType, nullable=False, default=list)

    target_platform: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=ProjectStatus.DRAFT.value)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    deliverables: Mapped[List[str]] = mapped_column(JSONType, nullable=False, default=list)

    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)

    __table_args__ = (
        Index("idx_projects_client_id", "client_id"),
        Index("idx_projects_status", "status"),
        Index("idx_projects_start_date", "start_date"),
        Index("idx_projects_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, campaign='{self.campaign_name}', status='{self.status}')>"
