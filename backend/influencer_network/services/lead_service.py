"""
Lead pipeline: CRUD, status changes, follow-up queue and conversion stats.

A new lead's next follow-up must not be in the past; later edits may move it
anywhere, matching how the pipeline is worked day to day.
"""

import logging
import uuid
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.exceptions import ValidationError
from influencer_network.models.enums import LeadStatus
from influencer_network.models.lead import Lead
from influencer_network.schemas.lead import LeadConversionStat, LeadCreate, LeadUpdate
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import (
    PaginationParams,
    date_range_clauses,
    paginate,
    search_clause,
)

logger = logging.getLogger(__name__)

CLOSED_STATUSES = (LeadStatus.WON.value, LeadStatus.LOST.value)


class LeadService:

    async def list_leads(
        self,
        db: AsyncSession,
        params: PaginationParams,
        status: Optional[str] = None,
        lead_type: Optional[str] = None,
        lead_source: Optional[str] = None,
        assigned_to: Optional[str] = None,
        next_follow_up_from: Optional[datetime] = None,
        next_follow_up_to: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Lead], int]:
        stmt = select(Lead)
        if status:
            stmt = stmt.where(Lead.status == status)
        if lead_type:
            stmt = stmt.where(Lead.lead_type == lead_type)
        if lead_source:
            stmt = stmt.where(Lead.lead_source == lead_source)
        if assigned_to:
            stmt = stmt.where(Lead.assigned_to == assigned_to)
        for clause in date_range_clauses(Lead.next_follow_up, next_follow_up_from, next_follow_up_to):
            stmt = stmt.where(clause)
        clause = search_clause(
            search, [Lead.business_name, Lead.contact_person, Lead.email, Lead.website, Lead.notes]
        )
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(Lead.created_at)), params)

    async def get_lead(self, db: AsyncSession, lead_id: uuid.UUID) -> Lead:
        return await get_or_404(db, Lead, lead_id)

    async def create_lead(self, db: AsyncSession, data: LeadCreate, created_by: uuid.UUID) -> Lead:
        if data.next_follow_up < utcnow():
            raise ValidationError("Next follow-up date cannot be in the past", field="nextFollowUp")

        values = data.model_dump()
        values["email"] = values["email"].lower()
        values["last_contacted"] = values["last_contacted"] or utcnow()
        lead = Lead(**values, created_by=created_by)
        db.add(lead)
        await flush_changes(db)
        logger.info("Lead %s created for %s", lead.id, lead.business_name)
        return lead

    async def update_lead(self, db: AsyncSession, lead_id: uuid.UUID, data: LeadUpdate) -> Lead:
        lead = await get_or_404(db, Lead, lead_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("email"):
            changes["email"] = changes["email"].lower()
        apply_changes(lead, changes)
        await flush_changes(db)
        return lead

    async def change_status(self, db: AsyncSession, lead_id: uuid.UUID, status: str) -> Lead:
        lead = await get_or_404(db, Lead, lead_id)
        previous = lead.status
        apply_changes(lead, {"status": status})
        await flush_changes(db)
        logger.info("Lead %s status %s -> %s", lead.id, previous, status)
        return lead

    async def delete_lead(self, db: AsyncSession, lead_id: uuid.UUID) -> None:
        lead = await get_or_404(db, Lead, lead_id)
        await db.delete(lead)
        await flush_changes(db)

    async def leads_requiring_follow_up(self, db: AsyncSession, days: int = 7) -> List[Lead]:
        """Open leads whose next follow-up falls within the next `days` days (or is overdue)."""
        horizon = utcnow() + timedelta(days=days)
        result = await db.execute(
            select(Lead)
            .where(Lead.next_follow_up <= horizon, Lead.status.not_in(CLOSED_STATUSES))
            .order_by(asc(Lead.next_follow_up))
        )
        return list(result.scalars().all())

    async def conversion_stats(self, db: AsyncSession) -> List[LeadConversionStat]:
        result = await db.execute(
            select(Lead.status, func.count(Lead.id), func.avg(Lead.conversion_probability))
            .group_by(Lead.status)
            .order_by(Lead.status)
        )
        return [
            LeadConversionStat(
                status=status,
                count=count,
                avg_probability=round(float(avg), 2) if avg is not None else None,
            )
            for status, count, avg in result.all()
        ]


lead_service = LeadService()
