"""
Payment-terms templates: reusable milestone schedules for project billing.

At most one template is the default; saving a template with is_default=True
clears the flag everywhere else. Percentage milestones must total 100%.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import asc, desc, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.exceptions import ValidationError
from influencer_network.models.payment_terms import PaymentTermsTemplate
from influencer_network.schemas.payment_terms import (
    PaymentTermsCreate,
    PaymentTermsUpdate,
    TermsMilestoneInput,
)
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import PaginationParams, paginate, search_clause

logger = logging.getLogger(__name__)

STANDARD_TERMS_NAME = "Standard Payment Terms"
STANDARD_TERMS_MILESTONES = [
    {
        "description": "Advance Payment",
        "percentage": 50,
        "amount": 0,
        "days_from_start": 0,
        "is_percentage": True,
        "conditions": "Upon project confirmation",
    },
    {
        "description": "Final Payment",
        "percentage": 50,
        "amount": 0,
        "days_from_start": 30,
        "is_percentage": True,
        "conditions": "Upon project completion",
    },
]


def build_milestones(milestones: List[TermsMilestoneInput]) -> List[Dict[str, Any]]:
    built = []
    for milestone in milestones:
        values = milestone.model_dump()
        values["id"] = values.get("id") or str(uuid.uuid4())
        built.append(values)
    return built


def validate_milestones(milestones: List[Dict[str, Any]]) -> None:
    percentage_milestones = [m for m in milestones if m.get("is_percentage", True)]
    if not percentage_milestones:
        return
    total = sum(float(m.get("percentage") or 0) for m in percentage_milestones)
    if abs(total - 100) > 0.01:
        raise ValidationError(
            "Milestone percentages must total 100%",
            field="milestones",
            context={"total_percentage": round(total, 2)},
        )


class PaymentTermsService:

    async def list_templates(
        self,
        db: AsyncSession,
        params: PaginationParams,
        is_active: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[PaymentTermsTemplate], int]:
        stmt = select(PaymentTermsTemplate)
        if is_active is not None:
            stmt = stmt.where(PaymentTermsTemplate.is_active == is_active)
        clause = search_clause(search, [PaymentTermsTemplate.name, PaymentTermsTemplate.description])
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = stmt.order_by(desc(PaymentTermsTemplate.is_default), asc(PaymentTermsTemplate.name))
        return await paginate(db, stmt, params)

    async def get_template(self, db: AsyncSession, template_id: uuid.UUID) -> PaymentTermsTemplate:
        return await get_or_404(db, PaymentTermsTemplate, template_id, "Payment terms template")

    async def _active(self, db: AsyncSession) -> List[PaymentTermsTemplate]:
        result = await db.execute(
            select(PaymentTermsTemplate)
            .where(PaymentTermsTemplate.is_active.is_(True))
            .order_by(desc(PaymentTermsTemplate.is_default), asc(PaymentTermsTemplate.name))
        )
        return list(result.scalars().all())

    async def active_templates(
        self, db: AsyncSession, created_by: Optional[uuid.UUID] = None
    ) -> List[PaymentTermsTemplate]:
        """Active templates, seeding "Standard Payment Terms" when there are none."""
        templates = await self._active(db)
        if templates:
            return templates

        await self._clear_default(db)
        template = PaymentTermsTemplate(
            name=STANDARD_TERMS_NAME,
            description="Default 50/50 payment terms",
            milestones=[dict(m, id=str(uuid.uuid4())) for m in STANDARD_TERMS_MILESTONES],
            is_default=True,
            is_active=True,
            created_by=created_by,
        )
        db.add(template)
        await flush_changes(db)
        logger.info("Seeded default payment terms template %s", template.id)
        return [template]

    async def default_template(self, db: AsyncSession) -> Optional[PaymentTermsTemplate]:
        result = await db.execute(
            select(PaymentTermsTemplate)
            .where(
                PaymentTermsTemplate.is_default.is_(True),
                PaymentTermsTemplate.is_active.is_(True),
            )
            .order_by(asc(PaymentTermsTemplate.created_at))
            .limit(1)
        )
        return result.scalars().first()

    async def _clear_default(self, db: AsyncSession, keep_id: Optional[uuid.UUID] = None) -> None:
        stmt = (
            update(PaymentTermsTemplate)
            .where(PaymentTermsTemplate.is_default.is_(True))
            .values(is_default=False, updated_at=utcnow())
        )
        if keep_id is not None:
            stmt = stmt.where(PaymentTermsTemplate.id != keep_id)
        await db.execute(stmt)

    async def create_template(
        self, db: AsyncSession, data: PaymentTermsCreate, created_by: uuid.UUID
    ) -> PaymentTermsTemplate:
        milestones = build_milestones(data.milestones)
        validate_milestones(milestones)
        if data.is_default:
            await self._clear_default(db)

        template = PaymentTermsTemplate(
            **data.model_dump(exclude={"milestones"}),
            milestones=milestones,
            created_by=created_by,
        )
        db.add(template)
        await flush_changes(db)
        logger.info("Payment terms template %s created (default=%s)", template.id, template.is_default)
        return template

    async def update_template(
        self, db: AsyncSession, template_id: uuid.UUID, data: PaymentTermsUpdate
    ) -> PaymentTermsTemplate:
        template = await get_or_404(db, PaymentTermsTemplate, template_id, "Payment terms template")
        changes = data.model_dump(exclude_unset=True)
        if data.milestones is not None:
            changes["milestones"] = build_milestones(data.milestones)

        apply_changes(template, changes)
        validate_milestones(template.milestones or [])
        if template.is_default:
            await self._clear_default(db, keep_id=template.id)

        await flush_changes(db)
        return template

    async def delete_template(self, db: AsyncSession, template_id: uuid.UUID) -> None:
        template = await get_or_404(db, PaymentTermsTemplate, template_id, "Payment terms template")
        await db.delete(template)
        await flush_changes(db)
        logger.info("Payment terms template %s deleted", template_id)


payment_terms_service = PaymentTermsService()
