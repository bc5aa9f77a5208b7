"""
Influencer Network Backend: Project Service
============================================

What:  Campaign projects with payment milestones, related-record summaries
       and per-status / per-campaign-type statistics.
How:   Projects store plain ids for their client, people, template and
       creator. Responses resolve those ids in batch (one query per related
       table per page) and embed compact summaries.

Default payment terms:
    When a project is created with paymentTerms="default" and no template id,
    its milestones are taken from the active default template:

        template milestone i          project milestone
        ─────────────────────         ───────────────────────────────
        description          →        milestone_name
        percentage / amount  →        payment {type, value}
        days_from_start      →        collect_in
                                      id "milestone-{i+1}", status pending
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import asc, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.exceptions import NotFoundError, ValidationError
from influencer_network.models.client import Client
from influencer_network.models.enums import MilestonePaymentType, MilestoneStatus, ProjectPaymentTerms
from influencer_network.models.payment_terms import PaymentTermsTemplate
from influencer_network.models.person import Person
from influencer_network.models.project import Project
from influencer_network.models.user import User
from influencer_network.schemas.project import (
    CampaignTypeStat,
    ClientSummary,
    CreatorSummary,
    MilestoneStatusUpdate,
    PersonSummary,
    ProjectCreate,
    ProjectMilestoneInput,
    ProjectResponse,
    ProjectStats,
    ProjectStatusStat,
    ProjectUpdate,
    TemplateSummary,
)
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.payment_terms_service import payment_terms_service
from influencer_network.services.query import (
    PaginationParams,
    date_range_clauses,
    paginate,
    search_clause,
)

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "createdAt": Project.created_at,
    "updatedAt": Project.updated_at,
    "campaignName": Project.campaign_name,
    "startDate": Project.start_date,
    "endDate": Project.end_date,
    "projectAgreedBudget": Project.project_agreed_budget,
    "status": Project.status,
    "campaignType": Project.campaign_type,
}


# ── Milestone helpers ─────────────────────────────────────────────────────


def build_milestones(milestones: List[ProjectMilestoneInput]) -> List[Dict[str, Any]]:
    built = []
    for milestone in milestones:
        values = milestone.model_dump(mode="json")
        values["id"] = values.get("id") or str(uuid.uuid4())
        built.append(values)
    return built


def milestones_from_template(template: PaymentTermsTemplate) -> List[Dict[str, Any]]:
    converted = []
    for index, milestone in enumerate(template.milestones or []):
        is_percentage = milestone.get("is_percentage", True)
        converted.append({
            "id": f"milestone-{index + 1}",
            "milestone_name": milestone["description"],
            "payment": {
                "type": (
                    MilestonePaymentType.PERCENTAGE.value
                    if is_percentage
                    else MilestonePaymentType.AMOUNT.value
                ),
                "value": milestone.get("percentage") if is_percentage else milestone.get("amount"),
            },
            "collect_in": milestone.get("days_from_start", 0),
            "status": MilestoneStatus.PENDING.value,
            "completed_at": None,
        })
    return converted


def validate_milestones(milestones: List[Dict[str, Any]]) -> None:
    if not milestones:
        raise ValidationError("At least one milestone is required", field="milestones")
    percentages = [
        float(m["payment"]["value"])
        for m in milestones
        if m["payment"]["type"] == MilestonePaymentType.PERCENTAGE.value
    ]
    if percentages and abs(sum(percentages) - 100) > 0.01:
        raise ValidationError(
            "Milestone percentages must total 100%",
            field="milestones",
            context={"total_percentage": round(sum(percentages), 2)},
        )


def validate_dates(start_date: datetime, end_date: datetime) -> None:
    if end_date <= start_date:
        raise ValidationError("End date must be after start date", field="endDate")


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class ProjectService:

    async def list_projects(
        self,
        db: AsyncSession,
        params: PaginationParams,
        status: Optional[str] = None,
        campaign_type: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
        start_date_from: Optional[datetime] = None,
        start_date_to: Optional[datetime] = None,
        end_date_from: Optional[datetime] = None,
        end_date_to: Optional[datetime] = None,
        search: Optional[str] = None,
        sort_by: str = "createdAt",
        sort_order: str = "desc",
    ) -> Tuple[List[Project], int]:
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                field="sortBy",
                context={"allowed": sorted(SORTABLE_FIELDS)},
            )

        stmt = select(Project)
        if status:
            stmt = stmt.where(Project.status == status)
        if campaign_type:
            stmt = stmt.where(Project.campaign_type == campaign_type)
        if client_id:
            stmt = stmt.where(Project.client_id == client_id)
        for clause in date_range_clauses(Project.start_date, start_date_from, start_date_to):
            stmt = stmt.where(clause)
        for clause in date_range_clauses(Project.end_date, end_date_from, end_date_to):
            stmt = stmt.where(clause)
        clause = search_clause(search, [Project.campaign_name, Project.description])
        if clause is not None:
            stmt = stmt.where(clause)

        column = SORTABLE_FIELDS[sort_by]
        ordering = asc(column) if sort_order == "asc" else desc(column)
        return await paginate(db, stmt.order_by(ordering, desc(Project.id)), params)

    async def list_by_client(self, db: AsyncSession, client_id: uuid.UUID) -> List[Project]:
        result = await db.execute(
            select(Project).where(Project.client_id == client_id).order_by(desc(Project.created_at))
        )
        return list(result.scalars().all())

    async def get_project(self, db: AsyncSession, project_id: uuid.UUID) -> Project:
        return await get_or_404(db, Project, project_id)

    async def create_project(self, db: AsyncSession, data: ProjectCreate, created_by: uuid.UUID) -> Project:
        validate_dates(data.start_date, data.end_date)

        milestones = build_milestones(data.milestones)
        template_id = data.payment_terms_template_id
        if data.payment_terms == ProjectPaymentTerms.DEFAULT.value and template_id is None:
            template = await payment_terms_service.default_template(db)
            if template is not None:
                milestones = milestones_from_template(template)
                template_id = template.id
        validate_milestones(milestones)

        values = data.model_dump(exclude={"milestones", "people_involved", "payment_terms_template_id"})
        project = Project(
            **values,
            people_involved=[str(person_id) for person_id in data.people_involved],
            payment_terms_template_id=template_id,
            milestones=milestones,
            created_by=created_by,
        )
        db.add(project)
        await flush_changes(db)
        logger.info("Project %s created for client %s", project.id, project.client_id)
        return project

    async def update_project(self, db: AsyncSession, project_id: uuid.UUID, data: ProjectUpdate) -> Project:
        project = await get_or_404(db, Project, project_id)
        changes = data.model_dump(exclude_unset=True)
        if data.milestones is not None:
            changes["milestones"] = build_milestones(data.milestones)
        if data.people_involved is not None:
            changes["people_involved"] = [str(person_id) for person_id in data.people_involved]

        apply_changes(project, changes)
        validate_dates(project.start_date, project.end_date)
        validate_milestones(project.milestones or [])

        await flush_changes(db)
        return project

    async def delete_project(self, db: AsyncSession, project_id: uuid.UUID) -> None:
        project = await get_or_404(db, Project, project_id)
        await db.delete(project)
        await flush_changes(db)
        logger.info("Project %s deleted", project_id)

    async def update_milestone_status(
        self,
        db: AsyncSession,
        project_id: uuid.UUID,
        milestone_id: str,
        data: MilestoneStatusUpdate,
    ) -> Project:
        project = await get_or_404(db, Project, project_id)

        milestones = [dict(m) for m in project.milestones or []]
        target = next((m for m in milestones if m.get("id") == milestone_id), None)
        if target is None:
            raise NotFoundError("Milestone", milestone_id)

        target["status"] = data.status
        if data.status == MilestoneStatus.COMPLETED.value:
            target["completed_at"] = (data.completed_at or utcnow()).isoformat()
        else:
            target["completed_at"] = None

        apply_changes(project, {"milestones": milestones})
        await flush_changes(db)
        logger.info("Project %s milestone %s marked %s", project.id, milestone_id, data.status)
        return project

    async def get_stats(self, db: AsyncSession) -> ProjectStats:
        by_status = await db.execute(
            select(Project.status, func.count(Project.id), func.coalesce(func.sum(Project.project_agreed_budget), 0))
            .group_by(Project.status)
            .order_by(Project.status)
        )
        by_type = await db.execute(
            select(
                Project.campaign_type,
                func.count(Project.id),
                func.coalesce(func.sum(Project.project_agreed_budget), 0),
            )
            .group_by(Project.campaign_type)
            .order_by(Project.campaign_type)
        )
        return ProjectStats(
            status_stats=[
                ProjectStatusStat(status=status, count=count, total_budget=round(float(total), 2))
                for status, count, total in by_status.all()
            ],
            campaign_type_stats=[
                CampaignTypeStat(campaign_type=campaign_type, count=count, total_budget=round(float(total), 2))
                for campaign_type, count, total in by_type.all()
            ],
        )

    # ── Response assembly ─────────────────────────────────────────────────

    async def to_responses(self, db: AsyncSession, projects: List[Project]) -> List[ProjectResponse]:
        """Build responses with client, people, template and creator summaries."""
        if not projects:
            return []

        client_ids = {p.client_id for p in projects}
        person_ids = {uuid.UUID(pid) for p in projects for pid in p.people_involved or []}
        template_ids = {p.payment_terms_template_id for p in projects if p.payment_terms_template_id}
        creator_ids = {p.created_by for p in projects}

        clients = await self._by_id(db, Client, client_ids)
        people = await self._by_id(db, Person, person_ids)
        templates = await self._by_id(db, PaymentTermsTemplate, template_ids)
        creators = await self._by_id(db, User, creator_ids)

        responses = []
        for project in projects:
            client = clients.get(project.client_id)
            template = templates.get(project.payment_terms_template_id)
            creator = creators.get(project.created_by)
            involved = [people[uuid.UUID(pid)] for pid in project.people_involved or [] if uuid.UUID(pid) in people]

            response = ProjectResponse.model_validate(project)
            responses.append(response.model_copy(update={
                "client": ClientSummary.model_validate(client) if client else None,
                "people": [PersonSummary.model_validate(person) for person in involved],
                "payment_terms_template": TemplateSummary.model_validate(template) if template else None,
                "creator": CreatorSummary.model_validate(creator) if creator else None,
            }))
        return responses

    async def to_response(self, db: AsyncSession, project: Project) -> ProjectResponse:
        return (await self.to_responses(db, [project]))[0]

    async def _by_id(self, db: AsyncSession, model: Any, ids: set) -> Dict[uuid.UUID, Any]:
        if not ids:
            return {}
        result = await db.execute(select(model).where(model.id.in_(ids)))
        return {row.id: row for row in result.scalars().all()}


project_service = ProjectService()
