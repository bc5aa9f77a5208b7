"""
Lead pipeline endpoints: /api/leads.

Static paths (/follow-ups, /stats) are declared before /{lead_id} so they are
not captured as ids.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import LeadSource, LeadStatus, LeadType
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.lead import (
    LeadCreate,
    LeadData,
    LeadResponse,
    LeadStatsData,
    LeadStatusUpdate,
    LeadUpdate,
)
from influencer_network.services.lead_service import lead_service
from influencer_network.services.query import PaginationParams

router = APIRouter(
    prefix="/api/leads",
    tags=["Leads"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def lead_envelope(lead, message: str) -> ApiResponse[LeadData]:
    return ApiResponse[LeadData](message=message, data=LeadData(lead=LeadResponse.model_validate(lead)))


@router.get("", response_model=PaginatedResponse[LeadResponse], summary="List leads")
async def list_leads(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    status: Optional[LeadStatus] = Query(default=None),
    lead_type: Optional[LeadType] = Query(default=None, alias="leadType"),
    lead_source: Optional[LeadSource] = Query(default=None, alias="leadSource"),
    assigned_to: Optional[str] = Query(default=None, alias="assignedTo"),
    next_follow_up_from: Optional[datetime] = Query(default=None, alias="nextFollowUpFrom"),
    next_follow_up_to: Optional[datetime] = Query(default=None, alias="nextFollowUpTo"),
    search: Optional[str] = Query(default=None, description="Matches business name, contact person, email, website or notes"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[LeadResponse]:
    leads, total = await lead_service.list_leads(
        db,
        params,
        status=status.value if status else None,
        lead_type=lead_type.value if lead_type else None,
        lead_source=lead_source.value if lead_source else None,
        assigned_to=assigned_to,
        next_follow_up_from=next_follow_up_from,
        next_follow_up_to=next_follow_up_to,
        search=search,
    )
    return paginated(response, leads, total, params, "Leads retrieved successfully", LeadResponse)


@router.get(
    "/follow-ups",
    response_model=ApiResponse[List[LeadResponse]],
    summary="Open leads due for follow-up",
)
async def follow_ups(
    days: int = Query(default=7, ge=0, le=365, description="Look-ahead window in days"),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[LeadResponse]]:
    leads = await lead_service.leads_requiring_follow_up(db, days)
    return ApiResponse[List[LeadResponse]](
        message="Follow-up leads retrieved successfully",
        data=[LeadResponse.model_validate(lead) for lead in leads],
    )


@router.get("/stats", response_model=ApiResponse[LeadStatsData], summary="Lead counts per status")
async def lead_stats(db: AsyncSession = Depends(get_db_session)) -> ApiResponse[LeadStatsData]:
    stats = await lead_service.conversion_stats(db)
    return ApiResponse[LeadStatsData](message="Lead statistics retrieved successfully", data=LeadStatsData(stats=stats))


@router.get("/{lead_id}", response_model=ApiResponse[LeadData], summary="Get a lead")
async def get_lead(lead_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[LeadData]:
    return lead_envelope(await lead_service.get_lead(db, lead_id), "Lead retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[LeadData], summary="Create a lead")
async def create_lead(
    body: LeadCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[LeadData]:
    return lead_envelope(await lead_service.create_lead(db, body, created_by=user.id), "Lead created successfully")


@router.patch("/{lead_id}", response_model=ApiResponse[LeadData], summary="Update a lead")
async def update_lead(
    lead_id: UUID,
    body: LeadUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[LeadData]:
    return lead_envelope(await lead_service.update_lead(db, lead_id, body), "Lead updated successfully")


@router.post("/{lead_id}/status", response_model=ApiResponse[LeadData], summary="Move a lead to another stage")
async def change_lead_status(
    lead_id: UUID,
    body: LeadStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[LeadData]:
    lead = await lead_service.change_status(db, lead_id, body.status)
    return lead_envelope(lead, "Lead status updated successfully")


@router.delete("/{lead_id}", response_model=ApiResponse[None], summary="Delete a lead")
async def delete_lead(lead_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await lead_service.delete_lead(db, lead_id)
    return ApiResponse[None](message="Lead deleted successfully")
