"""
Campaign project endpoints: /api/projects.

Responses embed client, people, payment-terms template and creator summaries,
resolved by ProjectService.to_responses().
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import CampaignType, ProjectStatus
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.project import (
    MilestoneStatusUpdate,
    ProjectCreate,
    ProjectData,
    ProjectListData,
    ProjectResponse,
    ProjectStatsData,
    ProjectUpdate,
    SortOrder,
)
from influencer_network.services.project_service import project_service
from influencer_network.services.query import PaginationParams

router = APIRouter(
    prefix="/api/projects",
    tags=["Projects"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


async def project_envelope(db: AsyncSession, project, message: str) -> ApiResponse[ProjectData]:
    return ApiResponse[ProjectData](
        message=message,
        data=ProjectData(project=await project_service.to_response(db, project)),
    )


@router.get("/stats", response_model=ApiResponse[ProjectStatsData], summary="Project counts and budgets")
async def project_stats(db: AsyncSession = Depends(get_db_session)) -> ApiResponse[ProjectStatsData]:
    stats = await project_service.get_stats(db)
    return ApiResponse[ProjectStatsData](
        message="Project statistics retrieved successfully",
        data=ProjectStatsData(stats=stats),
    )


@router.get(
    "/client/{client_id}",
    response_model=ApiResponse[ProjectListData],
    summary="All projects for one client, newest first",
)
async def projects_for_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ProjectListData]:
    projects = await project_service.list_by_client(db, client_id)
    return ApiResponse[ProjectListData](
        message="Client projects retrieved successfully",
        data=ProjectListData(projects=await project_service.to_responses(db, projects)),
    )


@router.get("", response_model=PaginatedResponse[ProjectResponse], summary="List projects")
async def list_projects(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    status: Optional[ProjectStatus] = Query(default=None),
    campaign_type: Optional[CampaignType] = Query(default=None, alias="campaignType"),
    client_id: Optional[UUID] = Query(default=None, alias="clientId"),
    start_date_from: Optional[datetime] = Query(default=None, alias="startDateFrom"),
    start_date_to: Optional[datetime] = Query(default=None, alias="startDateTo"),
    end_date_from: Optional[datetime] = Query(default=None, alias="endDateFrom"),
    end_date_to: Optional[datetime] = Query(default=None, alias="endDateTo"),
    search: Optional[str] = Query(default=None, description="Matches campaign name or description"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: SortOrder = Query(default="desc", alias="sortOrder"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[ProjectResponse]:
    projects, total = await project_service.list_projects(
        db,
        params,
        status=status.value if status else None,
        campaign_type=campaign_type.value if campaign_type else None,
        client_id=client_id,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        end_date_from=end_date_from,
        end_date_to=end_date_to,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    responses = await project_service.to_responses(db, projects)
    return paginated(response, responses, total, params, "Projects retrieved successfully", ProjectResponse)


@router.get("/{project_id}", response_model=ApiResponse[ProjectData], summary="Get a project")
async def get_project(project_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[ProjectData]:
    project = await project_service.get_project(db, project_id)
    return await project_envelope(db, project, "Project retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[ProjectData], summary="Create a project")
async def create_project(
    body: ProjectCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ProjectData]:
    project = await project_service.create_project(db, body, created_by=user.id)
    return await project_envelope(db, project, "Project created successfully")


@router.put("/{project_id}", response_model=ApiResponse[ProjectData], summary="Update a project")
async def update_project(
    project_id: UUID,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ProjectData]:
    project = await project_service.update_project(db, project_id, body)
    return await project_envelope(db, project, "Project updated successfully")


@router.delete("/{project_id}", response_model=ApiResponse[None], summary="Delete a project")
async def delete_project(project_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await project_service.delete_project(db, project_id)
    return ApiResponse[None](message="Project deleted successfully")


@router.patch(
    "/{project_id}/milestones/{milestone_id}",
    response_model=ApiResponse[ProjectData],
    summary="Update a milestone's status",
)
async def update_milestone_status(
    project_id: UUID,
    milestone_id: str,
    body: MilestoneStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ProjectData]:
    project = await project_service.update_milestone_status(db, project_id, milestone_id, body)
    return await project_envelope(db, project, "Milestone status updated successfully")
