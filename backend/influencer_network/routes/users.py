"""Admin user management: /api/users (role admin only)."""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import require_roles
from influencer_network.models.enums import UserRole
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.user import (
    AdminUserUpdate,
    UserData,
    UserResponse,
    UserStatsData,
)
from influencer_network.services.query import PaginationParams
from influencer_network.services.user_service import user_service

logger = logging.getLogger(__name__)

admin_only = require_roles(UserRole.ADMIN)

router = APIRouter(
    prefix="/api/users",
    tags=["Users"],
    dependencies=[*PROTECTED, Depends(admin_only)],
    responses=COMMON_ERROR_RESPONSES,
)


def user_envelope(user: User, message: str) -> ApiResponse[UserData]:
    return ApiResponse[UserData](message=message, data=UserData(user=UserResponse.model_validate(user)))


@router.get("", response_model=PaginatedResponse[UserResponse], summary="List users")
async def list_users(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    role: Optional[UserRole] = Query(default=None),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    is_email_verified: Optional[bool] = Query(default=None, alias="isEmailVerified"),
    search: Optional[str] = Query(default=None, description="Matches full name or email"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[UserResponse]:
    users, total = await user_service.list_users(
        db,
        params,
        role=role.value if role else None,
        is_active=is_active,
        is_email_verified=is_email_verified,
        search=search,
    )
    return paginated(response, users, total, params, "Users retrieved successfully", UserResponse)


@router.get("/stats", response_model=ApiResponse[UserStatsData], summary="User counts by state and role")
async def user_stats(db: AsyncSession = Depends(get_db_session)) -> ApiResponse[UserStatsData]:
    stats = await user_service.get_stats(db)
    return ApiResponse[UserStatsData](message="User statistics retrieved successfully", data=UserStatsData(stats=stats))


@router.get("/{user_id}", response_model=ApiResponse[UserData], summary="Get a user")
async def get_user(user_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[UserData]:
    return user_envelope(await user_service.get_user(db, user_id), "User retrieved successfully")


@router.patch("/{user_id}", response_model=ApiResponse[UserData], summary="Update a user")
async def update_user(
    user_id: UUID,
    body: AdminUserUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[UserData]:
    return user_envelope(await user_service.update_user(db, user_id, body), "User updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None], summary="Delete a user")
async def delete_user(
    user_id: UUID,
    admin: User = Depends(admin_only),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[None]:
    await user_service.delete_user(db, user_id, admin)
    return ApiResponse[None](message="User deleted successfully")


@router.patch("/{user_id}/deactivate", response_model=ApiResponse[UserData], summary="Deactivate a user")
async def deactivate_user(user_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[UserData]:
    return user_envelope(await user_service.set_active(db, user_id, False), "User deactivated successfully")


@router.patch("/{user_id}/activate", response_model=ApiResponse[UserData], summary="Activate a user")
async def activate_user(user_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[UserData]:
    return user_envelope(await user_service.set_active(db, user_id, True), "User activated successfully")
