"""Payment-terms template endpoints: /api/payment-terms."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.payment_terms import (
    PaymentTermsCreate,
    PaymentTermsData,
    PaymentTermsResponse,
    PaymentTermsUpdate,
)
from influencer_network.services.payment_terms_service import payment_terms_service
from influencer_network.services.query import PaginationParams

router = APIRouter(
    prefix="/api/payment-terms",
    tags=["Payment Terms"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def terms_envelope(template, message: str) -> ApiResponse[PaymentTermsData]:
    return ApiResponse[PaymentTermsData](
        message=message,
        data=PaymentTermsData(payment_terms=PaymentTermsResponse.model_validate(template)),
    )


async def _active(user: User, db: AsyncSession) -> ApiResponse[List[PaymentTermsResponse]]:
    templates = await payment_terms_service.active_templates(db, created_by=user.id)
    return ApiResponse[List[PaymentTermsResponse]](
        message="Active payment terms retrieved successfully",
        data=[PaymentTermsResponse.model_validate(t) for t in templates],
    )


@router.get("", response_model=PaginatedResponse[PaymentTermsResponse], summary="List templates")
async def list_templates(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    is_active: Optional[bool] = Query(default=None, alias="isActive"),
    search: Optional[str] = Query(default=None, description="Matches name or description"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[PaymentTermsResponse]:
    templates, total = await payment_terms_service.list_templates(db, params, is_active=is_active, search=search)
    return paginated(response, templates, total, params, "Payment terms retrieved successfully", PaymentTermsResponse)


@router.get(
    "/active",
    response_model=ApiResponse[List[PaymentTermsResponse]],
    summary="Active templates, seeding the standard template when none exist",
)
async def active_templates(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[PaymentTermsResponse]]:
    return await _active(user, db)


@router.post(
    "/init-defaults",
    response_model=ApiResponse[List[PaymentTermsResponse]],
    summary="Seed the standard template when no active template exists",
)
async def init_defaults(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[List[PaymentTermsResponse]]:
    return await _active(user, db)


@router.get("/{template_id}", response_model=ApiResponse[PaymentTermsData], summary="Get a template")
async def get_template(template_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[PaymentTermsData]:
    return terms_envelope(
        await payment_terms_service.get_template(db, template_id), "Payment terms retrieved successfully"
    )


@router.post("", status_code=201, response_model=ApiResponse[PaymentTermsData], summary="Create a template")
async def create_template(
    body: PaymentTermsCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PaymentTermsData]:
    template = await payment_terms_service.create_template(db, body, created_by=user.id)
    return terms_envelope(template, "Payment terms created successfully")


@router.patch("/{template_id}", response_model=ApiResponse[PaymentTermsData], summary="Update a template")
async def update_template(
    template_id: UUID,
    body: PaymentTermsUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PaymentTermsData]:
    template = await payment_terms_service.update_template(db, template_id, body)
    return terms_envelope(template, "Payment terms updated successfully")


@router.delete("/{template_id}", response_model=ApiResponse[None], summary="Delete a template")
async def delete_template(template_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await payment_terms_service.delete_template(db, template_id)
    return ApiResponse[None](message="Payment terms deleted successfully")
