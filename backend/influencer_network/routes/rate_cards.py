"""Rate card endpoints: /api/rate-cards."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import RateCardCategory, RateCardVisibility, ServiceType
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.rate_card import (
    RateCardCreate,
    RateCardData,
    RateCardResponse,
    RateCardUpdate,
)
from influencer_network.services.query import PaginationParams
from influencer_network.services.rate_card_service import rate_card_service

router = APIRouter(
    prefix="/api/rate-cards",
    tags=["Rate Cards"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def rate_card_envelope(rate_card, message: str) -> ApiResponse[RateCardData]:
    return ApiResponse[RateCardData](
        message=message,
        data=RateCardData(rate_card=RateCardResponse.model_validate(rate_card)),
    )


@router.get("", response_model=PaginatedResponse[RateCardResponse], summary="List rate cards")
async def list_rate_cards(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    category: Optional[RateCardCategory] = Query(default=None),
    service_type: Optional[ServiceType] = Query(default=None, alias="serviceType"),
    visibility: Optional[RateCardVisibility] = Query(default=None),
    linked_influencer: Optional[str] = Query(default=None, alias="linkedInfluencer"),
    search: Optional[str] = Query(default=None, description="Matches name, inclusions or influencer"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[RateCardResponse]:
    rate_cards, total = await rate_card_service.list_rate_cards(
        db,
        params,
        category=category.value if category else None,
        service_type=service_type.value if service_type else None,
        visibility=visibility.value if visibility else None,
        linked_influencer=linked_influencer,
        search=search,
    )
    return paginated(response, rate_cards, total, params, "Rate cards retrieved successfully", RateCardResponse)


@router.get("/{rate_card_id}", response_model=ApiResponse[RateCardData], summary="Get a rate card")
async def get_rate_card(rate_card_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[RateCardData]:
    return rate_card_envelope(
        await rate_card_service.get_rate_card(db, rate_card_id), "Rate card retrieved successfully"
    )


@router.post("", status_code=201, response_model=ApiResponse[RateCardData], summary="Create a rate card")
async def create_rate_card(
    body: RateCardCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[RateCardData]:
    rate_card = await rate_card_service.create_rate_card(db, body, created_by=user.id)
    return rate_card_envelope(rate_card, "Rate card created successfully")


@router.patch("/{rate_card_id}", response_model=ApiResponse[RateCardData], summary="Update a rate card")
async def update_rate_card(
    rate_card_id: UUID,
    body: RateCardUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[RateCardData]:
    rate_card = await rate_card_service.update_rate_card(db, rate_card_id, body)
    return rate_card_envelope(rate_card, "Rate card updated successfully")


@router.post(
    "/{rate_card_id}/toggle-visibility",
    response_model=ApiResponse[RateCardData],
    summary="Switch between Public and Private",
)
async def toggle_visibility(
    rate_card_id: UUID,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[RateCardData]:
    rate_card = await rate_card_service.toggle_visibility(db, rate_card_id)
    return rate_card_envelope(rate_card, f"Rate card is now {rate_card.visibility}")


@router.delete("/{rate_card_id}", response_model=ApiResponse[None], summary="Delete a rate card")
async def delete_rate_card(rate_card_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await rate_card_service.delete_rate_card(db, rate_card_id)
    return ApiResponse[None](message="Rate card deleted successfully")
