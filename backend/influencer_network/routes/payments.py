"""Standalone payment endpoints: /api/payments."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import PaymentMethod, PaymentStatus
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.payment import (
    PaymentCreate,
    PaymentData,
    PaymentResponse,
    PaymentStatsData,
    PaymentUpdate,
)
from influencer_network.services.payment_service import payment_service
from influencer_network.services.query import PaginationParams

router = APIRouter(
    prefix="/api/payments",
    tags=["Payments"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def payment_envelope(payment, message: str) -> ApiResponse[PaymentData]:
    return ApiResponse[PaymentData](message=message, data=PaymentData(payment=PaymentResponse.model_validate(payment)))


@router.get("", response_model=PaginatedResponse[PaymentResponse], summary="List payments")
async def list_payments(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    status: Optional[PaymentStatus] = Query(default=None),
    payment_method: Optional[PaymentMethod] = Query(default=None, alias="paymentMethod"),
    invoice_id: Optional[str] = Query(default=None, alias="invoiceId"),
    recorded_by: Optional[UUID] = Query(default=None, alias="recordedBy"),
    payment_date_from: Optional[datetime] = Query(default=None, alias="paymentDateFrom"),
    payment_date_to: Optional[datetime] = Query(default=None, alias="paymentDateTo"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[PaymentResponse]:
    payments, total = await payment_service.list_payments(
        db,
        params,
        status=status.value if status else None,
        payment_method=payment_method.value if payment_method else None,
        invoice_id=invoice_id,
        recorded_by=recorded_by,
        payment_date_from=payment_date_from,
        payment_date_to=payment_date_to,
    )
    return paginated(response, payments, total, params, "Payments retrieved successfully", PaymentResponse)


@router.get("/stats", response_model=ApiResponse[PaymentStatsData], summary="Payment totals by status and method")
async def payment_stats(db: AsyncSession = Depends(get_db_session)) -> ApiResponse[PaymentStatsData]:
    stats = await payment_service.get_stats(db)
    return ApiResponse[PaymentStatsData](
        message="Payment statistics retrieved successfully",
        data=PaymentStatsData(stats=stats),
    )


@router.get("/{payment_id}", response_model=ApiResponse[PaymentData], summary="Get a payment")
async def get_payment(payment_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[PaymentData]:
    return payment_envelope(await payment_service.get_payment(db, payment_id), "Payment retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[PaymentData], summary="Record a payment")
async def create_payment(
    body: PaymentCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PaymentData]:
    payment = await payment_service.create_payment(db, body, recorded_by=user.id)
    return payment_envelope(payment, "Payment created successfully")


@router.patch("/{payment_id}", response_model=ApiResponse[PaymentData], summary="Update a payment")
async def update_payment(
    payment_id: UUID,
    body: PaymentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[PaymentData]:
    return payment_envelope(await payment_service.update_payment(db, payment_id, body), "Payment updated successfully")


@router.delete("/{payment_id}", response_model=ApiResponse[None], summary="Delete a payment")
async def delete_payment(payment_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await payment_service.delete_payment(db, payment_id)
    return ApiResponse[None](message="Payment deleted successfully")
