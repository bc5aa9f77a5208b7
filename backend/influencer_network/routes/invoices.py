"""
Influencer Network Backend: Invoice Route Handlers
===================================================

What:  /api/invoices CRUD plus the send and record-payment actions.
How:   Handlers delegate to InvoiceService, which recalculates totals and
       status on every write; responses always carry the fresh summary.

Route Inventory:
    GET    /api/invoices                  paginated, filterable
    GET    /api/invoices/{id}
    POST   /api/invoices
    PATCH  /api/invoices/{id}
    DELETE /api/invoices/{id}
    POST   /api/invoices/{id}/send
    POST   /api/invoices/{id}/payments
"""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.enums import Currency, InvoiceStatus
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.schemas.invoice import (
    InvoiceCreate,
    InvoiceData,
    InvoiceResponse,
    InvoiceUpdate,
    RecordPaymentRequest,
)
from influencer_network.services.invoice_service import invoice_service
from influencer_network.services.query import PaginationParams

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/invoices",
    tags=["Invoices"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def invoice_envelope(invoice, message: str) -> ApiResponse[InvoiceData]:
    return ApiResponse[InvoiceData](
        message=message,
        data=InvoiceData(invoice=InvoiceResponse.model_validate(invoice)),
    )


@router.get("", response_model=PaginatedResponse[InvoiceResponse], summary="List invoices")
async def list_invoices(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    status: Optional[InvoiceStatus] = Query(default=None),
    client_id: Optional[UUID] = Query(default=None, alias="clientId"),
    campaign_id: Optional[UUID] = Query(default=None, alias="campaignId"),
    currency: Optional[Currency] = Query(default=None),
    issue_date_from: Optional[datetime] = Query(default=None, alias="issueDateFrom"),
    issue_date_to: Optional[datetime] = Query(default=None, alias="issueDateTo"),
    search: Optional[str] = Query(default=None, description="Matches invoice number, client or campaign name"),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[InvoiceResponse]:
    invoices, total = await invoice_service.list_invoices(
        db,
        params,
        status=status.value if status else None,
        client_id=client_id,
        campaign_id=campaign_id,
        currency=currency.value if currency else None,
        issue_date_from=issue_date_from,
        issue_date_to=issue_date_to,
        search=search,
    )
    return paginated(response, invoices, total, params, "Invoices retrieved successfully", InvoiceResponse)


@router.get("/{invoice_id}", response_model=ApiResponse[InvoiceData], summary="Get an invoice")
async def get_invoice(invoice_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[InvoiceData]:
    return invoice_envelope(await invoice_service.get_invoice(db, invoice_id), "Invoice retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[InvoiceData], summary="Create an invoice")
async def create_invoice(
    body: InvoiceCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[InvoiceData]:
    invoice = await invoice_service.create_invoice(db, body, created_by=user.id)
    return invoice_envelope(invoice, "Invoice created successfully")


@router.patch("/{invoice_id}", response_model=ApiResponse[InvoiceData], summary="Update an invoice")
async def update_invoice(
    invoice_id: UUID,
    body: InvoiceUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[InvoiceData]:
    invoice = await invoice_service.update_invoice(db, invoice_id, body, updated_by=user.id)
    return invoice_envelope(invoice, "Invoice updated successfully")


@router.delete("/{invoice_id}", response_model=ApiResponse[None], summary="Delete an invoice")
async def delete_invoice(invoice_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await invoice_service.delete_invoice(db, invoice_id)
    return ApiResponse[None](message="Invoice deleted successfully")


@router.post("/{invoice_id}/send", response_model=ApiResponse[InvoiceData], summary="Mark an invoice as sent")
async def send_invoice(
    invoice_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[InvoiceData]:
    invoice = await invoice_service.send_invoice(db, invoice_id, sent_by=user.id)
    return invoice_envelope(invoice, "Invoice sent successfully")


@router.post(
    "/{invoice_id}/payments",
    response_model=ApiResponse[InvoiceData],
    summary="Record a payment against an invoice",
)
async def record_payment(
    invoice_id: UUID,
    body: RecordPaymentRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[InvoiceData]:
    invoice = await invoice_service.record_payment(db, invoice_id, body, recorded_by=user.id)
    return invoice_envelope(invoice, "Payment recorded successfully")
