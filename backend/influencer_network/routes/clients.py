"""Client (brand) endpoints: /api/clients."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import get_db_session
from influencer_network.middleware.auth import get_current_user
from influencer_network.models.user import User
from influencer_network.routes.deps import PROTECTED, paginated, pagination_params
from influencer_network.schemas.client import ClientCreate, ClientData, ClientResponse, ClientUpdate
from influencer_network.schemas.common import COMMON_ERROR_RESPONSES, ApiResponse, PaginatedResponse
from influencer_network.services.client_service import client_service
from influencer_network.services.query import PaginationParams

router = APIRouter(
    prefix="/api/clients",
    tags=["Clients"],
    dependencies=PROTECTED,
    responses=COMMON_ERROR_RESPONSES,
)


def client_envelope(client, message: str) -> ApiResponse[ClientData]:
    return ApiResponse[ClientData](message=message, data=ClientData(client=ClientResponse.model_validate(client)))


@router.get("", response_model=PaginatedResponse[ClientResponse], summary="List clients")
async def list_clients(
    response: Response,
    params: PaginationParams = Depends(pagination_params),
    category: Optional[str] = Query(default=None),
    is_gst_registered: Optional[bool] = Query(default=None, alias="isGstRegistered"),
    search: Optional[str] = Query(
        default=None, description="Matches business name, category, website, notes, city or state"
    ),
    db: AsyncSession = Depends(get_db_session),
) -> PaginatedResponse[ClientResponse]:
    clients, total = await client_service.list_clients(
        db, params, category=category, is_gst_registered=is_gst_registered, search=search
    )
    return paginated(response, clients, total, params, "Clients retrieved successfully", ClientResponse)


@router.get("/{client_id}", response_model=ApiResponse[ClientData], summary="Get a client")
async def get_client(client_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[ClientData]:
    return client_envelope(await client_service.get_client(db, client_id), "Client retrieved successfully")


@router.post("", status_code=201, response_model=ApiResponse[ClientData], summary="Create a client")
async def create_client(
    body: ClientCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ClientData]:
    client = await client_service.create_client(db, body, created_by=user.id)
    return client_envelope(client, "Client created successfully")


@router.patch("/{client_id}", response_model=ApiResponse[ClientData], summary="Update a client")
async def update_client(
    client_id: UUID,
    body: ClientUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> ApiResponse[ClientData]:
    return client_envelope(await client_service.update_client(db, client_id, body), "Client updated successfully")


@router.delete("/{client_id}", response_model=ApiResponse[None], summary="Delete a client")
async def delete_client(client_id: UUID, db: AsyncSession = Depends(get_db_session)) -> ApiResponse[None]:
    await client_service.delete_client(db, client_id)
    return ApiResponse[None](message="Client deleted successfully")
