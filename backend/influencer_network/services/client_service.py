"""Client CRUD with category/GST filters and free-text search."""

import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.models.client import Client
from influencer_network.schemas.client import ClientCreate, ClientUpdate
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import PaginationParams, paginate, search_clause

logger = logging.getLogger(__name__)

SEARCH_COLUMNS = [
    Client.business_name,
    Client.category,
    Client.website,
    Client.notes,
    Client.city,
    Client.state,
]


def _with_address_index(changes: Dict[str, Any]) -> Dict[str, Any]:
    """Mirror address city/state into their searchable columns."""
    if "business_address" in changes:
        address = changes["business_address"] or {}
        changes["city"] = address.get("city")
        changes["state"] = address.get("state")
    return changes


class ClientService:

    async def list_clients(
        self,
        db: AsyncSession,
        params: PaginationParams,
        category: Optional[str] = None,
        is_gst_registered: Optional[bool] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Client], int]:
        stmt = select(Client)
        if category:
            stmt = stmt.where(Client.category == category)
        if is_gst_registered is not None:
            stmt = stmt.where(Client.is_gst_registered == is_gst_registered)
        clause = search_clause(search, SEARCH_COLUMNS)
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(Client.created_at)), params)

    async def get_client(self, db: AsyncSession, client_id: uuid.UUID) -> Client:
        return await get_or_404(db, Client, client_id)

    async def create_client(self, db: AsyncSession, data: ClientCreate, created_by: uuid.UUID) -> Client:
        values = _with_address_index(data.model_dump())
        client = Client(**values, created_by=created_by)
        db.add(client)
        await flush_changes(db)
        logger.info("Client %s created: %s", client.id, client.business_name)
        return client

    async def update_client(self, db: AsyncSession, client_id: uuid.UUID, data: ClientUpdate) -> Client:
        client = await get_or_404(db, Client, client_id)
        apply_changes(client, _with_address_index(data.model_dump(exclude_unset=True)))
        await flush_changes(db)
        return client

    async def delete_client(self, db: AsyncSession, client_id: uuid.UUID) -> None:
        client = await get_or_404(db, Client, client_id)
        await db.delete(client)
        await flush_changes(db)
        logger.info("Client %s deleted", client_id)


client_service = ClientService()
