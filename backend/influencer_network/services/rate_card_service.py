"""Rate cards: CRUD, visibility toggling and final-rate derivation."""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.models.enums import RateCardVisibility
from influencer_network.models.rate_card import RateCard
from influencer_network.schemas.rate_card import RateCardCreate, RateCardUpdate
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import PaginationParams, paginate, search_clause

logger = logging.getLogger(__name__)


def compute_final_rate(base_rate: float, discount_percentage: float) -> float:
    """finalRate = baseRate - baseRate * discount / 100, rounded to paise/cents."""
    discount = base_rate * (discount_percentage or 0) / 100
    return round(base_rate - discount, 2)


class RateCardService:

    async def list_rate_cards(
        self,
        db: AsyncSession,
        params: PaginationParams,
        category: Optional[str] = None,
        service_type: Optional[str] = None,
        visibility: Optional[str] = None,
        linked_influencer: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[RateCard], int]:
        stmt = select(RateCard)
        if category:
            stmt = stmt.where(RateCard.category == category)
        if service_type:
            stmt = stmt.where(RateCard.service_type == service_type)
        if visibility:
            stmt = stmt.where(RateCard.visibility == visibility)
        if linked_influencer:
            stmt = stmt.where(RateCard.linked_influencer.icontains(linked_influencer, autoescape=True))
        clause = search_clause(
            search, [RateCard.rate_card_name, RateCard.inclusions, RateCard.linked_influencer]
        )
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(RateCard.created_at)), params)

    async def get_rate_card(self, db: AsyncSession, rate_card_id: uuid.UUID) -> RateCard:
        return await get_or_404(db, RateCard, rate_card_id, "Rate card")

    async def create_rate_card(self, db: AsyncSession, data: RateCardCreate, created_by: uuid.UUID) -> RateCard:
        values = data.model_dump()
        rate_card = RateCard(
            **values,
            final_rate=compute_final_rate(data.base_rate, data.discount_percentage),
            created_by=created_by,
        )
        db.add(rate_card)
        await flush_changes(db)
        logger.info("Rate card %s created at %.2f", rate_card.id, rate_card.final_rate)
        return rate_card

    async def update_rate_card(self, db: AsyncSession, rate_card_id: uuid.UUID, data: RateCardUpdate) -> RateCard:
        rate_card = await get_or_404(db, RateCard, rate_card_id, "Rate card")
        apply_changes(rate_card, data.model_dump(exclude_unset=True))
        rate_card.final_rate = compute_final_rate(rate_card.base_rate, rate_card.discount_percentage)
        await flush_changes(db)
        return rate_card

    async def toggle_visibility(self, db: AsyncSession, rate_card_id: uuid.UUID) -> RateCard:
        rate_card = await get_or_404(db, RateCard, rate_card_id, "Rate card")
        new_visibility = (
            RateCardVisibility.PRIVATE.value
            if rate_card.visibility == RateCardVisibility.PUBLIC.value
            else RateCardVisibility.PUBLIC.value
        )
        apply_changes(rate_card, {"visibility": new_visibility})
        rate_card.final_rate = compute_final_rate(rate_card.base_rate, rate_card.discount_percentage)
        await flush_changes(db)
        logger.info("Rate card %s is now %s", rate_card.id, new_visibility)
        return rate_card

    async def delete_rate_card(self, db: AsyncSession, rate_card_id: uuid.UUID) -> None:
        rate_card = await get_or_404(db, RateCard, rate_card_id, "Rate card")
        await db.delete(rate_card)
        await flush_changes(db)


rate_card_service = RateCardService()
