"""Dashboard counters aggregated across projects, people, invoices, payments and rate cards."""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.models.enums import (
    InvoiceStatus,
    PaymentStatus,
    PersonStatus,
    ProjectStatus,
    RateCardVisibility,
)
from influencer_network.models.invoice import Invoice
from influencer_network.models.payment import Payment
from influencer_network.models.person import Person
from influencer_network.models.project import Project
from influencer_network.models.rate_card import RateCard
from influencer_network.schemas.stats import DashboardStats

logger = logging.getLogger(__name__)

SENT_INVOICE_STATUSES = (
    InvoiceStatus.SENT.value,
    InvoiceStatus.PARTIALLY_PAID.value,
    InvoiceStatus.PAID.value,
    InvoiceStatus.OVERDUE.value,
)


def month_bounds(now: datetime):
    """[first instant of this month, first instant of next month) in UTC."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class StatsService:

    async def dashboard(self, db: AsyncSession, now: Optional[datetime] = None) -> DashboardStats:
        start, end = month_bounds(now or utcnow())

        async def scalar(stmt) -> float:
            return (await db.execute(stmt)).scalar() or 0

        amount_sum = func.coalesce(func.sum(Payment.amount), 0)

        return DashboardStats(
            active_campaigns=await scalar(
                select(func.count(Project.id)).where(Project.status == ProjectStatus.ACTIVE.value)
            ),
            monthly_revenue=round(float(await scalar(
                select(amount_sum).where(
                    Payment.status == PaymentStatus.COMPLETED.value,
                    Payment.payment_date >= start,
                    Payment.payment_date < end,
                )
            )), 2),
            active_clients=await scalar(
                select(func.count(Person.id)).where(Person.status == PersonStatus.ACTIVE.value)
            ),
            invoices_sent=await scalar(
                select(func.count(Invoice.id)).where(Invoice.status.in_(SENT_INVOICE_STATUSES))
            ),
            payments_received=round(float(await scalar(
                select(amount_sum).where(Payment.status == PaymentStatus.COMPLETED.value)
            )), 2),
            payments_pending=round(float(await scalar(
                select(amount_sum).where(Payment.status == PaymentStatus.PENDING.value)
            )), 2),
            services_listed=await scalar(
                select(func.count(RateCard.id)).where(RateCard.visibility == RateCardVisibility.PUBLIC.value)
            ),
        )


stats_service = StatsService()
