"""
Influencer Network Backend: Payment Service
============================================

What:  Standalone payment records with allocations across invoices.
How:   Payment numbers follow PAY-<code>-<YYYYMM>-<NNNN>, where NNNN is one
       more than the highest sequence already issued for that code and month.

Numbering under concurrency:
    Two requests can read the same "highest sequence" and both try to insert
    the same number. The unique constraint rejects the second insert; the
    insert runs inside a SAVEPOINT so only that attempt is rolled back, and
    tenacity retries with a freshly computed number.

    request A: max → 0007, INSERT 0008 ✓
    request B: max → 0007, INSERT 0008 ✗ (IntegrityError, savepoint rolled back)
               max → 0008, INSERT 0009 ✓
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)

from influencer_network.config import settings
from influencer_network.database import utcnow
from influencer_network.exceptions import ConflictError, ValidationError
from influencer_network.models.payment import Payment
from influencer_network.schemas.payment import (
    AllocationInput,
    PaymentCreate,
    PaymentMethodStat,
    PaymentStats,
    PaymentStatusStat,
    PaymentUpdate,
)
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import (
    PaginationParams,
    date_range_clauses,
    json_array_contains_any,
    paginate,
)

logger = logging.getLogger(__name__)

ALLOCATION_TOLERANCE = 0.01


def payment_number_prefix(code: str, when: datetime) -> str:
    return f"PAY-{code}-{when:%Y%m}-"


async def next_payment_number(db: AsyncSession, code: str, when: Optional[datetime] = None) -> str:
    """Return the next unused-looking number for `code` in the month of `when`."""
    prefix = payment_number_prefix(code, when or utcnow())
    result = await db.execute(
        select(func.max(Payment.payment_number)).where(
            Payment.payment_number.startswith(prefix, autoescape=True)
        )
    )
    last = result.scalar()
    sequence = int(last.rsplit("-", 1)[1]) + 1 if last else 1
    return f"{prefix}{sequence:04d}"


def build_allocations(allocations: List[AllocationInput]) -> List[Dict[str, Any]]:
    created_on = utcnow().isoformat()
    return [
        {
            "id": allocation.id or str(uuid.uuid4()),
            "invoice_id": allocation.invoice_id,
            "allocated_amount": round(allocation.allocated_amount, 2),
            "created_on": created_on,
        }
        for allocation in allocations
    ]


def validate_allocations(amount: float, allocations: List[Dict[str, Any]]) -> None:
    """Non-empty allocations must add up to the payment amount."""
    if not allocations:
        return
    total = sum(float(a["allocated_amount"]) for a in allocations)
    if abs(total - amount) > ALLOCATION_TOLERANCE:
        raise ValidationError(
            "Total allocated amount must equal payment amount",
            field="allocations",
            context={"amount": amount, "total_allocated": round(total, 2)},
        )


class PaymentService:

    async def list_payments(
        self,
        db: AsyncSession,
        params: PaginationParams,
        status: Optional[str] = None,
        payment_method: Optional[str] = None,
        invoice_id: Optional[str] = None,
        recorded_by: Optional[uuid.UUID] = None,
        payment_date_from: Optional[datetime] = None,
        payment_date_to: Optional[datetime] = None,
    ) -> Tuple[List[Payment], int]:
        stmt = select(Payment)
        if status:
            stmt = stmt.where(Payment.status == status)
        if payment_method:
            stmt = stmt.where(Payment.payment_method == payment_method)
        if invoice_id:
            stmt = stmt.where(json_array_contains_any(Payment.invoice_ids, [invoice_id]))
        if recorded_by:
            stmt = stmt.where(Payment.recorded_by == recorded_by)
        for clause in date_range_clauses(Payment.payment_date, payment_date_from, payment_date_to):
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(Payment.payment_date)), params)

    async def get_payment(self, db: AsyncSession, payment_id: uuid.UUID) -> Payment:
        return await get_or_404(db, Payment, payment_id)

    def _build(self, data: PaymentCreate, allocations: List[Dict[str, Any]], recorded_by: uuid.UUID) -> Payment:
        now = utcnow()
        return Payment(
            invoice_ids=list(data.invoice_ids),
            amount=round(data.amount, 2),
            currency=data.currency,
            payment_date=data.payment_date or now,
            payment_method=data.payment_method,
            status=data.status,
            transaction_reference=data.transaction_reference,
            notes=data.notes,
            receipt_attachment=data.receipt_attachment,
            allocations=allocations,
            recorded_by=recorded_by,
            recorded_on=now,
            last_updated=now,
        )

    async def create_payment(self, db: AsyncSession, data: PaymentCreate, recorded_by: uuid.UUID) -> Payment:
        """
        Persist a payment, generating its number when the caller did not supply one.

        Raises:
            ValidationError: allocations do not sum to the amount.
            ConflictError: the supplied number is taken, or no free number was
            found within the configured attempts.
        """
        allocations = build_allocations(data.allocations)
        validate_allocations(data.amount, allocations)

        if data.payment_number:
            payment = self._build(data, allocations, recorded_by)
            payment.payment_number = data.payment_number
            db.add(payment)
            await flush_changes(db, "Payment number already exists")
        else:
            payment = await self._insert_with_generated_number(db, data, allocations, recorded_by)

        logger.info(
            "Payment %s (%s) recorded: %.2f %s",
            payment.id, payment.payment_number, payment.amount, payment.currency,
        )
        return payment

    async def _insert_with_generated_number(
        self,
        db: AsyncSession,
        data: PaymentCreate,
        allocations: List[Dict[str, Any]],
        recorded_by: uuid.UUID,
    ) -> Payment:
        try:
            async for attempt in AsyncRetrying(
                retry=retry_if_exception_type(IntegrityError),
                stop=stop_after_attempt(settings.payment_number_max_attempts),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    payment = self._build(data, allocations, recorded_by)
                    payment.payment_number = await next_payment_number(db, settings.payment_number_code)
                    async with db.begin_nested():
                        db.add(payment)
                        await db.flush()
        except IntegrityError as e:
            logger.error("Payment number allocation failed: %s", e.orig)
            raise ConflictError(
                "Could not allocate a unique payment number",
                context={"attempts": settings.payment_number_max_attempts},
            )
        return payment

    async def update_payment(self, db: AsyncSession, payment_id: uuid.UUID, data: PaymentUpdate) -> Payment:
        payment = await get_or_404(db, Payment, payment_id)
        changes = data.model_dump(exclude_unset=True)
        if data.allocations is not None:
            changes["allocations"] = build_allocations(data.allocations)
        if changes.get("amount") is not None:
            changes["amount"] = round(changes["amount"], 2)

        apply_changes(payment, changes)
        validate_allocations(payment.amount, payment.allocations or [])
        payment.last_updated = utcnow()

        await flush_changes(db, "Payment number already exists")
        return payment

    async def delete_payment(self, db: AsyncSession, payment_id: uuid.UUID) -> None:
        payment = await get_or_404(db, Payment, payment_id)
        await db.delete(payment)
        await flush_changes(db)
        logger.info("Payment %s deleted", payment_id)

    async def get_stats(self, db: AsyncSession) -> PaymentStats:
        by_status = await db.execute(
            select(Payment.status, func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0))
            .group_by(Payment.status)
            .order_by(Payment.status)
        )
        by_method = await db.execute(
            select(Payment.payment_method, func.count(Payment.id), func.coalesce(func.sum(Payment.amount), 0))
            .group_by(Payment.payment_method)
            .order_by(Payment.payment_method)
        )
        return PaymentStats(
            by_status=[
                PaymentStatusStat(status=status, count=count, total_amount=round(float(total), 2))
                for status, count, total in by_status.all()
            ],
            by_method=[
                PaymentMethodStat(payment_method=method, count=count, total_amount=round(float(total), 2))
                for method, count, total in by_method.all()
            ],
        )


payment_service = PaymentService()
