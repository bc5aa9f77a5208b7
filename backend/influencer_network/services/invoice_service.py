"""
Influencer Network Backend: Invoice Service
============================================

What:  Invoice CRUD plus the "send" and "record payment" workflows.
How:   Every write path ends in `recalculate()`, which derives line totals,
       subtotal, discount, tax, grand total, balance and status from the
       editable fields, so stored summaries never drift from line items.

Totals:
    line_total      = quantity * unit_price
    line tax        = line_total * tax_percentage / 100
    subtotal        = Σ line_total
    discount_amount = subtotal * discount_value / 100   (percentage)
                    = discount_value                     (amount)
    tax_amount      = Σ line tax
    total_amount    = subtotal - discount_amount + tax_amount + adjustments
    balance_due     = total_amount - amount_paid

Status derivation (after totals):
    amount_paid == 0  → Overdue if past due and not Draft/Sent/Cancelled,
                        otherwise unchanged
    amount_paid >= total → Paid
    amount_paid > 0      → Partially Paid
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from influencer_network.database import utcnow
from influencer_network.exceptions import ValidationError
from influencer_network.models.enums import ActivityType, DiscountType, InvoiceStatus
from influencer_network.models.invoice import Invoice
from influencer_network.schemas.invoice import InvoiceCreate, InvoiceUpdate, RecordPaymentRequest
from influencer_network.services.base import apply_changes, flush_changes, get_or_404
from influencer_network.services.query import (
    PaginationParams,
    date_range_clauses,
    paginate,
    search_clause,
)

logger = logging.getLogger(__name__)

# Rounding tolerance when comparing money values
EPSILON = 0.005

STATUSES_EXEMPT_FROM_OVERDUE = (
    InvoiceStatus.DRAFT.value,
    InvoiceStatus.SENT.value,
    InvoiceStatus.CANCELLED.value,
)


def money(value: float) -> float:
    return round(float(value) + 0.0, 2)


# ══════════════════════════════════════════════════════════════════════════
# Pure calculations
# ══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class InvoiceTotals:
    line_items: List[Dict[str, Any]]
    subtotal: float
    discount_amount: float
    tax_amount: float
    total_amount: float
    balance_due: float


def calculate_line_item(item: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of `item` with id, line_total, tax_amount and total_with_tax filled in."""
    quantity = float(item["quantity"])
    unit_price = float(item["unit_price"])
    tax_percentage = float(item.get("tax_percentage") or 0)

    line_total = money(quantity * unit_price)
    tax_amount = money(line_total * tax_percentage / 100)
    return {
        "id": item.get("id") or str(uuid.uuid4()),
        "description": item["description"],
        "quantity": quantity,
        "unit_price": unit_price,
        "tax_percentage": tax_percentage,
        "line_total": line_total,
        "tax_amount": tax_amount,
        "total_with_tax": money(line_total + tax_amount),
    }


def compute_totals(
    line_items: List[Dict[str, Any]],
    discount_type: str,
    discount_value: float,
    adjustments: float,
    amount_paid: float,
) -> InvoiceTotals:
    """
    Derive every monetary summary of an invoice.

    Raises:
        ValidationError: the discount drives the total below zero, or more has
        been paid than the invoice is worth.
    """
    lines = [calculate_line_item(item) for item in line_items]
    subtotal = money(sum(line["line_total"] for line in lines))

    if discount_type == DiscountType.PERCENTAGE.value:
        discount_amount = money(subtotal * (discount_value or 0) / 100)
    else:
        discount_amount = money(discount_value or 0)

    tax_amount = money(sum(line["tax_amount"] for line in lines))
    total_amount = money(subtotal - discount_amount + tax_amount + (adjustments or 0))
    if total_amount < 0:
        raise ValidationError(
            "Total amount cannot be negative",
            field="discountValue",
            context={"total_amount": total_amount},
        )

    balance_due = money(total_amount - (amount_paid or 0))
    if balance_due < -EPSILON:
        raise ValidationError(
            "Balance due cannot be negative",
            context={"total_amount": total_amount, "amount_paid": amount_paid},
        )

    return InvoiceTotals(
        line_items=lines,
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total_amount=total_amount,
        balance_due=max(balance_due, 0.0),
    )


def derive_status(
    current: str,
    amount_paid: float,
    total_amount: float,
    due_date: datetime,
    now: Optional[datetime] = None,
) -> str:
    now = now or utcnow()
    if amount_paid <= 0:
        if current not in STATUSES_EXEMPT_FROM_OVERDUE and due_date < now:
            return InvoiceStatus.OVERDUE.value
        return current
    if amount_paid + EPSILON >= total_amount:
        return InvoiceStatus.PAID.value
    return InvoiceStatus.PARTIALLY_PAID.value


def recalculate(invoice: Invoice, now: Optional[datetime] = None) -> None:
    """Apply compute_totals() and derive_status() to an invoice in place."""
    totals = compute_totals(
        invoice.line_items or [],
        invoice.discount_type,
        invoice.discount_value,
        invoice.adjustments,
        invoice.amount_paid or 0,
    )
    invoice.line_items = totals.line_items
    invoice.subtotal = totals.subtotal
    invoice.discount_amount = totals.discount_amount
    invoice.tax_amount = totals.tax_amount
    invoice.total_amount = totals.total_amount
    invoice.balance_due = totals.balance_due
    invoice.status = derive_status(
        invoice.status,
        invoice.amount_paid or 0,
        totals.total_amount,
        invoice.due_date,
        now,
    )


def make_activity(
    activity_type: ActivityType,
    description: str,
    performed_by: Optional[uuid.UUID],
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "id": str(uuid.uuid4()),
        "type": activity_type.value,
        "description": description,
        "performed_by": str(performed_by) if performed_by else None,
        "performed_on": utcnow().isoformat(),
        "metadata": metadata,
    }


def _check_dates(issue_date: datetime, due_date: datetime) -> None:
    if due_date < issue_date:
        raise ValidationError("Due date cannot be before issue date", field="dueDate")


# ══════════════════════════════════════════════════════════════════════════
# Service
# ══════════════════════════════════════════════════════════════════════════


class InvoiceService:

    async def list_invoices(
        self,
        db: AsyncSession,
        params: PaginationParams,
        status: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
        campaign_id: Optional[uuid.UUID] = None,
        currency: Optional[str] = None,
        issue_date_from: Optional[datetime] = None,
        issue_date_to: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Invoice], int]:
        stmt = select(Invoice)
        if status:
            stmt = stmt.where(Invoice.status == status)
        if client_id:
            stmt = stmt.where(Invoice.client_id == client_id)
        if campaign_id:
            stmt = stmt.where(Invoice.campaign_id == campaign_id)
        if currency:
            stmt = stmt.where(Invoice.currency == currency)
        for clause in date_range_clauses(Invoice.issue_date, issue_date_from, issue_date_to):
            stmt = stmt.where(clause)
        clause = search_clause(
            search, [Invoice.invoice_number, Invoice.client_name, Invoice.campaign_name]
        )
        if clause is not None:
            stmt = stmt.where(clause)
        return await paginate(db, stmt.order_by(desc(Invoice.created_at)), params)

    async def get_invoice(self, db: AsyncSession, invoice_id: uuid.UUID) -> Invoice:
        return await get_or_404(db, Invoice, invoice_id)

    async def create_invoice(self, db: AsyncSession, data: InvoiceCreate, created_by: uuid.UUID) -> Invoice:
        _check_dates(data.issue_date, data.due_date)

        values = data.model_dump()
        values["client_email"] = values["client_email"].lower()
        invoice = Invoice(
            **values,
            amount_paid=0.0,
            reminders_sent=0,
            payments=[],
            activities=[make_activity(ActivityType.CREATED, "Invoice created", created_by)],
            created_by=created_by,
        )
        recalculate(invoice)
        db.add(invoice)
        await flush_changes(db, "Invoice number already exists")

        logger.info(
            "Invoice %s (%s) created: total %.2f %s",
            invoice.id, invoice.invoice_number, invoice.total_amount, invoice.currency,
        )
        return invoice

    async def update_invoice(
        self,
        db: AsyncSession,
        invoice_id: uuid.UUID,
        data: InvoiceUpdate,
        updated_by: uuid.UUID,
    ) -> Invoice:
        invoice = await get_or_404(db, Invoice, invoice_id)
        previous_status = invoice.status

        changes = data.model_dump(exclude_unset=True)
        if changes.get("client_email"):
            changes["client_email"] = changes["client_email"].lower()
        apply_changes(invoice, changes)
        _check_dates(invoice.issue_date, invoice.due_date)
        recalculate(invoice)

        activities = list(invoice.activities or [])
        activities.append(make_activity(ActivityType.EDITED, "Invoice updated", updated_by))
        if invoice.status != previous_status:
            activities.append(make_activity(
                ActivityType.STATUS_CHANGED,
                f"Status changed from {previous_status} to {invoice.status}",
                updated_by,
                {"from": previous_status, "to": invoice.status},
            ))
        invoice.activities = activities

        await flush_changes(db, "Invoice number already exists")
        return invoice

    async def delete_invoice(self, db: AsyncSession, invoice_id: uuid.UUID) -> None:
        invoice = await get_or_404(db, Invoice, invoice_id)
        await db.delete(invoice)
        await flush_changes(db)
        logger.info("Invoice %s deleted", invoice_id)

    async def send_invoice(self, db: AsyncSession, invoice_id: uuid.UUID, sent_by: uuid.UUID) -> Invoice:
        invoice = await get_or_404(db, Invoice, invoice_id)
        now = utcnow()

        invoice.status = InvoiceStatus.SENT.value
        invoice.sent_date = now
        invoice.activities = list(invoice.activities or []) + [
            make_activity(ActivityType.SENT, "Invoice sent to client", sent_by)
        ]
        invoice.updated_at = now
        recalculate(invoice, now)

        await flush_changes(db)
        logger.info("Invoice %s sent", invoice.id)
        return invoice

    async def record_payment(
        self,
        db: AsyncSession,
        invoice_id: uuid.UUID,
        data: RecordPaymentRequest,
        recorded_by: uuid.UUID,
    ) -> Invoice:
        """
        Append an embedded payment and move the invoice to Paid/Partially Paid.

        Raises:
            ValidationError: the invoice is cancelled or the amount exceeds the balance due.
        """
        invoice = await get_or_404(db, Invoice, invoice_id)
        if invoice.status == InvoiceStatus.CANCELLED.value:
            raise ValidationError("Cannot record a payment against a cancelled invoice")
        if data.amount > (invoice.balance_due or 0) + EPSILON:
            raise ValidationError(
                "Payment amount exceeds balance due",
                field="amount",
                context={"balance_due": invoice.balance_due, "amount": data.amount},
            )

        now = utcnow()
        entry = {
            "id": str(uuid.uuid4()),
            "invoice_id": str(invoice.id),
            "amount": money(data.amount),
            "payment_date": (data.payment_date or now).isoformat(),
            "payment_method": data.payment_method,
            "transaction_reference": data.transaction_reference,
            "notes": data.notes,
            "receipt_attachment": data.receipt_attachment,
            "status": data.status,
            "recorded_by": str(recorded_by),
            "recorded_on": now.isoformat(),
            "last_updated": now.isoformat(),
        }

        amount_paid = money((invoice.amount_paid or 0) + data.amount)
        invoice.payments = list(invoice.payments or []) + [entry]
        invoice.amount_paid = amount_paid
        invoice.last_payment_method = data.payment_method
        invoice.status = (
            InvoiceStatus.PAID.value
            if amount_paid + EPSILON >= invoice.total_amount
            else InvoiceStatus.PARTIALLY_PAID.value
        )
        invoice.activities = list(invoice.activities or []) + [
            make_activity(
                ActivityType.PAYMENT_RECORDED,
                f"Payment recorded: {money(data.amount)}",
                recorded_by,
                {"paymentMethod": data.payment_method},
            )
        ]
        invoice.updated_at = now
        recalculate(invoice, now)

        await flush_changes(db)
        logger.info(
            "Invoice %s: payment of %.2f recorded, balance %.2f",
            invoice.id, data.amount, invoice.balance_due,
        )
        return invoice


invoice_service = InvoiceService()
