"""Initial schema

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates every portal table: users, clients, leads, people, rate cards,
       invoices, payments, payment terms templates and projects.
How:   UUID primary keys are generated by the application; embedded documents
       (line items, milestones, allocations, activities) are JSON columns,
       JSONB on PostgreSQL.

Rollback: downgrade() drops all tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")
TIMESTAMP = sa.TIMESTAMP(timezone=True)


def _base_columns():
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", TIMESTAMP, server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
        sa.Column("updated_at", TIMESTAMP, server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, JSON, nullable=False, server_default=sa.text("'[]'"))


def upgrade() -> None:
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("first_name", sa.String(50), nullable=False),
        sa.Column("last_name", sa.String(50), nullable=False),
        sa.Column("full_name", sa.String(101), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, comment="Lower-cased login email"),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("phone_number", sa.String(30), nullable=True),
        sa.Column("bio", sa.String(500), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("company_name", sa.String(100), nullable=True),
        sa.Column("location", sa.String(100), nullable=True),
        sa.Column("social_media", JSON, nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default=sa.text("'user'")),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("is_email_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("profile_photo", sa.String(500), nullable=True),
        sa.Column("last_login", TIMESTAMP, nullable=True),
        sa.Column("password_changed_at", TIMESTAMP, nullable=True),
        sa.Column("password_reset_token", sa.String(64), nullable=True),
        sa.Column("password_reset_expires", TIMESTAMP, nullable=True),
        sa.Column("email_verification_token", sa.String(64), nullable=True),
        sa.Column("email_verification_expires", TIMESTAMP, nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("idx_users_role", "users", ["role"])
    op.create_index("idx_users_created_at", "users", ["created_at"])

    op.create_table(
        "clients",
        *_base_columns(),
        sa.Column("business_name", sa.String(200), nullable=False),
        sa.Column("logo", sa.String(500), nullable=True),
        sa.Column("is_gst_registered", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("gst_number", sa.String(30), nullable=True),
        sa.Column("pan_number", sa.String(20), nullable=True),
        sa.Column("business_address", JSON, nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(100), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("social_media", JSON, nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_clients_business_name", "clients", ["business_name"])
    op.create_index("idx_clients_category", "clients", ["category"])
    op.create_index("idx_clients_created_at", "clients", ["created_at"])

    op.create_table(
        "leads",
        *_base_columns(),
        sa.Column("business_name", sa.String(100), nullable=False),
        sa.Column("contact_person", sa.String(100), nullable=False),
        sa.Column("contact_number", sa.String(30), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("lead_type", sa.String(30), nullable=False),
        sa.Column("lead_source", sa.String(30), nullable=False),
        sa.Column("budget_range", sa.String(40), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'New'")),
        sa.Column("last_contacted", TIMESTAMP, nullable=True),
        sa.Column("next_follow_up", TIMESTAMP, nullable=False),
        sa.Column("assigned_to", sa.String(100), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("conversion_probability", sa.Integer(), nullable=True),
        sa.Column("attachments", sa.String(500), nullable=True),
        sa.Column("has_reminders", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_leads_business_name", "leads", ["business_name"])
    op.create_index("idx_leads_status", "leads", ["status"])
    op.create_index("idx_leads_assigned_to", "leads", ["assigned_to"])
    op.create_index("idx_leads_next_follow_up", "leads", ["next_follow_up"])
    op.create_index("idx_leads_created_at", "leads", ["created_at"])

    op.create_table(
        "people",
        *_base_columns(),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("profile_photo", sa.String(500), nullable=True),
        _json_list("roles"),
        sa.Column("organization", sa.String(200), nullable=True),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("short_bio", sa.String(500), nullable=True),
        sa.Column("long_bio", sa.Text(), nullable=True),
        sa.Column("platform_metrics", JSON, nullable=True),
        _json_list("portfolio_files"),
        sa.Column("default_rate_card_id", sa.Uuid(), nullable=True),
        sa.Column("pricing_notes", sa.Text(), nullable=True),
        sa.Column("is_negotiable", sa.Boolean(), nullable=False, server_default=sa.true()),
        _json_list("typical_deliverables"),
        sa.Column(
            "preferred_payment_method", sa.String(30), nullable=False,
            server_default=sa.text("'Bank Transfer'"),
        ),
        sa.Column("availability_status", sa.String(20), nullable=True),
        sa.Column("next_available_date", TIMESTAMP, nullable=True),
        _json_list("preferred_locations"),
        _json_list("tags"),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'Active'")),
        sa.Column("visibility_level", sa.String(20), nullable=False, server_default=sa.text("'Private'")),
        sa.Column("is_claimable", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("assigned_to", sa.Uuid(), nullable=True),
        sa.Column("last_activity", TIMESTAMP, nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_people_full_name", "people", ["full_name"])
    op.create_index("idx_people_status", "people", ["status"])
    op.create_index("idx_people_assigned_to", "people", ["assigned_to"])
    op.create_index("idx_people_created_at", "people", ["created_at"])

    op.create_table(
        "rate_cards",
        *_base_columns(),
        sa.Column("rate_card_name", sa.String(200), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("service_type", sa.String(20), nullable=False),
        sa.Column("pricing_type", sa.String(20), nullable=False),
        sa.Column("applicable_for", sa.String(30), nullable=False),
        sa.Column("base_rate", sa.Float(), nullable=False),
        sa.Column("discount_percentage", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column(
            "final_rate", sa.Float(), nullable=False,
            comment="base_rate less discount_percentage, recomputed on every save",
        ),
        sa.Column("inclusions", sa.Text(), nullable=False),
        sa.Column("delivery_time", sa.String(100), nullable=False),
        sa.Column("content_duration", sa.String(100), nullable=True),
        sa.Column("linked_influencer", sa.String(200), nullable=False),
        _json_list("attachments"),
        sa.Column("visibility", sa.String(10), nullable=False, server_default=sa.text("'Private'")),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_rate_cards_category", "rate_cards", ["category"])
    op.create_index("idx_rate_cards_visibility", "rate_cards", ["visibility"])
    op.create_index("idx_rate_cards_created_at", "rate_cards", ["created_at"])

    op.create_table(
        "invoices",
        *_base_columns(),
        sa.Column("invoice_number", sa.String(50), nullable=False),
        sa.Column("issue_date", TIMESTAMP, nullable=False),
        sa.Column("due_date", TIMESTAMP, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'Draft'")),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("client_name", sa.String(200), nullable=False),
        sa.Column("contact_person", sa.String(100), nullable=False),
        sa.Column("client_email", sa.String(255), nullable=False),
        sa.Column("client_address", sa.String(500), nullable=True),
        sa.Column("client_gst", sa.String(30), nullable=True),
        sa.Column("campaign_id", sa.Uuid(), nullable=True),
        sa.Column("campaign_name", sa.String(200), nullable=True),
        _json_list("line_items"),
        sa.Column("currency", sa.String(3), nullable=False, server_default=sa.text("'INR'")),
        sa.Column("subtotal", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("discount_type", sa.String(10), nullable=False, server_default=sa.text("'amount'")),
        sa.Column("discount_value", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("discount_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("tax_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("adjustments", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("total_amount", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("amount_paid", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("balance_due", sa.Float(), nullable=False, server_default=sa.text("0")),
        sa.Column("payment_terms", sa.String(200), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("terms_and_conditions", sa.Text(), nullable=True),
        _json_list("attachments"),
        sa.Column("sent_date", TIMESTAMP, nullable=True),
        sa.Column("reminders_sent", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("last_payment_method", sa.String(30), nullable=True),
        _json_list("activities"),
        _json_list("payments"),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("invoice_number"),
    )
    op.create_index("idx_invoices_status", "invoices", ["status"])
    op.create_index("idx_invoices_client_id", "invoices", ["client_id"])
    op.create_index("idx_invoices_due_date", "invoices", ["due_date"])
    op.create_index("idx_invoices_created_at", "invoices", ["created_at"])

    op.create_table(
        "payments",
        *_base_columns(),
        sa.Column("payment_number", sa.String(40), nullable=False),
        _json_list("invoice_ids"),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default=sa.text("'INR'")),
        sa.Column("payment_date", TIMESTAMP, nullable=False),
        sa.Column("payment_method", sa.String(30), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'Pending'")),
        sa.Column("transaction_reference", sa.String(100), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("receipt_attachment", sa.String(500), nullable=True),
        _json_list("allocations"),
        sa.Column("recorded_by", sa.Uuid(), nullable=False),
        sa.Column("recorded_on", TIMESTAMP, nullable=False),
        sa.Column("last_updated", TIMESTAMP, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("payment_number"),
    )
    op.create_index("idx_payments_status", "payments", ["status"])
    op.create_index("idx_payments_payment_date", "payments", ["payment_date"])
    op.create_index("idx_payments_recorded_by", "payments", ["recorded_by"])

    op.create_table(
        "payment_terms_templates",
        *_base_columns(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        _json_list("milestones"),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_payment_terms_is_active", "payment_terms_templates", ["is_active"])

    op.create_table(
        "projects",
        *_base_columns(),
        sa.Column("campaign_name", sa.String(200), nullable=False),
        sa.Column("client_id", sa.Uuid(), nullable=False),
        sa.Column("project_agreed_budget", sa.Float(), nullable=False),
        sa.Column("start_date", TIMESTAMP, nullable=False),
        sa.Column("end_date", TIMESTAMP, nullable=False),
        sa.Column("campaign_type", sa.String(30), nullable=False),
        _json_list("people_involved"),
        sa.Column("payment_terms", sa.String(20), nullable=False, server_default=sa.text("'default'")),
        sa.Column("payment_terms_template_id", sa.Uuid(), nullable=True),
        _json_list("milestones"),
        _json_list("target_platform"),
        sa.Column("status", sa.String(20), nullable=False, server_default=sa.text("'draft'")),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _json_list("deliverables"),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_projects_client_id", "projects", ["client_id"])
    op.create_index("idx_projects_status", "projects", ["status"])
    op.create_index("idx_projects_start_date", "projects", ["start_date"])
    op.create_index("idx_projects_created_at", "projects", ["created_at"])


def downgrade() -> None:
    """Drop every table. All portal data is lost."""
    for table in (
        "projects",
        "payment_terms_templates",
        "payments",
        "invoices",
        "rate_cards",
        "people",
        "leads",
        "clients",
        "users",
    ):
        op.drop_table(table)
