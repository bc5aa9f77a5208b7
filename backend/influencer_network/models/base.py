"""
Shared column definitions for ORM models.

Every table gets a client-generated UUID primary key and UTC created/updated
timestamps. Embedded documents live in JSON columns (JSONB on PostgreSQL).
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Uuid, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from influencer_network.database import UTCDateTime, utcnow

JSONType = JSON().with_variant(JSONB(), "postgresql")


class TimestampedMixin:
    """Primary key plus creation and modification timestamps."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
