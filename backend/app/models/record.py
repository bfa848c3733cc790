"""
LabRecords Backend — Shared Record Columns
===========================================

What:  Identity and timestamp columns shared by every resource table, plus
       the explicit `touch()` step the service calls before each write.
Why:   Both resources carry the same `_id` / `createdAt` / `updatedAt`
       trio. Refreshing `updated_at` is a visible call in the write path
       rather than an ORM event hook, so every write site shows it.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import UTCDateTime, utcnow


class RecordMixin:
    """Primary key and lifecycle timestamps."""

    # Why UUID: non-sequential, generated client-side so the id is known
    # right after flush without a round-trip
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
        comment="Record identifier (exposed as `_id`)",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When the record was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="Last write to the record (UTC)",
    )

    def touch(self, now: Optional[datetime] = None) -> datetime:
        """
        Refresh the update timestamp ahead of a persistence write.

        On a brand-new record `created_at` is aligned with it so both start
        out equal.
        """
        now = now or utcnow()
        if self.created_at is None:
            self.created_at = now
        self.updated_at = now
        return now
