"""
LabRecords Backend — User SQLAlchemy Model
===========================================

What:  ORM model representing the `users` table.

Lifecycle:
    Users are never physically removed: DELETE clears `is_active`, which
    hides the row from listings while leaving it reachable by id.
"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base
from app.models.record import RecordMixin


class User(RecordMixin, Base):
    """A user profile."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    # Stored lowercased and trimmed, so the unique index is case-insensitive
    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)

    age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        index=True,
    )

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    def public_profile(self) -> dict:
        """Restricted view returned after sign-up."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "isActive": self.is_active,
            "createdAt": self.created_at,
        }

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', is_active={self.is_active})>"
