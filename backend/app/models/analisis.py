"""
LabRecords Backend — Analisis SQLAlchemy Model
===============================================

What:  ORM model representing the `analisis` table (one row per laboratory
       analysis record).
Who:   Used by the analisis CrudService policy and by Alembic.

Table Design:
    - numero_analisis: business key, unique across the table
    - estado: one of pendiente, en_proceso, completado, cancelado; no
      transition rules, any value may replace any other
    - version_id: internal optimistic-locking counter, never serialized
    - Index on (estado, laboratorio): backs the two list filters
"""

from datetime import datetime

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base, UTCDateTime, utcnow
from app.models.record import RecordMixin

ESTADOS = ("pendiente", "en_proceso", "completado", "cancelado")
DEFAULT_ESTADO = "pendiente"


class Analisis(RecordMixin, Base):
    """A laboratory analysis record."""

    __tablename__ = "analisis"

    numero_analisis: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Unique analysis number",
    )

    fecha_analisis: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utcnow,
        comment="When the analysis was performed (defaults to creation time)",
    )

    tipo_analisis: Mapped[str] = mapped_column(Text, nullable=False)
    laboratorio: Mapped[str] = mapped_column(Text, nullable=False)
    tecnico_responsable: Mapped[str] = mapped_column(Text, nullable=False)

    observaciones: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    estado: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_ESTADO,
        comment="pendiente | en_proceso | completado | cancelado",
    )

    version_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version_id}

    __table_args__ = (
        Index("idx_analisis_estado_laboratorio", "estado", "laboratorio"),
    )

    def __repr__(self) -> str:
        return (
            f"<Analisis(id={self.id}, numero_analisis='{self.numero_analisis}', "
            f"estado='{self.estado}')>"
        )
