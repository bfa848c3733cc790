"""
LabRecords Backend — Analisis Schemas
======================================

What:  Write rules and response contract for laboratory analysis records.

Wire format uses Spanish field names; timestamps are camelCase
and the identifier is exposed as `_id`. The internal `version_id` counter is
not part of the contract.
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field

from app.database import utcnow
from app.models.analisis import DEFAULT_ESTADO, ESTADOS
from app.schemas.rules import FieldRule

# Text fields are stored as sent: no trimming and no length cap
ANALISIS_RULES = (
    FieldRule(
        name="numero_analisis",
        required=True,
        required_message="El número de análisis es obligatorio",
    ),
    FieldRule(
        name="fecha_analisis",
        kind="datetime",
        default=utcnow,
        type_message="La fecha del análisis no es válida",
    ),
    FieldRule(
        name="tipo_analisis",
        required=True,
        required_message="El tipo de análisis es obligatorio",
    ),
    FieldRule(
        name="laboratorio",
        required=True,
        required_message="El laboratorio es obligatorio",
    ),
    FieldRule(
        name="tecnico_responsable",
        required=True,
        required_message="El técnico responsable es obligatorio",
    ),
    FieldRule(
        name="observaciones",
        default="",
    ),
    FieldRule(
        name="estado",
        default=DEFAULT_ESTADO,
        choices=ESTADOS,
        choices_message="'{value}' no es un estado válido. Valores permitidos: {choices}",
    ),
)

# Query-string filters accepted by GET /api/analisis (exact match)
ANALISIS_FILTERS = ("estado", "laboratorio")


class AnalisisOut(BaseModel):
    """Full analysis record as stored."""

    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    numero_analisis: str
    fecha_analisis: datetime
    tipo_analisis: str
    laboratorio: str
    tecnico_responsable: str
    observaciones: str
    estado: str
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt"
    )

    model_config = {"from_attributes": True}
