"""
LabRecords Backend — Analisis Service
======================================

What:  Analysis-record operations wrapped in response envelopes.
Who:   Called by the /api/analisis route handlers.

Policy:
    - Unique key: numero_analisis
    - List filters: estado, laboratorio (exact match, both optional)
    - DELETE is permanent
"""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.analisis import Analisis
from app.schemas.analisis import ANALISIS_FILTERS, ANALISIS_RULES, AnalisisOut
from app.schemas.envelope import ItemResponse, ListResponse, MessageResponse, MutationResponse
from app.services.crud_service import CrudService, ResourceMessages, ResourcePolicy

ANALISIS_POLICY = ResourcePolicy(
    label="analisis",
    model=Analisis,
    rules=ANALISIS_RULES,
    unique_field="numero_analisis",
    messages=ResourceMessages(
        not_found="Análisis no encontrado",
        conflict="El número de análisis ya existe",
        created="Análisis creado exitosamente",
        updated="Análisis actualizado exitosamente",
        deleted="Análisis eliminado exitosamente",
        list_failed="Error al obtener análisis",
        get_failed="Error al obtener el análisis",
        create_failed="Error al crear el análisis",
        update_failed="Error al actualizar el análisis",
        delete_failed="Error al eliminar el análisis",
    ),
    soft_delete=False,
    filters=ANALISIS_FILTERS,
)


class AnalisisService(CrudService):
    """Envelope-level API for laboratory analyses."""

    def __init__(self, policy: ResourcePolicy = ANALISIS_POLICY):
        super().__init__(policy)

    async def list_analisis(
        self,
        db: AsyncSession,
        estado: Optional[str] = None,
        laboratorio: Optional[str] = None,
    ) -> ListResponse[AnalisisOut]:
        records = await self.list_records(db, {"estado": estado, "laboratorio": laboratorio})
        data = [AnalisisOut.model_validate(record) for record in records]
        return ListResponse[AnalisisOut](count=len(data), data=data)

    async def get_analisis(self, db: AsyncSession, analisis_id: str) -> ItemResponse[AnalisisOut]:
        record = await self.get_record(db, analisis_id)
        return ItemResponse[AnalisisOut](data=AnalisisOut.model_validate(record))

    async def create_analisis(
        self, db: AsyncSession, payload: Dict[str, Any]
    ) -> MutationResponse[AnalisisOut]:
        record = await self.create_record(db, payload)
        return MutationResponse[AnalisisOut](
            message=self.policy.messages.created,
            data=AnalisisOut.model_validate(record),
        )

    async def update_analisis(
        self, db: AsyncSession, analisis_id: str, payload: Dict[str, Any]
    ) -> MutationResponse[AnalisisOut]:
        record = await self.update_record(db, analisis_id, payload)
        return MutationResponse[AnalisisOut](
            message=self.policy.messages.updated,
            data=AnalisisOut.model_validate(record),
        )

    async def delete_analisis(self, db: AsyncSession, analisis_id: str) -> MessageResponse:
        await self.delete_record(db, analisis_id)
        return MessageResponse(message=self.policy.messages.deleted)


# ── Singleton Instance ────────────────────────────────────────────────────
analisis_service = AnalisisService()
