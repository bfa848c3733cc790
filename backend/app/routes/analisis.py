"""
LabRecords Backend — Analisis Route Handlers
=============================================

What:  CRUD endpoints for laboratory analysis records under /api/analisis.
How:   Each handler extracts path/query/body, delegates to AnalisisService and
       returns its envelope. Failures surface as application exceptions and
       are rendered by the global handlers in main.py.

Endpoints:
    GET    /api/analisis          list (filters: estado, laboratorio)
    GET    /api/analisis/{id}     fetch one
    POST   /api/analisis          create
    PUT    /api/analisis/{id}     partial update
    DELETE /api/analisis/{id}     permanent delete
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.analisis import AnalisisOut
from app.schemas.envelope import (
    ErrorResponse,
    ItemResponse,
    ListResponse,
    MessageResponse,
    MutationResponse,
)
from app.services.analisis_service import analisis_service

router = APIRouter(prefix="/api", tags=["Análisis"])

_EXAMPLE_BODY = {
    "numero_analisis": "AN-2024-0001",
    "fecha_analisis": "2024-05-01",
    "tipo_analisis": "Hemograma",
    "laboratorio": "Laboratorio Central",
    "tecnico_responsable": "María López",
    "observaciones": "",
    "estado": "pendiente",
}


@router.get(
    "/analisis",
    response_model=ListResponse[AnalisisOut],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Obtener todos los análisis",
)
async def list_analisis(
    estado: Optional[str] = Query(default=None, description="Filtrar por estado"),
    laboratorio: Optional[str] = Query(default=None, description="Filtrar por laboratorio"),
    db: AsyncSession = Depends(get_db_session),
) -> ListResponse[AnalisisOut]:
    return await analisis_service.list_analisis(db, estado=estado, laboratorio=laboratorio)


@router.get(
    "/analisis/{analisis_id}",
    response_model=ItemResponse[AnalisisOut],
    responses={
        404: {"description": "Análisis no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Obtener un análisis por ID",
)
async def get_analisis(
    analisis_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> ItemResponse[AnalisisOut]:
    return await analisis_service.get_analisis(db, analisis_id)


@router.post(
    "/analisis",
    status_code=201,
    response_model=MutationResponse[AnalisisOut],
    responses={
        400: {"description": "Error de validación o número duplicado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Crear un nuevo análisis",
)
async def create_analisis(
    payload: Dict[str, Any] = Body(..., examples=[_EXAMPLE_BODY]),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[AnalisisOut]:
    return await analisis_service.create_analisis(db, payload)


@router.put(
    "/analisis/{analisis_id}",
    response_model=MutationResponse[AnalisisOut],
    responses={
        400: {"description": "Error de validación o número duplicado", "model": ErrorResponse},
        404: {"description": "Análisis no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Actualizar un análisis",
)
async def update_analisis(
    analisis_id: str,
    payload: Dict[str, Any] = Body(..., examples=[{"estado": "en_proceso"}]),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[AnalisisOut]:
    return await analisis_service.update_analisis(db, analisis_id, payload)


@router.delete(
    "/analisis/{analisis_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Análisis no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Eliminar un análisis",
)
async def delete_analisis(
    analisis_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await analisis_service.delete_analisis(db, analisis_id)
