"""
LabRecords Backend — User Route Handlers
=========================================

What:  CRUD endpoints for user profiles under /api/users.

Endpoints:
    GET    /api/users          list active users
    GET    /api/users/{id}     fetch one (inactive users included)
    POST   /api/users          create (returns the public profile)
    PUT    /api/users/{id}     partial update
    DELETE /api/users/{id}     soft delete (deactivate)
"""

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.envelope import (
    ErrorResponse,
    ItemResponse,
    ListResponse,
    MessageResponse,
    MutationResponse,
)
from app.schemas.user import PublicProfile, UserOut
from app.services.user_service import user_service

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users",
    response_model=ListResponse[UserOut],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="Obtener todos los usuarios activos",
)
async def list_users(db: AsyncSession = Depends(get_db_session)) -> ListResponse[UserOut]:
    return await user_service.list_users(db)


@router.get(
    "/users/{user_id}",
    response_model=ItemResponse[UserOut],
    responses={
        404: {"description": "Usuario no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Obtener un usuario por ID",
)
async def get_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> ItemResponse[UserOut]:
    return await user_service.get_user(db, user_id)


@router.post(
    "/users",
    status_code=201,
    response_model=MutationResponse[PublicProfile],
    responses={
        400: {"description": "Error de validación o email duplicado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Crear un nuevo usuario",
)
async def create_user(
    payload: Dict[str, Any] = Body(..., examples=[{"name": "Ana", "email": "ana@x.com", "age": 30}]),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[PublicProfile]:
    return await user_service.create_user(db, payload)


@router.put(
    "/users/{user_id}",
    response_model=MutationResponse[UserOut],
    responses={
        400: {"description": "Error de validación o email duplicado", "model": ErrorResponse},
        404: {"description": "Usuario no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Actualizar un usuario",
)
async def update_user(
    user_id: str,
    payload: Dict[str, Any] = Body(..., examples=[{"age": 31}]),
    db: AsyncSession = Depends(get_db_session),
) -> MutationResponse[UserOut]:
    return await user_service.update_user(db, user_id, payload)


@router.delete(
    "/users/{user_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Usuario no encontrado", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Eliminar un usuario (soft delete)",
)
async def delete_user(user_id: str, db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    return await user_service.delete_user(db, user_id)
