"""
LabRecords Backend — User Service
==================================

What:  User-profile operations wrapped in response envelopes.
Who:   Called by the /api/users route handlers.

Differences from analyses:
    - list only returns active users
    - create answers with the public profile, not the stored record
    - DELETE is a soft delete: the user is deactivated, the row stays and
      remains reachable through GET /api/users/{id}
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.envelope import ItemResponse, ListResponse, MessageResponse, MutationResponse
from app.schemas.user import USER_RULES, PublicProfile, UserOut
from app.services.crud_service import CrudService, ResourceMessages, ResourcePolicy

USER_POLICY = ResourcePolicy(
    label="user",
    model=User,
    rules=USER_RULES,
    unique_field="email",
    messages=ResourceMessages(
        not_found="Usuario no encontrado",
        conflict="El email ya está registrado",
        created="Usuario creado exitosamente",
        updated="Usuario actualizado exitosamente",
        deleted="Usuario eliminado exitosamente",
        list_failed="Error al obtener usuarios",
        get_failed="Error al obtener el usuario",
        create_failed="Error al crear el usuario",
        update_failed="Error al actualizar el usuario",
        delete_failed="Error al eliminar el usuario",
    ),
    soft_delete=True,
    active_attribute="is_active",
    base_filter={"is_active": True},
)


class UserService(CrudService):
    """Envelope-level API for user profiles."""

    def __init__(self, policy: ResourcePolicy = USER_POLICY):
        super().__init__(policy)

    async def list_users(self, db: AsyncSession) -> ListResponse[UserOut]:
        records = await self.list_records(db)
        data = [UserOut.model_validate(record) for record in records]
        return ListResponse[UserOut](count=len(data), data=data)

    async def get_user(self, db: AsyncSession, user_id: str) -> ItemResponse[UserOut]:
        record = await self.get_record(db, user_id)
        return ItemResponse[UserOut](data=UserOut.model_validate(record))

    async def create_user(
        self, db: AsyncSession, payload: Dict[str, Any]
    ) -> MutationResponse[PublicProfile]:
        record = await self.create_record(db, payload)
        return MutationResponse[PublicProfile](
            message=self.policy.messages.created,
            data=PublicProfile.model_validate(record.public_profile()),
        )

    async def update_user(
        self, db: AsyncSession, user_id: str, payload: Dict[str, Any]
    ) -> MutationResponse[UserOut]:
        record = await self.update_record(db, user_id, payload)
        return MutationResponse[UserOut](
            message=self.policy.messages.updated,
            data=UserOut.model_validate(record),
        )

    async def delete_user(self, db: AsyncSession, user_id: str) -> MessageResponse:
        await self.delete_record(db, user_id)
        return MessageResponse(message=self.policy.messages.deleted)


# ── Singleton Instance ────────────────────────────────────────────────────
user_service = UserService()
