"""
LabRecords Backend — User Schemas
==================================

What:  Write rules and response contracts for user profiles.

Two output shapes:
    UserOut        — the stored record (list, get, update)
    PublicProfile  — restricted projection returned by create
"""

import re
import uuid
from datetime import datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.rules import FieldRule

# Basic address shape: word chars with . or - separators, then a 2-3 letter TLD.
# Each repetition must start with a separator, so a non-matching address
# cannot backtrack exponentially.
EMAIL_PATTERN = re.compile(r"^\w+(?:[.-]\w+)*@\w+(?:[.-]\w+)*\.\w{2,3}$", re.ASCII)

USER_RULES = (
    FieldRule(
        name="name",
        required=True,
        required_message="El nombre es obligatorio",
        trim=True,
        max_length=50,
        max_length_message="El nombre no puede tener más de 50 caracteres",
    ),
    FieldRule(
        name="email",
        required=True,
        required_message="El email es obligatorio",
        trim=True,
        lowercase=True,
        pattern=EMAIL_PATTERN,
        pattern_message="Por favor ingresa un email válido",
    ),
    FieldRule(
        name="age",
        kind="integer",
        minimum=0,
        minimum_message="La edad no puede ser negativa",
        maximum=120,
        maximum_message="La edad no puede ser mayor a 120",
        type_message="La edad debe ser un número entero",
    ),
    FieldRule(
        name="isActive",
        kind="boolean",
        attribute="is_active",
        default=True,
        type_message="El campo 'isActive' debe ser verdadero o falso",
    ),
)


class UserOut(BaseModel):
    """Full user record as stored."""

    id: uuid.UUID = Field(validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    name: str
    email: str
    age: Optional[int] = None
    is_active: bool = Field(
        validation_alias=AliasChoices("isActive", "is_active"), serialization_alias="isActive"
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt"
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt"
    )

    model_config = {"from_attributes": True}


class PublicProfile(BaseModel):
    """What a newly registered user gets back: no update timestamp, plain `id`."""

    id: uuid.UUID
    name: str
    email: str
    age: Optional[int] = None
    is_active: bool = Field(
        validation_alias=AliasChoices("isActive", "is_active"), serialization_alias="isActive"
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt"
    )

    model_config = {"from_attributes": True}
