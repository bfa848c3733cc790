"""
LabRecords Backend — Generic CRUD Service
==========================================

What:  The five record operations (list, get, create, update, delete) shared
       by every resource, parameterized by a ResourcePolicy.
Why:   Both resources have the same request shape. What differs between them
       is declared once in the policy: rule table, unique key, messages,
       list filters and whether DELETE removes the row or deactivates it.
How:   Each operation issues a single store call inside one try block.
       Validation, uniqueness and not-found outcomes become typed application
       exceptions; anything else is wrapped in DatabaseError carrying the
       operation's failure message and the raw cause.

Write path (create / update / soft delete):
    validate_payload() → assign attributes → record.touch() → session.flush()

    touch() runs immediately before every flush so `updated_at` always
    reflects the last write. Commit happens in the request's session
    dependency; flushing here surfaces unique-index violations while the
    service can still translate them.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import Base
from app.exceptions import ConflictError, DatabaseError, LabRecordsError, NotFoundError
from app.schemas.rules import FieldRule, validate_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceMessages:
    """User-facing texts for one resource (success and failure)."""

    not_found: str
    conflict: str
    created: str
    updated: str
    deleted: str
    list_failed: str
    get_failed: str
    create_failed: str
    update_failed: str
    delete_failed: str


@dataclass(frozen=True)
class ResourcePolicy:
    """
    Everything that distinguishes one resource from another.

    Attributes:
        label:         Name used in log lines
        model:         ORM class backing the resource's table
        rules:         FieldRule table evaluated on every write
        unique_field:  Wire name of the uniquely-indexed field (for Conflict)
        messages:      Envelope texts
        soft_delete:   True → DELETE clears `active_attribute` instead of removing
        filters:       Query-string names accepted by list (exact match)
        base_filter:   Conditions every list query carries
    """

    label: str
    model: Type[Base]
    rules: Sequence[FieldRule]
    unique_field: str
    messages: ResourceMessages
    soft_delete: bool = False
    active_attribute: str = "is_active"
    filters: Sequence[str] = ()
    base_filter: Mapping[str, Any] = field(default_factory=dict)


class CrudService:
    """
    Record-level operations for one resource.

    Stateless apart from its policy: the session is passed per call, so one
    instance serves every request.
    """

    def __init__(self, policy: ResourcePolicy):
        self.policy = policy

    @property
    def model(self) -> Type[Base]:
        return self.policy.model

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_records(
        self,
        db: AsyncSession,
        filters: Optional[Mapping[str, Optional[str]]] = None,
    ) -> List[Any]:
        """
        Return every record matching the policy's base filter plus any
        supplied query filters. Empty or missing filter values are ignored.
        """
        query = select(self.model)
        for attribute, value in self.policy.base_filter.items():
            query = query.where(getattr(self.model, attribute) == value)
        for name in self.policy.filters:
            value = (filters or {}).get(name)
            if value:
                query = query.where(getattr(self.model, name) == value)
        query = query.order_by(self.model.created_at, self.model.id)

        try:
            result = await db.execute(query)
            return list(result.scalars().all())
        except Exception as e:
            raise self._store_failure(self.policy.messages.list_failed, e)

    async def get_record(self, db: AsyncSession, record_id: str) -> Any:
        """
        Fetch one record by id, including soft-deleted ones.

        Raises:
            NotFoundError: unknown or malformed id (→ 404)
            DatabaseError: store failure (→ 500)
        """
        try:
            return await self._load(db, record_id)
        except LabRecordsError:
            raise
        except Exception as e:
            raise self._store_failure(self.policy.messages.get_failed, e)

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_record(self, db: AsyncSession, payload: Dict[str, Any]) -> Any:
        """
        Validate and insert a new record.

        Raises:
            ValidationError: one or more field rules violated (→ 400)
            ConflictError:   unique key already present (→ 400)
            DatabaseError:   store failure (→ 500)
        """
        values = validate_payload(self.policy.rules, payload)
        record = self.model(**values)

        try:
            record.touch()
            db.add(record)
            await db.flush()
        except IntegrityError as e:
            raise self._conflict(e)
        except Exception as e:
            raise self._store_failure(self.policy.messages.create_failed, e)

        logger.info("%s created: %s", self.policy.label, record.id)
        return record

    async def update_record(
        self,
        db: AsyncSession,
        record_id: str,
        payload: Dict[str, Any],
    ) -> Any:
        """
        Apply a partial update: only supplied fields change, each re-validated.

        Raises:
            ValidationError, ConflictError, NotFoundError, DatabaseError
        """
        values = validate_payload(self.policy.rules, payload, partial=True)

        try:
            record = await self._load(db, record_id)
            for attribute, value in values.items():
                setattr(record, attribute, value)
            record.touch()
            await db.flush()
        except LabRecordsError:
            raise
        except IntegrityError as e:
            raise self._conflict(e)
        except Exception as e:
            raise self._store_failure(self.policy.messages.update_failed, e)

        logger.info("%s updated: %s (%s)", self.policy.label, record.id, ", ".join(values) or "-")
        return record

    async def delete_record(self, db: AsyncSession, record_id: str) -> Any:
        """
        Remove a record, or deactivate it when the policy asks for soft delete.

        A soft-deleted record keeps every field; only `active_attribute`
        flips to False, which drops it from the policy's base list filter.
        """
        try:
            record = await self._load(db, record_id)
            if self.policy.soft_delete:
                setattr(record, self.policy.active_attribute, False)
                record.touch()
            else:
                await db.delete(record)
            await db.flush()
        except LabRecordsError:
            raise
        except Exception as e:
            raise self._store_failure(self.policy.messages.delete_failed, e)

        logger.info(
            "%s %s: %s",
            self.policy.label,
            "deactivated" if self.policy.soft_delete else "deleted",
            record.id,
        )
        return record

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, record_id: str) -> Any:
        try:
            key = uuid.UUID(str(record_id))
        except ValueError:
            raise NotFoundError(message=self.policy.messages.not_found, resource_id=str(record_id))

        record = await db.get(self.model, key)
        if record is None:
            raise NotFoundError(message=self.policy.messages.not_found, resource_id=str(record_id))
        return record

    def _conflict(self, error: IntegrityError) -> ConflictError:
        logger.warning("%s unique violation on %s: %s", self.policy.label, self.policy.unique_field, error.orig)
        return ConflictError(
            message=self.policy.messages.conflict,
            field=self.policy.unique_field,
        )

    def _store_failure(self, message: str, error: Exception) -> DatabaseError:
        logger.error("%s store failure: %s", self.policy.label, str(error), exc_info=True)
        return DatabaseError(
            message=message,
            details=str(error),
            context={"error_type": type(error).__name__},
        )
