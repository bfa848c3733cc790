"""
LabRecords Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for the CRUD failure taxonomy.
Why:   Services raise typed failures; global exception handlers (registered in
       main.py) turn them into the fixed `{success: false, ...}` envelope with
       the right HTTP status code. Route handlers never build error responses.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    LabRecordsError (base)
    ├── ValidationError   → 400 Bad Request (one message per violated field)
    ├── ConflictError     → 400 Bad Request (unique key already taken)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error (raw cause attached)
"""

from typing import Any, Dict, List, Optional


class LabRecordsError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (the envelope's `error`)
        context:  Additional debug info (logged, not returned)
    """

    def __init__(
        self,
        message: str = "Ocurrió un error inesperado",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(LabRecordsError):
    """
    Raised when a request body violates one or more field rules.

    HTTP:    400 Bad Request

    Example response:
        {
            "success": false,
            "error": "Errores de validación",
            "details": ["El nombre es obligatorio", "La edad no puede ser negativa"]
        }
    """

    def __init__(
        self,
        details: Optional[List[str]] = None,
        message: str = "Errores de validación",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = list(details or [])


class ConflictError(LabRecordsError):
    """
    Raised when a write collides with a uniqueness constraint in the store.

    HTTP:    400 Bad Request (single message naming the field)
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(LabRecordsError):
    """
    Raised when an identifier has no matching record.

    HTTP:    404 Not Found

    Malformed identifiers are reported the same way: an id that cannot name
    a record has no matching record.
    """

    def __init__(
        self,
        message: str = "Recurso no encontrado",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(LabRecordsError):
    """
    Raised when a store operation fails for any reason other than the above.

    HTTP:    500 Internal Server Error

    `details` carries the underlying exception message verbatim so clients
    can tell a connection failure from a constraint they did not anticipate.
    """

    def __init__(
        self,
        message: str = "Error interno del servidor",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details
