"""
LabRecords Backend — Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend serves two independent CRUD resources (laboratory analyses
    and user profiles) through the same layered slice:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │    Services (CrudService + policy)  │  ← Validation, persistence rules
    ├─────────────────────────────────────┤
    │  Models (ORM) & Schemas (rules/API) │  ← SQLAlchemy tables + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Both resources share one service implementation; what differs between
    them (rule table, messages, soft vs. hard delete) is declared in a
    ResourcePolicy rather than in separate code paths.
"""

__version__ = "1.0.0"
