"""
ContactBook Backend — Application Package Initializer
=======================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    A minimal layered CRUD API over a single document collection:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP method+path bindings, body parsing
    ├─────────────────────────────────────┤
    │     Services (Resource Controller)  │  ← One store call per operation
    ├─────────────────────────────────────┤
    │   Repositories (Document Store)     │  ← insert / find / update / remove
    ├─────────────────────────────────────┤
    │    Models & Database (Persistence)  │  ← Async SQLAlchemy, JSON documents
    └─────────────────────────────────────┘

    Every layer receives its collaborator from app.main.create_app(), the
    single composition root — no layer reaches for a module-level instance.
"""

__version__ = "1.0.0"
