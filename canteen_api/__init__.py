"""
Canteen API — Application Package Initializer
==============================================

What: Marks the `canteen_api` directory as a Python package.
Why:  Enables module imports like `from canteen_api.config import Settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (Response Mapping)     │  ← outcome → envelope / exception
    ├─────────────────────────────────────┤
    │  Repositories (One Statement Each)  │  ← INSERT / UPDATE / DELETE / SELECT
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Every request walks the same path: validate → one repository call →
    envelope. No layer holds state between requests.
"""

__version__ = "1.0.0"
