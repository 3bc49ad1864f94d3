"""
Versioned User API: Application Package Initializer
=====================================================

What: Marks the `app` directory as a Python package.
Why:  Enables module imports like `from app.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │   Middleware (request ID, logging,  │  ← resolves ?api-version before routing
    │   API version resolution)           │
    ├─────────────────────────────────────┤
    │   Routes (users_v1, users_v2, ...)  │  ← HTTP concerns only, one module per version
    ├─────────────────────────────────────┤
    │   Services (greeting_service)       │  ← validation + message formatting, pure
    ├─────────────────────────────────────┤
    │   Schemas (Pydantic)                │  ← per-version API contracts
    └─────────────────────────────────────┘

    Services never see HTTP and never know which version called them;
    the versioned route passes in the response factory for its shape.
"""

__version__ = "1.0.0"
