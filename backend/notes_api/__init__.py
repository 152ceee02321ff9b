"""
Notes API — Application Package Initializer
============================================

What: Marks the `notes_api` directory as a Python package.
Who:  Used by uvicorn (`uvicorn notes_api.main:app`) and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, CORS, status codes
    ├─────────────────────────────────────┤
    │   Dependencies & Validators         │  ← Auth gate, request parsing
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Scoped queries against the store
    ├─────────────────────────────────────┤
    │        Database (Supabase client)   │  ← Shared, read-only client handle
    └─────────────────────────────────────┘

    Routes delegate to services; services never see HTTP objects, so each
    layer can be tested with the layer below replaced by a fake.
"""

__version__ = "1.0.0"
