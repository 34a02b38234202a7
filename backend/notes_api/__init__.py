"""
Notes API - Application Package
===============================

What: Backend for the "Notes todo app": CRUD over notes plus generated
      OpenAPI documentation.
Who:  Started by `notes_api.main.run` (console script `notes-api`) and
      imported by Alembic and pytest.

Layout:

    ┌─────────────────────────────────────┐
    │   Bootstrap (startup procedure)     │  ← bootstrap.py, application.py, docs.py
    ├─────────────────────────────────────┤
    │   Feature modules (route groups)    │  ← modules.py, routes/
    ├─────────────────────────────────────┤
    │   Services (business logic)         │  ← services/
    ├─────────────────────────────────────┤
    │   Models & Schemas (data)           │  ← models/, schemas/
    ├─────────────────────────────────────┤
    │   Database (persistence)            │  ← database.py
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
