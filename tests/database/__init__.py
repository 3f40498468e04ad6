"""Database integration tests for the SQLAlchemy insertion callbacks.

Covers:
- Row building from pydantic models, dataclasses, and mappings
- Synchronous seeding into SQLite
- Asynchronous cross-file seeding into PostgreSQL via Testcontainers
"""
