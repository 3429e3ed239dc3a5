"""
User Sync Module
================

Extracts the users table, maps it to the canonical contract and delivers it
to a third-party API.

Layers:
- domain: run stages and results
- application: DTOs, mapper, SyncJob
- infrastructure: SQLAlchemy repository, httpx publisher
"""
