"""
Tenant Log Service
==================

A multi-tenant logging microservice:
- Applications register a name and receive an app id and api key
- Log entries are sanitized and stored in a per-tenant namespace
- Entries are retrieved per tenant, optionally filtered by calendar day
- PostgreSQL as the single store, FastAPI as the HTTP layer
"""

__version__ = "1.0.0"
