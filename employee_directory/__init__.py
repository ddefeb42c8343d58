"""
Employee Directory API - Application Package
=============================================

REST service managing company branches and their employees.

    ┌─────────────────────────────────────┐
    │   Routes + validate_request (HTTP)  │  ← status codes, envelopes
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← not-found policy, merge, filters
    ├─────────────────────────────────────┤
    │     Schemas (Pydantic contracts)    │  ← per-route request schemas, entities
    ├─────────────────────────────────────┤
    │  Repositories (document store)      │  ← memory / firestore / sql adapters
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
