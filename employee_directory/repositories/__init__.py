"""
Employee Directory API - Repository Adapters
=============================================

What:  Implementations of the DocumentRepository contract and the factory
       that picks one from DOCUMENT_STORE.

Adapters:
    - memory.py:    InMemoryDocumentRepository   (tests, demos)
    - firestore.py: FirestoreDocumentRepository  (production)
    - sql.py:       SqlDocumentRepository        (PostgreSQL / SQLite)

The Firestore and SQL modules are imported lazily so that a deployment only
loads the client library it actually uses.
"""

from employee_directory.config import Settings, settings
from employee_directory.repositories.base import DocumentRepository, StoredDocument
from employee_directory.repositories.memory import InMemoryDocumentRepository

__all__ = [
    "DocumentRepository",
    "InMemoryDocumentRepository",
    "StoredDocument",
    "build_repository",
]


def build_repository(config: Settings = settings) -> DocumentRepository:
    """Instantiate the adapter named by `config.document_store`."""
    if config.document_store == "firestore":
        from employee_directory.repositories.firestore import FirestoreDocumentRepository
        return FirestoreDocumentRepository.from_settings(config)
    if config.document_store == "sql":
        from employee_directory.repositories.sql import SqlDocumentRepository
        return SqlDocumentRepository(config.database_url, timeout=config.store_timeout_seconds)
    return InMemoryDocumentRepository(timeout=config.store_timeout_seconds)
