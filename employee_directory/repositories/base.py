"""
Employee Directory API - Abstract Document Repository
======================================================

What:  The contract between services and the underlying document store.
How:   Concrete adapters implement the five `_`-prefixed primitives. The public
       methods wrap every primitive with a timeout and translate backend
       exceptions into StoreError / StoreTimeoutError.
Who:   Services (BranchService, EmployeeService) depend only on this class.
When:  One instance per application, created in the lifespan handler (or
       injected by tests) and stored on `app.state.repository`.

Contract:
    create_document(collection, data)      -> id (store-assigned string)
    get_documents(collection)              -> [StoredDocument]
    get_document_by_id(collection, id)     -> StoredDocument | None
    update_document(collection, id, data)  -> None (fields in `data` overwrite)
    delete_document(collection, id)        -> None

    Stored data never contains the "id" key; the id lives beside the data.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, List, Optional, TypeVar

from employee_directory.config import settings
from employee_directory.exceptions import (
    EmployeeDirectoryError,
    StoreError,
    StoreTimeoutError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def new_document_id() -> str:
    """20-character opaque identifier, the same length Firestore auto-ids use."""
    return uuid.uuid4().hex[:20]


@dataclass(frozen=True)
class StoredDocument:
    """A document as read from the store: its id, its payload, and whether it exists."""

    id: str
    data: Dict[str, Any] = field(default_factory=dict)
    exists: bool = True


class DocumentRepository(ABC):
    """
    Generic document CRUD with an explicit timeout at the adapter boundary.

    Error translation:
        asyncio timeout          → StoreTimeoutError
        EmployeeDirectoryError   → propagated unchanged
        any other exception      → StoreError (original kept as __cause__)
    """

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.store_timeout_seconds

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open clients). Default: nothing."""

    async def close(self) -> None:
        """Release backend resources. Default: nothing."""

    # ── Public contract ───────────────────────────────────────────────────

    async def create_document(self, collection: str, data: Dict[str, Any]) -> str:
        return await self._call("create_document", collection, self._create(collection, data))

    async def get_documents(self, collection: str) -> List[StoredDocument]:
        return await self._call("get_documents", collection, self._list(collection))

    async def get_document_by_id(
        self, collection: str, document_id: str
    ) -> Optional[StoredDocument]:
        return await self._call(
            "get_document_by_id", collection, self._get(collection, document_id)
        )

    async def update_document(
        self, collection: str, document_id: str, data: Dict[str, Any]
    ) -> None:
        await self._call(
            "update_document", collection, self._update(collection, document_id, data)
        )

    async def delete_document(self, collection: str, document_id: str) -> None:
        await self._call(
            "delete_document", collection, self._delete(collection, document_id)
        )

    # ── Adapter primitives ────────────────────────────────────────────────

    @abstractmethod
    async def _create(self, collection: str, data: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    async def _list(self, collection: str) -> List[StoredDocument]:
        ...

    @abstractmethod
    async def _get(self, collection: str, document_id: str) -> Optional[StoredDocument]:
        ...

    @abstractmethod
    async def _update(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def _delete(self, collection: str, document_id: str) -> None:
        ...

    # ── Internals ─────────────────────────────────────────────────────────

    async def _call(self, operation: str, collection: str, awaitable: Awaitable[T]) -> T:
        """Await one primitive under the configured timeout and translate failures."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(
                "Document store %s on '%s' timed out after %.1fs",
                operation,
                collection,
                self.timeout,
            )
            raise StoreTimeoutError(
                timeout=self.timeout,
                context={"operation": operation, "collection": collection},
            ) from None
        except EmployeeDirectoryError:
            raise
        except Exception as e:
            logger.error(
                "Document store %s on '%s' failed: %s: %s",
                operation,
                collection,
                type(e).__name__,
                str(e),
            )
            raise StoreError(
                context={
                    "operation": operation,
                    "collection": collection,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            ) from e
