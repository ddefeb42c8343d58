"""
Employee Directory API - In-Memory Document Repository
=======================================================

What:  A process-local implementation of DocumentRepository.
Who:   Used by the test suite and by DOCUMENT_STORE=memory for local demos.

Every write stores a deep copy and every read returns a deep copy, so callers
can never alias the stored state. Each instance owns its own collections;
nothing is shared at module level.
"""

import copy
from typing import Any, Callable, Dict, List, Optional

from employee_directory.repositories.base import (
    DocumentRepository,
    StoredDocument,
    new_document_id,
)


class InMemoryDocumentRepository(DocumentRepository):
    """Dict-of-dicts store: collection → document id → data."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        super().__init__(timeout)
        self._collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self._id_factory = id_factory or new_document_id

    def _collection(self, name: str) -> Dict[str, Dict[str, Any]]:
        return self._collections.setdefault(name, {})

    async def _create(self, collection: str, data: Dict[str, Any]) -> str:
        document_id = self._id_factory()
        self._collection(collection)[document_id] = copy.deepcopy(data)
        return document_id

    async def _list(self, collection: str) -> List[StoredDocument]:
        # dicts keep insertion order, so listings follow creation order
        return [
            StoredDocument(id=document_id, data=copy.deepcopy(data))
            for document_id, data in self._collection(collection).items()
        ]

    async def _get(self, collection: str, document_id: str) -> Optional[StoredDocument]:
        data = self._collection(collection).get(document_id)
        if data is None:
            return None
        return StoredDocument(id=document_id, data=copy.deepcopy(data))

    async def _update(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        documents = self._collection(collection)
        if document_id not in documents:
            raise LookupError(f"No document '{document_id}' in collection '{collection}'")
        documents[document_id] = {**documents[document_id], **copy.deepcopy(data)}

    async def _delete(self, collection: str, document_id: str) -> None:
        self._collection(collection).pop(document_id, None)
