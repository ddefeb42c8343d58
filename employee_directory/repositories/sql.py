"""
Employee Directory API - SQL Document Repository
=================================================

What:  DocumentRepository over a relational database via async SQLAlchemy.
How:   Documents live in the single `documents` table (see models/document.py);
       the table is created on initialize() when missing.
Who:   Selected by DOCUMENT_STORE=sql (PostgreSQL via asyncpg, or SQLite via aiosqlite).
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select

from employee_directory.database import (
    Base,
    build_engine,
    build_session_factory,
    session_scope,
)
from employee_directory.models.document import Document
from employee_directory.repositories.base import (
    DocumentRepository,
    StoredDocument,
    new_document_id,
)

logger = logging.getLogger(__name__)


class SqlDocumentRepository(DocumentRepository):
    """Each primitive runs in its own short transaction."""

    def __init__(self, database_url: str, timeout: Optional[float] = None):
        super().__init__(timeout)
        self.engine = build_engine(database_url)
        self._session_factory = build_session_factory(self.engine)

    async def initialize(self) -> None:
        async with self.engine.begin() as connection:
            await connection.run_sync(Base.metadata.create_all)
        logger.info("SQL document store ready (%s)", self.engine.url.render_as_string())

    async def close(self) -> None:
        await self.engine.dispose()

    async def _create(self, collection: str, data: Dict[str, Any]) -> str:
        document_id = new_document_id()
        async with session_scope(self._session_factory) as session:
            session.add(Document(collection=collection, id=document_id, data=dict(data)))
        return document_id

    async def _list(self, collection: str) -> List[StoredDocument]:
        async with session_scope(self._session_factory) as session:
            result = await session.execute(
                select(Document)
                .where(Document.collection == collection)
                .order_by(Document.created_at, Document.id)
            )
            rows = result.scalars().all()
            return [StoredDocument(id=row.id, data=dict(row.data)) for row in rows]

    async def _get(self, collection: str, document_id: str) -> Optional[StoredDocument]:
        async with session_scope(self._session_factory) as session:
            row = await session.get(Document, (collection, document_id))
            if row is None:
                return None
            return StoredDocument(id=row.id, data=dict(row.data))

    async def _update(self, collection: str, document_id: str, data: Dict[str, Any]) -> None:
        async with session_scope(self._session_factory) as session:
            row = await session.get(Document, (collection, document_id))
            if row is None:
                raise LookupError(f"No document '{document_id}' in collection '{collection}'")
            # JSON columns only track reassignment, not in-place mutation
            row.data = {**row.data, **data}

    async def _delete(self, collection: str, document_id: str) -> None:
        async with session_scope(self._session_factory) as session:
            await session.execute(
                delete(Document).where(
                    Document.collection == collection,
                    Document.id == document_id,
                )
            )
