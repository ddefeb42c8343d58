"""
Employee Directory API - Document SQLAlchemy Model
===================================================

What:  ORM model for the `documents` table used by the SQL document store.
How:   One row per document; (collection, id) is the primary key and the
       entity payload lives in a JSON column, so branches and employees share
       one table exactly as they share one Firestore project.

Table Design:
    - collection: "branches" | "employees"
    - id: store-assigned opaque string (20 hex chars)
    - data: the entity fields, without the id
    - created_at / updated_at: UTC, used to list a collection in creation order
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from employee_directory.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(Base):
    """A single stored document of any collection."""

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(String(100), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_documents_collection_created_at", "collection", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Document(collection='{self.collection}', id='{self.id}')>"
