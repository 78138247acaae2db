"""
ContactBook Backend — Contact SQLAlchemy Model
================================================

What:  ORM model representing the `contacts` table — the `Contact` collection.
Why:   Contacts are schemaless documents; the table stores each one whole in a
       JSON column, keyed by a store-assigned UUID.
How:   Inherits from Base; Alembic revision 001 mirrors this table for PostgreSQL.
Who:   Used exclusively by ContactRepository.

Table Design Rationale:
    - UUID primary key: Opaque, store-assigned, immutable document identity
    - document: JSONB on PostgreSQL (indexable, binary), plain JSON elsewhere
    - created_at: Only used to list documents in insertion order; never exposed

Document shape returned to clients:
    {"_id": "<uuid>", ...document fields}
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, Index, Uuid, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

# Key under which the identifier is exposed in every document body
ID_FIELD = "_id"

# JSONB on PostgreSQL, generic JSON (TEXT-backed) on SQLite
DocumentType = JSON().with_variant(JSONB(), "postgresql")


class Contact(Base):
    """A single contact document."""

    __tablename__ = "contacts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Store-assigned document identifier",
    )

    # What: The contact body exactly as the client sent it (minus `_id`)
    # Why NOT NULL with {} default: An empty POST body is a valid, empty contact
    document: Mapped[Dict[str, Any]] = mapped_column(
        DocumentType,
        nullable=False,
        default=dict,
        comment="Schemaless contact document",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="Insertion time (UTC), used for listing order",
    )

    __table_args__ = (
        Index("idx_contacts_created_at", created_at),
    )

    def to_document(self) -> Dict[str, Any]:
        """Render as the client-facing document: identifier first, then fields."""
        return {ID_FIELD: str(self.id), **(self.document or {})}

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, fields={sorted((self.document or {}).keys())})>"
