"""
ContactBook Backend — Contact Repository (Document-Store Client)
==================================================================

What:  The document-store "driver" for the `Contact` collection.
Why:   Gives the service layer collection-style primitives — insert, find-all,
       find-by-id, find-and-update-by-id, remove-by-id — without SQL leaking
       upward. Constructed once by create_app() and injected into ContactService.
How:   Every public method is one store operation in its own short-lived
       AsyncSession: commit on success, rollback on any failure.
Who:   Called by ContactService (and the health check, via ping()).

Error Handling Strategy:
    SQLAlchemyError → DatabaseError (driver details logged, never returned)
    Malformed identifier → ValidationError (like a cast error from a document driver)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.exceptions import DatabaseError, ValidationError
from app.models.contact import ID_FIELD, Contact

logger = logging.getLogger(__name__)


def parse_contact_id(contact_id: str) -> uuid.UUID:
    """Convert a path identifier into a UUID, or raise ValidationError."""
    try:
        return uuid.UUID(str(contact_id))
    except (ValueError, AttributeError, TypeError):
        raise ValidationError(
            message=f"'{contact_id}' is not a valid contact ID",
            field="contact_id",
        )


def _without_identifier(fields: Dict[str, Any]) -> Dict[str, Any]:
    # The identifier is store-owned and immutable; clients cannot set it
    return {key: value for key, value in fields.items() if key != ID_FIELD}


class ContactRepository:
    """
    Collection-style access to contact documents.

    Stateless apart from the session factory; safe to share across all
    concurrent requests.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    "Store operation '%s' failed: %s: %s",
                    operation, type(e).__name__, str(e),
                )
                raise DatabaseError(
                    context={"operation": operation, "error_type": type(e).__name__},
                ) from e
            except Exception:
                await session.rollback()
                raise

    async def insert(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new document; returns it with its assigned `_id`."""
        async with self._session("insert") as session:
            contact = Contact(document=_without_identifier(fields))
            session.add(contact)
            await session.flush()  # Assigns the UUID
            return contact.to_document()

    async def find_all(self) -> List[Dict[str, Any]]:
        """Every document in the collection, oldest first."""
        async with self._session("find_all") as session:
            result = await session.execute(
                select(Contact).order_by(Contact.created_at, Contact.id)
            )
            return [contact.to_document() for contact in result.scalars().all()]

    async def find_by_id(self, contact_id: str) -> Optional[Dict[str, Any]]:
        """The document with `contact_id`, or None if it does not exist."""
        cid = parse_contact_id(contact_id)
        async with self._session("find_by_id") as session:
            contact = await session.get(Contact, cid)
            return contact.to_document() if contact is not None else None

    async def find_and_update_by_id(
        self, contact_id: str, changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Merge `changes` into the document and return the post-update version.

        Top-level fields in `changes` overwrite stored ones; fields not named
        are kept. Returns None (and writes nothing) if the document is absent.
        The row is locked for the read-merge-write where the dialect supports it.
        """
        cid = parse_contact_id(contact_id)
        async with self._session("find_and_update_by_id") as session:
            result = await session.execute(
                select(Contact).where(Contact.id == cid).with_for_update()
            )
            contact = result.scalar_one_or_none()
            if contact is None:
                return None
            # Reassign (not mutate in place) so the JSON column is marked dirty
            contact.document = {**(contact.document or {}), **_without_identifier(changes)}
            await session.flush()
            return contact.to_document()

    async def remove_by_id(self, contact_id: str) -> int:
        """Delete the document with `contact_id`; returns the number removed (0 or 1)."""
        cid = parse_contact_id(contact_id)
        async with self._session("remove_by_id") as session:
            result = await session.execute(delete(Contact).where(Contact.id == cid))
            return result.rowcount or 0

    async def ping(self) -> None:
        """Lightweight round-trip used by the health check; raises DatabaseError if unreachable."""
        async with self._session("ping") as session:
            await session.execute(text("SELECT 1"))
