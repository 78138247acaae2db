"""
ContactBook Backend — Contact Service (Resource Controller)
=============================================================

What:  Translates each contact operation into exactly one document-store call.
Why:   Keeps routes down to HTTP concerns (body parsing, status codes) and the
       repository down to storage; the operation contract lives here.
How:   Receives its ContactRepository at construction time (composition root).
Who:   Called by the handlers built in app.routes.contacts.

Operation Table:
    create_contact  → repository.insert                 → created document
    list_contacts   → repository.find_all               → [documents]
    get_contact     → repository.find_by_id             → document | None
    update_contact  → repository.find_and_update_by_id  → document | None
    delete_contact  → repository.remove_by_id           → {"message": ...}

Error Handling Strategy:
    Nothing is caught here. A store failure raises DatabaseError out of the
    repository and the global handler answers the request once; the success
    value is never produced for a failed operation.

Missing documents are not errors:
    get/update of an unknown ID return None (serialized as `null`), and
    delete of an unknown ID still reports success.
"""

import logging
from typing import Any, Dict, List, Optional

from app.repositories.contact_repository import ContactRepository

logger = logging.getLogger(__name__)

DELETE_SUCCESS_MESSAGE = "Successfully deleted contact!"


class ContactService:
    """
    Stateless per-request delegation to the contact repository.
    """

    def __init__(self, repository: ContactRepository):
        self.repository = repository

    async def create_contact(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new contact; the returned document includes its assigned `_id`."""
        contact = await self.repository.insert(fields)
        logger.info("Contact created: %s", contact["_id"])
        return contact

    async def list_contacts(self) -> List[Dict[str, Any]]:
        contacts = await self.repository.find_all()
        logger.debug("Listed %d contacts", len(contacts))
        return contacts

    async def get_contact(self, contact_id: str) -> Optional[Dict[str, Any]]:
        contact = await self.repository.find_by_id(contact_id)
        if contact is None:
            logger.info("Contact %s not found", contact_id)
        return contact

    async def update_contact(
        self, contact_id: str, changes: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Merge `changes` into the stored contact.

        Returns:
            The post-update document, or None if no contact has `contact_id`.
        """
        contact = await self.repository.find_and_update_by_id(contact_id, changes)
        if contact is None:
            logger.info("Update skipped: contact %s not found", contact_id)
        else:
            logger.info("Contact updated: %s (%d fields)", contact_id, len(changes))
        return contact

    async def delete_contact(self, contact_id: str) -> Dict[str, str]:
        """
        Remove the contact with `contact_id`.

        Always reports success once the store call completes, whether or not
        a document actually existed.
        """
        removed = await self.repository.remove_by_id(contact_id)
        if removed:
            logger.info("Contact deleted: %s", contact_id)
        else:
            logger.info("Delete matched no contact: %s", contact_id)
        return {"message": DELETE_SUCCESS_MESSAGE}
