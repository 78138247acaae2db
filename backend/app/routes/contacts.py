"""
ContactBook Backend — Contact Route Handlers
==============================================

What:  Binds the /contact endpoints to ContactService operations.
Why:   Routes stay THIN — extract the path ID and body, call the service,
       let FastAPI serialize the result.
How:   create_contacts_router() closes over the service instance that the
       composition root (app.main.create_app) built; there is no global.

Route Inventory:
    GET    /contact                → list_contacts
    POST   /contact                → create_contact
    GET    /contact/{contact_id}   → get_contact     (document or null)
    PUT    /contact/{contact_id}   → update_contact  (document or null)
    DELETE /contact/{contact_id}   → delete_contact

Request bodies:
    application/json                   → must be a JSON object ({} when empty)
    application/x-www-form-urlencoded  → flat object of strings; repeated keys
                                         become lists
"""

import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request

from app.exceptions import ValidationError
from app.schemas.contact import ContactDocument, ErrorResponse, MessageResponse
from app.services.contact_service import ContactService

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"


def _reject_constant(token: str):
    # NaN and Infinity are not JSON; stores either reject or silently null them
    raise ValidationError(
        message=f"Request body contains non-standard JSON value '{token}'",
        field="body",
    )


_ERROR_RESPONSES = {
    400: {"description": "Malformed contact ID or body", "model": ErrorResponse},
    500: {"description": "Document store error", "model": ErrorResponse},
}


async def read_contact_body(request: Request) -> Dict[str, Any]:
    """
    Parse the request body into a contact document.

    Raises:
        ValidationError: Unsupported content type, invalid JSON (including
                         NaN/Infinity), or a JSON value that is not an object.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        fields: Dict[str, Any] = {}
        for key in form.keys():
            values = form.getlist(key)
            fields[key] = values[0] if len(values) == 1 else list(values)
        return fields

    if content_type and content_type != JSON_CONTENT_TYPE and not content_type.endswith("+json"):
        raise ValidationError(
            message=f"Unsupported content type '{content_type}'. Send JSON or form data.",
            field="body",
        )

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise ValidationError(message="Request body is not valid JSON", field="body")

    if not isinstance(payload, dict):
        raise ValidationError(
            message="Contact body must be a JSON object",
            field="body",
            context={"received": type(payload).__name__},
        )
    return payload


def create_contacts_router(contact_service: ContactService) -> APIRouter:
    """Build the /contact router bound to `contact_service`."""
    router = APIRouter(tags=["Contacts"])

    @router.get(
        "/contact",
        responses=_ERROR_RESPONSES,
        summary="List all contacts",
    )
    async def list_contacts() -> List[ContactDocument]:
        return await contact_service.list_contacts()

    @router.post(
        "/contact",
        responses=_ERROR_RESPONSES,
        summary="Create a contact",
        description=(
            "Stores the body as a new contact document. Any JSON object is "
            "accepted; the response includes the store-assigned `_id`."
        ),
    )
    async def create_contact(
        fields: Dict[str, Any] = Depends(read_contact_body),
    ) -> ContactDocument:
        return await contact_service.create_contact(fields)

    @router.get(
        "/contact/{contact_id}",
        responses=_ERROR_RESPONSES,
        summary="Get a contact by ID",
        description="Returns the contact document, or `null` if no contact has this ID.",
    )
    async def get_contact(contact_id: str) -> Optional[ContactDocument]:
        return await contact_service.get_contact(contact_id)

    @router.put(
        "/contact/{contact_id}",
        responses=_ERROR_RESPONSES,
        summary="Update a contact",
        description=(
            "Merges the body's fields into the stored contact and returns the "
            "updated document, or `null` if no contact has this ID."
        ),
    )
    async def update_contact(
        contact_id: str,
        changes: Dict[str, Any] = Depends(read_contact_body),
    ) -> Optional[ContactDocument]:
        return await contact_service.update_contact(contact_id, changes)

    @router.delete(
        "/contact/{contact_id}",
        response_model=MessageResponse,
        responses=_ERROR_RESPONSES,
        summary="Delete a contact",
    )
    async def delete_contact(contact_id: str) -> Dict[str, str]:
        return await contact_service.delete_contact(contact_id)

    return router
