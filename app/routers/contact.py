# =============================================================================
# app/routers/contact.py - Contact Form
# =============================================================================

import logging

from fastapi import APIRouter

from app.dependencies import ContactServiceDep
from core.models.contact import ContactMessageCreate, ContactMessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ContactMessageResponse, status_code=201)
def submit_contact_message(contact: ContactMessageCreate, contacts: ContactServiceDep):
    """Store a message from the contact page."""
    stored = contacts.submit(contact)

    return ContactMessageResponse(
        id=str(stored.get("id", "")),
        message="Message sent successfully! We'll get back to you soon.",
    )
