# =============================================================================
# core/services/contact_service.py - Contact Messages
# =============================================================================

import logging
from typing import Any

from app.config import Settings
from app.exceptions import PersistenceError
from core.models.contact import ContactMessageCreate
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


class ContactService:
    """Stores messages from the contact page."""

    def __init__(self, config: Settings):
        self.table = config.CONTACT_TABLE

    def submit(self, contact: ContactMessageCreate) -> dict[str, Any]:
        """
        Insert one contact message.

        Raises:
            PersistenceError: If the insert fails
        """
        try:
            stored = SupabaseClient.insert_row(self.table, contact.model_dump(mode="json"))
        except SupabaseClientError as e:
            logger.error(f"Failed to store contact message: {e}")
            raise PersistenceError("create_contact_message", str(e))

        logger.info(f"Contact message received from {contact.email}")
        return stored
