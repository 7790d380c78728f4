# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles payment screenshot uploads to the public screenshots bucket.
# =============================================================================

import logging
import random
import string
import time
from dataclasses import dataclass

from app.config import Settings
from app.exceptions import UploadError
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
_SUFFIX_LENGTH = 8


@dataclass(frozen=True)
class Artifact:
    """An uploaded file held in memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def size_mb(self) -> float:
        return self.size / (1024 * 1024)

    @property
    def extension(self) -> str:
        """Lowercased extension without the dot, falling back to the MIME subtype."""
        if "." in self.filename:
            return self.filename.rsplit(".", 1)[-1].lower()
        return self.content_type.split("/")[-1].lower()


def generate_storage_key(extension: str) -> str:
    """
    Build a unique object key for an upload.

    Format: <epoch milliseconds>-<8 random base36 chars>.<extension>

    Example:
        generate_storage_key("png")  # "1760890000123-k3j9x0qa.png"
    """
    suffix = "".join(random.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
    stamp = int(time.time() * 1000)
    return f"{stamp}-{suffix}.{extension}"


class StorageService:
    """
    Service for Supabase Storage operations.

    Handles uploading payment screenshots and resolving their public URLs.
    """

    def __init__(self, config: Settings):
        self.config = config
        self.bucket = config.PAYMENT_SCREENSHOT_BUCKET

    def upload_payment_screenshot(self, artifact: Artifact) -> str:
        """
        Store a payment screenshot under a freshly generated key.

        Args:
            artifact: The validated image

        Returns:
            Public URL of the stored object

        Raises:
            UploadError: If the upload or URL lookup fails
        """
        key = generate_storage_key(artifact.extension)

        try:
            SupabaseClient.upload_object(
                bucket=self.bucket,
                path=key,
                content=artifact.content,
                content_type=artifact.content_type,
            )
            public_url = SupabaseClient.get_public_url(self.bucket, key)

        except SupabaseClientError as e:
            logger.error(f"Screenshot upload failed: {e}")
            raise UploadError(str(e), filename=artifact.filename)

        logger.info(f"Stored payment screenshot {key} ({artifact.size_mb:.2f}MB)")
        return public_url
