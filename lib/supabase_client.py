# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the Supabase operations the site
# needs. It implements the singleton pattern to reuse a single client
# connection and provides helpers for:
# - Inserting rows (bookings, reviews, contact messages)
# - Listing rows newest-first (admin table, testimonial carousel)
# - Uploading objects and resolving their public URLs
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.insert_row("bookings", {...})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import Settings, settings as default_settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an optional suggestion so callers can log
    something actionable before translating it for the user.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database and storage operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        row = SupabaseClient.insert_row("reviews", {"name": "Asha", ...})
        latest = SupabaseClient.fetch_rows("reviews", limit=10)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls, config: Settings | None = None) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Args:
            config: Settings to build the client from (defaults to the
                process-wide settings)

        Returns:
            Client: Supabase client instance

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            config = config or default_settings
            try:
                cls._instance = create_client(
                    config.SUPABASE_URL,
                    config.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Table Operations
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Args:
            table: Table name
            data: Column values

        Returns:
            Inserted row dict with server-assigned columns (id, created_at)

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table},
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion=f"Check that the {table} table exists and accepts these columns",
                details={"table": table, "columns": sorted(data)},
            )

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        columns: str = "*",
        order_by: str = "created_at",
        desc: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table, newest first by default.

        Args:
            table: Table name
            columns: PostgREST select expression
            order_by: Column to sort on
            desc: Sort descending (newest first)
            limit: Maximum number of rows (None for all)

        Returns:
            List of row dicts (empty list when the table is empty)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = (
                client.table(table)
                .select(columns)
                .order(order_by, desc=desc)
            )
            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table is readable with the service key",
                details={"table": table, "limit": limit},
            )

    # -------------------------------------------------------------------------
    # Storage Operations
    # -------------------------------------------------------------------------

    @classmethod
    def upload_object(
        cls,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
    ) -> str:
        """
        Upload raw bytes to a storage bucket.

        Objects are never overwritten: keys are expected to be unique.

        Returns:
            The storage path that was written

        Raises:
            SupabaseClientError: If upload fails
        """
        client = cls.get_client()

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
            logger.info(f"Uploaded object to {bucket}/{path} ({len(content)} bytes)")
            return path

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to upload {path}: {e}",
                code="UPLOAD_FAILED",
                suggestion=f"Check that the {bucket} bucket exists and allows uploads",
                details={"bucket": bucket, "path": path},
            )

    @classmethod
    def get_public_url(cls, bucket: str, path: str) -> str:
        """
        Resolve the public URL of a stored object.

        Raises:
            SupabaseClientError: If the URL cannot be built
        """
        client = cls.get_client()

        try:
            return client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to get public URL for {path}: {e}",
                code="PUBLIC_URL_FAILED",
                details={"bucket": bucket, "path": path},
            )
