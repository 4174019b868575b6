# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper around the Supabase client.
# One instance is constructed explicitly at application startup (see the
# lifespan in app/main.py), injected into services through FastAPI
# dependencies, and closed at shutdown.
#
# It exposes:
# - table(name): PostgREST query builder for a Postgres table
# - bucket(name): Storage bucket proxy (upload / remove / public URL)
# - fetch_one(): single-row lookup that returns None instead of raising
#
# Usage:
#   db = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   db.connect()
#   rows = db.table("fish").select("*").execute().data
#   db.close()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
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
    Datastore client with an explicit lifecycle.

    Wraps the service-role Supabase client, which bypasses Row Level
    Security. This is appropriate for server-side operations where
    authorization is enforced by the API itself.

    Example:
        db = SupabaseClient(url, key)
        db.connect()
        fish = db.fetch_one("fish", id="FISH-AB12CD")
    """

    def __init__(self, url: str, service_key: str):
        self._url = url
        self._service_key = service_key
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    def connect(self) -> "SupabaseClient":
        """
        Create the underlying Supabase client.

        Returns:
            self, for chaining

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._client is not None:
            return self

        try:
            self._client = create_client(self._url, self._service_key)
            logger.info("Supabase client initialized successfully")
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
            )
        return self

    def close(self) -> None:
        """Release the HTTP sessions held by the client."""
        if self._client is None:
            return

        try:
            self._client.postgrest.session.close()
        except Exception as e:
            logger.warning(f"Error while closing Supabase client: {e}")
        finally:
            self._client = None
            logger.info("Supabase client closed")

    @property
    def client(self) -> Client:
        if self._client is None:
            raise SupabaseClientError(
                message="Supabase client used before connect()",
                code="CLIENT_NOT_CONNECTED",
                suggestion="The client is connected in the application lifespan; "
                           "call connect() when using it outside the API"
            )
        return self._client

    # -------------------------------------------------------------------------
    # Tables
    # -------------------------------------------------------------------------

    def table(self, name: str):
        """Return a PostgREST query builder for `name`."""
        return self.client.table(name)

    def fetch_one(self, table: str, **filters: Any) -> dict[str, Any] | None:
        """
        Fetch a single row matching all equality filters.

        Args:
            table: Table name
            **filters: column=value pairs combined with AND

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If the query fails
        """
        query = self.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch from {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": {k: str(v) for k, v in filters.items()}}
            )

        rows = response.data or []
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    def bucket(self, name: str):
        """Return the Storage proxy for bucket `name`."""
        return self.client.storage.from_(name)

    def list_buckets(self) -> list:
        return self.client.storage.list_buckets()

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def ping(self) -> None:
        """Cheap database round trip used by the readiness probe."""
        self.table("fish").select("id").limit(1).execute()
