"""
Identity Service Client

Talks to the external auth service for the two account operations that live
there: password changes and marking a deleted account.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

from teachassist.config import settings
from teachassist.core.errors import IdentityError

logger = logging.getLogger(__name__)


class IdentityClient:
    """Client for the identity service REST API."""

    def __init__(self, *, base_url: str, service_role_key: str):
        """Initialize identity client.

        Args:
            base_url: Identity service base URL (e.g. https://<project>/auth/v1)
            service_role_key: Admin key used for user-management calls
        """
        self.base_url = base_url.rstrip("/")
        self.service_role_key = service_role_key

    @classmethod
    def from_settings(cls) -> IdentityClient:
        """Create client from application settings."""
        return cls(base_url=settings.AUTH_API_URL, service_role_key=settings.AUTH_SERVICE_ROLE_KEY)

    async def update_password(self, *, access_token: str, new_password: str) -> None:
        """Set a new password for the caller identified by ``access_token``.

        Raises:
            IdentityError: If the identity service rejects the request
        """
        await self._send_request(
            "PUT",
            "/user",
            token=access_token,
            payload={"password": new_password},
            failure_message="Failed to update password",
        )

    async def mark_deleted(self, *, user_id: UUID) -> None:
        """Flag the identity as deleted in its user metadata.

        Raises:
            IdentityError: If the identity service rejects the request
        """
        await self._send_request(
            "PUT",
            f"/admin/users/{user_id}",
            token=self.service_role_key,
            payload={"user_metadata": {"deleted": True}},
            failure_message="Failed to delete account. Please try again.",
        )

    async def _send_request(
        self,
        method: str,
        path: str,
        *,
        token: str,
        payload: dict[str, Any],
        failure_message: str,
    ) -> dict[str, Any]:
        """Send one request to the identity service.

        Returns:
            Decoded JSON body (empty dict when the body is empty)

        Raises:
            IdentityError: On transport errors and non-2xx responses
        """
        headers = {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}
        if self.service_role_key:
            headers["apikey"] = self.service_role_key

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method, f"{self.base_url}{path}", json=payload, headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling identity service {path}: {e}")
            raise IdentityError(failure_message) from e

        if response.is_error:
            logger.error(
                f"Identity service error: {response.status_code} on {method} {path}",
                extra={"response": response.text[:500]},
            )
            raise IdentityError(failure_message)

        return response.json() if response.content else {}


def get_identity_client() -> IdentityClient:
    """Dependency: identity client configured from settings."""
    return IdentityClient.from_settings()
