"""
AuthClient — exchange a refresh token for a new access token.

Only the ``refresh_token`` grant is implemented; the initial
authorization-code flow happens out of band and its result lands in the
credential storage.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from connectors.exceptions import RefreshError, TransportError
from connectors.models import Credentials, Secrets

logger = logging.getLogger(__name__)

ENDPOINT_SCOPE = "apiv1"


class AuthClient:
    """OAuth2 token-endpoint client bound to one client registration and scope."""

    def __init__(
        self,
        secrets: Secrets,
        scope: str = ENDPOINT_SCOPE,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.secrets = secrets
        self.scope = scope
        self._transport = transport

    def refresh_auth_code(self, credentials: Credentials) -> Credentials:
        """Use the refresh token in ``credentials`` to get a new access token."""
        if not credentials.refresh_token:
            raise RefreshError("Stored credentials have no refresh_token")

        form = {
            "grant_type": "refresh_token",
            "refresh_token": credentials.refresh_token,
            "client_id": self.secrets.client_id,
            "client_secret": self.secrets.client_secret,
            "scope": self.scope,
        }
        try:
            with httpx.Client(transport=self._transport) as client:
                resp = client.post(
                    self.secrets.token_uri,
                    data=form,
                    headers={"Accept": "application/json"},
                )
        except httpx.TransportError as exc:
            raise TransportError(
                f"Token refresh failed: {exc}",
                method="POST",
                url=self.secrets.token_uri,
            ) from exc

        data = self._parse(resp)
        logger.info("Refreshed access token (scope=%s)", self.scope)
        return credentials.with_refreshed(data)

    @staticmethod
    def _parse(resp: httpx.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.is_error or "error" in data:
            detail = data.get("error_description") or data.get("error") or resp.reason_phrase
            logger.warning("Token refresh rejected: HTTP %s %s", resp.status_code, detail)
            raise RefreshError(
                f"Token refresh rejected: HTTP {resp.status_code} {detail}",
                status_code=resp.status_code,
            )
        if not data.get("access_token"):
            raise RefreshError(
                "Token endpoint response has no access_token",
                status_code=resp.status_code,
            )
        return data
