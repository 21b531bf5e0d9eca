"""
OAuth2 data model shared by the connector, the auth client and storage.

Both models are frozen: a refresh produces a new ``Credentials`` object,
it never edits the one a request is currently using.
"""

from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Bearer token plus what is needed to refresh it."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    refresh_token: str = ""
    token_type: str = "Bearer"
    expires_in: Optional[int] = None
    scope: str = ""
    issued_at: float = Field(default_factory=time.time)

    def with_refreshed(self, token_data: Dict[str, Any]) -> "Credentials":
        """
        Build the credentials that replace these after a refresh.

        Token endpoints may omit ``refresh_token`` (or ``scope``) when they
        don't rotate it; the current value carries over in that case.
        """
        return Credentials(
            access_token=token_data["access_token"],
            refresh_token=token_data.get("refresh_token") or self.refresh_token,
            token_type=token_data.get("token_type") or self.token_type,
            expires_in=token_data.get("expires_in"),
            scope=token_data.get("scope") or self.scope,
        )


class Secrets(BaseModel):
    """OAuth2 client registration (``client_secrets.json``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    client_id: str
    client_secret: str
    token_uri: str
    auth_uri: str = ""
    redirect_uris: List[str] = Field(default_factory=list)
    server_base_uri: str = ""
    expires_on: Optional[str] = None

    @classmethod
    def from_client_secrets(cls, data: Dict[str, Any]) -> "Secrets":
        """
        Accept either the wrapped layout issued by the server
        (``{"installed": {...}}`` / ``{"web": {...}}``) or a flat mapping.
        """
        for wrapper in ("installed", "web"):
            if isinstance(data.get(wrapper), dict):
                return cls.model_validate(data[wrapper])
        return cls.model_validate(data)
