"""
connectors — authenticated HTTP access to the server's REST endpoints.

Provides a connector that handles:
  • OAuth2 bearer tokens on every request
  • One token refresh + retry when the server rejects a request
  • A cookie jar shared by all requests of one connector
  • Custom headers and an optional proxy
  • Two-phase (begin / end) requests for streamed bodies

The query layer talks to an APIConnector and never sees tokens.
"""

from connectors.base import APIConnector
from connectors.exceptions import (
    AuthError,
    ConnectorError,
    MissingBufferError,
    ProtocolError,
    RefreshError,
    TransportError,
)
from connectors.models import Credentials, Secrets
from connectors.oauth2 import OAuth2APIConnector
from connectors.proxy import ProxyProvider
from connectors.storage import CredentialStorage, JsonFileStorage, MemoryStorage

__all__ = [
    "APIConnector",
    "AuthError",
    "ConnectorError",
    "CredentialStorage",
    "Credentials",
    "JsonFileStorage",
    "MemoryStorage",
    "MissingBufferError",
    "OAuth2APIConnector",
    "ProtocolError",
    "ProxyProvider",
    "RefreshError",
    "Secrets",
    "TransportError",
]
