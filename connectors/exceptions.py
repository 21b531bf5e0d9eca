"""
Connector exceptions.

    ConnectorError
     ├── TransportError       network / connection failure, never retried
     ├── ProtocolError        HTTP 4xx / 5xx response
     │    └── AuthError       HTTP 401
     ├── RefreshError         token endpoint refused the refresh
     └── MissingBufferError   end_request() without begin_request()
"""

from __future__ import annotations

from typing import Optional


class ConnectorError(Exception):
    """Base class for every error raised by a connector."""


class TransportError(ConnectorError):
    """The request never produced an HTTP response (DNS, connect, reset, timeout)."""

    def __init__(self, message: str, *, method: str = "", url: str = "") -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class ProtocolError(ConnectorError):
    """The server answered with a 4xx/5xx status."""

    def __init__(
        self,
        status_code: int,
        *,
        method: str,
        url: str,
        body: bytes = b"",
        reason: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        self.reason = reason or ""
        super().__init__(f"{method} {url} failed: HTTP {status_code} {self.reason}".rstrip())


class AuthError(ProtocolError):
    """HTTP 401 Unauthorized."""


class RefreshError(ConnectorError):
    """The OAuth2 token endpoint did not return usable credentials."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingBufferError(ConnectorError, KeyError):
    """end_request() was called for a path that has no pending buffer."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"No pending request buffer for {self.path!r}; call begin_request() first"
