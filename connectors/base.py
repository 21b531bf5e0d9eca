"""
APIConnector — abstract interface for all API connectors.

A connector moves raw bytes between the caller and one server: the query
layer above it builds paths and parses the XML/JSON it gets back, the
connector only authenticates, sends and returns the response body.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Dict


class APIConnector(ABC):
    """Abstract base for all API connectors."""

    # ── Configuration ───────────────────────────────────────────────────
    @property
    @abstractmethod
    def custom_http_headers(self) -> Dict[str, str]:
        """
        Headers added to every request sent to the server.

        The mapping is live: entries added or removed by the caller are
        picked up by the next request.
        """
        ...

    # ── Simple requests ─────────────────────────────────────────────────

    @abstractmethod
    def get_data(self, path: str = "") -> BinaryIO:
        """
        GET ``path`` relative to the connector's base URL.

        Returns
        -------
        The response body as a readable binary stream.
        """
        ...

    @abstractmethod
    def send_data(self, path: str, data: str) -> BinaryIO:
        """POST ``data`` (UTF-8 encoded) to ``path`` relative to the base URL."""
        ...

    # ── Two-phase requests ──────────────────────────────────────────────

    @abstractmethod
    def begin_request(self, path: str) -> BinaryIO:
        """
        Open a buffer for the body of a request to ``path``.

        The caller writes the body into the returned stream and then calls
        ``end_request`` with the same ``path``.
        """
        ...

    @abstractmethod
    def end_request(self, path: str, content_type: str) -> BinaryIO:
        """
        Send the request opened by ``begin_request``.

        A non-empty buffer is POSTed with ``content_type``; an empty one
        turns the request into a GET.
        """
        ...
