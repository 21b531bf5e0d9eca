"""
ProxyProvider — optional outbound proxy for a connector.
"""

from __future__ import annotations

from typing import Optional

import httpx


class ProxyProvider:
    """Builds the ``httpx.Proxy`` every request of a connector goes through."""

    def __init__(
        self,
        address: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> None:
        self.address = address
        self.username = username
        self.password = password

    @classmethod
    def from_config(cls) -> Optional["ProxyProvider"]:
        """Return a provider from ``V1_PROXY_*`` settings, or None if unset."""
        from config.settings import config

        if not config.v1_proxy_url:
            return None
        return cls(config.v1_proxy_url, config.v1_proxy_username, config.v1_proxy_password)

    def create_proxy(self) -> httpx.Proxy:
        if self.username:
            return httpx.Proxy(self.address, auth=(self.username, self.password or ""))
        return httpx.Proxy(self.address)

    def __repr__(self) -> str:
        return f"ProxyProvider(address={self.address!r}, username={self.username!r})"
