"""Tests for ProxyProvider."""

import httpx

from config.settings import config
from connectors.proxy import ProxyProvider


class TestProxyProvider:
    def test_plain_proxy(self):
        proxy = ProxyProvider("http://proxy.example.com:8080").create_proxy()
        assert isinstance(proxy, httpx.Proxy)
        assert proxy.url == httpx.URL("http://proxy.example.com:8080")
        assert proxy.auth is None

    def test_proxy_with_credentials(self):
        proxy = ProxyProvider("http://proxy.example.com:8080", "corp\\jdoe", "pw").create_proxy()
        assert proxy.auth == ("corp\\jdoe", "pw")

    def test_repr_hides_password(self):
        assert "pw" not in repr(ProxyProvider("http://proxy.example.com:8080", "jdoe", "pw"))

    def test_from_config_unset(self, monkeypatch):
        monkeypatch.setattr(config, "v1_proxy_url", None)
        assert ProxyProvider.from_config() is None

    def test_from_config(self, monkeypatch):
        monkeypatch.setattr(config, "v1_proxy_url", "http://proxy.example.com:3128")
        monkeypatch.setattr(config, "v1_proxy_username", "jdoe")
        monkeypatch.setattr(config, "v1_proxy_password", "pw")
        provider = ProxyProvider.from_config()
        assert provider.address == "http://proxy.example.com:3128"
        assert provider.create_proxy().auth == ("jdoe", "pw")
