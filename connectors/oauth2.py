"""
OAuth2APIConnector — bearer-token connector with refresh-on-failure.

Every request carries ``Authorization: Bearer <access_token>``.  When the
server rejects a request (GET: 401, POST: any 4xx/5xx) the connector
refreshes the access token once through the OAuth2 token endpoint and
re-sends the same request once.  Whatever the second attempt returns is
final.
"""

from __future__ import annotations

import io
import locale
import logging
from typing import BinaryIO, Callable, Dict, List, NamedTuple, Optional, Tuple

import httpx

from config.settings import config
from connectors.auth_client import ENDPOINT_SCOPE, AuthClient
from connectors.base import APIConnector
from connectors.exceptions import AuthError, MissingBufferError, ProtocolError, TransportError
from connectors.models import Credentials, Secrets
from connectors.proxy import ProxyProvider
from connectors.storage import CredentialStorage, JsonFileStorage, store_if_supported

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "text/xml"

_REDACTED_HEADERS = {"authorization", "proxy-authorization", "cookie"}


class _AuthState(NamedTuple):
    """Secrets and credentials in use; replaced as a whole, never edited."""

    secrets: Secrets
    credentials: Credentials


def current_culture() -> str:
    """
    Name of the active locale in ``ll-CC`` form (``en_US`` → ``en-US``).

    Returns an empty string for the C/POSIX locale or when it can't be read.
    """
    try:
        lang = locale.getlocale()[0]
    except ValueError:
        return ""
    if not lang or lang in ("C", "POSIX"):
        return ""
    return lang.replace("_", "-")


class OAuth2APIConnector(APIConnector):
    """Connector for the REST endpoints of one server, authenticated with OAuth2."""

    def __init__(
        self,
        url: str,
        storage: CredentialStorage,
        proxy_provider: Optional[ProxyProvider] = None,
        *,
        auth_client_factory: Callable[[Secrets, str], AuthClient] = AuthClient,
        endpoint_scope: str = ENDPOINT_SCOPE,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.url = url
        self._storage = storage
        self._proxy_provider = proxy_provider
        self._auth_client_factory = auth_client_factory
        self._endpoint_scope = endpoint_scope
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._custom_http_headers: Dict[str, str] = {}
        self._pending_streams: Dict[str, io.BytesIO] = {}
        self._auth = _AuthState(storage.get_secrets(), storage.get_credentials())

    @classmethod
    def from_config(cls, storage: Optional[CredentialStorage] = None) -> "OAuth2APIConnector":
        """Connector for ``V1_BASE_URL`` using the configured storage files and proxy."""
        return cls(
            config.v1_base_url,
            storage or JsonFileStorage.from_config(),
            ProxyProvider.from_config(),
            endpoint_scope=config.v1_endpoint_scope,
        )

    # ── State ───────────────────────────────────────────────────────────

    @property
    def custom_http_headers(self) -> Dict[str, str]:
        return self._custom_http_headers

    @property
    def credentials(self) -> Credentials:
        return self._auth.credentials

    @property
    def secrets(self) -> Secrets:
        return self._auth.secrets

    @property
    def cookies(self) -> httpx.Cookies:
        """Cookie jar shared by every request of this connector."""
        return self._http_client.cookies

    @property
    def _http_client(self) -> httpx.Client:
        if self._client is None:
            proxy = self._proxy_provider.create_proxy() if self._proxy_provider else None
            self._client = httpx.Client(
                transport=self._transport,
                proxy=proxy,
                follow_redirects=True,
            )
        return self._client

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "OAuth2APIConnector":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ── APIConnector ────────────────────────────────────────────────────

    def get_data(self, path: str = "") -> BinaryIO:
        return self.http_get(self.url + path)

    def send_data(self, path: str, data: str) -> BinaryIO:
        return self.http_post(self.url + path, data.encode("utf-8"))

    def begin_request(self, path: str) -> BinaryIO:
        stream = io.BytesIO()
        self._pending_streams[path] = stream
        return stream

    def end_request(self, path: str, content_type: str) -> BinaryIO:
        try:
            stream = self._pending_streams.pop(path)
        except KeyError:
            raise MissingBufferError(path) from None

        body = stream.getvalue()
        if body:
            return self.http_post(path, body, content_type=content_type)
        return self.http_get(path, content_type=content_type)

    # ── HTTP ────────────────────────────────────────────────────────────

    def http_get(
        self,
        path: str,
        refresh_token_if_needed: bool = True,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> BinaryIO:
        """GET the absolute URL ``path``; refresh and retry once on HTTP 401."""
        return self._execute("GET", path, None, content_type, refresh_token_if_needed)

    def http_post(
        self,
        path: str,
        body: bytes,
        refresh_token_if_needed: bool = True,
        content_type: str = DEFAULT_CONTENT_TYPE,
    ) -> BinaryIO:
        """POST ``body`` to the absolute URL ``path``; refresh and retry once on any HTTP error."""
        return self._execute("POST", path, body, content_type, refresh_token_if_needed)

    def _execute(
        self,
        method: str,
        url: str,
        body: Optional[bytes],
        content_type: str,
        refresh_token_if_needed: bool,
    ) -> BinaryIO:
        resp = self._send(method, url, body, content_type)
        if refresh_token_if_needed and self._should_refresh(method, resp):
            logger.info("%s %s returned HTTP %s, refreshing access token", method, url, resp.status_code)
            self._refresh_credentials()
            resp = self._send(method, url, body, content_type)

        if resp.is_error:
            error_cls = AuthError if resp.status_code == 401 else ProtocolError
            raise error_cls(
                resp.status_code,
                method=method,
                url=url,
                body=resp.content,
                reason=resp.reason_phrase,
            )
        return io.BytesIO(resp.content)

    @staticmethod
    def _should_refresh(method: str, resp: httpx.Response) -> bool:
        # POST treats any protocol error as an expired token, GET only 401.
        if method == "GET":
            return resp.status_code == 401
        return resp.is_error

    def _refresh_credentials(self) -> None:
        secrets, credentials = self._auth
        auth_client = self._auth_client_factory(secrets, self._endpoint_scope)
        refreshed = auth_client.refresh_auth_code(credentials)
        self._auth = _AuthState(secrets, refreshed)
        store_if_supported(self._storage, refreshed)

    def _send(
        self,
        method: str,
        url: str,
        body: Optional[bytes],
        content_type: str,
    ) -> httpx.Response:
        client = self._http_client
        request = client.build_request(
            method,
            url,
            content=body,
            headers=self._request_headers(content_type),
        )
        if config.debug:
            self._trace("Request", method, url, request.headers, len(body or b""))

        try:
            resp = client.send(request)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}", method=method, url=url) from exc

        if config.debug:
            self._trace(f"Response {resp.status_code} from {resp.url}", method, url, resp.headers, len(resp.content))
        return resp

    def _request_headers(self, content_type: str) -> List[Tuple[str, str]]:
        headers = [("Authorization", f"Bearer {self._auth.credentials.access_token}")]
        culture = current_culture()
        if culture:
            headers.append(("Accept-Language", culture))
        headers.append(("Content-Type", content_type))
        headers.extend(self._custom_http_headers.items())
        return headers

    @staticmethod
    def _trace(label: str, method: str, url: str, headers: httpx.Headers, size: int) -> None:
        shown = {
            k: ("***" if k.lower() in _REDACTED_HEADERS else v)
            for k, v in headers.items()
        }
        logger.debug("%s: %s %s (%d bytes) headers=%s", label, method, url, size, shown)
