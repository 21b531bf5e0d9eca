"""
Connector settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Endpoint ─────────────────────────────────────────────────────────
    v1_base_url: str = "http://localhost/VersionOne.Web/"
    v1_endpoint_scope: str = "apiv1"

    # ── OAuth2 storage ───────────────────────────────────────────────────
    v1_secrets_file: str = "client_secrets.json"          # client id / secret / token_uri
    v1_credentials_file: str = "stored_credentials.json"  # access + refresh token, rewritten on refresh
    token_encryption_key: str = ""                         # Fernet key for encrypting tokens at rest

    # ── Proxy ────────────────────────────────────────────────────────────
    v1_proxy_url: Optional[str] = None
    v1_proxy_username: Optional[str] = None
    v1_proxy_password: Optional[str] = None

    # ── Diagnostics ──────────────────────────────────────────────────────
    debug: bool = False   # dump request/response metadata at DEBUG level

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }


config = Settings()
