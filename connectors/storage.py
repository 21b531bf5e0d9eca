"""
Credential storage — where a connector gets its secrets and tokens.

A connector only needs ``get_secrets()`` and ``get_credentials()``.
Storages that also implement ``store_credentials()`` receive the new
credentials after every refresh so the next process starts from them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from connectors.encryption import decrypt_token, encrypt_token
from connectors.models import Credentials, Secrets

logger = logging.getLogger(__name__)

_TOKEN_FIELDS = ("access_token", "refresh_token")


@runtime_checkable
class CredentialStorage(Protocol):
    def get_secrets(self) -> Secrets:
        ...

    def get_credentials(self) -> Credentials:
        ...


@runtime_checkable
class WritableCredentialStorage(CredentialStorage, Protocol):
    def store_credentials(self, credentials: Credentials) -> None:
        ...


class MemoryStorage:
    """Keeps secrets and credentials in process memory."""

    def __init__(self, secrets: Secrets, credentials: Credentials) -> None:
        self._secrets = secrets
        self._credentials = credentials

    def get_secrets(self) -> Secrets:
        return self._secrets

    def get_credentials(self) -> Credentials:
        return self._credentials

    def store_credentials(self, credentials: Credentials) -> None:
        self._credentials = credentials


class JsonFileStorage:
    """
    File-backed storage using the two files the server hands out:

    * ``client_secrets.json``   — client registration, read-only here
    * ``stored_credentials.json`` — tokens, rewritten after each refresh

    Token fields are Fernet-encrypted on write when
    ``TOKEN_ENCRYPTION_KEY`` is set; plaintext files are still readable.
    """

    def __init__(
        self,
        secrets_path: str | Path = "client_secrets.json",
        credentials_path: str | Path = "stored_credentials.json",
    ) -> None:
        self.secrets_path = Path(secrets_path)
        self.credentials_path = Path(credentials_path)

    @classmethod
    def from_config(cls) -> "JsonFileStorage":
        from config.settings import config

        return cls(config.v1_secrets_file, config.v1_credentials_file)

    def get_secrets(self) -> Secrets:
        data = json.loads(self.secrets_path.read_text(encoding="utf-8"))
        return Secrets.from_client_secrets(data)

    def get_credentials(self) -> Credentials:
        data = json.loads(self.credentials_path.read_text(encoding="utf-8"))
        for field in _TOKEN_FIELDS:
            if data.get(field):
                data[field] = decrypt_token(data[field])
        return Credentials.model_validate(data)

    def store_credentials(self, credentials: Credentials) -> None:
        data = credentials.model_dump()
        for field in _TOKEN_FIELDS:
            data[field] = encrypt_token(data[field])

        # atomic replace
        tmp = self.credentials_path.with_name(self.credentials_path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp.replace(self.credentials_path)
        logger.info("Stored refreshed credentials in %s", self.credentials_path)


def store_if_supported(storage: CredentialStorage, credentials: Credentials) -> bool:
    """Persist ``credentials`` when the storage can; return whether it did."""
    if isinstance(storage, WritableCredentialStorage):
        storage.store_credentials(credentials)
        return True
    return False
