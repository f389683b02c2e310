"""Symmetric encryption for the Credential Record kept in the config table."""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Any, Dict

from cryptography.fernet import Fernet, InvalidToken


class TokenCipherService:
    """Seal token bundles with a Fernet key derived from a configured secret."""

    def __init__(self, *, secret: str) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        self._fernet = Fernet(base64.urlsafe_b64encode(digest))

    def encrypt(self, plaintext: str) -> str:
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("utf-8")

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt a blob written by :meth:`encrypt`.

        Raises ``ValueError`` when the blob was written with another secret.
        """
        try:
            plaintext = self._fernet.decrypt(ciphertext.encode("utf-8"))
        except InvalidToken as exc:
            raise ValueError(
                "Failed to decrypt stored token; the encryption secret may have changed."
            ) from exc
        return plaintext.decode("utf-8")

    def seal_record(self, record: Dict[str, Any]) -> str:
        return self.encrypt(json.dumps(record, sort_keys=True))

    def open_record(self, blob: str) -> Dict[str, Any]:
        record = json.loads(self.decrypt(blob))
        if not isinstance(record, dict):
            raise ValueError("Stored credential record is not a JSON object.")
        return record


__all__ = ["TokenCipherService"]
