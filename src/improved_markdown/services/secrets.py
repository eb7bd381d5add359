"""SecretService — encrypt and reveal document secrets with the session key.

Wrong-password results are successful operations carrying the configured
placeholder and a warning. Malformed payloads and key derivation failures
are errors.
"""

from __future__ import annotations

import logging

from improved_markdown.infrastructure.crypto import (
    DecryptionError,
    KeyDerivationError,
    PayloadFormatError,
)
from improved_markdown.services.base import BaseService
from improved_markdown.services.result import ServiceResult

logger = logging.getLogger(__name__)


class SecretService(BaseService):
    """Codec operations bound to the workspace's secret session."""

    def encrypt(self, plaintext: str) -> ServiceResult:
        op = "encrypt"
        try:
            payload = self._workspace.session.encrypt(plaintext)
        except KeyDerivationError as exc:
            return ServiceResult.failure(op, "KEY_DERIVATION_FAILED", str(exc))
        return ServiceResult.success(op, {"payload": payload})

    def decrypt(self, payload: str) -> ServiceResult:
        op = "decrypt"
        try:
            plaintext = self._workspace.session.decrypt(payload)
        except DecryptionError:
            logger.debug("Payload did not authenticate")
            placeholder = self.settings.secrets.placeholder
            return ServiceResult.success(
                op,
                {"plaintext": placeholder, "authenticated": False},
                warnings=["Payload did not authenticate: wrong password or corrupted data"],
            )
        except PayloadFormatError as exc:
            return ServiceResult.failure(op, "MALFORMED_PAYLOAD", str(exc))
        except KeyDerivationError as exc:
            return ServiceResult.failure(op, "KEY_DERIVATION_FAILED", str(exc))
        return ServiceResult.success(op, {"plaintext": plaintext, "authenticated": True})
