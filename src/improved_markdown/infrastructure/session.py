"""SecretSession — per-session cache for the document encryption key.

The host owns the session: it creates one, hands it to every encrypt or
decrypt call, and clears it when the session ends. The password prompt is
injected so the session stays UI-agnostic.

States::

    NoKey --key()--> KeyReady --clear()--> NoKey

INVARIANT: concurrent first-use callers share one prompt and one key
derivation. The lock is held across the prompt for that reason.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from improved_markdown.infrastructure.crypto import (
    DecryptionError,
    SecretKey,
    decrypt,
    derive_key,
    encrypt,
)

logger = logging.getLogger(__name__)

PasswordPrompt = Callable[[], str | None]


class SecretSession:
    """Lazily derived, cached encryption key plus codec shortcuts."""

    def __init__(self, prompt: PasswordPrompt) -> None:
        self._prompt = prompt
        self._key: SecretKey | None = None
        self._lock = threading.Lock()

    @property
    def has_key(self) -> bool:
        return self._key is not None

    def key(self) -> SecretKey:
        """Return the cached key, prompting and deriving on first use.

        The prompt is repeated until it returns a non-empty password. An
        exception from the prompt (user abort) propagates and leaves the
        session without a key.
        """
        key = self._key
        if key is not None:
            return key
        with self._lock:
            if self._key is None:
                password: str | None = None
                while not password:
                    password = self._prompt()
                self._key = derive_key(password)
                logger.debug("Derived document encryption key")
            return self._key

    def clear(self) -> None:
        """Drop the cached key; the next use prompts again."""
        with self._lock:
            if self._key is not None:
                logger.debug("Cleared document encryption key")
            self._key = None

    def encrypt(self, plaintext: str) -> str:
        return encrypt(plaintext, self.key())

    def decrypt(self, payload: str) -> str:
        return decrypt(payload, self.key())

    def reveal(self, payload: str, placeholder: str) -> str:
        """Decrypt *payload*, or return *placeholder* on a wrong key.

        Only authentication failures are masked. Malformed payloads and
        backend errors propagate.
        """
        try:
            return self.decrypt(payload)
        except DecryptionError:
            logger.debug("Payload did not authenticate; showing placeholder")
            return placeholder
