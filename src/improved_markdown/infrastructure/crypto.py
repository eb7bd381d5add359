"""Password-derived AES-256-GCM encryption for embedded document secrets.

Wire format (persisted inside documents, must stay stable)::

    base64( nonce[12] || ciphertext || tag[16] )

The PBKDF2 salt is the SHA-256 digest of the password itself, so the same
password always derives the same key and no salt has to be stored next to
the payload. This trades precomputation resistance for the ability to
decrypt previously written documents; keep it as is.

Error taxonomy — callers branch on the class:

- :class:`DecryptionError`: tag mismatch (wrong password or tampered data).
  Recoverable; renderers show a placeholder.
- :class:`PayloadFormatError`: the payload is not base64 or too short to
  hold a nonce. A real failure, never reported as a wrong password.
- :class:`KeyDerivationError`: the crypto backend cannot run PBKDF2 or
  AES-GCM. Fatal for this subsystem.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

NONCE_SIZE = 12
KEY_SIZE = 32
PBKDF2_ITERATIONS = 100_000


class CryptoError(Exception):
    """Base class for secret codec failures."""


class KeyDerivationError(CryptoError):
    """The host cannot derive keys (primitive unavailable)."""


class DecryptionError(CryptoError):
    """Authentication failed: wrong key or corrupted payload."""

    def __init__(self) -> None:
        super().__init__("error decrypting data")


class PayloadFormatError(CryptoError, ValueError):
    """The payload is not a well-formed encrypted blob."""


class SecretKey:
    """Opaque AES-GCM key derived from a password.

    Holds the cipher only; the raw key bytes are not exposed and the
    object never renders them in ``repr``.
    """

    __slots__ = ("_cipher",)

    def __init__(self, cipher: AESGCM) -> None:
        self._cipher = cipher

    def __repr__(self) -> str:
        return "SecretKey(<redacted>)"


def derive_key(password: str) -> SecretKey:
    """Derive the AES-256-GCM key for *password*.

    Deterministic: the salt is ``sha256(password)``.

    Raises:
        KeyDerivationError: PBKDF2-HMAC-SHA256 or AES-GCM is unavailable.
    """
    key_data = password.encode("utf-8")
    salt = hashlib.sha256(key_data).digest()
    try:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_SIZE,
            salt=salt,
            iterations=PBKDF2_ITERATIONS,
        )
        return SecretKey(AESGCM(kdf.derive(key_data)))
    except UnsupportedAlgorithm as exc:
        msg = f"Key derivation unavailable: {exc}"
        raise KeyDerivationError(msg) from exc


def encrypt(plaintext: str, key: SecretKey) -> str:
    """Encrypt *plaintext* under *key* with a fresh random nonce."""
    nonce = os.urandom(NONCE_SIZE)
    sealed = key._cipher.encrypt(nonce, plaintext.encode("utf-8"), None)
    return base64.b64encode(nonce + sealed).decode("ascii")


def _decode_payload(payload: str) -> bytes:
    """Decode a base64 payload, ignoring embedded ASCII whitespace."""
    compact = "".join(payload.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        msg = f"Encrypted payload is not valid base64: {exc}"
        raise PayloadFormatError(msg) from exc


def decrypt(payload: str, key: SecretKey) -> str:
    """Decrypt a payload produced by :func:`encrypt`.

    Raises:
        DecryptionError: Authentication tag mismatch.
        PayloadFormatError: Malformed payload.
    """
    raw = _decode_payload(payload)
    if len(raw) < NONCE_SIZE:
        msg = f"Encrypted payload too short: {len(raw)} bytes"
        raise PayloadFormatError(msg)

    nonce, sealed = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
    try:
        data = key._cipher.decrypt(nonce, sealed, None)
    except InvalidTag as exc:
        raise DecryptionError from exc
    return data.decode("utf-8", errors="replace")
