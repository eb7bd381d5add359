"""Tests for the password-derived AES-GCM codec."""

from __future__ import annotations

import base64
import hashlib

import pytest
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from improved_markdown.infrastructure import crypto
from improved_markdown.infrastructure.crypto import (
    NONCE_SIZE,
    DecryptionError,
    KeyDerivationError,
    PayloadFormatError,
    SecretKey,
    decrypt,
    derive_key,
    encrypt,
)


def _flip(payload: str, index: int) -> str:
    raw = bytearray(base64.b64decode(payload))
    raw[index] ^= 0x01
    return base64.b64encode(bytes(raw)).decode("ascii")


class TestDeriveKey:
    def test_returns_opaque_key(self, secret_key: SecretKey) -> None:
        assert isinstance(secret_key, SecretKey)
        assert "redacted" in repr(secret_key)

    def test_deterministic(self, secret_key: SecretKey, password: str) -> None:
        again = derive_key(password)
        assert decrypt(encrypt("x", secret_key), again) == "x"
        assert decrypt(encrypt("y", again), secret_key) == "y"

    def test_unsupported_backend_is_key_derivation_error(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def unavailable(*_args: object, **_kwargs: object) -> None:
            raise UnsupportedAlgorithm("no PBKDF2 here")

        monkeypatch.setattr(crypto, "PBKDF2HMAC", unavailable)
        with pytest.raises(KeyDerivationError, match="no PBKDF2 here"):
            derive_key("pw")


class TestEncrypt:
    def test_wire_layout(self, secret_key: SecretKey) -> None:
        payload = encrypt("secret", secret_key)
        raw = base64.b64decode(payload, validate=True)
        # nonce + ciphertext (same length as plaintext) + 16-byte tag
        assert len(raw) == NONCE_SIZE + len(b"secret") + 16

    def test_fresh_nonce_per_call(self, secret_key: SecretKey) -> None:
        first = encrypt("same", secret_key)
        second = encrypt("same", secret_key)
        assert first != second
        assert base64.b64decode(first)[:NONCE_SIZE] != base64.b64decode(second)[:NONCE_SIZE]
        assert decrypt(first, secret_key) == decrypt(second, secret_key) == "same"

    def test_empty_plaintext(self, secret_key: SecretKey) -> None:
        assert decrypt(encrypt("", secret_key), secret_key) == ""

    def test_unicode_round_trip(self, secret_key: SecretKey) -> None:
        text = "pässwörd — 秘密 🔐\nline two"
        assert decrypt(encrypt(text, secret_key), secret_key) == text


class TestDecrypt:
    def test_scenario_right_and_wrong_password(self) -> None:
        payload = encrypt("secret", derive_key("pw"))
        assert decrypt(payload, derive_key("pw")) == "secret"
        with pytest.raises(DecryptionError):
            decrypt(payload, derive_key("wrong"))

    def test_tampered_ciphertext(self, secret_key: SecretKey) -> None:
        payload = encrypt("do not touch", secret_key)
        with pytest.raises(DecryptionError):
            decrypt(_flip(payload, NONCE_SIZE + 1), secret_key)

    def test_tampered_nonce(self, secret_key: SecretKey) -> None:
        payload = encrypt("do not touch", secret_key)
        with pytest.raises(DecryptionError):
            decrypt(_flip(payload, 0), secret_key)

    def test_truncated_tag(self, secret_key: SecretKey) -> None:
        raw = base64.b64decode(encrypt("abc", secret_key))
        short = base64.b64encode(raw[: NONCE_SIZE + 4]).decode("ascii")
        with pytest.raises(DecryptionError):
            decrypt(short, secret_key)

    def test_whitespace_in_payload_ignored(self, secret_key: SecretKey) -> None:
        payload = encrypt("wrapped", secret_key)
        wrapped = "\n".join(payload[i : i + 10] for i in range(0, len(payload), 10))
        assert decrypt(f"  {wrapped}\n", secret_key) == "wrapped"

    def test_invalid_base64_is_format_error(self, secret_key: SecretKey) -> None:
        with pytest.raises(PayloadFormatError):
            decrypt("not*base64!", secret_key)

    def test_non_ascii_is_format_error(self, secret_key: SecretKey) -> None:
        with pytest.raises(PayloadFormatError):
            decrypt("ünïcode", secret_key)

    def test_shorter_than_nonce_is_format_error(self, secret_key: SecretKey) -> None:
        with pytest.raises(PayloadFormatError, match="too short"):
            decrypt(base64.b64encode(b"tiny").decode("ascii"), secret_key)

    def test_format_error_is_not_decryption_error(self) -> None:
        assert not issubclass(PayloadFormatError, DecryptionError)
        assert issubclass(PayloadFormatError, ValueError)


class TestWireFormat:
    """Payloads stored in documents must stay readable across releases.

    The key is rebuilt here from first principles: PBKDF2-HMAC-SHA256 over
    the UTF-8 password, salted with SHA-256 of that password, 100 000
    iterations, 32 bytes (AES-256). Payloads are base64(nonce | ct | tag).
    """

    NONCE = bytes(range(12))

    @staticmethod
    def _reference_key(password: str) -> bytes:
        raw = password.encode("utf-8")
        return hashlib.pbkdf2_hmac("sha256", raw, hashlib.sha256(raw).digest(), 100_000, 32)

    def test_reference_payload_decrypts(self, password: str, secret_key: SecretKey) -> None:
        sealed = AESGCM(self._reference_key(password)).encrypt(
            self.NONCE, b"launch code 0000", None
        )
        payload = base64.b64encode(self.NONCE + sealed).decode("ascii")
        assert decrypt(payload, secret_key) == "launch code 0000"

    def test_payload_opens_with_reference_key(
        self, password: str, secret_key: SecretKey
    ) -> None:
        raw = base64.b64decode(encrypt("ünïcödé secret", secret_key), validate=True)
        nonce, sealed = raw[:NONCE_SIZE], raw[NONCE_SIZE:]
        assert len(nonce) == 12
        assert len(sealed) == len("ünïcödé secret".encode()) + 16
        plaintext = AESGCM(self._reference_key(password)).decrypt(nonce, sealed, None)
        assert plaintext.decode("utf-8") == "ünïcödé secret"

    def test_parameters(self) -> None:
        assert crypto.NONCE_SIZE == 12
        assert crypto.KEY_SIZE == 32
        assert crypto.PBKDF2_ITERATIONS == 100_000
