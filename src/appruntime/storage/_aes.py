"""AES-GCM helpers for values at rest."""

from __future__ import annotations

import secrets

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from appruntime.exceptions import SecureStoreError, SecureStoreUnavailableError

_NONCE_BYTES = 12
_KEY_BYTES = frozenset({16, 24, 32})


def _from_hex(value: str, *, name: str) -> bytes:
    try:
        return bytes.fromhex(value.strip())
    except ValueError as exc:
        raise SecureStoreError(f"{name} must be hex-encoded") from exc


def parse_key(key_hex: str | None) -> bytes:
    """Validate an AES key given as hex.

    Raises
    ------
    SecureStoreUnavailableError
        If no key is configured or it is not a 128/192/256-bit hex key.
    """
    if not key_hex:
        raise SecureStoreUnavailableError("No encryption key configured for the secure store")
    try:
        key = _from_hex(key_hex, name="AES key")
    except SecureStoreError as exc:
        raise SecureStoreUnavailableError(str(exc)) from exc
    if len(key) not in _KEY_BYTES:
        raise SecureStoreUnavailableError(f"AES key must be 16, 24 or 32 bytes (got {len(key)})")
    return key


def generate_key_hex() -> str:
    """Return a fresh random 256-bit key as lowercase hex."""
    return AESGCM.generate_key(bit_length=256).hex()


def encrypt_hex(plaintext: str, key: bytes, *, associated_data: str) -> tuple[str, str]:
    """Encrypt *plaintext*, returning ``(ciphertext_hex, nonce_hex)``.

    *associated_data* is authenticated but not encrypted; the store passes
    the item key so a value cannot be moved to another key unnoticed.
    """
    nonce = secrets.token_bytes(_NONCE_BYTES)
    ct = AESGCM(key).encrypt(nonce, plaintext.encode("utf-8"), associated_data.encode("utf-8"))
    return ct.hex(), nonce.hex()


def decrypt_hex(cipher_hex: str, nonce_hex: str, key: bytes, *, associated_data: str) -> str:
    """Reverse :func:`encrypt_hex`.

    Raises
    ------
    SecureStoreError
        If the value is malformed or fails authentication.
    """
    ct = _from_hex(cipher_hex, name="ciphertext")
    nonce = _from_hex(nonce_hex, name="nonce")
    if len(nonce) != _NONCE_BYTES:
        raise SecureStoreError(f"nonce must be {_NONCE_BYTES} bytes (got {len(nonce)})", key=associated_data)
    try:
        plaintext = AESGCM(key).decrypt(nonce, ct, associated_data.encode("utf-8"))
    except InvalidTag as exc:
        raise SecureStoreError("AES-GCM authentication failed", key=associated_data) from exc
    return plaintext.decode("utf-8")
