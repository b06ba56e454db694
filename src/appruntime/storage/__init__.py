"""Secure key-value storage backends.

The ledger only depends on the :class:`SecureStore` protocol; the
implementations here cover tests (:class:`MemorySecureStore`) and
desktop/server processes (:class:`EncryptedFileStore`).
"""

from __future__ import annotations

from appruntime.storage._aes import generate_key_hex
from appruntime.storage.base import AccessibilityPolicy, SecureStore
from appruntime.storage.file import EncryptedFileStore
from appruntime.storage.memory import MemorySecureStore

__all__ = [
    "AccessibilityPolicy",
    "EncryptedFileStore",
    "MemorySecureStore",
    "SecureStore",
    "generate_key_hex",
]
