"""Encrypted single-file secure store."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any

from appruntime.exceptions import SecureStoreError, SecureStoreUnavailableError
from appruntime.storage._aes import decrypt_hex, encrypt_hex, parse_key
from appruntime.storage.base import AccessibilityPolicy

_logger = logging.getLogger(__name__)

_FILE_MODE = 0o600
_DIR_MODE = 0o700
_FORMAT_VERSION = 1


class EncryptedFileStore:
    """:class:`~appruntime.storage.base.SecureStore` backed by one JSON file.

    Every value is encrypted with AES-GCM under *key_hex*; the item key is
    bound in as associated data.  The document looks like::

        {"version": 1, "items": {"<key>": {"value": "<hex>", "nonce": "<hex>", "policy": "always"}}}

    Reading a document that cannot be parsed raises
    :class:`~appruntime.exceptions.SecureStoreError`.  The next write moves
    it aside to ``<name>.corrupt`` and starts a new one.

    The file is only readable by its owner regardless of policy, which is
    the strictest setting a plain file offers.  The policy is kept so a
    future backend with real access classes can honour it.

    Blocking IO is pushed to a worker thread.  Concurrent writers from
    several processes are not coordinated.
    """

    def __init__(self, path: str | os.PathLike[str], key_hex: str | None) -> None:
        self._path = Path(path)
        self._key_hex = key_hex

    @property
    def path(self) -> Path:
        return self._path

    # ------------------------------------------------------------------
    # SecureStore protocol
    # ------------------------------------------------------------------

    async def get_item_async(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get_item, key)

    async def set_item_async(
        self,
        key: str,
        value: str,
        *,
        accessibility_policy: AccessibilityPolicy = AccessibilityPolicy.WHEN_UNLOCKED,
    ) -> None:
        await asyncio.to_thread(self._set_item, key, value, accessibility_policy)

    # ------------------------------------------------------------------
    # Blocking implementation
    # ------------------------------------------------------------------

    def _get_item(self, key: str) -> str | None:
        aes_key = parse_key(self._key_hex)
        items = self._load_items()
        entry = items.get(key)
        if entry is None:
            return None
        if not isinstance(entry, dict):
            raise SecureStoreError(f"Malformed entry for {key!r}", key=key)
        return decrypt_hex(
            str(entry.get("value", "")),
            str(entry.get("nonce", "")),
            aes_key,
            associated_data=key,
        )

    def _set_item(self, key: str, value: str, policy: AccessibilityPolicy) -> None:
        aes_key = parse_key(self._key_hex)
        try:
            items = self._load_items()
        except SecureStoreUnavailableError:
            raise
        except SecureStoreError:
            _logger.warning("Secure store at %s is corrupt; starting a new one", self._path, exc_info=True)
            self._set_aside_corrupt()
            items = {}
        cipher_hex, nonce_hex = encrypt_hex(value, aes_key, associated_data=key)
        items[key] = {"value": cipher_hex, "nonce": nonce_hex, "policy": policy.value}
        self._write_document({"version": _FORMAT_VERSION, "items": items})
        _logger.debug("Stored secure item key=%s policy=%s path=%s", key, policy.value, self._path)

    def _load_items(self) -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise SecureStoreUnavailableError(f"Cannot read secure store at {self._path}: {exc}") from exc

        if not text.strip():
            return {}
        try:
            document = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SecureStoreError(f"Secure store at {self._path} is not valid JSON") from exc
        if not isinstance(document, dict):
            raise SecureStoreError(f"Secure store at {self._path} is not an object")

        items = document.get("items", {})
        if not isinstance(items, dict):
            raise SecureStoreError(f"Secure store at {self._path} has no items object")
        return items

    def _set_aside_corrupt(self) -> None:
        backup = self._path.with_name(f"{self._path.name}.corrupt")
        try:
            os.replace(self._path, backup)
        except OSError as exc:
            raise SecureStoreUnavailableError(f"Cannot move corrupt store {self._path} aside: {exc}") from exc

    def _write_document(self, document: dict[str, Any]) -> None:
        try:
            self._path.parent.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise SecureStoreUnavailableError(f"Cannot create {self._path.parent}: {exc}") from exc

        tmp_path = self._path.with_name(f".{self._path.name}.tmp")
        payload = json.dumps(document, separators=(",", ":"), sort_keys=True)
        fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, _FILE_MODE)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self._path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
