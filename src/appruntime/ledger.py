"""Persisted record of the last app version seen on this install."""

from __future__ import annotations

import logging

from appruntime._constants import DEFAULT_NAMESPACE, ledger_key
from appruntime.exceptions import LedgerWriteError
from appruntime.storage.base import AccessibilityPolicy, SecureStore

_logger = logging.getLogger(__name__)


class VersionLedger:
    """Single-key store of the last app version.

    The value lives under ``"<namespace>-last_app_version"`` as the raw
    version string.  Reads never fail: an unreadable or unavailable store
    means no version was recorded.  Writes only happen when the version
    differs from the one last read.

    Parameters
    ----------
    store : SecureStore
        Backing key-value store.
    namespace : str
        Key prefix.
    accessibility_policy : AccessibilityPolicy
        Policy passed on every write.  ``ALWAYS`` keeps the value readable
        before first unlock; pass a stronger policy if the host never
        launches while locked.
    """

    def __init__(
        self,
        store: SecureStore,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        accessibility_policy: AccessibilityPolicy = AccessibilityPolicy.ALWAYS,
    ) -> None:
        self._store = store
        self._key = ledger_key(namespace)
        self._accessibility_policy = accessibility_policy
        self._last_version: str | None = None

    @property
    def key(self) -> str:
        return self._key

    @property
    def accessibility_policy(self) -> AccessibilityPolicy:
        return self._accessibility_policy

    async def read_last_version(self) -> str | None:
        """Return the recorded version, or ``None`` if there is none."""
        try:
            value = await self._store.get_item_async(self._key)
        except Exception:
            _logger.debug("Reading %s failed; treating as no history", self._key, exc_info=True)
            value = None
        self._last_version = value
        _logger.debug("Last app version key=%s value=%s", self._key, value)
        return value

    async def write_if_changed(self, current_version: str) -> bool:
        """Persist *current_version* unless it matches the last read value.

        Returns ``True`` when a write happened.

        Raises
        ------
        LedgerWriteError
            If the store rejects the write.
        """
        if self._last_version == current_version:
            return False
        try:
            await self._store.set_item_async(
                self._key,
                current_version,
                accessibility_policy=self._accessibility_policy,
            )
        except Exception as exc:
            raise LedgerWriteError(
                f"Failed to persist app version {current_version!r}: {exc}",
                key=self._key,
            ) from exc
        _logger.debug("Recorded app version key=%s %s -> %s", self._key, self._last_version, current_version)
        self._last_version = current_version
        return True

    async def sync(self, current_version: str) -> str | None:
        """Read the recorded version, then record *current_version*.

        Returns the version recorded before this call.
        """
        previous = await self.read_last_version()
        await self.write_if_changed(current_version)
        return previous
