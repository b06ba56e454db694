"""Custom exception hierarchy for appruntime."""

from __future__ import annotations


class AppRuntimeError(Exception):
    """Base exception for all appruntime errors."""


class RuntimeEventsConfigError(AppRuntimeError):
    """Invalid or missing configuration."""


class SecureStoreError(AppRuntimeError):
    """Secure key-value store failure (read, write or decrypt)."""

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class SecureStoreUnavailableError(SecureStoreError):
    """The secure store cannot be used at all.

    Typical causes are a missing encryption key or a backing location
    that cannot be created.  Readers treat this the same as an empty
    store.
    """


class LedgerWriteError(AppRuntimeError):
    """Persisting the last app version failed.

    Raised by :meth:`appruntime.ledger.VersionLedger.write_if_changed`.
    The classifier re-raises it only after the classification has been
    published, so callers may log and ignore it.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)
