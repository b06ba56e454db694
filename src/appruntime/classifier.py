"""Launch classification driver."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from appruntime._constants import INSTALL_WINDOW
from appruntime.exceptions import LedgerWriteError
from appruntime.ledger import VersionLedger
from appruntime.state.classification import RuntimeClassification
from appruntime.state.policy import classify_launch
from appruntime.state.store import RuntimeInfoStore

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LaunchClassifier:
    """Classify the current launch and publish the result.

    Usage::

        classifier = LaunchClassifier(VersionLedger(store), RuntimeInfoStore())
        await classifier.initialize_runtime_info("1.2.0", installed_at)

    Meant to run once per process.  Calls are serialized, and the state
    store only accepts the first classification, so later calls return a
    fresh result without publishing it.  Naive datetimes from *clock* or
    in *installation_time* are taken as UTC.
    """

    def __init__(
        self,
        ledger: VersionLedger,
        store: RuntimeInfoStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
        install_window: timedelta = INSTALL_WINDOW,
    ) -> None:
        self._ledger = ledger
        self._store = store
        self._clock = clock
        self._install_window = install_window
        self._lock = asyncio.Lock()

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=UTC)
        return now

    @property
    def store(self) -> RuntimeInfoStore:
        return self._store

    @property
    def ledger(self) -> VersionLedger:
        return self._ledger

    async def initialize_runtime_info(
        self,
        app_version: str,
        installation_time: datetime,
    ) -> RuntimeClassification:
        """Read the ledger, record *app_version* and publish the classification.

        Raises
        ------
        LedgerWriteError
            If recording *app_version* failed.  Raised after the
            classification has been published.
        """
        if installation_time.tzinfo is None:
            installation_time = installation_time.replace(tzinfo=UTC)

        async with self._lock:
            previous_app_version = await self._ledger.read_last_version()
            write_error: LedgerWriteError | None = None
            try:
                await self._ledger.write_if_changed(app_version)
            except LedgerWriteError as exc:
                write_error = exc

            classification = classify_launch(
                previous_app_version=previous_app_version,
                app_version=app_version,
                installed_for=self._now() - installation_time,
                install_window=self._install_window,
            )
            _logger.debug(
                "Launch classified version=%s previous=%s install=%s update=%s",
                app_version,
                previous_app_version,
                classification.is_first_run_after_install,
                classification.is_first_run_after_update,
            )
            self._store.publish(classification)

        if write_error is not None:
            raise write_error
        return classification
