"""Caller-facing entry point for launch classification and callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from appruntime.app_info import AppInfoProvider
from appruntime.classifier import LaunchClassifier
from appruntime.config import RuntimeEventsConfig
from appruntime.dispatch import CallbackDispatcher, RuntimeEventCallback, RuntimeEventPayload
from appruntime.exceptions import RuntimeEventsConfigError
from appruntime.ledger import VersionLedger
from appruntime.state.classification import RuntimeClassification
from appruntime.state.store import Listener, RuntimeInfoStore
from appruntime.storage.base import SecureStore
from appruntime.storage.file import EncryptedFileStore

_logger = logging.getLogger(__name__)


class AppRuntimeEvents:
    """Run install/update callbacks for the current launch.

    Usage::

        events = create_runtime_events(
            config,
            app_info=StaticAppInfoProvider("1.4.0", installed_at),
            on_after_update=[show_changelog],
        )
        await events.initialize_runtime_info()

    Callbacks are looked up when the classification is published, so
    :meth:`set_callbacks` may be used any time before that.  They receive
    the version passed to the classifier by :meth:`initialize_runtime_info`;
    if the classifier is driven directly, the provider's version is used.
    """

    def __init__(
        self,
        classifier: LaunchClassifier,
        app_info: AppInfoProvider,
        *,
        on_after_install: Sequence[RuntimeEventCallback] = (),
        on_after_update: Sequence[RuntimeEventCallback] = (),
    ) -> None:
        self._classifier = classifier
        self._app_info = app_info
        self._on_after_install = tuple(on_after_install)
        self._on_after_update = tuple(on_after_update)
        self._app_version: str | None = None
        self._dispatcher = CallbackDispatcher()
        self._unsubscribe: Callable[[], None] | None = classifier.store.subscribe(self._on_state_change)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> AppRuntimeEvents:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Stop reacting to state changes."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def state(self) -> RuntimeClassification:
        return self._classifier.store.state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Observe the classification; see :meth:`RuntimeInfoStore.subscribe`."""
        return self._classifier.store.subscribe(listener)

    def set_callbacks(
        self,
        *,
        on_after_install: Sequence[RuntimeEventCallback] | None = None,
        on_after_update: Sequence[RuntimeEventCallback] | None = None,
    ) -> None:
        """Replace the registered callbacks.  ``None`` keeps the current ones."""
        if on_after_install is not None:
            self._on_after_install = tuple(on_after_install)
        if on_after_update is not None:
            self._on_after_update = tuple(on_after_update)

    async def initialize_runtime_info(self) -> RuntimeClassification:
        """Classify this launch using the current app metadata.

        Call once at startup.  A :class:`~appruntime.exceptions.LedgerWriteError`
        may propagate; callbacks have already run by then.
        """
        info = self._app_info.get_app_info()
        self._app_version = info.app_version
        return await self._classifier.initialize_runtime_info(info.app_version, info.installation_time)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _on_state_change(self, classification: RuntimeClassification) -> None:
        # Classified directly through the classifier: fall back to the provider.
        app_version = self._app_version or self._app_info.get_app_info().app_version
        payload = RuntimeEventPayload(
            app_version=app_version,
            previous_app_version=classification.previous_app_version,
        )
        self._dispatcher.dispatch(
            classification,
            on_after_install=self._on_after_install,
            on_after_update=self._on_after_update,
            payload=payload,
        )


def create_runtime_events(
    config: RuntimeEventsConfig | None = None,
    *,
    app_info: AppInfoProvider,
    secure_store: SecureStore | None = None,
    on_after_install: Sequence[RuntimeEventCallback] = (),
    on_after_update: Sequence[RuntimeEventCallback] = (),
    clock: Callable[[], datetime] | None = None,
) -> AppRuntimeEvents:
    """Wire a ledger, state store, classifier and :class:`AppRuntimeEvents`.

    Without *secure_store* an :class:`EncryptedFileStore` is built from
    ``config.store_path`` and ``config.store_key_hex``.

    Raises
    ------
    RuntimeEventsConfigError
        If no store is passed and ``config.store_path`` is unset.
    """
    config = config or RuntimeEventsConfig()
    if secure_store is None:
        if not config.store_path:
            raise RuntimeEventsConfigError("No secure store given and store_path is not configured")
        secure_store = EncryptedFileStore(config.store_path, config.store_key_hex)
        _logger.debug("Using encrypted ledger file %s", config.store_path)

    ledger = VersionLedger(
        secure_store,
        namespace=config.namespace,
        accessibility_policy=config.accessibility_policy,
    )
    classifier_kwargs: dict[str, Any] = {"install_window": config.install_window}
    if clock is not None:
        classifier_kwargs["clock"] = clock
    classifier = LaunchClassifier(ledger, RuntimeInfoStore(), **classifier_kwargs)
    return AppRuntimeEvents(
        classifier,
        app_info,
        on_after_install=on_after_install,
        on_after_update=on_after_update,
    )
