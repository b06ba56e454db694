"""Fire install/update callbacks once per detected transition."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from pydantic import BaseModel, ConfigDict

from appruntime.state.classification import RuntimeClassification

_logger = logging.getLogger(__name__)


class RuntimeEventPayload(BaseModel):
    """Argument passed to every install/update callback."""

    model_config = ConfigDict(frozen=True)

    app_version: str
    previous_app_version: str | None = None


RuntimeEventCallback = Callable[[RuntimeEventPayload], None]


class CallbackDispatcher:
    """Runs callbacks on the rising edge of each classification flag.

    A flag that was already ``True`` on the previous observation does not
    fire again, so redundant notifications are harmless.
    """

    def __init__(self) -> None:
        self._install_seen = False
        self._update_seen = False

    def dispatch(
        self,
        classification: RuntimeClassification,
        *,
        on_after_install: Sequence[RuntimeEventCallback],
        on_after_update: Sequence[RuntimeEventCallback],
        payload: RuntimeEventPayload,
    ) -> int:
        """Invoke the callbacks owed for *classification*.

        Returns the number of callbacks invoked.
        """
        invoked = 0

        install = classification.is_first_run_after_install is True
        if install and not self._install_seen:
            invoked += self._run("on_after_install", on_after_install, payload)
        self._install_seen = install

        update = classification.is_first_run_after_update is True
        if update and not self._update_seen:
            invoked += self._run("on_after_update", on_after_update, payload)
        self._update_seen = update

        return invoked

    def reset(self) -> None:
        self._install_seen = False
        self._update_seen = False

    @staticmethod
    def _run(name: str, callbacks: Sequence[RuntimeEventCallback], payload: RuntimeEventPayload) -> int:
        count = 0
        for callback in callbacks:
            count += 1
            try:
                callback(payload)
            except Exception:
                _logger.warning("%s callback %r failed", name, callback, exc_info=True)
        if count:
            _logger.debug("Ran %d %s callback(s) for version=%s", count, name, payload.app_version)
        return count
