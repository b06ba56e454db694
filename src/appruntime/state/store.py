"""Observable holder for the launch classification."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable

from appruntime.state.classification import RuntimeClassification

_logger = logging.getLogger(__name__)

Listener = Callable[[RuntimeClassification], None]


class RuntimeInfoStore:
    """Holds the classification of the current launch.

    The state moves once, from unclassified to classified, and never
    changes afterwards.  Listeners are called synchronously, in
    subscription order, when that happens.
    """

    def __init__(self) -> None:
        self._state = RuntimeClassification.unclassified()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> RuntimeClassification:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener*; the returned callable removes it again."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, classification: RuntimeClassification) -> bool:
        """Store *classification* and notify listeners.

        Returns ``False`` (and leaves the state alone) when the store is
        already classified.
        """
        if not classification.is_classified:
            raise ValueError("cannot publish an unclassified state")
        if self._state.is_classified:
            _logger.debug("Launch already classified; ignoring %r", classification)
            return False

        self._state = classification
        for listener in list(self._listeners):
            try:
                listener(classification)
            except Exception:
                _logger.warning("Runtime info listener failed", exc_info=True)
        return True
