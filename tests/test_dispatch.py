from __future__ import annotations

from appruntime.dispatch import CallbackDispatcher, RuntimeEventPayload
from appruntime.state.classification import RuntimeClassification

INSTALL = RuntimeClassification(is_first_run_after_install=True, is_first_run_after_update=False)
UPDATE = RuntimeClassification(
    is_first_run_after_install=False,
    is_first_run_after_update=True,
    previous_app_version="1.0.0",
)
PAYLOAD = RuntimeEventPayload(app_version="1.1.0", previous_app_version="1.0.0")


def test_install_callbacks_fire_once_in_order() -> None:
    calls: list[str] = []
    dispatcher = CallbackDispatcher()
    install = [lambda p: calls.append("a"), lambda p: calls.append("b")]
    update = [lambda p: calls.append("update")]

    assert dispatcher.dispatch(
        RuntimeClassification.unclassified(), on_after_install=install, on_after_update=update, payload=PAYLOAD
    ) == 0
    assert dispatcher.dispatch(INSTALL, on_after_install=install, on_after_update=update, payload=PAYLOAD) == 2
    assert dispatcher.dispatch(INSTALL, on_after_install=install, on_after_update=update, payload=PAYLOAD) == 0

    assert calls == ["a", "b"]


def test_update_callbacks_receive_payload() -> None:
    received: list[RuntimeEventPayload] = []
    dispatcher = CallbackDispatcher()

    dispatcher.dispatch(UPDATE, on_after_install=[], on_after_update=[received.append], payload=PAYLOAD)
    dispatcher.dispatch(UPDATE, on_after_install=[], on_after_update=[received.append], payload=PAYLOAD)

    assert received == [PAYLOAD]


def test_neither_fires_nothing() -> None:
    calls: list[str] = []
    neither = RuntimeClassification(is_first_run_after_install=False, is_first_run_after_update=False)

    count = CallbackDispatcher().dispatch(
        neither,
        on_after_install=[lambda p: calls.append("install")],
        on_after_update=[lambda p: calls.append("update")],
        payload=PAYLOAD,
    )

    assert count == 0
    assert calls == []


def test_failing_callback_does_not_stop_the_rest() -> None:
    calls: list[str] = []

    def _boom(_: RuntimeEventPayload) -> None:
        raise RuntimeError("boom")

    count = CallbackDispatcher().dispatch(
        INSTALL,
        on_after_install=[_boom, lambda p: calls.append("after")],
        on_after_update=[],
        payload=PAYLOAD,
    )

    assert count == 2
    assert calls == ["after"]


def test_reset_allows_firing_again() -> None:
    calls: list[str] = []
    dispatcher = CallbackDispatcher()
    install = [lambda p: calls.append("install")]

    dispatcher.dispatch(INSTALL, on_after_install=install, on_after_update=[], payload=PAYLOAD)
    dispatcher.reset()
    dispatcher.dispatch(INSTALL, on_after_install=install, on_after_update=[], payload=PAYLOAD)

    assert calls == ["install", "install"]
