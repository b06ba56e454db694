from __future__ import annotations

from datetime import timedelta

import pytest

from appruntime.config import RuntimeEventsConfig
from appruntime.exceptions import RuntimeEventsConfigError
from appruntime.storage import AccessibilityPolicy


def test_defaults() -> None:
    config = RuntimeEventsConfig()

    assert config.namespace == "codexporer.io-expo_app_runtime_events"
    assert config.install_window == timedelta(days=2)
    assert config.accessibility_policy is AccessibilityPolicy.ALWAYS
    assert config.store_path is None


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPRUNTIME_NAMESPACE", "acme")
    monkeypatch.setenv("APPRUNTIME_INSTALL_WINDOW_SECONDS", "3600")
    monkeypatch.setenv("APPRUNTIME_ACCESSIBILITY_POLICY", "AFTER_FIRST_UNLOCK")
    monkeypatch.setenv("APPRUNTIME_STORE_PATH", "/tmp/ledger.json")
    monkeypatch.setenv("APPRUNTIME_STORE_KEY", "00" * 32)

    config = RuntimeEventsConfig.from_env()

    assert config.namespace == "acme"
    assert config.install_window == timedelta(hours=1)
    assert config.accessibility_policy is AccessibilityPolicy.AFTER_FIRST_UNLOCK
    assert config.store_path == "/tmp/ledger.json"
    assert config.store_key_hex == "00" * 32
    assert "store_key_hex" not in repr(config)


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPRUNTIME_NAMESPACE", "acme")
    monkeypatch.setenv("APPRUNTIME_INSTALL_WINDOW_SECONDS", "not-a-number")
    monkeypatch.setenv("APPRUNTIME_ACCESSIBILITY_POLICY", "always")

    config = RuntimeEventsConfig.from_env(
        namespace="other",
        install_window_seconds=60,
        accessibility_policy="when_unlocked",
    )

    assert config.namespace == "other"
    assert config.install_window_seconds == 60
    assert config.accessibility_policy is AccessibilityPolicy.WHEN_UNLOCKED


def test_invalid_values_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("APPRUNTIME_ACCESSIBILITY_POLICY", "sometimes")
    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig.from_env()

    monkeypatch.delenv("APPRUNTIME_ACCESSIBILITY_POLICY")
    monkeypatch.setenv("APPRUNTIME_INSTALL_WINDOW_SECONDS", "soon")
    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig.from_env()

    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig(install_window_seconds=0)
    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig(install_window_seconds=float("inf"))
    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig(install_window_seconds=float("nan"))
    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig(namespace=" ")


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_non_finite_window_from_env_raises(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("APPRUNTIME_INSTALL_WINDOW_SECONDS", value)

    with pytest.raises(RuntimeEventsConfigError):
        RuntimeEventsConfig.from_env()
