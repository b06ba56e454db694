"""Configuration for appruntime."""

from __future__ import annotations

import dataclasses
import math
import os
from datetime import timedelta
from typing import Any

from appruntime._constants import DEFAULT_NAMESPACE, INSTALL_WINDOW_SECONDS
from appruntime.exceptions import RuntimeEventsConfigError
from appruntime.storage.base import AccessibilityPolicy


def _parse_policy(value: str) -> AccessibilityPolicy:
    normalized = value.strip().lower()
    try:
        return AccessibilityPolicy(normalized)
    except ValueError:
        allowed = ", ".join(p.value for p in AccessibilityPolicy)
        raise RuntimeEventsConfigError(f"Unknown accessibility policy {value!r} (expected one of {allowed})") from None


@dataclasses.dataclass(frozen=True)
class RuntimeEventsConfig:
    """Runtime events configuration.

    Parameters
    ----------
    namespace : str
        Prefix of the ledger key (``"<namespace>-last_app_version"``).
    install_window_seconds : float
        How long after installation a launch without recorded history
        still counts as a fresh install.  Defaults to two days.
    accessibility_policy : AccessibilityPolicy
        Policy used when recording the app version.
    store_path : str or None
        Location of the encrypted ledger file used by
        :func:`~appruntime.runtime_events.create_runtime_events` when no
        store is passed explicitly.
    store_key_hex : str or None
        Hex AES key (128, 192 or 256 bit) for that file.
    """

    namespace: str = DEFAULT_NAMESPACE
    install_window_seconds: float = INSTALL_WINDOW_SECONDS
    accessibility_policy: AccessibilityPolicy = AccessibilityPolicy.ALWAYS
    store_path: str | None = None
    store_key_hex: str | None = dataclasses.field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.namespace.strip():
            raise RuntimeEventsConfigError("namespace must be non-empty")
        if not math.isfinite(self.install_window_seconds) or self.install_window_seconds <= 0:
            raise RuntimeEventsConfigError("install_window_seconds must be a positive finite number")

    @property
    def install_window(self) -> timedelta:
        return timedelta(seconds=self.install_window_seconds)

    @classmethod
    def from_env(cls, **overrides: Any) -> RuntimeEventsConfig:
        """Create configuration from environment variables.

        Reads ``APPRUNTIME_NAMESPACE``, ``APPRUNTIME_INSTALL_WINDOW_SECONDS``,
        ``APPRUNTIME_ACCESSIBILITY_POLICY``, ``APPRUNTIME_STORE_PATH`` and
        ``APPRUNTIME_STORE_KEY``.  Explicit keyword arguments override
        environment values.

        Raises
        ------
        RuntimeEventsConfigError
            If a value cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        _ENV_CONFIG_MAP = {
            "APPRUNTIME_NAMESPACE": "namespace",
            "APPRUNTIME_STORE_PATH": "store_path",
            "APPRUNTIME_STORE_KEY": "store_key_hex",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        window_env = env.get("APPRUNTIME_INSTALL_WINDOW_SECONDS")
        if window_env is not None and "install_window_seconds" not in overrides:
            try:
                config_kwargs["install_window_seconds"] = float(window_env)
            except ValueError:
                raise RuntimeEventsConfigError(
                    f"APPRUNTIME_INSTALL_WINDOW_SECONDS must be a number, got {window_env!r}"
                ) from None

        policy_env = env.get("APPRUNTIME_ACCESSIBILITY_POLICY")
        if policy_env is not None and "accessibility_policy" not in overrides:
            config_kwargs["accessibility_policy"] = _parse_policy(policy_env)

        policy_override = overrides.get("accessibility_policy")
        if isinstance(policy_override, str) and not isinstance(policy_override, AccessibilityPolicy):
            overrides["accessibility_policy"] = _parse_policy(policy_override)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
