"""Secure store protocol and access-control policies."""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol


class AccessibilityPolicy(StrEnum):
    """When a stored value may be read back.

    Names follow the iOS keychain accessibility classes.  Backends that
    have no such concept record the policy alongside the value and apply
    the closest restriction they support.
    """

    AFTER_FIRST_UNLOCK = "after_first_unlock"
    AFTER_FIRST_UNLOCK_THIS_DEVICE_ONLY = "after_first_unlock_this_device_only"
    ALWAYS = "always"
    ALWAYS_THIS_DEVICE_ONLY = "always_this_device_only"
    WHEN_PASSCODE_SET_THIS_DEVICE_ONLY = "when_passcode_set_this_device_only"
    WHEN_UNLOCKED = "when_unlocked"
    WHEN_UNLOCKED_THIS_DEVICE_ONLY = "when_unlocked_this_device_only"

    @property
    def device_only(self) -> bool:
        """Whether the value must not migrate to another device."""
        return self.value.endswith("_this_device_only")


class SecureStore(Protocol):
    """Async key-value store holding small secret strings."""

    async def get_item_async(self, key: str) -> str | None: ...

    async def set_item_async(
        self,
        key: str,
        value: str,
        *,
        accessibility_policy: AccessibilityPolicy = AccessibilityPolicy.WHEN_UNLOCKED,
    ) -> None: ...
