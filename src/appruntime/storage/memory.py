"""In-process secure store."""

from __future__ import annotations

from dataclasses import dataclass

from appruntime.storage.base import AccessibilityPolicy


@dataclass(frozen=True)
class StoredItem:
    value: str
    accessibility_policy: AccessibilityPolicy


class MemorySecureStore:
    """Dict-backed :class:`~appruntime.storage.base.SecureStore`.

    Nothing survives the process, so this is mostly useful for tests and
    for hosts that persist state elsewhere.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, StoredItem] = {}
        for key, value in (initial or {}).items():
            self._items[key] = StoredItem(value, AccessibilityPolicy.WHEN_UNLOCKED)

    async def get_item_async(self, key: str) -> str | None:
        item = self._items.get(key)
        return item.value if item is not None else None

    async def set_item_async(
        self,
        key: str,
        value: str,
        *,
        accessibility_policy: AccessibilityPolicy = AccessibilityPolicy.WHEN_UNLOCKED,
    ) -> None:
        self._items[key] = StoredItem(value, accessibility_policy)

    def policy_for(self, key: str) -> AccessibilityPolicy | None:
        """Return the policy the value under *key* was written with."""
        item = self._items.get(key)
        return item.accessibility_policy if item is not None else None

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
