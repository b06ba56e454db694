"""appruntime - Detect first launch after install or update and run callbacks once."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("appruntime")
except PackageNotFoundError:
    __version__ = "0+local"
from appruntime.app_info import AppInfo, AppInfoProvider, StaticAppInfoProvider
from appruntime.classifier import LaunchClassifier
from appruntime.config import RuntimeEventsConfig
from appruntime.dispatch import CallbackDispatcher, RuntimeEventCallback, RuntimeEventPayload
from appruntime.exceptions import (
    AppRuntimeError,
    LedgerWriteError,
    RuntimeEventsConfigError,
    SecureStoreError,
    SecureStoreUnavailableError,
)
from appruntime.ledger import VersionLedger
from appruntime.runtime_events import AppRuntimeEvents, create_runtime_events
from appruntime.state import RuntimeClassification, RuntimeInfoStore, classify_launch
from appruntime.storage import AccessibilityPolicy, EncryptedFileStore, MemorySecureStore, SecureStore

__all__ = [
    "__version__",
    "AccessibilityPolicy",
    "AppInfo",
    "AppInfoProvider",
    "AppRuntimeError",
    "AppRuntimeEvents",
    "CallbackDispatcher",
    "EncryptedFileStore",
    "LaunchClassifier",
    "LedgerWriteError",
    "MemorySecureStore",
    "RuntimeClassification",
    "RuntimeEventCallback",
    "RuntimeEventPayload",
    "RuntimeEventsConfig",
    "RuntimeEventsConfigError",
    "RuntimeInfoStore",
    "SecureStore",
    "SecureStoreError",
    "SecureStoreUnavailableError",
    "StaticAppInfoProvider",
    "VersionLedger",
    "classify_launch",
    "create_runtime_events",
]
