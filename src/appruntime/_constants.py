"""Internal constants shared across the library."""

from datetime import timedelta

DEFAULT_NAMESPACE = "codexporer.io-expo_app_runtime_events"
LAST_APP_VERSION_SUFFIX = "last_app_version"

# An app with no recorded version that was installed longer ago than this
# is assumed to be an update from a build that predates version tracking.
INSTALL_WINDOW = timedelta(days=2)
INSTALL_WINDOW_SECONDS: float = INSTALL_WINDOW.total_seconds()


def ledger_key(namespace: str) -> str:
    """Build the storage key holding the last seen app version."""
    return f"{namespace}-{LAST_APP_VERSION_SUFFIX}"
