"""Install/update decision table.

Pure function of the previous version, the current version and the time
since installation; no storage access happens here.
"""

from __future__ import annotations

from datetime import timedelta

from appruntime._constants import INSTALL_WINDOW
from appruntime.state.classification import RuntimeClassification


def classify_launch(
    *,
    previous_app_version: str | None,
    app_version: str,
    installed_for: timedelta,
    install_window: timedelta = INSTALL_WINDOW,
) -> RuntimeClassification:
    """Classify a launch.

    Policy:
    - No recorded version and installed less than *install_window* ago:
      first run after install.
    - No recorded version but installed earlier: first run after update.
      The previous build simply predates version tracking.  This is a
      heuristic; a user who waits longer than the window before the
      first launch is reported as an update.
    - Recorded version differs: first run after update.
    - Recorded version equals the current one: neither.
    """
    is_first_run_after_install = False
    is_first_run_after_update = False
    if previous_app_version is None:
        is_first_run_after_install = installed_for < install_window
        is_first_run_after_update = not is_first_run_after_install
    elif previous_app_version != app_version:
        is_first_run_after_update = True

    return RuntimeClassification(
        is_first_run_after_install=is_first_run_after_install,
        is_first_run_after_update=is_first_run_after_update,
        previous_app_version=previous_app_version,
    )
