"""Application metadata supplied by the host."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict, field_validator


class AppInfo(BaseModel):
    """Version and installation time of the running application.

    Parameters
    ----------
    app_version : str
        Version string of the running build.  Compared by equality only.
    installation_time : datetime
        When the app was installed.  Naive values are taken as UTC.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", str_strip_whitespace=True)

    app_version: str
    installation_time: datetime

    @field_validator("app_version")
    @classmethod
    def _require_version(cls, value: str) -> str:
        if not value:
            raise ValueError("app_version must be non-empty")
        return value

    @field_validator("installation_time")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class AppInfoProvider(Protocol):
    """Source of :class:`AppInfo`, read synchronously at startup."""

    def get_app_info(self) -> AppInfo: ...


class StaticAppInfoProvider:
    """Provider returning a fixed :class:`AppInfo`."""

    def __init__(self, app_version: str, installation_time: datetime) -> None:
        self._info = AppInfo(app_version=app_version, installation_time=installation_time)

    def get_app_info(self) -> AppInfo:
        return self._info
