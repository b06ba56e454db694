"""Classification of the current launch."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator


class RuntimeClassification(BaseModel):
    """Result of classifying one launch.

    Both flags are ``None`` until the launch has been classified, which
    lets observers tell "not yet known" apart from "neither".
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    is_first_run_after_install: bool | None = None
    is_first_run_after_update: bool | None = None
    previous_app_version: str | None = None

    @model_validator(mode="after")
    def _flags_are_exclusive(self) -> RuntimeClassification:
        if self.is_first_run_after_install and self.is_first_run_after_update:
            raise ValueError("a launch cannot be both first-after-install and first-after-update")
        return self

    @classmethod
    def unclassified(cls) -> RuntimeClassification:
        return cls()

    @property
    def is_classified(self) -> bool:
        return self.is_first_run_after_install is not None and self.is_first_run_after_update is not None
