"""Application identity model based on Pydantic."""

from __future__ import annotations

from pathlib import Path

from platformdirs import user_data_path
from pydantic import BaseModel, ConfigDict, Field, field_validator


def default_root_dir() -> Path:
    """Return the per-user, machine-local application data directory."""
    return user_data_path(roaming=False)


class AppIdentity(BaseModel):
    """Who owns an app data tree and where that tree is rooted."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(description="Application name; becomes the innermost folder.")
    company_name: str = Field(description="Vendor name; groups the apps of one company.")
    root_dir: Path = Field(
        default_factory=default_root_dir,
        description="Existing directory holding the company folders.",
    )

    @field_validator("root_dir", mode="before")
    @classmethod
    def _default_root_dir(cls, value: Path | str | None) -> Path:
        # An empty root means "use the platform location"
        if value is None or value == "":
            return default_root_dir()
        return Path(value)

    @property
    def company_root(self) -> Path:
        return self.root_dir.absolute() / self.company_name

    @property
    def app_root(self) -> Path:
        return self.company_root / self.app_name
