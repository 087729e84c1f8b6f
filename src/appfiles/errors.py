"""Exception hierarchy for application file storage."""

from __future__ import annotations

from pathlib import Path


class AppFilesError(Exception):
    """Base class for all storage errors."""


class InvalidIdentityError(AppFilesError, ValueError):
    """An app or company name cannot be used as a directory name."""

    def __init__(self, parameter: str, value: str) -> None:
        super().__init__(f"{parameter} contains invalid characters: {value!r}")
        self.parameter = parameter
        self.value = value


class InvalidRootError(AppFilesError, ValueError):
    """The root directory does not exist."""

    def __init__(self, root_dir: Path) -> None:
        super().__init__(f"root_dir is not an existing directory: {root_dir}")
        self.root_dir = root_dir


class ProvisioningError(AppFilesError):
    """A directory of the app tree could not be created."""

    def __init__(self, step: str, path: Path) -> None:
        super().__init__(f"Unable to create {step} folder: {path}")
        self.step = step
        self.path = path


class InvalidPathError(AppFilesError, ValueError):
    """A subfolder path or file name failed validation."""


class PathConfinementError(InvalidPathError):
    """A resolved path lies outside the app root."""
