"""Validation of names and relative paths used under the app root."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from pathlib import Path

from ..errors import InvalidPathError, PathConfinementError

if sys.platform.startswith("win"):
    INVALID_NAME_CHARS = frozenset('"<>|:*?\\/') | frozenset(chr(code) for code in range(32))
else:
    INVALID_NAME_CHARS = frozenset("\0/\\")

_SEPARATORS = re.compile(r"[/\\]")


def has_invalid_chars(name: str) -> bool:
    return any(char in INVALID_NAME_CHARS for char in name)


def validate_file_name(file_name: str | None) -> str:
    """Return ``file_name`` if it names a single directory entry."""
    if not file_name:
        raise InvalidPathError("File name must not be empty.")
    if has_invalid_chars(file_name) or _SEPARATORS.search(file_name):
        raise InvalidPathError(f"File name contains invalid characters: {file_name!r}")
    if file_name in {".", ".."}:
        raise InvalidPathError(f"File name is reserved: {file_name!r}")
    return file_name


@dataclass(frozen=True)
class SubfolderPath:
    """A relative path below the app root, split into validated segments."""

    segments: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str | None) -> "SubfolderPath":
        """Split ``raw`` on either separator and validate every segment.

        Empty segments (leading, trailing or doubled separators) and ``.``
        are dropped. ``None``, segments holding invalid characters and
        ``..`` raise :class:`InvalidPathError`.
        """
        if raw is None:
            raise InvalidPathError("Subfolder path must not be None.")

        segments: list[str] = []
        for segment in _SEPARATORS.split(raw):
            if not segment or segment == ".":
                continue
            if segment == "..":
                raise InvalidPathError(f"Subfolder path may not contain '..': {raw!r}")
            if has_invalid_chars(segment):
                raise InvalidPathError(f"Invalid subfolder path: {raw!r}")
            segments.append(segment)
        return cls(tuple(segments))

    @property
    def is_root(self) -> bool:
        return not self.segments

    def under(self, root: Path) -> Path:
        """Join onto ``root`` and verify the resolved result stays inside it."""
        return confine(root, root.joinpath(*self.segments))

    def __str__(self) -> str:
        return "/".join(self.segments)


def confine(root: Path, candidate: Path) -> Path:
    """Return ``candidate`` unless its resolved form lies outside ``root``."""
    resolved_root = root.resolve()
    resolved = candidate.resolve()
    if resolved != resolved_root and resolved_root not in resolved.parents:
        raise PathConfinementError(f"Path escapes the app root: {candidate}")
    return candidate
