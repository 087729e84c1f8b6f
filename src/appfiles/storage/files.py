"""Text and binary file storage confined to an application's data folder."""

from __future__ import annotations

import fnmatch
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Generic, Optional, TypeVar

from ..errors import InvalidPathError
from ..identity.resolver import resolve_app_root
from .paths import SubfolderPath, confine, validate_file_name

T = TypeVar("T")


def _describe(subfolder_path: str | None, file_name: str = "") -> str:
    return "/".join(str(part) for part in (subfolder_path, file_name) if part != "")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a store operation: the value, or the default plus a reason."""

    ok: bool
    value: T
    error: Optional[Exception] = None

    @property
    def reason(self) -> str:
        return str(self.error) if self.error is not None else ""


class ScopedStore:
    """Save, load and list files under ``root_dir/company_name/app_name``.

    Construction validates the identity and creates the folders, raising
    on failure. Afterwards no operation raises: invalid paths and I/O
    errors are logged and a neutral value is returned instead. The
    ``try_*`` variants return an :class:`OperationResult` with the reason.
    """

    def __init__(
        self,
        app_name: str,
        company_name: str,
        root_dir: Path | str = "",
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._app_root = resolve_app_root(app_name, company_name, root_dir)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def app_root(self) -> Path:
        return self._app_root

    @property
    def app_root_path(self) -> str:
        return str(self._app_root)

    def _folder(self, subfolder_path: str | None) -> Path:
        return SubfolderPath.parse(subfolder_path).under(self._app_root)

    def _file(self, file_name: str, subfolder_path: str | None) -> Path:
        folder = self._folder(subfolder_path)
        return confine(self._app_root, folder / validate_file_name(file_name))

    def _run(self, operation: str, target: str, action: Callable[[], T], default: T) -> OperationResult[T]:
        try:
            value = action()
        except InvalidPathError as exc:
            self._logger.error(
                "%s rejected %r: %s", operation, target, exc,
                extra={"operation": operation, "path": target},
            )
            return OperationResult(ok=False, value=default, error=exc)
        except (OSError, ValueError, TypeError) as exc:
            self._logger.error(
                "%s failed for %r: %s", operation, target, exc,
                exc_info=True,
                extra={"operation": operation, "path": target},
            )
            return OperationResult(ok=False, value=default, error=exc)
        return OperationResult(ok=True, value=value)

    def _save(self, file_name: str, subfolder_path: str | None, encode: Callable[[], bytes]) -> bool:
        # Nothing touches the disk until every argument has been checked
        folder = self._folder(subfolder_path)
        target = confine(self._app_root, folder / validate_file_name(file_name))
        data = encode()
        folder.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        self._logger.debug("Saved %s", target)
        return True

    def try_save_text(self, file_name: str, content: str, subfolder_path: str | None = "") -> OperationResult[bool]:
        def encode() -> bytes:
            if not isinstance(content, str):
                raise TypeError(f"Text content must be str, not {type(content).__name__}")
            return content.encode("utf-8")

        return self._run(
            "save_text",
            _describe(subfolder_path, file_name),
            lambda: self._save(file_name, subfolder_path, encode),
            False,
        )

    def try_load_text(self, file_name: str, subfolder_path: str | None = "") -> OperationResult[str]:
        return self._run(
            "load_text",
            _describe(subfolder_path, file_name),
            lambda: self._file(file_name, subfolder_path).read_text(encoding="utf-8"),
            "",
        )

    def try_save_binary(
        self, file_name: str, content: bytes, subfolder_path: str | None = ""
    ) -> OperationResult[bool]:
        def encode() -> bytes:
            if not isinstance(content, (bytes, bytearray, memoryview)):
                raise TypeError(f"Binary content must be bytes-like, not {type(content).__name__}")
            return bytes(content)

        return self._run(
            "save_binary",
            _describe(subfolder_path, file_name),
            lambda: self._save(file_name, subfolder_path, encode),
            False,
        )

    def try_load_binary(self, file_name: str, subfolder_path: str | None = "") -> OperationResult[bytes]:
        return self._run(
            "load_binary",
            _describe(subfolder_path, file_name),
            lambda: self._file(file_name, subfolder_path).read_bytes(),
            b"",
        )

    def try_list_directory(self, subfolder_path: str | None = "", pattern: str = "*") -> OperationResult[list[str]]:
        def list_files() -> list[str]:
            folder = self._folder(subfolder_path)
            return [
                str(entry)
                for entry in folder.iterdir()
                if entry.is_file() and fnmatch.fnmatch(entry.name, pattern)
            ]

        return self._run("list_directory", _describe(subfolder_path), list_files, [])

    def save_text(self, file_name: str, content: str, subfolder_path: str | None = "") -> bool:
        """Write ``content`` as UTF-8, creating missing folders. False on failure."""
        return self.try_save_text(file_name, content, subfolder_path).value

    def load_text(self, file_name: str, subfolder_path: str | None = "") -> str:
        """Return the file's text, or an empty string if it cannot be read."""
        return self.try_load_text(file_name, subfolder_path).value

    def save_binary(self, file_name: str, content: bytes, subfolder_path: str | None = "") -> bool:
        return self.try_save_binary(file_name, content, subfolder_path).value

    def load_binary(self, file_name: str, subfolder_path: str | None = "") -> bytes:
        return self.try_load_binary(file_name, subfolder_path).value

    def list_directory(self, subfolder_path: str | None = "", pattern: str = "*") -> list[str]:
        """Absolute paths of files directly in the folder whose names match ``pattern``."""
        return self.try_list_directory(subfolder_path, pattern).value
