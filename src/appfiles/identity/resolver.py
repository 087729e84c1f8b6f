"""Validation and provisioning of the ``root/company/app`` directory tree."""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import InvalidIdentityError, InvalidRootError, ProvisioningError
from ..storage.paths import has_invalid_chars
from .models import AppIdentity

logger = logging.getLogger(__name__)


def _check_name(parameter: str, value: str) -> None:
    if not value or value in {".", ".."} or has_invalid_chars(value):
        raise InvalidIdentityError(parameter, value)


def _ensure_directory(step: str, path: Path) -> None:
    if path.is_dir():
        return
    try:
        path.mkdir()
    except FileExistsError:
        # Created concurrently, or a plain file is in the way
        if not path.is_dir():
            raise ProvisioningError(step, path) from None
    except OSError as exc:
        raise ProvisioningError(step, path) from exc
    else:
        logger.info("Created %s folder %s", step, path)


class IdentityResolver:
    """Turn an (app, company, root) triple into an existing app root folder."""

    def __init__(self, app_name: str, company_name: str, root_dir: Path | str = "") -> None:
        _check_name("app_name", app_name)
        _check_name("company_name", company_name)
        self.identity = AppIdentity(app_name=app_name, company_name=company_name, root_dir=root_dir)
        if not self.identity.root_dir.is_dir():
            raise InvalidRootError(self.identity.root_dir)

    def provision(self) -> Path:
        """Create the company and app folders if absent and return the app root.

        Raises :class:`ProvisioningError` (chained to the ``OSError``) when a
        folder cannot be created. Safe to call repeatedly.
        """
        _ensure_directory("company root", self.identity.company_root)
        _ensure_directory("app root", self.identity.app_root)
        return self.identity.app_root


def resolve_app_root(app_name: str, company_name: str, root_dir: Path | str = "") -> Path:
    return IdentityResolver(app_name, company_name, root_dir).provision()
