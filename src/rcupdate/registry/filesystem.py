# Copyright 2025 CrownOps Engineering
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Registry client backed by the OpenRC on-disk layout.

Layout::

    <init_dir>/<service>                  executable service script
    <runlevel_dir>/<runlevel>/            one directory per runlevel
    <runlevel_dir>/<runlevel>/<service>   symlink to <init_dir>/<service>
    <softlevel_path>                      name of the current runlevel

Directory listings are returned sorted by name and skip hidden entries. Only
executable scripts in the init directory count as services.
"""

from __future__ import annotations

import errno
import logging
import os
from typing import TYPE_CHECKING

from rcupdate._internal.exceptions import NotAMemberError, RegistryError
from rcupdate._internal.logging_utils import structured_extra
from rcupdate.config.models import RegistryPaths
from rcupdate.core.model_types import LogComponent

if TYPE_CHECKING:
    from pathlib import Path

logger: logging.Logger = logging.getLogger("rcupdate.registry")


def _is_plain_name(name: str) -> bool:
    # Names map to single directory entries; reject anything that could escape.
    return bool(name) and name not in {".", ".."} and "/" not in name and "\0" not in name


def _list_dir(path: Path, *, dirs_only: bool = False) -> list[str]:
    try:
        entries = list(path.iterdir())
    except FileNotFoundError:
        return []
    names = [
        entry.name
        for entry in entries
        if not entry.name.startswith(".") and (not dirs_only or entry.is_dir())
    ]
    return sorted(names)


def _cause(exc: OSError) -> str:
    return exc.strerror or str(exc)


class FilesystemRegistry:
    """``RegistryClient`` implementation operating on OpenRC directories."""

    def __init__(self, paths: RegistryPaths | None = None) -> None:
        """Create a registry rooted at ``paths``.

        Args:
            paths: Registry locations; defaults to the stock OpenRC layout.
        """
        self.paths = paths or RegistryPaths()

    def _runlevel_path(self, runlevel: str) -> Path:
        return self.paths.runlevel_dir / runlevel

    def _member_path(self, runlevel: str, service: str) -> Path:
        return self.paths.runlevel_dir / runlevel / service

    def service_exists(self, name: str) -> bool:
        if not _is_plain_name(name):
            return False
        script = self.paths.init_dir / name
        return script.is_file() and os.access(script, os.X_OK)

    def runlevel_exists(self, name: str) -> bool:
        return _is_plain_name(name) and self._runlevel_path(name).is_dir()

    def current_runlevel(self) -> str | None:
        try:
            content = self.paths.softlevel_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            logger.debug(
                "Cannot read %s: %s",
                self.paths.softlevel_path,
                _cause(exc),
                extra=structured_extra(component=LogComponent.REGISTRY, path=self.paths.softlevel_path),
            )
            return None
        lines = content.splitlines()
        current = lines[0].strip() if lines else ""
        return current or None

    def all_runlevels(self) -> list[str]:
        return _list_dir(self.paths.runlevel_dir, dirs_only=True)

    def services_in_runlevel(self, runlevel: str | None) -> list[str]:
        if runlevel is None:
            return [name for name in _list_dir(self.paths.init_dir) if self.service_exists(name)]
        if not _is_plain_name(runlevel):
            return []
        return _list_dir(self._runlevel_path(runlevel))

    def is_member(self, service: str, runlevel: str) -> bool:
        if not (_is_plain_name(service) and _is_plain_name(runlevel)):
            return False
        return os.path.lexists(self._member_path(runlevel, service))

    def add_membership(self, runlevel: str, service: str) -> None:
        if not (_is_plain_name(service) and _is_plain_name(runlevel)):
            raise RegistryError(os.strerror(errno.EINVAL))
        target = self.paths.init_dir / service
        link = self._member_path(runlevel, service)
        try:
            os.symlink(target, link)
        except OSError as exc:
            raise RegistryError(_cause(exc)) from exc
        logger.debug(
            "Linked %s -> %s",
            link,
            target,
            extra=structured_extra(component=LogComponent.REGISTRY, service=service, runlevel=runlevel, path=link),
        )

    def remove_membership(self, runlevel: str, service: str) -> None:
        if not (_is_plain_name(service) and _is_plain_name(runlevel)):
            raise NotAMemberError(runlevel, service)
        link = self._member_path(runlevel, service)
        try:
            os.unlink(link)
        except FileNotFoundError as exc:
            raise NotAMemberError(runlevel, service) from exc
        except OSError as exc:
            raise RegistryError(_cause(exc)) from exc
        logger.debug(
            "Removed %s",
            link,
            extra=structured_extra(component=LogComponent.REGISTRY, service=service, runlevel=runlevel, path=link),
        )


__all__ = ["FilesystemRegistry"]
