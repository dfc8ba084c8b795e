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


"""Registry fixtures: an in-memory client and an on-disk OpenRC tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest

from rcupdate._internal.exceptions import NotAMemberError, RegistryError
from rcupdate.config.models import RegistryPaths
from rcupdate.registry import FilesystemRegistry

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class InMemoryRegistry:
    """``RegistryClient`` keeping memberships in a set of (runlevel, service) pairs.

    ``failures`` maps a (runlevel, service) pair to a cause string; mutating
    that pair raises ``RegistryError`` with the cause. ``mutations`` records
    every successful add/remove call in order.
    """

    def __init__(
        self,
        services: Iterable[str] = (),
        runlevels: Iterable[str] = (),
        memberships: Iterable[tuple[str, str]] = (),
        *,
        current: str | None = None,
    ) -> None:
        self.services = list(services)
        self.runlevels = list(runlevels)
        self.memberships: set[tuple[str, str]] = set(memberships)
        self.current = current
        self.failures: dict[tuple[str, str], str] = {}
        self.mutations: list[tuple[str, str, str]] = []

    def service_exists(self, name: str) -> bool:
        return name in self.services

    def runlevel_exists(self, name: str) -> bool:
        return name in self.runlevels

    def current_runlevel(self) -> str | None:
        return self.current

    def all_runlevels(self) -> list[str]:
        return list(self.runlevels)

    def services_in_runlevel(self, runlevel: str | None) -> list[str]:
        if runlevel is None:
            return list(self.services)
        return [service for service in self.services if (runlevel, service) in self.memberships]

    def is_member(self, service: str, runlevel: str) -> bool:
        return (runlevel, service) in self.memberships

    def add_membership(self, runlevel: str, service: str) -> None:
        cause = self.failures.get((runlevel, service))
        if cause is not None:
            raise RegistryError(cause)
        self.memberships.add((runlevel, service))
        self.mutations.append(("add", runlevel, service))

    def remove_membership(self, runlevel: str, service: str) -> None:
        cause = self.failures.get((runlevel, service))
        if cause is not None:
            raise RegistryError(cause)
        if (runlevel, service) not in self.memberships:
            raise NotAMemberError(runlevel, service)
        self.memberships.remove((runlevel, service))
        self.mutations.append(("remove", runlevel, service))


@dataclass(slots=True, frozen=True)
class OpenRCTree:
    """Paths of a throwaway OpenRC layout under ``tmp_path``."""

    paths: RegistryPaths

    @property
    def registry(self) -> FilesystemRegistry:
        return FilesystemRegistry(self.paths)

    def add_service(self, name: str, *, executable: bool = True) -> Path:
        script = self.paths.init_dir / name
        _ = script.write_text("#!/sbin/openrc-run\n", encoding="utf-8")
        script.chmod(0o755 if executable else 0o644)
        return script

    def add_runlevel(self, name: str) -> Path:
        runlevel = self.paths.runlevel_dir / name
        runlevel.mkdir(parents=True, exist_ok=True)
        return runlevel

    def link(self, runlevel: str, service: str) -> Path:
        link = self.paths.runlevel_dir / runlevel / service
        link.symlink_to(self.paths.init_dir / service)
        return link

    def set_current(self, runlevel: str | None) -> None:
        if runlevel is None:
            self.paths.softlevel_path.unlink(missing_ok=True)
            return
        self.paths.softlevel_path.parent.mkdir(parents=True, exist_ok=True)
        _ = self.paths.softlevel_path.write_text(f"{runlevel}\n", encoding="utf-8")


@pytest.fixture
def memory_registry() -> InMemoryRegistry:
    """Registry with four services across three runlevels; ``default`` is current."""
    return InMemoryRegistry(
        services=["sshd", "net.lo", "cron", "local"],
        runlevels=["boot", "default", "shutdown"],
        memberships=[("boot", "net.lo"), ("default", "cron"), ("default", "local")],
        current="default",
    )


@pytest.fixture
def openrc_tree(tmp_path: Path) -> OpenRCTree:
    """On-disk OpenRC layout mirroring ``memory_registry``."""
    paths = RegistryPaths(
        init_dir=tmp_path / "etc" / "init.d",
        runlevel_dir=tmp_path / "etc" / "runlevels",
        softlevel_path=tmp_path / "run" / "openrc" / "softlevel",
    )
    paths.init_dir.mkdir(parents=True)
    tree = OpenRCTree(paths)
    for service in ("sshd", "net.lo", "cron", "local"):
        _ = tree.add_service(service)
    for runlevel in ("boot", "default", "shutdown"):
        _ = tree.add_runlevel(runlevel)
    _ = tree.link("boot", "net.lo")
    _ = tree.link("default", "cron")
    _ = tree.link("default", "local")
    tree.set_current("default")
    return tree


__all__ = ["InMemoryRegistry", "OpenRCTree", "memory_registry", "openrc_tree"]
