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

"""Registry client protocol consumed by the rc-update core.

The registry is the persistent record of which services belong to which
runlevels. The core only ever talks to it through ``RegistryClient``; each
``add_membership``/``remove_membership`` call is expected to be atomic for its
single (runlevel, service) pair.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RegistryClient(Protocol):
    """Interface every registry backend implements."""

    def service_exists(self, name: str) -> bool:
        """Return ``True`` when ``name`` is a known service."""
        ...

    def runlevel_exists(self, name: str) -> bool:
        """Return ``True`` when ``name`` is a known runlevel."""
        ...

    def current_runlevel(self) -> str | None:
        """Return the runlevel the host is in, or ``None`` if it cannot be resolved."""
        ...

    def all_runlevels(self) -> list[str]:
        """Return every runlevel, in registry order."""
        ...

    def services_in_runlevel(self, runlevel: str | None) -> list[str]:
        """Return services in ``runlevel``, or every known service for ``None``."""
        ...

    def is_member(self, service: str, runlevel: str) -> bool:
        """Return ``True`` when ``service`` belongs to ``runlevel``."""
        ...

    def add_membership(self, runlevel: str, service: str) -> None:
        """Make ``service`` a member of ``runlevel``.

        Raises:
            RegistryError: If the change cannot be persisted.
        """
        ...

    def remove_membership(self, runlevel: str, service: str) -> None:
        """Remove ``service`` from ``runlevel``.

        Raises:
            NotAMemberError: If ``service`` was not a member of ``runlevel``.
            RegistryError: If the change cannot be persisted.
        """
        ...


__all__ = ["RegistryClient"]
