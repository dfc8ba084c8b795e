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

"""Argument validation: resolve the target service and runlevels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rcupdate._internal.exceptions import MissingServiceError, NoRunlevelError, UnknownRunlevelError
from rcupdate.core.model_types import Command

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rcupdate.registry import RegistryClient


@dataclass(slots=True, frozen=True)
class Targets:
    """Validated targets for one invocation.

    Attributes:
        command: Resolved command.
        service: Service to mutate; always ``None`` for ``show``.
        runlevels: Distinct runlevel names in the order they will be processed.
    """

    command: Command
    service: str | None
    runlevels: tuple[str, ...]


def dedupe_preserve(items: Sequence[str]) -> list[str]:
    """Return ``items`` without duplicates, keeping first occurrences in order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def validate_runlevels(tokens: Sequence[str], registry: RegistryClient) -> list[str]:
    """Check every runlevel token against the registry.

    Args:
        tokens: Candidate runlevel names.
        registry: Registry used for the existence checks.

    Returns:
        The distinct runlevel names, in input order.

    Raises:
        UnknownRunlevelError: On the first name the registry does not know.
    """
    for token in tokens:
        if not registry.runlevel_exists(token):
            raise UnknownRunlevelError(token)
    return dedupe_preserve(tokens)


def resolve_targets(
    command: Command,
    positionals: Sequence[str],
    registry: RegistryClient,
) -> Targets:
    """Resolve the service and runlevel set for ``command``.

    ``show`` takes no service: every positional is a runlevel filter and an
    empty filter means every runlevel. ``add`` and ``delete`` take the service
    first and default to the current runlevel.

    Args:
        command: Command produced by the resolver.
        positionals: Positionals left after command resolution.
        registry: Registry used for existence checks and defaults.

    Returns:
        Targets: Immutable targets for the invocation.

    Raises:
        MissingServiceError: If ``add``/``delete`` has no service argument.
        UnknownRunlevelError: If any runlevel token does not exist.
        NoRunlevelError: If no runlevel was given and none is current.
    """
    if command is Command.SHOW:
        runlevels = validate_runlevels(positionals, registry)
        if not runlevels:
            runlevels = registry.all_runlevels()
        return Targets(command=command, service=None, runlevels=tuple(runlevels))

    if not positionals or not positionals[0]:
        raise MissingServiceError
    service, *tokens = positionals
    runlevels = validate_runlevels(tokens, registry)
    if not runlevels:
        current = registry.current_runlevel()
        if current is None:
            raise NoRunlevelError
        runlevels = [current]
    return Targets(command=command, service=service, runlevels=tuple(runlevels))


__all__ = ["Targets", "dedupe_preserve", "resolve_targets", "validate_runlevels"]
