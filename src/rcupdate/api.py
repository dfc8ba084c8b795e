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

"""Programmatic interface for rc-update.

``run_update`` runs a whole invocation (resolve, validate, then mutate or
report) against any ``RegistryClient``. ``add_service``, ``delete_service``
and ``show_runlevels`` skip command resolution for callers that already know
what they want.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rcupdate.core.model_types import DEFAULT_APPLET, Command
from rcupdate.services.mutation import MutationEngine, MutationOutcome
from rcupdate.services.report import build_report, render_report
from rcupdate.services.resolver import resolve_command
from rcupdate.services.validation import Targets, resolve_targets

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rcupdate.registry import RegistryClient


@dataclass(slots=True, frozen=True)
class UpdateResult:
    """Result of a full rc-update invocation.

    Attributes:
        targets: Validated command, service and runlevels.
        exit_code: Process exit status for the invocation.
        outcome: Mutation outcome for ``add``/``delete``; ``None`` for ``show``.
        report: Rendered report lines for ``show``; empty otherwise.
    """

    targets: Targets
    exit_code: int
    outcome: MutationOutcome | None = None
    report: tuple[str, ...] = ()

    @property
    def command(self) -> Command:
        return self.targets.command


def run_update(
    flags: Iterable[Command] | None,
    positionals: Sequence[str],
    registry: RegistryClient,
    *,
    verbose: bool = False,
    applet: str = DEFAULT_APPLET,
) -> UpdateResult:
    """Run one invocation from raw flags and positionals.

    Args:
        flags: Commands selected through mode flags.
        positionals: Positional tokens in command-line order.
        registry: Registry client to validate against and mutate.
        verbose: Include services without memberships in ``show`` output.
        applet: Program name used in messages.

    Returns:
        UpdateResult: Targets, exit status and the command's output.

    Raises:
        RcUpdateUsageError: For any fatal resolution or validation error; no
            membership has been touched when this is raised.
    """
    command, remaining = resolve_command(flags, positionals)
    targets = resolve_targets(command, remaining, registry)
    if targets.command is Command.SHOW:
        rows = build_report(registry, targets.runlevels, verbose=verbose)
        return UpdateResult(targets=targets, exit_code=0, report=tuple(render_report(rows)))
    # resolve_targets guarantees a service for add/delete
    service = targets.service or ""
    outcome = MutationEngine(registry, applet=applet).apply(targets.command, service, targets.runlevels)
    return UpdateResult(targets=targets, exit_code=outcome.exit_code, outcome=outcome)


def _mutate(
    command: Command,
    registry: RegistryClient,
    service: str,
    runlevels: Sequence[str],
    applet: str,
) -> MutationOutcome:
    targets = resolve_targets(command, [service, *runlevels], registry)
    return MutationEngine(registry, applet=applet).apply(command, service, targets.runlevels)


def add_service(
    registry: RegistryClient,
    service: str,
    runlevels: Sequence[str] = (),
    *,
    applet: str = DEFAULT_APPLET,
) -> MutationOutcome:
    """Add ``service`` to ``runlevels`` (the current runlevel when empty)."""
    return _mutate(Command.ADD, registry, service, runlevels, applet)


def delete_service(
    registry: RegistryClient,
    service: str,
    runlevels: Sequence[str] = (),
    *,
    applet: str = DEFAULT_APPLET,
) -> MutationOutcome:
    """Remove ``service`` from ``runlevels`` (the current runlevel when empty)."""
    return _mutate(Command.DELETE, registry, service, runlevels, applet)


def show_runlevels(
    registry: RegistryClient,
    runlevels: Sequence[str] = (),
    *,
    verbose: bool = False,
) -> list[str]:
    """Render the membership report for ``runlevels`` (every runlevel when empty)."""
    targets = resolve_targets(Command.SHOW, runlevels, registry)
    return render_report(build_report(registry, targets.runlevels, verbose=verbose))


__all__ = [
    "UpdateResult",
    "add_service",
    "delete_service",
    "run_update",
    "show_runlevels",
]
