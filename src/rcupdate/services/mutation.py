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

"""Mutation engine applying add/delete across a batch of runlevels.

One ``RunlevelAction`` is selected per invocation and applied to every
runlevel in input order. Per-runlevel failures are reported and folded into a
single ``MutationOutcome``; they never abort the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol

from rcupdate._internal.exceptions import NotAMemberError, RcUpdateUsageError, RegistryError
from rcupdate._internal.logging_utils import structured_extra
from rcupdate.core.model_types import DEFAULT_APPLET, Command, LogComponent, MutationStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rcupdate.registry import RegistryClient

logger: logging.Logger = logging.getLogger("rcupdate.mutation")


@dataclass(slots=True, frozen=True)
class RunlevelResult:
    """Result of applying one action to one runlevel.

    Attributes:
        runlevel: Runlevel the action targeted.
        status: Contribution to the batch (updated, skipped or failed).
        message: User-facing line describing what happened.
        level: ``logging`` level the message is reported at.
    """

    runlevel: str
    status: MutationStatus
    message: str
    level: int = logging.INFO


@dataclass(slots=True, frozen=True)
class MutationOutcome:
    """Aggregate result of one mutation batch."""

    command: Command
    service: str
    results: tuple[RunlevelResult, ...]

    @property
    def updated_count(self) -> int:
        """Number of runlevels whose membership actually changed."""
        return sum(1 for result in self.results if result.status is MutationStatus.UPDATED)

    @property
    def failed(self) -> bool:
        """Whether any runlevel failed."""
        return any(result.status is MutationStatus.FAILED for result in self.results)

    @property
    def exit_code(self) -> int:
        """Process exit status for the batch: 1 on any failure, 0 otherwise."""
        return 1 if self.failed else 0

    @property
    def not_found_anywhere(self) -> bool:
        """Whether an error-free delete batch removed nothing."""
        return self.command is Command.DELETE and not self.failed and self.updated_count == 0


class RunlevelAction(Protocol):
    """Uniform per-runlevel operation used by ``MutationEngine``."""

    command: ClassVar[Command]

    def apply(self, runlevel: str, service: str) -> RunlevelResult:
        """Apply the action for ``service`` in ``runlevel``."""
        ...


class AddAction:
    """Add a service to a runlevel, skipping existing memberships."""

    command: ClassVar[Command] = Command.ADD

    def __init__(self, registry: RegistryClient, *, applet: str = DEFAULT_APPLET) -> None:
        self.registry = registry
        self.applet = applet

    def apply(self, runlevel: str, service: str) -> RunlevelResult:
        if not self.registry.service_exists(service):
            return RunlevelResult(
                runlevel,
                MutationStatus.FAILED,
                f"{self.applet}: service `{service}' does not exist",
                logging.ERROR,
            )
        if self.registry.is_member(service, runlevel):
            return RunlevelResult(
                runlevel,
                MutationStatus.SKIPPED,
                f"{self.applet}: {service} already installed in runlevel `{runlevel}'; skipping",
                logging.WARNING,
            )
        try:
            self.registry.add_membership(runlevel, service)
        except RegistryError as exc:
            return RunlevelResult(
                runlevel,
                MutationStatus.FAILED,
                f"{self.applet}: failed to add service `{service}' to runlevel `{runlevel}': {exc.cause}",
                logging.ERROR,
            )
        return RunlevelResult(runlevel, MutationStatus.UPDATED, f"{service} added to runlevel {runlevel}")


class DeleteAction:
    """Remove a service from a runlevel."""

    command: ClassVar[Command] = Command.DELETE

    def __init__(self, registry: RegistryClient, *, applet: str = DEFAULT_APPLET) -> None:
        self.registry = registry
        self.applet = applet

    def apply(self, runlevel: str, service: str) -> RunlevelResult:
        try:
            self.registry.remove_membership(runlevel, service)
        except NotAMemberError:
            # Reported as an error but counted as nothing-to-do so the batch
            # summary can still flag "not found in any runlevel".
            return RunlevelResult(
                runlevel,
                MutationStatus.SKIPPED,
                f"{self.applet}: service `{service}' is not in the runlevel `{runlevel}'",
                logging.ERROR,
            )
        except RegistryError as exc:
            return RunlevelResult(
                runlevel,
                MutationStatus.FAILED,
                f"{self.applet}: failed to remove service `{service}' from runlevel `{runlevel}': {exc.cause}",
                logging.ERROR,
            )
        return RunlevelResult(runlevel, MutationStatus.UPDATED, f"{service} removed from runlevel {runlevel}")


def action_for(command: Command, registry: RegistryClient, *, applet: str = DEFAULT_APPLET) -> RunlevelAction:
    """Select the action implementing ``command``.

    Raises:
        RcUpdateUsageError: If ``command`` does not mutate memberships.
    """
    match command:
        case Command.ADD:
            return AddAction(registry, applet=applet)
        case Command.DELETE:
            return DeleteAction(registry, applet=applet)
        case _:
            msg = "invalid action"
            raise RcUpdateUsageError(msg)


class MutationEngine:
    """Apply one add or delete action across an ordered set of runlevels."""

    def __init__(self, registry: RegistryClient, *, applet: str = DEFAULT_APPLET) -> None:
        """Create an engine bound to ``registry``.

        Args:
            registry: Registry client receiving the membership changes.
            applet: Program name prefixed to error and warning messages.
        """
        self.registry = registry
        self.applet = applet

    def apply(self, command: Command, service: str, runlevels: Sequence[str]) -> MutationOutcome:
        """Apply ``command`` for ``service`` to each runlevel in order.

        A runlevel that no longer exists is reported and skipped. Every result
        is logged as it is produced; for an error-free delete batch that
        changed nothing a single summary warning follows.

        Args:
            command: ``Command.ADD`` or ``Command.DELETE``.
            service: Service whose memberships change.
            runlevels: Runlevels to process, in order.

        Returns:
            MutationOutcome: Per-runlevel results and the aggregate verdict.

        Raises:
            RcUpdateUsageError: If ``command`` is ``Command.SHOW``.
        """
        action = action_for(command, self.registry, applet=self.applet)
        results: list[RunlevelResult] = []
        for runlevel in runlevels:
            if self.registry.runlevel_exists(runlevel):
                result = action.apply(runlevel, service)
            else:
                result = RunlevelResult(
                    runlevel,
                    MutationStatus.SKIPPED,
                    f"{self.applet}: runlevel `{runlevel}' does not exist",
                    logging.ERROR,
                )
            self._report(command, service, result)
            results.append(result)

        outcome = MutationOutcome(command=command, service=service, results=tuple(results))
        if outcome.not_found_anywhere:
            logger.warning(
                "%s: service `%s' not found in any of the specified runlevels",
                self.applet,
                service,
                extra=structured_extra(
                    component=LogComponent.MUTATION,
                    action=command,
                    service=service,
                    updated=0,
                ),
            )
        return outcome

    def _report(self, command: Command, service: str, result: RunlevelResult) -> None:
        logger.log(
            result.level,
            result.message,
            extra=structured_extra(
                component=LogComponent.MUTATION,
                action=command,
                service=service,
                runlevel=result.runlevel,
                updated=int(result.status),
            ),
        )


__all__ = [
    "AddAction",
    "DeleteAction",
    "MutationEngine",
    "MutationOutcome",
    "RunlevelAction",
    "RunlevelResult",
    "action_for",
]
