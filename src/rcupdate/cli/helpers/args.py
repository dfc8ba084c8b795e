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


"""Argument parser helpers for the rc-update CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from rcupdate.core.model_types import Command

if TYPE_CHECKING:
    import argparse


class ArgumentRegistrar(Protocol):
    """Protocol defining the interface for argument registration.

    This protocol matches the interface of argparse.ArgumentParser and argument groups,
    allowing them to be used interchangeably for adding arguments.
    """

    def add_argument(
        self,
        *args: Any,
        **kwargs: Any,
    ) -> argparse.Action:
        """Expose ``ArgumentParser.add_argument`` so helpers can operate generically."""
        ...  # pragma: no cover


def register_argument(
    registrar: ArgumentRegistrar,
    *args: Any,
    **kwargs: Any,
) -> None:
    """Register an argument on a parser/argument group, discarding the action handle.

    Args:
        registrar: Parser or argument group on which to register the option.
        *args: Positional flags and option strings forwarded to ``add_argument``.
        **kwargs: Keyword options forwarded to ``add_argument``.
    """
    _ = registrar.add_argument(*args, **kwargs)


def register_command_flags(registrar: ArgumentRegistrar) -> None:
    """Register the ``--add``/``--delete``/``--show`` mode selectors.

    Every selector appends its ``Command`` to ``commands`` so the resolver can
    tell a repeated flag from two conflicting ones.
    """
    helps = {
        Command.ADD: "Add the service to runlevels",
        Command.DELETE: "Delete the service from runlevels",
        Command.SHOW: "Show services in runlevels",
    }
    for command, help_text in helps.items():
        register_argument(
            registrar,
            f"-{command.value[0]}",
            f"--{command.value}",
            dest="commands",
            action="append_const",
            const=command,
            help=help_text,
        )


__all__ = ["ArgumentRegistrar", "register_argument", "register_command_flags"]
