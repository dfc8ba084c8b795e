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

"""Command resolution for mixed flag and legacy positional syntax."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rcupdate._internal.exceptions import ConflictingCommandsError, InvalidCommandError, NoCommandError
from rcupdate.core.model_types import Command

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def resolve_command(
    flags: Iterable[Command] | None,
    positionals: Sequence[str],
) -> tuple[Command, list[str]]:
    """Resolve exactly one command from mode flags or the first positional word.

    Repeating the same flag is allowed; selecting two different ones is not.
    When no flag is present the first positional token is read as a legacy
    command word (``add``, ``delete``/``del``, ``show``) and consumed.

    Args:
        flags: Commands selected through ``--add``/``--delete``/``--show``.
        positionals: Positional tokens in command-line order.

    Returns:
        The resolved command and the positionals left for argument validation.

    Raises:
        ConflictingCommandsError: If more than one distinct flag was given.
        InvalidCommandError: If the fallback token is not a command word.
        NoCommandError: If there is neither a flag nor a positional token.
    """
    selected = set(flags or ())
    if len(selected) > 1:
        raise ConflictingCommandsError
    if selected:
        return selected.pop(), list(positionals)
    if not positionals:
        raise NoCommandError
    token = positionals[0]
    try:
        command = Command.from_token(token)
    except ValueError as exc:
        raise InvalidCommandError(token) from exc
    return command, list(positionals[1:])


__all__ = ["resolve_command"]
