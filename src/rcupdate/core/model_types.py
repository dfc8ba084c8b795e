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

"""Model types and enumerations for rc-update.

This module defines the closed value sets shared across rc-update:

- The command selected for an invocation (add, delete, show)
- The per-runlevel status recorded by the mutation engine
- Log output formats and logical log components
"""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Final

DEFAULT_APPLET: Final[str] = "rc-update"


class Command(StrEnum):
    """Operation requested for a single rc-update invocation.

    Attributes:
        ADD: Add a service to one or more runlevels.
        DELETE: Remove a service from one or more runlevels.
        SHOW: Render the service/runlevel membership matrix.
    """

    ADD = "add"
    DELETE = "delete"
    SHOW = "show"

    @classmethod
    def from_token(cls, raw: str) -> Command:
        """Create a Command from a legacy positional command word.

        Args:
            raw: Positional token such as ``add``, ``del`` or ``show``.

        Returns:
            Command enum value.

        Raises:
            ValueError: If the token is not a recognised command word.
        """
        command = LEGACY_COMMAND_WORDS.get(raw)
        if command is None:
            msg = f"Unknown command '{raw}'"
            raise ValueError(msg)
        return command


LEGACY_COMMAND_WORDS: Final[dict[str, Command]] = {
    "add": Command.ADD,
    "delete": Command.DELETE,
    "del": Command.DELETE,
    "show": Command.SHOW,
}


class MutationStatus(IntEnum):
    """Contribution of one runlevel to a mutation batch.

    Attributes:
        FAILED: The change could not be applied; the invocation fails.
        SKIPPED: Nothing was changed and nothing failed.
        UPDATED: The membership was changed.
    """

    FAILED = -1
    SKIPPED = 0
    UPDATED = 1


class LogFormat(StrEnum):
    """Enumeration of log output formats.

    Attributes:
        TEXT: einfo-style single-line output.
        JSON: One structured JSON object per record.
    """

    TEXT = "text"
    JSON = "json"

    @classmethod
    def from_str(cls, raw: str) -> LogFormat:
        """Create a LogFormat enum from a string value.

        Args:
            raw: String representation of the log format.

        Returns:
            LogFormat enum value.

        Raises:
            ValueError: If the string does not match any LogFormat value.
        """
        value = raw.strip().lower()
        try:
            return cls(value)
        except ValueError as exc:
            msg = f"Unknown log format '{raw}'"
            raise ValueError(msg) from exc


class LogComponent(StrEnum):
    """Logical component attached to structured log records."""

    CLI = "cli"
    CONFIG = "config"
    MUTATION = "mutation"
    REGISTRY = "registry"


__all__ = [
    "DEFAULT_APPLET",
    "LEGACY_COMMAND_WORDS",
    "Command",
    "LogComponent",
    "LogFormat",
    "MutationStatus",
]
