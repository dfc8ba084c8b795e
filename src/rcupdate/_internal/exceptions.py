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

"""Common exception hierarchy for rc-update."""

from __future__ import annotations

__all__ = [
    "ConflictingCommandsError",
    "InvalidCommandError",
    "MissingServiceError",
    "NoCommandError",
    "NoRunlevelError",
    "NotAMemberError",
    "RcUpdateError",
    "RcUpdateUsageError",
    "RegistryError",
    "UnknownRunlevelError",
]


class RcUpdateError(Exception):
    """Base error for all rc-update exceptions."""


class RcUpdateUsageError(RcUpdateError, ValueError):
    """Raised when the command line cannot be turned into a valid request.

    Usage errors are fatal: they are raised before any membership is touched.
    """


class ConflictingCommandsError(RcUpdateUsageError):
    """Raised when more than one of add, delete and show was requested."""

    def __init__(self) -> None:
        super().__init__("cannot mix commands")


class NoCommandError(RcUpdateUsageError):
    """Raised when neither a command flag nor a legacy command word was given."""

    def __init__(self) -> None:
        super().__init__("no command specified")


class InvalidCommandError(RcUpdateUsageError):
    """Raised when the legacy positional command word is not recognised."""

    def __init__(self, token: str) -> None:
        """Initialize the exception with the rejected token.

        Args:
            token: Positional argument that was read as a command word.
        """
        self.token = token
        super().__init__(f"invalid command `{token}'")


class MissingServiceError(RcUpdateUsageError):
    """Raised when add or delete is requested without a service name."""

    def __init__(self) -> None:
        super().__init__("no service specified")


class UnknownRunlevelError(RcUpdateUsageError):
    """Raised when a runlevel named on the command line does not exist."""

    def __init__(self, runlevel: str) -> None:
        """Initialize the exception with the offending runlevel token.

        Args:
            runlevel: Runlevel name that failed the existence check.
        """
        self.runlevel = runlevel
        super().__init__(f"`{runlevel}' is not a valid runlevel")


class NoRunlevelError(RcUpdateUsageError):
    """Raised when no runlevel was given and the current one cannot be resolved."""

    def __init__(self) -> None:
        super().__init__("no runlevels found")


class RegistryError(RcUpdateError):
    """Raised by a registry client when a membership change cannot be applied."""

    def __init__(self, cause: str) -> None:
        """Initialize the exception with the underlying cause.

        Args:
            cause: Human readable cause, usually an ``os.strerror`` message.
        """
        self.cause = cause
        super().__init__(cause)


class NotAMemberError(RegistryError):
    """Raised when removing a membership that was never present."""

    def __init__(self, runlevel: str, service: str) -> None:
        """Initialize the exception with the missing (runlevel, service) pair.

        Args:
            runlevel: Runlevel the service was expected in.
            service: Service that is not a member of ``runlevel``.
        """
        self.runlevel = runlevel
        self.service = service
        super().__init__(f"service `{service}' is not in the runlevel `{runlevel}'")
