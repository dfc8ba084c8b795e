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


"""rc-update - manage service membership in OpenRC runlevels.

Adds services to runlevels, removes them, and reports which services belong
to which runlevels. Storage is delegated to a ``RegistryClient``; the default
client works on the OpenRC ``/etc/init.d`` and ``/etc/runlevels`` layout.
"""

from __future__ import annotations

__version__ = "0.1.0"

from rcupdate._internal.exceptions import (  # noqa: E402
    ConflictingCommandsError,
    InvalidCommandError,
    MissingServiceError,
    NoCommandError,
    NoRunlevelError,
    NotAMemberError,
    RcUpdateError,
    RcUpdateUsageError,
    RegistryError,
    UnknownRunlevelError,
)

from .api import UpdateResult, add_service, delete_service, run_update, show_runlevels  # noqa: E402
from .config import Config, RegistryPaths, load_config  # noqa: E402
from .core.model_types import Command, MutationStatus  # noqa: E402
from .registry import FilesystemRegistry, RegistryClient  # noqa: E402
from .services import MutationOutcome, RunlevelResult  # noqa: E402

__all__ = [
    "Command",
    "Config",
    "ConflictingCommandsError",
    "FilesystemRegistry",
    "InvalidCommandError",
    "MissingServiceError",
    "MutationOutcome",
    "MutationStatus",
    "NoCommandError",
    "NoRunlevelError",
    "NotAMemberError",
    "RcUpdateError",
    "RcUpdateUsageError",
    "RegistryClient",
    "RegistryError",
    "RegistryPaths",
    "RunlevelResult",
    "UnknownRunlevelError",
    "UpdateResult",
    "__version__",
    "add_service",
    "delete_service",
    "load_config",
    "run_update",
    "show_runlevels",
]
