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

"""Configuration models and validation for rc-update.

Pydantic models validate the optional TOML configuration file; frozen
dataclasses carry the resolved settings at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rcupdate._internal.exceptions import RcUpdateError

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_VERSION: Final[int] = 0
DEFAULT_INIT_DIR: Final[Path] = Path("/etc/init.d")
DEFAULT_RUNLEVEL_DIR: Final[Path] = Path("/etc/runlevels")
DEFAULT_SOFTLEVEL_PATH: Final[Path] = Path("/run/openrc/softlevel")


class ConfigValidationError(RcUpdateError, ValueError):
    """Raised when configuration data contains invalid values."""


class UnsupportedConfigVersionError(ConfigValidationError):
    """Raised when a configuration file declares an unsupported schema version."""

    def __init__(self, provided: int, expected: int) -> None:
        """Initialize the exception with version information.

        Args:
            provided: The config_version value provided in the configuration file.
            expected: The config_version value expected by this version of rc-update.
        """
        self.provided = provided
        self.expected = expected
        super().__init__(f"Unsupported config_version {provided}; expected {expected}")


class ConfigReadError(ConfigValidationError):
    """Raised when a configuration file cannot be read from disk."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with file path and underlying error.

        Args:
            path: The path to the configuration file that could not be read.
            error: The underlying exception that caused the read failure.
        """
        self.path = path
        self.error = error
        super().__init__(f"Unable to read {path}: {error}")


class InvalidConfigFileError(ConfigValidationError):
    """Raised when the configuration file fails validation."""

    def __init__(self, path: Path, error: Exception) -> None:
        """Initialize the exception with configuration file path and validation error.

        Args:
            path: The path to the configuration file that failed validation.
            error: The underlying validation exception.
        """
        self.path = path
        self.error = error
        super().__init__(f"Invalid rc-update configuration in {path}: {error}")


@dataclass(slots=True, frozen=True)
class RegistryPaths:
    """Locations of the OpenRC registry on disk.

    Attributes:
        init_dir: Directory holding one executable script per service.
        runlevel_dir: Directory holding one subdirectory per runlevel.
        softlevel_path: File naming the runlevel the host is currently in.
    """

    init_dir: Path = DEFAULT_INIT_DIR
    runlevel_dir: Path = DEFAULT_RUNLEVEL_DIR
    softlevel_path: Path = DEFAULT_SOFTLEVEL_PATH


@dataclass(slots=True, frozen=True)
class Config:
    """Resolved runtime configuration.

    Attributes:
        registry: Filesystem locations used by the default registry client.
        verbose: Emit every service in ``show`` output, members or not.
    """

    registry: RegistryPaths = field(default_factory=RegistryPaths)
    verbose: bool = False


class RegistryPathsModel(BaseModel):
    """Pydantic model for the ``[registry]`` table."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
    init_dir: Path = Field(default=DEFAULT_INIT_DIR)
    runlevel_dir: Path = Field(default=DEFAULT_RUNLEVEL_DIR)
    softlevel_path: Path = Field(default=DEFAULT_SOFTLEVEL_PATH)

    @field_validator("init_dir", "runlevel_dir", "softlevel_path", mode="before")
    @classmethod
    def _reject_blank(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            msg = "path must not be empty"
            raise ValueError(msg)
        return value


class ConfigModel(BaseModel):
    """Pydantic model for the top-level rc-update configuration file.

    Attributes:
        config_version: Schema version number for the configuration file.
        registry: Registry location settings.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
    config_version: int = Field(default=CONFIG_VERSION)
    registry: RegistryPathsModel = Field(default_factory=RegistryPathsModel)


def ensure_supported_version(raw: Mapping[str, object]) -> None:
    """Reject a raw config table whose integer ``config_version`` is not ``CONFIG_VERSION``.

    Call on the raw table before ``ConfigModel.model_validate``. Non-integer
    values are left to the schema.

    Raises:
        UnsupportedConfigVersionError: If the declared version is unsupported.
    """
    version = raw.get("config_version", CONFIG_VERSION)
    if isinstance(version, int) and not isinstance(version, bool) and version != CONFIG_VERSION:
        raise UnsupportedConfigVersionError(version, CONFIG_VERSION)


def _resolved_path(base_dir: Path, value: Path) -> Path:
    return value if value.is_absolute() else (base_dir / value).resolve()


def registry_paths_from_model(model: RegistryPathsModel, *, base_dir: Path) -> RegistryPaths:
    """Convert a validated ``[registry]`` table into ``RegistryPaths``.

    Relative paths are resolved against ``base_dir`` (the config file's folder).
    """
    return RegistryPaths(
        init_dir=_resolved_path(base_dir, model.init_dir),
        runlevel_dir=_resolved_path(base_dir, model.runlevel_dir),
        softlevel_path=_resolved_path(base_dir, model.softlevel_path),
    )


__all__ = [
    "CONFIG_VERSION",
    "DEFAULT_INIT_DIR",
    "DEFAULT_RUNLEVEL_DIR",
    "DEFAULT_SOFTLEVEL_PATH",
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "InvalidConfigFileError",
    "RegistryPaths",
    "RegistryPathsModel",
    "UnsupportedConfigVersionError",
    "ensure_supported_version",
    "registry_paths_from_model",
]
