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

"""Configuration loading for rc-update.

Settings are resolved with the following precedence (highest first):

1. Environment variables (``RC_UPDATE_INIT_DIR``, ``RC_UPDATE_RUNLEVEL_DIR``,
   ``RC_UPDATE_SOFTLEVEL``, ``EINFO_VERBOSE``)
2. The configuration file named by ``--config`` or ``RC_UPDATE_CONFIG``, or
   ``/etc/rc-update.toml`` when it exists
3. Built-in defaults matching the stock OpenRC layout
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from rcupdate._internal.logging_utils import structured_extra
from rcupdate.core.model_types import LogComponent

from .models import (
    Config,
    ConfigModel,
    ConfigReadError,
    InvalidConfigFileError,
    RegistryPaths,
    ensure_supported_version,
    registry_paths_from_model,
)
from .validation import coerce_optional_path, parse_yesno

if TYPE_CHECKING:
    from collections.abc import Mapping

CONFIG_ENV: Final[str] = "RC_UPDATE_CONFIG"
INIT_DIR_ENV: Final[str] = "RC_UPDATE_INIT_DIR"
RUNLEVEL_DIR_ENV: Final[str] = "RC_UPDATE_RUNLEVEL_DIR"
SOFTLEVEL_ENV: Final[str] = "RC_UPDATE_SOFTLEVEL"
VERBOSE_ENV: Final[str] = "EINFO_VERBOSE"
DEFAULT_CONFIG_PATH: Final[Path] = Path("/etc/rc-update.toml")

logger: logging.Logger = logging.getLogger("rcupdate.config")


@dataclass(slots=True, frozen=True)
class EnvOverrides:
    """Environment-sourced overrides for rc-update settings."""

    config_path: Path | None
    init_dir: Path | None
    runlevel_dir: Path | None
    softlevel_path: Path | None
    verbose: bool

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> EnvOverrides:
        """Create overrides from the current environment variables.

        Args:
            environ: Optional mapping to read environment variables from. Defaults
                to ``os.environ`` when not provided.

        Returns:
            EnvOverrides: Parsed environment overrides.
        """
        env = os.environ if environ is None else environ
        return cls(
            config_path=coerce_optional_path(env.get(CONFIG_ENV)),
            init_dir=coerce_optional_path(env.get(INIT_DIR_ENV)),
            runlevel_dir=coerce_optional_path(env.get(RUNLEVEL_DIR_ENV)),
            softlevel_path=coerce_optional_path(env.get(SOFTLEVEL_ENV)),
            verbose=parse_yesno(env.get(VERBOSE_ENV)),
        )

    def apply(self, paths: RegistryPaths) -> RegistryPaths:
        """Return ``paths`` with any environment-provided locations substituted."""
        return RegistryPaths(
            init_dir=self.init_dir or paths.init_dir,
            runlevel_dir=self.runlevel_dir or paths.runlevel_dir,
            softlevel_path=self.softlevel_path or paths.softlevel_path,
        )


@dataclass(slots=True, frozen=True)
class LoadedConfig:
    """Container for a loaded configuration and its source path.

    Attributes:
        config: Parsed configuration instance.
        path: Filesystem path the configuration was loaded from, or None when
            defaults are used.
    """

    config: Config
    path: Path | None


def _select_config_path(explicit_path: Path | None, env: EnvOverrides) -> tuple[Path | None, bool]:
    """Return the config file to read and whether it must exist."""
    if explicit_path is not None:
        return explicit_path, True
    if env.config_path is not None:
        return env.config_path, True
    if DEFAULT_CONFIG_PATH.is_file():
        return DEFAULT_CONFIG_PATH, False
    return None, False


def read_config_file(path: Path) -> RegistryPaths:
    """Read and validate a TOML configuration file.

    Args:
        path: Location of the configuration file.

    Returns:
        Registry locations declared by the file, resolved against its folder.

    Raises:
        ConfigReadError: If the file cannot be read or is not valid TOML.
        UnsupportedConfigVersionError: If ``config_version`` is not supported.
        InvalidConfigFileError: If the content fails schema validation.
    """
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigReadError(path, exc) from exc
    ensure_supported_version(raw)
    try:
        model = ConfigModel.model_validate(raw)
    except ValidationError as exc:
        raise InvalidConfigFileError(path, exc) from exc
    return registry_paths_from_model(model.registry, base_dir=path.parent.resolve())


def load_config(
    explicit_path: Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> LoadedConfig:
    """Load rc-update configuration from file, environment and defaults.

    Args:
        explicit_path: Configuration file given on the command line, if any.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        LoadedConfig: The resolved configuration and the file it came from.

    Raises:
        ConfigReadError: If an explicitly requested file is missing or unreadable.
        UnsupportedConfigVersionError: If the file declares another ``config_version``.
        InvalidConfigFileError: If the configuration file fails validation.
    """
    env = EnvOverrides.from_environ(environ)
    config_path, required = _select_config_path(explicit_path, env)
    paths = RegistryPaths()
    if config_path is not None:
        if required and not config_path.is_file():
            raise ConfigReadError(config_path, FileNotFoundError("no such file"))
        paths = read_config_file(config_path)
        logger.debug(
            "Loaded configuration from %s",
            config_path,
            extra=structured_extra(component=LogComponent.CONFIG, path=config_path),
        )
    config = Config(registry=env.apply(paths), verbose=env.verbose)
    return LoadedConfig(config=config, path=config_path)


__all__ = [
    "CONFIG_ENV",
    "DEFAULT_CONFIG_PATH",
    "INIT_DIR_ENV",
    "RUNLEVEL_DIR_ENV",
    "SOFTLEVEL_ENV",
    "VERBOSE_ENV",
    "EnvOverrides",
    "LoadedConfig",
    "load_config",
    "read_config_file",
]
