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

"""Configuration loading and models for rc-update."""

from __future__ import annotations

from .loader import EnvOverrides, LoadedConfig, load_config, read_config_file
from .models import (
    CONFIG_VERSION,
    Config,
    ConfigModel,
    ConfigReadError,
    ConfigValidationError,
    InvalidConfigFileError,
    RegistryPaths,
    UnsupportedConfigVersionError,
)
from .validation import parse_yesno

__all__ = [
    "CONFIG_VERSION",
    "Config",
    "ConfigModel",
    "ConfigReadError",
    "ConfigValidationError",
    "EnvOverrides",
    "InvalidConfigFileError",
    "LoadedConfig",
    "RegistryPaths",
    "UnsupportedConfigVersionError",
    "load_config",
    "parse_yesno",
    "read_config_file",
]
