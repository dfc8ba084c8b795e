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


"""Fixtures for multi-component integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from tests.fixtures.registry import OpenRCTree


@pytest.fixture
def openrc_environ(openrc_tree: OpenRCTree) -> dict[str, str]:
    """Environment pointing the default registry client at ``openrc_tree``."""
    paths = openrc_tree.paths
    return {
        "RC_UPDATE_INIT_DIR": str(paths.init_dir),
        "RC_UPDATE_RUNLEVEL_DIR": str(paths.runlevel_dir),
        "RC_UPDATE_SOFTLEVEL": str(paths.softlevel_path),
    }
