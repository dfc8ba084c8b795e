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


from __future__ import annotations

import re
from pathlib import Path

import pytest

from rcupdate._internal.error_codes import error_code_catalog, error_code_for
from rcupdate._internal.exceptions import (
    ConflictingCommandsError,
    InvalidCommandError,
    NotAMemberError,
    RcUpdateError,
    RcUpdateUsageError,
    RegistryError,
    UnknownRunlevelError,
)
from rcupdate.config.models import ConfigReadError, ConfigValidationError

pytestmark = pytest.mark.unit


def test_error_code_for_known_hierarchy() -> None:
    assert error_code_for(RcUpdateError("x")) == "RU000"
    assert error_code_for(RcUpdateUsageError("x")) == "RU100"
    assert error_code_for(ConflictingCommandsError()) == "RU101"
    assert error_code_for(InvalidCommandError("remove")) == "RU103"
    assert error_code_for(UnknownRunlevelError("bogus")) == "RU105"
    assert error_code_for(ConfigValidationError("x")) == "RU110"
    assert error_code_for(ConfigReadError(Path("rc-update.toml"), OSError("denied"))) == "RU112"
    assert error_code_for(RegistryError("Permission denied")) == "RU200"
    assert error_code_for(NotAMemberError("boot", "sshd")) == "RU201"


def test_error_code_for_unknown_defaults_to_base() -> None:
    class CustomError(RuntimeError):
        pass

    assert error_code_for(CustomError("x")) == "RU000"


def test_usage_errors_are_value_errors() -> None:
    assert isinstance(UnknownRunlevelError("bogus"), ValueError)
    assert not isinstance(RegistryError("x"), RcUpdateUsageError)


def test_error_code_catalog_uniqueness() -> None:
    catalog = error_code_catalog()
    codes = list(catalog.values())
    assert len(set(codes)) == len(codes)
    assert catalog["rcupdate._internal.exceptions.RcUpdateError"] == "RU000"


def test_error_code_documentation_is_in_sync() -> None:
    catalog = error_code_catalog()
    repo_root = Path(__file__).resolve().parents[1]
    doc_path = repo_root / "docs" / "EXCEPTIONS.md"
    content = doc_path.read_text(encoding="utf-8")
    documented_codes = set(re.findall(r"RU\d{3}", content))
    registry_codes = set(catalog.values())
    assert registry_codes == documented_codes
