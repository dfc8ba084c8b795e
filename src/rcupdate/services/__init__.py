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

"""Service layer: command resolution, validation, mutation and reporting."""

from __future__ import annotations

from .mutation import (
    AddAction,
    DeleteAction,
    MutationEngine,
    MutationOutcome,
    RunlevelAction,
    RunlevelResult,
    action_for,
)
from .report import ReportCell, ReportRow, build_report, render_report
from .resolver import resolve_command
from .validation import Targets, resolve_targets

__all__ = [
    "AddAction",
    "DeleteAction",
    "MutationEngine",
    "MutationOutcome",
    "ReportCell",
    "ReportRow",
    "RunlevelAction",
    "RunlevelResult",
    "Targets",
    "action_for",
    "build_report",
    "render_report",
    "resolve_command",
    "resolve_targets",
]
