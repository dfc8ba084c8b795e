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


"""Unit tests for the show report."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from rcupdate.services.report import (
    SERVICE_COLUMN_WIDTH,
    ReportCell,
    ReportRow,
    build_report,
    render_report,
    render_row,
)

if TYPE_CHECKING:
    from tests.fixtures.registry import InMemoryRegistry

pytestmark = pytest.mark.unit

ALL_RUNLEVELS = ("boot", "default", "shutdown")
BLANK_BOOT = " " * len("boot")
BLANK_DEFAULT = " " * len("default")
BLANK_SHUTDOWN = " " * len("shutdown")


def _line(service: str, *cells: str) -> str:
    return " " + service.rjust(SERVICE_COLUMN_WIDTH) + " |" + "".join(" " + cell for cell in cells)


def test_cell_renders_name_or_blank() -> None:
    assert ReportCell("default", member=True).render() == "default"
    assert ReportCell("default", member=False).render() == BLANK_DEFAULT


def test_render_row_layout() -> None:
    row = ReportRow("sshd", (ReportCell("default", member=True), ReportCell("boot", member=False)))
    assert render_row(row) == " " * 17 + "sshd | default" + " " * 5


def test_report_lists_members_in_registry_order(memory_registry: InMemoryRegistry) -> None:
    lines = render_report(build_report(memory_registry, ALL_RUNLEVELS))
    assert lines == [
        _line("net.lo", "boot", BLANK_DEFAULT, BLANK_SHUTDOWN),
        _line("cron", BLANK_BOOT, "default", BLANK_SHUTDOWN),
        _line("local", BLANK_BOOT, "default", BLANK_SHUTDOWN),
    ]


def test_report_filtered_to_one_runlevel(memory_registry: InMemoryRegistry) -> None:
    lines = render_report(build_report(memory_registry, ["default"]))
    assert lines == [_line("cron", "default"), _line("local", "default")]


def test_verbose_keeps_services_without_memberships(memory_registry: InMemoryRegistry) -> None:
    rows = build_report(memory_registry, ["boot"], verbose=True)
    assert [row.service for row in rows] == ["sshd", "net.lo", "cron", "local"]
    assert [row.has_membership for row in rows] == [False, True, False, False]
    assert render_row(rows[0]) == _line("sshd", BLANK_BOOT)


def test_empty_report(memory_registry: InMemoryRegistry) -> None:
    assert build_report(memory_registry, ["shutdown"]) == []


def test_report_does_not_mutate(memory_registry: InMemoryRegistry) -> None:
    _ = build_report(memory_registry, ALL_RUNLEVELS, verbose=True)
    assert memory_registry.mutations == []


def test_long_service_name_is_not_truncated() -> None:
    name = "a-very-long-service-name-indeed"
    row = ReportRow(name, (ReportCell("boot", member=True),))
    assert render_row(row) == f" {name} | boot"
