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

"""Membership report (services x runlevels) for the ``show`` command."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from rcupdate.registry import RegistryClient

SERVICE_COLUMN_WIDTH: Final[int] = 20


@dataclass(slots=True, frozen=True)
class ReportCell:
    """Membership of one service in one runlevel."""

    runlevel: str
    member: bool

    def render(self) -> str:
        """Return the runlevel name, or a blank of the same width."""
        return self.runlevel if self.member else " " * len(self.runlevel)


@dataclass(slots=True, frozen=True)
class ReportRow:
    """One service and its cells, in requested runlevel order."""

    service: str
    cells: tuple[ReportCell, ...]

    @property
    def has_membership(self) -> bool:
        """Whether the service belongs to at least one requested runlevel."""
        return any(cell.member for cell in self.cells)


def build_report(
    registry: RegistryClient,
    runlevels: Sequence[str],
    *,
    verbose: bool = False,
) -> list[ReportRow]:
    """Build report rows for every known service, in registry order.

    Args:
        registry: Registry to query.
        runlevels: Runlevels forming the report columns.
        verbose: Keep services that belong to none of ``runlevels``.

    Returns:
        Rows to render; services without memberships are dropped unless verbose.
    """
    rows: list[ReportRow] = []
    for service in registry.services_in_runlevel(None):
        cells = tuple(ReportCell(runlevel, registry.is_member(service, runlevel)) for runlevel in runlevels)
        row = ReportRow(service=service, cells=cells)
        if row.has_membership or verbose:
            rows.append(row)
    return rows


def render_row(row: ReportRow) -> str:
    """Render a row as `` <service> | <cell> <cell> ...``."""
    parts = [f" {row.service:>{SERVICE_COLUMN_WIDTH}} |"]
    parts.extend(f" {cell.render()}" for cell in row.cells)
    return "".join(parts)


def render_report(rows: Iterable[ReportRow]) -> list[str]:
    """Render report rows into output lines."""
    return [render_row(row) for row in rows]


__all__ = [
    "SERVICE_COLUMN_WIDTH",
    "ReportCell",
    "ReportRow",
    "build_report",
    "render_report",
    "render_row",
]
