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

"""Helpers for coercing loosely typed environment values."""

from __future__ import annotations

from pathlib import Path
from typing import Final

YES_VALUES: Final[frozenset[str]] = frozenset({"yes", "y", "true", "t", "on", "1"})


def parse_yesno(value: str | None) -> bool:
    """Interpret an environment toggle the way einfo does.

    Args:
        value: Raw variable value, or ``None`` when unset.

    Returns:
        ``True`` for yes/y/true/t/on/1 (any case, surrounding blanks ignored),
        ``False`` for anything else.
    """
    if value is None:
        return False
    return value.strip().lower() in YES_VALUES


def coerce_optional_path(value: str | None) -> Path | None:
    """Return a ``Path`` for a non-blank string, ``None`` otherwise."""
    if value is None:
        return None
    stripped = value.strip()
    return Path(stripped) if stripped else None


__all__ = ["YES_VALUES", "coerce_optional_path", "parse_yesno"]
