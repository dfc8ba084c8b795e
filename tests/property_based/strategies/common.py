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


"""Shared Hypothesis strategies for property-based tests."""

from __future__ import annotations

from hypothesis import strategies as st

RUNLEVEL_POOL = ("boot", "default", "nonetwork", "shutdown", "single", "sysinit")

__all__ = [
    "RUNLEVEL_POOL",
    "positionals",
    "runlevel_batches",
    "service_names",
]


def service_names() -> st.SearchStrategy[str]:
    """Return a strategy yielding init-script style service names."""
    return st.from_regex(r"[a-z][a-z0-9_.-]{0,23}", fullmatch=True)


def runlevel_batches(min_size: int = 1, max_size: int = 8) -> st.SearchStrategy[list[str]]:
    """Strategy emitting runlevel lists drawn from ``RUNLEVEL_POOL``, duplicates allowed.

    Args:
        min_size: Minimum number of runlevel tokens.
        max_size: Maximum number of runlevel tokens.

    Returns:
        Hypothesis strategy producing lists of known runlevel names.
    """
    return st.lists(st.sampled_from(RUNLEVEL_POOL), min_size=min_size, max_size=max_size)


def positionals(max_size: int = 6) -> st.SearchStrategy[list[str]]:
    """Arbitrary positional tokens, including ones that look like legacy command words."""
    token = st.one_of(st.sampled_from(("add", "del", "delete", "show")), service_names())
    return st.lists(token, max_size=max_size)
