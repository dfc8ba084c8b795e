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

"""CLI entry point and orchestration for rc-update."""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from contextlib import suppress
from typing import TYPE_CHECKING, Final

from rcupdate import __version__
from rcupdate._internal.error_codes import error_code_for
from rcupdate._internal.exceptions import NoCommandError, RcUpdateError
from rcupdate._internal.logging_utils import LOG_FORMATS, LOG_LEVELS, configure_logging, structured_extra
from rcupdate.api import run_update
from rcupdate.cli.helpers import echo as _echo
from rcupdate.cli.helpers import register_argument as _register_argument
from rcupdate.cli.helpers import register_command_flags
from rcupdate.config import load_config
from rcupdate.core.model_types import DEFAULT_APPLET, LogComponent
from rcupdate.registry import FilesystemRegistry

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from rcupdate.registry import RegistryClient

logger: logging.Logger = logging.getLogger("rcupdate.cli")

RC_UPDATE_VERSION: Final[str] = __version__
USAGE_EPILOG: Final[str] = (
    "Legacy syntax is also accepted: rc-update add|del|delete <service> [<runlevel>...] "
    "and rc-update show [<runlevel>...]. Set EINFO_VERBOSE=yes to list every service in show output."
)


def main(
    argv: Sequence[str] | None = None,
    *,
    registry: RegistryClient | None = None,
    environ: Mapping[str, str] | None = None,
    prog: str | None = None,
) -> int:
    """Main CLI entry point for rc-update.

    Parses command-line arguments, configures logging, resolves the command and
    its targets, then either applies the membership change or prints the
    membership report.

    Args:
        argv: Command-line arguments to parse. If None, uses sys.argv.
        registry: Registry client to use instead of the configured filesystem one.
        environ: Environment mapping for configuration; defaults to ``os.environ``.
        prog: Program name used in usage and messages; defaults to ``argv[0]``.

    Returns:
        int: 0 on success (including no-op warnings), 1 on any failure.
    """
    applet = prog or _applet_name()
    parser = _build_parser(applet)
    args = parser.parse_intermixed_args(list(argv) if argv is not None else None)
    if args.version:
        _echo(f"{applet} {RC_UPDATE_VERSION}")
        return 0
    _initialize_logging(args.log_format, args.log_level)
    try:
        loaded = load_config(args.config, environ=environ)
        client = registry if registry is not None else FilesystemRegistry(loaded.config.registry)
        result = run_update(
            args.commands,
            args.args,
            client,
            verbose=loaded.config.verbose,
            applet=applet,
        )
    except NoCommandError:
        parser.print_usage(sys.stderr)
        return 1
    except RcUpdateError as exc:
        return _fail(applet, exc)
    for line in result.report:
        _echo(line)
    return result.exit_code


def _applet_name() -> str:
    name = pathlib.Path(sys.argv[0]).name if sys.argv and sys.argv[0] else ""
    if not name or name in {"__main__.py", "-c"}:
        return DEFAULT_APPLET
    return name


def _fail(applet: str, exc: RcUpdateError) -> int:
    logger.error(
        "%s: %s",
        applet,
        exc,
        extra=structured_extra(
            component=LogComponent.CLI,
            error_code=error_code_for(exc),
            exit_code=1,
        ),
    )
    return 1


def _build_parser(applet: str) -> argparse.ArgumentParser:
    """Build and configure the argument parser for rc-update.

    Args:
        applet: Program name shown in usage output.

    Returns:
        argparse.ArgumentParser: Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog=applet,
        description="Add, delete or show services in runlevels.",
        epilog=USAGE_EPILOG,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    register_command_flags(parser)
    _register_argument(
        parser,
        "args",
        nargs="*",
        metavar="service|runlevel",
        help="Service followed by runlevels for add/delete; runlevel filters for show.",
    )
    _register_argument(
        parser,
        "--config",
        type=pathlib.Path,
        default=None,
        help="Path to an rc-update TOML configuration file.",
    )
    _register_argument(
        parser,
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Select logging output format (einfo-style text or structured JSON).",
    )
    _register_argument(
        parser,
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Set verbosity of logged events.",
    )
    _register_argument(
        parser,
        "-V",
        "--version",
        action="store_true",
        help="Print the rc-update version and exit.",
    )
    return parser


def _initialize_logging(log_format: str | None, log_level: str | None) -> None:
    """Initialize logging configuration for the CLI application.

    ``None`` values defer to the environment (see ``configure_logging``).
    Failures are suppressed (best-effort initialization).
    """
    with suppress(Exception):  # best-effort logger init
        _ = configure_logging(log_format, log_level=log_level)


__all__ = ["main"]
