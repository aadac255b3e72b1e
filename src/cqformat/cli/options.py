# topmark:header:start
#
#   project      : CQFormat
#   file         : options.py
#   file_relpath : src/cqformat/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for the Click-based CQFormat CLI.

This module centralizes reusable options (verbosity, configuration, record
content) and their resolution logic, so commands and groups can stay thin.
"""

from __future__ import annotations

import logging
from typing import Callable, ParamSpec, TypeVar

import click

from cqformat.cli.cli_types import EnumChoiceParam
from cqformat.cli.errors import CQFormatUsageError
from cqformat.config.logging import TRACE_LEVEL
from cqformat.core.formats import FORMAT_ALIASES, OutputFormat

P = ParamSpec("P")
R = TypeVar("R")

# Custom verbosity levels, mapped to standard logging levels
LOG_LEVELS = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the final logging level based on verbose and quiet counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        The logging level as an integer.

    Raises:
        CQFormatUsageError: If both verbose and quiet flags are used simultaneously.

    Behavior:
        Three or more -v flags set TRACE level.
        Two -v flags set DEBUG level.
        One -v flag sets INFO level.
        One or more -q flags set ERROR level.
        Default level is WARNING.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CQFormatUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return LOG_LEVELS["TRACE"]
    if verbose_count == 2:  # -vv
        return LOG_LEVELS["DEBUG"]
    if verbose_count == 1:  # -v
        return LOG_LEVELS["INFO"]

    if quiet_count >= 1:  # -q
        return LOG_LEVELS["ERROR"]

    return LOG_LEVELS["WARNING"]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Args:
        f: The Click command function to decorate.

    Returns:
        The decorated function with verbosity options added.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase log verbosity on stderr. Repeat up to three times.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only log errors.",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply common configuration options to a Click command.

    Adds ``--no-config`` and ``--config`` options.
    """
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore discovered project config files (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def output_format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--output-format`` (values and legacy proto names accepted)."""
    names: str = ", ".join(e.value for e in OutputFormat)
    aliases: str = ", ".join(FORMAT_ALIASES)
    return click.option(
        "--output-format",
        "output_format",
        type=EnumChoiceParam(OutputFormat, aliases=FORMAT_ALIASES),
        default=None,
        help=f"Output format ({names}; aliases: {aliases}).",
    )(f)


def record_content_options(f: Callable[P, R]) -> Callable[P, R]:
    """Apply options that shape the emitted records.

    Adds ``--include-configurations/--no-include-configurations``,
    ``--include-default-values/--no-include-default-values``,
    ``--rule-attribute`` and ``--sort-by-label``. Flags default to None so that
    configuration files keep the last word when a flag is not given.
    """
    f = click.option(
        "--include-configurations/--no-include-configurations",
        "include_configurations",
        default=None,
        help="Emit configuration checksums with each target (full result shape).",
    )(f)
    f = click.option(
        "--include-default-values/--no-include-default-values",
        "include_default_values",
        default=None,
        help="Emit attributes that were not explicitly set in the build file.",
    )(f)
    f = click.option(
        "--rule-attribute",
        "rule_attributes",
        multiple=True,
        metavar="NAME",
        help="Only emit these rule attributes (repeatable; 'all' keeps every attribute).",
    )(f)
    f = click.option(
        "--sort-by-label/--no-sort-by-label",
        "sort_by_label",
        default=None,
        help="Order records by target label instead of arrival order.",
    )(f)
    return f
