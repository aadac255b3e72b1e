# topmark:header:start
#
#   project      : CQFormat
#   file         : test_main.py
#   file_relpath : tests/cli/test_main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests for the command group, verbosity options and `version`."""

from __future__ import annotations

import json
import logging

import pytest

from cqformat.cli.errors import CQFormatUsageError
from cqformat.cli.exit_codes import ExitCode
from cqformat.cli.options import resolve_verbosity
from cqformat.config.logging import TRACE_LEVEL
from cqformat.constants import CQFORMAT_VERSION
from tests.cli.conftest import assert_exit, assert_SUCCESS, run_cli
from tests.conftest import parametrize


def test_no_subcommand_prints_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert "format" in result.stdout
    assert "decode" in result.stdout


def test_version() -> None:
    result = run_cli(["version"])
    assert_SUCCESS(result)
    assert result.stdout.strip() == CQFORMAT_VERSION


def test_version_json() -> None:
    result = run_cli(["version", "--json"])
    assert_SUCCESS(result)
    assert json.loads(result.stdout) == {"version": CQFORMAT_VERSION}


def test_verbose_and_quiet_are_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])
    assert_exit(result, ExitCode.USAGE_ERROR)


@parametrize(
    "verbose, quiet, level",
    [
        (0, 0, logging.WARNING),
        (1, 0, logging.INFO),
        (2, 0, logging.DEBUG),
        (3, 0, TRACE_LEVEL),
        (0, 1, logging.ERROR),
    ],
)
def test_resolve_verbosity(verbose: int, quiet: int, level: int) -> None:
    assert resolve_verbosity(verbose, quiet) == level


def test_resolve_verbosity_conflict() -> None:
    with pytest.raises(CQFormatUsageError):
        resolve_verbosity(1, 1)
