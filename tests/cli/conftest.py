# topmark:header:start
#
#   project      : CQFormat
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running CQFormat in a controlled working directory.

`run_cli_in()` changes the working directory before invoking the Click CLI so
that config discovery (anchored at the CWD when reading stdin) stays inside
the test's temporary directory.
"""

from __future__ import annotations

import json
import os
from typing import IO, TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from cqformat.cli.exit_codes import ExitCode
from cqformat.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

LINUX = "//conditions:linux"

RULE_LIB: dict[str, Any] = {
    "target": {"label": "//pkg:lib", "kind": "RULE", "location": "pkg/BUILD:1:1"},
    "configuration": "c0ffee",
    "config_conditions": {LINUX: True},
    "rule": {
        "rule_class": "cc_library",
        "attributes": [
            {"name": "srcs", "type": "LABEL_LIST", "explicitly_specified": True, "value": ["a.cc"]},
            {
                "name": "copts",
                "type": "STRING_LIST",
                "explicitly_specified": True,
                "select": {"branches": {LINUX: ["-DLINUX"]}, "default": []},
            },
            {"name": "linkstatic", "type": "BOOLEAN", "value": False},
        ],
    },
}
SOURCE_FILE: dict[str, Any] = {
    "target": {"label": "//pkg:a.cc", "kind": "SOURCE_FILE", "location": "pkg/a.cc:1:1"},
    "configuration": "c0ffee",
}
AMBIGUOUS: dict[str, Any] = {
    "target": {"label": "//pkg:bad"},
    "configuration": "c0ffee",
    "config_conditions": {"//a": True, "//b": True},
    "rule": {
        "rule_class": "genrule",
        "attributes": [{"name": "cmd", "select": {"branches": {"//a": "a", "//b": "b"}}}],
    },
}


def write_query(path: Path, *batches: list[dict[str, Any]]) -> Path:
    """Write ``batches`` as an NDJSON query document."""
    path.write_text("".join(json.dumps(b) + "\n" for b in batches), encoding="utf-8")
    return path


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Return a project directory whose config stops upward discovery."""
    root: Path = tmp_path / "proj"
    root.mkdir()
    (root / "cqformat.toml").write_text("root = true\n", encoding="utf-8")
    return root


def run_cli_in(
    cwd: Path,
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI with ``cwd`` as the working directory.

    Args:
        cwd (Path): Directory used as the CWD for the command invocation.
        argv (str | Sequence[str] | None): CLI argument vector.
        input_text (str | bytes | IO[Any] | None): Optional standard input.

    Returns:
        Result: The `click.testing.Result` of the invocation.
    """
    runner = CliRunner()
    old: str = os.getcwd()
    try:
        os.chdir(cwd)
        return runner.invoke(cli, argv, input=input_text)
    finally:
        os.chdir(old)


def run_cli(
    argv: str | Sequence[str] | None,
    *,
    input_text: str | bytes | IO[Any] | None = None,
) -> Result:
    """Invoke the CLI without changing the working directory."""
    return CliRunner().invoke(cli, argv, input=input_text)


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0)."""
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_exit(result: Result, code: int) -> None:
    """Assert that the command exited with ``code``."""
    assert result.exit_code == code, result.output
