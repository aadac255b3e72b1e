# topmark:header:start
#
#   project      : CQFormat
#   file         : test_io.py
#   file_relpath : tests/config/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the TOML getters and renderers in `cqformat.config.io`."""

from __future__ import annotations

import tomlkit

from cqformat.config.io import (
    check_unknown_keys,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    to_toml,
)
from cqformat.core.diagnostics import DiagnosticLevel, DiagnosticLog
from tests.conftest import make_config


def test_int_getter_rejects_bool() -> None:
    diags = DiagnosticLog()
    value = get_int_value_or_none_checked({"jobs": True}, "jobs", where="[run]", diagnostics=diags)
    assert value is None
    assert len(diags) == 1


def test_string_list_getter_skips_non_strings() -> None:
    diags = DiagnosticLog()
    value = get_string_list_value_or_none_checked(
        {"names": ["a", 1, "b"]}, "names", where="[output]", diagnostics=diags
    )
    assert value == ["a", "b"]
    assert diags.count(DiagnosticLevel.WARNING) == 1


def test_unknown_keys_are_reported() -> None:
    diags = DiagnosticLog()
    check_unknown_keys({"format": 1, "fmt": 2}, frozenset({"format"}), where="x", diagnostics=diags)
    assert [d.message for d in diags] == ["Unknown key in x: 'fmt'"]


def test_effective_config_renders_as_toml() -> None:
    text = to_toml(make_config(jobs=3).to_toml_dict())
    doc = tomlkit.parse(text).unwrap()
    assert doc["run"] == {"jobs": 3}
    assert doc["output"]["rule_attributes"] == ["all"]
