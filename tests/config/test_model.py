# topmark:header:start
#
#   project      : CQFormat
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `MutableConfig` loading, discovery, merging and freezing."""

from __future__ import annotations

from pathlib import Path

import pytest

from cqformat.config.model import CLI_OVERRIDE_STR, MutableConfig
from cqformat.core.diagnostics import DiagnosticLevel
from cqformat.core.errors import UnknownFormatError
from cqformat.core.formats import OutputFormat
from tests.conftest import make_config


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    cfg = MutableConfig.from_defaults().freeze()
    assert cfg.output_format is OutputFormat.JSON
    assert cfg.include_configurations is True
    assert cfg.include_default_values is True
    assert cfg.rule_attributes is None
    assert cfg.sort_by_label is False
    assert cfg.jobs == 1
    assert not cfg.has_errors


def test_from_toml_dict_reads_sections() -> None:
    draft = MutableConfig.from_toml_dict(
        {
            "output": {
                "format": "structured-text",
                "include_configurations": False,
                "rule_attributes": ["srcs", "deps"],
            },
            "run": {"jobs": 4},
        }
    )
    cfg = draft.freeze()
    assert cfg.output_format is OutputFormat.STRUCTURED_TEXT
    assert cfg.include_configurations is False
    assert cfg.rule_attributes == frozenset({"srcs", "deps"})
    assert cfg.jobs == 4


def test_all_keeps_every_attribute() -> None:
    assert make_config(rule_attributes=["srcs", "all"]).rule_attributes is None


def test_wrong_types_and_unknown_keys_become_warnings() -> None:
    draft = MutableConfig.from_toml_dict(
        {
            "output": {"include_configurations": "yes", "colour": True},
            "run": {"jobs": 0},
            "extra": {},
        }
    )
    messages = [d.message for d in draft.diagnostics]
    assert all(d.level is DiagnosticLevel.WARNING for d in draft.diagnostics)
    assert any("include_configurations" in m for m in messages)
    assert any("'colour'" in m for m in messages)
    assert any("'extra'" in m for m in messages)
    assert any("jobs" in m for m in messages)
    assert draft.include_configurations is None
    assert draft.jobs is None


def test_unknown_format_fails_on_freeze() -> None:
    draft = MutableConfig.from_toml_dict({"output": {"format": "yaml"}})
    with pytest.raises(UnknownFormatError):
        draft.freeze()


def test_merge_last_set_value_wins() -> None:
    base = MutableConfig(output_format="binary", jobs=2)
    over = MutableConfig(jobs=8)
    merged = base.merge_with(over)
    assert merged.output_format == "binary"
    assert merged.jobs == 8


def test_cli_args_override_and_are_recorded() -> None:
    draft = MutableConfig.from_defaults().apply_cli_args(
        {
            "output_format": OutputFormat.BINARY,
            "include_default_values": False,
            "rule_attributes": ["name"],
            "jobs": 3,
        }
    )
    cfg = draft.freeze()
    assert cfg.output_format is OutputFormat.BINARY
    assert cfg.include_default_values is False
    assert cfg.rule_attributes == frozenset({"name"})
    assert cfg.jobs == 3
    assert cfg.config_files[-1] == CLI_OVERRIDE_STR


def test_thaw_freeze_round_trip() -> None:
    cfg = make_config(output_format="binary", sort_by_label=True)
    again = cfg.thaw().freeze()
    assert again.output_format is cfg.output_format
    assert again.sort_by_label is True


def test_pyproject_without_section_is_ignored(tmp_path: Path) -> None:
    path = _write(tmp_path / "pyproject.toml", '[project]\nname = "x"\n')
    assert MutableConfig.from_toml_file(path) is None


def test_pyproject_tool_section(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "pyproject.toml", '[tool.cqformat.output]\nformat = "binary"\n'
    )
    draft = MutableConfig.from_toml_file(path)
    assert draft is not None
    assert draft.output_format == "binary"
    assert draft.config_files == [str(path)]


def test_broken_toml_records_an_error(tmp_path: Path) -> None:
    path = _write(tmp_path / "cqformat.toml", "[output\n")
    draft = MutableConfig.from_toml_file(path)
    assert draft is not None
    assert draft.diagnostics.has_error()


def test_discovery_walks_up_and_stops_at_root(tmp_path: Path) -> None:
    _write(tmp_path / "cqformat.toml", '[output]\nformat = "binary"\n')
    top = _write(tmp_path / "repo" / "cqformat.toml", 'root = true\n[run]\njobs = 2\n')
    pyproject = _write(
        tmp_path / "repo" / "sub" / "pyproject.toml", "[tool.cqformat.run]\njobs = 5\n"
    )
    nearest = _write(
        tmp_path / "repo" / "sub" / "cqformat.toml", '[output]\nformat = "json"\n'
    )

    found = MutableConfig.discover_local_config_files(tmp_path / "repo" / "sub")
    assert found == [top.resolve(), pyproject.resolve(), nearest.resolve()]

    cfg = MutableConfig.load_merged(anchor=tmp_path / "repo" / "sub").freeze()
    assert cfg.jobs == 5
    assert cfg.output_format is OutputFormat.JSON


def test_no_config_skips_discovery_but_keeps_explicit_files(tmp_path: Path) -> None:
    _write(tmp_path / "cqformat.toml", "[run]\njobs = 9\n")
    extra = _write(tmp_path / "other" / "extra.toml", "[output]\nsort_by_label = true\n")

    cfg = MutableConfig.load_merged(
        anchor=tmp_path, extra_config_files=[extra], no_config=True
    ).freeze()
    assert cfg.jobs == 1
    assert cfg.sort_by_label is True


def test_explicit_pyproject_without_section_is_an_error(tmp_path: Path) -> None:
    extra = _write(tmp_path / "pyproject.toml", "[project]\n")
    cfg = MutableConfig.load_merged(
        anchor=tmp_path, extra_config_files=[extra], no_config=True
    ).freeze()
    assert cfg.has_errors
