# topmark:header:start
#
#   project      : CQFormat
#   file         : test_input.py
#   file_relpath : tests/query/test_input.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for reading configured-target batches from JSON and NDJSON."""

from __future__ import annotations

import io
import json
from typing import TYPE_CHECKING, Any

import pytest

from cqformat.core.errors import InputDocumentError
from cqformat.query.input import load_batches, parse_batches
from cqformat.query.types import NO_DEFAULT, AttributeType, LiteralValue, SelectValue, TargetKind
from tests.conftest import parametrize

if TYPE_CHECKING:
    from pathlib import Path

RULE: dict[str, Any] = {
    "target": {"label": "//pkg:lib", "kind": "rule", "location": "pkg/BUILD:3:1"},
    "configuration": "abc",
    "config_conditions": {"//conditions:linux": True},
    "rule": {
        "rule_class": "cc_library",
        "attributes": [
            {"name": "srcs", "type": "LABEL_LIST", "explicitly_specified": True, "value": ["a"]},
            {
                "name": "copts",
                "type": "string_list",
                "select": {"branches": [["//conditions:linux", ["-DL"]]], "default": []},
            },
            {"name": "tags", "select": {"branches": {"//c:x": ["x"]}}},
        ],
    },
}
FILE: dict[str, Any] = {"target": {"label": "//pkg:a.cc", "kind": "SOURCE_FILE"}}


def test_json_document() -> None:
    batches = parse_batches(json.dumps({"batches": [[RULE, FILE], []]}))
    assert [len(b) for b in batches] == [2, 0]

    ct = batches[0][0]
    assert ct.target.kind is TargetKind.RULE
    assert ct.configuration == "abc"
    assert ct.config_conditions == {"//conditions:linux": True}
    assert ct.rule is not None
    assert ct.rule.name == "//pkg:lib"
    assert ct.rule.location == "pkg/BUILD:3:1"

    srcs = ct.rule.attribute("srcs")
    assert srcs.type is AttributeType.LABEL_LIST
    assert srcs.explicitly_specified
    assert srcs.declared == LiteralValue(["a"])

    copts = ct.rule.attribute("copts")
    assert isinstance(copts.declared, SelectValue)
    assert copts.declared.branches == (("//conditions:linux", ["-DL"]),)
    assert copts.declared.default == []

    tags = ct.rule.attribute("tags")
    assert tags.type is AttributeType.UNKNOWN
    assert isinstance(tags.declared, SelectValue)
    assert tags.declared.default is NO_DEFAULT

    assert batches[0][1].rule is None
    assert batches[0][1].configuration == ""


def test_ndjson_lines_are_batches() -> None:
    text = json.dumps([RULE]) + "\n\n" + json.dumps([FILE, FILE]) + "\n"
    assert [len(b) for b in parse_batches(text)] == [1, 2]


def test_empty_document_has_no_batches() -> None:
    assert parse_batches("  \n") == []


def test_load_from_path_and_stream(tmp_path: Path) -> None:
    path = tmp_path / "q.json"
    text = json.dumps({"batches": [[FILE]]})
    path.write_text(text, encoding="utf-8")
    assert len(load_batches(path)[0]) == 1
    assert len(load_batches(io.StringIO(text))[0]) == 1


@parametrize(
    "text, location",
    [
        ("{not json", "document"),
        ('{"other": []}', "document"),
        ('{"batches": {}}', "batches"),
        ("[1]", "line 1[0]"),
        ('[{"target": {"kind": "RULE"}}]', "line 1[0].target"),
        ('[{"target": {"label": "//p:x", "kind": "SPACESHIP"}}]', "line 1[0].target.kind"),
        ('[{"target": {"label": "//p:x"}}]', "line 1[0]"),
        ('[{"target": {"label": "//p:x", "kind": "SOURCE_FILE"}, "config_conditions": {"c": 1}}]',
         "line 1[0].config_conditions.c"),
    ],
)
def test_malformed_input_names_location(text: str, location: str) -> None:
    with pytest.raises(InputDocumentError) as excinfo:
        parse_batches(text)
    assert excinfo.value.location == location


def test_attribute_needs_exactly_one_declaration() -> None:
    bad = {
        "target": {"label": "//p:x"},
        "rule": {"rule_class": "r", "attributes": [{"name": "a", "value": 1, "select": {}}]},
    }
    with pytest.raises(InputDocumentError) as excinfo:
        parse_batches(json.dumps([bad]))
    assert excinfo.value.location == "line 1[0].rule.attributes[0]"


def test_duplicate_attribute_is_rejected() -> None:
    bad = {
        "target": {"label": "//p:x"},
        "rule": {
            "rule_class": "r",
            "attributes": [{"name": "a", "value": 1}, {"name": "a", "value": 2}],
        },
    }
    with pytest.raises(InputDocumentError, match="duplicate attribute"):
        parse_batches(json.dumps([bad]))


def _with_string_value(value: str) -> dict[str, Any]:
    attr = {"name": "name", "type": "STRING", "value": value}
    return {**RULE, "rule": {"rule_class": "cc_library", "attributes": [attr]}}


def test_lone_surrogate_value_is_rejected() -> None:
    text = json.dumps([_with_string_value("ok\ud800")])
    assert "\\ud800" in text
    with pytest.raises(InputDocumentError) as excinfo:
        parse_batches(text)
    assert excinfo.value.location == "line 1[0].rule.attributes[0].value"
    assert "UTF-8" in str(excinfo.value)


def test_lone_surrogate_key_is_rejected() -> None:
    ct = {**RULE, "config_conditions": {"//c:\udc80": True}}
    with pytest.raises(InputDocumentError) as excinfo:
        parse_batches(json.dumps({"batches": [[ct]]}))
    assert excinfo.value.location == "document.batches[0][0].config_conditions"


def test_valid_surrogate_pair_is_accepted() -> None:
    batches = parse_batches(json.dumps([_with_string_value("\U0001f600")]))
    rule = batches[0][0].rule
    assert rule is not None
    assert rule.attribute("name").declared == LiteralValue("\U0001f600")
