# topmark:header:start
#
#   project      : CQFormat
#   file         : test_encoder.py
#   file_relpath : tests/query/test_encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for result encoding: shapes, formats, determinism and narrowing."""

from __future__ import annotations

import json

import pytest
from hypothesis import HealthCheck, given, settings

from cqformat.core.errors import AttributeValueError, UnknownFormatError
from cqformat.core.formats import OutputFormat
from cqformat.query.encoder import encode
from cqformat.query.machine import decode_result
from cqformat.query.records import TargetRecordBuilder
from cqformat.query.types import AttributeType, ConfiguredTarget, ResultSet
from tests.conftest import file_target, literal, parametrize, rule_target, select
from tests.strategies_cqformat import s_configured_target

LINUX = "//conditions:linux"


def _result_set() -> ResultSet:
    builder = TargetRecordBuilder()
    return ResultSet(
        records=(
            builder.build_configured(
                rule_target(
                    "//pkg:lib",
                    [
                        literal("srcs", AttributeType.LABEL_LIST, ["a.cc", "b.cc"]),
                        select("copts", AttributeType.STRING_LIST, {LINUX: ["-DL"]}, default=[]),
                        literal("linkstatic", AttributeType.BOOLEAN, True, explicit=False),
                    ],
                    configuration="abc123",
                    conditions={LINUX: True},
                    location="pkg/BUILD:1:1",
                ),
                include_configuration=True,
            ),
            builder.build_configured(
                file_target("//pkg:a.cc", configuration="abc123"), include_configuration=True
            ),
        )
    )


def test_json_configured_shape() -> None:
    encoded = encode(_result_set(), True, "json")
    assert isinstance(encoded.data, str)
    assert encoded.data.endswith("}\n")
    assert not encoded.data.endswith("\n\n")

    doc = json.loads(encoded.data)
    first = doc["results"][0]
    assert first["configuration"] == {"checksum": "abc123"}
    rule = first["target"]["rule"]
    assert rule["rule_class"] == "cc_library"
    assert [a["name"] for a in rule["attribute"]] == ["copts", "linkstatic", "srcs"]
    assert rule["attribute"][0]["string_list_value"] == ["-DL"]
    assert doc["results"][1]["target"]["type"] == "SOURCE_FILE"


def test_narrowed_shape_drops_configurations() -> None:
    full = json.loads(encode(_result_set(), True, OutputFormat.JSON).data)
    narrow = json.loads(encode(_result_set(), False, OutputFormat.JSON).data)

    assert list(narrow) == ["target"]
    assert "abc123" not in json.dumps(narrow)
    assert narrow["target"] == [entry["target"] for entry in full["results"]]


def test_narrowing_leaves_result_set_untouched() -> None:
    rs = _result_set()
    before = rs.records
    encode(rs, False, "json")
    assert rs.records == before
    assert rs.records[0].configuration == "abc123"


@parametrize("fmt", list(OutputFormat))
def test_empty_result_set_is_valid_output(fmt: OutputFormat) -> None:
    encoded = encode(ResultSet(), True, fmt)
    assert decode_result(encoded.data, fmt) == {"results": []}


@parametrize("fmt", list(OutputFormat))
def test_encoding_is_deterministic(fmt: OutputFormat) -> None:
    assert encode(_result_set(), True, fmt).data == encode(_result_set(), True, fmt).data


def test_binary_output_is_bytes() -> None:
    encoded = encode(_result_set(), True, "binary")
    assert encoded.is_binary
    assert isinstance(encoded.data, bytes)
    assert encoded.to_bytes() is encoded.data


@parametrize("alias, fmt", [("proto", "binary"), ("textproto", "structured-text")])
def test_legacy_format_names(alias: str, fmt: str) -> None:
    assert encode(ResultSet(), True, alias).output_format.value == fmt


def test_unknown_format_fails_before_encoding() -> None:
    with pytest.raises(UnknownFormatError) as excinfo:
        encode(_result_set(), True, "yaml")
    assert excinfo.value.value == "yaml"
    assert "json" in excinfo.value.choices


def test_mistyped_value_fails_encoding() -> None:
    builder = TargetRecordBuilder()
    record = builder.build_configured(
        rule_target("//p:x", [literal("count", AttributeType.INTEGER, "three")]),
        include_configuration=True,
    )
    with pytest.raises(AttributeValueError):
        encode(ResultSet(records=(record,)), True, "json")


@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=40)
@given(ct=s_configured_target())
def test_all_formats_carry_the_same_document(ct: ConfiguredTarget) -> None:
    record = TargetRecordBuilder().build_configured(ct, include_configuration=True)
    rs = ResultSet(records=(record,))
    docs = [decode_result(encode(rs, True, fmt).data, fmt) for fmt in OutputFormat]
    assert docs[0] == docs[1] == docs[2]


@parametrize("fmt", list(OutputFormat))
@parametrize(
    "attr_type, value",
    [(AttributeType.INTEGER, 2**70), (AttributeType.INTEGER_LIST, [2**70])],
)
def test_out_of_range_integer_fails_every_format(
    fmt: OutputFormat, attr_type: AttributeType, value: object
) -> None:
    record = TargetRecordBuilder().build_configured(
        rule_target("//p:x", [literal("count", attr_type, value)]),
        include_configuration=True,
    )
    with pytest.raises(AttributeValueError) as excinfo:
        encode(ResultSet(records=(record,)), True, fmt)
    assert excinfo.value.attribute_name == "count"
