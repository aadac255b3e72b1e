# topmark:header:start
#
#   project      : CQFormat
#   file         : test_records.py
#   file_relpath : tests/query/test_records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `TargetRecordBuilder` and `AttributeFilter`."""

from __future__ import annotations

import pytest

from cqformat.core.errors import ConfigurationAmbiguityError
from cqformat.query.records import AttributeFilter, TargetRecordBuilder
from cqformat.query.types import UNRESOLVABLE, AttributeType
from tests.conftest import file_target, literal, rule_target, select

LINUX = "//conditions:linux"


def test_rule_record_sorted_and_resolved() -> None:
    ct = rule_target(
        "//pkg:lib",
        [
            literal("srcs", AttributeType.LABEL_LIST, ["a.cc"]),
            select("copts", AttributeType.STRING_LIST, {LINUX: ["-DLINUX"]}, default=[]),
            literal("alwayslink", AttributeType.BOOLEAN, False, explicit=False),
        ],
        conditions={LINUX: True},
    )
    record = TargetRecordBuilder().build_configured(ct, include_configuration=True)

    assert record.label == "//pkg:lib"
    assert record.rule_class == "cc_library"
    assert record.configuration == "cfg-1"
    assert [a.name for a in record.attributes] == ["alwayslink", "copts", "srcs"]
    assert record.attributes[1].value == ["-DLINUX"]
    assert record.attributes[0].explicitly_specified is False


def test_configuration_dropped_when_not_requested() -> None:
    ct = rule_target("//pkg:lib", [])
    record = TargetRecordBuilder().build_configured(ct, include_configuration=False)
    assert record.configuration is None


def test_unresolvable_attribute_is_omitted() -> None:
    ct = rule_target(
        "//pkg:lib",
        [
            literal("name", AttributeType.STRING, "lib"),
            select("copts", AttributeType.STRING_LIST, {LINUX: ["-DLINUX"]}),
        ],
        conditions={LINUX: False},
    )
    record = TargetRecordBuilder().build_configured(ct, include_configuration=True)
    assert [a.name for a in record.attributes] == ["name"]
    assert all(a.value is not UNRESOLVABLE for a in record.attributes)


def test_non_rule_target_has_no_attributes() -> None:
    record = TargetRecordBuilder().build_configured(
        file_target("//pkg:a.cc"), include_configuration=True
    )
    assert record.attributes == ()
    assert record.rule_class is None
    assert record.configuration == "cfg-1"


def test_filter_drops_implicit_values() -> None:
    ct = rule_target(
        "//pkg:lib",
        [
            literal("srcs", AttributeType.LABEL_LIST, ["a.cc"]),
            literal("linkstatic", AttributeType.BOOLEAN, True, explicit=False),
        ],
    )
    builder = TargetRecordBuilder(attribute_filter=AttributeFilter(include_default_values=False))
    record = builder.build_configured(ct, include_configuration=False)
    assert [a.name for a in record.attributes] == ["srcs"]


def test_filter_keeps_named_attributes_only() -> None:
    ct = rule_target(
        "//pkg:lib",
        [literal(n, AttributeType.STRING, n) for n in ("name", "visibility", "tags")],
    )
    builder = TargetRecordBuilder(
        attribute_filter=AttributeFilter(rule_attributes=frozenset({"tags", "name"}))
    )
    record = builder.build_configured(ct, include_configuration=False)
    assert [a.name for a in record.attributes] == ["name", "tags"]
    assert builder.attribute_filter.rule_attributes == frozenset({"tags", "name"})


def test_ambiguity_propagates() -> None:
    ct = rule_target(
        "//pkg:lib",
        [select("x", AttributeType.STRING, {"//a": "a", "//b": "b"})],
        conditions={"//a": True, "//b": True},
    )
    with pytest.raises(ConfigurationAmbiguityError):
        TargetRecordBuilder().build_configured(ct, include_configuration=True)


def test_batch_order_is_kept() -> None:
    batch = [rule_target(f"//pkg:t{i}", []) for i in (3, 1, 2)]
    records = TargetRecordBuilder().build_batch(batch, include_configuration=True)
    assert [r.label for r in records] == ["//pkg:t3", "//pkg:t1", "//pkg:t2"]


def test_filtered_out_attributes_are_not_resolved() -> None:
    ct = rule_target(
        "//pkg:lib",
        [
            literal("name", AttributeType.STRING, "lib"),
            select("x", AttributeType.STRING, {"//a": "a", "//b": "b"}),
        ],
        conditions={"//a": True, "//b": True},
    )
    builder = TargetRecordBuilder(
        attribute_filter=AttributeFilter(rule_attributes=frozenset({"name"}))
    )
    record = builder.build_configured(ct, include_configuration=False)
    assert [a.name for a in record.attributes] == ["name"]


def test_custom_resolver_is_used_for_every_emitted_attribute() -> None:
    seen: list[str] = []

    def tagging(rule: object, name: str, conditions: object, configuration: str) -> object:
        seen.append(name)
        return f"{name}@{configuration}"

    ct = rule_target(
        "//pkg:lib",
        [literal(n, AttributeType.STRING, n) for n in ("srcs", "deps", "name")],
    )
    builder = TargetRecordBuilder(resolver=tagging)  # type: ignore[arg-type]
    record = builder.build_configured(ct, include_configuration=False)

    assert seen == ["deps", "name", "srcs"]
    assert [a.value for a in record.attributes] == ["deps@cfg-1", "name@cfg-1", "srcs@cfg-1"]
