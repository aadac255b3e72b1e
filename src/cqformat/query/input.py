# topmark:header:start
#
#   project      : CQFormat
#   file         : input.py
#   file_relpath : src/cqformat/query/input.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Read configured-target batches from an input document.

Two layouts are accepted:

- JSON: ``{"batches": [[<configured target>, ...], ...]}``
- NDJSON: one JSON array (one batch) per line; blank lines are ignored.

A configured target looks like::

    {
      "target": {"label": "//pkg:lib", "kind": "RULE", "location": "pkg/BUILD:3:1"},
      "configuration": "a1b2c3",
      "config_conditions": {"//conditions:linux": true},
      "rule": {
        "rule_class": "cc_library",
        "attributes": [
          {"name": "srcs", "type": "LABEL_LIST", "explicitly_specified": true,
           "value": ["a.cc"]},
          {"name": "copts", "type": "STRING_LIST",
           "select": {"branches": [["//conditions:linux", ["-DLINUX"]]], "default": []}}
        ]
      }
    }

Every failure raises `InputDocumentError` naming the offending element.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, cast

from cqformat.config.logging import get_logger
from cqformat.core.errors import InputDocumentError
from cqformat.query.types import (
    NO_DEFAULT,
    AttributeDefinition,
    AttributeType,
    ConfiguredTarget,
    DeclaredValue,
    LiteralValue,
    RuleDefinition,
    SelectValue,
    Target,
    TargetKind,
)

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger

logger: CQFormatLogger = get_logger(__name__)

Batch = list[ConfiguredTarget]


def _expect_mapping(obj: object, where: str) -> Mapping[str, Any]:
    if not isinstance(obj, Mapping):
        raise InputDocumentError(where, f"expected an object, got {type(obj).__name__}")
    return cast("Mapping[str, Any]", obj)


def _expect_list(obj: object, where: str) -> list[Any]:
    if not isinstance(obj, list):
        raise InputDocumentError(where, f"expected an array, got {type(obj).__name__}")
    return cast("list[Any]", obj)


def _expect_str(obj: object, where: str) -> str:
    if not isinstance(obj, str):
        raise InputDocumentError(where, f"expected a string, got {type(obj).__name__}")
    return obj


def _optional_str(data: Mapping[str, Any], key: str, where: str) -> str | None:
    value: object = data.get(key)
    if value is None:
        return None
    return _expect_str(value, f"{where}.{key}")


def _parse_enum_name(
    value: object, enum_cls: type[TargetKind] | type[AttributeType], where: str
) -> TargetKind | AttributeType:
    name: str = _expect_str(value, where)
    key: str = name.strip().upper()
    try:
        return enum_cls[key]
    except KeyError:
        choices: str = ", ".join(m.name for m in enum_cls)
        raise InputDocumentError(
            where, f"unknown value '{name}' (expected one of {choices})"
        ) from None


def parse_target(data: object, where: str = "target") -> Target:
    """Parse a target descriptor object."""
    obj: Mapping[str, Any] = _expect_mapping(data, where)
    if "label" not in obj:
        raise InputDocumentError(where, "missing 'label'")
    contents: list[Any] = _expect_list(obj.get("package_contents", []), f"{where}.package_contents")
    return Target(
        label=_expect_str(obj["label"], f"{where}.label"),
        kind=cast(
            "TargetKind", _parse_enum_name(obj.get("kind", "RULE"), TargetKind, f"{where}.kind")
        ),
        location=_optional_str(obj, "location", where),
        generating_rule=_optional_str(obj, "generating_rule", where),
        package_contents=tuple(
            _expect_str(c, f"{where}.package_contents[{i}]") for i, c in enumerate(contents)
        ),
    )


def parse_select(data: object, where: str) -> SelectValue:
    """Parse a ``select`` object into a `SelectValue`.

    ``branches`` is either an array of ``[condition, value]`` pairs (order kept)
    or an object mapping conditions to values.
    """
    obj: Mapping[str, Any] = _expect_mapping(data, where)
    raw: object = obj.get("branches")
    branches: list[tuple[str, object]] = []
    if isinstance(raw, Mapping):
        for label, value in cast("Mapping[object, object]", raw).items():
            branches.append((_expect_str(label, f"{where}.branches"), value))
    else:
        for i, pair in enumerate(_expect_list(raw, f"{where}.branches")):
            pair_where: str = f"{where}.branches[{i}]"
            items: list[Any] = _expect_list(pair, pair_where)
            if len(items) != 2:
                raise InputDocumentError(pair_where, "expected a [condition, value] pair")
            branches.append((_expect_str(items[0], pair_where), items[1]))
    default: object = obj["default"] if "default" in obj else NO_DEFAULT
    return SelectValue(branches=tuple(branches), default=default)


def parse_attribute(data: object, where: str) -> AttributeDefinition:
    """Parse one attribute definition."""
    obj: Mapping[str, Any] = _expect_mapping(data, where)
    if "name" not in obj:
        raise InputDocumentError(where, "missing 'name'")
    if ("value" in obj) == ("select" in obj):
        raise InputDocumentError(where, "exactly one of 'value' or 'select' is required")
    declared: DeclaredValue
    if "select" in obj:
        declared = parse_select(obj["select"], f"{where}.select")
    else:
        declared = LiteralValue(obj["value"])
    explicit: object = obj.get("explicitly_specified", False)
    if not isinstance(explicit, bool):
        raise InputDocumentError(f"{where}.explicitly_specified", "expected a boolean")
    return AttributeDefinition(
        name=_expect_str(obj["name"], f"{where}.name"),
        type=cast(
            "AttributeType",
            _parse_enum_name(obj.get("type", "UNKNOWN"), AttributeType, f"{where}.type"),
        ),
        declared=declared,
        explicitly_specified=explicit,
    )


def parse_rule(data: object, target: Target, where: str = "rule") -> RuleDefinition:
    """Parse a rule definition; its name is the label of ``target``."""
    obj: Mapping[str, Any] = _expect_mapping(data, where)
    if "rule_class" not in obj:
        raise InputDocumentError(where, "missing 'rule_class'")
    attrs: list[Any] = _expect_list(obj.get("attributes", []), f"{where}.attributes")
    try:
        return RuleDefinition.from_attributes(
            target.label,
            _expect_str(obj["rule_class"], f"{where}.rule_class"),
            (parse_attribute(a, f"{where}.attributes[{i}]") for i, a in enumerate(attrs)),
            location=target.location,
        )
    except ValueError as exc:
        raise InputDocumentError(where, str(exc)) from exc


def parse_configured_target(data: object, where: str = "") -> ConfiguredTarget:
    """Parse one configured target object."""
    prefix: str = f"{where}." if where else ""
    obj: Mapping[str, Any] = _expect_mapping(data, where)
    target: Target = parse_target(obj.get("target"), f"{prefix}target")
    configuration: str = _expect_str(obj.get("configuration", ""), f"{prefix}configuration")

    conditions: dict[str, bool] = {}
    raw_conditions: Mapping[str, Any] = _expect_mapping(
        obj.get("config_conditions", {}), f"{prefix}config_conditions"
    )
    for label, matched in raw_conditions.items():
        if not isinstance(matched, bool):
            raise InputDocumentError(f"{prefix}config_conditions.{label}", "expected a boolean")
        conditions[label] = matched

    rule: RuleDefinition | None = None
    if obj.get("rule") is not None:
        rule = parse_rule(obj["rule"], target, f"{prefix}rule")
    try:
        return ConfiguredTarget(
            target=target,
            configuration=configuration,
            rule=rule,
            config_conditions=conditions,
        )
    except ValueError as exc:
        raise InputDocumentError(where, str(exc)) from exc


def parse_batch(data: object, where: str) -> Batch:
    """Parse one batch (an array of configured targets)."""
    return [
        parse_configured_target(item, f"{where}[{i}]")
        for i, item in enumerate(_expect_list(data, where))
    ]


def _check_utf8(obj: object, where: str) -> None:
    """Reject strings that cannot be written as UTF-8.

    JSON ``\\uXXXX`` escapes can decode to lone surrogates, which no output
    format can carry.
    """
    if isinstance(obj, str):
        try:
            obj.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise InputDocumentError(where, f"string is not valid UTF-8: {obj!r}") from exc
    elif isinstance(obj, dict):
        for key, value in cast("dict[str, Any]", obj).items():
            _check_utf8(key, where)
            _check_utf8(value, f"{where}.{key}")
    elif isinstance(obj, list):
        for i, item in enumerate(cast("list[Any]", obj)):
            _check_utf8(item, f"{where}[{i}]")


def _loads(text: str, where: str) -> object:
    try:
        data: object = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputDocumentError(where, f"invalid JSON: {exc}") from exc
    _check_utf8(data, where)
    return data


def parse_batches(text: str) -> list[Batch]:
    """Parse an input document (JSON or NDJSON) into batches.

    Args:
        text: Document text.

    Returns:
        The batches in document order.

    Raises:
        InputDocumentError: If the document is malformed.
    """
    stripped: str = text.strip()
    if not stripped:
        return []

    if stripped.startswith("{"):
        doc: Mapping[str, Any] = _expect_mapping(_loads(stripped, "document"), "document")
        if "batches" not in doc:
            raise InputDocumentError("document", "missing 'batches'")
        raw_batches: list[Any] = _expect_list(doc["batches"], "batches")
        batches: list[Batch] = [
            parse_batch(b, f"batches[{i}]") for i, b in enumerate(raw_batches)
        ]
    else:
        batches = []
        for lineno, line in enumerate(stripped.splitlines(), start=1):
            if not line.strip():
                continue
            where: str = f"line {lineno}"
            batches.append(parse_batch(_loads(line, where), where))

    logger.debug(
        "parsed %d batches with %d configured targets",
        len(batches),
        sum(len(b) for b in batches),
    )
    return batches


def load_batches(source: Path | str | IO[str]) -> list[Batch]:
    """Read and parse an input document from a path or an open text stream.

    Raises:
        InputDocumentError: If the document is malformed.
        OSError: If the file cannot be read.
    """
    if isinstance(source, (str, Path)):
        text: str = Path(source).read_text(encoding="utf-8")
    else:
        text = source.read()
    return parse_batches(text)
