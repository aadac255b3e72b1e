# topmark:header:start
#
#   project      : CQFormat
#   file         : payloads.py
#   file_relpath : src/cqformat/query/machine/payloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Payload builders for encoded query results.

This module contains *pure* helpers that turn `TargetRecord` instances into the
schema dataclasses of `cqformat.query.machine.schemas`.

Responsibilities:
  - Pick the typed value field(s) matching each attribute's `AttributeType`.
  - Pick the detail table matching each target's `TargetKind`.

This module performs no I/O and does not shape top-level documents.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Final, cast

from cqformat.core.errors import AttributeValueError
from cqformat.query.machine.schemas import (
    AttributePayload,
    ConfiguredTargetPayload,
    FileOrGroupPayload,
    ResultKey,
    RulePayload,
    StringDictEntry,
    TargetPayload,
)
from cqformat.query.types import AttributeType, TargetKind

if TYPE_CHECKING:
    from cqformat.query.types import AttributeRecord, TargetRecord

STRING_TYPES: Final[frozenset[AttributeType]] = frozenset(
    {AttributeType.STRING, AttributeType.LABEL, AttributeType.OUTPUT, AttributeType.LICENSE}
)
STRING_LIST_TYPES: Final[frozenset[AttributeType]] = frozenset(
    {AttributeType.STRING_LIST, AttributeType.LABEL_LIST, AttributeType.OUTPUT_LIST}
)
STRING_DICT_TYPES: Final[frozenset[AttributeType]] = frozenset(
    {AttributeType.STRING_DICT, AttributeType.LABEL_DICT_UNARY}
)

# Tristate integer encoding -> canonical string form
TRISTATE_NAMES: Final[dict[int, str]] = {1: "yes", 0: "no", -1: "auto"}
TRISTATE_VALUES: Final[dict[str, int]] = {name: num for num, name in TRISTATE_NAMES.items()}

# Integer fields are signed 32-bit in every output format
INT32_MIN: Final[int] = -(2**31)
INT32_MAX: Final[int] = 2**31 - 1

_DETAIL_KEYS: Final[dict[TargetKind, str]] = {
    TargetKind.RULE: ResultKey.RULE,
    TargetKind.SOURCE_FILE: ResultKey.SOURCE_FILE,
    TargetKind.GENERATED_FILE: ResultKey.GENERATED_FILE,
    TargetKind.PACKAGE_GROUP: ResultKey.PACKAGE_GROUP,
    TargetKind.ENVIRONMENT_GROUP: ResultKey.ENVIRONMENT_GROUP,
}


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int32(value: object) -> bool:
    return _is_int(value) and INT32_MIN <= cast("int", value) <= INT32_MAX


def _tristate(record: AttributeRecord) -> int:
    value: object = record.value
    if isinstance(value, bool):
        return int(value)
    if _is_int(value) and value in TRISTATE_NAMES:
        return cast("int", value)
    if isinstance(value, str) and value.lower() in TRISTATE_VALUES:
        return TRISTATE_VALUES[value.lower()]
    raise AttributeValueError(record.name, record.type.name, value)


def build_attribute_payload(record: AttributeRecord) -> AttributePayload:
    """Build the payload of one resolved attribute.

    Args:
        record: The resolved attribute.

    Returns:
        The payload with the typed value field(s) set. A `None` value sets none.

    Raises:
        AttributeValueError: If the value does not fit the declared type,
            including integers outside the signed 32-bit range.
    """
    payload = AttributePayload(
        name=record.name,
        type=record.type.name,
        explicitly_specified=record.explicitly_specified,
    )
    value: object = record.value
    attr_type: AttributeType = record.type
    if value is None:
        return payload

    def reject() -> AttributeValueError:
        return AttributeValueError(record.name, attr_type.name, value)

    if attr_type in STRING_TYPES:
        if not isinstance(value, str):
            raise reject()
        payload.string_value = value
    elif attr_type is AttributeType.INTEGER:
        if not _is_int32(value):
            raise reject()
        payload.int_value = cast("int", value)
    elif attr_type is AttributeType.BOOLEAN:
        if not (isinstance(value, bool) or (_is_int(value) and value in (0, 1))):
            raise reject()
        flag = bool(value)
        payload.int_value = int(flag)
        payload.string_value = "true" if flag else "false"
    elif attr_type is AttributeType.TRISTATE:
        num: int = _tristate(record)
        payload.int_value = num
        payload.string_value = TRISTATE_NAMES[num]
    elif attr_type in STRING_LIST_TYPES:
        if not isinstance(value, (list, tuple)):
            raise reject()
        items: list[object] = list(cast("list[object] | tuple[object, ...]", value))
        if not all(isinstance(v, str) for v in items):
            raise reject()
        payload.string_list_value = cast("list[str]", items)
    elif attr_type is AttributeType.INTEGER_LIST:
        if not isinstance(value, (list, tuple)):
            raise reject()
        ints: list[object] = list(cast("list[object] | tuple[object, ...]", value))
        if not all(_is_int32(v) for v in ints):
            raise reject()
        payload.int_list_value = cast("list[int]", ints)
    elif attr_type in STRING_DICT_TYPES:
        if not isinstance(value, Mapping):
            raise reject()
        entries: Mapping[object, object] = cast("Mapping[object, object]", value)
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in entries.items()):
            raise reject()
        payload.string_dict_value = [
            StringDictEntry(key=cast("str", k), value=cast("str", entries[k]))
            for k in sorted(cast("list[str]", list(entries)))
        ]
    else:
        payload.string_value = str(value)
    return payload


def build_target_payload(record: TargetRecord) -> TargetPayload:
    """Build the payload of one target descriptor with its attributes.

    Args:
        record: The target record.

    Returns:
        The target payload; rule targets carry their attribute list.
    """
    target = record.target
    detail: RulePayload | FileOrGroupPayload
    if target.is_rule:
        detail = RulePayload(
            name=target.label,
            rule_class=record.rule_class or "",
            location=target.location,
            attribute=[build_attribute_payload(a) for a in record.attributes],
        )
    elif target.kind is TargetKind.GENERATED_FILE:
        detail = FileOrGroupPayload(
            name=target.label,
            location=target.location,
            generating_rule=target.generating_rule,
        )
    elif target.kind is TargetKind.PACKAGE_GROUP:
        detail = FileOrGroupPayload(
            name=target.label,
            contained_package=list(target.package_contents),
        )
    elif target.kind is TargetKind.ENVIRONMENT_GROUP:
        detail = FileOrGroupPayload(name=target.label)
    else:
        detail = FileOrGroupPayload(name=target.label, location=target.location)
    return TargetPayload(type=target.kind.name, detail_key=_DETAIL_KEYS[target.kind], detail=detail)


def build_configured_target_payload(record: TargetRecord) -> ConfiguredTargetPayload:
    """Build the payload of one target together with its configuration checksum."""
    return ConfiguredTargetPayload(
        target=build_target_payload(record),
        checksum=record.configuration,
    )
