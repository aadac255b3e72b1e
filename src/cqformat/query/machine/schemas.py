# topmark:header:start
#
#   project      : CQFormat
#   file         : schemas.py
#   file_relpath : src/cqformat/query/machine/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Schema objects for encoded query results.

This module defines the canonical keys and the small dataclasses used as the
*typed payload layer* for query output. Instances are trivially serializable via
`to_dict()`.

Key order inside every `to_dict()` result is scalars first, nested tables last,
so that the structured-text (TOML) codec can render nested tables after the
scalar keys of their parent table. Unset fields (`None`) are left out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final


class ResultKey:
    """Canonical keys used in encoded query results."""

    # Top-level containers
    RESULTS: Final[str] = "results"
    TARGET: Final[str] = "target"
    CONFIGURATION: Final[str] = "configuration"
    CHECKSUM: Final[str] = "checksum"

    # Target descriptor
    TYPE: Final[str] = "type"
    RULE: Final[str] = "rule"
    SOURCE_FILE: Final[str] = "source_file"
    GENERATED_FILE: Final[str] = "generated_file"
    PACKAGE_GROUP: Final[str] = "package_group"
    ENVIRONMENT_GROUP: Final[str] = "environment_group"

    NAME: Final[str] = "name"
    RULE_CLASS: Final[str] = "rule_class"
    LOCATION: Final[str] = "location"
    ATTRIBUTE: Final[str] = "attribute"
    GENERATING_RULE: Final[str] = "generating_rule"
    CONTAINED_PACKAGE: Final[str] = "contained_package"

    # Attribute
    EXPLICITLY_SPECIFIED: Final[str] = "explicitly_specified"
    STRING_VALUE: Final[str] = "string_value"
    INT_VALUE: Final[str] = "int_value"
    STRING_LIST_VALUE: Final[str] = "string_list_value"
    INT_LIST_VALUE: Final[str] = "int_list_value"
    STRING_DICT_VALUE: Final[str] = "string_dict_value"
    KEY: Final[str] = "key"
    VALUE: Final[str] = "value"


@dataclass(slots=True)
class StringDictEntry:
    """One ``{key, value}`` entry of a string dictionary attribute."""

    key: str
    value: str

    def to_dict(self) -> dict[str, object]:
        """Return a plain dict of the entry."""
        return {ResultKey.KEY: self.key, ResultKey.VALUE: self.value}


@dataclass(slots=True)
class AttributePayload:
    """Encoded form of one resolved rule attribute.

    At most the typed value fields matching `type` are set; an attribute whose
    resolved value is `None` carries no value field at all.

    Attributes:
        name: Attribute name.
        type: Attribute type name (e.g. ``"STRING_LIST"``).
        explicitly_specified: True when set in the build file.
        string_value: Scalar string form.
        int_value: Scalar integer form.
        string_list_value: List of strings.
        int_list_value: List of integers.
        string_dict_value: Dictionary entries sorted by key.
    """

    name: str
    type: str
    explicitly_specified: bool
    string_value: str | None = None
    int_value: int | None = None
    string_list_value: list[str] | None = None
    int_list_value: list[int] | None = None
    string_dict_value: list[StringDictEntry] | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a plain dict, scalars first, omitting unset value fields."""
        out: dict[str, object] = {
            ResultKey.NAME: self.name,
            ResultKey.TYPE: self.type,
            ResultKey.EXPLICITLY_SPECIFIED: self.explicitly_specified,
        }
        if self.int_value is not None:
            out[ResultKey.INT_VALUE] = self.int_value
        if self.string_value is not None:
            out[ResultKey.STRING_VALUE] = self.string_value
        if self.string_list_value is not None:
            out[ResultKey.STRING_LIST_VALUE] = self.string_list_value
        if self.int_list_value is not None:
            out[ResultKey.INT_LIST_VALUE] = self.int_list_value
        if self.string_dict_value is not None:
            out[ResultKey.STRING_DICT_VALUE] = [e.to_dict() for e in self.string_dict_value]
        return out


@dataclass(slots=True)
class RulePayload:
    """Encoded form of a rule target."""

    name: str
    rule_class: str
    location: str | None = None
    attribute: list[AttributePayload] = field(default_factory=lambda: [])

    def to_dict(self) -> dict[str, object]:
        """Return a plain dict; the attribute list comes last."""
        out: dict[str, object] = {
            ResultKey.NAME: self.name,
            ResultKey.RULE_CLASS: self.rule_class,
        }
        if self.location is not None:
            out[ResultKey.LOCATION] = self.location
        out[ResultKey.ATTRIBUTE] = [a.to_dict() for a in self.attribute]
        return out


@dataclass(slots=True)
class FileOrGroupPayload:
    """Encoded form of a non-rule target (file, package group, environment group)."""

    name: str
    location: str | None = None
    generating_rule: str | None = None
    contained_package: list[str] | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a plain dict, omitting unset fields."""
        out: dict[str, object] = {ResultKey.NAME: self.name}
        if self.location is not None:
            out[ResultKey.LOCATION] = self.location
        if self.generating_rule is not None:
            out[ResultKey.GENERATING_RULE] = self.generating_rule
        if self.contained_package is not None:
            out[ResultKey.CONTAINED_PACKAGE] = self.contained_package
        return out


@dataclass(slots=True)
class TargetPayload:
    """Encoded form of one target: its kind and exactly one detail table.

    Attributes:
        type: Target kind name (e.g. ``"RULE"``).
        detail_key: Key of the detail table (`ResultKey.RULE`, ...).
        detail: The detail payload.
    """

    type: str
    detail_key: str
    detail: RulePayload | FileOrGroupPayload

    def to_dict(self) -> dict[str, object]:
        """Return ``{"type": ..., <detail_key>: {...}}``."""
        return {ResultKey.TYPE: self.type, self.detail_key: self.detail.to_dict()}


@dataclass(slots=True)
class ConfiguredTargetPayload:
    """A target plus the checksum of the configuration it was evaluated in."""

    target: TargetPayload
    checksum: str | None = None

    def to_dict(self) -> dict[str, object]:
        """Return a plain dict; ``configuration`` is omitted without a checksum."""
        out: dict[str, object] = {ResultKey.TARGET: self.target.to_dict()}
        if self.checksum is not None:
            out[ResultKey.CONFIGURATION] = {ResultKey.CHECKSUM: self.checksum}
        return out
