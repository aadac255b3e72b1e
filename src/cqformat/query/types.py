# topmark:header:start
#
#   project      : CQFormat
#   file         : types.py
#   file_relpath : src/cqformat/query/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Data model of the configured query output pipeline.

Inputs (borrowed, never mutated):
    * `RuleDefinition` with its `AttributeDefinition` entries. Each attribute
      declares either a `LiteralValue` or a `SelectValue` (a conditional
      selector over configuration conditions).
    * `Target` descriptors and `ConfiguredTarget` input tuples, which pair a
      target with its configuration token and condition match results.

Produced per target (transient):
    * `ConfiguredAttributeView`: every attribute resolved for one configuration.
    * `AttributeRecord` / `TargetRecord`: what ends up in the result set.

Produced once per run:
    * `ResultSet`: the immutable, finalized sequence of records.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Final, Union


class AttributeType(Enum):
    """Declared type of a rule attribute.

    The type selects the typed value field used when the attribute is encoded
    (see `cqformat.query.machine.payloads.build_attribute_payload`).
    """

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    TRISTATE = "tristate"
    LABEL = "label"
    OUTPUT = "output"
    LICENSE = "license"
    STRING_LIST = "string_list"
    LABEL_LIST = "label_list"
    OUTPUT_LIST = "output_list"
    INTEGER_LIST = "integer_list"
    STRING_DICT = "string_dict"
    LABEL_DICT_UNARY = "label_dict_unary"
    UNKNOWN = "unknown"


class TargetKind(Enum):
    """Kind of a queried build-graph node. Only `RULE` targets carry attributes."""

    RULE = "rule"
    SOURCE_FILE = "source_file"
    GENERATED_FILE = "generated_file"
    PACKAGE_GROUP = "package_group"
    ENVIRONMENT_GROUP = "environment_group"


class Sentinel(Enum):
    """Marker values that can never be confused with a real attribute value."""

    NO_DEFAULT = "no_default"
    UNRESOLVABLE = "unresolvable"

    def __repr__(self) -> str:
        return self.name


NO_DEFAULT: Final = Sentinel.NO_DEFAULT
UNRESOLVABLE: Final = Sentinel.UNRESOLVABLE


@dataclass(frozen=True, slots=True)
class LiteralValue:
    """A plain declared attribute value, used as-is in every configuration."""

    value: object


@dataclass(frozen=True, slots=True)
class SelectValue:
    """A conditional selector: ``select({condition: value, ...})``.

    Attributes:
        branches: Ordered ``(condition_label, value)`` pairs.
        default: Fallback value, or `NO_DEFAULT`. A branch labelled
            ``//conditions:default`` also acts as the fallback.
    """

    branches: tuple[tuple[str, object], ...]
    default: object = NO_DEFAULT


DeclaredValue = Union[LiteralValue, SelectValue]


@dataclass(frozen=True, slots=True)
class AttributeDefinition:
    """One declared attribute of a rule.

    Attributes:
        name: Attribute name, unique within its rule.
        type: Declared value type.
        declared: The literal or conditional declared value.
        explicitly_specified: True when the value was written in the build
            file rather than inherited from the rule class default.
    """

    name: str
    type: AttributeType
    declared: DeclaredValue
    explicitly_specified: bool = False


@dataclass(frozen=True, slots=True)
class RuleDefinition:
    """Immutable description of a rule target's declared attributes.

    Attributes:
        name: Label of the rule target.
        rule_class: Rule class (e.g. ``cc_library``).
        attributes: Read-only mapping of attribute name to definition.
        location: Optional source location of the rule declaration.
    """

    name: str
    rule_class: str
    attributes: Mapping[str, AttributeDefinition] = field(default_factory=lambda: {})
    location: str | None = None

    def __post_init__(self) -> None:
        for key, attr in self.attributes.items():
            if key != attr.name:
                raise ValueError(f"attribute key '{key}' does not match its name '{attr.name}'")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @classmethod
    def from_attributes(
        cls,
        name: str,
        rule_class: str,
        attributes: Iterable[AttributeDefinition],
        *,
        location: str | None = None,
    ) -> RuleDefinition:
        """Build a rule from attribute definitions in declaration order.

        Raises:
            ValueError: If two attributes share a name.
        """
        by_name: dict[str, AttributeDefinition] = {}
        for attr in attributes:
            if attr.name in by_name:
                raise ValueError(f"duplicate attribute '{attr.name}' in rule {name}")
            by_name[attr.name] = attr
        return cls(name=name, rule_class=rule_class, attributes=by_name, location=location)

    def attribute(self, name: str) -> AttributeDefinition:
        """Return the definition of attribute ``name``.

        Raises:
            KeyError: If the rule does not declare ``name``.
        """
        try:
            return self.attributes[name]
        except KeyError:
            raise KeyError(f"rule {self.name} does not declare attribute '{name}'") from None


@dataclass(frozen=True, slots=True)
class Target:
    """Base descriptor of a queried target.

    Attributes:
        label: Target label (e.g. ``//pkg:lib``).
        kind: Target kind.
        location: Optional source location.
        generating_rule: Label of the generating rule (generated files only).
        package_contents: Contained package specs (package groups only).
    """

    label: str
    kind: TargetKind
    location: str | None = None
    generating_rule: str | None = None
    package_contents: tuple[str, ...] = ()

    @property
    def is_rule(self) -> bool:
        """Return True for rule targets."""
        return self.kind is TargetKind.RULE


@dataclass(frozen=True, slots=True)
class ConfiguredTarget:
    """One input tuple from the query engine.

    Attributes:
        target: The target descriptor.
        configuration: Opaque token (checksum) naming the target's configuration.
        rule: Rule definition; non-null exactly when the target is a rule.
        config_conditions: Condition label -> match result, computed for
            ``configuration``.
    """

    target: Target
    configuration: str
    rule: RuleDefinition | None = None
    config_conditions: Mapping[str, bool] = field(default_factory=lambda: {})

    def __post_init__(self) -> None:
        if self.target.is_rule and self.rule is None:
            raise ValueError(f"rule target {self.target.label} has no rule definition")
        if not self.target.is_rule and self.rule is not None:
            raise ValueError(
                f"{self.target.kind.name} target {self.target.label} cannot carry a rule definition"
            )
        object.__setattr__(
            self, "config_conditions", MappingProxyType(dict(self.config_conditions))
        )


@dataclass(frozen=True, slots=True)
class ConfiguredAttributeView:
    """A rule's attributes resolved for one configuration.

    Every attribute named in ``names`` (by default every attribute of
    ``rule``) maps to exactly one resolved value or to `UNRESOLVABLE`.
    Attributes outside ``names`` are never resolved.
    """

    rule: RuleDefinition
    configuration: str
    values: Mapping[str, object]
    names: frozenset[str] | None = None

    def __post_init__(self) -> None:
        expected: set[str] = set(self.rule.attributes if self.names is None else self.names)
        undeclared: set[str] = expected - set(self.rule.attributes)
        if undeclared:
            raise ValueError(f"rule {self.rule.name} does not declare {sorted(undeclared)}")
        missing: set[str] = expected - set(self.values)
        extra: set[str] = set(self.values) - expected
        if missing or extra:
            raise ValueError(
                f"view of {self.rule.name} does not cover its attributes "
                f"(missing={sorted(missing)}, extra={sorted(extra)})"
            )
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, name: str) -> object:
        """Return the resolved value of ``name`` (possibly `UNRESOLVABLE`)."""
        return self.values[name]

    def is_resolved(self, name: str) -> bool:
        """Return True if ``name`` resolved to a concrete value."""
        return self.values[name] is not UNRESOLVABLE


@dataclass(frozen=True, slots=True)
class AttributeRecord:
    """One emitted attribute: name, type, resolved value, explicit flag."""

    name: str
    type: AttributeType
    value: object
    explicitly_specified: bool


@dataclass(frozen=True, slots=True)
class TargetRecord:
    """One output record per queried target.

    Attributes:
        target: Base target descriptor.
        attributes: Resolved attributes sorted by name (empty for non-rules).
        rule_class: Rule class for rule targets, else None.
        configuration: Configuration token, present only when configuration
            detail was requested.
    """

    target: Target
    attributes: tuple[AttributeRecord, ...] = ()
    rule_class: str | None = None
    configuration: str | None = None

    @property
    def label(self) -> str:
        """Return the target label."""
        return self.target.label


@dataclass(frozen=True, slots=True)
class ResultSet:
    """The finalized, immutable sequence of target records."""

    records: tuple[TargetRecord, ...] = ()

    def __iter__(self) -> Iterator[TargetRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def sorted_by_label(self) -> ResultSet:
        """Return a copy ordered by target label, then configuration token."""
        return ResultSet(
            records=tuple(
                sorted(self.records, key=lambda r: (r.target.label, r.configuration or ""))
            )
        )
