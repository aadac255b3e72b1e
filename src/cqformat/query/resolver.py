# topmark:header:start
#
#   project      : CQFormat
#   file         : resolver.py
#   file_relpath : src/cqformat/query/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve declared attribute values under one configuration.

Resolution is a pure function of the declared value and the condition match
results computed upstream for the target's configuration:

- `LiteralValue` resolves to its value unchanged.
- `SelectValue` resolves to the value of the single matching condition. Two or
  more distinct matching conditions raise `ConfigurationAmbiguityError`. With
  no match, the default branch is used when present, else the attribute is
  `UNRESOLVABLE` (the record builder then omits it).

Condition labels missing from the match mapping count as not matching.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from cqformat.config.logging import get_logger
from cqformat.constants import DEFAULT_CONDITION_LABEL
from cqformat.core.errors import ConfigurationAmbiguityError
from cqformat.query.types import (
    NO_DEFAULT,
    UNRESOLVABLE,
    ConfiguredAttributeView,
    LiteralValue,
    SelectValue,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.types import RuleDefinition

logger: CQFormatLogger = get_logger(__name__)


class AttributeResolver(Protocol):
    """Callable that resolves one attribute of a rule for one configuration."""

    def __call__(
        self,
        rule: RuleDefinition,
        attribute_name: str,
        config_conditions: Mapping[str, bool],
        configuration: str,
    ) -> object: ...


def resolve_select(
    selector: SelectValue,
    config_conditions: Mapping[str, bool],
    *,
    attribute_name: str,
    configuration: str,
) -> object:
    """Pick the value of a conditional selector.

    Args:
        selector: The declared selector.
        config_conditions: Condition label -> match result.
        attribute_name: Attribute being resolved (for error reporting).
        configuration: Configuration token (for error reporting).

    Returns:
        The selected value, the default, or `UNRESOLVABLE`.

    Raises:
        ConfigurationAmbiguityError: If more than one distinct condition matches.
    """
    matched: dict[str, object] = {}
    default: object = selector.default
    for label, value in selector.branches:
        if label == DEFAULT_CONDITION_LABEL:
            if default is NO_DEFAULT:
                default = value
            continue
        # Repeated labels count once; the first branch wins.
        if config_conditions.get(label, False) and label not in matched:
            matched[label] = value

    if len(matched) > 1:
        raise ConfigurationAmbiguityError(attribute_name, configuration, matched)
    if matched:
        return next(iter(matched.values()))
    if default is not NO_DEFAULT:
        return default
    return UNRESOLVABLE


def resolve_attribute(
    rule: RuleDefinition,
    attribute_name: str,
    config_conditions: Mapping[str, bool],
    configuration: str,
) -> object:
    """Resolve one attribute of ``rule`` under ``configuration``.

    Args:
        rule: Rule declaring the attribute.
        attribute_name: Name of the attribute; must be declared by ``rule``.
        config_conditions: Condition label -> match result for ``configuration``.
        configuration: Configuration token.

    Returns:
        The resolved value, or `UNRESOLVABLE`.

    Raises:
        KeyError: If ``rule`` does not declare ``attribute_name``.
        ConfigurationAmbiguityError: If the selector matches ambiguously.
    """
    declared = rule.attribute(attribute_name).declared
    if isinstance(declared, LiteralValue):
        return declared.value

    value: object = resolve_select(
        declared,
        config_conditions,
        attribute_name=attribute_name,
        configuration=configuration,
    )
    logger.trace(
        "%s: %s resolved to %r in configuration %s",
        rule.name,
        attribute_name,
        value,
        configuration,
    )
    return value


def resolve_view(
    rule: RuleDefinition,
    config_conditions: Mapping[str, bool],
    configuration: str,
    *,
    resolver: AttributeResolver = resolve_attribute,
    names: Iterable[str] | None = None,
) -> ConfiguredAttributeView:
    """Resolve attributes of ``rule`` into a `ConfiguredAttributeView`.

    Args:
        rule: Rule declaring the attributes.
        config_conditions: Condition label -> match result for ``configuration``.
        configuration: Configuration token.
        resolver: Resolution function applied to each attribute.
        names: Attributes to resolve, in resolution order. None resolves
            every attribute of ``rule``.

    Raises:
        ConfigurationAmbiguityError: If a resolved selector matches ambiguously.
    """
    selected: list[str] = list(rule.attributes if names is None else names)
    values: dict[str, object] = {
        name: resolver(rule, name, config_conditions, configuration) for name in selected
    }
    return ConfiguredAttributeView(
        rule=rule,
        configuration=configuration,
        values=values,
        names=None if names is None else frozenset(selected),
    )
