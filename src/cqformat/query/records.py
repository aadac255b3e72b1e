# topmark:header:start
#
#   project      : CQFormat
#   file         : records.py
#   file_relpath : src/cqformat/query/records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build one `TargetRecord` per configured target.

The builder composes three collaborators instead of relying on subclass hooks:

- the attribute order (`cqformat.query.ordering`),
- an `AttributeResolver` callable (default: `resolve_attribute`), applied
  through `resolve_view` to the attributes selected for output,
- an `AttributeFilter` deciding which declared attributes are emitted at all.

Attributes that resolve to `UNRESOLVABLE` are omitted from the record; this is
a hiding policy, not an error. The builder holds no mutable state and can be
shared by any number of producer threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from cqformat.config.logging import get_logger
from cqformat.query.ordering import sort_attributes
from cqformat.query.resolver import resolve_attribute, resolve_view
from cqformat.query.types import AttributeRecord, TargetRecord

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from cqformat.config.logging import CQFormatLogger
    from cqformat.query.resolver import AttributeResolver
    from cqformat.query.types import (
        AttributeDefinition,
        ConfiguredAttributeView,
        ConfiguredTarget,
        RuleDefinition,
        Target,
    )

logger: CQFormatLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class AttributeFilter:
    """Which declared attributes a record may contain.

    Attributes:
        include_default_values: If False, attributes that were not explicitly
            specified in the build file are skipped.
        rule_attributes: Names to keep, or None to keep every attribute.
    """

    include_default_values: bool = True
    rule_attributes: frozenset[str] | None = None

    def includes(self, attribute: AttributeDefinition) -> bool:
        """Return True if ``attribute`` may be emitted."""
        if self.rule_attributes is not None and attribute.name not in self.rule_attributes:
            return False
        return self.include_default_values or attribute.explicitly_specified


class TargetRecordBuilder:
    """Turn configured targets into output records."""

    def __init__(
        self,
        *,
        resolver: AttributeResolver = resolve_attribute,
        attribute_filter: AttributeFilter | None = None,
    ) -> None:
        self._resolver: AttributeResolver = resolver
        self._filter: AttributeFilter = attribute_filter or AttributeFilter()

    @property
    def attribute_filter(self) -> AttributeFilter:
        """Return the attribute filter in use."""
        return self._filter

    def build(
        self,
        target: Target,
        rule: RuleDefinition | None,
        configuration: str,
        include_configuration: bool,
        config_conditions: Mapping[str, bool] | None = None,
    ) -> TargetRecord:
        """Build the record of one target.

        Args:
            target: Base target descriptor.
            rule: Rule definition, or None for non-rule targets.
            configuration: Configuration token of the target.
            include_configuration: Attach ``configuration`` to the record.
            config_conditions: Condition match results for ``configuration``.

        Returns:
            The record; attributes are sorted by name and unresolvable ones omitted.

        Raises:
            ConfigurationAmbiguityError: If a selector matches ambiguously.
        """
        token: str | None = configuration if include_configuration else None
        if rule is None or not target.is_rule:
            return TargetRecord(target=target, configuration=token)

        # Only attributes selected for output are resolved.
        included: list[AttributeDefinition] = [
            attr
            for attr in sort_attributes(rule.attributes.values())
            if self._filter.includes(attr)
        ]
        view: ConfiguredAttributeView = resolve_view(
            rule,
            config_conditions or {},
            configuration,
            resolver=self._resolver,
            names=[attr.name for attr in included],
        )
        attributes: list[AttributeRecord] = []
        for attr in included:
            if not view.is_resolved(attr.name):
                logger.debug("%s: omitting unresolvable attribute %s", target.label, attr.name)
                continue
            attributes.append(
                AttributeRecord(
                    name=attr.name,
                    type=attr.type,
                    value=view.get(attr.name),
                    explicitly_specified=attr.explicitly_specified,
                )
            )

        return TargetRecord(
            target=target,
            attributes=tuple(attributes),
            rule_class=rule.rule_class,
            configuration=token,
        )

    def build_configured(
        self,
        configured: ConfiguredTarget,
        *,
        include_configuration: bool,
    ) -> TargetRecord:
        """Build the record of one `ConfiguredTarget` input tuple."""
        return self.build(
            configured.target,
            configured.rule,
            configured.configuration,
            include_configuration,
            configured.config_conditions,
        )

    def build_batch(
        self,
        batch: Iterable[ConfiguredTarget],
        *,
        include_configuration: bool,
    ) -> list[TargetRecord]:
        """Build records for a batch, preserving the batch order."""
        return [
            self.build_configured(configured, include_configuration=include_configuration)
            for configured in batch
        ]
