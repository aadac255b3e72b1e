# topmark:header:start
#
#   project      : CQFormat
#   file         : ordering.py
#   file_relpath : src/cqformat/query/ordering.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Deterministic attribute ordering.

Attributes are emitted in code point order of their names, independent of
declaration or storage order, so identical logical input always encodes to
identical bytes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from cqformat.query.types import AttributeDefinition


def attribute_sort_key(attribute: AttributeDefinition) -> str:
    """Return the sort key of an attribute: its name."""
    return attribute.name


def sort_attributes(attributes: Iterable[AttributeDefinition]) -> list[AttributeDefinition]:
    """Return ``attributes`` sorted by name (plain code point comparison).

    Names are unique within a rule, so the order is total.
    """
    return sorted(attributes, key=attribute_sort_key)


def sort_attribute_names(names: Iterable[str]) -> list[str]:
    """Return attribute ``names`` in emission order."""
    return sorted(names)
