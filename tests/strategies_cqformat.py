# topmark:header:start
#
#   project      : CQFormat
#   file         : strategies_cqformat.py
#   file_relpath : tests/strategies_cqformat.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for generating rules and configured targets.

Values always fit their declared attribute type, so every generated target
can be encoded.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from hypothesis import strategies as st

from cqformat.query.types import (
    AttributeDefinition,
    AttributeType,
    ConfiguredTarget,
    LiteralValue,
    RuleDefinition,
    SelectValue,
    Target,
    TargetKind,
)

Draw = Callable[[st.SearchStrategy[Any]], Any]

CONDITIONS: tuple[str, ...] = ("//conditions:linux", "//conditions:macos", "//conditions:arm")

_text: st.SearchStrategy[str] = st.text(
    alphabet=st.characters(exclude_categories=("Cs", "Cc")), max_size=12
)
_names: st.SearchStrategy[str] = st.from_regex(r"[a-z][a-z0-9_]{0,10}", fullmatch=True)

VALUES_BY_TYPE: dict[AttributeType, st.SearchStrategy[Any]] = {
    AttributeType.STRING: _text,
    AttributeType.LABEL: _text.map(lambda s: f"//pkg:{s}"),
    AttributeType.INTEGER: st.integers(min_value=-(2**31), max_value=2**31 - 1),
    AttributeType.BOOLEAN: st.booleans(),
    AttributeType.TRISTATE: st.sampled_from([-1, 0, 1]),
    AttributeType.STRING_LIST: st.lists(_text, max_size=4),
    AttributeType.INTEGER_LIST: st.lists(st.integers(min_value=0, max_value=1000), max_size=4),
    AttributeType.STRING_DICT: st.dictionaries(_names, _text, max_size=3),
}


@st.composite
def s_attribute(draw: Draw, name: str) -> AttributeDefinition:
    """Draw one attribute named ``name``, literal or conditional."""
    attr_type: AttributeType = draw(st.sampled_from(sorted(VALUES_BY_TYPE, key=lambda t: t.name)))
    values: st.SearchStrategy[Any] = VALUES_BY_TYPE[attr_type]
    explicit: bool = draw(st.booleans())
    if draw(st.booleans()):
        return AttributeDefinition(name, attr_type, LiteralValue(draw(values)), explicit)
    labels: list[str] = draw(st.lists(st.sampled_from(CONDITIONS), unique=True, max_size=3))
    branches: tuple[tuple[str, object], ...] = tuple((label, draw(values)) for label in labels)
    return AttributeDefinition(
        name, attr_type, SelectValue(branches=branches, default=draw(values)), explicit
    )


@st.composite
def s_configured_target(draw: Draw, label: str | None = None) -> ConfiguredTarget:
    """Draw a configured rule target whose conditions match at most one branch."""
    if label is None:
        label = f"//{draw(_names)}:{draw(_names)}"
    names: list[str] = draw(st.lists(_names, unique=True, max_size=6))
    attributes: list[AttributeDefinition] = [draw(s_attribute(n)) for n in names]
    matched: str | None = draw(st.none() | st.sampled_from(CONDITIONS))
    conditions: dict[str, bool] = {c: c == matched for c in CONDITIONS}
    return ConfiguredTarget(
        target=Target(label=label, kind=TargetKind.RULE),
        configuration=draw(st.from_regex(r"[0-9a-f]{8}", fullmatch=True)),
        rule=RuleDefinition.from_attributes(label, "gen_rule", attributes),
        config_conditions=conditions,
    )


def s_batches(max_batches: int = 5) -> st.SearchStrategy[list[list[ConfiguredTarget]]]:
    """Batches of configured targets."""
    return st.lists(st.lists(s_configured_target(), max_size=4), max_size=max_batches)
