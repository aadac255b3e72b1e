# topmark:header:start
#
#   project      : CQFormat
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration and shared builders for the CQFormat test suite.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `cqformat.config.model.MutableConfig`, then
      `freeze()` into a `Config`.
    - Do **not** mutate a frozen `Config`. Call `Config.thaw()`, edit the
      returned `MutableConfig`, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from cqformat.config import logging
from cqformat.config.model import MutableConfig
from cqformat.constants import LOG_LEVEL_ENV_VAR
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

if TYPE_CHECKING:
    from cqformat.config.model import Config

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.slow`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_cqformat_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure CQFormat's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture used to manipulate environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at DEBUG level while the suite runs."""
    logging.setup_logging(level=logging.logging.DEBUG)


# ----------------------------- model builders -----------------------------


def literal(
    name: str,
    attr_type: AttributeType,
    value: object,
    *,
    explicit: bool = True,
) -> AttributeDefinition:
    """Return an attribute declared with a plain value."""
    return AttributeDefinition(
        name=name, type=attr_type, declared=LiteralValue(value), explicitly_specified=explicit
    )


def select(
    name: str,
    attr_type: AttributeType,
    branches: Mapping[str, object],
    *,
    explicit: bool = True,
    **kwargs: object,
) -> AttributeDefinition:
    """Return an attribute declared with ``select(branches)``.

    Pass ``default=...`` to set an explicit fallback value.
    """
    return AttributeDefinition(
        name=name,
        type=attr_type,
        declared=SelectValue(branches=tuple(branches.items()), **kwargs),
        explicitly_specified=explicit,
    )


def rule_target(
    label: str,
    attributes: list[AttributeDefinition],
    *,
    configuration: str = "cfg-1",
    conditions: Mapping[str, bool] | None = None,
    rule_class: str = "cc_library",
    location: str | None = None,
) -> ConfiguredTarget:
    """Return a configured rule target."""
    return ConfiguredTarget(
        target=Target(label=label, kind=TargetKind.RULE, location=location),
        configuration=configuration,
        rule=RuleDefinition.from_attributes(label, rule_class, attributes, location=location),
        config_conditions=conditions or {},
    )


def file_target(label: str, *, configuration: str = "cfg-1") -> ConfiguredTarget:
    """Return a configured source file target."""
    return ConfiguredTarget(
        target=Target(label=label, kind=TargetKind.SOURCE_FILE, location=f"{label}:1:1"),
        configuration=configuration,
    )


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides."""
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()
