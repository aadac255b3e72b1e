# topmark:header:start
#
#   project      : CQFormat
#   file         : cli_types.py
#   file_relpath : src/cqformat/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared CLI parameter types and argument namespace for CQFormat.

Defines the `ArgsNamespace` TypedDict used to hand parsed CLI state to
`MutableConfig.apply_cli_args`, and `EnumChoiceParam`, a Click parameter type
converting strings to enum members.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import TYPE_CHECKING, Generic, NoReturn, Protocol, TypedDict, TypeVar, cast

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    from cqformat.core.formats import OutputFormat

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    # At runtime, subclass the real Click type
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)


class ArgsNamespace(TypedDict, total=False):
    """Parsed CLI arguments and options of the `format` command.

    Keys match `cqformat.core.keys.ArgKey`. Absent keys or ``None`` values
    mean "inherit from configuration".
    """

    output_format: OutputFormat | None
    include_configurations: bool | None
    include_default_values: bool | None
    rule_attributes: list[str] | None
    sort_by_label: bool | None
    jobs: int | None
    no_config: bool | None
    config_files: list[str] | None


def build_args_namespace(
    *,
    output_format: OutputFormat | None = None,
    include_configurations: bool | None = None,
    include_default_values: bool | None = None,
    rule_attributes: list[str] | None = None,
    sort_by_label: bool | None = None,
    jobs: int | None = None,
    no_config: bool | None = None,
    config_files: list[str] | None = None,
) -> ArgsNamespace:
    """Build an `ArgsNamespace` for config resolution."""
    return {
        "output_format": output_format,
        "include_configurations": include_configurations,
        "include_default_values": include_default_values,
        "rule_attributes": rule_attributes,
        "sort_by_label": sort_by_label,
        "jobs": jobs,
        "no_config": no_config,
        "config_files": config_files,
    }


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of a given Enum.

    Matching is case-insensitive on the members' string values and on the
    optional ``aliases`` mapping.
    """

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E], aliases: Mapping[str, E] | None = None) -> None:
        self.enum_cls = enum_cls
        self.name = self.enum_cls.__name__.lower()
        self.choices = [cast("str", getattr(e, "value", str(e))) for e in self.enum_cls]
        self.aliases: dict[str, E] = {k.lower(): v for k, v in (aliases or {}).items()}

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: str | E | None,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum."""
        if value is None or isinstance(value, self.enum_cls):
            return value

        lookup: dict[str, E] = {
            cast("str", getattr(choice, "value", str(choice))).lower(): choice
            for choice in cast("Iterable[E]", self.enum_cls)
        }
        key: str = str(value).lower()
        if key in lookup:
            return lookup[key]
        if key in self.aliases:
            return self.aliases[key]

        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def shell_complete(
        self,
        ctx: click.Context,
        param: click.Parameter,
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_CQFORMAT_COMPLETE=bash_source cqformat)"`
        """
        # Runtime import to avoid import-time dependency for non-completion paths
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix: str = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.lower().startswith(prefix)]

    def __repr__(self) -> str:
        """Return a string representation."""
        return f"EnumParam({self.enum_cls.__name__})"
