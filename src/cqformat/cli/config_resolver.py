# topmark:header:start
#
#   project      : CQFormat
#   file         : config_resolver.py
#   file_relpath : src/cqformat/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Utilities for resolving CQFormat configuration from Click parameters.

Bridges CLI parsing and the configuration layer: builds an `ArgsNamespace`,
merges defaults, discovered and explicit config files, applies the CLI
overrides and freezes the result.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from cqformat.cli.cli_types import build_args_namespace
from cqformat.cli.errors import CQFormatConfigError
from cqformat.config.logging import get_logger
from cqformat.config.model import MutableConfig
from cqformat.core.diagnostics import DiagnosticLevel
from cqformat.core.errors import UnknownFormatError

if TYPE_CHECKING:
    from cqformat.cli.cli_types import ArgsNamespace
    from cqformat.config.logging import CQFormatLogger
    from cqformat.config.model import Config
    from cqformat.core.formats import OutputFormat

logger: CQFormatLogger = get_logger(__name__)


def resolve_config_from_click(
    *,
    input_path: str | None,
    output_format: OutputFormat | None,
    include_configurations: bool | None,
    include_default_values: bool | None,
    rule_attributes: list[str] | None,
    sort_by_label: bool | None,
    jobs: int | None,
    no_config: bool,
    config_paths: list[str],
) -> Config:
    """Build a frozen `Config` from Click parameters.

    Resolution order (lowest to highest precedence):
      1. Packaged defaults.
      2. Discovered project configs (root to anchor), unless ``--no-config``.
         Discovery is anchored at the input file's directory, or at the
         current working directory when reading from stdin.
      3. Explicit config files passed via ``--config``, merged in order.
      4. CLI overrides.

    Raises:
        CQFormatConfigError: If the merged configuration has errors or names
            an unsupported output format.
    """
    args: ArgsNamespace = build_args_namespace(
        output_format=output_format,
        include_configurations=include_configurations,
        include_default_values=include_default_values,
        rule_attributes=rule_attributes or None,
        sort_by_label=sort_by_label,
        jobs=jobs,
        no_config=no_config,
        config_files=config_paths,
    )
    logger.trace("ArgsNamespace: %s", args)

    anchor: Path = Path.cwd().resolve()
    if input_path and input_path != "-":
        anchor = Path(input_path).resolve().parent
    logger.debug("Config discovery anchor: %s", anchor)

    draft: MutableConfig = MutableConfig.load_merged(
        anchor=anchor,
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    draft = draft.apply_cli_args(args)

    try:
        config: Config = draft.freeze()
    except UnknownFormatError as exc:
        raise CQFormatConfigError(str(exc)) from exc

    if config.has_errors:
        errors: list[str] = [
            d.message for d in config.diagnostics if d.level is DiagnosticLevel.ERROR
        ]
        raise CQFormatConfigError("invalid configuration: " + "; ".join(errors))
    return config
