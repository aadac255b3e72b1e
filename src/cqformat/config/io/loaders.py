# topmark:header:start
#
#   project      : CQFormat
#   file         : loaders.py
#   file_relpath : src/cqformat/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading CQFormat configuration from
on-disk TOML files (``cqformat.toml`` / ``pyproject.toml``) and for building the
runtime defaults. Parsing is done with `tomlkit` and returned as plain `dict`
structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from cqformat.config.keys import Toml
from cqformat.config.logging import get_logger
from cqformat.constants import ALL_RULE_ATTRIBUTES
from cqformat.core.formats import OutputFormat

if TYPE_CHECKING:
    from pathlib import Path

    from cqformat.config.logging import CQFormatLogger
    from cqformat.core.diagnostics import DiagnosticLog

    from .types import TomlTable

logger: CQFormatLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return CQFormat's runtime defaults as a new dict.

    Sections and keys align with `cqformat.config.keys.Toml`. This function
    performs no I/O.
    """
    return {
        Toml.SECTION_OUTPUT: {
            Toml.KEY_FORMAT: OutputFormat.JSON.value,
            Toml.KEY_INCLUDE_CONFIGURATIONS: True,
            Toml.KEY_INCLUDE_DEFAULT_VALUES: True,
            Toml.KEY_RULE_ATTRIBUTES: [ALL_RULE_ATTRIBUTES],
            Toml.KEY_SORT_BY_LABEL: False,
        },
        Toml.SECTION_RUN: {
            Toml.KEY_JOBS: 1,
        },
    }


def load_toml_dict(path: Path, diagnostics: DiagnosticLog | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``cqformat.toml`` or ``pyproject.toml``).
        diagnostics: Optional log receiving an error diagnostic on failure.

    Returns:
        The parsed TOML content, or an empty dict on failure.

    Notes:
        - Errors are logged (and recorded) and an empty dict is returned.
        - Encoding is assumed to be UTF-8.
    """
    message: str
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        message = f"Error loading TOML from {path}: {e}"
    except TomlkitParseError as e:
        message = f"Error decoding TOML from {path}: {e}"
    if diagnostics is not None:
        diagnostics.add_error(message)
    else:
        logger.error("%s", message)
    return {}
