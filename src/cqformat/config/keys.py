# topmark:header:start
#
#   project      : CQFormat
#   file         : keys.py
#   file_relpath : src/cqformat/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for CQFormat configuration.

These constants define the external configuration schema as it appears in
``cqformat.toml`` and in ``[tool.cqformat]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change. CLI keys live in
`cqformat.core.keys`.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by CQFormat configuration."""

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [output]
    SECTION_OUTPUT: Final[str] = "output"

    KEY_FORMAT: Final[str] = "format"
    KEY_INCLUDE_CONFIGURATIONS: Final[str] = "include_configurations"
    KEY_INCLUDE_DEFAULT_VALUES: Final[str] = "include_default_values"
    KEY_RULE_ATTRIBUTES: Final[str] = "rule_attributes"
    KEY_SORT_BY_LABEL: Final[str] = "sort_by_label"

    # [run]
    SECTION_RUN: Final[str] = "run"

    KEY_JOBS: Final[str] = "jobs"

    # Keys accepted per section; anything else is reported as unknown.
    KNOWN_KEYS: Final[dict[str, frozenset[str]]] = {
        SECTION_OUTPUT: frozenset(
            {
                KEY_FORMAT,
                KEY_INCLUDE_CONFIGURATIONS,
                KEY_INCLUDE_DEFAULT_VALUES,
                KEY_RULE_ATTRIBUTES,
                KEY_SORT_BY_LABEL,
            }
        ),
        SECTION_RUN: frozenset({KEY_JOBS}),
    }
