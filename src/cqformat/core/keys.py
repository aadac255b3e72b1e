# topmark:header:start
#
#   project      : CQFormat
#   file         : keys.py
#   file_relpath : src/cqformat/core/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared canonical argument keys.

These keys are the contract between argument parsing (CLI or API callers) and
`MutableConfig.apply_cli_args`. Values are Python identifiers, not CLI spellings.
Keep this module behavior-free so it can be imported from anywhere.
"""

from __future__ import annotations

from typing import Final


class ArgKey:
    """Canonical argument keys used by the CQFormat CLI / API."""

    # Input / output
    INPUT: Final[str] = "input"
    OUTPUT: Final[str] = "output"
    OUTPUT_FORMAT: Final[str] = "output_format"
    INPUT_FORMAT: Final[str] = "input_format"

    # Record content
    INCLUDE_CONFIGURATIONS: Final[str] = "include_configurations"
    INCLUDE_DEFAULT_VALUES: Final[str] = "include_default_values"
    RULE_ATTRIBUTES: Final[str] = "rule_attributes"
    SORT_BY_LABEL: Final[str] = "sort_by_label"

    # Execution
    JOBS: Final[str] = "jobs"

    # Config discovery
    CONFIG_FILES: Final[str] = "config_files"
    NO_CONFIG: Final[str] = "no_config"

    # Logging / UX
    VERBOSE: Final[str] = "verbose"
    QUIET: Final[str] = "quiet"
    VERBOSITY_LEVEL: Final[str] = "verbosity_level"
    LOG_LEVEL: Final[str] = "log_level"
