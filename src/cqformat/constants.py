# topmark:header:start
#
#   project      : CQFormat
#   file         : constants.py
#   file_relpath : src/cqformat/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

CQFORMAT: str = "cqformat"
CQFORMAT_VERSION: str = get_version("cqformat")

# Configuration discovery
CONFIG_FILE_NAME: str = "cqformat.toml"
PYPROJECT_FILE_NAME: str = "pyproject.toml"
PYPROJECT_TOOL_SECTION: str = "tool.cqformat"

# Environment variable consulted for the internal log level
LOG_LEVEL_ENV_VAR: str = "CQFORMAT_LOG_LEVEL"

# Condition label naming the fallback branch of a `select()` expression
DEFAULT_CONDITION_LABEL: str = "//conditions:default"

# Special `rule_attributes` entry meaning "emit every attribute"
ALL_RULE_ATTRIBUTES: str = "all"

VALUE_NOT_SET: str = "<not set>"
