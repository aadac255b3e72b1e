# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O for CQFormat configuration.

Modules:
    - `loaders`: read TOML files and build the runtime defaults.
    - `getters`: unchecked and checked value getters for parsed tables.
    - `render`: serialize tables back to TOML text.
    - `types`: shared type aliases.
"""

from __future__ import annotations

from cqformat.config.io.getters import (
    check_unknown_keys,
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    get_table_value_checked,
)
from cqformat.config.io.loaders import load_defaults_dict, load_toml_dict
from cqformat.config.io.render import to_toml
from cqformat.config.io.types import TomlTable

__all__ = [
    "TomlTable",
    "check_unknown_keys",
    "get_bool_value_or_none_checked",
    "get_int_value_or_none_checked",
    "get_string_list_value_or_none_checked",
    "get_string_value_or_none_checked",
    "get_table_value",
    "get_table_value_checked",
    "load_defaults_dict",
    "load_toml_dict",
    "to_toml",
]
