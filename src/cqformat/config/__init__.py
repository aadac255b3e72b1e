# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CQFormat configuration: TOML sources, merge policy and logging setup.

Import the submodules directly (`cqformat.config.model`,
`cqformat.config.logging`, `cqformat.config.io`). This package module stays
import-light because the logging module is needed by almost every other module.
"""
