# topmark:header:start
#
#   project      : CQFormat
#   file         : __init__.py
#   file_relpath : src/cqformat/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the CQFormat CLI."""
