# topmark:header:start
#
#   project      : CQFormat
#   file         : __main__.py
#   file_relpath : src/cqformat/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Allow ``python -m cqformat``."""

from __future__ import annotations

from cqformat.cli.main import cli

if __name__ == "__main__":
    cli()
