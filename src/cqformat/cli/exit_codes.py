# topmark:header:start
#
#   project      : CQFormat
#   file         : exit_codes.py
#   file_relpath : src/cqformat/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the CQFormat CLI.

CQFormat aligns with the BSD `sysexits` convention so other tooling can
interpret failures consistently. Click's own usage errors (bad option values,
missing arguments) keep Click's exit code 2.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the CQFormat CLI.

    Attributes:
        SUCCESS: Successful execution.
        FAILURE: Generic failure; prefer a more specific code.
        USAGE_ERROR: Invalid combination of flags/args. Mirrors ``EX_USAGE (64)``.
        DATA_ERROR: Malformed input document, ambiguous configurable attribute,
            or attribute value not matching its type. Mirrors ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors ``EX_NOINPUT (66)``.
        SOFTWARE_ERROR: Internal pipeline misuse (aggregation lifecycle).
            Mirrors ``EX_SOFTWARE (70)``.
        IO_ERROR: Reading input or writing output failed. Mirrors ``EX_IOERR (74)``.
        CONFIG_ERROR: Invalid configuration (unknown output format, unreadable
            config file). Mirrors ``EX_CONFIG (78)``.
        UNEXPECTED_ERROR: Unhandled/unknown error (last resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values
    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    SOFTWARE_ERROR = 70  # EX_SOFTWARE
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG

    UNEXPECTED_ERROR = 255
