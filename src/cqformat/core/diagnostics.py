# topmark:header:start
#
#   project      : CQFormat
#   file         : diagnostics.py
#   file_relpath : src/cqformat/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic types and helpers for CQFormat.

Diagnostics are collected while loading and merging configuration so that
user mistakes (wrong value types, unknown keys, out-of-range values) are
surfaced without crashing and without silently changing defaults.

Sections:
    * DiagnosticLevel: severity levels.
    * Diagnostic: immutable structured diagnostic payload (level + message).
    * DiagnosticLog: mutable collection with helpers for adding and querying.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from cqformat.config.logging import get_logger

if TYPE_CHECKING:
    from cqformat.config.logging import CQFormatLogger

logger: CQFormatLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics, ordered by importance: ERROR > WARNING."""

    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message."""

    level: DiagnosticLevel
    message: str


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics.

    Provides convenience helpers for adding diagnostics at a given level and
    for querying what was collected (`has_error`, `count`).
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticLog:
        """Create a DiagnosticLog from an iterable of diagnostics."""
        return cls(items=list(diagnostics))

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic to the log and mirror it to the logger.

        Args:
            message: The diagnostic message.
        """
        logger.warning("%s", message)
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic to the log and mirror it to the logger.

        Args:
            message: The diagnostic message.
        """
        logger.error("%s", message)
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def extend(self, other: Iterable[Diagnostic]) -> None:
        """Append diagnostics from another log or iterable, keeping their order."""
        self.items.extend(other)

    def count(self, level: DiagnosticLevel) -> int:
        """Return the number of diagnostics at ``level``."""
        return sum(1 for d in self.items if d.level is level)

    def has_error(self) -> bool:
        """Return True if the DiagnosticLog contains error diagnostics."""
        return self.count(DiagnosticLevel.ERROR) > 0

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
