# topmark:header:start
#
#   project      : CQFormat
#   file         : errors.py
#   file_relpath : src/cqformat/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the CQFormat query output pipeline.

All errors abort the run: they describe deterministic-input faults or
programming errors, never transient conditions, so nothing here is retried.
The CLI maps each class to an exit code in `cqformat.cli.errors`.
"""

from __future__ import annotations

from collections.abc import Iterable


class CQFormatError(Exception):
    """Base class for all CQFormat pipeline errors."""


class ConfigurationAmbiguityError(CQFormatError):
    """More than one condition of a `select()` attribute matched one configuration.

    Attributes:
        attribute_name: Name of the configurable attribute.
        configuration: Token of the configuration being resolved.
        conditions: Sorted labels of all matching conditions.
    """

    def __init__(self, attribute_name: str, configuration: str, conditions: Iterable[str]) -> None:
        self.attribute_name: str = attribute_name
        self.configuration: str = configuration
        self.conditions: tuple[str, ...] = tuple(sorted(conditions))
        super().__init__(
            f'Illegal ambiguous match on configurable attribute "{attribute_name}" '
            f"in configuration {configuration}: {', '.join(self.conditions)}. "
            "Multiple matches are not allowed."
        )


class AggregationStateError(CQFormatError):
    """The result aggregator was used out of order (append before start, double start)."""


class AggregationClosedError(AggregationStateError):
    """The result aggregator was appended to or finalized after finalization."""


class UnknownFormatError(CQFormatError):
    """An output format name is not one of the supported formats.

    Attributes:
        value: The rejected format name.
        choices: The accepted format names.
    """

    def __init__(self, value: object, choices: Iterable[str]) -> None:
        self.value: object = value
        self.choices: tuple[str, ...] = tuple(choices)
        super().__init__(
            f"Unknown output format '{value}' - valid choices: {', '.join(self.choices)}"
        )


class InputDocumentError(CQFormatError):
    """The query input document is malformed.

    Attributes:
        location: Human-readable position of the offending element
            (e.g. ``batches[0][2].rule.attributes[1]``).
    """

    def __init__(self, location: str, message: str) -> None:
        self.location: str = location
        super().__init__(f"{location}: {message}" if location else message)


class AttributeValueError(CQFormatError):
    """A resolved attribute value does not fit the attribute's declared type.

    Attributes:
        attribute_name: Name of the offending attribute.
        type_name: Declared attribute type name.
    """

    def __init__(self, attribute_name: str, type_name: str, value: object) -> None:
        self.attribute_name: str = attribute_name
        self.type_name: str = type_name
        super().__init__(f"Attribute '{attribute_name}' of type {type_name} cannot hold {value!r}")
