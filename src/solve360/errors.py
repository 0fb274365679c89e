"""Exception hierarchy for the Solve360 record layer.

Transport failures (httpx.HTTPError and subclasses) are not
part of this hierarchy; they reach the caller unchanged.
"""

from __future__ import annotations

from typing import Any


class Solve360Error(Exception):
    """Base class for all errors raised by the record layer."""


class SaveFailure(Solve360Error):
    """Raised when a create or update response carries an error map.

    The message is one ``"field: message"`` line per error, in the order
    the service returned them.

    Attributes:
        errors: The error map exactly as returned by the service.
    """

    def __init__(self, errors: dict[str, Any]) -> None:
        self.errors = errors
        super().__init__(self.format_errors(errors))

    @staticmethod
    def format_errors(errors: dict[str, Any]) -> str:
        lines = []
        for field, message in errors.items():
            if isinstance(message, dict) and "__content__" in message:
                message = message["__content__"]
            if isinstance(message, (list, tuple)):
                message = ", ".join(str(m) for m in message)
            lines.append(f"{field}: {message}")
        return "\n".join(lines)


class MalformedResponseError(Solve360Error):
    """Raised when a response lacks a key the record layer needs.

    Attributes:
        key: Name of the missing or mistyped key.
    """

    def __init__(self, key: str, detail: str = "") -> None:
        self.key = key
        message = f"Malformed Solve360 response: missing or invalid '{key}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class FieldMappingFrozenError(Solve360Error):
    """Raised when a frozen field mapping table is modified."""


class UnknownRecordTypeError(Solve360Error, KeyError):
    """Raised when no field mapping is registered for a record type."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class RecordNotBoundError(Solve360Error):
    """Raised when a record without a controller is saved."""
