"""Structured error codes and exception classes for vestige-init."""

from __future__ import annotations

__all__ = [
    "ErrorCode",
    "VestigeInitError",
    "DetectionError",
    "ParseError",
    "UnmergeableDocumentError",
    "WriteError",
    "DelegateError",
    "BinaryNotFoundError",
]

from enum import Enum


class ErrorCode(str, Enum):
    DETECTION_ERROR = "DETECTION_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    UNMERGEABLE_DOCUMENT = "UNMERGEABLE_DOCUMENT"
    WRITE_ERROR = "WRITE_ERROR"
    DELEGATE_ERROR = "DELEGATE_ERROR"
    BINARY_NOT_FOUND = "BINARY_NOT_FOUND"


class VestigeInitError(Exception):
    """Structured application error carrying a code and optional details."""

    code: ErrorCode = ErrorCode.PARSE_ERROR

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        code: ErrorCode | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict = details or {}
        if code is not None:
            self.code = code


class DetectionError(VestigeInitError):
    """A detection probe blew up. The target is treated as absent."""

    code = ErrorCode.DETECTION_ERROR


class ParseError(VestigeInitError):
    """A config document could not be parsed. Recovered as an empty document."""

    code = ErrorCode.PARSE_ERROR


class UnmergeableDocumentError(ParseError):
    """The document parsed, but a container on the registration path is not an object."""

    code = ErrorCode.UNMERGEABLE_DOCUMENT


class WriteError(VestigeInitError):
    code = ErrorCode.WRITE_ERROR


class DelegateError(VestigeInitError):
    """The external registration CLI could not be run to completion."""

    code = ErrorCode.DELEGATE_ERROR


class BinaryNotFoundError(VestigeInitError):
    """No candidate location holds the service binary. Fatal to the whole run."""

    code = ErrorCode.BINARY_NOT_FOUND

    def __init__(self, binary: str, searched: list[str]) -> None:
        super().__init__(
            f"{binary} not found",
            details={"binary": binary, "searched": searched},
        )
        self.binary = binary
        self.searched = searched
