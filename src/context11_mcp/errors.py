"""Domain errors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    NETWORK = "network"
    API = "api"
    PARSE = "parse"
    VALIDATION = "validation"


class Context11Error(RuntimeError):
    """Base class for every failure a tool reports back as an error result."""

    kind: ClassVar[ErrorKind]


@dataclass(frozen=True, slots=True)
class NetworkError(Context11Error):
    """Raised when the Context11 host could not be reached."""

    kind: ClassVar[ErrorKind] = ErrorKind.NETWORK

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ApiError(Context11Error):
    """Raised when the Context11 API returns a non-success response."""

    kind: ClassVar[ErrorKind] = ErrorKind.API

    status_code: int
    method: str
    url: str
    response_text: str

    def __str__(self) -> str:
        return f"API error ({self.status_code}): {self.response_text}"


@dataclass(frozen=True, slots=True)
class ParseError(Context11Error):
    """Raised when a successful response body is not the JSON we expect."""

    kind: ClassVar[ErrorKind] = ErrorKind.PARSE

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class ValidationError(Context11Error):
    """Raised when tool arguments fail a local precondition."""

    kind: ClassVar[ErrorKind] = ErrorKind.VALIDATION

    message: str

    def __str__(self) -> str:
        return self.message
