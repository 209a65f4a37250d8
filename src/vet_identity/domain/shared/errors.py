"""Error values carried by failed results.

Error types are part of the public contract: the HTTP layer maps them to
status codes (NotFound -> 404, Unauthorized -> 401, Conflict -> 409,
Validation -> 400, Failure -> 500). Codes such as ``User.NotFound`` are
stable identifiers for programmatic handling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorType(str, Enum):
    """Broad category of an error."""

    NONE = "None"
    FAILURE = "Failure"
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    UNAUTHORIZED = "Unauthorized"


@dataclass(frozen=True)
class Error:
    """Immutable description of why an operation failed.

    Attributes
    ----------
    code
        Stable error code, e.g. ``User.InvalidCredentials``
    description
        Human-readable message
    type
        Category used by callers to pick a transport status
    """

    code: str
    description: str
    type: ErrorType

    NONE: ClassVar[Error]

    @classmethod
    def failure(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.FAILURE)

    @classmethod
    def validation(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.VALIDATION)

    @classmethod
    def not_found(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.NOT_FOUND)

    @classmethod
    def conflict(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.CONFLICT)

    @classmethod
    def unauthorized(cls, code: str, description: str) -> Error:
        return cls(code, description, ErrorType.UNAUTHORIZED)

    def __str__(self) -> str:
        return f"{self.code}: {self.description}"


Error.NONE = Error("Error.None", "No error.", ErrorType.NONE)
