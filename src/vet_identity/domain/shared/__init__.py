"""Shared domain building blocks: time, errors and results."""

from vet_identity.domain.shared.errors import Error, ErrorType
from vet_identity.domain.shared.result import Result
from vet_identity.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "Error",
    "ErrorType",
    "Result",
    "ensure_tz_aware",
    "utc_now",
]
