from datetime import timedelta
from enum import Enum


class SessionTokenType(str, Enum):
    """What a persisted session token authorizes."""

    REFRESH = "refresh"
    RESET_PASSWORD = "reset_password"

    @property
    def lifetime(self) -> timedelta:
        """How long a session of this kind stays valid after issuance."""
        return SESSION_LIFETIMES[self]


SESSION_LIFETIMES = {
    SessionTokenType.REFRESH: timedelta(days=7),
    SessionTokenType.RESET_PASSWORD: timedelta(minutes=15),
}
