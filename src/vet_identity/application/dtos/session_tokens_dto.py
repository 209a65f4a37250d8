"""DTO returned by login and refresh."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class SessionTokens:
    """Access token plus the refresh token and its session expiry.

    ``refresh_token_expires_at`` is what a boundary layer needs to set the
    refresh cookie's expiry.
    """

    access_token: str
    refresh_token: str
    refresh_token_expires_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "refresh_token_expires_at": self.refresh_token_expires_at.isoformat(),
        }
