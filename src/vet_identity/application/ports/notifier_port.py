"""Notifier port."""

from typing import Protocol

from vet_identity.domain.shared import Result


class Notifier(Protocol):
    """Sends a message to a user; delivery problems come back as failures."""

    async def send(self, to: str, subject: str, body: str) -> Result[None]:
        ...
