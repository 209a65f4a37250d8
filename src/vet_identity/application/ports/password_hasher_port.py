"""Password hasher port."""

from typing import Protocol


class PasswordHasher(Protocol):
    """Opaque hash/verify capability."""

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Raises
        ------
        WeakPasswordError
            If the password doesn't meet strength requirements
        """
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        ...
