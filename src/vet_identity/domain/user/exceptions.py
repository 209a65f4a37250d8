"""User domain exceptions.

Custom exceptions for the user domain, used for validation
and business rule violations.
"""


class InvalidEmailError(ValueError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class EmailAlreadyExistsError(Exception):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")


class SessionOwnershipError(ValueError):
    """Raised when a session is attached to a user it does not belong to."""

    def __init__(self, session_user_id: str, user_id: str) -> None:
        super().__init__(
            f"Session belongs to user {session_user_id}, not {user_id}",
        )
