"""Identity and authentication exceptions.

These exceptions are raised by the vet_identity adapters and are caught
at the operation boundary, where they become failed results.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet strength requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class StaleSessionError(AuthError):
    """Raised when a session was changed or removed after it was read.

    Two rotations racing on the same refresh token both read the same
    version; only the first write succeeds, the second raises this.
    """

    def __init__(self, message: str = "Session was modified concurrently"):
        super().__init__(message)
