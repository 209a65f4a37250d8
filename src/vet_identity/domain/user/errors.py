"""Catalogue of user-facing errors.

Codes are stable; descriptions are for humans. Credential failures share one
error so callers cannot tell which check failed.
"""

from uuid import UUID

from vet_identity.domain.shared.errors import Error


class UserErrors:
    INVALID_CREDENTIALS = Error.unauthorized(
        "User.InvalidCredentials",
        "The provided credentials are invalid",
    )

    EXPIRED_REFRESH_TOKEN = Error.conflict(
        "User.ExpiredRefreshToken",
        "Refresh Token is expired, please login again",
    )

    PASSWORD_MISMATCH = Error.validation(
        "User.PasswordMismatch",
        "The password and its confirmation do not match",
    )

    @staticmethod
    def user_not_found(email: str) -> Error:
        return Error.not_found(
            "User.NotFound",
            f"User with email {email} is not found",
        )

    @staticmethod
    def user_not_found_by_id(user_id: UUID) -> Error:
        return Error.not_found(
            "User.NotFound",
            f"User with id {user_id} is not found",
        )

    @staticmethod
    def weak_password(reason: str) -> Error:
        return Error.validation("User.WeakPassword", reason)

    @staticmethod
    def invalid_email(reason: str) -> Error:
        return Error.validation("User.InvalidEmail", reason)

    @staticmethod
    def email_already_exists(email: str) -> Error:
        return Error.conflict(
            "User.EmailAlreadyExists",
            f"User with email {email} already exists",
        )

    @staticmethod
    def unexpected(operation: str) -> Error:
        return Error.failure(
            "User.Unexpected",
            f"An unexpected error occurred during {operation}",
        )


class EmailErrors:
    @staticmethod
    def exception(message: str) -> Error:
        return Error.failure("Email.Exception", message)
