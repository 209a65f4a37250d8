from enum import Enum


class UserRole(str, Enum):
    """Roles carried as a claim in access tokens."""

    DOCTOR = "doctor"
    ADMIN = "admin"
