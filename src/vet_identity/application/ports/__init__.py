"""Ports consumed by the session lifecycle services."""

from vet_identity.application.ports.credential_store_port import CredentialStore
from vet_identity.application.ports.notifier_port import Notifier
from vet_identity.application.ports.password_hasher_port import PasswordHasher
from vet_identity.application.ports.token_signer_port import TokenSigner

__all__ = [
    "CredentialStore",
    "Notifier",
    "PasswordHasher",
    "TokenSigner",
]
