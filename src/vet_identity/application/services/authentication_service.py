"""Authentication service: login, token refresh, logout and registration."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable
from uuid import UUID

from vet_identity.application.dtos import SessionTokens
from vet_identity.application.services._boundary import commit, operation_boundary
from vet_identity.domain.shared import Result
from vet_identity.domain.shared.time import utc_now
from vet_identity.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    SessionTokenType,
    User,
    UserErrors,
    UserRole,
    UserSession,
)
from vet_identity.exceptions import StaleSessionError, WeakPasswordError
from vet_identity.services import JWTService, PasswordHashingService

if TYPE_CHECKING:
    from vet_config import Settings
    from vet_identity.application.ports import (
        CredentialStore,
        PasswordHasher,
        TokenSigner,
    )

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for the refresh-session lifecycle.

    Each public method is one transaction against the credential store:
    read, decide, mutate, commit at most once. Expected outcomes come back
    as ``Result`` values; see ``operation_boundary`` for the rest.

    Refresh tokens are rotated in place: the session row keeps its id and
    only the token value changes, so the previous value stops resolving.
    """

    def __init__(  # noqa: PLR0913
        self,
        store: CredentialStore,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        extend_expiry_on_rotation: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._password_hasher = password_hasher
        self._token_signer = token_signer
        self._extend_expiry_on_rotation = extend_expiry_on_rotation
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        store: CredentialStore,
        settings: Settings,
    ) -> AuthenticationService:
        return cls(
            store=store,
            password_hasher=PasswordHashingService(settings.password_hash_rounds),
            token_signer=JWTService.from_settings(settings),
            extend_expiry_on_rotation=settings.session_sliding_expiration,
        )

    @operation_boundary("login")
    async def login(self, email: str, password: str) -> Result[SessionTokens]:
        user = await self._store.users.find_by_email(email)
        if user is None:
            logger.warning("Login attempt for unknown email: %s", email)
            return Result.failure(UserErrors.user_not_found(email))

        if not self._password_hasher.verify(password, user.password_hash):
            logger.warning("Invalid password for user: %s", user.id)
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        if not user.is_active:
            logger.warning("Login attempt for inactive user: %s", user.id)
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        access_token = self._token_signer.issue_access_token(user)
        session = UserSession.open(
            user_id=user.id,
            token=self._token_signer.issue_opaque_token(),
            token_type=SessionTokenType.REFRESH,
            now=self._clock(),
        )
        user.add_session(session)
        await self._store.sessions.add(session)
        await commit(self._store)

        logger.info("User logged in: %s", user.id)
        return Result.success(
            SessionTokens(
                access_token=access_token,
                refresh_token=session.token,
                refresh_token_expires_at=session.expires_at,
            ),
        )

    @operation_boundary("refresh token")
    async def refresh_token(self, refresh_token: str) -> Result[SessionTokens]:
        session = await self._store.sessions.find_by_token(refresh_token)
        if session is None or not session.is_refresh:
            logger.warning("Refresh attempted with an unknown token")
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        now = self._clock()
        if session.is_expired(now):
            logger.warning("Expired refresh session %s presented", session.id)
            return Result.failure(UserErrors.EXPIRED_REFRESH_TOKEN)

        user = await self._store.users.find_by_id(session.user_id)
        if user is None or not user.is_active:
            logger.warning("Refresh session %s has no active owner", session.id)
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        access_token = self._token_signer.issue_access_token(user)
        new_expiry = (
            now + SessionTokenType.REFRESH.lifetime
            if self._extend_expiry_on_rotation
            else None
        )
        session.rotate(self._token_signer.issue_opaque_token(), expires_at=new_expiry)

        try:
            await self._store.sessions.update(session)
        except StaleSessionError:
            logger.warning("Concurrent rotation of session %s rejected", session.id)
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        await commit(self._store)

        logger.info("Rotated refresh session %s for user %s", session.id, user.id)
        return Result.success(
            SessionTokens(
                access_token=access_token,
                refresh_token=session.token,
                refresh_token_expires_at=session.expires_at,
            ),
        )

    @operation_boundary("logout")
    async def logout(self, refresh_token: str) -> Result[None]:
        session = await self._store.sessions.find_by_token(refresh_token)
        if session is None or not session.is_refresh:
            logger.warning("Logout attempted with an unknown token")
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        try:
            await self._store.sessions.delete(session)
        except StaleSessionError:
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        await commit(self._store)

        logger.info("Session %s logged out", session.id)
        return Result.success()

    @operation_boundary("registration")
    async def register(  # noqa: PLR0913
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.DOCTOR,
    ) -> Result[UUID]:
        try:
            email_obj = Email(email)
        except InvalidEmailError as e:
            return Result.failure(UserErrors.invalid_email(str(e)))

        if await self._store.users.exists_by_email(email_obj):
            return Result.failure(UserErrors.email_already_exists(email))

        try:
            password_hash = self._password_hasher.hash(password)
        except WeakPasswordError as e:
            return Result.failure(UserErrors.weak_password(e.message))

        user = User.create(
            first_name=first_name,
            last_name=last_name,
            email=email_obj,
            password_hash=password_hash,
            role=role,
        )
        try:
            await self._store.users.save(user)
        except EmailAlreadyExistsError:
            return Result.failure(UserErrors.email_already_exists(email))

        await commit(self._store)

        logger.info("User registered: %s (role: %s)", user.id, user.role.value)
        return Result.success(user.id)
