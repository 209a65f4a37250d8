"""Password reset service: reset-session creation and password change."""

from __future__ import annotations

import html
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from vet_identity.application.services._boundary import commit, operation_boundary
from vet_identity.domain.shared import Result
from vet_identity.domain.shared.time import utc_now
from vet_identity.domain.user import SessionTokenType, UserErrors, UserSession
from vet_identity.exceptions import StaleSessionError, WeakPasswordError
from vet_identity.infrastructure.email import EmailService
from vet_identity.services import JWTService, PasswordHashingService

if TYPE_CHECKING:
    from vet_config import Settings
    from vet_identity.application.ports import (
        CredentialStore,
        Notifier,
        PasswordHasher,
        TokenSigner,
    )

logger = logging.getLogger(__name__)

RESET_PASSWORD_SUBJECT = "Reset Password"

RESET_PASSWORD_HTML = (
    '<p>Click here to reset your password:</p><a href="{reset_link}">Reset Password</a>'
)


def build_reset_link(client_uri: str, token: str, email: str) -> str:
    """Add the percent-encoded token and email to the client URI's query.

    Any existing query is kept and a fragment stays at the end of the link.
    """
    parts = urlsplit(client_uri)
    query = urlencode({"token": token, "email": email}, quote_via=quote)
    if parts.query and not parts.query.endswith("&"):
        query = f"{parts.query}&{query}"
    elif parts.query:
        query = f"{parts.query}{query}"
    return urlunsplit(parts._replace(query=query))


class PasswordResetService:
    """Service for issuing reset sessions and changing passwords with them.

    With ``single_use`` the reset session that authorized a password change
    is deleted in the same commit; otherwise it stays until it expires.
    """

    def __init__(  # noqa: PLR0913
        self,
        store: CredentialStore,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        notifier: Notifier,
        single_use: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._store = store
        self._password_hasher = password_hasher
        self._token_signer = token_signer
        self._notifier = notifier
        self._single_use = single_use
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        store: CredentialStore,
        settings: Settings,
    ) -> PasswordResetService:
        return cls(
            store=store,
            password_hasher=PasswordHashingService(settings.password_hash_rounds),
            token_signer=JWTService.from_settings(settings),
            notifier=EmailService(settings),
            single_use=settings.reset_session_single_use,
        )

    @operation_boundary("forget password")
    async def forget_password(self, email: str, client_uri: str) -> Result[None]:
        """Create a reset session and email the reset link.

        The result is a success once the session is committed, whether or
        not the email could be delivered. Delivery is not retried.
        """
        user = await self._store.users.find_by_email(email)
        if user is None:
            logger.warning("Password reset requested for unknown email: %s", email)
            return Result.failure(UserErrors.user_not_found(email))

        session = UserSession.open(
            user_id=user.id,
            token=self._token_signer.issue_opaque_token(),
            token_type=SessionTokenType.RESET_PASSWORD,
            now=self._clock(),
        )
        user.add_session(session)
        await self._store.sessions.add(session)
        await commit(self._store)
        logger.info("Reset session %s created for user %s", session.id, user.id)

        reset_link = build_reset_link(client_uri, session.token, user.email)
        body = RESET_PASSWORD_HTML.format(reset_link=html.escape(reset_link))
        try:
            sent = await self._notifier.send(user.email, RESET_PASSWORD_SUBJECT, body)
        except Exception:
            logger.exception("Password reset email to user %s failed", user.id)
        else:
            if sent.is_failure:
                logger.warning(
                    "Password reset email to user %s failed: %s",
                    user.id,
                    sent.error.description,
                )

        return Result.success()

    @operation_boundary("reset password")
    async def reset_password(
        self,
        password: str,
        confirm_password: str,
        token: str,
        email: str,
    ) -> Result[None]:
        if password != confirm_password:
            return Result.failure(UserErrors.PASSWORD_MISMATCH)

        user = await self._store.users.find_by_email(email, include_sessions=True)
        if user is None:
            logger.warning("Password reset attempted for unknown email: %s", email)
            return Result.failure(UserErrors.user_not_found(email))

        now = self._clock()
        session = user.find_active_reset_session(token, now)
        if session is None:
            logger.warning("Invalid reset token presented for user %s", user.id)
            return Result.failure(UserErrors.INVALID_CREDENTIALS)

        try:
            password_hash = self._password_hasher.hash(password)
        except WeakPasswordError as e:
            return Result.failure(UserErrors.weak_password(e.message))

        user.change_password_hash(password_hash, now)
        await self._store.users.save(user)

        if self._single_use:
            user.remove_session(session)
            try:
                await self._store.sessions.delete(session)
            except StaleSessionError:
                logger.warning("Reset session %s was already used", session.id)
                return Result.failure(UserErrors.INVALID_CREDENTIALS)

        await commit(self._store)

        logger.info("Password reset completed for user: %s", user.id)
        return Result.success()
