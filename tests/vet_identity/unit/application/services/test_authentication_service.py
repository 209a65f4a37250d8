"""Unit tests for AuthenticationService."""

from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

from tests.shared.fixtures.factories import (
    TEST_EMAIL,
    TEST_PASSWORD,
    make_session,
    make_settings,
    make_store_mock,
    make_user,
)
from vet_identity import (
    AuthenticationService,
    EmailAlreadyExistsError,
    ErrorType,
    JWTService,
    PasswordHashingService,
    SessionTokenType,
    StaleSessionError,
    UserRole,
    WeakPasswordError,
)

NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


class _ServiceTestBase:
    def setup_method(self):
        self.store = make_store_mock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.jwt_service = Mock(spec=JWTService)
        self.jwt_service.issue_access_token.return_value = "access_token"
        self.jwt_service.issue_opaque_token.side_effect = [
            "opaque-1",
            "opaque-2",
            "opaque-3",
        ]
        self.now = NOW
        self.service = self._make_service()

    def _make_service(self, extend_expiry_on_rotation=False):
        return AuthenticationService(
            store=self.store,
            password_hasher=self.password_service,
            token_signer=self.jwt_service,
            extend_expiry_on_rotation=extend_expiry_on_rotation,
            clock=lambda: self.now,
        )


class TestAuthenticationServiceLogin(_ServiceTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_unknown_email_is_not_found(self):
        self.store.users.find_by_email.return_value = None

        result = await self.service.login("Nobody@Example.com", TEST_PASSWORD)

        assert result.is_failure
        assert result.error.code == "User.NotFound"
        assert result.error.type == ErrorType.NOT_FOUND
        assert "Nobody@Example.com" in result.error.description
        self.password_service.verify.assert_not_called()
        self.store.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(self):
        self.store.users.find_by_email.return_value = make_user()
        self.password_service.verify.return_value = False

        result = await self.service.login(TEST_EMAIL, "wrong_password")

        assert result.error.code == "User.InvalidCredentials"
        assert result.error.type == ErrorType.UNAUTHORIZED
        self.password_service.verify.assert_called_once_with(
            "wrong_password", "hashed_password"
        )
        self.store.sessions.add.assert_not_called()
        self.store.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_inactive_user_is_invalid_credentials(self):
        self.store.users.find_by_email.return_value = make_user(is_active=False)
        self.password_service.verify.return_value = True

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.error.code == "User.InvalidCredentials"
        self.password_service.verify.assert_called_once()
        self.store.sessions.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_creates_one_refresh_session(self):
        user = make_user()
        self.store.users.find_by_email.return_value = user
        self.password_service.verify.return_value = True

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.is_success
        tokens = result.value
        assert tokens.access_token == "access_token"
        assert tokens.refresh_token == "opaque-1"
        assert tokens.refresh_token_expires_at == NOW + timedelta(days=7)
        self.store.users.find_by_email.assert_awaited_once_with(TEST_EMAIL)

        self.store.sessions.add.assert_awaited_once()
        session = self.store.sessions.add.call_args.args[0]
        assert session.token_type == SessionTokenType.REFRESH
        assert session.user_id == user.id
        assert session.token == "opaque-1"
        assert user.sessions == (session,)
        self.store.commit.assert_awaited_once()
        self.jwt_service.issue_access_token.assert_called_once_with(user)

    @pytest.mark.asyncio
    async def test_expiry_is_seven_days_from_call_with_real_clock(self):
        self.store.users.find_by_email.return_value = make_user()
        self.password_service.verify.return_value = True
        service = AuthenticationService(
            store=self.store,
            password_hasher=self.password_service,
            token_signer=self.jwt_service,
        )

        call_time = datetime.now(tz=timezone.utc)
        result = await service.login(TEST_EMAIL, TEST_PASSWORD)
        return_time = datetime.now(tz=timezone.utc)

        expires_at = result.value.refresh_token_expires_at
        assert call_time + timedelta(days=7) <= expires_at
        assert expires_at <= return_time + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_store_failure_becomes_unexpected_and_rolls_back(self):
        self.store.users.find_by_email.return_value = make_user()
        self.password_service.verify.return_value = True
        self.store.sessions.add.side_effect = RuntimeError("disk full")

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.error.code == "User.Unexpected"
        assert result.error.type == ErrorType.FAILURE
        self.store.rollback.assert_awaited_once()
        self.store.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_commit_failure_becomes_unexpected(self):
        self.store.users.find_by_email.return_value = make_user()
        self.password_service.verify.return_value = True
        self.store.commit.side_effect = RuntimeError("connection lost")

        result = await self.service.login(TEST_EMAIL, TEST_PASSWORD)

        assert result.error.code == "User.Unexpected"
        self.store.rollback.assert_awaited_once()


class TestAuthenticationServiceRefreshToken(_ServiceTestBase):
    """Tests for refresh_token."""

    def _refresh_session(self, user, expires_at, token="old-token"):
        self.store.users.find_by_id.return_value = user
        session = make_session(user, token=token, expires_at=expires_at)
        self.store.sessions.find_by_token.return_value = session
        return session

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid_credentials(self):
        self.store.sessions.find_by_token.return_value = None

        result = await self.service.refresh_token("unknown")

        assert result.error.code == "User.InvalidCredentials"
        self.store.sessions.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_reset_token_is_invalid_credentials(self):
        user = make_user()
        self.store.sessions.find_by_token.return_value = make_session(
            user,
            token_type=SessionTokenType.RESET_PASSWORD,
            expires_at=NOW + timedelta(minutes=5),
        )

        result = await self.service.refresh_token("session-token")

        assert result.error.code == "User.InvalidCredentials"

    @pytest.mark.asyncio
    async def test_expired_one_second_ago(self):
        self._refresh_session(make_user(), NOW - timedelta(seconds=1))

        result = await self.service.refresh_token("old-token")

        assert result.error.code == "User.ExpiredRefreshToken"
        assert result.error.type == ErrorType.CONFLICT
        self.store.sessions.update.assert_not_called()
        self.store.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_expiring_exactly_now_is_accepted(self):
        self._refresh_session(make_user(), NOW)

        result = await self.service.refresh_token("old-token")

        assert result.is_success

    @pytest.mark.asyncio
    async def test_expiring_one_second_from_now_is_accepted(self):
        self._refresh_session(make_user(), NOW + timedelta(seconds=1))

        result = await self.service.refresh_token("old-token")

        assert result.is_success

    @pytest.mark.asyncio
    async def test_success_rotates_in_place_without_extending(self):
        user = make_user()
        expires_at = NOW + timedelta(days=3)
        session = self._refresh_session(user, expires_at)
        session_id = session.id

        result = await self.service.refresh_token("old-token")

        assert result.value.access_token == "access_token"
        assert result.value.refresh_token == "opaque-1"
        assert result.value.refresh_token_expires_at == expires_at

        self.store.sessions.update.assert_awaited_once_with(session)
        assert session.id == session_id
        assert session.token == "opaque-1"
        assert session.expires_at == expires_at
        self.store.sessions.add.assert_not_called()
        self.store.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_sliding_expiration_extends_expiry(self):
        service = self._make_service(extend_expiry_on_rotation=True)
        session = self._refresh_session(make_user(), NOW + timedelta(days=1))

        result = await service.refresh_token("old-token")

        assert result.value.refresh_token_expires_at == NOW + timedelta(days=7)
        assert session.expires_at == NOW + timedelta(days=7)

    @pytest.mark.asyncio
    async def test_missing_owner_is_invalid_credentials(self):
        self._refresh_session(make_user(), NOW + timedelta(days=1))
        self.store.users.find_by_id.return_value = None

        result = await self.service.refresh_token("old-token")

        assert result.error.code == "User.InvalidCredentials"

    @pytest.mark.asyncio
    async def test_inactive_owner_is_invalid_credentials(self):
        self._refresh_session(make_user(is_active=False), NOW + timedelta(days=1))

        result = await self.service.refresh_token("old-token")

        assert result.error.code == "User.InvalidCredentials"
        self.store.sessions.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_lost_race_is_invalid_credentials(self):
        self._refresh_session(make_user(), NOW + timedelta(days=1))
        self.store.sessions.update.side_effect = StaleSessionError

        result = await self.service.refresh_token("old-token")

        assert result.error.code == "User.InvalidCredentials"
        self.store.rollback.assert_awaited_once()
        self.store.commit.assert_not_called()


class TestAuthenticationServiceLogout(_ServiceTestBase):
    """Tests for logout."""

    @pytest.mark.asyncio
    async def test_unknown_token_is_invalid_credentials(self):
        self.store.sessions.find_by_token.return_value = None

        result = await self.service.logout("unknown")

        assert result.error.code == "User.InvalidCredentials"
        self.store.sessions.delete.assert_not_called()
        self.store.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_deletes_session(self):
        session = make_session(make_user())
        self.store.sessions.find_by_token.return_value = session

        result = await self.service.logout("session-token")

        assert result.is_success
        self.store.sessions.delete.assert_awaited_once_with(session)
        self.store.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reset_token_cannot_log_out(self):
        self.store.sessions.find_by_token.return_value = make_session(
            make_user(), token_type=SessionTokenType.RESET_PASSWORD
        )

        result = await self.service.logout("session-token")

        assert result.error.code == "User.InvalidCredentials"
        self.store.sessions.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_already_removed_is_invalid_credentials(self):
        self.store.sessions.find_by_token.return_value = make_session(make_user())
        self.store.sessions.delete.side_effect = StaleSessionError

        result = await self.service.logout("session-token")

        assert result.error.code == "User.InvalidCredentials"
        self.store.commit.assert_not_called()


class TestAuthenticationServiceRegister(_ServiceTestBase):
    """Tests for register."""

    @pytest.mark.asyncio
    async def test_register_creates_user(self):
        self.store.users.exists_by_email.return_value = False
        self.password_service.hash.return_value = "hashed_password"

        result = await self.service.register(
            "Jane", "Doe", "Jane@Example.com", TEST_PASSWORD
        )

        assert result.is_success
        self.store.users.save.assert_awaited_once()
        saved = self.store.users.save.call_args.args[0]
        assert saved.id == result.value
        assert saved.email == "jane@example.com"
        assert saved.role == UserRole.DOCTOR
        assert saved.password_hash == "hashed_password"
        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.store.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_register_with_admin_role(self):
        self.store.users.exists_by_email.return_value = False
        self.password_service.hash.return_value = "hashed_password"

        await self.service.register(
            "Ad", "Min", "admin@example.com", TEST_PASSWORD, role=UserRole.ADMIN
        )

        assert self.store.users.save.call_args.args[0].role == UserRole.ADMIN

    @pytest.mark.asyncio
    async def test_invalid_email(self):
        result = await self.service.register("Jane", "Doe", "nope", TEST_PASSWORD)

        assert result.error.code == "User.InvalidEmail"
        assert result.error.type == ErrorType.VALIDATION
        self.store.users.exists_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_existing_email(self):
        self.store.users.exists_by_email.return_value = True

        result = await self.service.register("Jane", "Doe", TEST_EMAIL, TEST_PASSWORD)

        assert result.error.code == "User.EmailAlreadyExists"
        assert result.error.type == ErrorType.CONFLICT
        self.password_service.hash.assert_not_called()

    @pytest.mark.asyncio
    async def test_weak_password(self):
        self.store.users.exists_by_email.return_value = False
        self.password_service.hash.side_effect = WeakPasswordError("Too short")

        result = await self.service.register("Jane", "Doe", TEST_EMAIL, "short")

        assert result.error.code == "User.WeakPassword"
        assert result.error.description == "Too short"
        self.store.users.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_email_taken_concurrently(self):
        self.store.users.exists_by_email.return_value = False
        self.password_service.hash.return_value = "hashed_password"
        self.store.users.save.side_effect = EmailAlreadyExistsError(TEST_EMAIL)

        result = await self.service.register("Jane", "Doe", TEST_EMAIL, TEST_PASSWORD)

        assert result.error.code == "User.EmailAlreadyExists"
        self.store.rollback.assert_awaited_once()
        self.store.commit.assert_not_called()


def test_from_settings_wires_policy():
    service = AuthenticationService.from_settings(
        make_store_mock(), make_settings(session_sliding_expiration=True)
    )

    assert service._extend_expiry_on_rotation is True
    assert isinstance(service._token_signer, JWTService)
