"""Tests for IdentityProvider and SessionContext."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from resume_builder.auth.identity import (
    AuthError,
    IdentityProvider,
    hash_password,
    verify_password,
)
from resume_builder.auth.session import AuthEvent, SessionContext, require_session


@pytest.fixture
def provider(tmp_path) -> IdentityProvider:
    return IdentityProvider(db_path=tmp_path / "auth.db", secret_key="test-secret")


@pytest.fixture
def context(provider) -> SessionContext:
    return SessionContext(provider)


class TestPasswordHashing:
    def test_verify_roundtrip(self):
        stored = hash_password("s3cret!")
        assert verify_password("s3cret!", stored)
        assert not verify_password("wrong", stored)

    def test_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash(self):
        assert verify_password("x", "not-hex$abc") is False


class TestSignUp:
    def test_registers_user(self, provider, strong_password):
        user = provider.sign_up("Jordan@Example.com ", strong_password)
        assert user.email == "jordan@example.com"
        assert provider.get_user(user.id) == user

    def test_invalid_email(self, provider, strong_password):
        with pytest.raises(AuthError, match="invalid format"):
            provider.sign_up("not-an-email", strong_password)

    def test_weak_password(self, provider):
        with pytest.raises(AuthError, match="Password does not meet the requirements"):
            provider.sign_up("jordan@example.com", "password")

    def test_duplicate_email(self, provider, strong_password):
        provider.sign_up("jordan@example.com", strong_password)
        with pytest.raises(AuthError, match="User already registered"):
            provider.sign_up("jordan@example.com", strong_password)


class TestSignIn:
    def test_issues_token(self, provider, strong_password):
        user = provider.sign_up("jordan@example.com", strong_password)
        session = provider.sign_in("jordan@example.com", strong_password)
        assert session.user_id == user.id
        assert not session.expired
        payload = jwt.decode(session.access_token, "test-secret", algorithms=["HS256"])
        assert payload["sub"] == user.id
        assert payload["email"] == "jordan@example.com"

    def test_wrong_password(self, provider, strong_password):
        provider.sign_up("jordan@example.com", strong_password)
        with pytest.raises(AuthError, match="Invalid login credentials"):
            provider.sign_in("jordan@example.com", "Wrong-password-1!")

    def test_unknown_user(self, provider):
        with pytest.raises(AuthError, match="Invalid login credentials"):
            provider.sign_in("nobody@example.com", "whatever")


class TestVerify:
    def test_valid_token(self, provider, strong_password):
        provider.sign_up("jordan@example.com", strong_password)
        session = provider.sign_in("jordan@example.com", strong_password)
        restored = provider.verify(session.access_token)
        assert restored.user == session.user

    def test_tampered_token(self, provider):
        assert provider.verify("not.a.token") is None

    def test_wrong_secret(self, provider, tmp_path, strong_password):
        provider.sign_up("jordan@example.com", strong_password)
        session = provider.sign_in("jordan@example.com", strong_password)
        other = IdentityProvider(db_path=tmp_path / "auth.db", secret_key="other-secret")
        assert other.verify(session.access_token) is None

    def test_expired_token(self, tmp_path, strong_password):
        provider = IdentityProvider(db_path=tmp_path / "auth.db", secret_key="s", token_ttl_minutes=-1)
        provider.sign_up("jordan@example.com", strong_password)
        session = provider.sign_in("jordan@example.com", strong_password)
        assert session.expired
        assert provider.verify(session.access_token) is None


class TestSessionContext:
    def test_sign_in_emits_event(self, context, strong_password):
        events = []
        context.subscribe(lambda event, session: events.append((event, session)))
        context.sign_up("jordan@example.com", strong_password)
        session = context.sign_in("jordan@example.com", strong_password)
        assert events == [(AuthEvent.SIGNED_IN, session)]
        assert context.get_current_session() is session
        assert context.user.email == "jordan@example.com"

    def test_sign_out(self, context, strong_password):
        events = []
        context.sign_up("jordan@example.com", strong_password)
        context.sign_in("jordan@example.com", strong_password)
        context.subscribe(lambda event, session: events.append((event, session)))
        context.sign_out()
        assert events == [(AuthEvent.SIGNED_OUT, None)]
        assert context.get_current_session() is None

    def test_sign_out_without_session_is_silent(self, context):
        events = []
        context.subscribe(lambda event, session: events.append(event))
        context.sign_out()
        assert events == []

    def test_unsubscribe(self, context, strong_password):
        events = []
        unsubscribe = context.subscribe(lambda event, session: events.append(event))
        unsubscribe()
        context.sign_up("jordan@example.com", strong_password)
        context.sign_in("jordan@example.com", strong_password)
        assert events == []

    def test_failed_sign_in_keeps_state(self, context):
        with pytest.raises(AuthError):
            context.sign_in("nobody@example.com", "x")
        assert context.get_current_session() is None

    def test_expiry_signs_out(self, context, strong_password):
        events = []
        context.sign_up("jordan@example.com", strong_password)
        session = context.sign_in("jordan@example.com", strong_password)
        context.subscribe(lambda event, s: events.append(event))
        session.expires_at = datetime.now(timezone.utc) - timedelta(seconds=1)
        assert context.get_current_session() is None
        assert events == [AuthEvent.SIGNED_OUT]

    def test_restore(self, provider, strong_password):
        provider.sign_up("jordan@example.com", strong_password)
        token = provider.sign_in("jordan@example.com", strong_password).access_token
        fresh = SessionContext(provider)
        events = []
        fresh.subscribe(lambda event, s: events.append(event))
        assert fresh.restore(token) is not None
        assert events == [AuthEvent.TOKEN_RESTORED]

    def test_restore_invalid_token(self, context):
        assert context.restore("garbage") is None
        assert context.get_current_session() is None


class TestRequireSession:
    def test_raises_when_signed_out(self, context):
        with pytest.raises(AuthError, match="Not authenticated"):
            require_session(context)

    def test_returns_session(self, context, strong_password):
        context.sign_up("jordan@example.com", strong_password)
        session = context.sign_in("jordan@example.com", strong_password)
        assert require_session(context) is session
