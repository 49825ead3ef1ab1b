"""Application tests for registration, login and refresh-token sessions."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from petshop.identity import sessions, tokens
from petshop.identity.accounts import DeactivateUser
from petshop.identity.sessions import Logout, RefreshSession, RevokeRefreshToken
from petshop.identity.user import User
from petshop.shared.errors import AuthenticationFailed, ConflictError


def _refresh(token):
    return current_domain.process(RefreshSession(refresh_token=token), asynchronous=False)


class TestRegister:
    def test_returns_token_pair(self):
        pair = sessions.register("jane@example.com", "s3cret-pass", "Jane", "Doe")

        assert pair["token_type"] == "bearer"
        assert pair["user"]["email"] == "jane@example.com"
        assert pair["user"]["roles"] == ["User"]
        assert tokens.decode_access_token(pair["access_token"])["sub"] == pair["user"]["id"]

    def test_password_is_stored_hashed(self):
        pair = sessions.register("jane@example.com", "s3cret-pass", "Jane", "Doe")
        user = current_domain.repository_for(User).get(pair["user"]["id"])
        assert user.password_hash != "s3cret-pass"
        assert tokens.verify_password("s3cret-pass", user.password_hash)

    def test_duplicate_email_conflicts(self):
        sessions.register("jane@example.com", "s3cret-pass", "Jane", "Doe")
        with pytest.raises(ConflictError):
            sessions.register("JANE@example.com", "other-pass", "Jane", "Again")


class TestLogin:
    def test_valid_credentials(self, make_user):
        make_user(email="jane@example.com", password="s3cret-pass")
        pair = sessions.login("Jane@Example.com", "s3cret-pass")
        assert pair["user"]["email"] == "jane@example.com"

    def test_wrong_password(self, make_user):
        make_user(email="jane@example.com", password="s3cret-pass")
        with pytest.raises(AuthenticationFailed, match="Invalid email or password"):
            sessions.login("jane@example.com", "nope")

    def test_unknown_email(self):
        with pytest.raises(AuthenticationFailed):
            sessions.login("ghost@example.com", "whatever")


class TestRefresh:
    def test_issues_new_pair(self, make_user):
        _, pair = make_user()
        fresh = _refresh(pair["refresh_token"])
        assert fresh["refresh_token"] != pair["refresh_token"]
        assert fresh["user"]["id"] == pair["user"]["id"]

    def test_refresh_token_is_single_use(self, make_user):
        _, pair = make_user()
        _refresh(pair["refresh_token"])
        with pytest.raises(AuthenticationFailed):
            _refresh(pair["refresh_token"])

    def test_unknown_token(self, make_user):
        user_id, _ = make_user()
        with pytest.raises(AuthenticationFailed):
            _refresh(f"{user_id}.not-issued")

    def test_malformed_token(self):
        with pytest.raises(AuthenticationFailed):
            _refresh("garbage")


class TestLogoutAndRevoke:
    def test_logout_revokes_every_refresh_token(self, make_user):
        user_id, first = make_user(email="jane@example.com", password="s3cret-pass")
        second = sessions.login("jane@example.com", "s3cret-pass")

        revoked = current_domain.process(Logout(user_id=user_id), asynchronous=False)

        assert revoked == 2
        for pair in (first, second):
            with pytest.raises(AuthenticationFailed):
                _refresh(pair["refresh_token"])

    def test_revoke_single_token(self, make_user):
        _, pair = make_user()
        current_domain.process(RevokeRefreshToken(refresh_token=pair["refresh_token"]), asynchronous=False)
        with pytest.raises(AuthenticationFailed):
            _refresh(pair["refresh_token"])

    def test_revoking_twice_fails(self, make_user):
        _, pair = make_user()
        current_domain.process(RevokeRefreshToken(refresh_token=pair["refresh_token"]), asynchronous=False)
        with pytest.raises(AuthenticationFailed, match="Invalid refresh token"):
            current_domain.process(RevokeRefreshToken(refresh_token=pair["refresh_token"]), asynchronous=False)


class TestDeactivation:
    def _deactivate(self, user_id):
        return current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)

    def test_login_rejected_afterwards(self, make_user):
        user_id, _ = make_user(email="jane@example.com", password="s3cret-pass")
        assert self._deactivate(user_id) is True

        with pytest.raises(AuthenticationFailed):
            sessions.login("jane@example.com", "s3cret-pass")

    def test_refresh_rejected_afterwards(self, make_user):
        user_id, pair = make_user()
        self._deactivate(user_id)

        with pytest.raises(AuthenticationFailed):
            _refresh(pair["refresh_token"])

    def test_repeat_reports_no_change(self, make_user):
        user_id, _ = make_user()
        self._deactivate(user_id)
        assert self._deactivate(user_id) is False
        assert current_domain.repository_for(User).get(user_id).is_active is False

    def test_unknown_user(self):
        with pytest.raises(ObjectNotFoundError):
            self._deactivate("no-such-user")


class TestTokenPruning:
    def test_refresh_keeps_only_live_tokens(self, make_user):
        user_id, pair = make_user()
        for _ in range(3):
            pair = _refresh(pair["refresh_token"])

        user = current_domain.repository_for(User).get(user_id)
        assert [t.token for t in user.refresh_tokens] == [pair["refresh_token"]]
