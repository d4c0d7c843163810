from __future__ import annotations

import pytest

from chirpy.core import config as core_config
from chirpy.core.errors import InvalidCredentialsError, InvalidTokenError, NotFoundError, TokenExpiredError
from chirpy.core.security import verify_password
from chirpy.core.tokens import TokenIssuer
from chirpy.services import auth_service
from chirpy.services.auth_service import AuthService, bearer_token, subject_user_id


@pytest.fixture()
def svc(store, clock):
    return AuthService(store, TokenIssuer("s3cret", clock=clock))


def test_register_stores_only_the_hash(svc, store):
    user = svc.register("alice@example.com", "hunter22")

    stored = store.find_user_by_id(user.id)
    assert stored.password_hash != "hunter22"
    assert verify_password(stored.password_hash, "hunter22")
    assert "hunter22" not in store.path.read_text(encoding="utf-8")


def test_login_issues_token_for_user(svc):
    user = svc.register("alice@example.com", "hunter22")
    result = svc.login("alice@example.com", "hunter22")

    assert result.user.id == user.id
    assert svc.tokens.verify(result.token).subject == str(user.id)
    assert svc.authenticate(result.token) == result.user


def test_login_rejects_bad_credentials(svc):
    svc.register("alice@example.com", "hunter22")
    with pytest.raises(InvalidCredentialsError):
        svc.login("alice@example.com", "wrong")
    with pytest.raises(InvalidCredentialsError):
        svc.login("nobody@example.com", "hunter22")


def test_login_honours_requested_ttl(svc, clock):
    svc.register("alice@example.com", "hunter22")
    token = svc.login("alice@example.com", "hunter22", expires_in_seconds=60).token

    clock.advance(61)
    with pytest.raises(TokenExpiredError):
        svc.authenticate(token)


def test_login_upgrades_outdated_hash(svc, store, monkeypatch):
    svc.register("alice@example.com", "hunter22")
    old_hash = store.find_user_by_id(1).password_hash

    monkeypatch.setenv("ARGON2_TIME_COST", "2")
    core_config.get_settings.cache_clear()
    svc.login("alice@example.com", "hunter22")

    new_hash = store.find_user_by_id(1).password_hash
    assert new_hash != old_hash
    assert "t=2" in new_hash
    assert verify_password(new_hash, "hunter22")


def test_rehash_keeps_concurrent_account_update(svc, store, monkeypatch):
    svc.register("alice@example.com", "hunter22")

    def _update_meanwhile(password_hash):
        # another request changes the account between the read and the rehash
        svc.update(svc.tokens.issue("1"), "alice@new.example.com", "changed")
        return True

    with monkeypatch.context() as m:
        m.setattr(auth_service, "needs_rehash", _update_meanwhile)
        result = svc.login("alice@example.com", "hunter22")

    stored = store.find_user_by_id(1)
    assert stored.email == "alice@new.example.com"
    assert verify_password(stored.password_hash, "changed")
    assert result.user == stored
    assert svc.login("alice@new.example.com", "changed").user.id == 1


def test_update_changes_email_and_password(svc, store):
    svc.register("alice@example.com", "hunter22")
    token = svc.login("alice@example.com", "hunter22").token

    updated = svc.update(token, "alice@new.example.com", "s3cure!")

    assert updated.id == 1
    assert svc.login("alice@new.example.com", "s3cure!").user.id == 1
    with pytest.raises(InvalidCredentialsError):
        svc.login("alice@example.com", "hunter22")
    assert store.next_user_id == 2


def test_update_for_vanished_user(svc):
    token = svc.tokens.issue("99")
    with pytest.raises(NotFoundError):
        svc.update(token, "ghost@example.com", "pw")


@pytest.mark.parametrize("subject", ["abc", "0", "-1", "", "1.5"])
def test_subject_must_be_a_positive_id(svc, subject):
    claims = svc.tokens.verify(svc.tokens.issue(subject))
    with pytest.raises(InvalidTokenError):
        subject_user_id(claims)


@pytest.mark.parametrize(
    "header, expected",
    [("Bearer abc.def.ghi", "abc.def.ghi"), ("bearer   tok", "tok"), ("  Bearer tok  ", "tok")],
)
def test_bearer_token(header, expected):
    assert bearer_token(header) == expected


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic dXNlcjpwdw==", "tok"])
def test_bearer_token_rejects_garbage(header):
    with pytest.raises(InvalidTokenError):
        bearer_token(header)
