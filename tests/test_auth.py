from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials

from config import settings
from utils.auth import (
    CurrentUser,
    create_access_token,
    decode_access_token,
    ensure_admin,
    ensure_correct_user_or_admin,
    get_current_user,
    hash_password,
    verify_password,
)


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestPassword:
    def test_hash_and_verify(self):
        hashed = hash_password("password1")
        assert hashed != "password1"
        assert verify_password("password1", hashed)
        assert not verify_password("wrong", hashed)

    def test_invalid_hash_format(self):
        """잘못된 해시 형식은 False"""
        assert verify_password("password1", "not-a-bcrypt-hash") is False


class TestToken:
    def test_payload(self):
        token = create_access_token("u1", is_admin=True)
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        assert payload["sub"] == "u1"
        assert payload["is_admin"] is True
        assert "exp" in payload

    def test_expired_token(self):
        token = create_access_token("u1", expires_delta=timedelta(seconds=-1))
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "token is expired"

    def test_invalid_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token("invalid_token")
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "invalid token"

    def test_token_without_subject(self):
        token = jwt.encode({"is_admin": True}, settings.secret_key, algorithm=settings.algorithm)
        with pytest.raises(HTTPException) as exc_info:
            get_current_user(_credentials(token))
        assert exc_info.value.status_code == 401


class TestDependencies:
    def test_anonymous(self):
        assert get_current_user(None) is None

    def test_current_user_from_token(self):
        user = get_current_user(_credentials(create_access_token("u1")))
        assert user == CurrentUser(username="u1", is_admin=False)

    def test_ensure_admin(self):
        admin = CurrentUser(username="admin", is_admin=True)
        assert ensure_admin(admin) is admin

        for user in (None, CurrentUser(username="u1")):
            with pytest.raises(HTTPException) as exc_info:
                ensure_admin(user)
            assert exc_info.value.status_code == 401

    def test_ensure_correct_user_or_admin(self):
        u1 = CurrentUser(username="u1")
        admin = CurrentUser(username="admin", is_admin=True)
        assert ensure_correct_user_or_admin("u1", u1) is u1
        assert ensure_correct_user_or_admin("u1", admin) is admin

        for user in (None, CurrentUser(username="u2")):
            with pytest.raises(HTTPException) as exc_info:
                ensure_correct_user_or_admin("u1", user)
            assert exc_info.value.status_code == 401
