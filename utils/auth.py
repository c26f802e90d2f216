import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, UTC, timedelta
from typing import Annotated

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from config import settings
from schemas.commons import Username

logger = logging.getLogger(__name__)

# Bearer 토큰 인증 스키마 (토큰 없으면 None, 401은 직접 처리)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    username: str
    is_admin: bool = False


def _prehash(password: str) -> bytes:
    """
    HMAC-SHA256으로 사전 해싱
    - bcrypt 72바이트 제한 우회
    - PEPPER로 password shucking 공격 방지
    """
    return hmac.new(
        key=settings.password_pepper.encode(),
        msg=password.encode(),
        digestmod="sha256"
    ).hexdigest().encode()


def hash_password(password: str) -> str:
    prehashed = _prehash(password)
    return bcrypt.hashpw(prehashed, bcrypt.gensalt()).decode()


# 타이밍 공격 방지용 더미 해시
DUMMY_HASH = hash_password("dummy_password_for_timing_attack_prevention")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    prehashed = _prehash(plain_password)
    try:
        return bcrypt.checkpw(prehashed, hashed_password.encode())
    except ValueError:
        logger.warning("Invalid hash format detected")
        return False


def create_access_token(username: str, is_admin: bool = False,
                        expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"sub": username, "is_admin": is_admin, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> dict:
    """token decoding"""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return payload
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="token is expired",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid token",
        )


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
    )


def get_current_user(
        credentials: HTTPAuthorizationCredentials | None = Depends(security)
) -> CurrentUser | None:
    """토큰이 있으면 검증해서 유저 반환, 없으면 None (익명)"""
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    username = payload.get("sub")
    if not username:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="invalid token",
        )
    return CurrentUser(username=username, is_admin=bool(payload.get("is_admin", False)))


OptionalUser = Annotated[CurrentUser | None, Depends(get_current_user)]


def ensure_admin(user: OptionalUser) -> CurrentUser:
    """관리자만 허용"""
    if user is None or not user.is_admin:
        raise _unauthorized()
    return user


def ensure_correct_user_or_admin(username: Username, user: OptionalUser) -> CurrentUser:
    """경로의 username 본인 또는 관리자만 허용"""
    if user is None or not (user.is_admin or user.username == username):
        raise _unauthorized()
    return user


AdminUser = Annotated[CurrentUser, Depends(ensure_admin)]
CorrectUserOrAdmin = Annotated[CurrentUser, Depends(ensure_correct_user_or_admin)]
