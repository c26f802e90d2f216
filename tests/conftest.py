"""
공통 테스트 설정

실행 방법:
    uv sync --all-extras  # dev 의존성 설치
    pytest -v

DB 연결(get_connection)은 AsyncMock으로 대체하므로 PostgreSQL 없이 실행된다.
"""
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jobly-unit-tests-0001")
os.environ.setdefault("PASSWORD_PEPPER", "test-pepper")

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from main import app
from utils.auth import create_access_token
from utils.database import get_connection


@pytest.fixture
def conn():
    """asyncpg Connection 대역 (기본값: 조회 결과 없음)"""
    mock = AsyncMock()
    mock.fetchrow.return_value = None
    mock.fetch.return_value = []
    mock.execute.return_value = "INSERT 0 1"
    return mock


@pytest.fixture
def client(conn):
    """테스트용 FastAPI 클라이언트 (DB 연결 의존성 override)"""
    async def override_get_connection():
        yield conn

    app.dependency_overrides[get_connection] = override_get_connection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    """관리자 인증 헤더"""
    token = create_access_token("admin", is_admin=True)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def u1_headers():
    """일반 유저(u1) 인증 헤더"""
    token = create_access_token("u1", is_admin=False)
    return {"Authorization": f"Bearer {token}"}
