"""테이블 생성 + 테스트 데이터 생성 스크립트

사용법:
    python scripts/seed.py          # 테이블이 없으면 생성 후 시드 (이미 시드돼 있으면 건너뜀)
    python scripts/seed.py --reset  # 전체 테이블 삭제 후 재생성

테스트 계정:
    - username: admin / password: Admin1234! (관리자)
    - username: testuser / password: Test1234!
"""
import asyncio
import logging
import sys
from decimal import Decimal
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from db.base import Base
from db.models.application import Application
from db.models.company import Company
from db.models.job import Job
from db.models.user import User
from db.session import engine, AsyncSessionLocal
from utils.auth import hash_password

# 테스트 계정 (평문 비밀번호)
TEST_USERS = [
    {
        "username": "admin",
        "password": "Admin1234!",
        "first_name": "Admin",
        "last_name": "User",
        "email": "admin@example.com",
        "is_admin": True,
    },
    {
        "username": "testuser",
        "password": "Test1234!",
        "first_name": "Test",
        "last_name": "User",
        "email": "test@example.com",
        "is_admin": False,
    },
]

TEST_COMPANIES = [
    {
        "handle": "anderson-arias-morrow",
        "name": "Anderson, Arias and Morrow",
        "num_employees": 245,
        "description": "Somebody program how I. Face give away discussion view act inside.",
        "logo_url": "/logos/logo3.png",
    },
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "num_employees": 862,
        "description": "Difficult ready trip question produce produce someone.",
        "logo_url": None,
    },
]

TEST_JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": Decimal("0"),
     "company_handle": "anderson-arias-morrow"},
    {"title": "Information officer", "salary": 200000, "equity": None,
     "company_handle": "anderson-arias-morrow"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": Decimal("0.05"),
     "company_handle": "bauer-gallagher"},
]


async def create_tables(reset: bool = False) -> None:
    async with engine.begin() as conn:
        if reset:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def build_seed_rows() -> list[Base]:
    """시드용 ORM 객체 생성 (비밀번호는 해싱)"""
    rows: list[Base] = [
        User(
            username=user["username"],
            password=hash_password(user["password"]),
            first_name=user["first_name"],
            last_name=user["last_name"],
            email=user["email"],
            is_admin=user["is_admin"],
        )
        for user in TEST_USERS
    ]
    rows.extend(Company(**company) for company in TEST_COMPANIES)
    return rows


async def is_seeded(db) -> bool:
    """관리자 테스트 계정이 있으면 이미 시드된 것으로 본다"""
    return await db.get(User, TEST_USERS[0]["username"]) is not None


async def seed(reset: bool = False) -> None:
    """모든 테스트 데이터 생성 (이미 있으면 건너뜀, 다시 넣으려면 --reset)"""
    await create_tables(reset=reset)

    async with AsyncSessionLocal() as db:
        skipped = await is_seeded(db)
        if not skipped:
            db.add_all(build_seed_rows())
            jobs = [Job(**job) for job in TEST_JOBS]
            db.add_all(jobs)
            await db.flush()

            db.add(Application(username="testuser", job_id=jobs[0].id))
            await db.commit()

    await engine.dispose()

    if skipped:
        print("ℹ️  이미 테스트 데이터가 있습니다. 다시 생성하려면 --reset 옵션을 사용하세요.")
        return

    print("✅ 테스트 데이터 생성 완료!")
    print("\n👤 테스트 계정:")
    for user in TEST_USERS:
        print(f"   - username: {user['username']}")
        print(f"     password: {user['password']}")
        print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed(reset="--reset" in sys.argv))
