"""
DB 스키마(SQLAlchemy 모델) 테스트 - API의 raw SQL 컬럼명과 일치하는지 확인
"""
from sqlalchemy import Numeric

from db.base import Base
from db.models.application import Application
from db.models.company import Company
from db.models.job import Job
from db.models.user import User
from routers.companies import COMPANY_COLUMN_MAP
from routers.users import USER_COLUMN_MAP
from scripts.seed import TEST_USERS, build_seed_rows
from utils.auth import verify_password


def test_tables_registered():
    assert {"companies", "jobs", "users", "applications"} <= set(Base.metadata.tables)


def test_company_columns():
    columns = Company.__table__.columns
    assert set(columns.keys()) == {"handle", "name", "num_employees", "description", "logo_url"}
    assert columns["handle"].primary_key
    assert columns["name"].unique
    assert set(COMPANY_COLUMN_MAP.values()) <= set(columns.keys())


def test_job_columns():
    columns = Job.__table__.columns
    assert set(columns.keys()) == {"id", "title", "salary", "equity", "company_handle"}
    assert isinstance(columns["equity"].type, Numeric)

    (fk,) = columns["company_handle"].foreign_keys
    assert fk.target_fullname == "companies.handle"
    assert fk.ondelete == "CASCADE"


def test_user_columns():
    columns = User.__table__.columns
    assert set(columns.keys()) == {"username", "password", "first_name", "last_name", "email", "is_admin"}
    assert set(USER_COLUMN_MAP.values()) <= set(columns.keys())


def test_application_primary_key():
    pk = [column.name for column in Application.__table__.primary_key.columns]
    assert sorted(pk) == ["job_id", "username"]


def test_seed_rows_hash_passwords():
    users = [row for row in build_seed_rows() if isinstance(row, User)]

    assert len(users) == len(TEST_USERS)
    for user, raw in zip(users, TEST_USERS):
        assert user.password != raw["password"]
        assert verify_password(raw["password"], user.password)
