import logging

import asyncpg
from fastapi import APIRouter, HTTPException, status

from schemas.commons import DBConnection, JobIdPath, Username
from schemas.user import (
    ApplicationResponse,
    TokenResponse,
    User,
    UserCreateRequest,
    UserCreateResponse,
    UserDeletedResponse,
    UserDetail,
    UserDetailResponse,
    UserListResponse,
    UserLoginRequest,
    UserRegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from utils.auth import (
    AdminUser,
    CorrectUserOrAdmin,
    DUMMY_HASH,
    create_access_token,
    hash_password,
    verify_password,
)
from routers.jobs import job_not_found
from utils.query import build_set_clause

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["USERS"],
)

USER_COLUMN_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
}

USER_COLUMNS = """
    username,
    first_name AS "firstName",
    last_name AS "lastName",
    email,
    is_admin AS "isAdmin"
"""


def user_not_found(username: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No user: {username}"
    )


async def insert_user(conn, user: UserRegisterRequest, is_admin: bool) -> User:
    """유저 INSERT (중복 username이면 400)"""
    try:
        row = await conn.fetchrow(
            f"""
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {USER_COLUMNS}
            """,
            user.username,
            hash_password(user.password),
            user.first_name,
            user.last_name,
            user.email,
            is_admin,
        )
    except asyncpg.UniqueViolationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate username: {user.username}",
        )
    return User.model_validate(dict(row))


@router.post("/auth/token", response_model=TokenResponse)
async def get_auth_token(user: UserLoginRequest, conn: DBConnection) -> TokenResponse:
    """로그인"""
    db_user = await conn.fetchrow(
        "SELECT username, password, is_admin FROM users WHERE username = $1",
        user.username
    )

    # 타이밍 공격 방지: 유저 존재 여부와 관계없이 항상 해시 비교 수행
    hashed_password = db_user["password"] if db_user else DUMMY_HASH
    is_password_correct = verify_password(user.password, hashed_password)

    if db_user is None or not is_password_correct:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username/password",
        )

    token = create_access_token(db_user["username"], is_admin=db_user["is_admin"])
    return TokenResponse(token=token)


@router.post("/auth/register", response_model=TokenResponse,
             status_code=status.HTTP_201_CREATED)
async def register(user: UserRegisterRequest, conn: DBConnection) -> TokenResponse:
    """회원가입 (일반 유저)"""
    new_user = await insert_user(conn, user, is_admin=False)
    return TokenResponse(token=create_access_token(new_user.username, is_admin=False))


@router.post("/users", response_model=UserCreateResponse,
             status_code=status.HTTP_201_CREATED)
async def create_user(_: AdminUser, user: UserCreateRequest, conn: DBConnection) -> UserCreateResponse:
    """유저 생성 (관리자, 관리자 계정 생성 가능)"""
    new_user = await insert_user(conn, user, is_admin=user.is_admin)
    logger.info("User created by admin: %s (is_admin=%s)", new_user.username, new_user.is_admin)

    return UserCreateResponse(
        user=new_user,
        token=create_access_token(new_user.username, is_admin=new_user.is_admin),
    )


@router.get("/users", response_model=UserListResponse)
async def get_users(_: AdminUser, conn: DBConnection) -> UserListResponse:
    """전체 유저 목록 (관리자)"""
    rows = await conn.fetch(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")
    return UserListResponse(users=[User.model_validate(dict(row)) for row in rows])


@router.get("/users/{username}", response_model=UserDetailResponse)
async def get_user(username: Username, _: CorrectUserOrAdmin, conn: DBConnection) -> UserDetailResponse:
    """유저 상세 조회 (본인 또는 관리자, 지원한 채용공고 ID 포함)"""
    row = await conn.fetchrow(
        f"SELECT {USER_COLUMNS} FROM users WHERE username = $1",
        username
    )
    if row is None:
        raise user_not_found(username)

    applications = await conn.fetch(
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        username
    )

    return UserDetailResponse(
        user=UserDetail.model_validate({**dict(row), "jobs": [a["job_id"] for a in applications]})
    )


@router.patch("/users/{username}", response_model=UserResponse)
async def update_user(
        username: Username, _: CorrectUserOrAdmin, update_data: UserUpdateRequest,
        conn: DBConnection) -> UserResponse:
    """유저 정보 부분 수정 (본인 또는 관리자, 비밀번호는 다시 해싱)"""
    update_fields = update_data.model_dump(by_alias=True, exclude_unset=True)
    if "password" in update_fields:
        update_fields["password"] = hash_password(update_fields["password"])

    set_clause, values = build_set_clause(update_fields, USER_COLUMN_MAP)
    username_idx = len(values) + 1

    row = await conn.fetchrow(
        f"""
        UPDATE users
        SET {set_clause}
        WHERE username = ${username_idx}
        RETURNING {USER_COLUMNS}
        """,
        *values,
        username
    )
    if row is None:
        raise user_not_found(username)

    return UserResponse(user=User.model_validate(dict(row)))


@router.delete("/users/{username}", response_model=UserDeletedResponse)
async def delete_user(username: Username, _: CorrectUserOrAdmin, conn: DBConnection) -> UserDeletedResponse:
    """회원 탈퇴 (본인 또는 관리자)"""
    row = await conn.fetchrow(
        "DELETE FROM users WHERE username = $1 RETURNING username",
        username
    )
    if row is None:
        raise user_not_found(username)

    return UserDeletedResponse(deleted=row["username"])


@router.post("/users/{username}/jobs/{job_id}", response_model=ApplicationResponse)
async def apply_to_job(
        username: Username, job_id: JobIdPath, _: CorrectUserOrAdmin, conn: DBConnection) -> ApplicationResponse:
    """채용공고 지원 (본인 또는 관리자)"""
    if await conn.fetchrow("SELECT id FROM jobs WHERE id = $1", job_id) is None:
        raise job_not_found(job_id)
    if await conn.fetchrow("SELECT username FROM users WHERE username = $1", username) is None:
        raise user_not_found(username)

    # (username, job_id) 복합 PK이므로 중복 시 UniqueViolationError
    try:
        await conn.execute(
            "INSERT INTO applications (job_id, username) VALUES ($1, $2)",
            job_id,
            username
        )
    except asyncpg.UniqueViolationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Already applied: {job_id}"
        )
    except asyncpg.ForeignKeyViolationError as exc:
        # 사전 조회 이후 채용공고나 유저가 삭제된 경우
        if exc.constraint_name == "applications_job_id_fkey":
            raise job_not_found(job_id)
        raise user_not_found(username)

    return ApplicationResponse(applied=job_id)
