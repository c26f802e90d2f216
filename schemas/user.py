import re

from pydantic import EmailStr, model_validator, StringConstraints, AfterValidator, ConfigDict
from typing import Annotated

from schemas.commons import CamelModel, JobId, Username

_RE_WHITESPACE = re.compile(r"\s")


def validate_password(password: str) -> str:
    if _RE_WHITESPACE.search(password):
        raise ValueError("비밀번호에 공백을 포함할 수 없습니다")
    return password


Password = Annotated[
    str,
    StringConstraints(
        min_length=5,
        max_length=20,
    ),
    AfterValidator(validate_password),
]

PersonName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        max_length=25,
    ),
]

Email = EmailStr


class UserRegisterRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: Password
    first_name: PersonName
    last_name: PersonName
    email: Email


class UserCreateRequest(UserRegisterRequest):
    """관리자 전용 - is_admin 지정 가능"""
    is_admin: bool = False


class UserLoginRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    username: Username
    password: str


class TokenResponse(CamelModel):
    token: str


class User(CamelModel):
    username: Username
    first_name: str
    last_name: str
    email: str
    is_admin: bool = False


class UserDetail(User):
    jobs: list[JobId] = []


class UserUpdateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    first_name: PersonName | None = None
    last_name: PersonName | None = None
    password: Password | None = None
    email: Email | None = None

    @model_validator(mode='after')
    def check_not_null_fields(self):
        """
        PATCH 요청에서 "미전송"과 "명시적 null"을 구분하기 위해
        사용자가 실제로 보낸 필드 집합(model_fields_set)을 기준으로 검사
        """
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field}은 null로 설정할 수 없습니다.")
        return self


class UserCreateResponse(CamelModel):
    user: User
    token: str


class UserResponse(CamelModel):
    user: User


class UserDetailResponse(CamelModel):
    user: UserDetail


class UserListResponse(CamelModel):
    users: list[User]


class UserDeletedResponse(CamelModel):
    deleted: Username


class ApplicationResponse(CamelModel):
    applied: JobId
