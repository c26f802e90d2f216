import logging
from typing import Annotated

import asyncpg
from fastapi import APIRouter, HTTPException, Query, status

from schemas.commons import DBConnection, Handle, MAX_INT
from schemas.company import (
    Company,
    CompanyCreateRequest,
    CompanyDetail,
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdateRequest,
)
from utils.auth import AdminUser
from utils.query import build_set_clause, build_where_clause

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["COMPANIES"],
)

# JSON 필드 -> DB 컬럼 (이름이 다른 것만)
COMPANY_COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_COLUMNS = """
    handle,
    name,
    description,
    num_employees AS "numEmployees",
    logo_url AS "logoUrl"
"""


def company_not_found(handle: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No company: {handle}"
    )


@router.post("/companies", response_model=CompanyResponse,
             status_code=status.HTTP_201_CREATED)
async def create_company(_: AdminUser, company: CompanyCreateRequest, conn: DBConnection) -> CompanyResponse:
    """회사 등록 (관리자)"""
    try:
        row = await conn.fetchrow(
            f"""
            INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {COMPANY_COLUMNS}
            """,
            company.handle,
            company.name,
            company.description,
            company.num_employees,
            company.logo_url,
        )
    except asyncpg.UniqueViolationError as exc:
        # handle(PK)과 name(UNIQUE) 중 어느 쪽이 겹쳤는지 구분
        if exc.constraint_name == "companies_name_key":
            detail = f"Duplicate company name: {company.name}"
        else:
            detail = f"Duplicate company: {company.handle}"
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )

    return CompanyResponse(company=Company.model_validate(dict(row)))


@router.get("/companies", response_model=CompanyListResponse)
async def get_companies(
        conn: DBConnection,
        name: Annotated[str | None, Query(min_length=1, max_length=100)] = None,
        min_employees: Annotated[int | None, Query(alias="minEmployees", ge=0, le=MAX_INT)] = None,
        max_employees: Annotated[int | None, Query(alias="maxEmployees", ge=0, le=MAX_INT)] = None,
) -> CompanyListResponse:
    """
    회사 목록 조회
    - name: 회사명 부분 일치 (대소문자 무시)
    - minEmployees / maxEmployees: 직원 수 범위
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="minEmployees cannot be greater than maxEmployees"
        )

    conditions = []
    if name:
        conditions.append(("name ILIKE {}", f"%{name}%"))
    if min_employees is not None:
        conditions.append(("num_employees >= {}", min_employees))
    if max_employees is not None:
        conditions.append(("num_employees <= {}", max_employees))

    where_clause, values = build_where_clause(conditions)

    rows = await conn.fetch(
        f"SELECT {COMPANY_COLUMNS} FROM companies {where_clause} ORDER BY name",
        *values
    )

    return CompanyListResponse(companies=[Company.model_validate(dict(row)) for row in rows])


@router.get("/companies/{handle}", response_model=CompanyDetailResponse)
async def get_company(handle: Handle, conn: DBConnection) -> CompanyDetailResponse:
    """회사 상세 조회 (채용공고 포함)"""
    row = await conn.fetchrow(
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        handle
    )
    if row is None:
        raise company_not_found(handle)

    jobs = await conn.fetch(
        """
        SELECT id, title, salary, equity
        FROM jobs
        WHERE company_handle = $1
        ORDER BY id
        """,
        handle
    )

    return CompanyDetailResponse(
        company=CompanyDetail.model_validate({**dict(row), "jobs": [dict(job) for job in jobs]})
    )


@router.patch("/companies/{handle}", response_model=CompanyResponse)
async def update_company(
        _: AdminUser, handle: Handle, update_data: CompanyUpdateRequest, conn: DBConnection) -> CompanyResponse:
    """
    회사 정보 부분 수정 (관리자)
    - 보낸 필드만 수정, null 전송 시 null로 저장 (numEmployees, logoUrl)
    - 빈 body는 400 (No data)
    """
    update_fields = update_data.model_dump(by_alias=True, exclude_unset=True)
    set_clause, values = build_set_clause(update_fields, COMPANY_COLUMN_MAP)
    handle_idx = len(values) + 1

    try:
        row = await conn.fetchrow(
            f"""
            UPDATE companies
            SET {set_clause}
            WHERE handle = ${handle_idx}
            RETURNING {COMPANY_COLUMNS}
            """,
            *values,
            handle
        )
    except asyncpg.UniqueViolationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Duplicate company name: {update_fields.get('name')}"
        )

    if row is None:
        raise company_not_found(handle)

    return CompanyResponse(company=Company.model_validate(dict(row)))


@router.delete("/companies/{handle}")
async def delete_company(_: AdminUser, handle: Handle, conn: DBConnection) -> dict[str, str]:
    """회사 삭제 (관리자, 채용공고는 CASCADE)"""
    row = await conn.fetchrow(
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        handle
    )
    if row is None:
        raise company_not_found(handle)

    logger.info("Company deleted: %s", handle)
    return {"deleted": row["handle"]}
