import logging
from decimal import Decimal
from typing import Annotated

import asyncpg
from fastapi import APIRouter, HTTPException, Query, status

from schemas.commons import DBConnection, JobIdPath, MAX_INT
from schemas.job import (
    Job,
    JobCreateRequest,
    JobDeletedResponse,
    JobListResponse,
    JobResponse,
    JobUpdateRequest,
)
from utils.auth import AdminUser
from utils.query import build_set_clause, build_where_clause

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["JOBS"],
)

# title, salary, equity는 컬럼명과 같음
JOB_COLUMN_MAP: dict[str, str] = {}

JOB_COLUMNS = """
    id,
    title,
    salary,
    equity,
    company_handle AS "companyHandle"
"""


def job_not_found(job_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No job: {job_id}"
    )


@router.post("/jobs", response_model=JobResponse,
             status_code=status.HTTP_201_CREATED)
async def create_job(_: AdminUser, job: JobCreateRequest, conn: DBConnection) -> JobResponse:
    """채용공고 등록 (관리자)"""
    try:
        row = await conn.fetchrow(
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {JOB_COLUMNS}
            """,
            job.title,
            job.salary,
            job.equity,
            job.company_handle,
        )
    except asyncpg.ForeignKeyViolationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"No company: {job.company_handle}"
        )

    return JobResponse(job=Job.model_validate(dict(row)))


@router.get("/jobs", response_model=JobListResponse)
async def get_jobs(
        conn: DBConnection,
        title: Annotated[str | None, Query(min_length=1, max_length=100)] = None,
        min_salary: Annotated[int | None, Query(alias="minSalary", ge=0, le=MAX_INT)] = None,
        has_equity: Annotated[bool, Query(alias="hasEquity")] = False,
) -> JobListResponse:
    """
    채용공고 목록 조회
    - title: 제목 부분 일치 (대소문자 무시)
    - minSalary: 최소 연봉
    - hasEquity: true면 지분 있는 공고만
    """
    conditions = []
    if title:
        conditions.append(("title ILIKE {}", f"%{title}%"))
    if min_salary is not None:
        conditions.append(("salary >= {}", min_salary))
    if has_equity:
        conditions.append(("equity > {}", Decimal(0)))

    where_clause, values = build_where_clause(conditions)

    rows = await conn.fetch(
        f"SELECT {JOB_COLUMNS} FROM jobs {where_clause} ORDER BY title, id",
        *values
    )

    return JobListResponse(jobs=[Job.model_validate(dict(row)) for row in rows])


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job(job_id: JobIdPath, conn: DBConnection) -> JobResponse:
    """채용공고 상세 조회"""
    row = await conn.fetchrow(
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
        job_id
    )
    if row is None:
        raise job_not_found(job_id)

    return JobResponse(job=Job.model_validate(dict(row)))


@router.patch("/jobs/{job_id}", response_model=JobResponse)
async def update_job(
        _: AdminUser, job_id: JobIdPath, update_data: JobUpdateRequest, conn: DBConnection) -> JobResponse:
    """채용공고 부분 수정 (관리자, id/companyHandle 변경 불가)"""
    update_fields = update_data.model_dump(by_alias=True, exclude_unset=True)
    set_clause, values = build_set_clause(update_fields, JOB_COLUMN_MAP)
    id_idx = len(values) + 1

    row = await conn.fetchrow(
        f"""
        UPDATE jobs
        SET {set_clause}
        WHERE id = ${id_idx}
        RETURNING {JOB_COLUMNS}
        """,
        *values,
        job_id
    )
    if row is None:
        raise job_not_found(job_id)

    return JobResponse(job=Job.model_validate(dict(row)))


@router.delete("/jobs/{job_id}", response_model=JobDeletedResponse)
async def delete_job(_: AdminUser, job_id: JobIdPath, conn: DBConnection) -> JobDeletedResponse:
    """채용공고 삭제 (관리자)"""
    row = await conn.fetchrow(
        "DELETE FROM jobs WHERE id = $1 RETURNING id",
        job_id
    )
    if row is None:
        raise job_not_found(job_id)

    logger.info("Job deleted: %s", job_id)
    return JobDeletedResponse(deleted=str(row["id"]))
