from decimal import Decimal
from typing import Annotated

from pydantic import ConfigDict, Field, StringConstraints, model_validator

from schemas.commons import CamelModel, Count, Handle, JobId

Title = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100),
]
# 지분율 (0 ~ 1.0)
Equity = Annotated[Decimal, Field(ge=0, le=1)]


class Job(CamelModel):
    id: JobId
    title: Title
    salary: Count | None = None
    equity: Equity | None = None
    company_handle: Handle


class JobCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    title: Title
    salary: Count | None = None
    equity: Equity | None = None
    company_handle: Handle


class JobUpdateRequest(CamelModel):
    """id, companyHandle은 수정 불가 (extra='forbid'로 400)"""
    model_config = ConfigDict(extra='forbid')

    title: Title | None = None
    salary: Count | None = None
    equity: Equity | None = None

    @model_validator(mode='after')
    def check_title_not_null(self):
        if "title" in self.model_fields_set and self.title is None:
            raise ValueError("title은 null로 설정할 수 없습니다.")
        return self


class JobResponse(CamelModel):
    job: Job


class JobListResponse(CamelModel):
    jobs: list[Job]


class JobDeletedResponse(CamelModel):
    deleted: str
