from decimal import Decimal

from pydantic import ConfigDict, model_validator

from schemas.commons import CamelModel, Count, Handle, JobId, Name


class CompanyJob(CamelModel):
    """회사 상세에 포함되는 채용공고 요약"""
    id: JobId
    title: str
    salary: Count | None = None
    equity: Decimal | None = None


class Company(CamelModel):
    handle: Handle
    name: Name
    description: str
    num_employees: Count | None = None
    logo_url: str | None = None


class CompanyDetail(Company):
    jobs: list[CompanyJob] = []


class CompanyCreateRequest(CamelModel):
    model_config = ConfigDict(extra='forbid')

    handle: Handle
    name: Name
    description: str
    num_employees: Count | None = None
    logo_url: str | None = None


class CompanyUpdateRequest(CamelModel):
    """handle은 수정 불가 (extra='forbid'로 400)"""
    model_config = ConfigDict(extra='forbid')

    name: Name | None = None
    description: str | None = None
    num_employees: Count | None = None
    logo_url: str | None = None

    @model_validator(mode='after')
    def check_not_null_fields(self):
        for field in ("name", "description"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field}은 null로 설정할 수 없습니다.")
        return self


class CompanyResponse(CamelModel):
    company: Company


class CompanyDetailResponse(CamelModel):
    company: CompanyDetail


class CompanyListResponse(CamelModel):
    companies: list[Company]
