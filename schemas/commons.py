from typing import Annotated

import asyncpg
from fastapi import Depends, Path
from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from utils.database import get_connection

DBConnection = Annotated[asyncpg.Connection, Depends(get_connection)]


class CamelModel(BaseModel):
    """JSON은 camelCase (numEmployees), 파이썬/DB는 snake_case"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


Handle = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=25),
]

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=25),
]

# PostgreSQL INTEGER 범위
MAX_INT = 2**31 - 1

JobId = Annotated[int, Field(ge=1, le=MAX_INT, description="채용공고 ID")]
JobIdPath = Annotated[int, Path(ge=1, le=MAX_INT, description="채용공고 ID")]

Name = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100),
]

Count = Annotated[int, Field(ge=0, le=MAX_INT)]
