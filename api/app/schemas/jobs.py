from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel

JobType = Literal["Full-time", "Part-time", "Contract", "Internship"]


class JobOut(CamelModel):
    id: str
    company_id: str
    title: str
    department: str
    location: str
    job_type: JobType
    description: str
    created_at: datetime


class JobCreateRequest(CamelModel):
    company_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    department: str = Field(min_length=1)
    location: str = Field(min_length=1)
    job_type: JobType
    description: str = Field(min_length=1)
