from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.jobs import JobOut
from app.schemas.sections import Section, SectionType


class JobFacetsOut(CamelModel):
    locations: list[str] = Field(default_factory=list)
    job_types: list[str] = Field(default_factory=list)
    departments: list[str] = Field(default_factory=list)


class CareersPageOut(CamelModel):
    slug: str
    name: str
    logo_url: str = ""
    banner_url: str = ""
    primary_color: str
    secondary_color: str
    video_embed_url: str | None = None
    sections: list[Section] = Field(default_factory=list)
    jobs: list[JobOut] = Field(default_factory=list)
    total_jobs: int = 0
    facets: JobFacetsOut = Field(default_factory=JobFacetsOut)


class PreviewRequest(CamelModel):
    name: str | None = None
    logo_url: str | None = None
    banner_url: str | None = None
    primary_color: str | None = None
    secondary_color: str | None = None
    video_url: str | None = None
    sections: list[Section] | None = None


class EditorStateOut(CamelModel):
    company_id: str
    slug: str
    name: str
    logo_url: str = ""
    banner_url: str = ""
    primary_color: str
    secondary_color: str
    video_url: str | None = None
    sections: list[Section] = Field(default_factory=list)
    section_types: list[SectionType] = Field(default_factory=list)
    public_path: str


class BoardJobOut(JobOut):
    company_name: str = ""
    company_slug: str | None = None


class JobBoardOut(CamelModel):
    jobs: list[BoardJobOut] = Field(default_factory=list)
    total_jobs: int = 0
    facets: JobFacetsOut = Field(default_factory=JobFacetsOut)
