from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.sections import Section

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class CompanyOut(CamelModel):
    id: str
    slug: str
    name: str
    logo_url: str = ""
    banner_url: str = ""
    primary_color: str
    secondary_color: str
    video_url: str | None = None
    owner_id: str
    sections: list[Section] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CompanyCreateRequest(CamelModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)


class CompanyUpdateRequest(CamelModel):
    name: str | None = Field(default=None, min_length=1)
    logo_url: str | None = None
    banner_url: str | None = None
    primary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    secondary_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    video_url: str | None = None
    sections: list[Section] | None = None


class SlugSuggestionOut(CamelModel):
    name: str
    slug: str
    available: bool
