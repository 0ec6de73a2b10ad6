from typing import Annotated, Literal

from pydantic import Field

from app.schemas.common import CamelModel

SectionType = Literal["about", "life", "values", "benefits"]
SECTION_TYPES: tuple[str, ...] = ("about", "life", "values", "benefits")


class Section(CamelModel):
    id: str = Field(min_length=1)
    company_id: str = ""
    type: SectionType
    title: str = ""
    content: str = ""
    order: int = Field(default=0, ge=0)


class AddSectionAction(CamelModel):
    op: Literal["add"]
    type: str


class UpdateSectionAction(CamelModel):
    op: Literal["update"]
    section_id: str
    title: str | None = None
    content: str | None = None


class DeleteSectionAction(CamelModel):
    op: Literal["delete"]
    section_id: str


class ReorderSectionAction(CamelModel):
    op: Literal["reorder"]
    source_id: str
    target_id: str


SectionAction = Annotated[
    AddSectionAction | UpdateSectionAction | DeleteSectionAction | ReorderSectionAction,
    Field(discriminator="op"),
]


class SectionEditRequest(CamelModel):
    sections: list[Section] = Field(default_factory=list)
    action: SectionAction
