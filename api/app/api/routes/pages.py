"""Page-shaped reads for the careers microsite, its editor and the global job board."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import load_company, load_editable_company
from app.core.auth import Actor
from app.core.errors import StorageError, ValidationError
from app.core.security import get_actor
from app.core.urls import careers_path, embed_video_url
from app.schemas.jobs import JobOut
from app.schemas.pages import (
    BoardJobOut,
    CareersPageOut,
    EditorStateOut,
    JobBoardOut,
    JobFacetsOut,
    PreviewRequest,
)
from app.schemas.sections import (
    SECTION_TYPES,
    AddSectionAction,
    DeleteSectionAction,
    ReorderSectionAction,
    Section,
    SectionEditRequest,
    UpdateSectionAction,
)
from app.services.job_filters import (
    JobFilter,
    distinct_departments,
    distinct_job_types,
    distinct_locations,
    filter_jobs,
)
from app.services.repository import get_repository
from app.services.sections import add_section, delete_section, reorder_section, sorted_view, update_section

router = APIRouter()


def _job_filter(
    search: str | None = Query(default=None),
    location: str | None = Query(default=None),
    job_type: str | None = Query(default=None, alias="jobType"),
    department: str | None = Query(default=None),
) -> JobFilter:
    return JobFilter(search_text=search, location=location, job_type=job_type, department=department)


@router.get("/job-board", response_model=JobBoardOut)
async def get_job_board(
    criteria: JobFilter = Depends(_job_filter),
    repository=Depends(get_repository),
) -> JobBoardOut:
    try:
        companies = await repository.find_companies()
        jobs = await repository.find_jobs()
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch jobs") from exc

    companies_by_id = {company["id"]: company for company in companies}
    names = {company_id: company["name"] for company_id, company in companies_by_id.items()}
    visible = filter_jobs(jobs, criteria, company_names=names)

    board_jobs = []
    for job in visible:
        company = companies_by_id.get(job["company_id"])
        board_jobs.append(
            BoardJobOut(
                **job,
                company_name=company["name"] if company else "",
                company_slug=company["slug"] if company else None,
            )
        )
    return JobBoardOut(jobs=board_jobs, total_jobs=len(jobs), facets=_facets(jobs))


@router.get("/{slug}/careers", response_model=CareersPageOut)
async def get_careers_page(
    slug: str,
    criteria: JobFilter = Depends(_job_filter),
    repository=Depends(get_repository),
) -> CareersPageOut:
    company = await load_company(repository, slug)
    jobs = await _company_jobs(repository, company)
    return _render_page(company, [Section(**section) for section in company["sections"]], jobs, criteria)


@router.get("/{slug}/edit", response_model=EditorStateOut)
async def get_editor_state(
    slug: str,
    actor: Actor = Depends(get_actor),
    repository=Depends(get_repository),
) -> EditorStateOut:
    company = await load_editable_company(repository, slug, actor)
    return EditorStateOut(
        company_id=company["id"],
        slug=company["slug"],
        name=company["name"],
        logo_url=company["logo_url"],
        banner_url=company["banner_url"],
        primary_color=company["primary_color"],
        secondary_color=company["secondary_color"],
        video_url=company["video_url"],
        sections=sorted_view([Section(**section) for section in company["sections"]]),
        section_types=list(SECTION_TYPES),
        public_path=careers_path(company["slug"]),
    )


@router.post("/{slug}/edit/sections", response_model=list[Section])
async def edit_sections(
    slug: str,
    payload: SectionEditRequest,
    actor: Actor = Depends(get_actor),
    repository=Depends(get_repository),
) -> list[Section]:
    company = await load_editable_company(repository, slug, actor)
    action = payload.action
    sections = payload.sections

    try:
        if isinstance(action, AddSectionAction):
            return add_section(sections, action.type, company_id=company["id"])
        if isinstance(action, UpdateSectionAction):
            return update_section(sections, action.section_id, title=action.title, content=action.content)
        if isinstance(action, DeleteSectionAction):
            return delete_section(sections, action.section_id)
        if isinstance(action, ReorderSectionAction):
            return reorder_section(sections, action.source_id, action.target_id)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="unsupported section action")


@router.post("/{slug}/preview", response_model=CareersPageOut)
async def preview_draft(
    slug: str,
    payload: PreviewRequest,
    actor: Actor = Depends(get_actor),
    repository=Depends(get_repository),
) -> CareersPageOut:
    company = await load_editable_company(repository, slug, actor)
    draft = {**company, **payload.model_dump(exclude_unset=True, exclude_none=True, exclude={"sections"})}
    sections = payload.sections if payload.sections is not None else [Section(**section) for section in company["sections"]]
    jobs = await _company_jobs(repository, company)
    return _render_page(draft, sections, jobs, JobFilter())


async def _company_jobs(repository: Any, company: dict[str, Any]) -> list[dict[str, Any]]:
    try:
        return await repository.find_jobs(company_id=company["id"])
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch jobs") from exc


def _render_page(
    company: dict[str, Any],
    sections: list[Section],
    jobs: list[dict[str, Any]],
    criteria: JobFilter,
) -> CareersPageOut:
    visible = filter_jobs(jobs, criteria, company_names={company["id"]: company["name"]})
    return CareersPageOut(
        slug=company["slug"],
        name=company["name"],
        logo_url=company.get("logo_url") or "",
        banner_url=company.get("banner_url") or "",
        primary_color=company["primary_color"],
        secondary_color=company["secondary_color"],
        video_embed_url=embed_video_url(company.get("video_url")),
        sections=sorted_view(sections),
        jobs=[JobOut(**job) for job in visible],
        total_jobs=len(jobs),
        facets=_facets(jobs),
    )


def _facets(jobs: list[dict[str, Any]]) -> JobFacetsOut:
    return JobFacetsOut(
        locations=distinct_locations(jobs),
        job_types=distinct_job_types(jobs),
        departments=distinct_departments(jobs),
    )
