import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.auth import Actor, Role
from app.core.errors import NotFoundError, StorageError
from app.core.security import require_roles
from app.schemas.jobs import JobCreateRequest, JobOut
from app.services.access import can_create_job_for_company
from app.services.repository import get_repository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[JobOut])
async def list_jobs(
    company_id: str | None = Query(default=None, alias="companyId"),
    location: str | None = Query(default=None),
    job_type: str | None = Query(default=None, alias="jobType"),
    search: str | None = Query(default=None),
    repository=Depends(get_repository),
) -> list[JobOut]:
    try:
        rows = await repository.find_jobs(
            company_id=company_id or None,
            location=location or None,
            job_type=job_type or None,
            search=search or None,
        )
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch jobs") from exc
    return [JobOut(**row) for row in rows]


@router.post("", response_model=JobOut, status_code=status.HTTP_201_CREATED)
async def create_job(
    payload: JobCreateRequest,
    actor: Actor = Depends(require_roles(Role.RECRUITER, Role.ADMIN)),
    repository=Depends(get_repository),
) -> JobOut:
    try:
        company = await repository.get_company(payload.company_id)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to create job") from exc

    if company is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="companyId does not reference an existing company",
        )
    if not can_create_job_for_company(actor.role, actor.id, company["owner_id"]):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="you can only create jobs for your own companies",
        )

    document = payload.model_dump()
    try:
        row = await repository.insert_job(document)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to create job") from exc

    logger.info("job created job_id=%s company_id=%s actor_id=%s", row["id"], row["company_id"], actor.id)
    return JobOut(**row)
