import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import load_company, load_editable_company
from app.core.auth import Actor, Role
from app.core.config import Settings, get_settings
from app.core.errors import ConflictError, NotFoundError, StorageError, ValidationError
from app.core.security import get_actor, require_roles
from app.core.urls import RESERVED_SLUGS, suggest_slug
from app.schemas.companies import CompanyCreateRequest, CompanyOut, CompanyUpdateRequest, SlugSuggestionOut
from app.services.companies import company_update_fields, new_company_document
from app.services.repository import get_repository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=list[CompanyOut])
async def list_companies(
    owner_id: str | None = Query(default=None, alias="userId"),
    repository=Depends(get_repository),
) -> list[CompanyOut]:
    try:
        rows = await repository.find_companies(owner_id=owner_id)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch companies") from exc
    return [CompanyOut(**row) for row in rows]


@router.get("/slug-suggestion", response_model=SlugSuggestionOut)
async def get_slug_suggestion(
    name: str = Query(min_length=1),
    repository=Depends(get_repository),
) -> SlugSuggestionOut:
    slug = suggest_slug(name)
    try:
        existing = await repository.find_company_by_slug(slug) if slug else None
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch company") from exc
    available = bool(slug) and slug not in RESERVED_SLUGS and existing is None
    return SlugSuggestionOut(name=name, slug=slug, available=available)


@router.post("", response_model=CompanyOut, status_code=status.HTTP_201_CREATED)
async def create_company(
    payload: CompanyCreateRequest,
    actor: Actor = Depends(require_roles(Role.RECRUITER, Role.ADMIN)),
    settings: Settings = Depends(get_settings),
    repository=Depends(get_repository),
) -> CompanyOut:
    try:
        document = new_company_document(payload, owner_id=actor.id, settings=settings)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        row = await repository.insert_company(document)
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to create company") from exc

    logger.info("company created slug=%s owner_id=%s", row["slug"], actor.id)
    return CompanyOut(**row)


@router.get("/{slug}", response_model=CompanyOut)
async def get_company(slug: str, repository=Depends(get_repository)) -> CompanyOut:
    return CompanyOut(**await load_company(repository, slug))


@router.put("/{slug}", response_model=CompanyOut)
async def replace_company(
    slug: str,
    payload: CompanyUpdateRequest,
    actor: Actor = Depends(get_actor),
    repository=Depends(get_repository),
) -> CompanyOut:
    company = await load_editable_company(repository, slug, actor)

    try:
        fields = company_update_fields(payload, company_id=company["id"])
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        row = await repository.replace_company(slug, fields)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to update company") from exc

    logger.info("company saved slug=%s actor_id=%s sections=%d", slug, actor.id, len(row["sections"]))
    return CompanyOut(**row)
