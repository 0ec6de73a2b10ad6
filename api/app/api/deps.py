from typing import Any

from fastapi import HTTPException, status

from app.core.auth import Actor
from app.core.errors import AuthorizationError, StorageError
from app.services.access import ensure_can_edit_company


async def load_company(repository: Any, slug: str) -> dict[str, Any]:
    try:
        company = await repository.find_company_by_slug(slug)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch company") from exc
    if company is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="company not found")
    return company


async def load_editable_company(repository: Any, slug: str, actor: Actor) -> dict[str, Any]:
    company = await load_company(repository, slug)
    try:
        ensure_can_edit_company(actor.role, actor.id, company["owner_id"])
    except AuthorizationError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return company
