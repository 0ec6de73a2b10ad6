from fastapi import APIRouter, Depends, Header, HTTPException, status

from app.core.auth import Actor, Role
from app.core.config import Settings, get_settings
from app.core.errors import ConflictError, StorageError, ValidationError
from app.core.security import extract_bearer_token, get_actor, require_roles
from app.schemas.accounts import ActorOut, RoleSelectionRequest
from app.schemas.companies import CompanyOut
from app.services.accounts import provision_role
from app.services.repository import get_repository

router = APIRouter()


@router.get("", response_model=ActorOut)
async def get_me(actor: Actor = Depends(get_actor)) -> ActorOut:
    return ActorOut(id=actor.id, role=actor.role.value, role_assigned=actor.role_assigned)


@router.post("/role", response_model=ActorOut)
async def select_role(
    payload: RoleSelectionRequest,
    actor: Actor = Depends(get_actor),
    settings: Settings = Depends(get_settings),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> ActorOut:
    token = extract_bearer_token(authorization)
    try:
        updated = await provision_role(settings=settings, actor=actor, token=token, role=Role(payload.role))
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="role update unavailable") from exc
    return ActorOut(id=updated.id, role=updated.role.value, role_assigned=updated.role_assigned)


@router.get("/companies", response_model=list[CompanyOut])
async def list_my_companies(
    actor: Actor = Depends(require_roles(Role.RECRUITER, Role.ADMIN)),
    repository=Depends(get_repository),
) -> list[CompanyOut]:
    owner_id = None if actor.is_admin else actor.id
    try:
        rows = await repository.find_companies(owner_id=owner_id)
    except StorageError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="failed to fetch companies") from exc
    return [CompanyOut(**row) for row in rows]
