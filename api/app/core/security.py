from collections.abc import Awaitable, Callable
from typing import Any

import httpx
from fastapi import Depends, Header, HTTPException, status

from app.core.auth import SELF_SELECTABLE_ROLES, Actor, Role, parse_role
from app.core.config import Settings, get_settings
from app.core.errors import AuthenticationError


async def get_actor(
    settings: Settings = Depends(get_settings),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> Actor:
    if not authorization:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="authentication required")
    return await _resolve_actor(settings=settings, authorization=authorization)


def require_roles(*roles: Role) -> Callable[..., Awaitable[Actor]]:
    allowed = frozenset(roles)

    async def dependency(actor: Actor = Depends(get_actor)) -> Actor:
        if actor.role not in allowed:
            names = ", ".join(sorted(role.value for role in allowed))
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"requires one of roles: {names}",
            )
        return actor

    return dependency


def extract_bearer_token(authorization: str | None) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="bearer token required")

    token = authorization.split(" ", maxsplit=1)[1].strip()
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="empty bearer token")
    return token


async def _resolve_actor(*, settings: Settings, authorization: str) -> Actor:
    token = extract_bearer_token(authorization)

    if not settings.supabase_url or not settings.supabase_anon_key:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase auth is not configured",
        )

    user = await _fetch_supabase_user(
        supabase_url=settings.supabase_url,
        supabase_anon_key=settings.supabase_anon_key,
        token=token,
        timeout_seconds=settings.auth_timeout_seconds,
    )
    try:
        return actor_from_user(user)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc


def actor_from_user(user: dict[str, Any]) -> Actor:
    """Validate an identity-provider payload into an Actor at the trust boundary."""
    user_id = user.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise AuthenticationError("invalid bearer token")

    role = _resolve_role(user)
    if role is None:
        return Actor(id=user_id, role=Role.CANDIDATE, role_assigned=False)
    return Actor(id=user_id, role=role)


async def _fetch_supabase_user(
    *,
    supabase_url: str,
    supabase_anon_key: str,
    token: str,
    timeout_seconds: float,
) -> dict[str, Any]:
    headers = {
        "Authorization": f"Bearer {token}",
        "apikey": supabase_anon_key,
    }
    url = f"{supabase_url.rstrip('/')}/auth/v1/user"

    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            response = await client.get(url, headers=headers)
    except httpx.HTTPError as exc:  # pragma: no cover - network dependent
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase auth verification unavailable",
        ) from exc

    if response.status_code in {401, 403}:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="invalid bearer token")
    if response.status_code != 200:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase auth verification failed",
        )

    return response.json()


def _resolve_role(user: dict[str, Any]) -> Role | None:
    app_metadata = user.get("app_metadata")
    if isinstance(app_metadata, dict):
        role = parse_role(app_metadata.get("role"))
        if role is not None:
            return role

    # user_metadata is writable by the user, so it can never grant admin.
    user_metadata = user.get("user_metadata")
    if isinstance(user_metadata, dict):
        role = parse_role(user_metadata.get("role"))
        if role in SELF_SELECTABLE_ROLES:
            return role

    return None
