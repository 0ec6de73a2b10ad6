import logging
from typing import Any

import httpx

from app.core.auth import SELF_SELECTABLE_ROLES, Actor, Role
from app.core.config import Settings
from app.core.errors import ConflictError, StorageError, ValidationError

logger = logging.getLogger(__name__)


async def provision_role(*, settings: Settings, actor: Actor, token: str, role: Role) -> Actor:
    """Record the role a new account picked during sign-up in the identity provider."""
    if role not in SELF_SELECTABLE_ROLES:
        raise ValidationError(f"role {role.value!r} cannot be self-assigned", field="role")
    if actor.role_assigned:
        raise ConflictError(f"account already has role {actor.role.value!r}")
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise StorageError("Supabase auth is not configured")

    await _put_supabase_user_metadata(
        supabase_url=settings.supabase_url,
        supabase_anon_key=settings.supabase_anon_key,
        token=token,
        data={"role": role.value},
        timeout_seconds=settings.auth_timeout_seconds,
    )
    logger.info("account role provisioned actor_id=%s role=%s", actor.id, role.value)
    return Actor(id=actor.id, role=role)


async def _put_supabase_user_metadata(
    *,
    supabase_url: str,
    supabase_anon_key: str,
    token: str,
    data: dict[str, Any],
    timeout_seconds: float,
) -> dict[str, Any]:
    headers = {
        "Authorization": f"Bearer {token}",
        "apikey": supabase_anon_key,
    }
    url = f"{supabase_url.rstrip('/')}/auth/v1/user"

    try:
        async with httpx.AsyncClient(timeout=timeout_seconds) as client:
            response = await client.put(url, headers=headers, json={"data": data})
    except httpx.HTTPError as exc:  # pragma: no cover - network dependent
        raise StorageError("identity provider unavailable") from exc

    if response.status_code != 200:
        logger.warning("identity provider rejected metadata update status=%s", response.status_code)
        raise StorageError("identity provider rejected the role update")
    return response.json()
