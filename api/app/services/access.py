"""Role and ownership predicates for company and job mutations.

All functions are pure; callers turn a ``False`` into an authorization error.
"""

from app.core.auth import Role, parse_role
from app.core.errors import AuthorizationError

EDITOR_ROLES = frozenset({Role.ADMIN, Role.RECRUITER})


def can_edit_company(actor_role: Role | str | None, actor_id: str | None, company_owner_id: str | None) -> bool:
    role = _role_of(actor_role)
    if role is Role.ADMIN:
        return True
    if role is Role.RECRUITER and actor_id and actor_id == company_owner_id:
        return True
    return False


def can_create_company(actor_role: Role | str | None) -> bool:
    return _role_of(actor_role) in EDITOR_ROLES


def can_create_job(actor_role: Role | str | None) -> bool:
    return _role_of(actor_role) in EDITOR_ROLES


def can_create_job_for_company(
    actor_role: Role | str | None,
    actor_id: str | None,
    company_owner_id: str | None,
) -> bool:
    # Same rule as editing: admins anywhere, recruiters only on companies they own.
    return can_edit_company(actor_role, actor_id, company_owner_id)


def _role_of(actor_role: Role | str | None) -> Role | None:
    if isinstance(actor_role, Role):
        return actor_role
    return parse_role(actor_role)


def ensure_can_edit_company(actor_role: Role | str | None, actor_id: str | None, company_owner_id: str | None) -> None:
    if not can_edit_company(actor_role, actor_id, company_owner_id):
        raise AuthorizationError("only the company owner or an admin can edit this company")
