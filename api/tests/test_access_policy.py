import pytest

from app.core.auth import Role
from app.core.errors import AuthorizationError
from app.services.access import (
    can_create_company,
    can_create_job,
    can_create_job_for_company,
    can_edit_company,
    ensure_can_edit_company,
)


@pytest.mark.parametrize(
    ("role", "actor_id", "owner_id", "expected"),
    [
        ("recruiter", "u1", "u1", True),
        ("recruiter", "u1", "u2", False),
        ("admin", "anyone", "u2", True),
        ("candidate", "u1", "u1", False),
        (None, None, "u1", False),
        ("recruiter", None, None, False),
        ("superuser", "u1", "u1", False),
    ],
)
def test_can_edit_company(role: str | None, actor_id: str | None, owner_id: str | None, expected: bool) -> None:
    assert can_edit_company(role, actor_id, owner_id) is expected


def test_can_edit_company_accepts_role_enum() -> None:
    assert can_edit_company(Role.RECRUITER, "u1", "u1") is True
    assert can_edit_company(Role.CANDIDATE, "u1", "u1") is False


def test_create_permissions_follow_role() -> None:
    assert can_create_company("recruiter") and can_create_company(Role.ADMIN)
    assert not can_create_company("candidate")
    assert not can_create_company(None)
    assert can_create_job("admin") and can_create_job("recruiter")
    assert not can_create_job("candidate")


def test_can_create_job_for_company_requires_ownership_for_recruiters() -> None:
    assert can_create_job_for_company("admin", "admin-1", "someone-else") is True
    assert can_create_job_for_company("recruiter", "u1", "u1") is True
    assert can_create_job_for_company("recruiter", "u1", "u2") is False
    assert can_create_job_for_company("candidate", "u1", "u1") is False


def test_ensure_can_edit_company_raises_for_non_owner() -> None:
    ensure_can_edit_company(Role.RECRUITER, "u1", "u1")
    with pytest.raises(AuthorizationError):
        ensure_can_edit_company(Role.RECRUITER, "u1", "u2")
