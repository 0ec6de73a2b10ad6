from __future__ import annotations

import os
from typing import Any

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

import app.core.security as security
from app.core.config import get_settings
from app.main import app
from app.services.repository import get_repository
from app.services.store import InMemoryRepository

USERS_BY_TOKEN: dict[str, dict[str, Any]] = {
    "admin-token": {"id": "admin-1", "app_metadata": {"role": "admin"}},
    "recruiter-token": {"id": "recruiter-1", "app_metadata": {}, "user_metadata": {"role": "recruiter"}},
    "other-recruiter-token": {"id": "recruiter-2", "app_metadata": {"role": "recruiter"}},
    "candidate-token": {"id": "candidate-1", "user_metadata": {"role": "candidate"}},
    "new-user-token": {"id": "new-user-1", "app_metadata": {}, "user_metadata": {}},
}


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def repository() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def client(repository: InMemoryRepository, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    os.environ["CB_SUPABASE_URL"] = "https://example.supabase.co"
    os.environ["CB_SUPABASE_ANON_KEY"] = "anon-key"
    get_settings.cache_clear()

    async def _fake_fetch(*, token: str, **_: Any) -> dict[str, Any]:
        user = USERS_BY_TOKEN.get(token)
        if user is None:
            raise HTTPException(status_code=401, detail="invalid bearer token")
        return user

    monkeypatch.setattr(security, "_fetch_supabase_user", _fake_fetch)
    app.dependency_overrides[get_repository] = lambda: repository

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    os.environ.pop("CB_SUPABASE_URL", None)
    os.environ.pop("CB_SUPABASE_ANON_KEY", None)
    get_settings.cache_clear()


def create_company(client: TestClient, *, slug: str, name: str = "Acme", token: str = "recruiter-token") -> dict[str, Any]:
    response = client.post("/companies", json={"name": name, "slug": slug}, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()


def create_job(client: TestClient, company_id: str, *, token: str = "recruiter-token", **overrides: str) -> dict[str, Any]:
    payload = {
        "companyId": company_id,
        "title": "Backend Engineer",
        "department": "Engineering",
        "location": "Berlin",
        "jobType": "Full-time",
        "description": "Build the careers platform.",
        **overrides,
    }
    response = client.post("/jobs", json=payload, headers=auth(token))
    assert response.status_code == 201, response.text
    return response.json()
