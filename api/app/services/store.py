from copy import deepcopy
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from app.core.errors import ConflictError, NotFoundError

ALL = "all"
UPDATABLE_COMPANY_FIELDS = frozenset(
    {"name", "logo_url", "banner_url", "primary_color", "secondary_color", "video_url", "sections"}
)


class InMemoryRepository:
    """Process-local document store for local development and tests.

    Mirrors the Postgres repository contract: documents are copied in and out so
    callers never share state with the store.
    """

    def __init__(self) -> None:
        self.companies: dict[str, dict[str, Any]] = {}
        self.jobs: dict[str, dict[str, Any]] = {}

    async def close(self) -> None:
        return None

    async def find_companies(self, *, owner_id: str | None = None) -> list[dict[str, Any]]:
        rows = self.companies.values()
        if owner_id:
            rows = [row for row in rows if row["owner_id"] == owner_id]
        return [deepcopy(row) for row in rows]

    async def find_company_by_slug(self, slug: str) -> dict[str, Any] | None:
        for row in self.companies.values():
            if row["slug"] == slug:
                return deepcopy(row)
        return None

    async def get_company(self, company_id: str) -> dict[str, Any] | None:
        row = self.companies.get(company_id)
        return deepcopy(row) if row else None

    async def insert_company(self, document: dict[str, Any]) -> dict[str, Any]:
        if any(row["slug"] == document["slug"] for row in self.companies.values()):
            raise ConflictError("a company with this URL slug already exists")

        now = datetime.now(timezone.utc)
        company_id = str(uuid4())
        row = {
            "logo_url": "",
            "banner_url": "",
            "video_url": None,
            "sections": [],
            **deepcopy(document),
            "id": company_id,
            "created_at": now,
            "updated_at": now,
        }
        self.companies[company_id] = row
        return deepcopy(row)

    async def replace_company(self, slug: str, fields: dict[str, Any]) -> dict[str, Any]:
        for row in self.companies.values():
            if row["slug"] != slug:
                continue
            for key, value in fields.items():
                if key in UPDATABLE_COMPANY_FIELDS:
                    row[key] = deepcopy(value)
            row["updated_at"] = datetime.now(timezone.utc)
            return deepcopy(row)
        raise NotFoundError("company not found")

    async def find_jobs(
        self,
        *,
        company_id: str | None = None,
        location: str | None = None,
        job_type: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        rows = list(self.jobs.values())
        if company_id:
            rows = [row for row in rows if row["company_id"] == company_id]
        if location and location != ALL:
            rows = [row for row in rows if row["location"] == location]
        if job_type and job_type != ALL:
            rows = [row for row in rows if row["job_type"] == job_type]
        needle = search.strip().lower() if search else ""
        if needle:
            rows = [row for row in rows if needle in row["title"].lower() or needle in row["department"].lower()]
        return [deepcopy(row) for row in rows]

    async def insert_job(self, document: dict[str, Any]) -> dict[str, Any]:
        if document["company_id"] not in self.companies:
            raise NotFoundError("company not found")

        job_id = str(uuid4())
        row = {
            **deepcopy(document),
            "id": job_id,
            "created_at": datetime.now(timezone.utc),
        }
        self.jobs[job_id] = row
        return deepcopy(row)
