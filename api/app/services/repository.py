from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
import json
import logging
from typing import Any

import asyncpg  # type: ignore[import-untyped]
from asyncpg import exceptions as pg_exc

from app.core.config import get_settings
from app.core.errors import CareersError, ConflictError, NotFoundError, StorageError
from app.services.store import InMemoryRepository

logger = logging.getLogger(__name__)

ALL = "all"
UPDATABLE_COMPANY_FIELDS = (
    "name",
    "logo_url",
    "banner_url",
    "primary_color",
    "secondary_color",
    "video_url",
    "sections",
)

SCHEMA_SQL = """
create table if not exists companies (
  id uuid primary key default gen_random_uuid(),
  slug text not null unique,
  name text not null,
  logo_url text not null default '',
  banner_url text not null default '',
  primary_color text not null,
  secondary_color text not null,
  video_url text,
  owner_id text not null,
  sections jsonb not null default '[]'::jsonb,
  created_at timestamptz not null default now(),
  updated_at timestamptz not null default now()
);
create index if not exists companies_owner_id_idx on companies (owner_id);

create table if not exists jobs (
  id uuid primary key default gen_random_uuid(),
  company_id uuid not null references companies (id),
  title text not null,
  department text not null,
  location text not null,
  job_type text not null check (job_type in ('Full-time', 'Part-time', 'Contract', 'Internship')),
  description text not null,
  created_at timestamptz not null default now()
);
create index if not exists jobs_company_id_idx on jobs (company_id);
"""

COMPANY_COLUMNS = """
  id::text as id,
  slug,
  name,
  logo_url,
  banner_url,
  primary_color,
  secondary_color,
  video_url,
  owner_id,
  sections,
  created_at,
  updated_at
"""

JOB_COLUMNS = """
  id::text as id,
  company_id::text as company_id,
  title,
  department,
  location,
  job_type,
  description,
  created_at
"""


class PostgresRepository:
    """Company and job documents kept in Postgres; sections live inline as a JSONB array."""

    def __init__(self, database_url: str | None, min_pool_size: int, max_pool_size: int) -> None:
        self.database_url = database_url
        self.min_pool_size = min_pool_size
        self.max_pool_size = max_pool_size
        self._pool: asyncpg.Pool | None = None
        self._pool_lock = asyncio.Lock()

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def find_companies(self, *, owner_id: str | None = None) -> list[dict[str, Any]]:
        pool = await self._get_pool()
        with _storage_errors("fetch companies"):
            if owner_id:
                rows = await pool.fetch(
                    f"select {COMPANY_COLUMNS} from companies where owner_id = $1 order by created_at asc, id asc",
                    owner_id,
                )
            else:
                rows = await pool.fetch(f"select {COMPANY_COLUMNS} from companies order by created_at asc, id asc")
        return [self._company_row_to_dict(row) for row in rows]

    async def find_company_by_slug(self, slug: str) -> dict[str, Any] | None:
        pool = await self._get_pool()
        with _storage_errors("fetch company"):
            row = await pool.fetchrow(f"select {COMPANY_COLUMNS} from companies where slug = $1", slug)
        return self._company_row_to_dict(row) if row else None

    async def get_company(self, company_id: str) -> dict[str, Any] | None:
        pool = await self._get_pool()
        with _storage_errors("fetch company"):
            row = await pool.fetchrow(f"select {COMPANY_COLUMNS} from companies where id::text = $1", company_id)
        return self._company_row_to_dict(row) if row else None

    async def insert_company(self, document: dict[str, Any]) -> dict[str, Any]:
        pool = await self._get_pool()
        with _storage_errors("create company"):
            try:
                row = await pool.fetchrow(
                    f"""
                    insert into companies (
                      slug, name, logo_url, banner_url, primary_color, secondary_color, video_url, owner_id, sections
                    )
                    values ($1, $2, $3, $4, $5, $6, $7, $8, $9::jsonb)
                    returning {COMPANY_COLUMNS}
                    """,
                    document["slug"],
                    document["name"],
                    document.get("logo_url", ""),
                    document.get("banner_url", ""),
                    document["primary_color"],
                    document["secondary_color"],
                    document.get("video_url"),
                    document["owner_id"],
                    json.dumps(document.get("sections") or []),
                )
            except pg_exc.UniqueViolationError as exc:
                raise ConflictError("a company with this URL slug already exists") from exc
        return self._company_row_to_dict(row)

    async def replace_company(self, slug: str, fields: dict[str, Any]) -> dict[str, Any]:
        pool = await self._get_pool()
        params: list[Any] = []

        def bind(value: Any) -> str:
            params.append(value)
            return f"${len(params)}"

        assignments: list[str] = []
        for key in UPDATABLE_COMPANY_FIELDS:
            if key not in fields:
                continue
            if key == "sections":
                assignments.append(f"sections = {bind(json.dumps(fields[key] or []))}::jsonb")
            else:
                assignments.append(f"{key} = {bind(fields[key])}")
        assignments.append("updated_at = now()")
        slug_token = bind(slug)

        with _storage_errors("update company"):
            row = await pool.fetchrow(
                f"""
                update companies
                set {", ".join(assignments)}
                where slug = {slug_token}
                returning {COMPANY_COLUMNS}
                """,
                *params,
            )
        if not row:
            raise NotFoundError("company not found")
        return self._company_row_to_dict(row)

    async def find_jobs(
        self,
        *,
        company_id: str | None = None,
        location: str | None = None,
        job_type: str | None = None,
        search: str | None = None,
    ) -> list[dict[str, Any]]:
        pool = await self._get_pool()
        conditions: list[str] = []
        params: list[Any] = []

        def bind(value: Any) -> str:
            params.append(value)
            return f"${len(params)}"

        if company_id:
            conditions.append(f"company_id::text = {bind(company_id)}")
        if location and location != ALL:
            conditions.append(f"location = {bind(location)}")
        if job_type and job_type != ALL:
            conditions.append(f"job_type = {bind(job_type)}")
        normalized_search = search.strip() if search else ""
        if normalized_search:
            token = bind(f"%{_escape_like(normalized_search)}%")
            conditions.append(f"(title ilike {token} or department ilike {token})")

        where_sql = " and ".join(conditions) if conditions else "true"
        with _storage_errors("fetch jobs"):
            rows = await pool.fetch(
                f"select {JOB_COLUMNS} from jobs where {where_sql} order by created_at asc, id asc",
                *params,
            )
        return [self._job_row_to_dict(row) for row in rows]

    async def insert_job(self, document: dict[str, Any]) -> dict[str, Any]:
        pool = await self._get_pool()
        with _storage_errors("create job"):
            try:
                row = await pool.fetchrow(
                    f"""
                    insert into jobs (company_id, title, department, location, job_type, description)
                    values ($1::uuid, $2, $3, $4, $5, $6)
                    returning {JOB_COLUMNS}
                    """,
                    document["company_id"],
                    document["title"],
                    document["department"],
                    document["location"],
                    document["job_type"],
                    document["description"],
                )
            except (pg_exc.ForeignKeyViolationError, pg_exc.DataError) as exc:
                raise NotFoundError("company not found") from exc
        return self._job_row_to_dict(row)

    async def _get_pool(self) -> asyncpg.Pool:
        if not self.database_url:
            raise StorageError("CB_DATABASE_URL is required")

        if self._pool is not None:
            return self._pool

        async with self._pool_lock:
            if self._pool is not None:
                return self._pool

            try:
                pool = await asyncpg.create_pool(
                    dsn=self.database_url,
                    min_size=self.min_pool_size,
                    max_size=self.max_pool_size,
                    command_timeout=15,
                )
            except Exception as exc:  # pragma: no cover - depends on environment
                logger.exception("database pool creation failed")
                raise StorageError("database unavailable") from exc

            try:
                async with pool.acquire() as conn:
                    await conn.execute(SCHEMA_SQL)
            except Exception as exc:
                logger.exception("database schema setup failed")
                await pool.close()
                raise StorageError("database unavailable") from exc

            self._pool = pool
            return self._pool

    @staticmethod
    def _company_row_to_dict(row: asyncpg.Record) -> dict[str, Any]:
        return {
            "id": row["id"],
            "slug": row["slug"],
            "name": row["name"],
            "logo_url": row["logo_url"] or "",
            "banner_url": row["banner_url"] or "",
            "primary_color": row["primary_color"],
            "secondary_color": row["secondary_color"],
            "video_url": row["video_url"],
            "owner_id": row["owner_id"],
            "sections": _coerce_json_list(row["sections"]),
            "created_at": row["created_at"],
            "updated_at": row["updated_at"],
        }

    @staticmethod
    def _job_row_to_dict(row: asyncpg.Record) -> dict[str, Any]:
        return {
            "id": row["id"],
            "company_id": row["company_id"],
            "title": row["title"],
            "department": row["department"],
            "location": row["location"],
            "job_type": row["job_type"],
            "description": row["description"],
            "created_at": row["created_at"],
        }


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except CareersError:
        raise
    except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
        logger.warning("storage operation failed operation=%s error=%s", operation, exc)
        raise StorageError(f"failed to {operation}") from exc


def _coerce_json_list(value: Any) -> list[dict[str, Any]]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            return []
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@lru_cache
def get_repository() -> PostgresRepository | InMemoryRepository:
    settings = get_settings()
    if settings.storage_backend == "memory":
        return InMemoryRepository()
    return PostgresRepository(
        database_url=settings.database_url,
        min_pool_size=settings.database_pool_min_size,
        max_pool_size=settings.database_pool_max_size,
    )
