from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

ALL = "all"

JobT = TypeVar("JobT", bound=Mapping[str, Any])


@dataclass(frozen=True, slots=True)
class JobFilter:
    search_text: str | None = None
    location: str | None = None
    job_type: str | None = None
    department: str | None = None

    @property
    def is_empty(self) -> bool:
        return not any(
            _constraint(value) for value in (self.search_text, self.location, self.job_type, self.department)
        )


def filter_jobs(
    jobs: Sequence[JobT],
    criteria: JobFilter,
    *,
    company_names: Mapping[str, str] | None = None,
) -> list[JobT]:
    """Return the jobs matching every provided criterion, in input order.

    Jobs are plain mappings keyed like the stored documents (``title``,
    ``department``, ``location``, ``job_type``, ``company_id``). ``company_names``
    maps company id to display name so free-text search can also hit the company.
    """
    if criteria.is_empty:
        return list(jobs)

    search = _constraint(criteria.search_text)
    needle = search.lower() if search else None
    location = _constraint(criteria.location)
    job_type = _constraint(criteria.job_type)
    department = _constraint(criteria.department)
    names = company_names or {}

    matched: list[JobT] = []
    for job in jobs:
        if needle is not None and not _matches_search(job, needle, names):
            continue
        if location is not None and job.get("location") != location:
            continue
        if job_type is not None and job.get("job_type") != job_type:
            continue
        if department is not None and job.get("department") != department:
            continue
        matched.append(job)
    return matched


def distinct_locations(jobs: Iterable[Mapping[str, Any]]) -> list[str]:
    return _distinct(jobs, "location")


def distinct_job_types(jobs: Iterable[Mapping[str, Any]]) -> list[str]:
    return _distinct(jobs, "job_type")


def distinct_departments(jobs: Iterable[Mapping[str, Any]]) -> list[str]:
    return _distinct(jobs, "department")


def _matches_search(job: Mapping[str, Any], needle: str, company_names: Mapping[str, str]) -> bool:
    haystacks = (
        job.get("title"),
        job.get("department"),
        job.get("location"),
        company_names.get(str(job.get("company_id", ""))),
    )
    return any(isinstance(value, str) and needle in value.lower() for value in haystacks)


def _constraint(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped.lower() == ALL:
        return None
    return stripped


def _distinct(jobs: Iterable[Mapping[str, Any]], key: str) -> list[str]:
    return sorted({value for job in jobs if isinstance(value := job.get(key), str) and value})
