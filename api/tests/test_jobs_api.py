from __future__ import annotations

from fastapi.testclient import TestClient

from conftest import auth, create_company, create_job

JOB_BODY = {
    "title": "Backend Engineer",
    "department": "Engineering",
    "location": "Berlin",
    "jobType": "Full-time",
    "description": "Build things.",
}


def test_create_job_requires_actor(client: TestClient) -> None:
    company = create_company(client, slug="acme")
    response = client.post("/jobs", json={"companyId": company["id"], **JOB_BODY})
    assert response.status_code == 401


def test_create_job_denies_candidate(client: TestClient) -> None:
    company = create_company(client, slug="acme")
    response = client.post("/jobs", json={"companyId": company["id"], **JOB_BODY}, headers=auth("candidate-token"))
    assert response.status_code == 403


def test_create_job_denies_recruiter_for_foreign_company(client: TestClient) -> None:
    company = create_company(client, slug="acme")
    response = client.post(
        "/jobs",
        json={"companyId": company["id"], **JOB_BODY},
        headers=auth("other-recruiter-token"),
    )
    assert response.status_code == 403


def test_create_job_allows_owner_and_admin(client: TestClient) -> None:
    company = create_company(client, slug="acme")

    owned = create_job(client, company["id"])
    by_admin = create_job(client, company["id"], token="admin-token", title="Data Analyst")

    assert owned["companyId"] == company["id"]
    assert owned["jobType"] == "Full-time"
    assert owned["id"] and owned["createdAt"]
    assert by_admin["title"] == "Data Analyst"


def test_create_job_missing_fields_is_bad_request(client: TestClient) -> None:
    company = create_company(client, slug="acme")
    response = client.post(
        "/jobs",
        json={"companyId": company["id"], "title": "Engineer"},
        headers=auth("recruiter-token"),
    )
    assert response.status_code == 400
    assert {"department", "location", "jobType", "description"} <= set(response.json()["fields"])


def test_create_job_rejects_unknown_job_type_and_company(client: TestClient) -> None:
    company = create_company(client, slug="acme")
    bad_type = client.post(
        "/jobs",
        json={"companyId": company["id"], **JOB_BODY, "jobType": "Seasonal"},
        headers=auth("recruiter-token"),
    )
    unknown_company = client.post("/jobs", json={"companyId": "nope", **JOB_BODY}, headers=auth("admin-token"))

    assert bad_type.status_code == 400
    assert unknown_company.status_code == 400


def test_list_jobs_applies_query_filters(client: TestClient) -> None:
    acme = create_company(client, slug="acme")
    globex = create_company(client, slug="globex", name="Globex", token="other-recruiter-token")
    create_job(client, acme["id"], title="Backend Engineer", location="Berlin", jobType="Full-time")
    create_job(client, acme["id"], title="Recruiter", department="People", location="Remote", jobType="Contract")
    create_job(
        client,
        globex["id"],
        token="other-recruiter-token",
        title="Sales Lead",
        department="Sales",
        location="Berlin",
        jobType="Part-time",
    )

    def titles(**params: str) -> list[str]:
        response = client.get("/jobs", params=params)
        assert response.status_code == 200
        return [job["title"] for job in response.json()]

    assert titles() == ["Backend Engineer", "Recruiter", "Sales Lead"]
    assert titles(companyId=acme["id"]) == ["Backend Engineer", "Recruiter"]
    assert titles(location="Berlin") == ["Backend Engineer", "Sales Lead"]
    assert titles(location="all", jobType="Contract") == ["Recruiter"]
    assert titles(search="PEOPLE") == ["Recruiter"]
    assert titles(search="engineer", companyId=globex["id"]) == []
