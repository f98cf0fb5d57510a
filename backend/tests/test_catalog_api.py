from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.models import JobRole, JobRoleSkill, SalaryByLocation, Skill


@pytest.fixture
def catalog(db_session):
    analyst = JobRole(
        title="Clinical Informatics Analyst",
        description="Optimises clinical workflows in the EHR.",
        average_salary=82000,
        growth_rate="15%",
        requirements="Clinical background",
        bls_code="15-1211",
        onet_code="15-1211.01",
    )
    scientist = JobRole(
        title="Health Data Scientist",
        description="Builds predictive models.",
        average_salary=100910,
        growth_rate="35%",
        requirements="Master's degree",
    )
    ehr = Skill(name="EHR", category="Technical Skills", demand=92)
    communication = Skill(name="Communication", category="Soft Skills", demand=88)
    db_session.add_all([analyst, scientist, ehr, communication])
    db_session.flush()

    db_session.add_all(
        [
            JobRoleSkill(job_role_id=analyst.id, skill_id=ehr.id, importance=95),
            JobRoleSkill(job_role_id=analyst.id, skill_id=communication.id, importance=70),
            SalaryByLocation(job_role_id=analyst.id, state="CA", salary=96000),
            SalaryByLocation(job_role_id=scientist.id, state="CA", salary=128000),
            SalaryByLocation(job_role_id=scientist.id, state="TX", salary=104000),
        ]
    )
    db_session.commit()
    return {"analyst": analyst.id, "scientist": scientist.id}


def test_list_jobs(client: TestClient, catalog) -> None:
    response = client.get("/api/jobs")
    assert response.status_code == 200
    assert [job["title"] for job in response.json()] == ["Clinical Informatics Analyst", "Health Data Scientist"]


def test_get_job_by_id(client: TestClient, catalog) -> None:
    response = client.get(f"/api/jobs/{catalog['analyst']}")
    assert response.status_code == 200
    assert response.json()["bls_code"] == "15-1211"


def test_missing_job_is_not_found(client: TestClient, catalog) -> None:
    response = client.get("/api/jobs/9999")
    assert response.status_code == 404
    assert response.json() == {"message": "Job role not found"}


def test_skills_for_job_carry_importance(client: TestClient, catalog) -> None:
    response = client.get(f"/api/skills/{catalog['analyst']}")
    assert response.status_code == 200
    assert [(skill["name"], skill["importance"]) for skill in response.json()] == [
        ("EHR", 95),
        ("Communication", 70),
    ]


def test_all_skills(client: TestClient, catalog) -> None:
    assert len(client.get("/api/skills").json()) == 2


def test_salary_by_state(client: TestClient, catalog) -> None:
    response = client.get("/api/salary/CA")
    assert sorted(row["salary"] for row in response.json()) == [96000, 128000]


def test_salary_by_job(client: TestClient, catalog) -> None:
    response = client.get(f"/api/salary/job/{catalog['scientist']}")
    assert [row["state"] for row in response.json()] == ["CA", "TX"]


def test_catalog_reads_need_no_token(client: TestClient) -> None:
    assert client.get("/api/jobs").status_code == 200
