from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.models import JobRole
from conftest import auth_header

HR_ROUTES = [
    "/api/hr/trend-analysis",
    "/api/hr/skill-gap-analysis",
    "/api/hr/skill-gap",
    "/api/hr/skill-gap-summary",
    "/api/hr/regional-analysis",
]


@pytest.fixture
def hr_token(register_user) -> str:
    return register_user("hannah", role="hr")


@pytest.mark.parametrize("path", HR_ROUTES)
def test_job_seeker_is_forbidden(client: TestClient, register_user, path: str) -> None:
    token = register_user("sam", role="job_seeker")
    response = client.get(path, headers=auth_header(token))
    assert response.status_code == 403
    assert response.json() == {"message": "Forbidden: Insufficient permissions"}


@pytest.mark.parametrize("path", HR_ROUTES)
def test_hr_routes_require_authentication(client: TestClient, path: str) -> None:
    assert client.get(path).status_code == 401


def test_trend_analysis(client: TestClient, hr_token: str) -> None:
    response = client.get("/api/hr/trend-analysis", headers=auth_header(hr_token))
    assert response.status_code == 200
    body = response.json()
    assert len(body["year_over_year_growth"]) == 4
    assert len(body["job_openings_vs_applicants"]["months"]) == 12


def test_trend_analysis_quarterly_rollup(client: TestClient, hr_token: str) -> None:
    response = client.get("/api/hr/trend-analysis?timeframe=quarterly", headers=auth_header(hr_token))
    series = response.json()["job_openings_vs_applicants"]
    assert series["months"] == ["Q1", "Q2", "Q3", "Q4"]
    assert series["openings"][0] == round((120 + 135 + 140) / 3, 2)


def test_trend_analysis_specialty_filter(client: TestClient, hr_token: str) -> None:
    narrowed = client.get("/api/hr/trend-analysis?specialty=data", headers=auth_header(hr_token)).json()
    assert [item["specialty"] for item in narrowed["year_over_year_growth"]] == ["Data Science"]

    everything = client.get("/api/hr/trend-analysis?specialty=all_specialties", headers=auth_header(hr_token)).json()
    assert len(everything["year_over_year_growth"]) == 4


def test_skill_gap_filter_and_sort(client: TestClient, hr_token: str) -> None:
    response = client.get(
        "/api/hr/skill-gap-analysis?status=shortage&sortBy=gap",
        headers=auth_header(hr_token),
    )
    names = [skill["name"] for skill in response.json()]
    assert names[0] == "Healthcare Analytics"
    assert "SQL/Database" not in names


def test_skill_gap_alias_applies_min_demand(client: TestClient, hr_token: str) -> None:
    response = client.get("/api/hr/skill-gap?minDemand=75&sortBy=demand", headers=auth_header(hr_token))
    assert [skill["name"] for skill in response.json()] == ["Healthcare Analytics", "Python/R"]


def test_skill_gap_summary_severity(client: TestClient, hr_token: str) -> None:
    body = client.get("/api/hr/skill-gap-summary", headers=auth_header(hr_token)).json()
    assert body["severity"] == {"critical_count": 1, "significant_count": 2}
    assert set(body["categories"]) == {"technical", "domain", "soft"}


@pytest.fixture
def bls_roles(db_session):
    db_session.add_all(
        [
            JobRole(
                title="Health Informatics Specialist",
                description="Health information systems.",
                average_salary=94830,
                growth_rate="17%",
                requirements="Bachelor's degree",
                bls_code="15-1211",
            ),
            JobRole(
                title="Clinical Informatics Analyst",
                description="No BLS mapping.",
                average_salary=82000,
                growth_rate="15%",
                requirements="Clinical background",
            ),
        ]
    )
    db_session.commit()


def test_regional_analysis_by_region_bucket(client: TestClient, hr_token: str, bls_roles, offline_upstream) -> None:
    response = client.get("/api/hr/regional-analysis?region=West", headers=auth_header(hr_token))
    assert response.status_code == 200

    body = response.json()
    assert len(body) == 1
    assert body[0]["role_title"] == "Health Informatics Specialist"
    assert {location["state_code"] for location in body[0]["locations"]} == {"CA", "WA"}
    assert body[0]["salary"]["mean_annual_wage"] == 94830


def test_regional_analysis_by_state_and_all_regions(client: TestClient, hr_token: str, bls_roles, offline_upstream) -> None:
    texas = client.get("/api/hr/regional-analysis?region=Texas", headers=auth_header(hr_token)).json()
    assert [location["state_code"] for location in texas[0]["locations"]] == ["TX"]

    everywhere = client.get("/api/hr/regional-analysis?region=all_regions", headers=auth_header(hr_token)).json()
    assert len(everywhere[0]["locations"]) == 10
