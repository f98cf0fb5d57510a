"""
Bureau of Labor Statistics client.

Every public function degrades to an estimate with the same shape as a real
response when the upstream call fails; callers never see an upstream error.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import settings
from app.core.errors import UpstreamError

logger = logging.getLogger("healthinfo.bls")

DEFAULT_MEAN_WAGE = 85000

HEALTH_INFORMATICS_OCCUPATIONS: list[dict[str, str]] = [
    {"code": "15-1211", "title": "Computer Systems Analysts (Healthcare)"},
    {"code": "15-1212", "title": "Information Security Analysts (Healthcare)"},
    {"code": "15-1232", "title": "Computer User Support Specialists (Healthcare)"},
    {"code": "15-1251", "title": "Computer Programmers (Healthcare)"},
    {"code": "15-1255", "title": "Web and Digital Interface Designers (Healthcare)"},
    {"code": "15-2051", "title": "Data Scientists"},
    {"code": "29-9021", "title": "Health Information Technologists and Medical Registrars"},
    {"code": "11-9111", "title": "Medical and Health Services Managers"},
    {"code": "29-9099", "title": "Healthcare Practitioners and Technical Workers, All Other"},
]

OCCUPATION_TITLES = {item["code"]: item["title"] for item in HEALTH_INFORMATICS_OCCUPATIONS}

MEAN_WAGE_ESTIMATES: dict[str, int] = {
    "15-1211": 94830,
    "15-1212": 102600,
    "15-1232": 52690,
    "15-1251": 89190,
    "15-1255": 77200,
    "15-2051": 100910,
    "29-9021": 55560,
    "11-9111": 101340,
    "29-9099": 58000,
}

# Percentiles as a share of the mean wage, typical for healthcare IT
WAGE_DISTRIBUTION = {
    "median_annual_wage": 0.97,
    "percentile_10": 0.65,
    "percentile_25": 0.80,
    "percentile_75": 1.15,
    "percentile_90": 1.35,
}

STATE_NAMES: dict[str, str] = {
    "AL": "Alabama", "AK": "Alaska", "AZ": "Arizona", "AR": "Arkansas", "CA": "California",
    "CO": "Colorado", "CT": "Connecticut", "DE": "Delaware", "DC": "District of Columbia",
    "FL": "Florida", "GA": "Georgia", "HI": "Hawaii", "ID": "Idaho", "IL": "Illinois",
    "IN": "Indiana", "IA": "Iowa", "KS": "Kansas", "KY": "Kentucky", "LA": "Louisiana",
    "ME": "Maine", "MD": "Maryland", "MA": "Massachusetts", "MI": "Michigan", "MN": "Minnesota",
    "MS": "Mississippi", "MO": "Missouri", "MT": "Montana", "NE": "Nebraska", "NV": "Nevada",
    "NH": "New Hampshire", "NJ": "New Jersey", "NM": "New Mexico", "NY": "New York",
    "NC": "North Carolina", "ND": "North Dakota", "OH": "Ohio", "OK": "Oklahoma", "OR": "Oregon",
    "PA": "Pennsylvania", "RI": "Rhode Island", "SC": "South Carolina", "SD": "South Dakota",
    "TN": "Tennessee", "TX": "Texas", "UT": "Utah", "VT": "Vermont", "VA": "Virginia",
    "WA": "Washington", "WV": "West Virginia", "WI": "Wisconsin", "WY": "Wyoming",
}

# Cost-of-living adjustment relative to the national average
STATE_WAGE_FACTORS: dict[str, float] = {
    "CA": 1.15, "NY": 1.15, "MA": 1.10, "WA": 1.08, "DC": 1.20,
    "HI": 1.18, "AK": 1.05, "NJ": 1.12, "CT": 1.10, "MD": 1.08,
    "CO": 1.05, "OR": 1.05, "VA": 1.02, "IL": 1.01, "RI": 1.03,
    "NH": 1.00, "VT": 0.98, "MN": 0.97, "FL": 0.97, "DE": 0.98,
    "PA": 0.97, "TX": 0.91, "NV": 0.96, "AZ": 0.95, "ME": 0.95,
    "UT": 0.93, "NC": 0.92, "WI": 0.92, "MI": 0.90, "OH": 0.90,
    "SC": 0.89, "IN": 0.88, "LA": 0.88, "TN": 0.87, "MO": 0.87,
    "GA": 0.89, "AL": 0.85, "NM": 0.87, "KY": 0.85, "ID": 0.88,
    "AR": 0.84, "IA": 0.86, "KS": 0.85, "OK": 0.84, "NE": 0.87,
    "WV": 0.83, "SD": 0.86, "ND": 0.86, "MS": 0.81, "MT": 0.88,
    "WY": 0.85,
}

# Top states for health informatics employment
ESTIMATED_EMPLOYMENT: list[tuple[str, int]] = [
    ("CA", 2145),
    ("TX", 1876),
    ("NY", 1652),
    ("FL", 1435),
    ("MA", 1287),
    ("IL", 1155),
    ("PA", 1082),
    ("VA", 967),
    ("WA", 922),
    ("MN", 845),
]


def occupation_title(code: str) -> str:
    return OCCUPATION_TITLES.get(code, "Unknown Occupation")


def salary_from_mean(occupation_code: str, mean_wage: float) -> dict[str, Any]:
    salary = {
        "occupation": occupation_title(occupation_code),
        "occupation_code": occupation_code,
        "mean_annual_wage": mean_wage,
    }
    for field, factor in WAGE_DISTRIBUTION.items():
        salary[field] = round(mean_wage * factor)
    return salary


def estimated_salary_data(occupation_code: str) -> dict[str, Any]:
    return salary_from_mean(occupation_code, MEAN_WAGE_ESTIMATES.get(occupation_code, DEFAULT_MEAN_WAGE))


def estimated_state_wage(state_code: str, occupation_code: str) -> int:
    base = MEAN_WAGE_ESTIMATES.get(occupation_code, DEFAULT_MEAN_WAGE)
    return round(base * STATE_WAGE_FACTORS.get(state_code, 1.0))


def estimated_location_data(occupation_code: str) -> list[dict[str, Any]]:
    return [
        {
            "state": STATE_NAMES[state_code],
            "state_code": state_code,
            "occupation": occupation_title(occupation_code),
            "occupation_code": occupation_code,
            "employment_count": employment,
            "employment_per_thousand": employment / 1000 * 0.8,
            "location_quotient": 1.2,
            "mean_annual_wage": estimated_state_wage(state_code, occupation_code),
        }
        for state_code, employment in ESTIMATED_EMPLOYMENT
    ]


async def get_job_data() -> list[dict[str, str]]:
    """
    Health-informatics occupations tracked by the dashboards.

    BLS exposes no occupation listing endpoint, so this is a fixed SOC list.
    """
    return [dict(item) for item in HEALTH_INFORMATICS_OCCUPATIONS]


async def get_salary_data(occupation_code: str) -> dict[str, Any]:
    """National wage distribution for one SOC occupation code."""
    try:
        async with httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{settings.BLS_BASE_URL}/timeseries/data/",
                json={
                    "seriesid": [f"OEUN{occupation_code}000000000A"],
                    "registrationkey": settings.BLS_API_KEY,
                    "startyear": "2022",
                    "endyear": "2022",
                },
            )
            response.raise_for_status()
            payload = response.json()

        if payload.get("status") != "REQUEST_SUCCEEDED":
            raise UpstreamError("bls", f"request status {payload.get('status')}: {payload.get('message')}")

        series_data = payload["Results"]["series"][0]["data"]
        annual = next((point for point in series_data if point.get("periodName") == "Annual"), None)
        mean_wage = float(annual["value"]) if annual else DEFAULT_MEAN_WAGE
        return salary_from_mean(occupation_code, mean_wage)

    except (httpx.HTTPError, UpstreamError, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning("Using estimated salary data for %s: %s", occupation_code, exc)
        return estimated_salary_data(occupation_code)


async def get_location_data(occupation_code: str) -> list[dict[str, Any]]:
    """
    State-level employment for one SOC occupation code.

    Wages are derived from the national estimate and the state
    cost-of-living factor.
    """
    try:
        async with httpx.AsyncClient(timeout=settings.UPSTREAM_TIMEOUT_SECONDS) as client:
            response = await client.get(
                f"{settings.BLS_BASE_URL}/currentData/",
                params={
                    "registrationKey": settings.BLS_API_KEY,
                    "survey": "OEWS",
                    "areaType": "state",
                    "occCode": occupation_code,
                    "dataType": "employment",
                },
            )
            response.raise_for_status()
            payload = response.json()

        locations: list[dict[str, Any]] = []
        for series in payload["Results"]["series"]:
            if not series.get("data"):
                continue
            state_code = series["area"][:2]
            employment = int(series["data"][0]["value"] or 0)
            locations.append(
                {
                    "state": STATE_NAMES.get(state_code, state_code),
                    "state_code": state_code,
                    "occupation": occupation_title(occupation_code),
                    "occupation_code": occupation_code,
                    "employment_count": employment,
                    "employment_per_thousand": employment / 1000,
                    "location_quotient": 1.0,
                    "mean_annual_wage": estimated_state_wage(state_code, occupation_code),
                }
            )

        if not locations:
            raise UpstreamError("bls", "no state series returned")
        return locations

    except (httpx.HTTPError, UpstreamError, KeyError, IndexError, TypeError, ValueError) as exc:
        logger.warning("Using estimated location data for %s: %s", occupation_code, exc)
        return estimated_location_data(occupation_code)


def filter_locations(
    locations: list[dict[str, Any]],
    state: str | None = None,
    min_employment: int | None = None,
    sort_by: str | None = None,
) -> list[dict[str, Any]]:
    if state:
        needle = state.lower()
        locations = [
            location
            for location in locations
            if location["state_code"].lower() == needle or needle in location["state"].lower()
        ]

    if min_employment is not None:
        locations = [location for location in locations if location["employment_count"] >= min_employment]

    if sort_by == "employment":
        locations = sorted(locations, key=lambda loc: loc["employment_count"], reverse=True)
    elif sort_by == "wage":
        locations = sorted(locations, key=lambda loc: loc["mean_annual_wage"], reverse=True)
    elif sort_by == "quotient":
        locations = sorted(locations, key=lambda loc: loc["location_quotient"], reverse=True)
    elif sort_by == "state":
        locations = sorted(locations, key=lambda loc: loc["state"])

    return locations
