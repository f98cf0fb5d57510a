from __future__ import annotations

import copy
from typing import Any, Optional

ALL_SPECIALTIES = "all_specialties"

# Mocked HR market analytics until a real trends source exists.
JOB_TRENDS: dict[str, Any] = {
    "year_over_year_growth": [
        {"specialty": "Data Science", "growth": 28},
        {"specialty": "Clinical Informatics", "growth": 22},
        {"specialty": "EHR Implementation", "growth": 15},
        {"specialty": "Health IT Security", "growth": 18},
    ],
    "job_openings_vs_applicants": {
        "months": ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"],
        "openings": [120, 135, 140, 155, 170, 180, 190, 200, 210, 205, 220, 230],
        "applicants": [240, 230, 250, 260, 270, 290, 310, 320, 315, 330, 350, 340],
    },
    "emerging_skills": [
        {"skill": "AI in Healthcare", "increase": 73},
        {"skill": "Telehealth Systems", "increase": 65},
        {"skill": "Healthcare Data Security", "increase": 58},
    ],
}

SKILL_GAPS: list[dict[str, Any]] = [
    {"name": "SQL/Database", "demand": 65, "supply": 65, "status": "balanced"},
    {"name": "Python/R", "demand": 75, "supply": 40, "status": "shortage"},
    {"name": "Healthcare Analytics", "demand": 80, "supply": 30, "status": "shortage"},
    {"name": "Machine Learning", "demand": 60, "supply": 25, "status": "shortage"},
    {"name": "Data Visualization", "demand": 70, "supply": 55, "status": "shortage"},
]

SKILL_GAP_STATUSES = ("shortage", "surplus", "balanced")

TECHNICAL_KEYWORDS = [
    "sql", "database", "python", "r", "data", "analytics", "machine learning",
    "visualization", "statistical", "statistics", "etl", "programming", "coding",
    "algorithm", "cloud",
]
DOMAIN_KEYWORDS = [
    "health", "clinical", "ehr", "electronic health", "medical", "terminology",
    "regulations", "hipaa", "population", "patient", "care", "workflow",
]
SOFT_KEYWORDS = [
    "communication", "problem solving", "teamwork", "collaboration", "project management",
    "presentation", "leadership", "time management", "critical thinking", "interpersonal",
]

CRITICAL_GAP = 40
SIGNIFICANT_GAP = 20


def get_job_trends() -> dict[str, Any]:
    return copy.deepcopy(JOB_TRENDS)


def _quarterly_average(values: list[float]) -> list[float]:
    return [round(sum(values[start:start + 3]) / 3, 2) for start in range(0, 12, 3)]


def analyze_trends(timeframe: Optional[str] = None, specialty: Optional[str] = None) -> dict[str, Any]:
    """
    Market trends, optionally narrowed to a specialty and rolled up by quarter.

    ``specialty`` is a case-insensitive substring match on the specialty label.
    """
    trends = get_job_trends()

    if specialty and specialty != ALL_SPECIALTIES:
        needle = specialty.lower()
        trends["year_over_year_growth"] = [
            item
            for item in trends["year_over_year_growth"]
            if needle in item["specialty"].lower()
        ]

    if timeframe == "quarterly":
        monthly = trends["job_openings_vs_applicants"]
        trends["job_openings_vs_applicants"] = {
            "months": ["Q1", "Q2", "Q3", "Q4"],
            "openings": _quarterly_average(monthly["openings"]),
            "applicants": _quarterly_average(monthly["applicants"]),
        }

    return trends


def get_skill_gaps() -> list[dict[str, Any]]:
    return copy.deepcopy(SKILL_GAPS)


def filter_skill_gaps(
    status: Optional[str] = None,
    min_demand: Optional[int] = None,
    sort_by: Optional[str] = None,
) -> list[dict[str, Any]]:
    skill_gaps = get_skill_gaps()

    if status:
        skill_gaps = [skill for skill in skill_gaps if skill["status"] == status]

    if min_demand is not None:
        skill_gaps = [skill for skill in skill_gaps if skill["demand"] >= min_demand]

    if sort_by == "demand":
        skill_gaps.sort(key=lambda s: s["demand"], reverse=True)
    elif sort_by == "supply":
        skill_gaps.sort(key=lambda s: s["supply"], reverse=True)
    elif sort_by == "gap":
        skill_gaps.sort(key=lambda s: s["demand"] - s["supply"], reverse=True)
    elif sort_by == "name":
        skill_gaps.sort(key=lambda s: s["name"])

    return skill_gaps


def categorize_skill_gaps(skill_gaps: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """
    Bucket skills into technical, domain and soft by keyword.

    A skill can land in more than one bucket.
    """

    def matching(keywords: list[str]) -> list[dict[str, Any]]:
        return [
            skill
            for skill in skill_gaps
            if any(keyword in skill["name"].lower() for keyword in keywords)
        ]

    return {
        "technical": matching(TECHNICAL_KEYWORDS),
        "domain": matching(DOMAIN_KEYWORDS),
        "soft": matching(SOFT_KEYWORDS),
    }


def gap_severity(skill_gaps: list[dict[str, Any]]) -> dict[str, int]:
    critical = 0
    significant = 0
    for skill in skill_gaps:
        gap = skill["demand"] - skill["supply"]
        if gap >= CRITICAL_GAP:
            critical += 1
        elif gap >= SIGNIFICANT_GAP:
            significant += 1
    return {"critical_count": critical, "significant_count": significant}
