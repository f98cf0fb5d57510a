"""
O*NET Web Services client.

Falls back to curated healthcare-informatics data when the upstream service
is unreachable or returns something unexpected.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from app.core.config import settings
from app.core.errors import UpstreamError

logger = logging.getLogger("healthinfo.onet")

# O*NET ratings are on a 0-5 scale; dashboards use 0-100
RATING_SCALE = 20
DEFAULT_RATING = 50

HEALTHCARE_SPECIFIC_SKILLS = {
    "electronic health records (ehr)",
    "healthcare regulations",
    "clinical terminology",
    "hl7/fhir",
    "patient data privacy",
}

HEALTHCARE_IT_CODE_PREFIXES = ("15-12", "15-13", "15-15", "29-90", "11-91")


def _skill(id_: str, name: str, description: str, category: str, importance: int, level: int) -> dict[str, Any]:
    return {
        "id": id_,
        "name": name,
        "description": description,
        "category": category,
        "importance": importance,
        "level": level,
    }


MOCKED_SKILLS: list[dict[str, Any]] = [
    _skill("2.B.1.e", "Electronic Health Records (EHR)",
           "Knowledge of electronic systems used to store and process patient health information.",
           "Technical Skills", 92, 88),
    _skill("2.B.3.b", "SQL/Databases",
           "Knowledge of database query languages and database management.",
           "Technical Skills", 85, 80),
    _skill("2.B.3.k", "Data Analysis",
           "Ability to inspect, transform, and model data to discover useful information.",
           "Technical Skills", 78, 75),
    _skill("2.B.3.j", "HL7/FHIR",
           "Knowledge of healthcare data exchange standards and protocols.",
           "Technical Skills", 65, 60),
    _skill("2.A.1.a", "Communication",
           "Ability to effectively convey information to others.",
           "Soft Skills", 88, 85),
    _skill("2.B.2.i", "Problem Solving",
           "Ability to identify complex problems and review related information to develop solutions.",
           "Soft Skills", 82, 80),
    _skill("2.A.1.b", "Teamwork",
           "Ability to work collaboratively with others to achieve goals.",
           "Soft Skills", 76, 75),
    _skill("2.B.5.a", "Project Management",
           "Knowledge of principles and methods for planning, coordinating, and managing projects.",
           "Soft Skills", 70, 65),
]

HEALTHCARE_IT_SKILLS: list[dict[str, Any]] = [
    _skill("HI001", "Electronic Health Records (EHR)",
           "Knowledge of electronic systems used to store and process patient health information.",
           "Technical Skills", 92, 88),
    _skill("HI002", "HL7/FHIR",
           "Knowledge of healthcare data exchange standards and protocols.",
           "Technical Skills", 85, 78),
    _skill("HI003", "Healthcare Regulations",
           "Knowledge of healthcare laws, regulations, and compliance requirements like HIPAA.",
           "Industry Knowledge", 88, 80),
    _skill("HI004", "Clinical Terminology",
           "Knowledge of medical vocabulary, coding systems like ICD-10, SNOMED CT, or CPT.",
           "Industry Knowledge", 82, 75),
    _skill("HI005", "Healthcare Analytics",
           "Ability to interpret healthcare data and derive meaningful insights.",
           "Technical Skills", 87, 82),
]

GENERAL_HEALTH_SKILLS: list[dict[str, Any]] = [
    _skill("HG001", "Patient Data Privacy",
           "Understanding of patient privacy requirements and data protection measures.",
           "Compliance", 90, 85),
    _skill("HG002", "Healthcare Systems",
           "Knowledge of healthcare delivery systems and operations.",
           "Industry Knowledge", 80, 75),
    _skill("HG003", "Health Informatics",
           "Application of information science to healthcare data management and analysis.",
           "Technical Skills", 85, 80),
]

MOCKED_JOB_DETAILS: dict[str, dict[str, Any]] = {
    "15-1211.01": {
        "title": "Health Informatics Specialist",
        "description": (
            "Apply knowledge of healthcare and information systems to assist in the design, "
            "development, and operation of health information systems."
        ),
        "tasks": [
            "Design, develop, and modify healthcare information systems.",
            "Test health information software or systems.",
            "Document healthcare software specifications or requirements.",
            "Analyze healthcare data to identify patterns.",
            "Provide technical support for health information systems.",
        ],
        "education": [
            {"level": "Bachelor's degree", "percentage": 65},
            {"level": "Master's degree", "percentage": 25},
            {"level": "Associate's degree", "percentage": 10},
        ],
        "experience": [
            {"level": "3-5 years", "percentage": 45},
            {"level": "1-2 years", "percentage": 30},
            {"level": "6+ years", "percentage": 25},
        ],
    },
    "15-2051.01": {
        "title": "Health Data Scientist",
        "description": (
            "Apply data mining, data modeling, natural language processing, and machine learning "
            "to extract and analyze information from healthcare data."
        ),
        "tasks": [
            "Develop predictive models for healthcare outcomes.",
            "Transform healthcare data into actionable insights.",
            "Create data visualizations to communicate findings.",
            "Design algorithms to extract insights from healthcare data.",
            "Work with healthcare providers to identify data needs.",
        ],
        "education": [
            {"level": "Master's degree", "percentage": 60},
            {"level": "Bachelor's degree", "percentage": 30},
            {"level": "Doctoral degree", "percentage": 10},
        ],
        "experience": [
            {"level": "3-5 years", "percentage": 50},
            {"level": "6+ years", "percentage": 30},
            {"level": "1-2 years", "percentage": 20},
        ],
    },
}

GENERIC_JOB_DETAIL: dict[str, Any] = {
    "title": "Healthcare Informatics Professional",
    "description": (
        "Apply knowledge of healthcare and technology to improve health information systems "
        "and patient care."
    ),
    "tasks": [
        "Develop healthcare software applications.",
        "Analyze health data to improve patient outcomes.",
        "Implement electronic health record systems.",
        "Train healthcare staff on information systems.",
        "Ensure compliance with healthcare privacy regulations.",
    ],
    "education": [
        {"level": "Bachelor's degree", "percentage": 60},
        {"level": "Master's degree", "percentage": 30},
        {"level": "Associate's degree", "percentage": 10},
    ],
    "experience": [
        {"level": "3-5 years", "percentage": 45},
        {"level": "1-2 years", "percentage": 35},
        {"level": "6+ years", "percentage": 20},
    ],
}


def mocked_skills() -> list[dict[str, Any]]:
    return [dict(skill) for skill in MOCKED_SKILLS]


def mocked_job_detail(onet_code: str) -> dict[str, Any]:
    template = MOCKED_JOB_DETAILS.get(onet_code, GENERIC_JOB_DETAIL)
    return {
        "code": onet_code,
        "title": template["title"],
        "description": template["description"],
        "tasks": list(template["tasks"]),
        "skills": mocked_skills(),
        "knowledge": [],
        "abilities": [],
        "education": [dict(item) for item in template["education"]],
        "experience": [dict(item) for item in template["experience"]],
    }


def healthcare_informatics_skills(onet_code: str) -> list[dict[str, Any]]:
    if any(prefix in onet_code for prefix in HEALTHCARE_IT_CODE_PREFIXES):
        return [dict(skill) for skill in HEALTHCARE_IT_SKILLS]
    return [dict(skill) for skill in GENERAL_HEALTH_SKILLS]


def code_formats(onet_code: str) -> list[str]:
    """Codes to try, e.g. ``15-1211`` -> ``15-1211``, ``15-1211.00``."""
    candidates = [onet_code, f"{onet_code}.00", onet_code.split(".")[0]]
    return list(dict.fromkeys(candidates))


def _scaled(ratings: Optional[dict], key: str) -> float:
    value = (ratings or {}).get(key)
    return value * RATING_SCALE if value else DEFAULT_RATING


def parse_element(item: dict[str, Any], category: Optional[str] = None) -> dict[str, Any]:
    name = item.get("name") or "Unknown Skill"
    return {
        "id": item.get("id") or f"unknown-{name.lower().replace(' ', '-')}",
        "name": name,
        "description": item.get("description") or f"No description available for {name}",
        "category": category or item.get("category") or "Uncategorized",
        "importance": _scaled(item.get("ratings"), "importance"),
        "level": _scaled(item.get("ratings"), "level"),
    }


def augment_skills(skills: list[dict[str, Any]], onet_code: str) -> list[dict[str, Any]]:
    """Add healthcare-informatics skills when none of the domain ones are present."""
    names = {skill["name"].lower() for skill in skills}
    if skills and names & HEALTHCARE_SPECIFIC_SKILLS:
        return skills

    augmented = list(skills)
    for skill in healthcare_informatics_skills(onet_code):
        if skill["name"].lower() not in names:
            augmented.append(skill)
            names.add(skill["name"].lower())
    return augmented


async def _fetch_first(client: httpx.AsyncClient, onet_code: str, suffix: str = "") -> tuple[dict[str, Any], str]:
    """GET the first code format O*NET recognises."""
    for code in code_formats(onet_code):
        try:
            response = await client.get(
                f"{settings.ONET_BASE_URL}/online/occupations/{code}{suffix}",
                params={"format": "json"},
            )
            response.raise_for_status()
            return response.json(), code
        except httpx.HTTPError as exc:
            logger.info("O*NET lookup %s%s failed (%s), trying next format", code, suffix, exc)
    raise UpstreamError("onet", f"no data for occupation code {onet_code}{suffix}")


async def _fetch_elements(client: httpx.AsyncClient, code: str, section: str, category: str) -> list[dict[str, Any]]:
    try:
        response = await client.get(
            f"{settings.ONET_BASE_URL}/online/occupations/{code}/{section}",
            params={"format": "json"},
        )
        response.raise_for_status()
        elements = response.json().get("element") or []
        return [parse_element(item, category) for item in elements]
    except (httpx.HTTPError, AttributeError, TypeError, ValueError) as exc:
        logger.warning("O*NET %s for %s unavailable: %s", section, code, exc)
        return []


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        auth=(settings.ONET_API_KEY, ""),
    )


async def get_skills(onet_code: str) -> list[dict[str, Any]]:
    """Skills for an occupation, scaled to 0-100 and augmented for healthcare."""
    try:
        async with _client() as client:
            payload, resolved = await _fetch_first(client, onet_code, "/skills")

        elements = payload.get("element")
        if not isinstance(elements, list):
            raise UpstreamError("onet", f"unexpected skills payload for {resolved}")

        skills = [parse_element(item) for item in elements]
        return augment_skills(skills, onet_code)

    except (httpx.HTTPError, UpstreamError, AttributeError, TypeError, ValueError) as exc:
        logger.warning("Using mocked skills for %s: %s", onet_code, exc)
        return mocked_skills()


async def get_job_details(onet_code: str) -> dict[str, Any]:
    """Occupation summary with tasks, skills, knowledge, abilities, education and experience."""
    try:
        async with _client() as client:
            data, resolved = await _fetch_first(client, onet_code)
            knowledge = await _fetch_elements(client, resolved, "knowledge", "Knowledge")
            abilities = await _fetch_elements(client, resolved, "abilities", "Ability")

        skills = await get_skills(resolved)

        return {
            "code": onet_code,
            "title": data["title"],
            "description": data.get("description", ""),
            "tasks": [task.get("description", "") for task in data.get("tasks") or []],
            "skills": skills,
            "knowledge": knowledge,
            "abilities": abilities,
            "education": [
                {"level": item.get("category"), "percentage": item.get("percentage")}
                for item in data.get("education") or []
            ],
            "experience": [
                {"level": item.get("category"), "percentage": item.get("percentage")}
                for item in data.get("experience") or []
            ],
        }

    except (httpx.HTTPError, UpstreamError, AttributeError, KeyError, TypeError, ValueError) as exc:
        logger.warning("Using mocked job detail for %s: %s", onet_code, exc)
        return mocked_job_detail(onet_code)


def filter_skills(
    skills: list[dict[str, Any]],
    category: Optional[str] = None,
    min_importance: Optional[int] = None,
    sort_by: Optional[str] = None,
) -> list[dict[str, Any]]:
    if category:
        needle = category.lower()
        skills = [skill for skill in skills if needle in skill["category"].lower()]

    if min_importance is not None:
        skills = [skill for skill in skills if skill["importance"] >= min_importance]

    if sort_by == "importance":
        skills = sorted(skills, key=lambda s: s["importance"], reverse=True)
    elif sort_by == "level":
        skills = sorted(skills, key=lambda s: s["level"], reverse=True)
    elif sort_by == "name":
        skills = sorted(skills, key=lambda s: s["name"])
    elif sort_by == "category":
        skills = sorted(skills, key=lambda s: s["category"])

    return skills
