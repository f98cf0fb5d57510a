"""
BLS and O*NET proxy endpoints.

Upstream failures never reach the client: the services substitute an
estimate with the same shape as a live response.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Query

from app.core.errors import ValidationError
from app.services import bls, onet

router = APIRouter()


def parse_codes(codes: Optional[str]) -> list[str]:
    parsed = [code.strip() for code in (codes or "").split(",") if code.strip()]
    if not parsed:
        raise ValidationError("Occupation codes are required")
    return parsed


# ============== BLS ==============


@router.get("/bls/jobs")
async def bls_jobs():
    return await bls.get_job_data()


@router.get("/bls/salary-comparison")
async def bls_salary_comparison(codes: Optional[str] = None):
    """Salary data for several comma separated SOC codes."""
    occupation_codes = parse_codes(codes)
    return list(await asyncio.gather(*(bls.get_salary_data(code) for code in occupation_codes)))


@router.get("/bls/salary/{occupation_code}")
async def bls_salary(occupation_code: str):
    return await bls.get_salary_data(occupation_code)


@router.get("/bls/location/{occupation_code}")
async def bls_location(
    occupation_code: str,
    state: Optional[str] = None,
    min_employment: Optional[int] = Query(default=None, alias="minEmployment"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
):
    locations = await bls.get_location_data(occupation_code)
    return bls.filter_locations(locations, state=state, min_employment=min_employment, sort_by=sort_by)


# ============== O*NET ==============


@router.get("/onet/job/{onet_code}")
async def onet_job(onet_code: str):
    return await onet.get_job_details(onet_code)


@router.get("/onet/skills-comparison")
async def onet_skills_comparison(codes: Optional[str] = None):
    """Skills for several comma separated O*NET codes."""
    onet_codes = parse_codes(codes)
    results = await asyncio.gather(*(onet.get_skills(code) for code in onet_codes))
    return [{"occupation_code": code, "skills": skills} for code, skills in zip(onet_codes, results)]


@router.get("/onet/skills/{onet_code}")
async def onet_skills(
    onet_code: str,
    category: Optional[str] = None,
    min_importance: Optional[int] = Query(default=None, alias="minImportance"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
):
    skills = await onet.get_skills(onet_code)
    return onet.filter_skills(skills, category=category, min_importance=min_importance, sort_by=sort_by)
