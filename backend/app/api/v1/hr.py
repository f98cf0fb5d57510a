"""
HR analytics API endpoints.

Every route requires a bearer token whose role is ``hr``.
"""

import asyncio
import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_roles
from app.db.session import get_db
from app.models import JobRole
from app.models.user import ROLE_HR
from app.services import bls, market
from app.services.filters import REGIONS, find_region, is_sentinel, state_code

logger = logging.getLogger("healthinfo.hr")

router = APIRouter(dependencies=[Depends(require_roles(ROLE_HR))])


def filter_locations_by_region(locations: list[dict[str, Any]], region: Optional[str]) -> list[dict[str, Any]]:
    """Keep locations inside a region bucket, or matching a single state name/code."""
    if is_sentinel(region):
        return locations

    bucket = find_region(region)
    if bucket is not None:
        return [location for location in locations if location["state_code"] in REGIONS[bucket]]

    code = state_code(region)
    return [location for location in locations if location["state_code"] == code]


@router.get("/trend-analysis")
def trend_analysis(
    timeframe: Optional[str] = None,
    specialty: Optional[str] = None,
):
    return market.analyze_trends(timeframe=timeframe, specialty=specialty)


def _skill_gap_analysis(status: Optional[str], min_demand: Optional[int], sort_by: Optional[str]) -> list[dict]:
    return market.filter_skill_gaps(status=status, min_demand=min_demand, sort_by=sort_by)


@router.get("/skill-gap-analysis")
def skill_gap_analysis(
    status: Optional[str] = None,
    min_demand: Optional[int] = Query(default=None, alias="minDemand"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
):
    return _skill_gap_analysis(status, min_demand, sort_by)


@router.get("/skill-gap")
def skill_gap(
    status: Optional[str] = None,
    min_demand: Optional[int] = Query(default=None, alias="minDemand"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy"),
):
    """Alias of ``/skill-gap-analysis``."""
    return _skill_gap_analysis(status, min_demand, sort_by)


@router.get("/skill-gap-summary")
def skill_gap_summary():
    skill_gaps = market.get_skill_gaps()
    return {
        "categories": market.categorize_skill_gaps(skill_gaps),
        "severity": market.gap_severity(skill_gaps),
    }


@router.get("/regional-analysis")
async def regional_analysis(
    region: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """
    Location and salary data for every job role that has a BLS code.

    ``region`` is a region bucket (e.g. ``West``), a state name or code, or
    ``all_regions``.
    """
    job_roles = db.query(JobRole).filter(JobRole.bls_code.isnot(None)).order_by(JobRole.id).all()

    async def analyse(job_role: JobRole) -> dict[str, Any]:
        locations, salary = await asyncio.gather(
            bls.get_location_data(job_role.bls_code),
            bls.get_salary_data(job_role.bls_code),
        )
        return {
            "role_id": job_role.id,
            "role_title": job_role.title,
            "bls_code": job_role.bls_code,
            "locations": filter_locations_by_region(locations, region),
            "salary": salary,
        }

    results = await asyncio.gather(*(analyse(job_role) for job_role in job_roles))
    logger.info("Regional analysis for %s covered %d roles", region or "all regions", len(results))
    return list(results)
