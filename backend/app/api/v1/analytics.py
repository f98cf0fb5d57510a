"""
Job-listing analytics API endpoints.

Serves the dashboard view models computed from the listing CSV. All views
take the same filter query parameters and return empty lists when nothing
matches.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_dashboard_service
from app.core.errors import ValidationError
from app.services import aggregations
from app.services.dashboard import DashboardService
from app.services.filters import REGIONS, REMOTE_CHOICES, SPECIALTY_KEYWORDS, ListingFilter, is_sentinel

router = APIRouter()


def get_listing_filter(
    specialty: Optional[str] = None,
    remote: Optional[str] = None,
    employment_type: Optional[str] = Query(default=None, alias="employmentType"),
    region: Optional[str] = None,
    state: Optional[str] = None,
    min_salary: Optional[float] = Query(default=None, alias="minSalary"),
    max_salary: Optional[float] = Query(default=None, alias="maxSalary"),
) -> ListingFilter:
    if min_salary is not None and max_salary is not None and min_salary > max_salary:
        raise ValidationError("minSalary must not exceed maxSalary")

    if not is_sentinel(remote) and remote.strip().lower() not in REMOTE_CHOICES:
        raise ValidationError("remote must be one of: remote, on_site")

    return ListingFilter(
        specialty=specialty,
        remote=remote,
        employment_type=employment_type,
        region=region,
        state=state,
        min_salary=min_salary,
        max_salary=max_salary,
    )


@router.get("/listings")
def list_listings(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
) -> list[dict[str, Any]]:
    return [listing.to_dict() for listing in dashboard.listings(filters)]


@router.get("/analytics/overview")
def overview(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Every dashboard view for the given filters in one payload."""
    return dashboard.overview(filters)


@router.get("/analytics/top-roles")
def top_roles(
    limit: int = Query(default=aggregations.TOP_ROLES_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.top_roles(dashboard.listings(filters), limit=limit)


@router.get("/analytics/job-counts")
def job_counts(
    limit: int = Query(default=aggregations.TOP_TITLES_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.job_count_by_title(dashboard.listings(filters), limit=limit)


@router.get("/analytics/salary-by-title")
def salary_by_title(
    limit: int = Query(default=aggregations.TOP_TITLES_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.salary_by_title(dashboard.listings(filters), limit=limit)


@router.get("/analytics/skills")
def skills(
    limit: int = Query(default=aggregations.TOP_SKILLS_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.skill_buckets(dashboard.listings(filters), limit=limit)


@router.get("/analytics/top-skills")
def top_skills(
    limit: int = Query(default=aggregations.TOP_SKILLS_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.top_skills(dashboard.listings(filters), limit=limit)


@router.get("/analytics/remote-split")
def remote_split(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.remote_split(dashboard.listings(filters))


@router.get("/analytics/regional-salary")
def regional_salary(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.regional_salary(dashboard.listings(filters))


@router.get("/analytics/state-distribution")
def state_distribution(
    limit: int = Query(default=aggregations.TOP_STATES_LIMIT, ge=1, le=60),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.state_distribution(dashboard.listings(filters), limit=limit)


@router.get("/analytics/top-cities")
def top_cities(
    limit: int = Query(default=aggregations.TOP_CITIES_LIMIT, ge=1, le=50),
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.top_cities(dashboard.listings(filters), limit=limit)


@router.get("/analytics/salary-trend")
def salary_trend(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.salary_trend_by_year(dashboard.listings(filters))


@router.get("/analytics/metrics")
def metrics(
    filters: ListingFilter = Depends(get_listing_filter),
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    return aggregations.metric_cards(dashboard.listings(filters))


@router.get("/analytics/filters")
def filters_available(dashboard: DashboardService = Depends(get_dashboard_service)):
    """Specialties, regions and the distinct values present in the dataset."""
    options = aggregations.filter_options(dashboard.listings())
    return {
        "specialties": list(SPECIALTY_KEYWORDS),
        "region_buckets": list(REGIONS),
        **options,
    }
