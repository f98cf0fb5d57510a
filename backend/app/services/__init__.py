from app.services.aggregations import (
    group_by,
    mean,
    percentage,
    rank,
    top_roles,
    skill_buckets,
)
from app.services.dashboard import DashboardService
from app.services.filters import ListingFilter, filter_listings
from app.services.listings import JobListing, ListingRepository, load_listings

__all__ = [
    "group_by",
    "mean",
    "percentage",
    "rank",
    "top_roles",
    "skill_buckets",
    "DashboardService",
    "ListingFilter",
    "filter_listings",
    "JobListing",
    "ListingRepository",
    "load_listings",
]
