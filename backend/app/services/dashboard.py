"""
Dashboard view models, memoized by filter set.

Each call computes (or recalls) the views for exactly the filter it was
given. The cache is dropped whenever the listing dataset is reloaded.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Optional

from app.services import aggregations
from app.services.filters import ListingFilter, filter_listings
from app.services.listings import JobListing, ListingRepository

logger = logging.getLogger("healthinfo.dashboard")


class DashboardService:
    def __init__(self, repository: ListingRepository):
        self.repository = repository
        self._cache: dict[ListingFilter, dict[str, Any]] = {}
        self._cache_version: Optional[int] = None
        self._lock = threading.Lock()

    def listings(self, filters: Optional[ListingFilter] = None) -> list[JobListing]:
        return filter_listings(self.repository.all(), filters)

    def overview(self, filters: Optional[ListingFilter] = None) -> dict[str, Any]:
        """All dashboard views for one filter set."""
        filters = filters or ListingFilter()
        listings = self.repository.all()
        version = self.repository.version

        with self._lock:
            if self._cache_version != version:
                self._cache.clear()
                self._cache_version = version
            cached = self._cache.get(filters)
            if cached is not None:
                return cached

        selected = filter_listings(listings, filters)
        views = {
            "listing_count": len(selected),
            "metrics": aggregations.metric_cards(selected),
            "top_roles": aggregations.top_roles(selected),
            "job_count_by_title": aggregations.job_count_by_title(selected),
            "salary_by_title": aggregations.salary_by_title(selected),
            "remote_split": aggregations.remote_split(selected),
            "salary_trend": aggregations.salary_trend_by_year(selected),
            "regional_salary": aggregations.regional_salary(selected),
            "state_distribution": aggregations.state_distribution(selected),
            "top_cities": aggregations.top_cities(selected),
            "skills": aggregations.skill_buckets(selected),
            "top_skills": aggregations.top_skills(selected),
        }
        logger.debug("Computed dashboard views for %s (%d listings)", filters, len(selected))

        with self._lock:
            if self._cache_version == version:
                self._cache[filters] = views
        return views
