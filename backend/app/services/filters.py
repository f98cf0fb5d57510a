"""
Listing filter stage.

Every predicate is ANDed; a sentinel value (``None``, ``""``, ``"all"`` or
``"all_specialties"``) matches everything for its dimension.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from app.services.bls import STATE_NAMES
from app.services.listings import JobListing

ALL = "all"
ALL_SPECIALTIES = "all_specialties"
ALL_REGIONS = "all_regions"
SENTINELS = frozenset({"", ALL, ALL_SPECIALTIES, ALL_REGIONS})

REMOTE = "remote"
ON_SITE = "on_site"
REMOTE_CHOICES = (REMOTE, ON_SITE)

SPECIALTY_KEYWORDS: dict[str, list[str]] = {
    "Data & Analytics": ["data", "analytics", "scientist", "engineer"],
    "Clinical Informatics": ["clinical", "ehr", "medical", "applications"],
    "Health IT Management": ["manager", "project", "consultant"],
    "Public & Population Health": ["population", "public"],
    "Coding & Terminology": ["coder", "terminology"],
    "Telehealth & Remote Care": ["telehealth"],
}

REGIONS: dict[str, frozenset[str]] = {
    "Northeast": frozenset({"CT", "ME", "MA", "NH", "RI", "VT", "NJ", "NY", "PA"}),
    "Southeast": frozenset({"AL", "AR", "FL", "GA", "KY", "LA", "MS", "NC", "SC", "TN", "VA", "WV"}),
    "Midwest": frozenset({"IL", "IN", "IA", "KS", "MI", "MN", "MO", "NE", "ND", "OH", "SD", "WI"}),
    "Southwest": frozenset({"AZ", "NM", "OK", "TX"}),
    "West": frozenset({"AK", "CA", "CO", "HI", "ID", "MT", "NV", "OR", "UT", "WA", "WY"}),
}

STATE_CODES: dict[str, str] = {name.lower(): code for code, name in STATE_NAMES.items()}


def is_sentinel(value: Optional[str]) -> bool:
    return value is None or value.strip().lower() in SENTINELS


def state_code(state: str) -> str:
    """Two-letter code for a state name or code; unknown values are returned upper-cased."""
    cleaned = state.strip()
    if cleaned.upper() in STATE_NAMES:
        return cleaned.upper()
    return STATE_CODES.get(cleaned.lower(), cleaned.upper())


def region_for_state(state: str) -> Optional[str]:
    code = state_code(state)
    for region, members in REGIONS.items():
        if code in members:
            return region
    return None


def find_region(name: str) -> Optional[str]:
    """Case-insensitive lookup of a region label."""
    for region in REGIONS:
        if region.lower() == name.strip().lower():
            return region
    return None


def find_specialty(name: str) -> Optional[str]:
    """Case-insensitive lookup of a specialty label."""
    for specialty in SPECIALTY_KEYWORDS:
        if specialty.lower() == name.strip().lower():
            return specialty
    return None


def matches_specialty(job_title: str, specialty: Optional[str]) -> bool:
    if is_sentinel(specialty):
        return True
    label = find_specialty(specialty)
    keywords = SPECIALTY_KEYWORDS[label] if label else []
    title = job_title.lower()
    return any(keyword in title for keyword in keywords)


@dataclass(frozen=True)
class ListingFilter:
    """Active filter set; hashable so it can key caches."""

    specialty: Optional[str] = None
    remote: Optional[str] = None
    employment_type: Optional[str] = None
    region: Optional[str] = None
    state: Optional[str] = None
    min_salary: Optional[float] = None
    max_salary: Optional[float] = None

    def matches(self, listing: JobListing) -> bool:
        if not matches_specialty(listing.job_title, self.specialty):
            return False

        if not is_sentinel(self.remote):
            wanted = self.remote.strip().lower()
            if wanted not in REMOTE_CHOICES:
                return False
            if wanted == REMOTE and not listing.is_remote:
                return False
            if wanted == ON_SITE and listing.is_remote:
                return False

        if not is_sentinel(self.employment_type):
            if listing.employment_type.lower() != self.employment_type.strip().lower():
                return False

        if not is_sentinel(self.region):
            region = find_region(self.region)
            if region is None or state_code(listing.state) not in REGIONS[region]:
                return False

        if not is_sentinel(self.state):
            if state_code(listing.state) != state_code(self.state):
                return False

        if self.min_salary is not None or self.max_salary is not None:
            salary = listing.average_salary
            if salary is None:
                return False
            if self.min_salary is not None and salary < self.min_salary:
                return False
            if self.max_salary is not None and salary > self.max_salary:
                return False

        return True

    @property
    def is_identity(self) -> bool:
        return (
            is_sentinel(self.specialty)
            and is_sentinel(self.remote)
            and is_sentinel(self.employment_type)
            and is_sentinel(self.region)
            and is_sentinel(self.state)
            and self.min_salary is None
            and self.max_salary is None
        )


def filter_listings(listings: Iterable[JobListing], filters: Optional[ListingFilter] = None) -> list[JobListing]:
    listings = list(listings)
    if filters is None or filters.is_identity:
        return listings
    return [listing for listing in listings if filters.matches(listing)]
