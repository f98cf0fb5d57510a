"""
Group / reduce / normalize / rank stages over job listings.

Every view is a pure function of a list of listings and returns an empty
list for an empty input. Salaries are plain currency units; percentages are
integers rounded half up.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Hashable, Iterable, Optional, Sequence, TypeVar, Union

from app.services.bls import STATE_NAMES
from app.services.filters import region_for_state, state_code
from app.services.listings import JobListing

T = TypeVar("T")

TOP_ROLES_LIMIT = 5
TOP_SKILLS_LIMIT = 10
TOP_CITIES_LIMIT = 6
TOP_STATES_LIMIT = 10
TOP_TITLES_LIMIT = 10

SOFT_SKILLS = frozenset({
    "communication",
    "project management",
    "change management",
    "training",
    "team collaboration",
    "critical thinking",
})
TECHNICAL = "Technical"
SOFT = "Soft"


# ---------- primitives ----------


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Arithmetic mean of the non-missing values, or ``None`` when there are none."""
    present = [value for value in values if value is not None]
    if not present:
        return None
    return sum(present) / len(present)


def percentage(part: float, whole: float) -> int:
    if not whole:
        return 0
    return round_half_up(part / whole * 100)


def group_by(items: Iterable[T], key: Callable[[T], Hashable]) -> dict[Hashable, list[T]]:
    """Group items by ``key``; groups keep first-encounter order, empty keys are dropped."""
    groups: dict[Hashable, list[T]] = {}
    for item in items:
        group_key = key(item)
        if group_key is None or group_key == "":
            continue
        groups.setdefault(group_key, []).append(item)
    return groups


def rank(
    items: Iterable[T],
    metric: Union[str, Callable[[T], float]],
    limit: Optional[int] = None,
) -> list[T]:
    """Stable descending sort by ``metric``; equal values keep encounter order."""
    key = metric if callable(metric) else (lambda item: item[metric])
    ranked = sorted(items, key=key, reverse=True)
    return ranked[:limit] if limit is not None else ranked


def job_count(listings: Sequence[JobListing]) -> int:
    """Total openings, counting a listing without an openings figure as one."""
    return sum(listing.openings if listing.openings is not None else 1 for listing in listings)


def _salaried(listings: Iterable[JobListing]) -> list[JobListing]:
    return [listing for listing in listings if listing.average_salary is not None]


def _region_of(listing: JobListing) -> Optional[str]:
    return listing.region or region_for_state(listing.state)


# ---------- views ----------


def top_roles(listings: Sequence[JobListing], limit: int = TOP_ROLES_LIMIT) -> list[dict[str, Any]]:
    """Highest paying job titles by mean salary, with a bar width relative to the top."""
    groups = group_by(_salaried(listings), lambda listing: listing.job_title)
    roles = [
        {"title": title, "salary": round_half_up(mean(item.average_salary for item in group))}
        for title, group in groups.items()
    ]
    roles = rank(roles, "salary", limit)
    if not roles:
        return []

    top_salary = roles[0]["salary"]
    for role in roles:
        role["width"] = f"{percentage(role['salary'], top_salary)}%"
    return roles


def job_count_by_title(listings: Sequence[JobListing], limit: int = TOP_TITLES_LIMIT) -> list[dict[str, Any]]:
    groups = group_by(listings, lambda listing: listing.job_title)
    counts = [{"title": title, "job_count": job_count(group)} for title, group in groups.items()]
    return rank(counts, "job_count", limit)


def salary_by_title(listings: Sequence[JobListing], limit: int = TOP_TITLES_LIMIT) -> list[dict[str, Any]]:
    groups = group_by(_salaried(listings), lambda listing: listing.job_title)
    rows = []
    for title, group in groups.items():
        median = mean(item.median_salary for item in group)
        rows.append(
            {
                "title": title,
                "average_salary": round_half_up(mean(item.average_salary for item in group)),
                "median_salary": round_half_up(median) if median is not None else None,
                "listing_count": len(group),
            }
        )
    return rank(rows, "average_salary", limit)


def remote_split(listings: Sequence[JobListing]) -> list[dict[str, Any]]:
    if not listings:
        return []
    remote = sum(1 for listing in listings if listing.is_remote)
    on_site = len(listings) - remote
    return [
        {"name": "Remote", "value": remote, "percentage": percentage(remote, len(listings))},
        {"name": "On-site", "value": on_site, "percentage": percentage(on_site, len(listings))},
    ]


def salary_trend_by_year(listings: Sequence[JobListing]) -> list[dict[str, Any]]:
    """One row per year, ascending, with the mean salary of every title seen that year."""
    by_year = group_by(_salaried(listings), lambda listing: listing.year)
    rows = []
    for year in sorted(by_year):
        row: dict[str, Any] = {"year": year}
        for title, group in group_by(by_year[year], lambda listing: listing.job_title).items():
            row[title] = round_half_up(mean(item.average_salary for item in group))
        rows.append(row)
    return rows


def regional_salary(listings: Sequence[JobListing]) -> list[dict[str, Any]]:
    groups = group_by(_salaried(listings), _region_of)
    rows = [
        {
            "region": region,
            "salary": round_half_up(mean(item.average_salary for item in group)),
            "job_count": job_count(group),
        }
        for region, group in groups.items()
    ]
    return rank(rows, "salary")


def state_distribution(listings: Sequence[JobListing], limit: int = TOP_STATES_LIMIT) -> list[dict[str, Any]]:
    groups = group_by(listings, lambda listing: state_code(listing.state) if listing.state else None)
    total = job_count(listings)
    rows = []
    for code, group in groups.items():
        count = job_count(group)
        rows.append(
            {
                "state": STATE_NAMES.get(code, group[0].state),
                "state_code": code,
                "job_count": count,
                "percentage": percentage(count, total),
            }
        )
    return rank(rows, "job_count", limit)


def top_cities(listings: Sequence[JobListing], limit: int = TOP_CITIES_LIMIT) -> list[dict[str, Any]]:
    groups = group_by(
        listings,
        lambda listing: (listing.city, state_code(listing.state)) if listing.city else None,
    )
    rows = []
    for (city, code), group in groups.items():
        salary = mean(item.average_salary for item in group)
        rows.append(
            {
                "city": city,
                "state_code": code,
                "job_count": job_count(group),
                "average_salary": round_half_up(salary) if salary is not None else None,
            }
        )
    return rank(rows, "job_count", limit)


def _skill_counts(listings: Iterable[JobListing]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for listing in listings:
        for skill in listing.skills:
            counts[skill] = counts.get(skill, 0) + 1
    return counts


def _display_name(skill: str) -> str:
    return skill[0].upper() + skill[1:]


def skill_category(skill: str) -> str:
    return SOFT if skill.lower() in SOFT_SKILLS else TECHNICAL


def normalize_percentages(counts: Sequence[int]) -> list[int]:
    """
    Integer percentages of ``counts`` that sum to exactly 100.

    ``counts`` must already be ranked. Shares are floored, so the remainder
    is never negative; it goes to the first entry.
    """
    total = sum(counts)
    if not counts or not total:
        return [0 for _ in counts]
    shares = [count * 100 // total for count in counts]
    shares[0] += 100 - sum(shares)
    return shares


def skill_buckets(listings: Sequence[JobListing], limit: int = TOP_SKILLS_LIMIT) -> list[dict[str, Any]]:
    """
    Skill mentions split into Technical and Soft buckets.

    Percentages are normalized over each full category before truncating to
    ``limit`` entries per category.
    """
    counts = _skill_counts(listings)
    buckets: list[dict[str, Any]] = []
    for category in (TECHNICAL, SOFT):
        ranked = rank(
            [(skill, count) for skill, count in counts.items() if skill_category(skill) == category],
            lambda pair: pair[1],
        )
        shares = normalize_percentages([count for _, count in ranked])
        for (skill, count), share in list(zip(ranked, shares))[:limit]:
            buckets.append(
                {
                    "name": _display_name(skill),
                    "count": count,
                    "category": category,
                    "percentage": share,
                }
            )
    return buckets


def top_skills(listings: Sequence[JobListing], limit: int = TOP_SKILLS_LIMIT) -> list[dict[str, Any]]:
    """Most mentioned skills with their share of all mentions."""
    counts = _skill_counts(listings)
    total = sum(counts.values())
    rows = [
        {
            "name": _display_name(skill),
            "count": count,
            "category": skill_category(skill),
            "demand": percentage(count, total),
        }
        for skill, count in counts.items()
    ]
    return rank(rows, "count", limit)


def metric_cards(listings: Sequence[JobListing]) -> list[dict[str, Any]]:
    if not listings:
        return []

    average_salary = mean(listing.average_salary for listing in listings)
    average_growth = mean(listing.growth_percent for listing in listings)
    remote = sum(1 for listing in listings if listing.is_remote)

    return [
        {"title": "Total Openings", "value": job_count(listings)},
        {
            "title": "Average Salary",
            "value": round_half_up(average_salary) if average_salary is not None else None,
        },
        {
            "title": "Average Growth",
            "value": round(average_growth, 1) if average_growth is not None else None,
        },
        {"title": "Remote Share", "value": percentage(remote, len(listings))},
    ]


def filter_options(listings: Sequence[JobListing]) -> dict[str, list[str]]:
    """Distinct values present in the dataset, for populating filter controls."""

    def distinct(values: Iterable[str]) -> list[str]:
        return sorted({value for value in values if value})

    return {
        "employment_types": distinct(listing.employment_type for listing in listings),
        "regions": distinct(_region_of(listing) or "" for listing in listings),
        "states": distinct(state_code(listing.state) for listing in listings if listing.state),
        "years": [str(year) for year in sorted({listing.year for listing in listings if listing.year is not None})],
    }
