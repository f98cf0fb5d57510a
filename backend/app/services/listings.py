"""
Job-listing dataset loader.

Reads the health-informatics CSV into immutable ``JobListing`` records. The
dataset is read-only; it is reloaded only when the file changes on disk.
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import asdict, dataclass
from typing import Any, Optional

import pandas as pd

logger = logging.getLogger("healthinfo.listings")

# CSV header -> JobListing field
COLUMN_MAP: dict[str, str] = {
    "State": "state",
    "City": "city",
    "Region": "region",
    "Year": "year",
    "Job Title": "job_title",
    "SOC Code": "soc_code",
    "Openings": "openings",
    "Previous Year Openings": "previous_year_openings",
    "Job Growth (%)": "growth_percent",
    "Average Salary ($)": "average_salary",
    "Median Salary ($)": "median_salary",
    "Industry": "industry",
    "Employment Type": "employment_type",
    "Remote Work": "remote_work",
    "Education Requirement": "education_requirement",
    "Experience Level": "experience_level",
    "Key Skills": "key_skills",
    "Posting Source": "posting_source",
}

INTEGER_FIELDS = ("year", "openings", "previous_year_openings")
FLOAT_FIELDS = ("growth_percent", "average_salary", "median_salary")


@dataclass(frozen=True)
class JobListing:
    state: str = ""
    city: str = ""
    region: str = ""
    year: Optional[int] = None
    job_title: str = ""
    soc_code: str = ""
    openings: Optional[int] = None
    previous_year_openings: Optional[int] = None
    growth_percent: Optional[float] = None
    average_salary: Optional[float] = None
    median_salary: Optional[float] = None
    industry: str = ""
    employment_type: str = ""
    remote_work: str = ""
    education_requirement: str = ""
    experience_level: str = ""
    key_skills: str = ""
    posting_source: str = ""

    @property
    def is_remote(self) -> bool:
        return self.remote_work.strip().lower() == "yes"

    @property
    def skills(self) -> list[str]:
        """Key skills, lower-cased and trimmed, blanks dropped."""
        return [skill.strip().lower() for skill in self.key_skills.split(",") if skill.strip()]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "JobListing":
        """Build a listing from a mapping of field name to raw value."""
        values: dict[str, Any] = {}
        for field in cls.__dataclass_fields__:
            raw = row.get(field)
            if field in INTEGER_FIELDS:
                values[field] = _to_int(raw)
            elif field in FLOAT_FIELDS:
                values[field] = _to_float(raw)
            else:
                values[field] = "" if raw is None or _is_missing(raw) else str(raw).strip()
        return cls(**values)


def _is_missing(value: Any) -> bool:
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _to_float(value: Any) -> Optional[float]:
    if value is None or _is_missing(value) or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    return int(number) if number is not None else None


def read_listings_frame(path: str) -> pd.DataFrame:
    """Read the CSV into a frame with snake_case columns and typed numerics."""
    frame = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    frame = frame.rename(columns=lambda column: COLUMN_MAP.get(column.strip(), column.strip()))

    # Rows whose every cell is blank are dropped
    frame = frame[(frame.apply(lambda column: column.str.strip()) != "").any(axis=1)].copy()

    for field in INTEGER_FIELDS + FLOAT_FIELDS:
        if field in frame.columns:
            frame[field] = pd.to_numeric(frame[field].str.replace(",", "", regex=False), errors="coerce")

    return frame


def load_listings(path: str) -> list[JobListing]:
    """
    Load every listing in ``path``.

    A missing or unreadable file yields an empty list so the dashboards can
    render an empty state.
    """
    if not os.path.exists(path):
        logger.warning("Job listings file not found at %s", path)
        return []

    try:
        frame = read_listings_frame(path)
    except (OSError, ValueError, pd.errors.ParserError) as exc:
        logger.warning("Could not read job listings from %s: %s", path, exc)
        return []

    listings = [JobListing.from_row(row) for row in frame.to_dict(orient="records")]
    logger.info("Loaded %d job listings from %s", len(listings), path)
    return listings


class ListingRepository:
    """
    Holds the parsed dataset for one CSV path.

    ``version`` increases every time the file is (re)loaded, so callers can
    key derived caches on it.
    """

    def __init__(self, path: str):
        self.path = path
        self.version = 0
        self._mtime: Optional[float] = None
        self._listings: list[JobListing] = []
        self._lock = threading.Lock()

    def _current_mtime(self) -> Optional[float]:
        try:
            return os.path.getmtime(self.path)
        except OSError:
            return None

    def all(self) -> list[JobListing]:
        mtime = self._current_mtime()
        with self._lock:
            if self.version == 0 or mtime != self._mtime:
                self._listings = load_listings(self.path)
                self._mtime = mtime
                self.version += 1
            return self._listings
