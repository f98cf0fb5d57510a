from __future__ import annotations

import os
from pathlib import Path

from app.services.dashboard import DashboardService
from app.services.filters import ListingFilter
from app.services.listings import ListingRepository, load_listings
from conftest import CSV_ROWS, write_listings_csv


def test_load_listings_parses_rows(listings_csv: Path) -> None:
    listings = load_listings(str(listings_csv))
    assert len(listings) == 4

    first = listings[0]
    assert first.job_title == "Data Scientist"
    assert first.year == 2023
    assert first.openings == 10
    assert first.average_salary == 100000.0
    assert first.is_remote is True
    assert first.skills == ["python", "sql", "communication"]


def test_blank_numeric_cells_become_none(listings_csv: Path) -> None:
    manager = load_listings(str(listings_csv))[3]
    assert manager.openings is None
    assert manager.average_salary is None
    assert manager.previous_year_openings == 3


def test_blank_rows_are_skipped(tmp_path: Path) -> None:
    path = write_listings_csv(tmp_path / "gappy.csv", [CSV_ROWS[0], ",,,,,,,,,,,,,,,,,", "", CSV_ROWS[1]])
    assert len(load_listings(str(path))) == 2


def test_missing_file_yields_empty_list(tmp_path: Path) -> None:
    assert load_listings(str(tmp_path / "absent.csv")) == []


def test_empty_file_yields_empty_list(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert load_listings(str(path)) == []


def test_repository_reloads_when_file_changes(listings_csv: Path) -> None:
    repository = ListingRepository(str(listings_csv))
    assert len(repository.all()) == 4
    assert repository.version == 1

    repository.all()
    assert repository.version == 1

    write_listings_csv(listings_csv, CSV_ROWS[:1])
    stat = listings_csv.stat()
    os.utime(listings_csv, (stat.st_atime + 10, stat.st_mtime + 10))

    assert len(repository.all()) == 1
    assert repository.version == 2


def test_overview_is_memoized_per_filter(dashboard: DashboardService) -> None:
    west = ListingFilter(region="West")
    first = dashboard.overview(west)
    assert dashboard.overview(ListingFilter(region="West")) is first
    assert first["listing_count"] == 2

    everything = dashboard.overview(ListingFilter())
    assert everything is not first
    assert everything["listing_count"] == 4


def test_overview_cache_drops_on_reload(listings_csv: Path) -> None:
    dashboard = DashboardService(ListingRepository(str(listings_csv)))
    before = dashboard.overview()

    write_listings_csv(listings_csv, CSV_ROWS[:2])
    stat = listings_csv.stat()
    os.utime(listings_csv, (stat.st_atime + 10, stat.st_mtime + 10))

    after = dashboard.overview()
    assert after is not before
    assert after["listing_count"] == 2
