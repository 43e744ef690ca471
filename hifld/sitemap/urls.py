"""
Station URL planning.

Maps canonical station records to the public page URLs that the sitemaps
advertise:
    /fire-departments/                      directory root
    /fire-departments/{state}/              one index page per state
    /fire-departments/{state}/{slug}.html   one page per station
"""

import re
from collections.abc import Iterable

from hifld.pipeline.models import StationRecord
from hifld.sitemap.models import ChangeFrequency, SitemapEntry

FIRE_DEPARTMENTS_PATH = "fire-departments"
MISSING_STATE = "XX"
MAX_SLUG_LENGTH = 80


def slugify(text: str | None) -> str:
    """Convert a station name to a URL-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    slug = slug.strip("-")[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or "unknown"


def state_key(record: StationRecord) -> str:
    return (record.state or MISSING_STATE).upper()


def group_by_state(records: Iterable[StationRecord]) -> dict[str, list[StationRecord]]:
    """Group records by upper-cased state, keeping first-seen state order."""
    groups: dict[str, list[StationRecord]] = {}
    for record in records:
        groups.setdefault(state_key(record), []).append(record)
    return groups


def station_url(site_url: str, record: StationRecord) -> str:
    state = state_key(record).lower()
    return f"{site_url.rstrip('/')}/{FIRE_DEPARTMENTS_PATH}/{state}/{slugify(record.name)}.html"


def main_pages(site_url: str) -> list[SitemapEntry]:
    """Core site pages for the main sitemap."""
    site_url = site_url.rstrip("/")
    return [
        SitemapEntry(f"{site_url}/", change_frequency=ChangeFrequency.DAILY, priority=1.0),
        SitemapEntry(f"{site_url}/dispatch.html", change_frequency=ChangeFrequency.WEEKLY, priority=0.9),
        SitemapEntry(f"{site_url}/store.html", change_frequency=ChangeFrequency.WEEKLY, priority=0.8),
        SitemapEntry(
            f"{site_url}/{FIRE_DEPARTMENTS_PATH}/",
            change_frequency=ChangeFrequency.WEEKLY,
            priority=0.9,
        ),
    ]


def station_entries(records: Iterable[StationRecord], site_url: str) -> list[SitemapEntry]:
    """
    Sitemap entries for every state index page and station page.

    Each state index precedes that state's station pages. Stations with the
    same slug in one state share a URL; no de-duplication is applied.
    """
    site_url = site_url.rstrip("/")
    entries: list[SitemapEntry] = []
    for state, stations in group_by_state(records).items():
        entries.append(
            SitemapEntry(
                f"{site_url}/{FIRE_DEPARTMENTS_PATH}/{state.lower()}/",
                change_frequency=ChangeFrequency.WEEKLY,
                priority=0.7,
            )
        )
        entries.extend(
            SitemapEntry(
                station_url(site_url, station),
                change_frequency=ChangeFrequency.MONTHLY,
                priority=0.6,
            )
            for station in stations
        )
    return entries
