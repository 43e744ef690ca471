"""
Sitemap job.

Reads the canonical station file and writes into the web directory:
- sitemap.xml                        core site pages
- {basename}.xml [+ {basename}-N.xml] station pages, sharded when large
- robots.txt                         allow-all, pointing at both sitemaps

A missing station file is not fatal: only the core sitemap is produced.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import structlog

from hifld.core.logging import emit_run_event, finalize_run_event, init_run_event
from hifld.pipeline.writer import STATIONS_JSON, load_stations
from hifld.sitemap import (
    MAX_URLS_PER_SITEMAP,
    SitemapBuilder,
    main_pages,
    render_robots_txt,
    station_entries,
    write_documents,
)

logger = structlog.get_logger()

MAIN_SITEMAP_BASENAME = "sitemap"
ROBOTS_TXT = "robots.txt"


@dataclass
class SitemapReport:
    main_urls: int = 0
    station_urls: int = 0
    documents: list[Path] = field(default_factory=list)
    sharded: bool = False
    robots_path: Path | None = None
    errors: list[str] = field(default_factory=list)


def generate_sitemaps(
    data_dir: Path,
    web_dir: Path,
    site_url: str,
    basename: str = "sitemap-fire-departments",
    max_per_document: int = MAX_URLS_PER_SITEMAP,
    crawl_delay: int = 1,
    run_date: date | None = None,
) -> SitemapReport:
    """Generate sitemaps and robots.txt for the site."""
    log = logger.bind(component="SitemapJob", web_dir=str(web_dir))
    event = init_run_event("sitemap")
    run_date = run_date or date.today()
    site_url = site_url.rstrip("/")
    report = SitemapReport()

    # Core pages
    pages = main_pages(site_url)
    main_result = SitemapBuilder(site_url, MAIN_SITEMAP_BASENAME).build(pages, run_date)
    report.main_urls = len(pages)
    sitemap_urls = [main_result.root.location]
    documents = main_result.all_documents

    # Station pages
    data_path = Path(data_dir) / STATIONS_JSON
    if data_path.exists():
        try:
            _, stations = load_stations(data_path)
        except (OSError, ValueError) as e:
            log.error("Could not read station data", path=str(data_path), error=str(e))
            report.errors.append(f"unreadable station data: {e}")
            stations = []
        log.info("Loaded fire station data", stations=len(stations))

        entries = station_entries(stations, site_url)
        if entries:
            builder = SitemapBuilder(site_url, basename, max_per_document=max_per_document)
            station_result = builder.build(entries, run_date)
            report.station_urls = len(entries)
            report.sharded = station_result.is_sharded
            sitemap_urls.append(station_result.root.location)
            documents = [*documents, *station_result.all_documents]
    else:
        log.warning("Fire station data not found, skipping station URLs", path=str(data_path))

    try:
        report.documents = write_documents(documents, Path(web_dir))
    except OSError as e:
        log.error("Failed to write sitemaps", error=str(e))
        report.errors.append(f"sitemap write failed: {e}")

    robots_path = Path(web_dir) / ROBOTS_TXT
    try:
        robots_path.write_text(
            render_robots_txt(site_url, sitemap_urls, crawl_delay=crawl_delay),
            encoding="utf-8",
        )
        report.robots_path = robots_path
    except OSError as e:
        log.error("Failed to write robots.txt", path=str(robots_path), error=str(e))
        report.errors.append(f"robots.txt write failed: {e}")

    emit_run_event(
        finalize_run_event(
            event,
            "partial" if report.errors else "success",
            main_urls=report.main_urls,
            station_urls=report.station_urls,
            total_urls=report.main_urls + report.station_urls,
            documents=[p.name for p in report.documents],
            sharded=report.sharded,
            errors=report.errors,
        )
    )
    return report
