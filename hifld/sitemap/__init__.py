"""
Sitemap Module for the HIFLD pipeline.

Builds sitemap protocol documents (with sharding and an index when needed)
and robots.txt for the fire department pages.

Usage:
    from hifld.sitemap import SitemapBuilder, station_entries

    builder = SitemapBuilder("https://example.com", "sitemap-fire-departments")
    result = builder.build(station_entries(records, "https://example.com"))
"""

from hifld.sitemap.builder import (
    MAX_URLS_PER_SITEMAP,
    SitemapBuilder,
    render_index,
    render_robots_txt,
    render_urlset,
    write_documents,
)
from hifld.sitemap.models import (
    ChangeFrequency,
    SitemapBuildResult,
    SitemapDocument,
    SitemapEntry,
)
from hifld.sitemap.urls import group_by_state, main_pages, slugify, station_entries, station_url

__all__ = [
    # Builder
    "SitemapBuilder",
    "MAX_URLS_PER_SITEMAP",
    "render_urlset",
    "render_index",
    "render_robots_txt",
    "write_documents",

    # URL planning
    "slugify",
    "group_by_state",
    "station_url",
    "station_entries",
    "main_pages",

    # Data models
    "ChangeFrequency",
    "SitemapEntry",
    "SitemapDocument",
    "SitemapBuildResult",
]
