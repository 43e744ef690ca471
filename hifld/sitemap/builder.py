"""
Sitemap Builder.

Renders sitemap protocol documents for a list of entries:
1. N <= max_per_document: one <urlset> named ``{basename}.xml``, no index
2. N > max_per_document: consecutive chunks in input order named
   ``{basename}-1.xml``, ``{basename}-2.xml``, ... plus a <sitemapindex>
   named ``{basename}.xml`` referencing every chunk

Entries are never reordered or de-duplicated.
"""

from collections.abc import Sequence
from datetime import date
from pathlib import Path
from xml.etree import ElementTree

import structlog

from hifld.sitemap.models import (
    ChangeFrequency,
    SitemapBuildResult,
    SitemapDocument,
    SitemapEntry,
)

logger = structlog.get_logger()

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

# Protocol ceiling is 50000 URLs per document; keep a safety margin
MAX_URLS_PER_SITEMAP = 45000

DEFAULT_CHANGE_FREQUENCY = ChangeFrequency.MONTHLY
DEFAULT_PRIORITY = 0.5


def _format_priority(priority: float) -> str:
    if round(priority, 1) == priority:
        return f"{priority:.1f}"
    return str(priority)


def _serialize(root: ElementTree.Element) -> str:
    ElementTree.indent(root, space="  ")
    return XML_DECLARATION + ElementTree.tostring(root, encoding="unicode") + "\n"


def render_urlset(entries: Sequence[SitemapEntry], run_date: date) -> str:
    """Render a <urlset> document, applying defaults to unset entry fields."""
    root = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ElementTree.SubElement(root, "url")
        ElementTree.SubElement(url, "loc").text = entry.location
        ElementTree.SubElement(url, "lastmod").text = (
            entry.last_modified or run_date
        ).isoformat()
        ElementTree.SubElement(url, "changefreq").text = (
            entry.change_frequency or DEFAULT_CHANGE_FREQUENCY
        ).value
        ElementTree.SubElement(url, "priority").text = _format_priority(
            DEFAULT_PRIORITY if entry.priority is None else entry.priority
        )
    return _serialize(root)


def render_index(documents: Sequence[SitemapDocument], run_date: date) -> str:
    """Render a <sitemapindex> referencing each document by location."""
    root = ElementTree.Element("sitemapindex", xmlns=SITEMAP_NS)
    for document in documents:
        sitemap = ElementTree.SubElement(root, "sitemap")
        ElementTree.SubElement(sitemap, "loc").text = document.location
        ElementTree.SubElement(sitemap, "lastmod").text = run_date.isoformat()
    return _serialize(root)


def render_robots_txt(
    site_url: str,
    sitemap_urls: Sequence[str],
    crawl_delay: int = 1,
) -> str:
    """Allow-all robots.txt pointing at the given sitemaps."""
    host = site_url.split("://", 1)[-1].rstrip("/")
    lines = [
        f"# robots.txt for {host}",
        "",
        "User-agent: *",
        "Allow: /",
        "",
        "# Sitemaps",
        *(f"Sitemap: {url}" for url in sitemap_urls),
        "",
        f"Crawl-delay: {crawl_delay}",
        "",
    ]
    return "\n".join(lines)


class SitemapBuilder:
    """Shard entries over sitemap documents for one site and basename."""

    def __init__(
        self,
        site_url: str,
        basename: str,
        max_per_document: int = MAX_URLS_PER_SITEMAP,
    ):
        if max_per_document <= 0:
            raise ValueError("max_per_document must be positive")
        self.site_url = site_url.rstrip("/")
        self.basename = basename
        self.max_per_document = max_per_document
        self.log = logger.bind(component="SitemapBuilder", basename=basename)

    def _document(self, filename: str, content: str, entry_count: int) -> SitemapDocument:
        return SitemapDocument(
            filename=filename,
            location=f"{self.site_url}/{filename}",
            content=content,
            entry_count=entry_count,
        )

    def build(
        self,
        entries: Sequence[SitemapEntry],
        run_date: date | None = None,
    ) -> SitemapBuildResult:
        run_date = run_date or date.today()
        entries = list(entries)
        size = self.max_per_document

        if len(entries) <= size:
            document = self._document(
                f"{self.basename}.xml",
                render_urlset(entries, run_date),
                len(entries),
            )
            self.log.info("Built sitemap", urls=len(entries))
            return SitemapBuildResult(documents=[document])

        documents = []
        for start in range(0, len(entries), size):
            chunk = entries[start:start + size]
            file_num = start // size + 1
            documents.append(
                self._document(
                    f"{self.basename}-{file_num}.xml",
                    render_urlset(chunk, run_date),
                    len(chunk),
                )
            )

        index = self._document(
            f"{self.basename}.xml",
            render_index(documents, run_date),
            len(documents),
        )
        self.log.info("Built sharded sitemap", urls=len(entries), documents=len(documents))
        return SitemapBuildResult(documents=documents, index=index)


def write_documents(documents: Sequence[SitemapDocument], out_dir: Path) -> list[Path]:
    """Write rendered documents into ``out_dir``, replacing existing files."""
    out_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for document in documents:
        path = out_dir / document.filename
        path.write_text(document.content, encoding="utf-8")
        paths.append(path)
    return paths
