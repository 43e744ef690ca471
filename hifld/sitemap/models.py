"""
Sitemap Module - Data Classes.

Shared types for sitemap entries and build results.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class ChangeFrequency(str, Enum):
    """Sitemap protocol <changefreq> values."""
    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


@dataclass(frozen=True)
class SitemapEntry:
    """
    One <url> element.

    Unset fields are filled by the builder with the run date,
    ``monthly`` and ``0.5``.
    """
    location: str
    last_modified: date | None = None
    change_frequency: ChangeFrequency | None = None
    priority: float | None = None

    def __post_init__(self) -> None:
        if not self.location:
            raise ValueError("SitemapEntry.location must not be empty")
        if self.priority is not None and not 0.0 <= self.priority <= 1.0:
            raise ValueError(f"priority must be within 0.0-1.0, got {self.priority}")


@dataclass(frozen=True)
class SitemapDocument:
    """A rendered sitemap (or sitemap index) ready to be written."""
    filename: str
    location: str  # Public URL of this document
    content: str
    entry_count: int


@dataclass
class SitemapBuildResult:
    """
    Result of a build.

    ``index`` is only set when the entries were sharded over several documents.
    """
    documents: list[SitemapDocument] = field(default_factory=list)
    index: SitemapDocument | None = None

    @property
    def is_sharded(self) -> bool:
        return self.index is not None

    @property
    def root(self) -> SitemapDocument:
        """The document crawlers should be pointed at."""
        if self.index is not None:
            return self.index
        return self.documents[0]

    @property
    def all_documents(self) -> list[SitemapDocument]:
        if self.index is None:
            return list(self.documents)
        return [*self.documents, self.index]

    @property
    def total_entries(self) -> int:
        return sum(d.entry_count for d in self.documents)
