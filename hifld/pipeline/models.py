"""
Data models for the fire station pipeline.

Canonical records and the per-state aggregate produced from them.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from hifld.services.arcgis.models import ServiceEndpoint, StopReason

CSV_FIELDS = (
    "id",
    "name",
    "address",
    "city",
    "state",
    "zip",
    "county",
    "type",
    "phone",
    "latitude",
    "longitude",
    "status",
)

UNKNOWN_STATE = "UNKNOWN"


@dataclass(frozen=True)
class StationRecord:
    """One fire station in canonical, provider-independent shape."""
    id: Optional[int | str] = None  # Provider object identifier
    name: str = "Unknown"
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    county: str = ""
    type: str = ""
    phone: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    status: str = "OPEN"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StationRecord":
        """Rebuild a record from a ``fire-stations.json`` entry."""
        known = {k: data[k] for k in CSV_FIELDS if k in data}
        return cls(**known)


@dataclass(frozen=True)
class StateCount:
    state: str
    count: int


@dataclass(frozen=True)
class StateSummary:
    """Station counts per state, largest first. Regenerated every run."""
    states: tuple[StateCount, ...]

    @classmethod
    def from_records(cls, records: Iterable[StationRecord]) -> "StateSummary":
        counts = Counter(r.state or UNKNOWN_STATE for r in records)
        # most_common keeps first-seen order for ties
        return cls(states=tuple(StateCount(s, c) for s, c in counts.most_common()))

    @property
    def total(self) -> int:
        return sum(s.count for s in self.states)

    def top(self, n: int = 5) -> list[StateCount]:
        return list(self.states[:n])

    def to_dict(self) -> dict[str, Any]:
        return {"states": [asdict(s) for s in self.states]}


@dataclass(frozen=True)
class WrittenPaths:
    """Artifacts written by the writer. ``None`` marks a failed write."""
    stations_json: Path | None
    stations_csv: Path | None
    states_summary: Path | None

    @property
    def failed(self) -> list[str]:
        return [name for name, path in asdict(self).items() if path is None]


@dataclass
class RunReport:
    """Explicit result of one download run, returned instead of logged globals."""
    endpoint: ServiceEndpoint
    declared_total: int
    retrieved: int
    batches_requested: int
    stop_reason: StopReason
    summary: StateSummary
    paths: WrittenPaths
    errors: list[str] = field(default_factory=list)

    @property
    def outcome(self) -> str:
        if self.stop_reason is StopReason.COMPLETE and not self.paths.failed:
            return "success"
        return "partial"
