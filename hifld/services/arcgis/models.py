"""
ArcGIS Module - Data Models.

Data classes for feature service endpoints, raw features and fetch outcomes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


class ProviderKind(str, Enum):
    """Which provider served the endpoint."""
    PRIMARY = "primary"  # ArcGIS Online feature service
    MIRROR = "mirror"    # NASA NCCS MapServer mirror


class StopReason(str, Enum):
    """Why paging ended."""
    COMPLETE = "complete"              # offset reached the declared total
    PROVIDER_ERROR = "provider_error"  # response carried an `error` object
    EMPTY_BATCH = "empty_batch"        # zero features before the declared total
    REQUEST_FAILED = "request_failed"  # transport error, timeout or bad JSON


@dataclass(frozen=True)
class EndpointCandidate:
    """One entry in the ranked candidate list."""
    provider: ProviderKind
    identifier: str  # Service name, or "mirror" until metadata names it
    base_url: str    # Layer URL, e.g. .../Fire_Stations/FeatureServer/0


@dataclass(frozen=True)
class ServiceEndpoint:
    """A resolved, schema-valid layer. Immutable for the rest of the run."""
    provider: ProviderKind
    identifier: str
    base_url: str
    schema_info: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def query_url(self) -> str:
        return f"{self.base_url}/query"

    @property
    def field_count(self) -> int:
        return len(self.schema_info.get("fields") or [])


@dataclass(frozen=True)
class RawFeature:
    """Provider-native feature: attributes plus optional point geometry."""
    attributes: Mapping[str, Any]
    geometry: Mapping[str, Any] | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "RawFeature":
        attributes = data.get("attributes") or {}
        geometry = data.get("geometry") or None
        return cls(attributes=dict(attributes), geometry=dict(geometry) if geometry else None)


@dataclass
class FetchProgress:
    """
    Accumulator threaded through the paging loop.

    Owned by a single fetch; the caller reads it after the batch iterator
    is exhausted.
    """
    declared_total: int
    batches_requested: int = 0
    retrieved: int = 0
    offsets: list[int] = field(default_factory=list)
    stop_reason: StopReason | None = None
    error: str | None = None


@dataclass(frozen=True)
class FetchResult:
    """All features retrieved from one endpoint, in arrival order."""
    endpoint: ServiceEndpoint
    features: tuple[RawFeature, ...]
    declared_total: int
    batches_requested: int
    stop_reason: StopReason
    error: str | None = None

    @property
    def retrieved(self) -> int:
        return len(self.features)

    @property
    def is_partial(self) -> bool:
        return self.stop_reason is not StopReason.COMPLETE
