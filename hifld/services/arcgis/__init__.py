"""
ArcGIS Module for the HIFLD pipeline.

Provides endpoint resolution and batched feature download for ArcGIS REST
feature services.

Components:
- ArcGISClient: single-shot JSON requests against a layer
- EndpointResolver: ranked primary candidates with mirror fallback
- RecordFetcher: count query plus sequential offset paging

Usage:
    from hifld.services.arcgis import ArcGISClient, EndpointResolver, RecordFetcher

    async with httpx.AsyncClient() as http:
        client = ArcGISClient(http)
        endpoint = await EndpointResolver(client, candidates).resolve()
        result = await RecordFetcher(client).fetch_all(endpoint)
"""

from hifld.services.arcgis.client import ArcGISClient, parse_features, provider_error
from hifld.services.arcgis.fetcher import RecordFetcher
from hifld.services.arcgis.models import (
    EndpointCandidate,
    FetchProgress,
    FetchResult,
    ProviderKind,
    RawFeature,
    ServiceEndpoint,
    StopReason,
)
from hifld.services.arcgis.resolver import EndpointResolver, build_candidates, is_valid_schema

__all__ = [
    # Client
    "ArcGISClient",
    "parse_features",
    "provider_error",

    # Resolution and download
    "EndpointResolver",
    "build_candidates",
    "is_valid_schema",
    "RecordFetcher",

    # Data models
    "EndpointCandidate",
    "ServiceEndpoint",
    "ProviderKind",
    "RawFeature",
    "FetchProgress",
    "FetchResult",
    "StopReason",
]
