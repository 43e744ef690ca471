"""
ArcGIS Module - Endpoint Resolver.

Finds a working Fire Stations layer:
1. Check each primary ArcGIS service name in order
2. Fall back to the single NASA NCCS mirror
3. First schema-valid response wins (first match, not best match)
"""

from collections.abc import Sequence
from typing import Any

import httpx
import structlog

from hifld.core.exceptions import MalformedResponseError, NoEndpointAvailableError
from hifld.services.arcgis.client import ArcGISClient, provider_error
from hifld.services.arcgis.models import EndpointCandidate, ProviderKind, ServiceEndpoint

logger = structlog.get_logger()


def build_candidates(
    base_url: str,
    service_names: Sequence[str],
    mirror_url: str | None,
) -> tuple[EndpointCandidate, ...]:
    """Ranked candidate list: primary services in order, then the mirror."""
    base_url = base_url.rstrip("/")
    candidates = [
        EndpointCandidate(
            provider=ProviderKind.PRIMARY,
            identifier=name,
            base_url=f"{base_url}/{name}/FeatureServer/0",
        )
        for name in service_names
    ]
    if mirror_url:
        candidates.append(
            EndpointCandidate(
                provider=ProviderKind.MIRROR,
                identifier="mirror",
                base_url=mirror_url.rstrip("/"),
            )
        )
    return tuple(candidates)


def is_valid_schema(info: Any) -> bool:
    """A layer is usable iff it has a non-empty ``name`` and no ``error``."""
    if not isinstance(info, dict):
        return False
    if "error" in info:
        return False
    return bool(info.get("name"))


class EndpointResolver:
    """Check candidates in priority order and return the first usable one."""

    def __init__(self, client: ArcGISClient, candidates: Sequence[EndpointCandidate]):
        self.client = client
        self.candidates = tuple(candidates)
        self.log = logger.bind(component="EndpointResolver")

    async def check(self, candidate: EndpointCandidate) -> ServiceEndpoint | None:
        """
        Check a single candidate.

        Returns:
            ServiceEndpoint if accepted, None if rejected for any reason
        """
        log = self.log.bind(
            provider=candidate.provider.value,
            candidate=candidate.identifier,
        )
        try:
            info = await self.client.fetch_metadata(candidate.base_url)
        except httpx.TimeoutException:
            log.warning("Candidate timed out")
            return None
        except httpx.HTTPError as e:
            log.warning("Candidate unreachable", error=str(e))
            return None
        except MalformedResponseError as e:
            log.warning("Candidate returned malformed response", error=e.message)
            return None

        if not is_valid_schema(info):
            log.info(
                "Candidate rejected",
                error=provider_error(info),
                has_name=bool(info.get("name")),
            )
            return None

        identifier = candidate.identifier
        if candidate.provider is ProviderKind.MIRROR:
            # Mirror layers are identified by the name they report
            identifier = str(info["name"])

        endpoint = ServiceEndpoint(
            provider=candidate.provider,
            identifier=identifier,
            base_url=candidate.base_url,
            schema_info=info,
        )
        log.info(
            "Found service",
            layer_name=info["name"],
            fields=endpoint.field_count,
        )
        return endpoint

    async def resolve(self) -> ServiceEndpoint:
        """
        Resolve the first working endpoint.

        Raises:
            NoEndpointAvailableError: every candidate was rejected
        """
        self.log.info("Searching for fire stations service", candidates=len(self.candidates))

        tried: list[str] = []
        for candidate in self.candidates:
            tried.append(candidate.base_url)
            endpoint = await self.check(candidate)
            if endpoint is not None:
                return endpoint

        self.log.error("No working service found", tried=len(tried))
        raise NoEndpointAvailableError(tried)
