"""
ArcGIS Module - API Client.

Thin async wrapper around an httpx client for feature service requests.
Issues exactly one request per call: there is no retry or backoff here,
fallback policy belongs to the resolver and the fetcher.
"""

from collections.abc import Mapping
from typing import Any

import httpx
import structlog

from hifld.core.exceptions import MalformedResponseError
from hifld.services.arcgis.models import RawFeature, ServiceEndpoint
from hifld.services.arcgis.queries import COUNT_PARAMS, METADATA_PARAMS, page_params

logger = structlog.get_logger()


def provider_error(payload: dict[str, Any]) -> str | None:
    """Return the provider error message if the payload carries one."""
    error = payload.get("error")
    if error is None:
        return None
    if isinstance(error, dict):
        code = error.get("code")
        message = error.get("message") or "unknown error"
        return f"{code}: {message}" if code is not None else str(message)
    return str(error)


class ArcGISClient:
    """
    Async client for ArcGIS REST feature services.

    The underlying ``httpx.AsyncClient`` is owned by the caller, so tests can
    inject a mock transport and scripts can share one connection pool.
    """

    HEADERS = {
        "Accept": "application/json",
    }

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: float = 60.0,
        user_agent: str | None = None,
    ):
        """
        Initialize the ArcGIS client.

        Args:
            client: Shared httpx AsyncClient
            timeout: Per-request timeout in seconds
            user_agent: Optional User-Agent header
        """
        self._client = client
        self.timeout = timeout
        self.headers = dict(self.HEADERS)
        if user_agent:
            self.headers["User-Agent"] = user_agent
        self.log = logger.bind(component="ArcGISClient")

    async def get_json(self, url: str, params: dict[str, str]) -> dict[str, Any]:
        """
        GET a URL and decode a JSON object.

        Raises:
            httpx.HTTPError: transport failures and timeouts
            MalformedResponseError: body is not a JSON object
        """
        self.log.debug("Fetching", url=url[:100], params=params)
        response = await self._client.get(
            url,
            params=params,
            headers=self.headers,
            timeout=self.timeout,
        )

        # ArcGIS reports most failures as 200 + {"error": ...}, so the body is
        # parsed regardless of status
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                url,
                f"invalid JSON: {response.text[:200]!r}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise MalformedResponseError(
                url,
                f"expected JSON object, got {type(data).__name__}",
                status_code=response.status_code,
            )
        return data

    async def fetch_metadata(self, base_url: str) -> dict[str, Any]:
        """Layer metadata request (``?f=json``)."""
        return await self.get_json(base_url, METADATA_PARAMS)

    async def fetch_count(self, endpoint: ServiceEndpoint) -> dict[str, Any]:
        """Count-only query payload."""
        return await self.get_json(endpoint.query_url, COUNT_PARAMS)

    async def fetch_page(
        self,
        endpoint: ServiceEndpoint,
        offset: int,
        batch_size: int,
    ) -> dict[str, Any]:
        """One page of features starting at ``offset``."""
        return await self.get_json(endpoint.query_url, page_params(offset, batch_size))


def parse_features(payload: dict[str, Any], url: str = "") -> list[RawFeature]:
    """
    Convert a page payload into RawFeature objects.

    Raises:
        MalformedResponseError: ``features`` is not a list of objects, or a
            feature's ``attributes``/``geometry`` is not an object
    """
    features = payload.get("features")
    if features is None:
        return []
    if not isinstance(features, list):
        raise MalformedResponseError(url, f"features is {type(features).__name__}, expected list")

    parsed = []
    for index, feature in enumerate(features):
        if not isinstance(feature, Mapping):
            raise MalformedResponseError(url, f"feature {index} is {type(feature).__name__}")
        for key in ("attributes", "geometry"):
            value = feature.get(key)
            if value is not None and not isinstance(value, Mapping):
                raise MalformedResponseError(
                    url,
                    f"feature {index} {key} is {type(value).__name__}",
                )
        parsed.append(RawFeature.from_json(feature))
    return parsed
