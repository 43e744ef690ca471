"""
Fake ArcGIS feature service for tests.

Serves in-memory layers through ``httpx.MockTransport`` so the resolver,
fetcher and download job run without network access.
"""

from dataclasses import dataclass, field
from typing import Any

import httpx

PRIMARY_BASE = "https://primary.test/arcgis/rest/services"
MIRROR_URL = "https://mirror.test/mapping/rest/services/hifld_open/emergency_services/MapServer/0"
LAYER_URL = f"{PRIMARY_BASE}/Fire_Stations/FeatureServer/0"

# Valid JSON objects whose feature structure is wrong
MALFORMED_PAGES: dict[str, dict[str, Any]] = {
    "list_geometry": {"features": [{"attributes": {"OBJECTID": 1}, "geometry": [1, 2]}]},
    "list_attributes": {"features": [{"attributes": ["OBJECTID", 1]}]},
    "scalar_features": {"features": 5},
    "scalar_feature": {"features": [7]},
}


def make_features(count: int, states: tuple[str, ...] = ("CA", "TX", "NY")) -> list[dict[str, Any]]:
    """Primary-layer style features with point geometry."""
    return [
        {
            "attributes": {
                "OBJECTID": i + 1,
                "NAME": f"Station {i + 1}",
                "ADDRESS": f"{100 + i} Main St",
                "CITY": "Springfield",
                "STATE": states[i % len(states)],
                "ZIP": "12345",
                "FTYPE": "Career",
            },
            "geometry": {"x": -100.0 - i / 1000, "y": 40.0 + i / 1000},
        }
        for i in range(count)
    ]


@dataclass
class FakeLayer:
    name: str
    features: list[dict[str, Any]]
    count: int | None = None
    # offset -> failure mode for that page
    page_failures: dict[int, str] = field(default_factory=dict)
    count_failure: str | None = None

    @property
    def declared_count(self) -> int:
        return len(self.features) if self.count is None else self.count


class FakeFeatureService:
    """
    In-memory feature service.

    Failure modes:
        timeout   raise httpx.ReadTimeout
        connect   raise httpx.ConnectError
        bad_json  200 with an HTML body
        error     200 with an ArcGIS error object
        empty     200 with an empty feature list (pages only)

    Malformed page payloads (pages only): see MALFORMED_PAGES.
    """

    def __init__(self):
        self.layers: dict[str, FakeLayer] = {}
        self.broken: dict[str, str] = {}
        self.requests: list[httpx.Request] = []

    def add_layer(
        self,
        base_url: str,
        features: list[dict[str, Any]],
        name: str = "Fire_Stations",
        **kwargs: Any,
    ) -> FakeLayer:
        layer = FakeLayer(name=name, features=features, **kwargs)
        self.layers[base_url] = layer
        return layer

    def break_endpoint(self, base_url: str, mode: str) -> None:
        self.broken[base_url] = mode

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def metadata_requests(self) -> list[str]:
        return [url for url in map(path_url, self.requests) if not url.endswith("/query")]

    def page_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if "resultOffset" in r.url.params]

    def page_offsets(self) -> list[int]:
        return [int(r.url.params["resultOffset"]) for r in self.page_requests()]

    def _failure(self, request: httpx.Request, mode: str) -> httpx.Response:
        if mode == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        if mode == "connect":
            raise httpx.ConnectError("connection refused", request=request)
        if mode == "bad_json":
            return httpx.Response(200, text="<html>Service Unavailable</html>")
        if mode == "empty":
            return httpx.Response(200, json={"features": []})
        if mode in MALFORMED_PAGES:
            return httpx.Response(200, json=MALFORMED_PAGES[mode])
        return httpx.Response(200, json={"error": {"code": 500, "message": "Internal server error"}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = path_url(request)
        params = request.url.params

        if url.endswith("/query"):
            layer = self.layers.get(url[: -len("/query")])
            if layer is None:
                return httpx.Response(200, json={"error": {"code": 400, "message": "Invalid URL"}})
            if params.get("returnCountOnly") == "true":
                if layer.count_failure:
                    return self._failure(request, layer.count_failure)
                return httpx.Response(200, json={"count": layer.declared_count})

            offset = int(params["resultOffset"])
            size = int(params["resultRecordCount"])
            mode = layer.page_failures.get(offset)
            if mode:
                return self._failure(request, mode)
            return httpx.Response(200, json={"features": layer.features[offset:offset + size]})

        mode = self.broken.get(url)
        if mode:
            return self._failure(request, mode)
        layer = self.layers.get(url)
        if layer is None:
            return httpx.Response(
                200,
                json={"error": {"code": 400, "message": "Invalid or missing input parameters."}},
            )
        return httpx.Response(
            200,
            json={
                "name": layer.name,
                "geometryType": "esriGeometryPoint",
                "fields": [{"name": "OBJECTID"}, {"name": "NAME"}, {"name": "STATE"}],
            },
        )


def path_url(request: httpx.Request) -> str:
    """Request URL without its query string."""
    return f"{request.url.scheme}://{request.url.host}{request.url.path}"
