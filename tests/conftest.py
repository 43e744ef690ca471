"""
Pytest configuration and fixtures for HIFLD pipeline tests.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

from hifld.core.config import Settings
from hifld.services.arcgis import ArcGISClient, ProviderKind, ServiceEndpoint
from tests.fakes import LAYER_URL, MIRROR_URL, PRIMARY_BASE, FakeFeatureService


@pytest.fixture
def service() -> FakeFeatureService:
    return FakeFeatureService()


@pytest_asyncio.fixture
async def arcgis_client(service: FakeFeatureService) -> AsyncGenerator[ArcGISClient, None]:
    """ArcGIS client wired to the fake service."""
    async with httpx.AsyncClient(transport=service.transport) as http:
        yield ArcGISClient(http, timeout=5.0)


@pytest.fixture
def endpoint() -> ServiceEndpoint:
    return ServiceEndpoint(
        provider=ProviderKind.PRIMARY,
        identifier="Fire_Stations",
        base_url=LAYER_URL,
        schema_info={"name": "Fire_Stations"},
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing at the fake service and temp directories, no delay."""
    return Settings(
        arcgis_base_url=PRIMARY_BASE,
        arcgis_service_names=["Fire_Stations", "Fire_Station"],
        mirror_url=MIRROR_URL,
        batch_size=2000,
        batch_delay=0.0,
        output_dir=str(tmp_path / "data"),
        web_dir=str(tmp_path / "web"),
        site_url="https://example.test",
    )
