"""
Core configuration and settings for the HIFLD pipeline.
"""

import json
from functools import lru_cache
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "HIFLD Fire Stations Pipeline"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # ArcGIS feature service (primary provider)
    arcgis_base_url: str = (
        "https://services1.arcgis.com/Hp6G80Pky0om7QvQ/ArcGIS/rest/services"
    )
    arcgis_service_names: Annotated[list[str], NoDecode] = Field(
        default=[
            "Fire_Stations",
            "Fire_Station",
            "FireStations",
            "Fire_Stations_1",
            "HIFLD_Fire_Stations",
        ]
    )

    # NASA NCCS mirror of HIFLD (secondary provider)
    mirror_url: str = (
        "https://maps.nccs.nasa.gov/mapping/rest/services/"
        "hifld_open/emergency_services/MapServer/0"
    )

    # Fetching
    request_timeout: float = 60.0
    batch_size: int = 2000  # ArcGIS per-request ceiling
    batch_delay: float = 0.5  # courtesy delay between batches
    user_agent: str = "HIFLDPipeline/1.0 (Fire Department Sitemap Tool)"

    # Storage
    output_dir: str = "./data/fire-departments"
    web_dir: str = "./web"

    # Sitemaps
    site_url: str = "https://spaceorbust.com"
    sitemap_basename: str = "sitemap-fire-departments"
    sitemap_max_urls: int = 45000  # stays under the 50000 protocol ceiling
    crawl_delay: int = 1

    @field_validator("arcgis_service_names", mode="before")
    @classmethod
    def parse_service_names(cls, v: Any) -> list[str]:
        """Parse service names from JSON string if needed."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, treat as comma-separated
                return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("site_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("batch_size", "sitemap_max_urls")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
