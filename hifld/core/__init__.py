"""
Core package initialization.
"""

from hifld.core.config import Settings, get_settings, settings
from hifld.core.exceptions import (
    BatchFetchError,
    EmptyDatasetError,
    HIFLDError,
    MalformedResponseError,
    NoEndpointAvailableError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "settings",
    # Errors
    "HIFLDError",
    "NoEndpointAvailableError",
    "EmptyDatasetError",
    "MalformedResponseError",
    "BatchFetchError",
]
