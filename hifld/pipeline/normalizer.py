"""
Normalizer for raw feature service records.

The primary ArcGIS layer and the NASA mirror do not share field names, so
each canonical field is read through a preference chain: the first source
value that is neither None nor an empty string wins, otherwise the default.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from hifld.pipeline.models import StationRecord
from hifld.services.arcgis.models import RawFeature

# Canonical field -> attribute names, in order of preference
FIELD_PREFERENCES: dict[str, tuple[str, ...]] = {
    "id": ("OBJECTID", "FID"),
    "name": ("NAME", "STATION_NAME"),
    "address": ("ADDRESS",),
    "city": ("CITY",),
    "state": ("STATE",),
    "zip": ("ZIP", "ZIP5"),
    "county": ("COUNTY",),
    "type": ("FTYPE", "STATION_TYPE"),
    "phone": ("TELEPHONE",),
    "status": ("STATUS",),
}

STRING_DEFAULTS: dict[str, str] = {
    "name": "Unknown",
    "status": "OPEN",
}


def _is_present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


def first_present(attributes: Mapping[str, Any], keys: Iterable[str]) -> Any:
    """Return the first present attribute value among ``keys``, else None."""
    for key in keys:
        value = attributes.get(key)
        if _is_present(value):
            return value
    return None


def _to_float(value: Any) -> float | None:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _coordinate(geometry: Mapping[str, Any] | None, axis: str, attributes: Mapping[str, Any], attr: str) -> float | None:
    """Geometry axis first, attribute-level coordinate second."""
    if geometry:
        value = _to_float(geometry.get(axis))
        if value is not None:
            return value
    return _to_float(first_present(attributes, (attr,)))


def _identifier(value: Any) -> int | str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return str(value).strip()


def normalize(feature: RawFeature) -> StationRecord:
    """
    Map a raw feature to a canonical station record.

    Total and deterministic: never raises, missing data falls back to
    documented defaults.
    """
    attrs = feature.attributes or {}

    strings: dict[str, str] = {}
    for name, keys in FIELD_PREFERENCES.items():
        if name == "id":
            continue
        value = first_present(attrs, keys)
        strings[name] = str(value).strip() if value is not None else STRING_DEFAULTS.get(name, "")

    return StationRecord(
        id=_identifier(first_present(attrs, FIELD_PREFERENCES["id"])),
        latitude=_coordinate(feature.geometry, "y", attrs, "LATITUDE"),
        longitude=_coordinate(feature.geometry, "x", attrs, "LONGITUDE"),
        **strings,
    )


def normalize_all(features: Iterable[RawFeature]) -> list[StationRecord]:
    """Normalize a feature sequence into a new list, preserving order."""
    return [normalize(f) for f in features]
