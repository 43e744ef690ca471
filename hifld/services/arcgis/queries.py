"""
ArcGIS Module - REST Query Parameters.

Query parameter sets for the feature service REST convention.
"""

WGS84 = 4326

METADATA_PARAMS = {"f": "json"}

COUNT_PARAMS = {
    "where": "1=1",
    "returnCountOnly": "true",
    "f": "json",
}


def page_params(offset: int, batch_size: int) -> dict[str, str]:
    """Parameters for one page of features with geometry in WGS84."""
    return {
        "where": "1=1",
        "outFields": "*",
        "returnGeometry": "true",
        "outSR": str(WGS84),
        "resultOffset": str(offset),
        "resultRecordCount": str(batch_size),
        "f": "json",
    }
