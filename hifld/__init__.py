"""
HIFLD fire station pipeline.

Downloads the HIFLD Fire Stations dataset from an ArcGIS feature service,
normalizes it and generates sitemap artifacts for the station pages.
"""

__version__ = "0.1.0"
