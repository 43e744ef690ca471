"""
Unit tests for the sitemap job.
"""

from datetime import date

import pytest

from hifld.pipeline.models import StationRecord
from hifld.pipeline.sitemap_job import generate_sitemaps
from hifld.pipeline.writer import STATIONS_JSON, StationWriter

SITE = "https://example.test"
RUN_DATE = date(2025, 3, 14)


def write_stations(data_dir, count: int) -> None:
    stations = [StationRecord(id=i, name=f"Station {i}", state="TX") for i in range(count)]
    StationWriter(data_dir).write(stations)


class TestGenerateSitemaps:
    """Test the files written into the web directory."""

    def test_missing_station_data(self, tmp_path):
        """Only the main sitemap is produced when no station file exists."""
        web = tmp_path / "web"
        report = generate_sitemaps(tmp_path / "data", web, SITE, run_date=RUN_DATE)

        assert report.main_urls == 4
        assert report.station_urls == 0
        assert [p.name for p in report.documents] == ["sitemap.xml"]
        robots = (web / "robots.txt").read_text(encoding="utf-8")
        assert f"Sitemap: {SITE}/sitemap.xml" in robots
        assert "sitemap-fire-departments" not in robots

    def test_station_sitemap(self, tmp_path):
        write_stations(tmp_path / "data", 3)
        web = tmp_path / "web"

        report = generate_sitemaps(tmp_path / "data", web, SITE + "/", run_date=RUN_DATE)

        # one state index page + three stations
        assert report.station_urls == 4
        assert not report.sharded
        assert (web / "sitemap.xml").exists()
        assert (web / "sitemap-fire-departments.xml").exists()
        robots = (web / "robots.txt").read_text(encoding="utf-8")
        assert f"Sitemap: {SITE}/sitemap-fire-departments.xml" in robots
        assert report.errors == []

    def test_sharded_station_sitemap(self, tmp_path):
        write_stations(tmp_path / "data", 5)
        web = tmp_path / "web"

        report = generate_sitemaps(
            tmp_path / "data",
            web,
            SITE,
            max_per_document=2,
            run_date=RUN_DATE,
        )

        assert report.sharded
        assert [p.name for p in report.documents] == [
            "sitemap.xml",
            "sitemap-fire-departments-1.xml",
            "sitemap-fire-departments-2.xml",
            "sitemap-fire-departments-3.xml",
            "sitemap-fire-departments.xml",
        ]
        index = (web / "sitemap-fire-departments.xml").read_text(encoding="utf-8")
        assert "<sitemapindex" in index

    def test_custom_basename(self, tmp_path):
        write_stations(tmp_path / "data", 1)
        report = generate_sitemaps(
            tmp_path / "data", tmp_path / "web", SITE, basename="sitemap-stations", run_date=RUN_DATE
        )
        assert report.documents[-1].name == "sitemap-stations.xml"

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            '{"stations": [1]}',
            '[{"name": "Station 1"}]',
            '{"stations": {"name": "Station 1"}}',
        ],
    )
    def test_unreadable_station_data(self, tmp_path, content):
        """Bad station data is reported; the main sitemap and robots.txt are still written."""
        data = tmp_path / "data"
        data.mkdir()
        (data / STATIONS_JSON).write_text(content, encoding="utf-8")

        report = generate_sitemaps(data, tmp_path / "web", SITE, run_date=RUN_DATE)

        assert report.station_urls == 0
        assert len(report.errors) == 1
        assert (tmp_path / "web" / "sitemap.xml").exists()
        assert (tmp_path / "web" / "robots.txt").exists()

    def test_unusable_web_dir(self, tmp_path):
        """Write failures are reported instead of aborting the job."""
        write_stations(tmp_path / "data", 2)
        blocker = tmp_path / "web"
        blocker.write_text("not a directory", encoding="utf-8")

        report = generate_sitemaps(tmp_path / "data", blocker, SITE, run_date=RUN_DATE)

        assert report.documents == []
        assert report.robots_path is None
        assert len(report.errors) == 2
        assert report.station_urls == 3
