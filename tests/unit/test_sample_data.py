"""
Unit tests for the sample dataset generator.
"""

import json
import random

from hifld.pipeline.sample_data import (
    SAMPLE_CITIES,
    SAMPLE_SOURCE,
    STATE_BOUNDS,
    city_stations,
    generate_sample_stations,
    random_coordinates,
    write_sample_data,
)
from hifld.pipeline.writer import STATIONS_JSON


class TestSampleData:
    """Test reproducibility and shape of sample stations."""

    def test_same_seed_same_records(self):
        assert generate_sample_stations(seed=7) == generate_sample_stations(seed=7)

    def test_every_state_covered(self):
        stations = generate_sample_stations(seed=1)
        assert {s.state for s in stations} == set(SAMPLE_CITIES)
        assert "DC" in SAMPLE_CITIES

    def test_ids_sequential(self):
        stations = generate_sample_stations(seed=1)
        assert [s.id for s in stations] == list(range(1, len(stations) + 1))

    def test_stations_per_city(self):
        stations = city_stations(random.Random(3), "Boise", "ID", start_id=10)
        assert 1 <= len(stations) <= 3
        assert stations[0].id == 10
        assert all(s.city == "Boise" and s.state == "ID" for s in stations)
        for i, station in enumerate(stations[1:], start=2):
            assert station.name.endswith(f" - Station {i}")

    def test_coordinates_within_state_bounds(self):
        rng = random.Random(5)
        (lat_min, lat_max), (lon_min, lon_max) = STATE_BOUNDS["CO"]
        for _ in range(50):
            lat, lon = random_coordinates(rng, "CO")
            assert lat_min <= lat <= lat_max
            assert lon_min <= lon <= lon_max

    def test_write_sample_data(self, tmp_path):
        stations, paths = write_sample_data(tmp_path, seed=2)

        assert paths.failed == []
        data = json.loads((tmp_path / STATIONS_JSON).read_text(encoding="utf-8"))
        assert data["metadata"]["source"] == SAMPLE_SOURCE
        assert data["metadata"]["seed"] == 2
        assert data["metadata"]["total_records"] == len(stations)
