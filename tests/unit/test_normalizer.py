"""
Unit tests for the record normalizer.
"""

from hifld.pipeline.models import StationRecord
from hifld.pipeline.normalizer import first_present, normalize, normalize_all
from hifld.services.arcgis import RawFeature


def feature(geometry=None, **attributes) -> RawFeature:
    return RawFeature(attributes=attributes, geometry=geometry)


class TestFirstPresent:
    def test_skips_none_and_blank(self):
        attrs = {"NAME": "", "STATION_NAME": None, "ALT": "  ", "LAST": "Engine 1"}
        assert first_present(attrs, ("NAME", "STATION_NAME", "ALT", "LAST")) == "Engine 1"

    def test_zero_is_present(self):
        assert first_present({"A": 0}, ("A",)) == 0

    def test_nothing_present(self):
        assert first_present({}, ("A", "B")) is None


class TestNormalize:
    """Test mapping of primary and mirror attribute names."""

    # =========================================================================
    # Field fallbacks
    # =========================================================================

    def test_primary_fields(self):
        record = normalize(
            feature(
                {"x": -122.4, "y": 37.8},
                OBJECTID=17,
                NAME="San Francisco Station 1",
                ADDRESS="935 Folsom St",
                CITY="San Francisco",
                STATE="CA",
                ZIP="94107",
                COUNTY="San Francisco",
                FTYPE="Career",
                TELEPHONE="415-555-0100",
                STATUS="OPEN",
            )
        )
        assert record == StationRecord(
            id=17,
            name="San Francisco Station 1",
            address="935 Folsom St",
            city="San Francisco",
            state="CA",
            zip="94107",
            county="San Francisco",
            type="Career",
            phone="415-555-0100",
            latitude=37.8,
            longitude=-122.4,
            status="OPEN",
        )

    def test_mirror_field_names(self):
        """Mirror layers use FID, STATION_NAME, ZIP5 and STATION_TYPE."""
        record = normalize(
            feature(FID=3, STATION_NAME="Engine 3", ZIP5="10001", STATION_TYPE="Volunteer")
        )
        assert record.id == 3
        assert record.name == "Engine 3"
        assert record.zip == "10001"
        assert record.type == "Volunteer"

    def test_primary_name_preferred(self):
        record = normalize(feature(NAME="Primary", STATION_NAME="Mirror"))
        assert record.name == "Primary"

    def test_empty_primary_falls_back(self):
        """An empty string does not count as present."""
        record = normalize(feature(NAME="", STATION_NAME="Mirror", ZIP=None, ZIP5="60601"))
        assert record.name == "Mirror"
        assert record.zip == "60601"

    def test_defaults(self):
        record = normalize(feature())
        assert record.id is None
        assert record.name == "Unknown"
        assert record.status == "OPEN"
        assert record.address == ""
        assert record.state == ""
        assert record.latitude is None
        assert record.longitude is None

    def test_strings_are_stripped_and_stringified(self):
        record = normalize(feature(NAME="  Station 9  ", ZIP=2134))
        assert record.name == "Station 9"
        assert record.zip == "2134"

    def test_float_identifier(self):
        assert normalize(feature(OBJECTID=42.0)).id == 42

    # =========================================================================
    # Coordinates
    # =========================================================================

    def test_geometry_preferred_over_attributes(self):
        record = normalize(feature({"x": -80.1, "y": 25.7}, LATITUDE=1.0, LONGITUDE=2.0))
        assert record.latitude == 25.7
        assert record.longitude == -80.1

    def test_attribute_coordinates_without_geometry(self):
        record = normalize(feature(LATITUDE="39.74", LONGITUDE="-104.99"))
        assert record.latitude == 39.74
        assert record.longitude == -104.99

    def test_zero_coordinate_is_kept(self):
        record = normalize(feature({"x": 0.0, "y": 0.0}, LATITUDE=5.0, LONGITUDE=5.0))
        assert record.latitude == 0.0
        assert record.longitude == 0.0

    def test_invalid_geometry_falls_back(self):
        record = normalize(feature({"x": "NaN", "y": None}, LATITUDE=10.5, LONGITUDE=-20.5))
        assert record.latitude == 10.5
        assert record.longitude == -20.5

    def test_unparseable_coordinates(self):
        record = normalize(feature(LATITUDE="north", LONGITUDE=""))
        assert record.latitude is None
        assert record.longitude is None

    # =========================================================================
    # Collections
    # =========================================================================

    def test_deterministic(self):
        raw = feature({"x": 1.5, "y": 2.5}, OBJECTID=1, NAME="A", STATE="TX")
        assert normalize(raw) == normalize(raw)

    def test_normalize_all_preserves_order(self):
        features = [feature(OBJECTID=i, NAME=f"S{i}") for i in (3, 1, 2)]
        records = normalize_all(features)
        assert [r.id for r in records] == [3, 1, 2]
        assert isinstance(records, list)

    def test_from_json_without_geometry(self):
        raw = RawFeature.from_json({"attributes": {"NAME": "X"}})
        assert raw.geometry is None
        assert normalize(raw).name == "X"
