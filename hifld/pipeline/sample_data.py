"""
Sample fire station data.

Deterministic stand-in dataset for exercising the sitemap job and writers
without hitting the feature service. Output goes through the regular
StationWriter so downstream steps cannot tell it apart from a real download.
"""

import random
from pathlib import Path

import structlog

from hifld.pipeline.models import StationRecord, WrittenPaths
from hifld.pipeline.writer import StationWriter

logger = structlog.get_logger()

SAMPLE_SOURCE = "SAMPLE DATA - Replace with HIFLD for production"

# Representative cities per state
SAMPLE_CITIES: dict[str, tuple[str, ...]] = {
    "AL": ("Birmingham", "Montgomery", "Huntsville", "Mobile", "Tuscaloosa"),
    "AK": ("Anchorage", "Fairbanks", "Juneau", "Sitka", "Ketchikan"),
    "AZ": ("Phoenix", "Tucson", "Mesa", "Chandler", "Scottsdale"),
    "AR": ("Little Rock", "Fort Smith", "Fayetteville", "Springdale", "Jonesboro"),
    "CA": ("Los Angeles", "San Diego", "San Francisco", "San Jose", "Sacramento", "Oakland", "Fresno", "Long Beach"),
    "CO": ("Denver", "Colorado Springs", "Aurora", "Fort Collins", "Boulder"),
    "CT": ("Bridgeport", "New Haven", "Hartford", "Stamford", "Waterbury"),
    "DE": ("Wilmington", "Dover", "Newark", "Middletown", "Smyrna"),
    "FL": ("Jacksonville", "Miami", "Tampa", "Orlando", "St. Petersburg", "Hialeah", "Tallahassee"),
    "GA": ("Atlanta", "Augusta", "Columbus", "Savannah", "Athens"),
    "HI": ("Honolulu", "Pearl City", "Hilo", "Kailua", "Waipahu"),
    "ID": ("Boise", "Meridian", "Nampa", "Idaho Falls", "Pocatello"),
    "IL": ("Chicago", "Aurora", "Naperville", "Rockford", "Joliet", "Springfield"),
    "IN": ("Indianapolis", "Fort Wayne", "Evansville", "South Bend", "Carmel"),
    "IA": ("Des Moines", "Cedar Rapids", "Davenport", "Sioux City", "Iowa City"),
    "KS": ("Wichita", "Overland Park", "Kansas City", "Olathe", "Topeka", "Lawrence"),
    "KY": ("Louisville", "Lexington", "Bowling Green", "Owensboro", "Covington"),
    "LA": ("New Orleans", "Baton Rouge", "Shreveport", "Lafayette", "Lake Charles"),
    "ME": ("Portland", "Lewiston", "Bangor", "South Portland", "Auburn"),
    "MD": ("Baltimore", "Frederick", "Rockville", "Gaithersburg", "Bowie"),
    "MA": ("Boston", "Worcester", "Springfield", "Cambridge", "Lowell"),
    "MI": ("Detroit", "Grand Rapids", "Warren", "Sterling Heights", "Ann Arbor", "Lansing"),
    "MN": ("Minneapolis", "St. Paul", "Rochester", "Duluth", "Bloomington"),
    "MS": ("Jackson", "Gulfport", "Southaven", "Hattiesburg", "Biloxi"),
    "MO": ("Kansas City", "St. Louis", "Springfield", "Independence", "Columbia", "Lee's Summit"),
    "MT": ("Billings", "Missoula", "Great Falls", "Bozeman", "Butte"),
    "NE": ("Omaha", "Lincoln", "Bellevue", "Grand Island", "Kearney"),
    "NV": ("Las Vegas", "Henderson", "Reno", "North Las Vegas", "Sparks"),
    "NH": ("Manchester", "Nashua", "Concord", "Derry", "Dover"),
    "NJ": ("Newark", "Jersey City", "Paterson", "Elizabeth", "Trenton"),
    "NM": ("Albuquerque", "Las Cruces", "Rio Rancho", "Santa Fe", "Roswell"),
    "NY": ("New York", "Buffalo", "Rochester", "Yonkers", "Syracuse", "Albany"),
    "NC": ("Charlotte", "Raleigh", "Greensboro", "Durham", "Winston-Salem", "Fayetteville"),
    "ND": ("Fargo", "Bismarck", "Grand Forks", "Minot", "West Fargo"),
    "OH": ("Columbus", "Cleveland", "Cincinnati", "Toledo", "Akron", "Dayton"),
    "OK": ("Oklahoma City", "Tulsa", "Norman", "Broken Arrow", "Lawton"),
    "OR": ("Portland", "Salem", "Eugene", "Gresham", "Hillsboro", "Bend"),
    "PA": ("Philadelphia", "Pittsburgh", "Allentown", "Reading", "Erie", "Scranton"),
    "RI": ("Providence", "Warwick", "Cranston", "Pawtucket", "East Providence"),
    "SC": ("Charleston", "Columbia", "North Charleston", "Mount Pleasant", "Rock Hill"),
    "SD": ("Sioux Falls", "Rapid City", "Aberdeen", "Brookings", "Watertown"),
    "TN": ("Nashville", "Memphis", "Knoxville", "Chattanooga", "Clarksville"),
    "TX": ("Houston", "San Antonio", "Dallas", "Austin", "Fort Worth", "El Paso", "Arlington", "Plano"),
    "UT": ("Salt Lake City", "West Valley City", "Provo", "West Jordan", "Orem"),
    "VT": ("Burlington", "South Burlington", "Rutland", "Barre", "Montpelier"),
    "VA": ("Virginia Beach", "Norfolk", "Chesapeake", "Richmond", "Newport News", "Alexandria"),
    "WA": ("Seattle", "Spokane", "Tacoma", "Vancouver", "Bellevue", "Kent"),
    "WV": ("Charleston", "Huntington", "Morgantown", "Parkersburg", "Wheeling"),
    "WI": ("Milwaukee", "Madison", "Green Bay", "Kenosha", "Racine"),
    "WY": ("Cheyenne", "Casper", "Laramie", "Gillette", "Rock Springs"),
    "DC": ("Washington",),
}

# Approximate (lat, lon) bounding boxes per state
STATE_BOUNDS: dict[str, tuple[tuple[float, float], tuple[float, float]]] = {
    "AL": ((30.2, 35.0), (-88.5, -84.9)),
    "AK": ((54.0, 71.4), (-179.1, -129.9)),
    "AZ": ((31.3, 37.0), (-114.8, -109.0)),
    "AR": ((33.0, 36.5), (-94.6, -89.6)),
    "CA": ((32.5, 42.0), (-124.4, -114.1)),
    "CO": ((37.0, 41.0), (-109.0, -102.0)),
    "CT": ((41.0, 42.1), (-73.7, -71.8)),
    "DE": ((38.4, 39.8), (-75.8, -75.0)),
    "FL": ((24.5, 31.0), (-87.6, -80.0)),
    "GA": ((30.4, 35.0), (-85.6, -80.8)),
    "HI": ((18.9, 22.2), (-160.2, -154.8)),
    "ID": ((42.0, 49.0), (-117.2, -111.0)),
    "IL": ((36.9, 42.5), (-91.5, -87.0)),
    "IN": ((37.8, 41.8), (-88.1, -84.8)),
    "IA": ((40.4, 43.5), (-96.6, -90.1)),
    "KS": ((37.0, 40.0), (-102.1, -94.6)),
    "KY": ((36.5, 39.1), (-89.6, -82.0)),
    "LA": ((29.0, 33.0), (-94.0, -89.0)),
    "ME": ((43.0, 47.5), (-71.1, -66.9)),
    "MD": ((37.9, 39.7), (-79.5, -75.0)),
    "MA": ((41.2, 42.9), (-73.5, -69.9)),
    "MI": ((41.7, 48.3), (-90.4, -82.1)),
    "MN": ((43.5, 49.4), (-97.2, -89.5)),
    "MS": ((30.2, 35.0), (-91.7, -88.1)),
    "MO": ((36.0, 40.6), (-95.8, -89.1)),
    "MT": ((44.4, 49.0), (-116.0, -104.0)),
    "NE": ((40.0, 43.0), (-104.1, -95.3)),
    "NV": ((35.0, 42.0), (-120.0, -114.0)),
    "NH": ((42.7, 45.3), (-72.6, -70.7)),
    "NJ": ((38.9, 41.4), (-75.6, -73.9)),
    "NM": ((31.3, 37.0), (-109.0, -103.0)),
    "NY": ((40.5, 45.0), (-79.8, -71.9)),
    "NC": ((33.8, 36.6), (-84.3, -75.5)),
    "ND": ((45.9, 49.0), (-104.0, -96.6)),
    "OH": ((38.4, 42.0), (-84.8, -80.5)),
    "OK": ((33.6, 37.0), (-103.0, -94.4)),
    "OR": ((42.0, 46.3), (-124.6, -116.5)),
    "PA": ((39.7, 42.3), (-80.5, -74.7)),
    "RI": ((41.1, 42.0), (-71.9, -71.1)),
    "SC": ((32.0, 35.2), (-83.4, -78.5)),
    "SD": ((42.5, 45.9), (-104.1, -96.4)),
    "TN": ((35.0, 36.7), (-90.3, -81.6)),
    "TX": ((25.8, 36.5), (-106.6, -93.5)),
    "UT": ((37.0, 42.0), (-114.1, -109.0)),
    "VT": ((42.7, 45.0), (-73.4, -71.5)),
    "VA": ((36.5, 39.5), (-83.7, -75.2)),
    "WA": ((45.5, 49.0), (-124.8, -116.9)),
    "WV": ((37.2, 40.6), (-82.6, -77.7)),
    "WI": ((42.5, 47.1), (-92.9, -86.8)),
    "WY": ((41.0, 45.0), (-111.1, -104.1)),
    "DC": ((38.8, 39.0), (-77.1, -76.9)),
}

DEFAULT_BOUNDS = ((30.0, 45.0), (-120.0, -75.0))

DEPARTMENT_PATTERNS = (
    "{city} Fire Department",
    "{city} Fire-Rescue",
    "{city} Fire District",
    "{city} Volunteer Fire Department",
    "{city} Fire Protection District",
)

STATION_TYPES = ("Career", "Volunteer", "Combination", "Paid")


def random_coordinates(rng: random.Random, state: str) -> tuple[float, float]:
    (lat_min, lat_max), (lon_min, lon_max) = STATE_BOUNDS.get(state, DEFAULT_BOUNDS)
    lat = lat_min + rng.random() * (lat_max - lat_min)
    lon = lon_min + rng.random() * (lon_max - lon_min)
    return round(lat, 6), round(lon, 6)


def city_stations(rng: random.Random, city: str, state: str, start_id: int) -> list[StationRecord]:
    """1-3 stations for one city; later stations get a " - Station N" suffix."""
    stations = []
    for i in range(rng.randint(1, 3)):
        name = rng.choice(DEPARTMENT_PATTERNS).format(city=city)
        if i > 0:
            name = f"{name} - Station {i + 1}"
        lat, lon = random_coordinates(rng, state)
        stations.append(
            StationRecord(
                id=start_id + i,
                name=name,
                address=f"{rng.randint(100, 9999)} Main Street",
                city=city,
                state=state,
                zip=str(rng.randint(10000, 99998)),
                county=f"{city} County",
                type=rng.choice(STATION_TYPES),
                phone="",
                latitude=lat,
                longitude=lon,
                status="OPEN",
            )
        )
    return stations


def generate_sample_stations(seed: int | None = None) -> list[StationRecord]:
    """Generate the sample dataset. The same seed yields the same records."""
    rng = random.Random(seed)
    stations: list[StationRecord] = []
    next_id = 1
    for state, cities in SAMPLE_CITIES.items():
        for city in cities:
            batch = city_stations(rng, city, state, next_id)
            stations.extend(batch)
            next_id += len(batch)
    return stations


def write_sample_data(output_dir: Path, seed: int | None = None) -> tuple[list[StationRecord], WrittenPaths]:
    stations = generate_sample_stations(seed)
    logger.info("Generated sample fire stations", stations=len(stations), seed=seed)
    paths = StationWriter(output_dir).write(
        stations,
        source=SAMPLE_SOURCE,
        extra_metadata={
            "note": "This is sample data for testing the sitemap generator",
            "seed": seed,
        },
    )
    return stations, paths
