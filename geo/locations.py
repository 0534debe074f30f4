"""
Purpose: Offline place lookup for free-text locations.
What it does:
- Holds a static table of U.S. states (abbreviation + full name) and major
  freight cities mapped to representative coordinates.
- Resolves a free-text string against that table (exact, partial, city part,
  state part).
- Knows which regions may be sent to the external geocoder when the table
  has no answer.

Rule: No HTTP and no caching here.
"""

from __future__ import annotations

import re
from typing import Dict, Optional, Tuple

from .distance import Coordinate

# Keys shorter than this only ever match exactly ("fl", "tx"), otherwise
# "ma" would match "omaha".
MIN_PARTIAL_LENGTH = 3


def _state(abbr: str, name: str, lat: float, lng: float, **cities: Tuple[float, float]):
    entries = {abbr: (lat, lng), name: (lat, lng)}
    for city, point in cities.items():
        entries[city.replace("_", " ")] = point
    return entries


_RAW_TABLE: Dict[str, Tuple[float, float]] = {}
for _entries in (
    _state("al", "alabama", 32.806671, -86.791130,
           birmingham=(33.5186, -86.8104), montgomery=(32.3668, -86.3000), mobile=(30.6954, -88.0399), huntsville=(34.7304, -86.5861)),
    _state("az", "arizona", 33.729759, -111.431221,
           phoenix=(33.4484, -112.0740), tucson=(32.2226, -110.9747), flagstaff=(35.1983, -111.6513)),
    _state("ar", "arkansas", 34.969704, -92.373123,
           little_rock=(34.7465, -92.2896)),
    _state("ca", "california", 36.116203, -119.681564,
           los_angeles=(34.0522, -118.2437), san_francisco=(37.7749, -122.4194),
           san_diego=(32.7157, -117.1611), sacramento=(38.5816, -121.4944), fresno=(36.7378, -119.7871),
           oakland=(37.8044, -122.2712), bakersfield=(35.3733, -119.0187), stockton=(37.9577, -121.2908)),
    _state("co", "colorado", 39.059811, -105.311104,
           denver=(39.7392, -104.9903), colorado_springs=(38.8339, -104.8214)),
    _state("fl", "florida", 27.766279, -81.686783,
           miami=(25.7617, -80.1918), orlando=(28.5383, -81.3792),
           tampa=(27.9506, -82.4572), jacksonville=(30.3322, -81.6557)),
    _state("ga", "georgia", 33.040619, -83.643074,
           atlanta=(33.7490, -84.3880), savannah=(32.0809, -81.0912), macon=(32.8407, -83.6324)),
    _state("il", "illinois", 40.349457, -88.986137,
           chicago=(41.8781, -87.6298), joliet=(41.5250, -88.0817), peoria=(40.6936, -89.5890)),
    _state("in", "indiana", 39.849426, -86.258278,
           indianapolis=(39.7684, -86.1581), fort_wayne=(41.0793, -85.1394)),
    _state("ks", "kansas", 38.526600, -96.726486,
           wichita=(37.6872, -97.3301)),
    _state("ky", "kentucky", 37.668140, -84.670067,
           louisville=(38.2527, -85.7585), lexington=(38.0406, -84.5037)),
    _state("la", "louisiana", 31.169546, -91.867805,
           new_orleans=(29.9511, -90.0715), baton_rouge=(30.4515, -91.1871)),
    _state("md", "maryland", 39.063946, -76.802101,
           baltimore=(39.2904, -76.6122)),
    _state("ma", "massachusetts", 42.230171, -71.530106,
           boston=(42.3601, -71.0589)),
    _state("mi", "michigan", 43.326618, -84.536095,
           detroit=(42.3314, -83.0458), grand_rapids=(42.9634, -85.6681)),
    _state("mn", "minnesota", 45.694454, -93.900192,
           minneapolis=(44.9778, -93.2650), duluth=(46.7867, -92.1005)),
    _state("ms", "mississippi", 32.741646, -89.678696,
           jackson=(32.2988, -90.1848)),
    _state("mo", "missouri", 38.456085, -92.288368,
           kansas_city=(39.0997, -94.5786), st_louis=(38.6270, -90.1994), springfield=(37.2090, -93.2923)),
    _state("nv", "nevada", 38.313515, -117.055374,
           las_vegas=(36.1699, -115.1398), reno=(39.5296, -119.8138)),
    _state("nj", "new jersey", 40.298904, -74.521011,
           newark=(40.7357, -74.1724)),
    _state("ny", "new york state", 42.165726, -74.948051,
           new_york=(40.7128, -74.0060), buffalo=(42.8864, -78.8784)),
    _state("nc", "north carolina", 35.630066, -79.806419,
           charlotte=(35.2271, -80.8431), raleigh=(35.7796, -78.6382), greensboro=(36.0726, -79.7920)),
    _state("oh", "ohio", 40.388783, -82.764915,
           columbus=(39.9612, -82.9988), cleveland=(41.4993, -81.6944), cincinnati=(39.1031, -84.5120), toledo=(41.6528, -83.5379)),
    _state("ok", "oklahoma", 35.565342, -96.928917,
           oklahoma_city=(35.4676, -97.5164), tulsa=(36.1540, -95.9928)),
    _state("or", "oregon", 44.572021, -122.070938,
           portland=(45.5152, -122.6784)),
    _state("pa", "pennsylvania", 40.590752, -77.209755,
           philadelphia=(39.9526, -75.1652), pittsburgh=(40.4406, -79.9959),
           allentown=(40.6084, -75.4902), harrisburg=(40.2732, -76.8867)),
    _state("sc", "south carolina", 33.856892, -80.945007,
           charleston=(32.7765, -79.9311), columbia=(34.0007, -81.0348)),
    _state("tn", "tennessee", 35.747845, -86.692345,
           nashville=(36.1627, -86.7816), memphis=(35.1495, -90.0490), knoxville=(35.9606, -83.9207), chattanooga=(35.0456, -85.3097)),
    _state("tx", "texas", 31.054487, -97.563461,
           houston=(29.7604, -95.3698), dallas=(32.7767, -96.7970), san_antonio=(29.4241, -98.4936),
           austin=(30.2672, -97.7431), el_paso=(31.7619, -106.4850), fort_worth=(32.7555, -97.3308),
           laredo=(27.5306, -99.4803), amarillo=(35.2220, -101.8313)),
    _state("ut", "utah", 40.150032, -111.862434,
           salt_lake_city=(40.7608, -111.8910)),
    _state("va", "virginia", 37.769337, -78.169968,
           richmond=(37.5407, -77.4360), norfolk=(36.8508, -76.2859), roanoke=(37.2710, -79.9414)),
    _state("wa", "washington", 47.400902, -121.490494,
           seattle=(47.6062, -122.3321), spokane=(47.6588, -117.4260), tacoma=(47.2529, -122.4443)),
    _state("wi", "wisconsin", 44.268543, -89.616508,
           milwaukee=(43.0389, -87.9065)),
):
    _RAW_TABLE.update(_entries)

FALLBACK_COORDINATES: Dict[str, Coordinate] = {
    key: Coordinate(lat, lng) for key, (lat, lng) in _RAW_TABLE.items()
}

# Regions the static table does not cover and for which we are allowed to
# call the external geocoder: abbreviation -> full name.
GEOCODING_ENABLED_REGIONS: Dict[str, str] = {
    "ia": "iowa",
    "id": "idaho",
    "mt": "montana",
    "nm": "new mexico",
    "wy": "wyoming",
    "nd": "north dakota",
    "sd": "south dakota",
    "nh": "new hampshire",
    "vt": "vermont",
    "ri": "rhode island",
    "ct": "connecticut",
}

_TOKEN = re.compile(r"[a-z]+")


def normalize_location(text: Optional[str]) -> str:
    return (text or "").strip().lower()


def _partial_lookup(text: str) -> Optional[Coordinate]:
    if len(text) < MIN_PARTIAL_LENGTH:
        return None

    # longest contained key wins so "arkansas" beats "kansas"
    contained = [
        key for key in FALLBACK_COORDINATES
        if len(key) >= MIN_PARTIAL_LENGTH and key in text
    ]
    if contained:
        return FALLBACK_COORDINATES[max(contained, key=len)]

    for key, point in FALLBACK_COORDINATES.items():
        if len(key) >= MIN_PARTIAL_LENGTH and text in key:
            return point
    return None


def _table_lookup(text: str) -> Optional[Coordinate]:
    if not text:
        return None
    if text in FALLBACK_COORDINATES:
        return FALLBACK_COORDINATES[text]
    return _partial_lookup(text)


def lookup_fallback(location: Optional[str]) -> Optional[Coordinate]:
    """
    Resolve a free-text location against the static table.

    Order: exact, partial, city part (before the first comma),
    state part (after the last comma). None if nothing fits.
    """
    text = normalize_location(location)
    if not text:
        return None

    point = _table_lookup(text)
    if point is not None:
        return point

    if "," in text:
        city = text.split(",", 1)[0].strip()
        point = _table_lookup(city)
        if point is not None:
            return point

        state = text.rsplit(",", 1)[1].strip()
        point = _table_lookup(state)
        if point is not None:
            return point

    return None


def is_geocoding_enabled(location: Optional[str]) -> bool:
    """
    True if the text names one of the regions we may send to the geocoder,
    either by its abbreviation as the trailing state part ("Billings, MT",
    "Billings MT") or by its full name ("Boise, Idaho").
    A leading "Mt" as in "Mt Vernon, NE" does not count.
    """
    text = normalize_location(location)
    if not text:
        return False

    tokens = _TOKEN.findall(text)
    last_token = tokens[-1] if tokens else ""
    state_part = text.rsplit(",", 1)[1].strip() if "," in text else ""
    for abbr, name in GEOCODING_ENABLED_REGIONS.items():
        if abbr in (last_token, state_part) or name in text:
            return True
    return False
