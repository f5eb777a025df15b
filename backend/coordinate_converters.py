"""
Coordinate Converters - Turn matched notation fields into decimal degrees
"""

import math
import logging
from typing import Tuple, Union

from models import ParseError

logger = logging.getLogger(__name__)

# WGS84-like ellipsoid used by the inverse Transverse Mercator projection
UTM_SEMI_MAJOR_AXIS = 6378137.0
UTM_ECCENTRICITY = 0.0818192
UTM_E1SQ = 0.006739497
UTM_SCALE_FACTOR = 0.9996
UTM_FALSE_EASTING = 500000.0
UTM_FALSE_NORTHING_SOUTH = 10000000.0


def parse_number(value: Union[str, int, float]) -> float:
    """Parse a numeric capture group, rejecting anything non-finite"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParseError(str(value), "not a number")
    if not math.isfinite(number):
        raise ParseError(str(value))
    return number


def dms_to_decimal(degrees: str, minutes: str, seconds: str) -> float:
    """
    Convert degrees, minutes, seconds to decimal degrees

    No range normalisation is applied: 12, 75, 0 gives 13.25.

    Raises:
        ParseError: if a field is not numeric or the result is not finite
    """
    d = parse_number(degrees)
    m = parse_number(minutes)
    s = parse_number(seconds)
    result = d + m / 60 + s / 3600
    if not math.isfinite(result):
        raise ParseError(f"{degrees} {minutes} {seconds}")
    return result


def convert_utm_to_lat_lon(zone: str, easting: Union[str, int],
                           northing: Union[str, int]) -> Tuple[float, float]:
    """
    Inverse Transverse Mercator projection from UTM to latitude/longitude

    Args:
        zone: Zone number followed by latitude band letter, e.g. '33N'
        easting: Easting in metres
        northing: Northing in metres

    Returns:
        (latitude, longitude) in decimal degrees, good to about a metre
        inside the standard latitude bands. Input far outside a zone's
        usable area (e.g. '1X', 0, 9999999) is not rejected and yields
        values beyond +/-90/+/-180; CoordinateParser(strict_ranges=True)
        filters those out.
    """
    if not zone or len(zone) < 2:
        raise ParseError(str(zone), "zone needs a number and a band letter")
    try:
        zone_number = int(zone[:-1])
    except ValueError:
        raise ParseError(zone, "zone number is not an integer")
    northern_hemisphere = zone[-1].upper() >= 'N'

    k0 = UTM_SCALE_FACTOR
    a = UTM_SEMI_MAJOR_AXIS
    e = UTM_ECCENTRICITY
    e1sq = UTM_E1SQ

    x = parse_number(easting) - UTM_FALSE_EASTING
    y = parse_number(northing)
    if not northern_hemisphere:
        y -= UTM_FALSE_NORTHING_SOUTH

    long_origin = (zone_number - 1) * 6 - 180 + 3

    # Meridian arc and footpoint latitude
    m = y / k0
    mu = m / (a * (1 - math.pow(e, 2) / 4.0 - 3 * math.pow(e, 4) / 64.0 - 5 * math.pow(e, 6) / 256.0))

    # The footpoint series runs on e1, not on the second eccentricity squared
    root = math.sqrt(1 - math.pow(e, 2))
    e1 = (1 - root) / (1 + root)
    phi1_rad = (mu
                + (3 * e1 / 2 - 27 * math.pow(e1, 3) / 32.0) * math.sin(2 * mu)
                + (21 * math.pow(e1, 2) / 16 - 55 * math.pow(e1, 4) / 32.0) * math.sin(4 * mu)
                + (151 * math.pow(e1, 3) / 96.0) * math.sin(6 * mu))

    n1 = a / math.sqrt(1 - math.pow(e * math.sin(phi1_rad), 2))
    t1 = math.pow(math.tan(phi1_rad), 2)
    c1 = e1sq * math.pow(math.cos(phi1_rad), 2)
    r1 = a * (1 - math.pow(e, 2)) / math.pow(1 - math.pow(e * math.sin(phi1_rad), 2), 1.5)
    d = x / (n1 * k0)

    lat = phi1_rad - (n1 * math.tan(phi1_rad) / r1) * (
        d * d / 2
        - (5 + 3 * t1 + 10 * c1 - 4 * c1 * c1 - 9 * e1sq) * math.pow(d, 4) / 24
        + (61 + 90 * t1 + 298 * c1 + 45 * t1 * t1 - 252 * e1sq - 3 * c1 * c1) * math.pow(d, 6) / 720
    )

    lon_offset_rad = (
        d
        - (1 + 2 * t1 + c1) * math.pow(d, 3) / 6
        + (5 - 2 * c1 + 28 * t1 - 3 * c1 * c1 + 8 * e1sq + 24 * t1 * t1) * math.pow(d, 5) / 120
    ) / math.cos(phi1_rad)
    lon = long_origin + math.degrees(lon_offset_rad)

    return math.degrees(lat), lon


def convert_mgrs_to_lat_lon(mgrs: str) -> Tuple[float, float]:
    """
    Placeholder MGRS conversion: always returns (0.0, 0.0)

    Callers must not rely on the result until grid-square decoding exists.
    """
    logger.debug(f"MGRS conversion not implemented, returning (0.0, 0.0) for {mgrs!r}")
    return 0.0, 0.0
