import logging
from urllib.parse import quote

from config import Config

logger = logging.getLogger(__name__)

# Characters left unescaped on top of letters, digits and "_.-~"
_URI_SAFE_CHARS = "!*'()"

# ============== Geo-URI Helpers ==============

def format_decimal(value):
    """Render a float for a geo query (shortest round-trip form, e.g. 12.5)"""
    return repr(float(value))


def encode_geo_query(latitude, longitude):
    """Percent-encode a "lat,lon" pair for the q= parameter.

    Strings are used verbatim so a matched decimal pair keeps its exact
    digits; numbers go through format_decimal.
    """
    lat = latitude if isinstance(latitude, str) else format_decimal(latitude)
    lon = longitude if isinstance(longitude, str) else format_decimal(longitude)
    return quote(f"{lat},{lon}", safe=_URI_SAFE_CHARS)


def build_geo_uri(latitude, longitude, prefix=None):
    """Build a geo-URI such as geo:0,0?q=45.1234%2C-122.5678"""
    if prefix is None:
        prefix = Config.GEO_URI_PREFIX
    return f"{prefix}{encode_geo_query(latitude, longitude)}"
