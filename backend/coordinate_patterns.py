"""
Coordinate Patterns - Compiled matchers for the supported notations
Compiled once at import time and shared read-only by every parser instance
"""

import re
from enum import Enum
from typing import Dict, Pattern


class CoordinateNotation(Enum):
    """Supported coordinate notations, in scan order"""

    DMS = "dms"
    DECIMAL_PAIR = "decimal"
    UTM = "utm"
    MGRS = "mgrs"


# Separators between degree/minute/second fields are deliberately loose:
# °, ', ", spaces and commas all have to pass.
DMS_PATTERN = re.compile(
    r'([NS])\s*([0-9]+)[^\d]+([0-9]+)[^\d]+([0-9]+)[^a-zA-Z0-9]+'
    r'([EW])\s*([0-9]+)[^\d]+([0-9]+)[^\d]+([0-9]+)',
    re.ASCII,
)

DECIMAL_PAIR_PATTERN = re.compile(
    r'([-+]?\d{1,2}\.\d+)\s*,\s*([-+]?\d{1,3}\.\d+)',
    re.ASCII,
)

# Zone + latitude band (no I/O), 6-digit easting, 7-digit northing
UTM_PATTERN = re.compile(
    r'(\d{1,2}[C-HJ-NP-X])\s+(\d{6})\s+(\d{7})',
    re.ASCII,
)

# Zone + band, 3-letter square id, then an even digit run split in half
MGRS_PATTERN = re.compile(
    r'(\d{1,2}[C-HJ-NP-X])([A-Z]{3})((?:\d\d){2,5})(?!\d)',
    re.ASCII,
)

PATTERNS: Dict[CoordinateNotation, Pattern] = {
    CoordinateNotation.DMS: DMS_PATTERN,
    CoordinateNotation.DECIMAL_PAIR: DECIMAL_PAIR_PATTERN,
    CoordinateNotation.UTM: UTM_PATTERN,
    CoordinateNotation.MGRS: MGRS_PATTERN,
}

SCAN_ORDER = (
    CoordinateNotation.DMS,
    CoordinateNotation.DECIMAL_PAIR,
    CoordinateNotation.UTM,
    CoordinateNotation.MGRS,
)


def split_mgrs_digits(digits: str) -> tuple:
    """Split an MGRS digit run into equal-length easting and northing"""
    half = len(digits) // 2
    return digits[:half], digits[half:]
