#!/usr/bin/env python3
"""
Coordinate Parser - Find geographic coordinates in free text and build geo-URIs
Supports DMS, decimal degree pairs, UTM and MGRS notations
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from config import Config
from coordinate_converters import (
    convert_mgrs_to_lat_lon,
    convert_utm_to_lat_lon,
    dms_to_decimal,
    parse_number,
)
from coordinate_patterns import PATTERNS, SCAN_ORDER, CoordinateNotation, split_mgrs_digits
from models import (
    CoordinateMatch,
    DecimalCoordinate,
    GeoReference,
    LinkifiedText,
    LinkSpan,
    ParseError,
)
from utils import build_geo_uri

logger = logging.getLogger(__name__)


class CoordinateParser:
    """Extract coordinate substrings from text and turn them into geo references"""

    def __init__(self, strict_ranges: Optional[bool] = None, uri_prefix: Optional[str] = None):
        self.patterns = PATTERNS
        self.strict_ranges = Config.STRICT_RANGES if strict_ranges is None else strict_ranges
        self.uri_prefix = Config.GEO_URI_PREFIX if uri_prefix is None else uri_prefix
        self._converters: Dict[CoordinateNotation, Callable] = {
            CoordinateNotation.DMS: self._convert_dms,
            CoordinateNotation.DECIMAL_PAIR: self._convert_decimal_pair,
            CoordinateNotation.UTM: self._convert_utm,
            CoordinateNotation.MGRS: self._convert_mgrs,
        }

    # ============== Matching ==============

    def find_matches(self, text: str, notation: CoordinateNotation) -> List[CoordinateMatch]:
        """Scan text left to right with a single notation's pattern"""
        if not text:
            return []

        matches = []
        for m in self.patterns[notation].finditer(text):
            groups = m.groups()
            if notation is CoordinateNotation.MGRS:
                zone, square, digits = groups
                groups = (zone, square) + split_mgrs_digits(digits)
            matches.append(CoordinateMatch(
                notation=notation,
                text=m.group(0),
                groups=tuple(groups),
                start=m.start(),
                end=m.end(),
            ))
        return matches

    def find_all_matches(self, text: str) -> List[CoordinateMatch]:
        """All matches for every notation, notation by notation"""
        matches = []
        for notation in SCAN_ORDER:
            found = self.find_matches(text, notation)
            if found:
                logger.debug(f"{notation.value}: {len(found)} match(es)")
            matches.extend(found)
        return matches

    def extract(self, text: Optional[str]) -> str:
        """
        Reduce text to its coordinate substrings

        Args:
            text: Arbitrary user text

        Returns:
            Every matched substring followed by a newline, DMS first, then
            decimal pairs, UTM and MGRS. Empty string when nothing matched.
        """
        normalized, _ = self.extract_with_matches(text)
        return normalized

    def extract_with_matches(self, text: Optional[str]) -> Tuple[str, List[CoordinateMatch]]:
        """Like extract(), also returning the matches the text was built from"""
        matches = self.find_all_matches(text or "")
        return "".join(f"{match.text}\n" for match in matches), matches

    # ============== Conversion ==============

    def convert_match(self, match: CoordinateMatch) -> GeoReference:
        """
        Convert one match to a geo reference

        Raises:
            ParseError: if a numeric capture group is malformed
        """
        coordinate, query = self._converters[match.notation](match)
        return GeoReference(
            match=match,
            coordinate=coordinate,
            uri=build_geo_uri(query[0], query[1], prefix=self.uri_prefix),
        )

    def _convert_dms(self, match: CoordinateMatch):
        lat_dir, lat_d, lat_m, lat_s, lon_dir, lon_d, lon_m, lon_s = match.groups
        lat = dms_to_decimal(lat_d, lat_m, lat_s)
        lon = dms_to_decimal(lon_d, lon_m, lon_s)
        if lat_dir == 'S':
            lat = -lat
        if lon_dir == 'W':
            lon = -lon
        return DecimalCoordinate(lat, lon), (lat, lon)

    def _convert_decimal_pair(self, match: CoordinateMatch):
        lat_text, lon_text = match.groups
        coordinate = DecimalCoordinate(parse_number(lat_text), parse_number(lon_text))
        # The query keeps the digits exactly as written
        return coordinate, (lat_text, lon_text)

    def _convert_utm(self, match: CoordinateMatch):
        zone, easting, northing = match.groups
        lat, lon = convert_utm_to_lat_lon(zone, easting, northing)
        return DecimalCoordinate(lat, lon), (lat, lon)

    def _convert_mgrs(self, match: CoordinateMatch):
        lat, lon = convert_mgrs_to_lat_lon(match.text)
        return DecimalCoordinate(lat, lon), (lat, lon)

    def build_geo_references(self, normalized_text: str) -> Tuple[bool, List[GeoReference]]:
        """
        Re-scan extracted text and build a geo reference for every match

        A match whose numbers cannot be parsed is dropped on its own; the
        rest are still returned.

        Returns:
            (has_any, references) in notation order, then text order
        """
        references = []
        for match in self.find_all_matches(normalized_text or ""):
            try:
                reference = self.convert_match(match)
            except ParseError as e:
                logger.warning(f"Dropping {match.notation.value} match '{match.text}': {e}")
                continue

            if self.strict_ranges and not self._validate_coordinates(reference.latitude, reference.longitude):
                logger.warning(f"Dropping out-of-range {match.notation.value} match '{match.text}'")
                continue

            references.append(reference)

        return bool(references), references

    # ============== Presentation ==============

    def linkify(self, text: Optional[str]) -> LinkifiedText:
        """
        Filter text down to its coordinates and attach a link span to each

        Falls back to empty text when no reference could be built, so
        unrelated input is never shown unlinked.
        """
        normalized = self.extract(text)
        has_any, references = self.build_geo_references(normalized)
        if not has_any:
            logger.info("No coordinates found in text")
            return LinkifiedText(text="")

        links = tuple(
            LinkSpan(start=ref.match.start, end=ref.match.end, uri=ref.uri)
            for ref in references
        )
        logger.info(f"Linked {len(links)} coordinate reference(s)")
        return LinkifiedText(text=normalized, links=links)

    def _validate_coordinates(self, lat: float, lon: float) -> bool:
        """Validate latitude and longitude ranges"""
        if not (-90 <= lat <= 90):
            logger.warning(f"Invalid latitude: {lat}")
            return False
        if not (-180 <= lon <= 180):
            logger.warning(f"Invalid longitude: {lon}")
            return False
        return True

    def format_coordinates(self, lat: float, lon: float, precision: int = 6) -> str:
        """Hemisphere-lettered label for a reference, e.g. '12.500000°S, 45.250000°W'"""
        lat_dir = 'N' if lat >= 0 else 'S'
        lon_dir = 'E' if lon >= 0 else 'W'
        return f"{abs(lat):.{precision}f}°{lat_dir}, {abs(lon):.{precision}f}°{lon_dir}"

    def describe(self, reference: GeoReference) -> Dict:
        """JSON-ready reference with a human-readable label"""
        return {
            **reference.to_dict(),
            "label": self.format_coordinates(reference.latitude, reference.longitude),
        }


# Convenience functions
def extract_coordinate_substrings(text: Optional[str]) -> str:
    """Keep only the coordinate substrings of text, one per line"""
    return CoordinateParser().extract(text)


def build_geo_references(normalized_text: str) -> Tuple[bool, List[GeoReference]]:
    """Build geo references from extracted text (convenience wrapper)"""
    return CoordinateParser().build_geo_references(normalized_text)


def linkify(text: Optional[str]) -> LinkifiedText:
    """Extract coordinates and link spans from raw text (convenience wrapper)"""
    return CoordinateParser().linkify(text)
