"""
Value types for the coordinate linking pipeline.

Everything here is immutable and lives for a single extraction call.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from coordinate_patterns import CoordinateNotation


class ParseError(ValueError):
    """A matched capture group could not be turned into a finite number."""

    def __init__(self, value: str, reason: str = "not a finite number"):
        self.value = value
        super().__init__(f"Cannot parse '{value}': {reason}")


@dataclass(frozen=True)
class CoordinateMatch:
    """One pattern hit: the matched substring and its capture groups."""

    notation: CoordinateNotation
    text: str
    groups: Tuple[str, ...]
    start: int
    end: int


@dataclass(frozen=True)
class DecimalCoordinate:
    """Latitude/longitude in decimal degrees (negative = South/West)."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeoReference:
    """A converted match together with the geo-URI built for it."""

    match: CoordinateMatch
    coordinate: DecimalCoordinate
    uri: str

    @property
    def text(self) -> str:
        return self.match.text

    @property
    def notation(self) -> CoordinateNotation:
        return self.match.notation

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude

    def to_dict(self) -> Dict:
        """Convert to a plain dictionary (useful for JSON serialisation)."""
        return {
            "text": self.text,
            "notation": self.notation.value,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "uri": self.uri,
            "start": self.match.start,
            "end": self.match.end,
        }


@dataclass(frozen=True)
class LinkSpan:
    start: int
    end: int
    uri: str


@dataclass(frozen=True)
class LinkifiedText:
    """Filtered text plus the link spans a UI layer should make clickable."""

    text: str
    links: Tuple[LinkSpan, ...] = ()

    @property
    def has_links(self) -> bool:
        return bool(self.links)

    def to_dict(self) -> Dict:
        return {
            "text": self.text,
            "links": [
                {"start": link.start, "end": link.end, "uri": link.uri}
                for link in self.links
            ],
        }
