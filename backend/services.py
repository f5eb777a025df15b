import logging
from datetime import datetime
from config import Config
from coordinate_parser import CoordinateParser

logger = logging.getLogger(__name__)


class MessageTooLong(ValueError):
    """Incoming text exceeds Config.MAX_TEXT_LENGTH"""

    def __init__(self, length, limit):
        self.length = length
        self.limit = limit
        super().__init__(f"Message is {length} characters, limit is {limit}")


class GeoReferenceService:
    """Run the coordinate linking pipeline for API requests"""

    def __init__(self, parser=None, max_text_length=None):
        self.parser = parser or CoordinateParser()
        self.max_text_length = Config.MAX_TEXT_LENGTH if max_text_length is None else max_text_length
        self.stats = {
            "started_at": datetime.now().isoformat(),
            "total_requests": 0,
            "references_built": 0,
            "errors": 0,
        }

    def _check_length(self, text):
        if len(text) > self.max_text_length:
            raise MessageTooLong(len(text), self.max_text_length)

    def extract(self, text):
        """Return the coordinate-only text and how many substrings it holds"""
        self._check_length(text)
        self.stats["total_requests"] += 1

        # A DMS match may span several lines, so count matches, not newlines
        normalized, matches = self.parser.extract_with_matches(text)
        count = len(matches)
        logger.info(f"Extracted {count} coordinate substring(s) from {len(text)} chars")
        return {"text": normalized, "count": count}

    def geo_references(self, text):
        """Extract, convert and serialize every coordinate reference in text"""
        self._check_length(text)
        self.stats["total_requests"] += 1

        normalized = self.parser.extract(text)
        has_any, references = self.parser.build_geo_references(normalized)
        self.stats["references_built"] += len(references)

        logger.info(f"Built {len(references)} geo reference(s)")
        return {
            "has_any": has_any,
            "text": normalized,
            "references": [self.parser.describe(ref) for ref in references],
        }

    def linkify(self, text):
        """Coordinate-only text plus link spans, or empty text when nothing linked"""
        self._check_length(text)
        self.stats["total_requests"] += 1

        result = self.parser.linkify(text)
        self.stats["references_built"] += len(result.links)
        return result.to_dict()

    def record_error(self):
        self.stats["errors"] += 1
