"""Tests for the request-level service wrapping the coordinate parser."""

import os
import sys
import pytest

# Allow imports from backend/
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from coordinate_parser import CoordinateParser
from services import GeoReferenceService, MessageTooLong


@pytest.fixture
def service():
    parser = CoordinateParser(strict_ranges=False, uri_prefix="geo:0,0?q=")
    return GeoReferenceService(parser=parser, max_text_length=1000)


class TestLengthLimit:

    def test_explicit_zero_limit_is_kept(self):
        service = GeoReferenceService(max_text_length=0)
        assert service.max_text_length == 0
        with pytest.raises(MessageTooLong) as exc_info:
            service.extract("1.5, 2.5")
        assert exc_info.value.limit == 0

    def test_default_limit_from_config(self):
        from config import Config
        assert GeoReferenceService().max_text_length == Config.MAX_TEXT_LENGTH


class TestExtract:

    def test_count_is_number_of_matches(self, service):
        result = service.extract("N12\n30\n0\nE45 15 0 and 1.5, 2.5")
        assert result["count"] == 2
        assert service.stats["total_requests"] == 1

    def test_empty_result(self, service):
        assert service.extract("nothing to see") == {"text": "", "count": 0}


class TestGeoReferences:

    def test_label_and_counters(self, service):
        result = service.geo_references("45.1234, -122.5678")
        assert result["has_any"] is True
        assert result["references"][0]["label"] == "45.123400°N, 122.567800°W"
        assert service.stats["references_built"] == 1
