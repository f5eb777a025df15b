"""Tests for the Flask endpoints that expose the coordinate pipeline."""

import os
import sys
import pytest

# Allow imports from backend/
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import app as app_module


@pytest.fixture
def client():
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c


class TestHealth:

    def test_health_reports_stats(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.get_json()
        assert data["status"] == "healthy"
        assert "total_requests" in data["stats"]


class TestExtractEndpoint:

    def test_extract_filters_text(self, client):
        response = client.post(
            "/extract",
            json={"message": "hello world, call me at 45.1234, -122.5678 maybe"},
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["success"] is True
        assert data["text"] == "45.1234, -122.5678\n"
        assert data["count"] == 1

    def test_missing_body(self, client):
        response = client.post("/extract")
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid request"

    @pytest.mark.parametrize("payload", [{"message": "   "}, {"message": 42}, {"text": "1.5, 2.5"}])
    def test_missing_message(self, client, payload):
        response = client.post("/extract", json=payload)
        assert response.status_code == 400
        assert response.get_json()["error"] == "No message provided"

    def test_message_too_long(self, client, monkeypatch):
        monkeypatch.setattr(app_module.geo_service, "max_text_length", 10)
        response = client.post("/extract", json={"message": "1.5, 2.5 and more text"})
        assert response.status_code == 413


class TestGeoReferencesEndpoint:

    def test_returns_references(self, client):
        response = client.post(
            "/geo_references",
            json={"message": "meet at 45.1234, -122.5678 or S12 30 0 W45 15 0"},
        )
        assert response.status_code == 200
        data = response.get_json()
        assert data["has_any"] is True
        notations = [ref["notation"] for ref in data["references"]]
        assert notations == ["dms", "decimal"]
        assert data["references"][0]["latitude"] == -12.5
        assert data["references"][0]["longitude"] == -45.25
        assert data["references"][1]["uri"].endswith("45.1234%2C-122.5678")

    def test_no_coordinates(self, client):
        response = client.post("/geo_references", json={"message": "no coordinates here"})
        data = response.get_json()
        assert data["has_any"] is False
        assert data["references"] == []

    def test_unexpected_failure_is_500(self, client, monkeypatch):
        def boom(text):
            raise RuntimeError("boom")

        errors_before = app_module.geo_service.stats["errors"]
        monkeypatch.setattr(app_module.geo_service.parser, "extract", boom)
        response = client.post("/geo_references", json={"message": "1.5, 2.5"})
        assert response.status_code == 500
        assert response.get_json()["error"] == "Failed to process message"
        assert app_module.geo_service.stats["errors"] == errors_before + 1


class TestLinkifyEndpoint:

    def test_links_spans(self, client):
        response = client.post("/linkify", json={"message": "at 45.1234, -122.5678 ok"})
        data = response.get_json()
        assert data["text"] == "45.1234, -122.5678\n"
        assert len(data["links"]) == 1
        assert data["links"][0]["start"] == 0
        assert data["links"][0]["end"] == 18

    def test_empty_when_nothing_links(self, client):
        response = client.post("/linkify", json={"message": "call me maybe"})
        data = response.get_json()
        assert data == {"success": True, "text": "", "links": []}


class TestErrorHandlers:

    def test_unknown_route(self, client):
        response = client.get("/nope")
        assert response.status_code == 404
        assert response.get_json()["error"] == "Endpoint not found"

    def test_wrong_method(self, client):
        response = client.get("/extract")
        assert response.status_code == 405


class TestRequestValidation:

    def test_dms_split_across_lines_counts_once(self, client):
        response = client.post("/extract", json={"message": "N12\n30\n0\nE45 15 0"})
        data = response.get_json()
        assert data["text"] == "N12\n30\n0\nE45 15 0\n"
        assert data["count"] == 1

    @pytest.mark.parametrize("payload", [["1.5, 2.5"], "1.5, 2.5", 42])
    def test_non_object_body_is_invalid_request(self, client, payload):
        errors_before = app_module.geo_service.stats["errors"]
        response = client.post("/geo_references", json=payload)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Invalid request"
        assert app_module.geo_service.stats["errors"] == errors_before

    def test_references_carry_label(self, client):
        response = client.post("/geo_references", json={"message": "S12 30 0 W45 15 0"})
        ref = response.get_json()["references"][0]
        assert ref["label"] == "12.500000°S, 45.250000°W"
