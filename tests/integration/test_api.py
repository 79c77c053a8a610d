"""Integration tests for the API endpoints."""

import pytest
from fastapi.testclient import TestClient
from fuzzy_ranker.main import app


class TestAPI:
    """Integration tests for API endpoints."""

    @pytest.fixture
    def client(self):
        """Create a test client."""
        return TestClient(app)

    @pytest.fixture
    def candidates(self):
        """Sample candidates for testing."""
        return ["foo/bar", "bar/foo", "foobar", "baz"]

    def test_root_endpoint(self, client):
        """Test the root endpoint."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Fuzzy Ranker"
        assert data["version"] == "1.0.0"
        assert data["status"] == "running"

    def test_api_info_endpoint(self, client):
        """Test the API info endpoint."""
        response = client.get("/api")
        assert response.status_code == 200

        data = response.json()
        assert "endpoints" in data
        assert "query_syntax" in data
        assert data["limits"]["max_query_length"] == 256

    def test_match(self, client, candidates):
        """Test ranking through the API."""
        response = client.post(
            "/api/v1/match", json={"query": "foo bar", "candidates": candidates}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["query"] == "foo bar"
        assert data["total_candidates"] == 4
        assert data["total_matches"] == 3
        assert [r["text"] for r in data["results"]] == ["foo/bar", "foobar", "bar/foo"]
        assert [r["score"] for r in data["results"]] == [175, 165, 163]
        assert data["results"][0]["indices"] == [0, 1, 2, 4, 5, 6]

    def test_match_empty_query(self, client, candidates):
        """Test that an empty query returns every candidate unchanged."""
        response = client.post("/api/v1/match", json={"query": "", "candidates": candidates})
        assert response.status_code == 200

        data = response.json()
        assert [r["index"] for r in data["results"]] == [0, 1, 2, 3]
        assert all(r["score"] == 0 for r in data["results"])

    def test_match_limit(self, client, candidates):
        response = client.post(
            "/api/v1/match", json={"query": "foo", "candidates": candidates, "limit": 1}
        )
        assert response.status_code == 200

        data = response.json()
        assert data["total_matches"] == 3
        assert len(data["results"]) == 1

    def test_match_options(self, client):
        response = client.post(
            "/api/v1/match",
            json={
                "query": "'bar",
                "candidates": ["xbar bar"],
                "options": {"prefer_prefix": True},
            },
        )
        assert response.status_code == 200
        assert response.json()["results"][0]["indices"] == [5, 6, 7]

    def test_match_invalid_option(self, client, candidates):
        response = client.post(
            "/api/v1/match",
            json={"query": "foo", "candidates": candidates, "options": {"case_matching": "bogus"}},
        )
        assert response.status_code == 422

    def test_match_unterminated_quote(self, client, candidates):
        response = client.post(
            "/api/v1/match", json={"query": '"foo', "candidates": candidates}
        )
        assert response.status_code == 400
        assert "quote" in response.json()["detail"].lower()

    def test_match_query_too_long(self, client, candidates):
        response = client.post(
            "/api/v1/match", json={"query": "a" * 300, "candidates": candidates}
        )
        assert response.status_code == 400

    def test_batch_match(self, client, candidates):
        """Test ranking several queries in one request."""
        response = client.post(
            "/api/v1/match/batch",
            json={"queries": ["foo", "^baz$", "qux"], "candidates": candidates},
        )
        assert response.status_code == 200

        data = response.json()
        assert [d["query"] for d in data] == ["foo", "^baz$", "qux"]
        assert data[1]["results"][0]["text"] == "baz"
        assert data[2]["total_matches"] == 0

    def test_batch_requires_queries(self, client, candidates):
        response = client.post("/api/v1/match/batch", json={"queries": [], "candidates": candidates})
        assert response.status_code == 422

    def test_score(self, client):
        """Test single haystack scoring."""
        response = client.post(
            "/api/v1/score",
            json={"haystack": "hello", "needle": "hello", "mode": "substring"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["matched"] is True
        assert data["score"] == 140
        assert data["indices"] == [0, 1, 2, 3, 4]

    def test_score_defaults_to_fuzzy(self, client):
        response = client.post(
            "/api/v1/score", json={"haystack": "hello world", "needle": "hello"}
        )
        assert response.status_code == 200
        assert response.json()["score"] == 134

    def test_score_no_match(self, client):
        response = client.post(
            "/api/v1/score",
            json={"haystack": "say hello", "needle": "hello", "mode": "prefix"},
        )
        assert response.status_code == 200

        data = response.json()
        assert data["matched"] is False
        assert data["score"] is None
        assert data["indices"] == []

    def test_score_whitespace_needle(self, client):
        response = client.post("/api/v1/score", json={"haystack": "hello", "needle": "   "})
        assert response.status_code == 422

    def test_health_endpoint(self, client):
        """Test the health check endpoint."""
        response = client.get("/api/v1/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["dependencies"] == {"ranker": "healthy", "matcher": "healthy"}

    def test_liveness_endpoint(self, client):
        response = client.get("/api/v1/health/live")
        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    def test_metrics_endpoint(self, client, candidates):
        """Test the metrics endpoint."""
        client.post("/api/v1/match", json={"query": "foo", "candidates": candidates})

        response = client.get("/api/v1/metrics")
        assert response.status_code == 200

        data = response.json()
        assert data["total_scans"] >= 1
        assert data["candidates_scored"] >= 4
        assert data["memory_usage_mb"] > 0
