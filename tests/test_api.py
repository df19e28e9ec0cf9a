"""
Endpoint tests through FastAPI's TestClient.

The shared upstream HTTP client is swapped for one bound to the fake
tracks API.
"""

API = "/api/v1"


class TestHealth:
    """Service banner and health checks."""

    def test_root(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert response.json()["health"] == f"{API}/health"

    def test_health(self, api_client):
        response = api_client.get(f"{API}/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_detailed_health_reports_upstream(self, api_client):
        response = api_client.get(f"{API}/health/detailed")

        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["upstream"]["status"] == "reachable"
        assert "memory_percent" in body["checks"]["resources"]


class TestOrganizationEndpoints:
    """Organization list and combined leaderboard."""

    def test_list_organizations(self, api_client, tracks_api):
        tracks_api.json(
            "/api/organizations",
            {"organizations": [{"id": "o1", "name": "Club", "memberCount": 3, "trackCount": 2}]},
        )

        response = api_client.get(f"{API}/organizations")

        assert response.status_code == 200
        assert response.json() == [
            {
                "id": "o1",
                "name": "Club",
                "description": None,
                "memberCount": 3,
                "trackCount": 2,
                "createdAt": None,
                "role": None,
            }
        ]

    def test_list_organizations_failure(self, api_client, tracks_api):
        tracks_api.status("/api/organizations", 500)

        response = api_client.get(f"{API}/organizations", headers={"X-Request-ID": "abc"})

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "UPSTREAM_ERROR"
        assert error["message"] == "Failed to fetch organizations"
        assert error["request_id"] == "abc"

    def test_combined_leaderboard(self, api_client, tracks_api, make_row):
        tracks_api.json("/api/organizations/o1", {"data": {"id": "o1", "name": "Club"}})
        tracks_api.json("/api/tracks/org/o1", {"data": [{"id": "t1"}, {"id": "t2"}]})
        tracks_api.leaderboard("t1", [make_row("u1", base=10, total=17, streak=7, mult=1.7)])
        tracks_api.leaderboard(
            "t2", [make_row("u1", base=5, total=5, streak=1), make_row("u2", base=20, total=20)]
        )

        response = api_client.get(f"{API}/organizations/o1/leaderboard", params={"viewer_id": "u2"})

        assert response.status_code == 200
        body = response.json()
        assert body["organizationName"] == "Club"
        assert body["combined"] is True
        assert body["isEmpty"] is False
        first, second = body["entries"]
        assert first["userId"] == "u1"
        assert first["rank"] == 1
        assert first["baseScore"] == 15
        assert first["totalScore"] == 22
        assert first["displayScore"] == 22
        assert first["currentStreak"] == 7
        assert first["streakMultiplier"] == 1.7
        assert first["multiplierLabel"] == "1.70x"
        assert first["isViewer"] is False
        assert second["userId"] == "u2"
        assert second["rank"] == 2
        assert second["multiplierLabel"] is None
        assert second["isViewer"] is True

    def test_empty_leaderboard(self, api_client, tracks_api):
        tracks_api.json("/api/tracks/org/o1", {"data": [{"id": "t1"}]})
        tracks_api.status("/api/tracks/t1/leaderboard", 500)

        response = api_client.get(f"{API}/organizations/o1/leaderboard")

        assert response.status_code == 200
        assert response.json()["entries"] == []
        assert response.json()["isEmpty"] is True

    def test_unknown_track_filter(self, api_client, tracks_api):
        tracks_api.json("/api/tracks/org/o1", {"data": [{"id": "t1"}]})

        response = api_client.get(f"{API}/organizations/o1/leaderboard", params={"track_id": "t9"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_empty_track_filter_is_rejected(self, api_client):
        response = api_client.get(f"{API}/organizations/o1/leaderboard", params={"track_id": ""})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestTrackEndpoints:
    """Single-track leaderboard and the caller's tracks."""

    def test_track_leaderboard_forwards_identity(self, api_client, tracks_api, make_row):
        tracks_api.json("/api/tracks/t1", {"track": {"id": "t1", "name": "Reading"}})
        tracks_api.leaderboard("t1", [make_row("u1", total=4, rank=1)])

        response = api_client.get(
            f"{API}/tracks/t1/leaderboard",
            headers={"Authorization": "Bearer user-token", "X-Request-ID": "req-9"},
        )

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == "req-9"
        body = response.json()
        assert body["trackName"] == "Reading"
        assert [(e["userId"], e["rank"]) for e in body["entries"]] == [("u1", 1)]
        for sent in tracks_api.requests:
            assert sent.headers["Authorization"] == "Bearer user-token"
            assert sent.headers["X-Request-ID"] == "req-9"

    def test_generated_request_id(self, api_client, tracks_api):
        response = api_client.get(f"{API}/tracks/t1/leaderboard")

        assert response.status_code == 200
        assert response.headers["X-Request-ID"]
        assert response.json()["isEmpty"] is True

    def test_my_tracks(self, api_client, tracks_api):
        tracks_api.json("/api/tracks/my-tracks", {"tracks": [{"id": "t1", "name": "Run"}]})

        response = api_client.get(f"{API}/tracks/my-tracks")

        assert response.status_code == 200
        assert [t["id"] for t in response.json()] == ["t1"]
