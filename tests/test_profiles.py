# =============================================================================
# tests/test_profiles.py - Profile & Follow API Tests
# =============================================================================
# Run with: pytest tests/test_profiles.py -v
# =============================================================================

from core.services.profile_service import ProfileService
from tests.conftest import auth_header


class TestGetProfile:
    """GET /api/profiles/{username}"""

    def test_anonymous_profile(self, client, jake):
        response = client.get("/api/profiles/jake")

        assert response.status_code == 200
        assert response.json() == {
            "profile": {"username": "jake", "bio": None, "image": None, "following": False}
        }

    def test_unknown_profile_is_not_found(self, client):
        response = client.get("/api/profiles/nobody")

        assert response.status_code == 404
        assert response.json()["code"] == "PROFILE_NOT_FOUND"

    def test_invalid_token_on_optional_endpoint_is_rejected(self, client, jake):
        response = client.get("/api/profiles/jake", headers=auth_header("garbage"))

        assert response.status_code == 401


class TestFollow:
    """POST/DELETE /api/profiles/{username}/follow"""

    def test_follow_then_profile_shows_following(self, client, jake, jane):
        response = client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 200
        assert response.json()["profile"]["following"] is True

        profile = client.get("/api/profiles/jane", headers=auth_header(jake["token"]))
        assert profile.json()["profile"]["following"] is True

    def test_following_is_relative_to_viewer(self, client, jake, jane):
        client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        anonymous = client.get("/api/profiles/jane")
        as_jane = client.get("/api/profiles/jake", headers=auth_header(jane["token"]))

        assert anonymous.json()["profile"]["following"] is False
        assert as_jane.json()["profile"]["following"] is False

    def test_follow_twice_is_idempotent(self, client, jake, jane):
        first = client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))
        second = client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        assert first.status_code == 200
        assert second.status_code == 200
        assert second.json()["profile"]["following"] is True

    def test_follow_racing_an_identical_request_is_not_a_conflict(
        self, client, jake, jane, monkeypatch
    ):
        client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        # Pretend the row is not there yet, as a concurrent request would see it
        async def not_following(session, follower_id, followed_id):
            return False

        monkeypatch.setattr(ProfileService, "is_following", staticmethod(not_following))
        response = client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 200
        assert response.json()["profile"] == {
            "username": "jane",
            "bio": None,
            "image": None,
            "following": True,
        }

    def test_unfollow(self, client, jake, jane):
        client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        response = client.delete("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 200
        assert response.json()["profile"]["following"] is False
        profile = client.get("/api/profiles/jane", headers=auth_header(jake["token"]))
        assert profile.json()["profile"]["following"] is False

    def test_unfollow_when_not_following_is_fine(self, client, jake, jane):
        response = client.delete("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 200
        assert response.json()["profile"]["following"] is False

    def test_cannot_follow_yourself(self, client, jake):
        response = client.post("/api/profiles/jake/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_follow_unknown_user_is_not_found(self, client, jake):
        response = client.post("/api/profiles/nobody/follow", headers=auth_header(jake["token"]))

        assert response.status_code == 404

    def test_follow_requires_auth(self, client, jane):
        response = client.post("/api/profiles/jane/follow")

        assert response.status_code == 401
