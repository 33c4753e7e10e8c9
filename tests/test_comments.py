# =============================================================================
# tests/test_comments.py - Comment API Tests
# =============================================================================
# Run with: pytest tests/test_comments.py -v
# =============================================================================

import pytest

from tests.conftest import auth_header, create_article


@pytest.fixture
def article(client, jake):
    """An article by jake for jane to comment on."""
    return create_article(client, jake["token"])


def post_comment(client, slug, token, body="His name was my name too."):
    return client.post(
        f"/api/articles/{slug}/comments",
        json={"comment": {"body": body}},
        headers=auth_header(token),
    )


class TestAddComment:
    """POST /api/articles/{slug}/comments"""

    def test_add_comment(self, client, article, jane):
        response = post_comment(client, article["slug"], jane["token"])

        assert response.status_code == 201
        comment = response.json()["comment"]
        assert isinstance(comment["id"], int)
        assert comment["body"] == "His name was my name too."
        assert comment["author"]["username"] == "jane"
        assert comment["createdAt"].endswith("Z")
        assert comment["updatedAt"].endswith("Z")

    def test_blank_body_is_validation_error(self, client, article, jane):
        response = post_comment(client, article["slug"], jane["token"], body="   ")

        assert response.status_code == 422

    def test_unknown_article_is_not_found(self, client, jane):
        response = post_comment(client, "nope", jane["token"])

        assert response.status_code == 404

    def test_requires_auth(self, client, article):
        response = client.post(
            f"/api/articles/{article['slug']}/comments",
            json={"comment": {"body": "anonymous"}},
        )

        assert response.status_code == 401


class TestListComments:
    """GET /api/articles/{slug}/comments"""

    def test_oldest_first(self, client, article, jake, jane):
        post_comment(client, article["slug"], jane["token"], body="first")
        post_comment(client, article["slug"], jake["token"], body="second")

        response = client.get(f"/api/articles/{article['slug']}/comments")

        assert response.status_code == 200
        assert [c["body"] for c in response.json()["comments"]] == ["first", "second"]

    def test_author_following_reflects_viewer(self, client, article, jake, jane):
        post_comment(client, article["slug"], jane["token"])
        client.post("/api/profiles/jane/follow", headers=auth_header(jake["token"]))

        response = client.get(
            f"/api/articles/{article['slug']}/comments", headers=auth_header(jake["token"])
        )

        assert response.json()["comments"][0]["author"]["following"] is True

    def test_empty_list(self, client, article):
        response = client.get(f"/api/articles/{article['slug']}/comments")

        assert response.json() == {"comments": []}

    def test_unknown_article_is_not_found(self, client):
        assert client.get("/api/articles/nope/comments").status_code == 404


class TestDeleteComment:
    """DELETE /api/articles/{slug}/comments/{id}"""

    def test_author_deletes_comment(self, client, article, jane):
        comment = post_comment(client, article["slug"], jane["token"]).json()["comment"]

        response = client.delete(
            f"/api/articles/{article['slug']}/comments/{comment['id']}",
            headers=auth_header(jane["token"]),
        )

        assert response.status_code == 204
        remaining = client.get(f"/api/articles/{article['slug']}/comments").json()
        assert remaining == {"comments": []}

    def test_non_author_is_forbidden(self, client, article, jake, jane):
        comment = post_comment(client, article["slug"], jane["token"]).json()["comment"]

        # Even the article's author can't delete someone else's comment
        response = client.delete(
            f"/api/articles/{article['slug']}/comments/{comment['id']}",
            headers=auth_header(jake["token"]),
        )

        assert response.status_code == 403

    def test_unknown_comment_is_not_found(self, client, article, jane):
        response = client.delete(
            f"/api/articles/{article['slug']}/comments/9999",
            headers=auth_header(jane["token"]),
        )

        assert response.status_code == 404
        assert response.json()["code"] == "COMMENT_NOT_FOUND"

    def test_comment_on_other_article_is_not_found(self, client, article, jake, jane):
        other = create_article(client, jake["token"], title="Another one")
        comment = post_comment(client, article["slug"], jane["token"]).json()["comment"]

        response = client.delete(
            f"/api/articles/{other['slug']}/comments/{comment['id']}",
            headers=auth_header(jane["token"]),
        )

        assert response.status_code == 404

    def test_comment_id_past_integer_range_is_validation_error(self, client, article, jane):
        response = client.delete(
            f"/api/articles/{article['slug']}/comments/{10**30}",
            headers=auth_header(jane["token"]),
        )

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
