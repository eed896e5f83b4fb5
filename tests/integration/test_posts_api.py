"""Integration tests for /posts and the posts nested under /blogs/{id}."""

from fastapi.testclient import TestClient

from tests.conftest import ADMIN, create_blog, create_post, post_payload

MISSING_ID = "65a1b2c3d4e5f60718293a4b"


class TestCreatePost:
    def test_create_post(self, client: TestClient) -> None:
        blog = create_blog(client)

        response = client.post("/posts", json=post_payload(blog["id"]), auth=ADMIN)

        assert response.status_code == 201
        post = response.json()
        assert post["blogId"] == blog["id"]
        assert post["blogName"] == "Arthas"
        assert post["title"] == "Frostmourne"
        assert client.get(f"/posts/{post['id']}").json() == post

    def test_unknown_blog_is_a_field_error(self, client: TestClient) -> None:
        response = client.post("/posts", json=post_payload(MISSING_ID), auth=ADMIN)

        assert response.status_code == 400
        assert response.json()["errorsMessages"] == [
            {
                "message": "there is no blog with an id value of blogId in the database",
                "field": "blogId",
            }
        ]

    def test_field_errors_and_unknown_blog_are_reported_together(self, client: TestClient) -> None:
        response = client.post(
            "/posts", json=post_payload(MISSING_ID, title="", content=5), auth=ADMIN
        )

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errorsMessages"]]
        assert fields == ["title", "content", "blogId"]

    def test_requires_admin(self, client: TestClient) -> None:
        blog = create_blog(client)
        assert client.post("/posts", json=post_payload(blog["id"])).status_code == 401


class TestBlogPosts:
    def test_create_and_list_in_blog(self, client: TestClient) -> None:
        blog = create_blog(client)
        other = create_blog(client, name="Jaina")
        create_post(client, other["id"])

        payload = {"title": "t", "shortDescription": "s", "content": "c"}
        response = client.post(f"/blogs/{blog['id']}/posts", json=payload, auth=ADMIN)
        assert response.status_code == 201
        assert response.json()["blogId"] == blog["id"]

        listing = client.get(f"/blogs/{blog['id']}/posts").json()
        assert listing["totalCount"] == 1
        assert listing["items"] == [response.json()]

    def test_missing_blog_is_404_before_validation(self, client: TestClient) -> None:
        assert client.post(f"/blogs/{MISSING_ID}/posts", json={}, auth=ADMIN).status_code == 404
        assert client.get(f"/blogs/{MISSING_ID}/posts").status_code == 404
        assert client.get("/blogs/not-an-id/posts").status_code == 404

    def test_invalid_body(self, client: TestClient) -> None:
        blog = create_blog(client)
        response = client.post(f"/blogs/{blog['id']}/posts", json={"title": "t"}, auth=ADMIN)

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errorsMessages"]]
        assert fields == ["shortDescription", "content"]


class TestListPosts:
    def test_newest_first_by_default(self, client: TestClient) -> None:
        blog = create_blog(client)
        first = create_post(client, blog["id"], title="first")
        second = create_post(client, blog["id"], title="second")

        items = client.get("/posts").json()["items"]

        assert [item["id"] for item in items] == [second["id"], first["id"]]

    def test_sort_by_title_ascending(self, client: TestClient) -> None:
        blog = create_blog(client)
        for title in ["b", "a", "c"]:
            create_post(client, blog["id"], title=title)

        items = client.get("/posts", params={"sortBy": "title", "sortDirection": "asc"}).json()[
            "items"
        ]

        assert [item["title"] for item in items] == ["a", "b", "c"]


class TestUpdatePost:
    def test_update_moves_post_to_other_blog(self, client: TestClient) -> None:
        blog = create_blog(client)
        other = create_blog(client, name="Jaina")
        post = create_post(client, blog["id"])

        response = client.put(
            f"/posts/{post['id']}", json=post_payload(other["id"], title="moved"), auth=ADMIN
        )

        assert response.status_code == 204
        updated = client.get(f"/posts/{post['id']}").json()
        assert updated["title"] == "moved"
        assert updated["blogId"] == other["id"]
        assert updated["blogName"] == "Jaina"

    def test_unchanged_update_is_still_204(self, client: TestClient) -> None:
        blog = create_blog(client)
        post = create_post(client, blog["id"])

        response = client.put(f"/posts/{post['id']}", json=post_payload(blog["id"]), auth=ADMIN)
        assert response.status_code == 204

    def test_missing_and_malformed_ids(self, client: TestClient) -> None:
        blog = create_blog(client)
        payload = post_payload(blog["id"])

        assert client.put(f"/posts/{MISSING_ID}", json=payload, auth=ADMIN).status_code == 404
        assert client.put("/posts/not-an-id", json=payload, auth=ADMIN).status_code == 404


class TestDeletePost:
    def test_delete(self, client: TestClient) -> None:
        blog = create_blog(client)
        post = create_post(client, blog["id"])

        assert client.delete(f"/posts/{post['id']}", auth=ADMIN).status_code == 204
        assert client.get(f"/posts/{post['id']}").status_code == 404

    def test_missing_and_malformed_ids(self, client: TestClient) -> None:
        assert client.delete(f"/posts/{MISSING_ID}", auth=ADMIN).status_code == 404
        assert client.delete("/posts/not-an-id", auth=ADMIN).status_code == 404

    def test_requires_admin(self, client: TestClient) -> None:
        assert client.delete(f"/posts/{MISSING_ID}").status_code == 401
