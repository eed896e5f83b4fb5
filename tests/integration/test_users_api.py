"""Integration tests for the admin /users endpoints."""

from fastapi.testclient import TestClient

from tests.conftest import ADMIN, create_user, user_payload

MISSING_ID = "65a1b2c3d4e5f60718293a4b"


class TestCreateUser:
    def test_create_user(self, client: TestClient, email_sender) -> None:
        response = client.post("/users", json=user_payload(), auth=ADMIN)

        assert response.status_code == 201
        user = response.json()
        assert set(user) == {"id", "login", "email", "createdAt"}
        assert user["login"] == "arthas"
        assert email_sender.messages == []

    def test_duplicate_email_is_reported_first(self, client: TestClient) -> None:
        create_user(client)

        response = client.post("/users", json=user_payload(), auth=ADMIN)

        assert response.status_code == 400
        assert response.json() == {
            "errorsMessages": [{"message": "email should be unique", "field": "email"}]
        }

    def test_duplicate_login(self, client: TestClient) -> None:
        create_user(client)

        response = client.post(
            "/users", json=user_payload(email="other@lordaeron.com"), auth=ADMIN
        )

        assert response.json()["errorsMessages"] == [
            {"message": "login should be unique", "field": "login"}
        ]

    def test_invalid_body(self, client: TestClient) -> None:
        response = client.post("/users", json={"login": "x"}, auth=ADMIN)

        assert response.status_code == 400
        fields = [error["field"] for error in response.json()["errorsMessages"]]
        assert fields == ["email", "login", "password"]

    def test_requires_admin(self, client: TestClient) -> None:
        assert client.post("/users", json=user_payload()).status_code == 401
        assert client.get("/users").status_code == 401


class TestListUsers:
    def test_search_terms_are_or_ed(self, client: TestClient) -> None:
        create_user(client, login="arthas", email="arthas@lordaeron.com")
        create_user(client, login="jaina", email="jaina@kultiras.com")
        create_user(client, login="uther", email="uther@lordaeron.com")

        listing = client.get(
            "/users",
            params={"searchLoginTerm": "JAI", "searchEmailTerm": "uther@"},
            auth=ADMIN,
        ).json()

        assert listing["totalCount"] == 2
        assert sorted(item["login"] for item in listing["items"]) == ["jaina", "uther"]

    def test_single_term_does_not_match_everything(self, client: TestClient) -> None:
        create_user(client, login="arthas", email="arthas@lordaeron.com")
        create_user(client, login="jaina", email="jaina@kultiras.com")

        listing = client.get("/users", params={"searchLoginTerm": "art"}, auth=ADMIN).json()

        assert [item["login"] for item in listing["items"]] == ["arthas"]

    def test_sort_by_login(self, client: TestClient) -> None:
        for name in ["uther", "arthas", "jaina"]:
            create_user(client, login=name, email=f"{name}@azeroth.com")

        listing = client.get(
            "/users", params={"sortBy": "login", "sortDirection": "asc"}, auth=ADMIN
        ).json()

        assert [item["login"] for item in listing["items"]] == ["arthas", "jaina", "uther"]


class TestDeleteUser:
    def test_delete(self, client: TestClient) -> None:
        user = create_user(client)

        assert client.delete(f"/users/{user['id']}", auth=ADMIN).status_code == 204
        assert client.get("/users", auth=ADMIN).json()["totalCount"] == 0

    def test_missing_and_malformed_ids(self, client: TestClient) -> None:
        assert client.delete(f"/users/{MISSING_ID}", auth=ADMIN).status_code == 404
        assert client.delete("/users/not-an-id", auth=ADMIN).status_code == 404
