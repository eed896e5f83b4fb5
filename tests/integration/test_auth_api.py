"""
Integration tests for the /auth endpoints.

Covers the full registration flow (register -> email -> confirm -> login
-> me) plus the error outcomes of each step.
"""

from fastapi.testclient import TestClient

from tests.conftest import RecordingEmailSender, TickingClock, create_user, login, user_payload


def register(client: TestClient, **overrides) -> None:
    response = client.post("/auth/registration", json=user_payload(**overrides))
    assert response.status_code == 204


def field_errors(response) -> list[tuple[str, str]]:
    return [(error["field"], error["message"]) for error in response.json()["errorsMessages"]]


class TestRegistrationFlow:
    def test_register_confirm_login_me(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        register(client)

        assert len(email_sender.messages) == 1
        message = email_sender.messages[0]
        assert message["to"] == "arthas@lordaeron.com"
        assert message["subject"] == "Registration confirmation"

        (code,) = email_sender.codes_for("arthas@lordaeron.com")
        response = client.post("/auth/registration-confirmation", json={"code": code})
        assert response.status_code == 204

        headers = login(client, "arthas", "frostmourne")
        me = client.get("/auth/me", headers=headers)
        assert me.status_code == 200
        assert me.json()["login"] == "arthas"
        assert me.json()["email"] == "arthas@lordaeron.com"
        assert len(me.json()["userId"]) == 24

    def test_registered_user_is_listed(self, client: TestClient) -> None:
        register(client)
        listing = client.get("/users", auth=("admin", "qwerty")).json()
        assert [item["login"] for item in listing["items"]] == ["arthas"]


class TestRegistration:
    def test_duplicate_email(self, client: TestClient) -> None:
        register(client)

        response = client.post("/auth/registration", json=user_payload(login="other"))

        assert response.status_code == 400
        assert field_errors(response) == [("email", "email should be unique")]

    def test_duplicate_login(self, client: TestClient) -> None:
        create_user(client)

        response = client.post(
            "/auth/registration", json=user_payload(email="other@lordaeron.com")
        )

        assert field_errors(response) == [("login", "login should be unique")]

    def test_invalid_body(self, client: TestClient, email_sender: RecordingEmailSender) -> None:
        response = client.post("/auth/registration", json=user_payload(email="nope"))

        assert response.status_code == 400
        assert field_errors(response) == [("email", "email must match the email pattern")]
        assert email_sender.messages == []

    def test_failed_email_still_registers(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        email_sender.succeed = False
        register(client)


class TestConfirmation:
    def test_unknown_code(self, client: TestClient) -> None:
        response = client.post("/auth/registration-confirmation", json={"code": "0" * 32})

        assert response.status_code == 400
        assert field_errors(response)[0][0] == "code"

    def test_code_cannot_be_replayed(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        register(client)
        (code,) = email_sender.codes_for("arthas@lordaeron.com")

        client.post("/auth/registration-confirmation", json={"code": code})
        response = client.post("/auth/registration-confirmation", json={"code": code})

        assert field_errors(response) == [
            ("code", "the confirmation code is either incorrect or had already been applied")
        ]

    def test_expired_code(
        self, client: TestClient, email_sender: RecordingEmailSender, clock: TickingClock
    ) -> None:
        register(client)
        (code,) = email_sender.codes_for("arthas@lordaeron.com")

        clock.advance(minutes=2)
        response = client.post("/auth/registration-confirmation", json={"code": code})

        assert field_errors(response) == [("code", "the confirmation code is expired")]

    def test_missing_code(self, client: TestClient) -> None:
        response = client.post("/auth/registration-confirmation", json={})
        assert field_errors(response) == [("code", "code is required")]


class TestEmailResending:
    def test_resend_sends_new_code_and_old_one_still_works(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        register(client)

        response = client.post(
            "/auth/registration-email-resending", json={"email": "arthas@lordaeron.com"}
        )

        assert response.status_code == 204
        first, second = email_sender.codes_for("arthas@lordaeron.com")
        assert first != second
        confirmed = client.post("/auth/registration-confirmation", json={"code": first})
        assert confirmed.status_code == 204

    def test_unknown_email(self, client: TestClient) -> None:
        response = client.post(
            "/auth/registration-email-resending", json={"email": "nobody@lordaeron.com"}
        )

        assert response.status_code == 400
        assert field_errors(response)[0][0] == "email"

    def test_already_confirmed(
        self, client: TestClient, email_sender: RecordingEmailSender
    ) -> None:
        register(client)
        (code,) = email_sender.codes_for("arthas@lordaeron.com")
        client.post("/auth/registration-confirmation", json={"code": code})

        response = client.post(
            "/auth/registration-email-resending", json={"email": "arthas@lordaeron.com"}
        )

        assert field_errors(response) == [("email", "the user is already confirmed")]


class TestLogin:
    def test_login_by_email(self, client: TestClient) -> None:
        create_user(client)
        response = client.post(
            "/auth/login", json={"loginOrEmail": "arthas@lordaeron.com", "password": "frostmourne"}
        )

        assert response.status_code == 200
        assert set(response.json()) == {"accessToken"}

    def test_wrong_password(self, client: TestClient) -> None:
        create_user(client)
        response = client.post(
            "/auth/login", json={"loginOrEmail": "arthas", "password": "wrongpass"}
        )
        assert response.status_code == 401

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.post(
            "/auth/login", json={"loginOrEmail": "nobody", "password": "whatever"}
        )
        assert response.status_code == 401

    def test_invalid_body(self, client: TestClient) -> None:
        response = client.post("/auth/login", json={"loginOrEmail": "arthas"})

        assert response.status_code == 400
        assert field_errors(response) == [("password", "password is required")]


class TestMe:
    def test_requires_bearer(self, client: TestClient) -> None:
        assert client.get("/auth/me").status_code == 401
        assert client.get("/auth/me", headers={"Authorization": "Bearer junk"}).status_code == 401

    def test_token_of_deleted_user(self, client: TestClient) -> None:
        user = create_user(client)
        headers = login(client, "arthas", "frostmourne")
        client.delete(f"/users/{user['id']}", auth=("admin", "qwerty"))

        assert client.get("/auth/me", headers=headers).status_code == 401
