"""Unit tests for result rendering."""

import json
from http import HTTPStatus

from bloggers.api.responses import render
from bloggers.domain.models import FieldError
from bloggers.domain.results import NO_CONTENT, NOT_FOUND, Ok, bad_request


def test_ok_renders_json_body() -> None:
    response = render(Ok(HTTPStatus.CREATED, {"id": "1"}))

    assert response.status_code == 201
    assert json.loads(response.body) == {"id": "1"}


def test_status_renders_empty_body() -> None:
    assert render(NO_CONTENT).status_code == 204
    assert render(NOT_FOUND).body == b""


def test_bad_request_renders_errors_messages() -> None:
    response = render(bad_request([FieldError("name", "name is required")]))

    assert response.status_code == 400
    assert json.loads(response.body) == {
        "errorsMessages": [{"message": "name is required", "field": "name"}]
    }
