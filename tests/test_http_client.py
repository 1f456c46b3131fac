"""Tests for the HTTP client."""

import asyncio

import pytest
import requests

from conftest import make_response
from mymoney.api import endpoints
from mymoney.api.http_client import error_message
from mymoney.domain.errors import (
    AuthError,
    ClientError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
)
from mymoney.session.controller import SessionState


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/login", False),
        ("/register", False),
        ("/status", False),
        ("/activate", False),
        ("/about", False),
        ("/profile", True),
        ("/incomes", True),
        ("/categories/expense", True),
    ],
)
def test_requires_auth(path, expected):
    assert endpoints.requires_auth(path) is expected


def test_credential_attached_outside_allow_list(app, fake_session):
    app.credentials.set_token("tok")
    fake_session.add("GET", "/incomes", make_response(200, json_body=[]))
    fake_session.add("GET", "/status", make_response(200, text="Application is running"))

    asyncio.run(app.client.get("/incomes"))
    asyncio.run(app.client.get("/status"))

    incomes_call, status_call = fake_session.calls
    assert incomes_call.headers["Authorization"] == "Bearer tok"
    assert "Authorization" not in status_call.headers
    assert fake_session.headers["Content-Type"] == "application/json"


def test_login_never_receives_credential(app, fake_session):
    app.credentials.set_token("tok")
    fake_session.add("POST", "/login", make_response(400))

    with pytest.raises(ClientError):
        asyncio.run(app.client.post("/login", {"email": "a@b.co", "password": "x"}))

    assert "Authorization" not in fake_session.calls[0].headers


def test_no_credential_without_token(app, fake_session):
    fake_session.add("GET", "/incomes", make_response(200, json_body=[]))

    asyncio.run(app.client.get("/incomes"))

    assert "Authorization" not in fake_session.calls[0].headers


def test_unauthorized_clears_credentials_and_logs_out(app, fake_session):
    prompts = []
    app.session.on_login_required = lambda: prompts.append("login")
    app.credentials.set_token("expired")
    fake_session.add("GET", "/incomes", make_response(401, json_body={"message": "Token expired"}))

    with pytest.raises(AuthError) as excinfo:
        asyncio.run(app.client.get("/incomes"))

    assert excinfo.value.status == 401
    assert str(excinfo.value) == "Token expired"
    assert app.credentials.get_token() is None
    assert app.storage.get_item("token") is None
    assert app.session.state is SessionState.LOGGED_OUT
    assert prompts == ["login"]


def test_server_error(app, fake_session):
    fake_session.add("GET", "/incomes", make_response(503, text="<html>down</html>"))

    with pytest.raises(ServerError) as excinfo:
        asyncio.run(app.client.get("/incomes"))

    assert excinfo.value.status == 503
    assert "try again later" in str(excinfo.value)


def test_client_error_uses_server_message(app, fake_session):
    fake_session.add("POST", "/categories", make_response(400, json_body={"message": "Name taken"}))

    with pytest.raises(ClientError, match="Name taken") as excinfo:
        asyncio.run(app.client.post("/categories", {"name": "x"}))

    assert excinfo.value.status == 400


def test_timeout_and_network_errors(app, fake_session):
    fake_session.add("GET", "/incomes", requests.Timeout("slow"))
    fake_session.add("GET", "/expenses", requests.ConnectionError("refused"))

    with pytest.raises(RequestTimeoutError, match="timed out"):
        asyncio.run(app.client.get("/incomes"))
    with pytest.raises(NetworkError, match="Could not reach the server"):
        asyncio.run(app.client.get("/expenses"))


def test_other_failures_keep_credentials(app, fake_session):
    app.credentials.set_token("tok")
    fake_session.add("GET", "/incomes", make_response(500))

    with pytest.raises(ServerError):
        asyncio.run(app.client.get("/incomes"))

    assert app.credentials.get_token() == "tok"


def test_get_json_empty_body(app, fake_session):
    fake_session.add("DELETE", "/incomes/3", make_response(204))
    fake_session.add("GET", "/incomes", make_response(200))

    asyncio.run(app.client.delete("/incomes/3"))
    assert asyncio.run(app.client.get_json("/incomes")) is None


def test_error_message_fallbacks():
    assert error_message(make_response(400, json_body={"message": "Bad"}), "d") == "Bad"
    assert error_message(make_response(400, text="Plain failure"), "d") == "Plain failure"
    assert error_message(make_response(400, text="{broken json"), "d") == "d"
    assert error_message(make_response(400), "d") == "d"
