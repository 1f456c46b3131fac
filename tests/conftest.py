"""Shared pytest fixtures for mymoney tests."""

import json
import os
import tempfile
from dataclasses import dataclass, field
from typing import Any, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from mymoney.factories import create_app
from mymoney.storage.factories import create_sqlite_storage

API_URL = "http://api.test"


def make_response(
    status: int = 200,
    json_body: Any = None,
    text: Optional[str] = None,
    content: Optional[bytes] = None,
) -> requests.Response:
    """Build a canned requests.Response."""
    response = requests.Response()
    response.status_code = status
    response.encoding = "utf-8"
    if json_body is not None:
        response._content = json.dumps(json_body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
    else:
        response._content = content or b""
    return response


@dataclass
class RecordedCall:
    method: str
    path: str
    json: Any = None
    params: Any = None
    headers: dict = field(default_factory=dict)
    files: Any = None
    data: Any = None


class FakeSession:
    """Stands in for requests.Session, routing requests to canned responses.

    Routes are keyed by (method, path) where path is relative to API_URL, or
    the full URL for other hosts. A route may hold several responses; they
    are returned in order and the last one repeats. An exception instance
    is raised instead of returned.
    """

    def __init__(self):
        self.headers = CaseInsensitiveDict()
        self.routes: dict[tuple[str, str], list] = {}
        self.calls: list[RecordedCall] = []

    def add(self, method: str, path: str, *responses) -> None:
        self.routes[(method.upper(), path)] = list(responses)

    def calls_to(self, method: str, path: str) -> list[RecordedCall]:
        return [c for c in self.calls if c.method == method.upper() and c.path == path]

    def request(self, method, url, json=None, params=None, headers=None, timeout=None, **kwargs):
        path = url[len(API_URL):] if url.startswith(API_URL) else url
        method = method.upper()
        self.calls.append(
            RecordedCall(
                method=method,
                path=path,
                json=json,
                params=params,
                headers=dict(headers or {}),
                files=kwargs.get("files"),
                data=kwargs.get("data"),
            )
        )

        responses = self.routes.get((method, path))
        if not responses:
            return make_response(404, json_body={"message": f"No route for {method} {path}"})
        outcome = responses.pop(0) if len(responses) > 1 else responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)


@pytest.fixture
def temp_store_path():
    """Path of a temporary SQLite file, removed afterwards."""
    fd, store_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    yield store_path

    if os.path.exists(store_path):
        os.unlink(store_path)


@pytest.fixture
def temp_store(temp_store_path):
    """Create a temporary local storage for testing."""
    storage = create_sqlite_storage(store_path=temp_store_path)
    storage.connect()
    storage.initialize_schema()

    yield storage

    storage.disconnect()


@pytest.fixture
def fake_session():
    """Create a fake HTTP session with no routes."""
    return FakeSession()


@pytest.fixture
def app(temp_store, fake_session):
    """Create a wired app talking to the fake session."""
    return create_app(api_url=API_URL, storage=temp_store, http_session=fake_session)


@pytest.fixture
def profile_payload():
    return {
        "id": 7,
        "fullName": "Jane Doe",
        "email": "jane@example.com",
        "profileImageUrl": "https://img.test/jane.png",
        "createdAt": "2024-01-01T09:00:00",
    }


@pytest.fixture
def logged_in_app(app, fake_session, profile_payload):
    """App with a stored token whose profile fetch succeeds."""
    app.credentials.set_token("secret-token")
    fake_session.add("GET", "/profile", make_response(200, json_body=profile_payload))
    return app


@pytest.fixture
def income_categories():
    return [
        {"id": 1, "name": "Salary", "type": "income", "icon": "💰"},
        {"id": 2, "name": "Freelance", "type": "income", "icon": ""},
    ]


@pytest.fixture
def income_payloads():
    return [
        {
            "id": 11,
            "name": "January salary",
            "amount": 1500,
            "date": "2024-01-05",
            "categoryId": 1,
            "categoryName": "Salary",
            "createdAt": "2024-01-05T08:00:00",
            "updatedAt": "2024-01-05T13:05:09",
        },
        {
            "id": 12,
            "name": "Logo design",
            "amount": 250.5,
            "date": "2024-01-05",
            "categoryId": 2,
            "categoryName": "Freelance",
            "createdAt": "2024-01-05T10:00:00",
            "updatedAt": "2024-01-05T10:00:00",
        },
        {
            "id": 13,
            "name": "February salary",
            "amount": 1500,
            "date": "2024-02-05",
            "categoryId": 1,
            "categoryName": "Salary",
            "createdAt": "2024-02-05T08:00:00",
            "updatedAt": "2024-02-05T08:00:00",
        },
    ]


@pytest.fixture
def expense_payloads():
    return [
        {
            "id": 21,
            "name": "Groceries",
            "amount": 120,
            "date": "2024-01-06",
            "categoryId": 5,
            "categoryName": "Food",
            "createdAt": "2024-01-06T18:00:00",
            "updatedAt": "2024-01-06T18:00:00",
        },
        {
            "id": 22,
            "name": "Rent",
            "amount": 800,
            "date": "2024-02-01",
            "categoryId": 6,
            "categoryName": "Housing",
            "createdAt": "2024-02-01T09:00:00",
            "updatedAt": "2024-02-01T09:00:00",
        },
    ]


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
