"""HTTP client for the remote API."""

import asyncio
import logging
from typing import Any, Callable, Optional

import requests

from mymoney.api.endpoints import requires_auth
from mymoney.domain.errors import (
    AuthError,
    ClientError,
    NetworkError,
    RequestTimeoutError,
    ServerError,
)
from mymoney.storage.credentials import CredentialStore

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

UnauthorizedListener = Callable[[], None]


def error_message(response: requests.Response, default: str) -> str:
    """Return the ``message`` field of an error body, or default."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    if response.text and not response.text.lstrip().startswith(("{", "<")):
        return response.text.strip()
    return default


class HttpClient:
    """Sends requests to the remote API on behalf of the current session.

    Every call is independent: no queuing, batching or deduplication, and no
    automatic retries. The bearer token is attached to every path outside the
    no-auth allow-list. A 401 response clears the credential store and
    notifies the unauthorized listeners before the error is raised.

    The blocking transport runs in a worker thread; header construction and
    response handling, which touch shared state, run on the event loop.
    """

    def __init__(
        self,
        base_url: str,
        credentials: CredentialStore,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize HTTP client.

        Args:
            base_url: API root URL, e.g. 'http://localhost:8080/api/v1.0'
            credentials: Credential store supplying the bearer token
            timeout: Per-request timeout in seconds
            session: requests session to send through (a new one if None)
        """
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {"Content-Type": "application/json", "Accept": "application/json"}
        )
        self._unauthorized_listeners: list[UnauthorizedListener] = []

    def add_unauthorized_listener(self, listener: UnauthorizedListener) -> None:
        """Register a callback run after a 401 has cleared the credentials."""
        self._unauthorized_listeners.append(listener)

    def build_headers(self, path: str) -> dict[str, str]:
        """Return per-request headers, with the credential when allowed."""
        headers: dict[str, str] = {}
        if requires_auth(path):
            token = self.credentials.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> requests.Response:
        """Send one request and return the successful response.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            body: JSON-serialisable request body
            params: Query string parameters

        Returns:
            Response with a status below 400

        Raises:
            AuthError: On 401, after credentials were cleared
            ServerError: On 5xx
            ClientError: On any other 4xx
            RequestTimeoutError: If the transport timed out
            NetworkError: If no response was received
        """
        method = method.upper()
        headers = self.build_headers(path)
        logger.debug(
            "%s %s (credential attached: %s)", method, path, "Authorization" in headers
        )
        response = await asyncio.to_thread(
            self._send, method, path, headers, body, params
        )
        return self._handle_response(method, path, response)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Any = None) -> requests.Response:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> requests.Response:
        return await self.request("PUT", path, body=body)

    async def delete(self, path: str) -> requests.Response:
        return await self.request("DELETE", path)

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """GET path and decode the JSON body (None for an empty body)."""
        response = await self.get(path, params=params)
        return response.json() if response.content else None

    def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str],
        body: Any,
        params: Optional[dict[str, Any]],
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        try:
            return self.session.request(
                method,
                url,
                json=body,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error("Request timed out - please check your connection: %s %s", method, path)
            raise RequestTimeoutError(
                f"Request to {path} timed out after {self.timeout:g}s"
            ) from e
        except requests.RequestException as e:
            logger.error("Network/Unknown error: %s %s: %s", method, path, e)
            raise NetworkError(f"Could not reach the server: {e}") from e

    def _handle_response(
        self, method: str, path: str, response: requests.Response
    ) -> requests.Response:
        status = response.status_code
        if status == 401:
            logger.warning("Unauthorized access - redirecting to login (%s %s)", method, path)
            self.credentials.clear()
            for listener in list(self._unauthorized_listeners):
                listener()
            raise AuthError(
                error_message(response, "Your session has expired. Please log in again"),
                status=status,
            )
        if status >= 500:
            logger.error("Server error %s on %s %s", status, method, path)
            raise ServerError(
                error_message(response, "Server error - please try again later"),
                status=status,
            )
        if status >= 400:
            logger.debug("Request rejected with %s on %s %s", status, method, path)
            raise ClientError(
                error_message(response, f"Request failed with status {status}"),
                status=status,
            )
        return response
