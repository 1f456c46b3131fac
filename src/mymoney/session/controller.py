"""Session controller: establishes and tears down the authenticated session."""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from mymoney.api import endpoints
from mymoney.api.http_client import HttpClient
from mymoney.api.mappers import profile_to_domain
from mymoney.domain.entities import Profile
from mymoney.domain.errors import ApiError, AuthError
from mymoney.session.cancellation import CancellationToken
from mymoney.storage.credentials import CredentialStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Lifecycle of the current session."""

    UNKNOWN = "unknown"
    FETCHING = "fetching"
    AUTHENTICATED = "authenticated"
    LOGGED_OUT = "logged_out"


class SessionController:
    """Fetches the profile when none is cached and reacts to auth failures.

    Concurrent ``ensure_session`` calls share one in-flight profile fetch, and
    its outcome is committed to shared state at most once. Consumers pass a
    CancellationToken; a cancelled consumer's result is discarded.
    """

    def __init__(
        self,
        client: HttpClient,
        credentials: CredentialStore,
        on_login_required: Optional[Callable[[], None]] = None,
    ):
        """Initialize session controller.

        Args:
            client: HTTP client used for the profile fetch
            credentials: Credential store the session lives in
            on_login_required: Called whenever the user must authenticate again
        """
        self.client = client
        self.credentials = credentials
        self.on_login_required = on_login_required
        self._state = (
            SessionState.AUTHENTICATED
            if credentials.get_profile() is not None
            else SessionState.UNKNOWN
        )
        self._pending: Optional[asyncio.Future] = None
        self._settled: Optional[asyncio.Future] = None
        client.add_unauthorized_listener(self.handle_unauthorized)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def profile(self) -> Optional[Profile]:
        return self.credentials.get_profile()

    def _set_state(self, state: SessionState) -> None:
        if state is not self._state:
            logger.debug("Session state %s -> %s", self._state.value, state.value)
        self._state = state

    async def ensure_session(
        self, cancel_token: Optional[CancellationToken] = None
    ) -> Optional[Profile]:
        """Make sure a profile is cached, fetching it if needed.

        Args:
            cancel_token: Token the consumer cancels when it goes away

        Returns:
            Cached profile, or None when the session ended up logged out or the
            consumer cancelled before the fetch settled
        """
        cancel_token = cancel_token or CancellationToken()

        profile = self.credentials.get_profile()
        if profile is not None:
            self._set_state(SessionState.AUTHENTICATED)
            return profile

        if self._pending is None:
            self._set_state(SessionState.UNKNOWN)
            self._pending = asyncio.ensure_future(self._fetch_profile())
            self._set_state(SessionState.FETCHING)

        fetch = self._pending
        error: Optional[Exception] = None
        try:
            profile = await asyncio.shield(fetch)
        except Exception as e:
            # Any failure while fetching the profile means "not logged in"
            logger.info("Profile fetch failed: %s", e)
            profile, error = None, e
        finally:
            if self._pending is fetch:
                self._pending = None

        return self._commit(fetch, profile, error, cancel_token)

    async def _fetch_profile(self) -> Profile:
        payload = await self.client.get_json(endpoints.PROFILE)
        if not payload:
            raise ApiError("Empty profile response")
        return profile_to_domain(payload)

    def _commit(
        self,
        fetch: asyncio.Future,
        profile: Optional[Profile],
        error: Optional[Exception],
        cancel_token: CancellationToken,
    ) -> Optional[Profile]:
        if cancel_token.cancelled:
            logger.info("Discarding profile fetch result for a cancelled consumer")
            if self._state is SessionState.FETCHING and self._settled is not fetch:
                self._set_state(SessionState.UNKNOWN)
            return None

        if self._settled is fetch:
            return self.credentials.get_profile()
        self._settled = fetch

        if error is not None:
            # A 401 has already cleared credentials via handle_unauthorized
            if not isinstance(error, AuthError):
                self.credentials.clear()
                self.handle_unauthorized()
            return None

        self.credentials.set_profile(profile)
        self._set_state(SessionState.AUTHENTICATED)
        return profile

    def start(self, profile: Profile, token: Optional[str] = None) -> None:
        """Begin a session from a successful login."""
        if token:
            self.credentials.set_token(token)
        self.credentials.set_profile(profile)
        self._set_state(SessionState.AUTHENTICATED)

    def handle_unauthorized(self) -> None:
        """Mark the session logged out and ask for a new login."""
        self._set_state(SessionState.LOGGED_OUT)
        if self.on_login_required is not None:
            self.on_login_required()

    def logout(self) -> None:
        """End the session at the user's request."""
        self.credentials.clear()
        self._set_state(SessionState.LOGGED_OUT)
