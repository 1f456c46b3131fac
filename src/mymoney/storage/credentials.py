"""Credential store holding the bearer token and the cached profile."""

import logging
from typing import Optional

from mymoney.domain.entities import Profile
from mymoney.storage.base import LocalStorage

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"


class CredentialStore:
    """Process-wide holder of the current session's credential.

    The token is written through to durable local storage so it survives a
    restart. The profile is kept in memory only; None means it is unknown
    and has to be fetched. This class never performs network I/O.
    """

    def __init__(self, storage: LocalStorage):
        """Initialize credential store and load a persisted token.

        Args:
            storage: Durable local storage
        """
        self.storage = storage
        self._token: Optional[str] = storage.get_item(TOKEN_KEY)
        self._profile: Optional[Profile] = None

    def set_token(self, token: str) -> None:
        self.storage.set_item(TOKEN_KEY, token)
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_profile(self, profile: Profile) -> None:
        self._profile = profile

    def get_profile(self) -> Optional[Profile]:
        return self._profile

    def clear(self) -> None:
        """Forget the token (memory and durable storage) and the profile."""
        self.storage.remove_item(TOKEN_KEY)
        self._token = None
        self._profile = None
        logger.debug("Cleared stored credentials")
